# app/domain/game/handlers_phase.py
from __future__ import annotations

import logging

from app.domain.common.types import TimerKind
from app.domain.game.handlers_common import Result, game_update, max_rounds_of
from app.domain.game.rules import advance_round, end_drawing
from app.store.models import GameSession

logger = logging.getLogger(__name__)


def close_turn(app, session: GameSession) -> None:
    """
    Shared by drawing-timer expiry and drawer departure: clear the turn, then
    wait the preparation delay before round-advance.
    """
    scheduler = app.state.scheduler
    scheduler.cancel(session.id)
    end_drawing(session)
    scheduler.start_preparation_timer(session.id)


async def handle_drawing_timeout(*, app, session_id: str) -> Result:
    registry = app.state.registry
    session = registry.find(session_id)
    if session is None:
        logger.debug("drawing timer for removed session %s ignored", session_id)
        return [], []
    if session.status != "DRAWING":
        logger.debug("drawing timer for session %s in %s ignored", session_id, session.status)
        return [], []

    close_turn(app, session)
    return [], [game_update(app, session)]


async def handle_preparation_timeout(*, app, session_id: str) -> Result:
    registry = app.state.registry
    session = registry.find(session_id)
    if session is None:
        logger.debug("preparation timer for removed session %s ignored", session_id)
        return [], []
    # expected: a turn was just closed and nobody has been picked yet
    if session.status != "PREPARING" or session.drawer is not None:
        logger.debug("preparation timer for session %s in %s ignored", session_id, session.status)
        return [], []

    advance_round(session, max_rounds=max_rounds_of(app))
    return [], [game_update(app, session)]


async def handle_timer(*, app, session_id: str, kind: TimerKind) -> Result:
    if kind == "DRAWING":
        return await handle_drawing_timeout(app=app, session_id=session_id)
    return await handle_preparation_timeout(app=app, session_id=session_id)
