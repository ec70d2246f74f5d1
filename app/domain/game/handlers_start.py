# app/domain/game/handlers_start.py
from __future__ import annotations

import logging
from typing import Optional

from app.domain.game.handlers_common import Result, game_update, max_rounds_of
from app.domain.game.rules import begin_game
from app.transport.protocols import InStartGame

logger = logging.getLogger(__name__)


async def handle_start_game(*, app, session_id: str, pid: Optional[str], msg: InStartGame) -> Result:
    """
    Host-only. INACTIVE -> ACTIVE -> PREPARING with the first drawer picked.
    Anything else, a FINISHED session included, is dropped silently.
    """
    if not pid:
        return [], []

    registry = app.state.registry
    session = registry.find(session_id)
    if session is None:
        logger.debug("startGame for unknown session %s dropped", session_id)
        return [], []

    if not begin_game(session, pid, max_rounds=max_rounds_of(app)):
        logger.debug("startGame by %s in session %s (%s) dropped", pid, session_id, session.status)
        return [], []

    logger.info("session %s started with %d players", session_id, len(session.players))
    return [], [game_update(app, session)]
