# app/domain/game/handlers_draw.py
from __future__ import annotations

import logging
from typing import Optional

from app.domain.game.handlers_common import Result, game_update
from app.domain.game.rules import begin_drawing
from app.transport.protocols import (
    InDrawingData,
    InStartDrawing,
    OutDrawingData,
    OutDrawingStarted,
)

logger = logging.getLogger(__name__)


async def handle_start_drawing(*, app, session_id: str, pid: Optional[str], msg: InStartDrawing) -> Result:
    if not pid:
        return [], []

    registry = app.state.registry
    session = registry.find(session_id)
    if session is None:
        return [], []

    if not begin_drawing(session, pid, msg.word):
        logger.debug("startDrawing by %s in session %s (%s) dropped", pid, session_id, session.status)
        return [], []

    app.state.scheduler.start_drawing_timer(session_id)

    return [], [
        game_update(app, session),
        OutDrawingStarted(word=session.word),
    ]


async def handle_drawing_data(*, app, session_id: str, pid: Optional[str], msg: InDrawingData) -> Result:
    """
    Relay stroke data to the session as-is. Only the session's existence is checked.
    """
    registry = app.state.registry
    if registry.find(session_id) is None:
        return [], []

    return [], [OutDrawingData(sessionId=session_id, data=msg.data)]
