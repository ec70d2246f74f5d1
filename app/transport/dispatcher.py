# app/transport/dispatcher.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from app.transport.protocols import (
    parse_incoming,
    OutError,
    OutgoingEvent,
    InJoinGame,
    InStartGame,
    InStartDrawing,
    InGuessWord,
    InDrawingData,
    InSnapshot,
)
from app.domain.common.types import TimerKind
from app.domain.lifecycle.handlers import handle_join_game, handle_snapshot, handle_disconnect
from app.domain.game.handlers import (
    handle_start_game,
    handle_start_drawing,
    handle_drawing_data,
    handle_guess_word,
    handle_timer,
)

logger = logging.getLogger(__name__)

DispatchResult = Tuple[Optional[str], List[Dict[str, Any]], List[Dict[str, Any]]]
# (session_id, to_sender_events, to_room_events), each event is a JSON dict

_HANDLERS = {
    InJoinGame: handle_join_game,
    InStartGame: handle_start_game,
    InStartDrawing: handle_start_drawing,
    InGuessWord: handle_guess_word,
    InDrawingData: handle_drawing_data,
    InSnapshot: handle_snapshot,
}


async def dispatch_message(
    *,
    app,
    pid: Optional[str],
    raw: Dict[str, Any],
) -> DispatchResult:
    """
    Transport layer calls this.
    - Parses + validates raw JSON
    - Routes to the matching domain handler under the session lock
    - Returns (session_id, to_sender, to_room) events as JSON dicts

    NOTE: This file contains NO game rules.
    """
    try:
        msg = parse_incoming(raw)
    except (ValidationError, ValueError) as e:
        err = OutError(code="BAD_MESSAGE", message=str(e)).model_dump()
        return None, [err], []

    session_id = msg.sessionId
    registry = app.state.registry

    # Only a join may bring a session into existence
    if not isinstance(msg, InJoinGame) and session_id not in registry:
        logger.debug("%s for unknown session %s dropped", msg.type, session_id)
        return session_id, [], []

    handler = _HANDLERS[type(msg)]
    async with registry.locked(session_id):
        to_sender, to_room = await handler(app=app, session_id=session_id, pid=pid, msg=msg)
    return session_id, _dump(to_sender), _dump(to_room)


async def dispatch_timer(*, app, session_id: str, kind: TimerKind) -> List[Dict[str, Any]]:
    """
    Re-entry point for scheduler firings. Only the id travels with the timer;
    the session is looked up again here.
    """
    registry = app.state.registry
    if session_id not in registry:
        logger.debug("%s timer for removed session %s ignored", kind, session_id)
        return []

    async with registry.locked(session_id):
        _, to_room = await handle_timer(app=app, session_id=session_id, kind=kind)
    return _dump(to_room)


async def dispatch_disconnect(*, app, pid: Optional[str]) -> List[Tuple[str, List[Dict[str, Any]]]]:
    results = await handle_disconnect(app=app, pid=pid)
    return [(session_id, _dump(events)) for session_id, events in results]


def _dump(events: List[OutgoingEvent]) -> List[Dict[str, Any]]:
    """
    Convert pydantic events -> JSON dicts.
    """
    return [e.model_dump(mode="json") for e in events]
