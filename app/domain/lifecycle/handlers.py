# app/domain/lifecycle/handlers.py
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from app.domain.game.handlers_common import Result, game_update
from app.domain.game.handlers_phase import close_turn
from app.domain.game.rules import add_player, remove_player
from app.store.models import Player
from app.transport.protocols import InJoinGame, InSnapshot, OutgoingEvent

logger = logging.getLogger(__name__)


async def handle_join_game(*, app, session_id: str, pid: Optional[str], msg: InJoinGame) -> Result:
    """
    Join:
    - create the session on first join (joiner becomes host)
    - append the player in join order; mid-round joiners wait for the next round
    - broadcast the new snapshot to the session
    """
    if not pid:
        return [], []

    registry = app.state.registry
    session = registry.get_or_create(session_id)

    if add_player(session, Player(id=pid, name=msg.playerName)):
        logger.info("player %s (%s) joined session %s", pid, msg.playerName, session_id)

    return [], [game_update(app, session)]


async def handle_snapshot(*, app, session_id: str, pid: Optional[str], msg: InSnapshot) -> Result:
    registry = app.state.registry
    session = registry.find(session_id)
    if session is None:
        return [], []
    return [game_update(app, session)], []


async def handle_leave_session(*, app, session_id: str, pid: str) -> Result:
    """
    Remove one player from one session. Caller holds the session lock.
    - last player out: session destroyed (timers cancelled), nothing broadcast
    - drawer out: turn closed early through the preparation delay
    """
    registry = app.state.registry
    session = registry.find(session_id)
    if session is None:
        return [], []

    removed, was_drawer = remove_player(session, pid)
    if not removed:
        return [], []

    if not session.players:
        registry.remove(session_id)
        return [], []

    if was_drawer:
        logger.info("drawer %s left session %s, closing turn early", pid, session_id)
        close_turn(app, session)

    return [], [game_update(app, session)]


async def handle_disconnect(*, app, pid: Optional[str]) -> List[Tuple[str, List[OutgoingEvent]]]:
    """
    Called by transport when a connection closes.
    Returns [(session_id, to_room_events), ...] for every session the pid was in.
    """
    if not pid:
        return []

    registry = app.state.registry
    out: List[Tuple[str, List[OutgoingEvent]]] = []
    for session_id in registry.sessions_for_player(pid):
        async with registry.locked(session_id):
            _, to_room = await handle_leave_session(app=app, session_id=session_id, pid=pid)
        out.append((session_id, to_room))
    return out
