# app/domain/game/handlers_common.py
from __future__ import annotations

from typing import List, Tuple

from app.domain.common.snapshot import build_game_update
from app.domain.common.types import MAX_ROUNDS
from app.store.models import GameSession
from app.transport.protocols import OutGameUpdate, OutgoingEvent

# Returns: (to_sender, to_room)
Result = Tuple[List[OutgoingEvent], List[OutgoingEvent]]


def max_rounds_of(app) -> int:
    settings = getattr(app.state, "settings", None)
    return int(getattr(settings, "MAX_ROUNDS", MAX_ROUNDS))


def game_update(app, session: GameSession) -> OutGameUpdate:
    return build_game_update(session, max_rounds=max_rounds_of(app))
