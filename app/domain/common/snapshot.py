# app/domain/common/snapshot.py
from __future__ import annotations

from typing import Optional

from app.domain.common.types import MAX_ROUNDS
from app.store.models import GameSession, Player
from app.transport.protocols import GameView, OutGameUpdate, PlayerView


def _view(p: Optional[Player]) -> Optional[PlayerView]:
    return PlayerView(id=p.id, name=p.name) if p is not None else None


def build_game_update(session: GameSession, *, max_rounds: int = MAX_ROUNDS) -> OutGameUpdate:
    """
    Full session snapshot, broadcast after every state change.
    Store-driven, not rule-driven.
    """
    return OutGameUpdate(
        game=GameView(
            id=session.id,
            hostId=session.host_id,
            players=[_view(p) for p in session.players],
            drawer=_view(session.drawer),
            word=session.word,
            status=session.status,
            round=session.round,
            maxRounds=max_rounds,
            drawingQueue=[_view(p) for p in session.drawing_queue],
        )
    )
