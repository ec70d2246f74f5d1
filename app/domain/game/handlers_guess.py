# app/domain/game/handlers_guess.py
from __future__ import annotations

from typing import List, Optional

from app.domain.game.handlers_common import Result
from app.domain.game.rules import evaluate_guess
from app.transport.protocols import (
    InGuessWord,
    OutCorrectGuess,
    OutGuess,
    OutIncorrectGuess,
    OutgoingEvent,
)


async def handle_guess_word(*, app, session_id: str, pid: Optional[str], msg: InGuessWord) -> Result:
    """
    Echo the guess to everyone, then the verdict. Valid in any status and never
    changes state.
    """
    if not pid:
        return [], []

    registry = app.state.registry
    session = registry.find(session_id)
    if session is None:
        return [], []

    to_room: List[OutgoingEvent] = [OutGuess(playerId=pid, guess=msg.guess)]
    if evaluate_guess(session, msg.guess):
        to_room.append(OutCorrectGuess(playerId=pid, guess=msg.guess))
    else:
        to_room.append(OutIncorrectGuess(playerId=pid, guess=msg.guess))
    return [], to_room
