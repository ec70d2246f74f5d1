# app/domain/game/rules.py
"""
Pure session transitions. No timers, no I/O: handlers decide what to arm and
what to broadcast from the return values.
"""
from __future__ import annotations

import logging
from typing import Tuple

from app.domain.common.fsm import can_transition_to
from app.domain.common.types import MAX_ROUNDS
from app.domain.common.validation import guess_matches, is_drawer, is_host
from app.store.models import GameSession, Player

logger = logging.getLogger(__name__)


def add_player(session: GameSession, player: Player) -> bool:
    """
    Append a player in join order. The first joiner becomes host.
    Mid-round joiners only land in `players`, so they draw from the next round on.
    Returns False if the pid is already a member (name is refreshed instead).
    """
    existing = session.player(player.id)
    if existing is not None:
        existing.name = player.name
        return False

    session.players.append(player)
    if session.host_id is None:
        session.host_id = player.id
    return True


def begin_game(session: GameSession, pid: str, *, max_rounds: int = MAX_ROUNDS) -> bool:
    if not is_host(session, pid):
        return False
    if not can_transition_to(session.status, "ACTIVE"):
        return False

    session.status = "ACTIVE"
    session.round = 1
    session.word = ""
    session.drawer = None
    session.drawing_queue = list(session.players)
    advance_round(session, max_rounds=max_rounds)
    return True


def advance_round(session: GameSession, *, max_rounds: int = MAX_ROUNDS) -> None:
    """
    Pick the next drawer, FIFO within the round.
    Refills the queue from the live player list when a round is exhausted.
    """
    if session.round > max_rounds:
        _finish(session)
        return

    if not session.drawing_queue:
        session.round += 1
        if session.round > max_rounds:
            _finish(session)
            return
        session.drawing_queue = list(session.players)

    session.drawer = session.drawing_queue.pop(0)
    session.status = "PREPARING"


def _finish(session: GameSession) -> None:
    session.status = "FINISHED"
    session.drawer = None
    session.word = ""
    session.drawing_queue = []
    logger.info("session %s finished after round %d", session.id, session.round - 1)


def begin_drawing(session: GameSession, pid: str, word: str) -> bool:
    if not is_drawer(session, pid):
        return False
    if not can_transition_to(session.status, "DRAWING"):
        return False
    # DRAWING requires a non-empty word
    if not word:
        return False

    session.word = word
    session.status = "DRAWING"
    return True


def end_drawing(session: GameSession) -> None:
    """Clear the turn and wait in PREPARING for the next round-advance."""
    session.word = ""
    session.drawer = None
    session.status = "PREPARING"


def remove_player(session: GameSession, pid: str) -> Tuple[bool, bool]:
    """
    Drop pid from players and the drawing queue.
    Returns (removed, was_drawer). Host authority passes to the earliest
    remaining player.
    """
    player = session.player(pid)
    if player is None:
        return False, False

    was_drawer = is_drawer(session, pid)
    session.players = [p for p in session.players if p.id != pid]
    session.drawing_queue = [p for p in session.drawing_queue if p.id != pid]

    if session.host_id == pid:
        session.host_id = session.players[0].id if session.players else None

    return True, was_drawer


def evaluate_guess(session: GameSession, guess: str) -> bool:
    return guess_matches(guess, session.word)
