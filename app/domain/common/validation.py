# app/domain/common/validation.py
from __future__ import annotations

from typing import Optional
from app.store.models import GameSession


def is_host(session: Optional[GameSession], pid: Optional[str]) -> bool:
    """Check if pid holds turn-order authority in the session."""
    return session is not None and pid is not None and session.host_id == pid


def is_drawer(session: Optional[GameSession], pid: Optional[str]) -> bool:
    """Check if pid is the session's current drawer."""
    return session is not None and session.drawer is not None and session.drawer.id == pid


def guess_matches(guess: str, word: str) -> bool:
    """
    Exact, case-sensitive comparison. No trimming or case-folding, and an
    empty guess equals an empty word.
    """
    return guess == word
