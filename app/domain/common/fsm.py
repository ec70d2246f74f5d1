# app/domain/common/fsm.py
from __future__ import annotations

from app.domain.common.types import Status


def can_transition_to(current: Status, target: Status) -> bool:
    """
    Validate session status transitions.
    ACTIVE is transient: start sets it and round-advance moves on immediately.
    """
    transitions: dict[Status, list[Status]] = {
        "INACTIVE": ["ACTIVE"],
        "ACTIVE": ["PREPARING", "FINISHED"],
        "PREPARING": ["DRAWING", "PREPARING", "FINISHED"],
        "DRAWING": ["PREPARING"],
        "FINISHED": [],
    }
    return target in transitions.get(current, [])
