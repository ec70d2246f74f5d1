# app/domain/common/types.py
from __future__ import annotations

from typing import Literal

Status = Literal["INACTIVE", "ACTIVE", "PREPARING", "DRAWING", "FINISHED"]

# Timer kinds armed by the turn scheduler; at most one is pending per session.
TimerKind = Literal["DRAWING", "PREPARATION"]

MAX_ROUNDS = 3
