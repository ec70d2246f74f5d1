# app/store/models.py
from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field

from app.domain.common.types import Status


class Player(BaseModel):
    id: str        # connection-scoped pid
    name: str


class GameSession(BaseModel):
    """
    Full state of one game. Mutated in place by app.domain.game.rules only.
    """
    id: str
    players: List[Player] = Field(default_factory=list)   # join order
    host_id: Optional[str] = None
    drawer: Optional[Player] = None
    word: str = ""
    status: Status = "INACTIVE"
    round: int = 0
    drawing_queue: List[Player] = Field(default_factory=list)

    def player(self, pid: str) -> Optional[Player]:
        for p in self.players:
            if p.id == pid:
                return p
        return None

    def has_player(self, pid: str) -> bool:
        return self.player(pid) is not None
