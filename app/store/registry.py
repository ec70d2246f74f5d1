from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List, Optional

from app.store.models import GameSession
from app.domain.common.scheduler import TurnScheduler

logger = logging.getLogger(__name__)


class SessionRegistry:
    """
    In-memory session store, one per process.
    - session_id -> GameSession
    - session_id -> asyncio.Lock (serializes every operation on one session)
    Sessions never outlive their last player: callers invoke remove() as soon
    as the player list becomes empty.
    """

    def __init__(self, scheduler: Optional[TurnScheduler] = None) -> None:
        self._sessions: Dict[str, GameSession] = {}
        self._locks: Dict[str, asyncio.Lock] = {}
        # holders + waiters per lock; a lock is only dropped once this hits 0
        self._lock_users: Dict[str, int] = {}
        self.scheduler = scheduler

    def get_or_create(self, session_id: str) -> GameSession:
        session = self._sessions.get(session_id)
        if session is None:
            session = GameSession(id=session_id)
            self._sessions[session_id] = session
            logger.info("session %s created", session_id)
        return session

    def find(self, session_id: str) -> Optional[GameSession]:
        return self._sessions.get(session_id)

    def remove(self, session_id: str) -> None:
        """
        Delete the session and cancel any timer still armed for it.
        The lock stays while someone holds or waits on it; the last user drops it.
        """
        if self.scheduler is not None:
            self.scheduler.cancel(session_id)
        if self._sessions.pop(session_id, None) is not None:
            logger.info("session %s removed", session_id)
        self._drop_lock_if_unused(session_id)

    def lock(self, session_id: str) -> asyncio.Lock:
        lock = self._locks.get(session_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[session_id] = lock
        return lock

    @asynccontextmanager
    async def locked(self, session_id: str) -> AsyncIterator[None]:
        """Hold the session's lock for the duration of the block."""
        lock = self.lock(session_id)
        self._lock_users[session_id] = self._lock_users.get(session_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[session_id] -= 1
            self._drop_lock_if_unused(session_id)

    def _drop_lock_if_unused(self, session_id: str) -> None:
        if session_id in self._sessions or self._lock_users.get(session_id, 0) > 0:
            return
        self._lock_users.pop(session_id, None)
        self._locks.pop(session_id, None)

    def sessions_for_player(self, pid: str) -> List[str]:
        # linear scan; sessions are few relative to messages
        return [sid for sid, s in self._sessions.items() if s.has_player(pid)]

    def list_sessions(self) -> List[GameSession]:
        return [self._sessions[sid] for sid in sorted(self._sessions)]

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
