# app/transport/ws_manager.py
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, List

from fastapi import WebSocket

logger = logging.getLogger(__name__)


@dataclass
class Conn:
    pid: str
    ws: WebSocket


class WSManager:
    """
    In-memory connection registry.
    - session_id -> pid -> websocket
    Transport-only: no domain rules.
    """
    def __init__(self) -> None:
        self._groups: Dict[str, Dict[str, Conn]] = {}
        self._lock = asyncio.Lock()

    async def add(self, session_id: str, pid: str, ws: WebSocket) -> None:
        async with self._lock:
            self._groups.setdefault(session_id, {})[pid] = Conn(pid=pid, ws=ws)

    async def remove_everywhere(self, pid: str) -> List[str]:
        """Drop pid from every group; returns the session ids it was in."""
        async with self._lock:
            left = []
            for session_id in list(self._groups):
                group = self._groups[session_id]
                if group.pop(pid, None) is not None:
                    left.append(session_id)
                if not group:
                    self._groups.pop(session_id, None)
            return left

    async def broadcast(self, session_id: str, event: dict) -> None:
        # copy conns under lock, send outside lock
        async with self._lock:
            conns = list(self._groups.get(session_id, {}).values())

        for c in conns:
            try:
                await c.ws.send_json(event)
            except Exception:
                # dead socket; its own disconnect path cleans it up
                logger.debug("send to %s in session %s failed", c.pid, session_id)

    async def close_group(self, session_id: str, code: int = 4000) -> None:
        """
        Close every websocket in a session group and drop the group.
        """
        async with self._lock:
            group = self._groups.pop(session_id, {})
        for c in group.values():
            try:
                await c.ws.close(code=code)
            except Exception:
                logger.debug("close of %s in session %s failed", c.pid, session_id)

    async def group_size(self, session_id: str) -> int:
        async with self._lock:
            return len(self._groups.get(session_id, {}))
