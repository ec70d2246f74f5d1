"""Per-session phase timers: drawing duration and preparation delay."""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Dict, Optional, Tuple

from app.domain.common.types import TimerKind

logger = logging.getLogger(__name__)

# Callback type: (session_id, kind) -> Awaitable[None]
TimerCallback = Callable[[str, TimerKind], Awaitable[None]]


class TurnScheduler:
    """
    Arm, cancel and fire the two timed transitions of every session.

    At most one timer is pending per session; arming a new one cancels the
    previous one. Firings carry only the session id, the callback is expected
    to re-resolve the session and check its state before acting.
    """

    def __init__(
        self,
        on_timeout: TimerCallback,
        *,
        drawing_duration_sec: float = 10.0,
        preparation_delay_sec: float = 5.0,
    ) -> None:
        self._on_timeout = on_timeout
        self.drawing_duration_sec = drawing_duration_sec
        self.preparation_delay_sec = preparation_delay_sec
        self._tasks: Dict[str, Tuple[TimerKind, asyncio.Task[None]]] = {}

    def start_drawing_timer(self, session_id: str) -> None:
        self._arm(session_id, "DRAWING", self.drawing_duration_sec)

    def start_preparation_timer(self, session_id: str) -> None:
        self._arm(session_id, "PREPARATION", self.preparation_delay_sec)

    def pending(self, session_id: str) -> Optional[TimerKind]:
        """Return the kind of the timer currently armed for a session, if any."""
        entry = self._tasks.get(session_id)
        if entry is None or entry[1].done():
            return None
        return entry[0]

    def cancel(self, session_id: str) -> None:
        """Cancel whatever is armed for the session. No-op if nothing is."""
        entry = self._tasks.pop(session_id, None)
        if entry is None:
            return
        kind, task = entry
        if not task.done():
            task.cancel()
            logger.debug("cancelled %s timer for session %s", kind, session_id)

    async def cancel_all(self) -> None:
        """Cancel every pending timer and wait for the tasks to unwind."""
        tasks = [task for _, task in self._tasks.values()]
        for session_id in list(self._tasks):
            self.cancel(session_id)
        await asyncio.gather(*tasks, return_exceptions=True)

    def __len__(self) -> int:
        return sum(1 for _, task in self._tasks.values() if not task.done())

    def _arm(self, session_id: str, kind: TimerKind, seconds: float) -> None:
        self.cancel(session_id)
        task = asyncio.create_task(self._run_timer(session_id, kind, seconds))
        self._tasks[session_id] = (kind, task)
        logger.debug("armed %s timer for session %s (%.3fs)", kind, session_id, seconds)

    async def _run_timer(self, session_id: str, kind: TimerKind, seconds: float) -> None:
        try:
            await asyncio.sleep(seconds)
        except asyncio.CancelledError:
            return

        # Detach before firing so the callback can arm the next timer
        # without cancelling the task it runs in.
        entry = self._tasks.get(session_id)
        if entry is not None and entry[1] is asyncio.current_task():
            self._tasks.pop(session_id, None)

        logger.debug("%s timer fired for session %s", kind, session_id)
        try:
            await self._on_timeout(session_id, kind)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("timer callback failed for session %s", session_id)
