import asyncio

import pytest

from app.domain.common.scheduler import TurnScheduler


class Recorder:
    def __init__(self):
        self.fired = []
        self.event = asyncio.Event()

    async def __call__(self, session_id, kind):
        self.fired.append((session_id, kind))
        self.event.set()


def _scheduler(on_timeout, drawing=0.01, preparation=0.01):
    return TurnScheduler(on_timeout, drawing_duration_sec=drawing, preparation_delay_sec=preparation)


@pytest.mark.asyncio
async def test_drawing_timer_fires_with_session_id_only():
    rec = Recorder()
    scheduler = _scheduler(rec)
    scheduler.start_drawing_timer("S1")
    assert scheduler.pending("S1") == "DRAWING"

    await asyncio.wait_for(rec.event.wait(), timeout=1.0)
    assert rec.fired == [("S1", "DRAWING")]
    assert scheduler.pending("S1") is None
    assert len(scheduler) == 0


@pytest.mark.asyncio
async def test_preparation_timer_fires():
    rec = Recorder()
    scheduler = _scheduler(rec)
    scheduler.start_preparation_timer("S1")
    assert scheduler.pending("S1") == "PREPARATION"

    await asyncio.wait_for(rec.event.wait(), timeout=1.0)
    assert rec.fired == [("S1", "PREPARATION")]


@pytest.mark.asyncio
async def test_cancel_prevents_firing():
    rec = Recorder()
    scheduler = _scheduler(rec, drawing=0.05)
    scheduler.start_drawing_timer("S1")
    scheduler.cancel("S1")
    assert scheduler.pending("S1") is None

    await asyncio.sleep(0.1)
    assert rec.fired == []


@pytest.mark.asyncio
async def test_cancel_without_timer_is_noop():
    scheduler = _scheduler(Recorder())
    scheduler.cancel("nope")
    scheduler.cancel("nope")
    assert scheduler.pending("nope") is None


@pytest.mark.asyncio
async def test_arming_replaces_pending_timer():
    rec = Recorder()
    scheduler = _scheduler(rec, drawing=0.05, preparation=0.01)
    scheduler.start_drawing_timer("S1")
    scheduler.start_preparation_timer("S1")
    assert scheduler.pending("S1") == "PREPARATION"

    await asyncio.sleep(0.1)
    assert rec.fired == [("S1", "PREPARATION")]


@pytest.mark.asyncio
async def test_sessions_are_independent():
    rec = Recorder()
    scheduler = _scheduler(rec, drawing=0.02)
    scheduler.start_drawing_timer("S1")
    scheduler.start_drawing_timer("S2")
    scheduler.cancel("S1")

    await asyncio.sleep(0.08)
    assert rec.fired == [("S2", "DRAWING")]


@pytest.mark.asyncio
async def test_callback_can_arm_next_timer():
    fired = []
    done = asyncio.Event()
    scheduler = None

    async def on_timeout(session_id, kind):
        fired.append(kind)
        if kind == "DRAWING":
            scheduler.start_preparation_timer(session_id)
        else:
            done.set()

    scheduler = _scheduler(on_timeout)
    scheduler.start_drawing_timer("S1")

    await asyncio.wait_for(done.wait(), timeout=1.0)
    assert fired == ["DRAWING", "PREPARATION"]


@pytest.mark.asyncio
async def test_failing_callback_is_logged_not_raised(caplog):
    async def on_timeout(session_id, kind):
        raise RuntimeError("boom")

    scheduler = _scheduler(on_timeout)
    scheduler.start_drawing_timer("S1")
    await asyncio.sleep(0.05)

    assert "timer callback failed for session S1" in caplog.text
    assert scheduler.pending("S1") is None


@pytest.mark.asyncio
async def test_cancel_all():
    rec = Recorder()
    scheduler = _scheduler(rec, drawing=0.05)
    scheduler.start_drawing_timer("S1")
    scheduler.start_drawing_timer("S2")
    assert len(scheduler) == 2

    tasks = [task for _, task in scheduler._tasks.values()]
    await scheduler.cancel_all()
    # awaited, not just cancelled: nothing is left pending at shutdown
    assert all(task.done() for task in tasks)
    assert len(scheduler) == 0

    await asyncio.sleep(0.1)
    assert rec.fired == []
