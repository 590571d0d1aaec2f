from __future__ import annotations

import asyncio
import time

import pytest

from pydelivery.scheduler import SummaryScheduler


@pytest.mark.asyncio
async def test_first_tick_waits_one_interval() -> None:
    calls: list[float] = []
    scheduler = SummaryScheduler(interval=0.2, tick=lambda: calls.append(time.monotonic()))
    scheduler.start()
    await asyncio.sleep(0.05)

    assert calls == []
    assert scheduler.is_running
    await scheduler.stop()


@pytest.mark.asyncio
async def test_ticks_repeat_at_interval() -> None:
    calls: list[float] = []
    scheduler = SummaryScheduler(interval=0.02, tick=lambda: calls.append(time.monotonic()))
    scheduler.start()
    await asyncio.sleep(0.15)
    await scheduler.stop()

    assert len(calls) >= 2
    assert scheduler.ticks == len(calls)


@pytest.mark.asyncio
async def test_no_ticks_after_stop() -> None:
    calls: list[int] = []
    scheduler = SummaryScheduler(interval=0.01, tick=lambda: calls.append(1))
    scheduler.start()
    await asyncio.sleep(0.05)
    await scheduler.stop()
    count = len(calls)
    await asyncio.sleep(0.05)

    assert len(calls) == count
    assert not scheduler.is_running


@pytest.mark.asyncio
async def test_slow_ticks_never_overlap_and_late_ticks_are_skipped() -> None:
    active = 0
    max_active = 0

    async def slow_tick() -> None:
        nonlocal active, max_active
        active += 1
        max_active = max(max_active, active)
        await asyncio.sleep(0.05)
        active -= 1

    scheduler = SummaryScheduler(interval=0.01, tick=slow_tick)
    scheduler.start()
    await asyncio.sleep(0.2)
    await scheduler.stop(grace=1.0)

    assert max_active == 1
    assert scheduler.ticks >= 2
    assert scheduler.skipped > 0


@pytest.mark.asyncio
async def test_stop_lets_in_flight_tick_finish() -> None:
    started = asyncio.Event()
    finished: list[bool] = []

    async def tick() -> None:
        started.set()
        await asyncio.sleep(0.05)
        finished.append(True)

    scheduler = SummaryScheduler(interval=0.01, tick=tick)
    scheduler.start()
    await asyncio.wait_for(started.wait(), timeout=1.0)
    await scheduler.stop(grace=1.0)

    assert finished == [True]


@pytest.mark.asyncio
async def test_stop_cancels_hung_tick_after_grace() -> None:
    started = asyncio.Event()

    async def hung_tick() -> None:
        started.set()
        await asyncio.Event().wait()

    scheduler = SummaryScheduler(interval=0.01, tick=hung_tick)
    scheduler.start()
    await asyncio.wait_for(started.wait(), timeout=1.0)

    begin = time.monotonic()
    await scheduler.stop(grace=0.05)

    assert time.monotonic() - begin < 1.0
    assert not scheduler.is_running


@pytest.mark.asyncio
async def test_failing_tick_is_logged_and_schedule_continues(caplog: pytest.LogCaptureFixture) -> None:
    calls: list[int] = []

    def tick() -> None:
        calls.append(1)
        raise RuntimeError("boom")

    scheduler = SummaryScheduler(interval=0.01, tick=tick)
    scheduler.start()
    await asyncio.sleep(0.08)
    await scheduler.stop()

    assert len(calls) >= 2
    assert "Summary tick failed" in caplog.text


@pytest.mark.asyncio
async def test_stop_before_start_is_noop() -> None:
    scheduler = SummaryScheduler(interval=1.0, tick=lambda: None)
    await scheduler.stop()
    assert scheduler.ticks == 0


def test_interval_must_be_positive() -> None:
    with pytest.raises(ValueError):
        SummaryScheduler(interval=0, tick=lambda: None)
