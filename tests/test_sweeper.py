from __future__ import annotations

import asyncio
import logging
from datetime import timedelta

import pytest

from domainstatus.store import StatusStore
from domainstatus.sweeper import RetentionSweeper

from conftest import FakeClock


def test_sweep_once_evicts_and_logs(clock: FakeClock, caplog: pytest.LogCaptureFixture) -> None:
    store = StatusStore(clock=clock)
    store.append("old.example", "up")
    clock.advance(hours=49)
    store.append("new.example", "up")
    sweeper = RetentionSweeper(store, interval=timedelta(hours=1), max_age=timedelta(hours=48), clock=clock)

    with caplog.at_level(logging.INFO, logger="domainstatus.sweeper"):
        removed = sweeper.sweep_once()

    assert removed == 1
    assert list(store.snapshot()) == ["new.example"]
    assert "Retention sweep complete" in caplog.text


@pytest.mark.asyncio
async def test_sweeper_runs_periodically_until_stopped(clock: FakeClock) -> None:
    store = StatusStore(clock=clock)
    store.append("old.example", "up")
    clock.advance(hours=100)
    sweeper = RetentionSweeper(store, interval=timedelta(milliseconds=10), max_age=timedelta(hours=48), clock=clock)

    sweeper.start()
    assert sweeper.is_running
    for _ in range(100):
        if "old.example" not in store:
            break
        await asyncio.sleep(0.01)
    await sweeper.stop()

    assert "old.example" not in store
    assert not sweeper.is_running


@pytest.mark.asyncio
async def test_failed_pass_does_not_stop_the_loop(clock: FakeClock) -> None:
    store = StatusStore(clock=clock)
    calls = 0

    def flaky_clock():
        nonlocal calls
        calls += 1
        if calls == 1:
            raise RuntimeError("clock unavailable")
        return clock()

    sweeper = RetentionSweeper(store, interval=timedelta(milliseconds=5), max_age=timedelta(hours=48), clock=flaky_clock)
    sweeper.start()
    for _ in range(100):
        if calls >= 2:
            break
        await asyncio.sleep(0.01)
    await sweeper.stop()

    assert calls >= 2


@pytest.mark.asyncio
async def test_stop_without_start_is_noop() -> None:
    sweeper = RetentionSweeper(StatusStore(), interval=timedelta(hours=1), max_age=timedelta(hours=48))
    await sweeper.stop()
    assert not sweeper.is_running
