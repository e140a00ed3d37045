"""Unit tests for the Interval and Debouncer timers."""

from __future__ import annotations

import asyncio

import pytest

from kubedeck.tests.tui.fakes import wait_for
from kubedeck.utils.timers import Debouncer, Interval


@pytest.mark.unit
class TestInterval:
    """Tests for Interval."""

    @pytest.mark.asyncio
    async def test_ticks_until_cancelled(self) -> None:
        """The callback repeats, and stops for good after cancel()."""
        ticks: list[int] = []
        interval = Interval(0.005, lambda: ticks.append(1)).start()

        await wait_for(lambda: len(ticks) >= 3)
        interval.cancel()
        count = len(ticks)
        await asyncio.sleep(0.03)

        assert len(ticks) == count
        assert interval.active is False

    @pytest.mark.asyncio
    async def test_failing_callback_keeps_ticking(self) -> None:
        """An exception in one tick does not stop the next ones."""
        calls: list[int] = []

        def tick() -> None:
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("first tick fails")

        interval = Interval(0.005, tick).start()
        await wait_for(lambda: len(calls) >= 2)
        interval.cancel()

    @pytest.mark.asyncio
    async def test_start_is_idempotent(self) -> None:
        """Starting twice schedules a single timer."""
        ticks: list[int] = []
        interval = Interval(0.1, lambda: ticks.append(1))
        interval.start()
        interval.start()

        await asyncio.sleep(0.15)
        interval.cancel()

        assert len(ticks) == 1

    @pytest.mark.asyncio
    async def test_cancel_before_start(self) -> None:
        """A cancelled interval never starts."""
        interval = Interval(0.001, lambda: None)
        interval.cancel()
        interval.start()
        assert interval.active is False


@pytest.mark.unit
class TestDebouncer:
    """Tests for Debouncer."""

    @pytest.mark.asyncio
    async def test_burst_is_coalesced(self) -> None:
        """Rapid calls fire the callback once after the quiet period."""
        fired: list[int] = []
        debounce = Debouncer(lambda: fired.append(1), 0.01)

        for _ in range(5):
            debounce()
        assert debounce.pending is True

        await wait_for(lambda: len(fired) == 1)
        await asyncio.sleep(0.03)

        assert fired == [1]
        assert debounce.pending is False

    @pytest.mark.asyncio
    async def test_max_wait_fires_during_continuous_burst(self) -> None:
        """A burst longer than max_wait still fires periodically."""
        fired: list[int] = []
        debounce = Debouncer(lambda: fired.append(1), 0.05, max_wait=0.1)

        for _ in range(30):
            debounce()
            await asyncio.sleep(0.01)
        debounce.cancel()

        assert len(fired) >= 2

    @pytest.mark.asyncio
    async def test_cancel_drops_pending_call(self) -> None:
        """cancel() discards a scheduled invocation."""
        fired: list[int] = []
        debounce = Debouncer(lambda: fired.append(1), 0.01)

        debounce()
        debounce.cancel()
        await asyncio.sleep(0.03)

        assert fired == []

    @pytest.mark.asyncio
    async def test_flush_runs_pending_call_now(self) -> None:
        """flush() fires immediately and only once."""
        fired: list[int] = []
        debounce = Debouncer(lambda: fired.append(1), 1.0)

        debounce()
        debounce.flush()
        debounce.flush()
        await asyncio.sleep(0)

        assert fired == [1]
