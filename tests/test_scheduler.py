"""
Scheduler Tests - Thread, asyncio and virtual-time timers.
"""

import asyncio
import threading

from chart_sonify.navigation.scheduler import (
    AsyncioScheduler,
    Scheduler,
    ThreadingScheduler,
    TimerHandle,
)
from chart_sonify.testing import ManualScheduler


class TestThreadingScheduler:
    """Tests for ThreadingScheduler."""

    def test_protocol(self):
        assert isinstance(ThreadingScheduler(), Scheduler)

    def test_call_later_fires_once(self):
        fired = threading.Event()
        calls = []

        def callback():
            calls.append(1)
            fired.set()

        handle = ThreadingScheduler().call_later(0.01, callback)
        assert isinstance(handle, TimerHandle)
        assert fired.wait(2.0)
        assert calls == [1]

    def test_cancel_before_firing(self):
        calls = []
        handle = ThreadingScheduler().call_later(0.2, lambda: calls.append(1))
        handle.cancel()
        assert not handle.active
        threading.Event().wait(0.3)
        assert calls == []

    def test_call_every_repeats_until_cancelled(self):
        done = threading.Event()
        calls = []
        holder = {}

        def tick():
            calls.append(1)
            if len(calls) == 3:
                holder["handle"].cancel()
                done.set()

        holder["handle"] = ThreadingScheduler().call_every(0.01, tick)
        assert done.wait(2.0)
        threading.Event().wait(0.05)
        assert len(calls) == 3

    def test_failing_callback_stops_timer(self):
        calls = []

        def boom():
            calls.append(1)
            raise RuntimeError("boom")

        handle = ThreadingScheduler().call_every(0.01, boom)
        threading.Event().wait(0.2)
        assert calls == [1]
        assert not handle.active


class TestAsyncioScheduler:
    """Tests for AsyncioScheduler."""

    def test_call_later(self):
        async def scenario():
            calls = []
            scheduler = AsyncioScheduler()
            scheduler.call_later(0.01, lambda: calls.append("fired"))
            await asyncio.sleep(0.05)
            return calls

        assert asyncio.run(scenario()) == ["fired"]

    def test_call_every_and_cancel(self):
        async def scenario():
            calls = []
            scheduler = AsyncioScheduler()
            handle = scheduler.call_every(0.01, lambda: calls.append(1))
            while len(calls) < 3:
                await asyncio.sleep(0.005)
            handle.cancel()
            count = len(calls)
            await asyncio.sleep(0.05)
            return count, len(calls), handle.active

        count, final, active = asyncio.run(scenario())
        assert count == final
        assert not active


class TestManualScheduler:
    """Tests for the virtual-time scheduler used in tests."""

    def test_fires_in_time_order(self):
        scheduler = ManualScheduler()
        calls = []
        scheduler.call_later(0.5, lambda: calls.append("b"))
        scheduler.call_later(0.25, lambda: calls.append("a"))
        scheduler.advance(1)
        assert calls == ["a", "b"]
        assert scheduler.now == 1

    def test_clock_during_callback(self):
        scheduler = ManualScheduler()
        seen = []
        scheduler.call_later(0.25, lambda: seen.append(scheduler.now))
        scheduler.advance(1)
        assert seen == [0.25]

    def test_repeating(self):
        scheduler = ManualScheduler()
        calls = []
        handle = scheduler.call_every(0.1, lambda: calls.append(scheduler.now))
        scheduler.advance(0.35)
        assert len(calls) == 3
        handle.cancel()
        scheduler.advance(1)
        assert len(calls) == 3

    def test_one_shot_inactive_after_firing(self):
        scheduler = ManualScheduler()
        handle = scheduler.call_later(0.1, lambda: None)
        assert handle.active
        scheduler.advance(0.1)
        assert not handle.active
        assert scheduler.pending == []

    def test_spent_timers_forgotten(self):
        scheduler = ManualScheduler()
        for _ in range(50):
            scheduler.call_later(0.1, lambda: None)
            scheduler.advance(0.1)
        cancelled = scheduler.call_later(1, lambda: None)
        cancelled.cancel()
        kept = scheduler.call_every(1, lambda: None)
        assert scheduler.timers == [kept]
