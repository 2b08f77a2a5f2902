"""
Schedulers - One-shot and repeating timers for navigation.

The state machine needs exactly two timing primitives:
    call_later(delay, fn)     - description after a note's duration
    call_every(interval, fn)  - autoplay ticks

Implementations:
    ThreadingScheduler  - threading.Timer based, for scripts and the CLI
    AsyncioScheduler    - event-loop based, for asyncio hosts

Delays are in seconds.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Callable, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class TimerHandle(Protocol):
    """Cancellation handle returned by a scheduler."""

    @property
    def active(self) -> bool:
        """Whether the timer can still fire."""
        ...

    def cancel(self) -> None:
        """Prevent any further firing. Idempotent."""
        ...


@runtime_checkable
class Scheduler(Protocol):
    """Timer source used by the state machine."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...

    def call_every(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class _ThreadTimer:
    """A cancellable one-shot or repeating timer on a daemon thread."""

    def __init__(self, delay: float, callback: Callable[[], None], repeat: bool) -> None:
        self._delay = delay
        self._callback = callback
        self._repeat = repeat
        self._cancelled = threading.Event()
        self._done = False
        self._thread = threading.Thread(
            target=self._run,
            daemon=True,
            name="chart-sonify-timer",
        )
        self._thread.start()

    @property
    def active(self) -> bool:
        return not (self._cancelled.is_set() or self._done)

    def cancel(self) -> None:
        self._cancelled.set()

    def _run(self) -> None:
        while not self._cancelled.wait(self._delay):
            try:
                self._callback()
            except Exception:
                logger.exception("Timer callback failed")
                self._cancelled.set()
            if not self._repeat:
                break
        self._done = True


class ThreadingScheduler:
    """Scheduler backed by daemon threads.

    Callbacks run on timer threads; the state machine serializes them
    with its own lock.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        return _ThreadTimer(delay, callback, repeat=False)

    def call_every(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        return _ThreadTimer(interval, callback, repeat=True)


class _LoopTimer:
    """Timer chained on an asyncio event loop."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        delay: float,
        callback: Callable[[], None],
        repeat: bool,
    ) -> None:
        self._loop = loop
        self._delay = delay
        self._callback = callback
        self._repeat = repeat
        self._handle: Optional[asyncio.TimerHandle] = loop.call_later(delay, self._fire)

    @property
    def active(self) -> bool:
        return self._handle is not None

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        if self._repeat:
            self._handle = self._loop.call_later(self._delay, self._fire)
        self._callback()


class AsyncioScheduler:
    """Scheduler running callbacks on an asyncio event loop.

    Everything runs on the loop thread, so no two callbacks overlap.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        return _LoopTimer(self.loop, delay, callback, repeat=False)

    def call_every(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        return _LoopTimer(self.loop, interval, callback, repeat=True)
