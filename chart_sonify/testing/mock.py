"""
Test Doubles - Recording output collaborators.

Features:
    - Call recording for tones and announcements
    - Failure injection
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class CallRecord:
    """Record of a recorded call."""

    method: str
    args: tuple = field(default_factory=tuple)
    kwargs: dict = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)
    error: Optional[Exception] = None


@dataclass
class ToneCall:
    """One emit_tone call."""
    bin_index: int
    pan: float
    duration: float
    at: float = 0.0


class RecordingToneRenderer:
    """
    ToneRenderer that records every tone instead of playing it.

    Example:
        tones = RecordingToneRenderer()
        engine = Sonifier([1, 5, 3], tone_renderer=tones, ...)
        engine.handle(Command.JUMP_END)

        assert tones.bins == [30]
        assert tones.last.pan == pytest.approx(0.98)
    """

    def __init__(self, clock: Optional[Any] = None, fail_with: Optional[Exception] = None):
        """
        Args:
            clock: Object with a ``now`` attribute (e.g. ManualScheduler)
                used to timestamp tones
            fail_with: Raise this from every emit_tone call
        """
        self._clock = clock
        self._fail_with = fail_with
        self.tones: list[ToneCall] = []
        self.calls: list[CallRecord] = []

    def emit_tone(self, bin_index: int, pan: float, duration_seconds: float) -> None:
        record = CallRecord("emit_tone", args=(bin_index, pan, duration_seconds))
        self.calls.append(record)
        if self._fail_with is not None:
            record.error = self._fail_with
            raise self._fail_with
        at = self._clock.now if self._clock is not None else 0.0
        self.tones.append(ToneCall(bin_index, pan, duration_seconds, at))

    @property
    def call_count(self) -> int:
        return len(self.tones)

    @property
    def last(self) -> Optional[ToneCall]:
        return self.tones[-1] if self.tones else None

    @property
    def bins(self) -> list[int]:
        return [tone.bin_index for tone in self.tones]

    @property
    def pans(self) -> list[float]:
        return [tone.pan for tone in self.tones]

    def clear(self) -> None:
        self.tones.clear()
        self.calls.clear()


class RecordingAnnouncer:
    """Announcer that keeps announced text for assertions."""

    def __init__(self, clock: Optional[Any] = None):
        self._clock = clock
        self.calls: list[CallRecord] = []

    def announce(self, text: str) -> None:
        at = self._clock.now if self._clock is not None else time.time()
        self.calls.append(CallRecord("announce", args=(text,), timestamp=at))

    @property
    def texts(self) -> list[str]:
        return [call.args[0] for call in self.calls]

    @property
    def last(self) -> Optional[str]:
        return self.texts[-1] if self.calls else None

    def clear(self) -> None:
        self.calls.clear()
