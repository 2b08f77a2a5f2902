"""
Tone Synthesizer - Render pitch-bin/pan pairs to stereo PCM.

A deliberately small synth: one sine oscillator per note, a gain step
down to 0.01 once the note's audible duration has passed, and a short
release tail before the oscillator stops. Output is float32 stereo,
shape (samples, 2), range [-1, 1].

Pan law is linear: pan -1 is hard left, 0 is centered, +1 hard right.
"""

from __future__ import annotations

import logging
import math
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol, Sequence, runtime_checkable

import numpy as np

from chart_sonify.axes.scale import PITCH_TABLE

logger = logging.getLogger(__name__)


@runtime_checkable
class ToneRenderer(Protocol):
    """Protocol for tone output."""

    def emit_tone(self, bin_index: int, pan: float, duration_seconds: float) -> None:
        """Play the pitch at bin_index, panned, for duration_seconds."""
        ...


@dataclass
class SynthConfig:
    """Configuration for tone synthesis."""

    sample_rate: int = 24000
    amplitude: float = 0.3
    release: float = 0.1  # Oscillator keeps running this long after the gain drop
    sustain_gain: float = 0.01  # Gain after the audible duration
    pitch_table: Sequence[float] = PITCH_TABLE

    def __post_init__(self) -> None:
        if self.sample_rate <= 0:
            raise ValueError(f"sample_rate must be > 0, got {self.sample_rate}")
        if not 0.0 < self.amplitude <= 1.0:
            raise ValueError(f"amplitude must be 0.0-1.0, got {self.amplitude}")
        if self.release < 0:
            raise ValueError(f"release must be >= 0, got {self.release}")
        if not self.pitch_table:
            raise ValueError("pitch_table must not be empty")


@dataclass
class RenderedNote:
    """A note emitted through the synthesizer.

    Attributes:
        bin_index: Pitch table index requested
        frequency: Frequency actually played
        pan: Stereo pan coefficient
        duration: Audible duration in seconds
        started_at: Clock reading when the note was emitted
    """
    bin_index: int
    frequency: float
    pan: float
    duration: float
    started_at: float = 0.0


def render_tone(
    frequency: float,
    pan: float,
    duration: float,
    sample_rate: int = 24000,
    amplitude: float = 0.3,
    release: float = 0.1,
    sustain_gain: float = 0.01,
) -> np.ndarray:
    """Render a single panned sine tone.

    Args:
        frequency: Frequency in Hz
        pan: -1 (left) to 1 (right)
        duration: Seconds at full gain
        sample_rate: Output sample rate
        amplitude: Peak amplitude
        release: Seconds at sustain_gain before the tone stops
        sustain_gain: Gain after the audible duration

    Returns:
        float32 array of shape (samples, 2)
    """
    total = int(round((duration + release) * sample_rate))
    if total <= 0:
        return np.zeros((0, 2), dtype=np.float32)

    t = np.arange(total, dtype=np.float64) / sample_rate
    wave = np.sin(2.0 * math.pi * frequency * t) * amplitude

    envelope = np.full(total, sustain_gain)
    envelope[: int(round(duration * sample_rate))] = 1.0
    wave *= envelope

    pan = float(np.clip(pan, -1.0, 1.0))
    left = wave * (1.0 - pan) / 2.0
    right = wave * (1.0 + pan) / 2.0
    return np.stack([left, right], axis=1).astype(np.float32)


def mix_at(buffer: np.ndarray, pcm: np.ndarray, offset: int) -> None:
    """Add pcm into buffer starting at sample offset, clipping at the end."""
    end = min(offset + len(pcm), len(buffer))
    if end > offset:
        buffer[offset:end] += pcm[: end - offset]


class ToneSynthesizer:
    """ToneRenderer that synthesizes PCM with numpy.

    Every emitted note is rendered, handed to the optional sink (e.g. an
    audio device callback) and kept so it can be mixed down later. Only the
    most recent max_notes are kept; None keeps them all.

    Example:
        synth = ToneSynthesizer()
        engine = Sonifier(data, tone_renderer=synth, announcer=announcer)
        engine.handle(Command.STEP_RIGHT)

        pcm = synth.mixdown()   # everything played so far, on one timeline
    """

    def __init__(
        self,
        config: Optional[SynthConfig] = None,
        sink: Optional[Callable[[np.ndarray], None]] = None,
        clock: Callable[[], float] = time.monotonic,
        max_notes: Optional[int] = 1000,
    ):
        self.config = config or SynthConfig()
        self._sink = sink
        self._clock = clock
        self.notes: deque[RenderedNote] = deque(maxlen=max_notes)

    @property
    def sample_rate(self) -> int:
        return self.config.sample_rate

    def frequency_for(self, bin_index: int) -> float:
        """Pitch for a bin, clamped to the table."""
        table = self.config.pitch_table
        return float(table[min(max(bin_index, 0), len(table) - 1)])

    def render(self, bin_index: int, pan: float, duration_seconds: float) -> np.ndarray:
        return render_tone(
            self.frequency_for(bin_index),
            pan,
            duration_seconds,
            sample_rate=self.config.sample_rate,
            amplitude=self.config.amplitude,
            release=self.config.release,
            sustain_gain=self.config.sustain_gain,
        )

    def emit_tone(self, bin_index: int, pan: float, duration_seconds: float) -> None:
        note = RenderedNote(
            bin_index=bin_index,
            frequency=self.frequency_for(bin_index),
            pan=pan,
            duration=duration_seconds,
            started_at=self._clock(),
        )
        self.notes.append(note)
        logger.debug("Tone bin=%d (%.1f Hz) pan=%.2f", bin_index, note.frequency, pan)
        if self._sink is not None:
            self._sink(self.render(bin_index, pan, duration_seconds))

    def mixdown(self, notes: Optional[Sequence[RenderedNote]] = None) -> np.ndarray:
        """Mix notes onto one timeline, offset by their start times.

        Returns:
            float32 stereo PCM, clipped to [-1, 1]
        """
        notes = list(self.notes if notes is None else notes)
        if not notes:
            return np.zeros((0, 2), dtype=np.float32)

        rate = self.config.sample_rate
        origin = min(n.started_at for n in notes)
        rendered = [
            (int(round((n.started_at - origin) * rate)), self.render(n.bin_index, n.pan, n.duration))
            for n in notes
        ]
        length = max(offset + len(pcm) for offset, pcm in rendered)
        buffer = np.zeros((length, 2), dtype=np.float32)
        for offset, pcm in rendered:
            mix_at(buffer, pcm, offset)
        return np.clip(buffer, -1.0, 1.0)

    def render_sequence(
        self,
        chords: Sequence[Sequence[tuple[int, float]]],
        interval: float,
        duration: float,
    ) -> np.ndarray:
        """Render chords of (bin, pan) pairs at a fixed cadence.

        Used to render an autoplay pass over a group without real time.

        Args:
            chords: One entry per step, each a list of simultaneous (bin, pan)
            interval: Seconds between steps
            duration: Audible duration of each note
        """
        notes = [
            RenderedNote(
                bin_index=bin_index,
                frequency=self.frequency_for(bin_index),
                pan=pan,
                duration=duration,
                started_at=step * interval,
            )
            for step, chord in enumerate(chords)
            for bin_index, pan in chord
        ]
        if not notes:
            length = int(round(interval * len(chords) * self.config.sample_rate))
            return np.zeros((length, 2), dtype=np.float32)
        return self.mixdown(notes)
