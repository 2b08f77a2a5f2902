"""
Bin/Pan Mapper - Pure math from values to pitch bins and stereo pan.

    to_bin(value, min, max, bins, scale)  -> pitch table index
    to_pan(pct)                           -> stereo coefficient in [-0.98, 0.98]

Degenerate axes (max == min, no data) map to neutral values instead
of failing: bin 0 and a centered pan.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import TYPE_CHECKING, Union

import numpy as np

if TYPE_CHECKING:
    from chart_sonify.axes.axis import AxisData


class AxisScale(Enum):
    """Axis scale kinds."""
    LINEAR = "linear"
    LOG10 = "log10"


PAN_LIMIT = 0.98


def midi_to_hertz(notes: np.ndarray) -> np.ndarray:
    """Equal-tempered frequency for MIDI note numbers (A4 = 69 = 440 Hz)."""
    return 440.0 * np.power(2.0, (np.asarray(notes, dtype=np.float64) - 69.0) / 12.0)


# C2 (65.4 Hz) through C7 (2093 Hz), one entry per semitone
PITCH_TABLE: tuple[float, ...] = tuple(float(f) for f in midi_to_hertz(np.arange(36, 97)))


def _bin_linear(value: float, minimum: float, maximum: float, bins: int) -> int:
    span = maximum - minimum
    if span == 0:
        return 0
    pct = (value - minimum) / span
    result = bins * pct
    if not math.isfinite(result):
        return 0
    return math.floor(result)


def _bin_log(value: float, minimum: float, maximum: float, bins: int) -> int:
    # log10 needs positive arguments; guaranteed by the axis invariant,
    # anything else is treated like a degenerate axis
    if value <= 0 or minimum <= 0 or maximum <= 0:
        return 0
    return _bin_linear(math.log10(value), math.log10(minimum), math.log10(maximum), bins)


def to_bin(
    value: float,
    minimum: float,
    maximum: float,
    bins: int,
    scale: Union[AxisScale, str] = AxisScale.LINEAR,
) -> int:
    """Map a value to a discrete pitch bin.

    Args:
        value: Value to map
        minimum: Axis minimum
        maximum: Axis maximum
        bins: Number of bins; values at the maximum land on this index
        scale: Linear or log10

    Returns:
        floor(bins * relative position), 0 for degenerate input
    """
    if any(math.isnan(v) for v in (value, minimum, maximum)):
        return 0
    if AxisScale(scale) is AxisScale.LOG10:
        return _bin_log(value, minimum, maximum, bins)
    return _bin_linear(value, minimum, maximum, bins)


def to_pan(pct: float) -> float:
    """Map a normalized position to a stereo pan coefficient.

    Positions outside [0, 1] (x beyond an overridden axis) clamp to the
    nearest side; NaN (single-point or empty axis) keeps the sound centered.
    """
    if math.isnan(pct):
        return 0.0
    pct = min(max(pct, 0.0), 1.0)
    return (pct * 2 - 1) * PAN_LIMIT


def axis_position(value: float, axis: "AxisData") -> float:
    """Relative position of a value within an axis, NaN when undefined."""
    minimum, maximum = axis.minimum, axis.maximum
    if axis.type is AxisScale.LOG10:
        if value <= 0 or minimum <= 0:
            return math.nan
        value, minimum, maximum = math.log10(value), math.log10(minimum), math.log10(maximum)
    span = maximum - minimum
    if span == 0 or math.isnan(span) or math.isnan(value):
        return math.nan
    return (value - minimum) / span
