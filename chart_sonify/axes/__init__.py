"""
Axes - Axis normalization and value-to-sound mapping.

Components:
    AxisData, AxisOptions  - Resolved axis and user overrides
    initialize_axis        - Merge overrides with computed extrema
    to_bin, to_pan         - Pitch bin and stereo pan mapping
"""

from chart_sonify.axes.scale import (
    AxisScale,
    PAN_LIMIT,
    PITCH_TABLE,
    axis_position,
    midi_to_hertz,
    to_bin,
    to_pan,
)
from chart_sonify.axes.axis import (
    AXIS_DESCRIPTIONS,
    AxisData,
    AxisOptions,
    compute_extremum,
    default_format,
    format_wrapper,
    initialize_axis,
    is_unplayable,
    uses_axis,
)

__all__ = [
    # Scale
    "AxisScale",
    "PAN_LIMIT",
    "PITCH_TABLE",
    "axis_position",
    "midi_to_hertz",
    "to_bin",
    "to_pan",
    # Axis
    "AXIS_DESCRIPTIONS",
    "AxisData",
    "AxisOptions",
    "compute_extremum",
    "default_format",
    "format_wrapper",
    "initialize_axis",
    "is_unplayable",
    "uses_axis",
]
