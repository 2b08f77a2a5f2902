"""
Axis Normalizer - Per-axis extrema and the merged AxisData record.

Each point shape answers axis queries differently:

    shape           x     y                           y2
    Simple          x     y                           -
    AlternateAxis   x     -                           y2
    OHLC            x     min/max(open,high,low,close) -
    HighLow, Box    x     min/max(high,low)           -

A shape that does not support an axis contributes nothing; an axis
nothing contributes to has NaN extrema ("undetermined", not zero).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Literal, Optional, Sequence, Union

from chart_sonify.axes.scale import AxisScale
from chart_sonify.data.points import (
    AlternateAxisPoint,
    BoxPoint,
    DataPoint,
    HighLowPoint,
    OHLCPoint,
    SimplePoint,
)
from chart_sonify.errors import ConfigurationError, InvalidAxisError

logger = logging.getLogger(__name__)

AxisName = Literal["x", "y", "y2"]
Extremum = Literal["min", "max"]
Formatter = Callable[[float], str]

AXIS_DESCRIPTIONS: dict[str, str] = {
    "x": "X",
    "y": "Y",
    "y2": "Alternate Y",
}


def default_format(value: float) -> str:
    """Decimal stringification; whole floats render without '.0'."""
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if value.is_integer():
            return str(int(value))
    return f"{value}"


@dataclass
class AxisOptions:
    """User overrides for one axis. Unset fields are computed from data.

    Attributes:
        minimum: Lower bound override
        maximum: Upper bound override
        label: Spoken axis label
        type: "linear" or "log10"
        format: Value formatter
        value_labels: Lookup table used as formatter when format is unset
        continuous: Whether x positions are spoken as a continuous range
    """
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    label: Optional[str] = None
    type: Union[AxisScale, str, None] = None
    format: Optional[Formatter] = None
    value_labels: Optional[Sequence[str]] = None
    continuous: Optional[bool] = None

    def __post_init__(self) -> None:
        if self.type is not None:
            try:
                self.type = AxisScale(self.type)
            except ValueError:
                raise ConfigurationError(
                    f"Unknown axis type {self.type!r}, expected 'linear' or 'log10'"
                ) from None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AxisOptions":
        """Build options from a JSON-style mapping (camelCase accepted)."""
        return cls(
            minimum=data.get("minimum"),
            maximum=data.get("maximum"),
            label=data.get("label"),
            type=data.get("type"),
            value_labels=data.get("value_labels", data.get("valueLabels")),
            continuous=data.get("continuous"),
        )


@dataclass(frozen=True)
class AxisData:
    """Resolved axis. Never mutated after initialization."""
    minimum: float
    maximum: float
    label: str = ""
    type: AxisScale = AxisScale.LINEAR
    format: Formatter = field(default=default_format, compare=False)
    continuous: bool = False

    @property
    def is_determined(self) -> bool:
        """Whether both bounds are known."""
        return not (math.isnan(self.minimum) or math.isnan(self.maximum))


def _axis_values(point: DataPoint, axis: str, kind: Extremum) -> float:
    pick = min if kind == "min" else max
    if isinstance(point, SimplePoint):
        if axis in ("x", "y"):
            return getattr(point, axis)
    elif isinstance(point, AlternateAxisPoint):
        if axis in ("x", "y2"):
            return getattr(point, axis)
    elif isinstance(point, OHLCPoint):
        if axis == "x":
            return point.x
        if axis == "y":
            return pick(point.high, point.low, point.open, point.close)
    elif isinstance(point, (HighLowPoint, BoxPoint)):
        if axis == "x":
            return point.x
        if axis == "y":
            return pick(point.high, point.low)
    return math.nan


def compute_extremum(
    groups: Sequence[Optional[Sequence[DataPoint]]],
    axis: AxisName,
    kind: Extremum,
    group_filter: Optional[int] = None,
) -> float:
    """Smallest or largest value any point contributes to an axis.

    Args:
        groups: Classified groups (None groups are skipped)
        axis: "x", "y" or "y2"
        kind: "min" or "max"
        group_filter: Only scan this group, when it is a valid index

    Returns:
        The extremum, or NaN when no point contributes
    """
    if group_filter is not None and 0 <= group_filter < len(groups):
        points: Sequence[DataPoint] = groups[group_filter] or ()
    else:
        points = [p for row in groups if row is not None for p in row]

    values = [
        v for v in (_axis_values(p, axis, kind) for p in points)
        if not math.isnan(v)
    ]
    if not values:
        return math.nan
    return min(values) if kind == "min" else max(values)


def _lookup_format(labels: Sequence[str]) -> Formatter:
    def format_label(value: float) -> str:
        if math.isfinite(value) and value == int(value) and 0 <= int(value) < len(labels):
            return labels[int(value)]
        return default_format(value)
    return format_label


def initialize_axis(
    groups: Sequence[Optional[Sequence[DataPoint]]],
    axis: AxisName,
    options: Optional[AxisOptions] = None,
    group_filter: Optional[int] = None,
) -> AxisData:
    """Merge user overrides with computed extrema.

    Args:
        groups: Classified groups
        axis: Which axis this is
        options: Overrides provided by the caller
        group_filter: Compute extrema from a single group

    Raises:
        InvalidAxisError: log10 axis with a non-positive minimum,
            or minimum greater than maximum
    """
    options = options or AxisOptions()

    if options.format is not None:
        formatter = options.format
    elif options.value_labels is not None:
        formatter = _lookup_format(list(options.value_labels))
    else:
        formatter = default_format

    minimum = options.minimum
    if minimum is None:
        minimum = compute_extremum(groups, axis, "min", group_filter)
    maximum = options.maximum
    if maximum is None:
        maximum = compute_extremum(groups, axis, "max", group_filter)

    data = AxisData(
        minimum=minimum,
        maximum=maximum,
        label=options.label or "",
        type=options.type or AxisScale.LINEAR,
        format=formatter,
        continuous=bool(options.continuous),
    )
    _validate(axis, data)
    logger.debug(
        "Initialized %s axis: [%s, %s] %s", axis, data.minimum, data.maximum, data.type.value
    )
    return data


def _validate(name: str, axis: AxisData) -> None:
    if axis.is_determined and axis.minimum > axis.maximum:
        raise InvalidAxisError(
            name,
            f"minimum {axis.minimum} is greater than maximum {axis.maximum}",
            details={"minimum": axis.minimum, "maximum": axis.maximum},
        )
    if axis.type is AxisScale.LOG10 and not axis.minimum > 0:
        raise InvalidAxisError(
            name,
            f"log10 axis requires a positive minimum, got {axis.minimum}",
            details={"minimum": axis.minimum},
        )


def uses_axis(groups: Sequence[Optional[Sequence[DataPoint]]], axis: AxisName) -> bool:
    """Whether any point in any present group carries the axis field."""
    return any(
        hasattr(point, axis)
        for row in groups if row is not None
        for point in row
    )


def format_wrapper(axis: AxisData) -> Formatter:
    """Wrap an axis formatter with out-of-range guards.

    NaN reads "missing", values outside the axis "too low" / "too high".
    """
    def format_value(value: float) -> str:
        if value is None or math.isnan(value):
            return "missing"
        if not math.isnan(axis.minimum) and value < axis.minimum:
            return "too low"
        if not math.isnan(axis.maximum) and value > axis.maximum:
            return "too high"
        return axis.format(value)
    return format_value


def is_unplayable(value: float, axis: AxisData) -> bool:
    """Values that are NaN or outside the axis produce no tone."""
    if value is None or math.isnan(value):
        return True
    return value < axis.minimum or value > axis.maximum
