"""
Data Points - The five point shapes and their classifier.

A point's shape is decided structurally, from which fields a record
carries, never from an external tag. Classification is total: every
record is one of the five shapes, a bare number, or unknown.

Check order matters because shapes overlap in optional fields
(HighLow and Box both carry high/low):

    OHLC -> Box -> HighLow -> AlternateAxis -> Simple
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from numbers import Real
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from chart_sonify.errors import MalformedPointError


class PointShape(Enum):
    """Structural variant of a data point."""

    SIMPLE = "SimpleDataPoint"
    ALTERNATE_AXIS = "AlternativeAxisDataPoint"
    OHLC = "OHLCDataPoint"
    HIGH_LOW = "HighLowDataPoint"
    BOX = "BoxDataPoint"
    NUMBER = "number"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class SimplePoint:
    """A plain x/y point with an optional spoken label."""
    x: float
    y: float
    label: str = ""
    callback: Optional[Callable[[], None]] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class AlternateAxisPoint:
    """A point plotted against the alternate (y2) axis."""
    x: float
    y2: float
    callback: Optional[Callable[[], None]] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class OHLCPoint:
    """Open/high/low/close point, as used by candlestick charts."""
    x: float
    open: float
    high: float
    low: float
    close: float
    callback: Optional[Callable[[], None]] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class HighLowPoint:
    """A range point with optional outliers."""
    x: float
    high: float
    low: float
    outlier: tuple[float, ...] = ()
    callback: Optional[Callable[[], None]] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class BoxPoint:
    """Box-and-whisker point."""
    x: float
    high: float
    q3: float
    median: float
    q1: float
    low: float
    outlier: tuple[float, ...] = ()
    callback: Optional[Callable[[], None]] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class UnknownPoint:
    """A record matching no known shape. Contributes no axis values."""
    raw: Any = None
    callback: Optional[Callable[[], None]] = field(default=None, compare=False, repr=False)

    @property
    def x(self) -> float:
        value = _get(self.raw, "x")
        return float(value) if _is_number(value) else math.nan


DataPoint = Union[SimplePoint, AlternateAxisPoint, OHLCPoint, HighLowPoint, BoxPoint, UnknownPoint]

_SHAPE_BY_TYPE: dict[type, PointShape] = {
    SimplePoint: PointShape.SIMPLE,
    AlternateAxisPoint: PointShape.ALTERNATE_AXIS,
    OHLCPoint: PointShape.OHLC,
    HighLowPoint: PointShape.HIGH_LOW,
    BoxPoint: PointShape.BOX,
    UnknownPoint: PointShape.UNKNOWN,
}

# Named sub-values that can be queried per multi-valued shape
AVAILABLE_STATS: dict[PointShape, tuple[str, ...]] = {
    PointShape.OHLC: ("open", "high", "low", "close"),
    PointShape.BOX: ("high", "q3", "median", "q1", "low", "outlier"),
    PointShape.HIGH_LOW: ("high", "low"),
}


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _get(record: Any, key: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)


def _has_numbers(record: Any, *keys: str) -> bool:
    return all(_is_number(_get(record, key)) for key in keys)


def _is_number_list(value: Any) -> bool:
    return (
        isinstance(value, (list, tuple))
        and all(_is_number(v) for v in value)
    )


# Predicates accept raw mappings as well as the point dataclasses.

def is_ohlc(record: Any) -> bool:
    if isinstance(record, OHLCPoint):
        return True
    return isinstance(record, Mapping) and _has_numbers(record, "x", "open", "high", "low", "close")


def is_box(record: Any) -> bool:
    if isinstance(record, BoxPoint):
        return True
    return (
        isinstance(record, Mapping)
        and _has_numbers(record, "x", "high", "q3", "median", "q1", "low")
        and _is_number_list(record.get("outlier"))
    )


def is_high_low(record: Any) -> bool:
    if isinstance(record, HighLowPoint):
        return True
    if not isinstance(record, Mapping) or not _has_numbers(record, "x", "high", "low"):
        return False
    return record.get("outlier") is None or _is_number_list(record["outlier"])


def is_alternate_axis(record: Any) -> bool:
    if isinstance(record, AlternateAxisPoint):
        return True
    return isinstance(record, Mapping) and _has_numbers(record, "x", "y2")


def is_simple(record: Any) -> bool:
    if isinstance(record, SimplePoint):
        return True
    return isinstance(record, Mapping) and _has_numbers(record, "x", "y")


_CHECKS: tuple[tuple[PointShape, Callable[[Any], bool]], ...] = (
    (PointShape.OHLC, is_ohlc),
    (PointShape.BOX, is_box),
    (PointShape.HIGH_LOW, is_high_low),
    (PointShape.ALTERNATE_AXIS, is_alternate_axis),
    (PointShape.SIMPLE, is_simple),
)


def classify(record: Any) -> PointShape:
    """Identify the shape of a record.

    Args:
        record: A number, a mapping, or an already-built point

    Returns:
        The matching shape, PointShape.NUMBER for bare numbers,
        PointShape.UNKNOWN when nothing matches
    """
    if _is_number(record):
        return PointShape.NUMBER
    shape = _SHAPE_BY_TYPE.get(type(record))
    if shape is not None:
        return shape
    if not isinstance(record, Mapping):
        return PointShape.UNKNOWN
    for candidate, check in _CHECKS:
        if check(record):
            return candidate
    return PointShape.UNKNOWN


def to_point(record: Any, index: int = 0, strict: bool = False) -> DataPoint:
    """Build an immutable point from a raw record.

    Bare numbers become SimplePoint(x=index, y=value). The caller's
    record is never modified.

    Args:
        record: Raw record
        index: Position of the record in its group
        strict: Raise instead of returning UnknownPoint

    Raises:
        MalformedPointError: strict conversion of an unknown record
    """
    shape = classify(record)
    if shape is PointShape.NUMBER:
        return SimplePoint(x=index, y=record)
    if shape is PointShape.UNKNOWN:
        if strict:
            raise MalformedPointError(record)
        return UnknownPoint(raw=record, callback=_get(record, "callback"))
    if not isinstance(record, Mapping):
        return record

    callback = record.get("callback")
    if shape is PointShape.OHLC:
        return OHLCPoint(
            x=record["x"], open=record["open"], high=record["high"],
            low=record["low"], close=record["close"], callback=callback,
        )
    if shape is PointShape.BOX:
        return BoxPoint(
            x=record["x"], high=record["high"], q3=record["q3"],
            median=record["median"], q1=record["q1"], low=record["low"],
            outlier=tuple(record["outlier"]), callback=callback,
        )
    if shape is PointShape.HIGH_LOW:
        return HighLowPoint(
            x=record["x"], high=record["high"], low=record["low"],
            outlier=tuple(record.get("outlier") or ()), callback=callback,
        )
    if shape is PointShape.ALTERNATE_AXIS:
        return AlternateAxisPoint(x=record["x"], y2=record["y2"], callback=callback)
    return SimplePoint(
        x=record["x"], y=record["y"],
        label=record.get("label") or "", callback=callback,
    )


def convert_data_row(
    row: Optional[Sequence[Any]],
    strict: bool = False,
) -> Optional[list[DataPoint]]:
    """Convert one raw group into points. None stays None."""
    if row is None:
        return None
    return [to_point(record, index, strict=strict) for index, record in enumerate(row)]


def stat_value(point: DataPoint, stat: str) -> Any:
    """Read a named statistic (open, high, q3, outlier, ...) from a point."""
    return getattr(point, stat, None)
