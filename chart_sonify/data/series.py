"""
Data Series - Normalize caller input into labeled groups of points.

Accepted input:
    [1, 5, 3]                                   one unlabeled group of numbers
    [{"x": 0, "y": 1}, ...]                     one unlabeled group of points
    {"Group A": [...], "Group B": None, ...}    labeled groups, None = absent
    numpy arrays anywhere a list is accepted
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

import numpy as np

from chart_sonify.data.points import (
    DataPoint,
    PointShape,
    UnknownPoint,
    classify,
    convert_data_row,
)
from chart_sonify.errors import ConfigurationError

logger = logging.getLogger(__name__)

Group = Optional[tuple[DataPoint, ...]]


@dataclass(frozen=True)
class DataSeries:
    """Ordered, labeled groups of classified points.

    Attributes:
        labels: One label per group (possibly empty)
        groups: Points per group, None for a deliberately absent group
        numeric_groups: Indices of groups supplied as bare numbers
    """
    labels: tuple[str, ...]
    groups: tuple[Group, ...]
    numeric_groups: frozenset[int] = field(default_factory=frozenset)

    def __len__(self) -> int:
        return len(self.groups)


def _as_row(value: Any) -> Optional[Sequence[Any]]:
    if value is None:
        return None
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise ConfigurationError(
            f"Group data must be a sequence, got {type(value).__name__}",
        )
    return value


def _is_numeric_row(row: Optional[Sequence[Any]]) -> bool:
    return bool(row) and classify(row[0]) is PointShape.NUMBER


def _convert(row: Optional[Sequence[Any]], label: str, strict: bool) -> Group:
    converted = convert_data_row(row, strict=strict)
    if converted is None:
        return None
    unknown = sum(isinstance(p, UnknownPoint) for p in converted)
    if unknown:
        logger.warning(
            "Group %r: %d of %d records match no point shape and will be silent",
            label, unknown, len(converted),
        )
    return tuple(converted)


def normalize_series(data: Any, strict: bool = False) -> DataSeries:
    """Normalize raw input into a DataSeries.

    Args:
        data: A sequence of numbers/points, or a mapping of label to group
        strict: Raise MalformedPointError on records matching no shape

    Returns:
        DataSeries owning its own immutable copies of the points
    """
    if isinstance(data, Mapping):
        labels = []
        groups = []
        numeric = set()
        for index, (label, value) in enumerate(data.items()):
            row = _as_row(value)
            if _is_numeric_row(row):
                numeric.add(index)
            labels.append(str(label))
            groups.append(_convert(row, str(label), strict))
        return DataSeries(tuple(labels), tuple(groups), frozenset(numeric))

    row = _as_row(data)
    if row is None:
        raise ConfigurationError("Data must not be None")
    numeric = frozenset({0}) if _is_numeric_row(row) else frozenset()
    return DataSeries(("",), (_convert(row, "", strict),), numeric)
