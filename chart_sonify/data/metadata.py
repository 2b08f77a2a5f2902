"""
Group Metadata - Per-group aggregates used for navigation and summaries.

Computed once after classification. Groups with a scalar y value
(Simple, AlternateAxis) get their extrema and the first index reaching
each; multi-valued groups list the statistics that can be queried instead.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Iterable, Optional, Sequence

from chart_sonify.data.points import (
    AVAILABLE_STATS,
    AlternateAxisPoint,
    DataPoint,
    PointShape,
    SimplePoint,
    classify,
)


@dataclass(frozen=True)
class GroupMetadata:
    """Aggregate statistics for one group.

    Attributes:
        index: Position of the group in the series
        minimum_point_index: First index holding the minimum (-1 if none)
        maximum_point_index: First index holding the maximum (-1 if none)
        minimum_value: Smallest scalar y value (NaN if none)
        maximum_value: Largest scalar y value (NaN if none)
        tenths: Points per decile jump, round(size / 10); 0 for an absent
            group (an int, unlike the NaN value fields)
        available_stats: Named sub-values of multi-valued shapes
        stat_index: Initially selected statistic (-1 = all)
        input_type: Shape of the group, None for an absent group
        size: Number of points
    """
    index: int
    minimum_point_index: Optional[int]
    maximum_point_index: Optional[int]
    minimum_value: float
    maximum_value: float
    tenths: int
    available_stats: tuple[str, ...]
    stat_index: int
    input_type: Optional[PointShape]
    size: int

    @property
    def has_scalar_values(self) -> bool:
        return self.minimum_point_index is not None and self.minimum_point_index >= 0


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _absent(index: int) -> GroupMetadata:
    return GroupMetadata(
        index=index,
        minimum_point_index=None,
        maximum_point_index=None,
        minimum_value=math.nan,
        maximum_value=math.nan,
        tenths=0,
        available_stats=(),
        stat_index=-1,
        input_type=None,
        size=0,
    )


def _scalar_values(row: Sequence[DataPoint]) -> list[float]:
    first = row[0]
    if isinstance(first, SimplePoint):
        return [p.y if isinstance(p, SimplePoint) else math.nan for p in row]
    if isinstance(first, AlternateAxisPoint):
        return [p.y2 if isinstance(p, AlternateAxisPoint) else math.nan for p in row]
    return []


def calculate_metadata_by_group(
    groups: Sequence[Optional[Sequence[DataPoint]]],
) -> list[GroupMetadata]:
    """Determine metadata about each group, to help users navigate.

    Args:
        groups: Classified groups, None for absent groups

    Returns:
        One GroupMetadata per group, in order
    """
    result = []
    for index, row in enumerate(groups):
        if row is None:
            result.append(_absent(index))
            continue

        shape = classify(row[0]) if row else PointShape.UNKNOWN
        values = _scalar_values(row) if row else []
        present = [v for v in values if not math.isnan(v)]

        if present:
            minimum, maximum = min(present), max(present)
            # list.index is a linear scan: ties resolve to the first occurrence
            min_index, max_index = values.index(minimum), values.index(maximum)
        else:
            minimum = maximum = math.nan
            min_index = max_index = -1

        result.append(GroupMetadata(
            index=index,
            minimum_point_index=min_index,
            maximum_point_index=max_index,
            minimum_value=minimum,
            maximum_value=maximum,
            tenths=_round_half_up(len(row) / 10),
            available_stats=AVAILABLE_STATS.get(shape, ()),
            stat_index=-1,
            input_type=shape,
            size=len(row),
        ))
    return result


def check_for_number_input(
    metadata: Sequence[GroupMetadata],
    numeric_groups: Iterable[int],
) -> list[GroupMetadata]:
    """Mark groups that were supplied as bare numbers.

    Distinguishes "no label available" from "structured label omitted".
    """
    numeric = set(numeric_groups)
    return [
        replace(meta, input_type=PointShape.NUMBER)
        if meta.index in numeric and meta.input_type is not None else meta
        for meta in metadata
    ]
