"""
Descriptions - Spoken text for points, charts, axes and controls.

Everything here is plain string assembly; the engine decides when
each piece is announced.
"""

from __future__ import annotations

from typing import Iterable, Optional

from chart_sonify.axes.axis import AXIS_DESCRIPTIONS, AxisData, Formatter
from chart_sonify.axes.scale import AxisScale
from chart_sonify.data.points import (
    AlternateAxisPoint,
    BoxPoint,
    DataPoint,
    HighLowPoint,
    OHLCPoint,
    SimplePoint,
    stat_value,
)


def filtered_join(parts: Iterable[Optional[str]], joiner: str) -> str:
    """Join the truthy parts only."""
    return joiner.join(part for part in parts if part)


def describe_point(
    point: DataPoint,
    x_format: Formatter,
    y_format: Formatter,
    stat: Optional[str] = None,
    label_first: bool = False,
) -> str:
    """Describe one data point.

    Args:
        point: Point to describe
        x_format: Formatter for x values
        y_format: Formatter for y values
        stat: Only describe this statistic of a multi-valued point
        label_first: Announce a simple point's label before its values

    Returns:
        Description text ("" for unknown points)
    """
    if isinstance(point, OHLCPoint):
        if stat is not None:
            return f"{x_format(point.x)}, {y_format(stat_value(point, stat))}"
        return " - ".join([
            f"{x_format(point.x)}, {y_format(point.open)}",
            y_format(point.high),
            y_format(point.low),
            y_format(point.close),
        ])

    if isinstance(point, (BoxPoint, HighLowPoint)):
        if stat == "outlier":
            if not point.outlier:
                return f"{x_format(point.x)}, no outliers"
            values = ", ".join(y_format(v) for v in point.outlier)
            return f"{x_format(point.x)}, outliers {values}"
        if stat is not None:
            return f"{x_format(point.x)}, {y_format(stat_value(point, stat))}"
        outlier_note = f", with {len(point.outlier)} outliers" if point.outlier else ""
        return f"{x_format(point.x)}, {y_format(point.high)} - {y_format(point.low)}{outlier_note}"

    if isinstance(point, SimplePoint):
        details = [x_format(point.x), y_format(point.y)]
        if point.label:
            if label_first:
                details.insert(0, point.label)
            else:
                details.append(point.label)
        return ", ".join(details)

    if isinstance(point, AlternateAxisPoint):
        return f"{x_format(point.x)}, {y_format(point.y2)}"

    return ""


def chart_summary(
    title: str,
    group_count: int,
    live: bool = False,
    hierarchy: bool = False,
) -> str:
    """One-sentence chart summary, e.g. 'Sonified chart with 2 groups titled "Sales".'"""
    text = ["Sonified"]
    if live:
        text.append("live")
    if hierarchy:
        text.append("hierarchical")
    text.append("chart")
    if group_count > 1:
        text.append(f"with {group_count} groups")
    if title:
        text.append(f'titled "{title}"')
    return " ".join(text) + "."


def axis_summary(axis_name: str, axis: AxisData) -> str:
    """e.g. 'X is "Year" from 2000 to 2020 logarithmic.'"""
    scale = " logarithmic" if axis.type is AxisScale.LOG10 else ""
    continuous = " continuously" if axis_name == "x" and axis.continuous else ""
    return (
        f'{AXIS_DESCRIPTIONS[axis_name]} is "{axis.label}" '
        f"from {axis.format(axis.minimum)} to {axis.format(axis.maximum)}"
        f"{scale}{continuous}."
    )


def instructions(hierarchy: bool = False, live: bool = False, has_notes: bool = False) -> str:
    """Keyboard instructions appended to the summary on focus."""
    keyboard = filtered_join(
        [
            "Use arrow keys to navigate.",
            hierarchy and "Use Alt + Up and Down to navigate between levels.",
            live and "Press M to toggle monitor mode.",
            "Press H for more hotkeys.",
        ],
        " ",
    )
    info = [keyboard]
    if has_notes:
        info.insert(0, "Has notes.")
    return " ".join(info)


def speed_announcement(milliseconds: int) -> str:
    return f"Speed, {milliseconds}"


def group_prefix(label: str) -> str:
    """Prefix announced before a point after switching groups."""
    return f"{label}, " if label else ""
