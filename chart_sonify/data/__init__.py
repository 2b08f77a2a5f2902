"""
Data - Point shapes, series normalization and group metadata.

Components:
    classify, to_point     - Total structural classifier
    normalize_series       - Caller input -> DataSeries
    calculate_metadata_by_group - Per-group navigation aggregates
"""

from chart_sonify.data.points import (
    AVAILABLE_STATS,
    AlternateAxisPoint,
    BoxPoint,
    DataPoint,
    HighLowPoint,
    OHLCPoint,
    PointShape,
    SimplePoint,
    UnknownPoint,
    classify,
    convert_data_row,
    is_alternate_axis,
    is_box,
    is_high_low,
    is_ohlc,
    is_simple,
    stat_value,
    to_point,
)
from chart_sonify.data.series import DataSeries, normalize_series
from chart_sonify.data.metadata import (
    GroupMetadata,
    calculate_metadata_by_group,
    check_for_number_input,
)

__all__ = [
    # Points
    "AVAILABLE_STATS",
    "AlternateAxisPoint",
    "BoxPoint",
    "DataPoint",
    "HighLowPoint",
    "OHLCPoint",
    "PointShape",
    "SimplePoint",
    "UnknownPoint",
    "classify",
    "convert_data_row",
    "is_alternate_axis",
    "is_box",
    "is_high_low",
    "is_ohlc",
    "is_simple",
    "stat_value",
    "to_point",
    # Series
    "DataSeries",
    "normalize_series",
    # Metadata
    "GroupMetadata",
    "calculate_metadata_by_group",
    "check_for_number_input",
]
