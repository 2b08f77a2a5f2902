"""
Axis Tests - Extrema per shape, overrides, validation and formatting.
"""

import math

import pytest

from chart_sonify.axes.axis import (
    AxisData,
    AxisOptions,
    compute_extremum,
    default_format,
    format_wrapper,
    initialize_axis,
    is_unplayable,
    uses_axis,
)
from chart_sonify.axes.scale import AxisScale
from chart_sonify.data.series import normalize_series
from chart_sonify.errors import ConfigurationError, InvalidAxisError


def groups(data):
    return normalize_series(data).groups


class TestComputeExtremum:
    """Tests for compute_extremum()."""

    def test_simple(self):
        g = groups([{"x": 0, "y": 4}, {"x": 2, "y": -1}])
        assert compute_extremum(g, "x", "min") == 0
        assert compute_extremum(g, "x", "max") == 2
        assert compute_extremum(g, "y", "min") == -1
        assert compute_extremum(g, "y", "max") == 4

    def test_ohlc_uses_all_four(self):
        g = groups([{"x": 0, "open": 5, "high": 9, "low": 1, "close": 3}])
        assert compute_extremum(g, "y", "min") == 1
        assert compute_extremum(g, "y", "max") == 9

    def test_box_uses_high_low(self):
        g = groups([{"x": 0, "high": 9, "q3": 7, "median": 5, "q1": 3, "low": 1, "outlier": [40]}])
        assert compute_extremum(g, "y", "max") == 9

    def test_alternate_axis_only_on_y2(self):
        g = groups([{"x": 0, "y2": 100}, {"x": 1, "y": 3}])
        assert compute_extremum(g, "y2", "max") == 100
        assert compute_extremum(g, "y", "max") == 3

    def test_no_contributors_is_nan(self):
        g = groups([{"x": 0, "y": 1}])
        assert math.isnan(compute_extremum(g, "y2", "min"))

    def test_absent_groups_skipped(self):
        g = groups({"A": None, "B": [{"x": 0, "y": 7}]})
        assert compute_extremum(g, "y", "min") == 7

    def test_group_filter(self):
        g = groups({"A": [1, 2], "B": [10, 20]})
        assert compute_extremum(g, "y", "max", group_filter=0) == 2
        assert compute_extremum(g, "y", "max", group_filter=9) == 20

    def test_unknown_points_contribute_nothing(self):
        g = groups([{"x": 0, "y": 1}, {"x": 100, "z": 9}])
        assert compute_extremum(g, "x", "max") == 0


class TestInitializeAxis:
    """Tests for initialize_axis()."""

    def test_computed(self):
        axis = initialize_axis(groups([1, 5, 3]), "y")
        assert axis == AxisData(minimum=1, maximum=5)

    def test_overrides(self):
        options = AxisOptions(minimum=0, maximum=10, label="Count")
        axis = initialize_axis(groups([1, 5, 3]), "y", options)
        assert (axis.minimum, axis.maximum, axis.label) == (0, 10, "Count")

    def test_partial_override(self):
        axis = initialize_axis(groups([1, 5, 3]), "y", AxisOptions(minimum=0))
        assert (axis.minimum, axis.maximum) == (0, 5)

    def test_log10_positive(self):
        axis = initialize_axis(groups([1, 10, 100]), "y", AxisOptions(type="log10"))
        assert axis.type is AxisScale.LOG10

    def test_log10_zero_minimum_rejected(self):
        with pytest.raises(InvalidAxisError, match="log10 axis requires a positive minimum"):
            initialize_axis(groups([0, 10]), "y", AxisOptions(type="log10"))

    def test_log10_error_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            initialize_axis(groups([-1, 10]), "y", AxisOptions(type="log10"))

    def test_minimum_above_maximum_rejected(self):
        with pytest.raises(InvalidAxisError) as exc_info:
            initialize_axis(groups([1, 2]), "x", AxisOptions(minimum=5, maximum=1))
        assert exc_info.value.axis == "x"

    def test_unknown_type(self):
        with pytest.raises(ConfigurationError, match="Unknown axis type"):
            AxisOptions(type="cubic")

    def test_value_labels(self):
        axis = initialize_axis(groups([1, 2]), "x", AxisOptions(value_labels=["Mon", "Tue"]))
        assert axis.format(1) == "Tue"
        assert axis.format(5) == "5"

    def test_custom_format(self):
        axis = initialize_axis(groups([1, 2]), "y", AxisOptions(format=lambda v: f"${v}"))
        assert axis.format(2) == "$2"

    def test_from_dict(self):
        options = AxisOptions.from_dict({"label": "Day", "valueLabels": ["a"], "type": "linear"})
        assert options.value_labels == ["a"]
        assert options.type is AxisScale.LINEAR


class TestFormatting:
    """Tests for value formatting."""

    def test_default_format(self):
        assert default_format(3.0) == "3"
        assert default_format(2.5) == "2.5"
        assert default_format(7) == "7"
        assert default_format(math.nan) == "NaN"

    def test_wrapper_guards(self):
        fmt = format_wrapper(AxisData(minimum=0, maximum=10))
        assert fmt(5) == "5"
        assert fmt(math.nan) == "missing"
        assert fmt(-1) == "too low"
        assert fmt(11) == "too high"

    def test_wrapper_zero_bound_is_checked(self):
        fmt = format_wrapper(AxisData(minimum=0, maximum=0))
        assert fmt(-0.5) == "too low"

    def test_wrapper_undetermined_axis(self):
        fmt = format_wrapper(AxisData(minimum=math.nan, maximum=math.nan))
        assert fmt(3) == "3"


class TestPlayability:
    """Tests for is_unplayable() and uses_axis()."""

    def test_is_unplayable(self):
        axis = AxisData(minimum=0, maximum=10)
        assert is_unplayable(math.nan, axis)
        assert is_unplayable(11, axis)
        assert not is_unplayable(10, axis)

    def test_uses_axis(self):
        g = groups([{"x": 0, "y": 1}, {"x": 1, "y2": 2}])
        assert uses_axis(g, "y2")
        assert not uses_axis(groups([1, 2]), "y2")
