"""
Bin/Pan Mapping Tests - Value to pitch bin and stereo pan.
"""

import math

import numpy as np
import pytest

from chart_sonify.axes.axis import AxisData
from chart_sonify.axes.scale import (
    PAN_LIMIT,
    PITCH_TABLE,
    AxisScale,
    axis_position,
    midi_to_hertz,
    to_bin,
    to_pan,
)


class TestToBin:
    """Tests for to_bin()."""

    def test_minimum_is_bin_zero(self):
        assert to_bin(0, 0, 10, 7) == 0

    def test_maximum_is_last_bin(self):
        assert to_bin(10, 0, 10, 7) == 7

    def test_value_seven_of_ten(self):
        """floor(7 * 0.7) = 4"""
        assert to_bin(7, 0, 10, 7) == 4

    def test_floor_not_round(self):
        assert to_bin(9.9, 0, 10, 7) == 6

    def test_monotonic(self):
        values = np.linspace(-3, 17, 200)
        bins = [to_bin(v, -3, 17, 60) for v in values]
        assert bins == sorted(bins)

    def test_range(self):
        for v in np.linspace(2, 50, 97):
            assert 0 <= to_bin(v, 2, 50, 60) <= 60

    def test_degenerate_axis(self):
        assert to_bin(5, 5, 5, 7) == 0

    def test_nan_inputs(self):
        assert to_bin(math.nan, 0, 10, 7) == 0
        assert to_bin(5, math.nan, math.nan, 7) == 0

    def test_log10(self):
        assert to_bin(1, 1, 100, 6, AxisScale.LOG10) == 0
        assert to_bin(10, 1, 100, 6, AxisScale.LOG10) == 3
        assert to_bin(100, 1, 100, 6, "log10") == 6

    def test_log10_non_positive(self):
        assert to_bin(0, 1, 100, 6, AxisScale.LOG10) == 0


class TestToPan:
    """Tests for to_pan()."""

    def test_extremes(self):
        assert to_pan(0) == pytest.approx(-PAN_LIMIT)
        assert to_pan(1) == pytest.approx(PAN_LIMIT)

    def test_center(self):
        assert to_pan(0.5) == pytest.approx(0.0)

    def test_linear(self):
        assert to_pan(0.75) == pytest.approx(0.49)

    def test_nan_is_centered(self):
        assert to_pan(math.nan) == 0.0

    def test_bounded(self):
        for pct in np.linspace(0, 1, 21):
            assert -0.98 <= to_pan(pct) <= 0.98

    def test_out_of_range_clamped(self):
        assert to_pan(4.5) == pytest.approx(PAN_LIMIT)
        assert to_pan(-2.0) == pytest.approx(-PAN_LIMIT)


class TestAxisPosition:
    """Tests for axis_position()."""

    def test_linear(self):
        axis = AxisData(minimum=0, maximum=4)
        assert axis_position(1, axis) == pytest.approx(0.25)

    def test_log10(self):
        axis = AxisData(minimum=1, maximum=100, type=AxisScale.LOG10)
        assert axis_position(10, axis) == pytest.approx(0.5)

    def test_single_point_axis(self):
        assert math.isnan(axis_position(3, AxisData(minimum=3, maximum=3)))

    def test_undetermined_axis(self):
        assert math.isnan(axis_position(3, AxisData(minimum=math.nan, maximum=math.nan)))


class TestPitchTable:
    """Tests for the default pitch table."""

    def test_a440(self):
        assert midi_to_hertz(np.array([69]))[0] == pytest.approx(440.0)

    def test_table_spans_c2_to_c7(self):
        assert len(PITCH_TABLE) == 61
        assert PITCH_TABLE[0] == pytest.approx(65.406, rel=1e-4)
        assert PITCH_TABLE[-1] == pytest.approx(2093.0, rel=1e-4)

    def test_ascending(self):
        assert list(PITCH_TABLE) == sorted(PITCH_TABLE)
