"""
Monitoring Tests - Structured event logging.
"""

import io
import json
import logging

import pytest

from chart_sonify.errors import InvalidAxisError
from chart_sonify.monitoring import (
    ChartEvent,
    LogLevel,
    StructuredLogger,
    configure_logging,
)


class TestStructuredLogger:
    """Tests for StructuredLogger."""

    def test_json_output(self):
        out = io.StringIO()
        log = StructuredLogger(output=out)
        log.chart_loaded("a.json", groups=2, points=3)
        record = json.loads(out.getvalue())
        assert record["event"] == "chart_loaded"
        assert record["message"] == "Loaded 3 points in 2 groups"
        assert record["points"] == 3
        assert record["level"] == "info"

    def test_level_filter(self):
        out = io.StringIO()
        log = StructuredLogger(output=out, level=LogLevel.WARNING)
        log.info("ignored")
        log.command_handled("step_right", accepted=True)
        assert out.getvalue() == ""

    def test_command_position_fields(self):
        out = io.StringIO()
        log = StructuredLogger(output=out, level=LogLevel.DEBUG)
        log.command_handled("group_down", accepted=False, group=1, point=0)
        record = json.loads(out.getvalue())
        assert record["accepted"] is False
        assert (record["group"], record["point"]) == (1, 0)

    def test_human_format(self):
        out = io.StringIO()
        log = StructuredLogger(output=out, json_format=False)
        log.group_rendered(0, samples=12000, sample_rate=24000)
        line = out.getvalue()
        assert "INFO" in line
        assert "group_rendered: Rendered 0.50s of audio" in line
        assert "sample_rate=24000" in line

    def test_error_details(self):
        out = io.StringIO()
        log = StructuredLogger(output=out)
        log.sonification_error(InvalidAxisError("y", "bad", details={"minimum": 0}))
        record = json.loads(out.getvalue())
        assert record["error_type"] == "InvalidAxisError"
        assert record["minimum"] == 0


class TestChartEvent:
    def test_text_without_fields(self):
        text = ChartEvent(LogLevel.WARNING, "unbound_key", "No command").to_text()
        assert text.endswith("WARNING unbound_key: No command")


class TestConfigureLogging:
    """Tests for configure_logging()."""

    @pytest.fixture(autouse=True)
    def restore_level(self):
        stdlib = logging.getLogger("chart_sonify")
        level = stdlib.level
        yield
        stdlib.setLevel(level)

    def test_configure(self):
        log = configure_logging("DEBUG", output=io.StringIO())
        assert log.level is LogLevel.DEBUG
        assert logging.getLogger("chart_sonify").level == logging.DEBUG

    def test_numeric_levels(self):
        assert LogLevel.ERROR.numeric == logging.ERROR
        assert LogLevel.DEBUG.numeric == logging.DEBUG
