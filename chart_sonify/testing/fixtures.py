"""
Test Fixtures - Sample charts and a fully wired test engine.
"""

from __future__ import annotations

from typing import Any, Optional

from chart_sonify.config import SonifierConfig
from chart_sonify.engine import Sonifier
from chart_sonify.navigation.commands import parse_key
from chart_sonify.testing.mock import RecordingAnnouncer, RecordingToneRenderer
from chart_sonify.testing.scheduler import ManualScheduler

# Sample inputs covering every point shape
SAMPLE_CHARTS: dict[str, Any] = {
    "numbers": [1, 5, 3, 8, 2],
    "simple": [
        {"x": 0, "y": 10},
        {"x": 1, "y": 20, "label": "peak"},
        {"x": 2, "y": 15},
    ],
    "groups": {
        "Apples": [{"x": 0, "y": 1}, {"x": 1, "y": 4}, {"x": 2, "y": 2}],
        "Pears": [{"x": 0, "y": 3}, {"x": 1, "y": 0}],
    },
    "ohlc": [
        {"x": 0, "open": 10, "high": 12, "low": 9, "close": 11},
        {"x": 1, "open": 11, "high": 15, "low": 10, "close": 14},
    ],
    "box": [
        {"x": 0, "high": 9, "q3": 7, "median": 5, "q1": 3, "low": 1, "outlier": [12]},
        {"x": 1, "high": 8, "q3": 6, "median": 4, "q1": 2, "low": 0, "outlier": []},
    ],
    "high_low": [
        {"x": 0, "high": 5, "low": 1},
        {"x": 1, "high": 7, "low": 2},
    ],
    "alternate": [
        {"x": 0, "y": 1},
        {"x": 1, "y2": 100},
        {"x": 2, "y2": 300},
    ],
}


class TestEngine:
    """A Sonifier wired to recording doubles and virtual time."""

    __test__ = False

    def __init__(self, data: Any, config: Optional[SonifierConfig] = None, **kwargs: Any):
        self.scheduler = ManualScheduler()
        self.tones = RecordingToneRenderer(clock=self.scheduler)
        self.announcer = RecordingAnnouncer(clock=self.scheduler)
        self.engine = Sonifier(
            data,
            config=config,
            tone_renderer=self.tones,
            announcer=self.announcer,
            scheduler=self.scheduler,
            **kwargs,
        )

    def press(self, *keys: str) -> None:
        """Press keys given as 'ArrowRight', 'Shift+ArrowLeft', 'Space', ..."""
        for key_spec in keys:
            key, shift, ctrl = parse_key(key_spec)
            self.engine.handle_key(key, shift=shift, ctrl=ctrl)

    def settle(self) -> None:
        """Let every pending timer fire."""
        self.scheduler.run_all()


def create_test_engine(
    data: Any = None,
    config: Optional[SonifierConfig] = None,
    **kwargs: Any,
) -> TestEngine:
    """
    Create a test engine.

    Args:
        data: Chart data (default: SAMPLE_CHARTS["numbers"])
        config: Engine configuration
        **kwargs: Passed to Sonifier

    Returns:
        TestEngine with recording tone renderer, announcer and
        manual scheduler
    """
    if data is None:
        data = SAMPLE_CHARTS["numbers"]
    return TestEngine(data, config=config, **kwargs)
