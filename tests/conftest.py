"""Shared fixtures for chart-sonify tests."""

import pytest

from chart_sonify.config import SonifierConfig
from chart_sonify.testing import (
    SAMPLE_CHARTS,
    ManualScheduler,
    RecordingAnnouncer,
    RecordingToneRenderer,
    create_test_engine,
)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def tones(scheduler):
    return RecordingToneRenderer(clock=scheduler)


@pytest.fixture
def announcer(scheduler):
    return RecordingAnnouncer(clock=scheduler)


@pytest.fixture
def numbers_engine():
    """Engine over [1, 5, 3, 8, 2]."""
    return create_test_engine(SAMPLE_CHARTS["numbers"])


@pytest.fixture
def grouped_engine():
    """Engine over two labeled groups, Apples (3 points) and Pears (2 points)."""
    return create_test_engine(SAMPLE_CHARTS["groups"])


@pytest.fixture
def small_pitch_config():
    """Eight pitches, so bins run 0-7."""
    return SonifierConfig(pitch_table=[100, 200, 300, 400, 500, 600, 700, 800])
