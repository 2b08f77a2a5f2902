"""
Testing Utilities - Doubles for exercising the engine without audio.

Components:
    RecordingToneRenderer  - Records emit_tone calls
    RecordingAnnouncer     - Records announcements
    ManualScheduler        - Virtual-time timers
    create_test_engine     - Sonifier wired to all three

Usage:
    from chart_sonify.testing import create_test_engine

    t = create_test_engine([1, 5, 3])
    t.press("End")
    t.scheduler.advance(0.25)
    assert t.announcer.last == "2, 3"
"""

from chart_sonify.testing.mock import (
    CallRecord,
    RecordingAnnouncer,
    RecordingToneRenderer,
    ToneCall,
)
from chart_sonify.testing.scheduler import ManualScheduler, ManualTimer
from chart_sonify.testing.fixtures import (
    SAMPLE_CHARTS,
    TestEngine,
    create_test_engine,
)

__all__ = [
    # Recorders
    "CallRecord",
    "RecordingAnnouncer",
    "RecordingToneRenderer",
    "ToneCall",
    # Timers
    "ManualScheduler",
    "ManualTimer",
    # Fixtures
    "SAMPLE_CHARTS",
    "TestEngine",
    "create_test_engine",
]
