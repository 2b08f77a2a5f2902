"""
chart-sonify - Explore charts by ear.

Architecture:
    data → DataSeries → axes + metadata → NavigationStateMachine → tones + speech

Public API (stable):
    Sonifier        - Main interface. Feed it commands or key presses.
    SonifierConfig  - Engine configuration.
    AxisOptions     - Per-axis overrides (bounds, label, log10, format).
    Command         - Navigation commands.
    load_chart      - Read a JSON chart document.

Output boundaries:
    ToneRenderer    - emit_tone(bin_index, pan, duration_seconds)
    Announcer       - announce(text)
    Scheduler       - call_later / call_every

Internals (for advanced users):
    chart_sonify.data        - Point shapes, classifier, group metadata
    chart_sonify.axes        - Axis extrema, bin and pan mapping
    chart_sonify.navigation  - State machine, commands, schedulers
    chart_sonify.audio       - numpy tone synthesizer
    chart_sonify.testing     - Recording doubles, ManualScheduler

Example:
    from chart_sonify import Sonifier, SonifierConfig, Command
    from chart_sonify.announcer import StreamAnnouncer

    engine = Sonifier([3, 1, 4, 1, 5], SonifierConfig(title="Digits"),
                      announcer=StreamAnnouncer())
    engine.focus()
    engine.handle(Command.PLAY_ALL_RIGHT)
"""

from chart_sonify.announcer import Announcer, LoggingAnnouncer, StreamAnnouncer
from chart_sonify.audio.synth import ToneRenderer, ToneSynthesizer
from chart_sonify.axes.axis import AxisData, AxisOptions
from chart_sonify.axes.scale import AxisScale
from chart_sonify.config import DEFAULT_SPEEDS, NOTE_LENGTH, SonifierConfig, load_chart
from chart_sonify.data.points import PointShape
from chart_sonify.engine import Sonifier
from chart_sonify.errors import (
    ConfigurationError,
    EmptyDataError,
    InvalidAxisError,
    InvalidTransitionError,
    MalformedPointError,
    SonificationError,
)
from chart_sonify.navigation.commands import Command
from chart_sonify.navigation.scheduler import AsyncioScheduler, Scheduler, ThreadingScheduler

__version__ = "1.0.0"

__all__ = [
    # Core
    "Sonifier",
    "SonifierConfig",
    "AxisOptions",
    "AxisData",
    "AxisScale",
    "Command",
    "PointShape",
    "load_chart",
    "DEFAULT_SPEEDS",
    "NOTE_LENGTH",
    # Boundaries
    "Announcer",
    "LoggingAnnouncer",
    "StreamAnnouncer",
    "ToneRenderer",
    "ToneSynthesizer",
    "Scheduler",
    "ThreadingScheduler",
    "AsyncioScheduler",
    # Errors
    "SonificationError",
    "ConfigurationError",
    "InvalidAxisError",
    "EmptyDataError",
    "MalformedPointError",
    "InvalidTransitionError",
    # Version
    "__version__",
]
