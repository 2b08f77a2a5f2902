"""
Navigation - Cursor state machine, commands and timers.

Components:
    NavigationStateMachine  - Consumes commands, drives tones and speech
    Command                 - The closed set of navigation inputs
    ThreadingScheduler      - Thread-based timers
    AsyncioScheduler        - Event-loop timers
"""

from chart_sonify.navigation.commands import (
    HOTKEYS,
    KEY_BINDINGS,
    Command,
    command_for_key,
    help_text,
    parse_key,
)
from chart_sonify.navigation.scheduler import (
    AsyncioScheduler,
    Scheduler,
    ThreadingScheduler,
    TimerHandle,
)
from chart_sonify.navigation.states import (
    VALID_TRANSITIONS,
    AutoPlaying,
    Direction,
    Idle,
    NavigationCursor,
    NavigationState,
    Positioned,
    is_valid_transition,
)
from chart_sonify.navigation.machine import (
    NavigationListener,
    NavigationStateMachine,
)

__all__ = [
    # Commands
    "HOTKEYS",
    "KEY_BINDINGS",
    "Command",
    "command_for_key",
    "help_text",
    "parse_key",
    # Schedulers
    "AsyncioScheduler",
    "Scheduler",
    "ThreadingScheduler",
    "TimerHandle",
    # States
    "VALID_TRANSITIONS",
    "AutoPlaying",
    "Direction",
    "Idle",
    "NavigationCursor",
    "NavigationState",
    "Positioned",
    "is_valid_transition",
    # Machine
    "NavigationListener",
    "NavigationStateMachine",
]
