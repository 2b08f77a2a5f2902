"""
Navigation States - Cursor, playback states and the transition table.

Playback is a tagged union rather than a set of flags:

    Idle          no group loaded (only before construction completes)
    Positioned    cursor valid, nothing scheduled
    AutoPlaying   owns the one and only repeating timer

Because the autoplay timer lives inside the AutoPlaying value, there is
no way to hold two of them at once.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from chart_sonify.navigation.scheduler import TimerHandle


class NavigationState(Enum):
    """Navigation lifecycle states."""
    IDLE = "idle"
    POSITIONED = "positioned"
    AUTOPLAYING = "autoplaying"


# Valid state transitions (from -> to)
VALID_TRANSITIONS: dict[NavigationState, set[NavigationState]] = {
    NavigationState.IDLE: {NavigationState.POSITIONED},
    NavigationState.POSITIONED: {NavigationState.POSITIONED, NavigationState.AUTOPLAYING},
    NavigationState.AUTOPLAYING: {NavigationState.POSITIONED},
}


def is_valid_transition(from_state: NavigationState, to_state: NavigationState) -> bool:
    """Check if a state transition is valid."""
    return to_state in VALID_TRANSITIONS.get(from_state, set())


class Direction(Enum):
    """Autoplay direction, as a point index step."""
    LEFT = -1
    RIGHT = 1


@dataclass(frozen=True)
class Idle:
    state: ClassVar[NavigationState] = NavigationState.IDLE


@dataclass(frozen=True)
class Positioned:
    state: ClassVar[NavigationState] = NavigationState.POSITIONED


@dataclass(frozen=True)
class AutoPlaying:
    """Autoplay in progress.

    Attributes:
        direction: Which way the cursor advances per tick
        timer: Handle of the repeating timer driving the ticks
    """
    direction: Direction
    timer: TimerHandle
    state: ClassVar[NavigationState] = NavigationState.AUTOPLAYING


Playback = Union[Idle, Positioned, AutoPlaying]


@dataclass
class NavigationCursor:
    """Current position and playback settings.

    Mutated only by the NavigationStateMachine.

    Attributes:
        group_index: Current group
        point_index: Current point within the group
        speed_index: Index into the speed table
        stat_index: Selected statistic of a multi-valued group (-1 = all)
        pending_group_announcement: Announce the group label with the next description
        is_playing: Whether autoplay is running
    """
    group_index: int = 0
    point_index: int = 0
    speed_index: int = 1
    stat_index: int = -1
    pending_group_announcement: bool = False
    is_playing: bool = False
