"""
Navigation State Machine - Cursor movement, autoplay and speed control.

Consumes one Command at a time and turns it into side effects on a
NavigationListener:

    1. play(cursor)            tone for the new position, immediately
    2. (note length passes)
    3. speak(cursor, group)    spoken description of the position

Rules:
    - Every command first cancels the autoplay timer and any pending
      description, so at most one of each is ever scheduled.
    - Movement clamps at group ends; it never wraps and never raises.
    - Group switches skip absent/empty groups and clamp the point index
      into the new group.
    - Speed changes announce immediately and play no tone.
    - Autoplay ticks play tones only.

Commands and timer callbacks are serialized by one lock: a step fully
completes (tone emitted, description scheduled) before the next one
is accepted.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Callable, Optional, Protocol, Sequence, runtime_checkable

from chart_sonify.config import DEFAULT_SPEEDS, NOTE_LENGTH
from chart_sonify.data.metadata import GroupMetadata
from chart_sonify.descriptions import speed_announcement
from chart_sonify.errors import EmptyDataError, InvalidTransitionError
from chart_sonify.navigation.commands import Command, help_text
from chart_sonify.navigation.scheduler import Scheduler, TimerHandle
from chart_sonify.navigation.states import (
    AutoPlaying,
    Direction,
    Idle,
    NavigationCursor,
    NavigationState,
    Playback,
    Positioned,
    is_valid_transition,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class NavigationListener(Protocol):
    """Receiver of the state machine's side effects."""

    def play(self, cursor: NavigationCursor) -> None:
        """Emit the tone(s) for the cursor position."""
        ...

    def speak(self, cursor: NavigationCursor, announce_group: bool) -> None:
        """Announce the description of the cursor position."""
        ...

    def announce(self, text: str) -> None:
        """Announce free text (speed changes, help)."""
        ...


class NavigationStateMachine:
    """Event-driven navigation over groups of points.

    Example:
        machine = NavigationStateMachine(metadata, listener, scheduler)
        machine.handle(Command.STEP_RIGHT)      # tone now, description later
        machine.handle(Command.PLAY_ALL_RIGHT)  # tones on every tick
        machine.handle(Command.STEP_LEFT)       # stops autoplay, steps back
    """

    def __init__(
        self,
        metadata: Sequence[GroupMetadata],
        listener: NavigationListener,
        scheduler: Scheduler,
        speeds: Sequence[int] = DEFAULT_SPEEDS,
        speed_index: int = 1,
        note_length: float = NOTE_LENGTH,
    ):
        """Initialize the state machine.

        Args:
            metadata: Per-group metadata, one entry per group
            listener: Receives tones, descriptions and announcements
            scheduler: Timer source
            speeds: Autoplay intervals in milliseconds
            speed_index: Initial speed
            note_length: Seconds between a tone and its description

        Raises:
            EmptyDataError: No group has a point to navigate to
        """
        self._metadata = list(metadata)
        self._listener = listener
        self._scheduler = scheduler
        self._speeds = tuple(speeds)
        self._note_length = note_length
        self._lock = threading.RLock()

        self._playback: Playback = Idle()
        self._pending_description: Optional[TimerHandle] = None
        self._generation = 0
        self._description_token = 0

        navigable = [m.index for m in self._metadata if self._is_navigable(m.index)]
        if not navigable:
            raise EmptyDataError(details={"group_count": len(self._metadata)})

        self._cursor = NavigationCursor(
            group_index=navigable[0],
            point_index=0,
            speed_index=min(max(speed_index, 0), len(self._speeds) - 1),
        )
        self._transition(Positioned())

        self._handlers: dict[Command, Callable[[], bool]] = {
            Command.STEP_RIGHT: lambda: self._step(1),
            Command.STEP_LEFT: lambda: self._step(-1),
            Command.JUMP_HOME: lambda: self._jump_to(0),
            Command.JUMP_END: lambda: self._jump_to(self._group_size() - 1),
            Command.GROUP_UP: lambda: self._switch_group(-1),
            Command.GROUP_DOWN: lambda: self._switch_group(1),
            Command.REPLAY: self._replay,
            Command.JUMP_TO_MINIMUM: lambda: self._jump_to_extremum("minimum"),
            Command.JUMP_TO_MAXIMUM: lambda: self._jump_to_extremum("maximum"),
            Command.JUMP_FORWARD_TENTH: lambda: self._step(self._tenth()),
            Command.JUMP_BACKWARD_TENTH: lambda: self._step(-self._tenth()),
            Command.NEXT_STAT: lambda: self._change_stat(1),
            Command.PREVIOUS_STAT: lambda: self._change_stat(-1),
        }

    # -- state ---------------------------------------------------------

    @property
    def state(self) -> NavigationState:
        return self._playback.state

    @property
    def cursor(self) -> NavigationCursor:
        """Snapshot of the cursor."""
        with self._lock:
            return self._snapshot()

    @property
    def is_playing(self) -> bool:
        return isinstance(self._playback, AutoPlaying)

    @property
    def speed(self) -> int:
        """Current autoplay interval in milliseconds."""
        return self._speeds[self._cursor.speed_index]

    def _snapshot(self) -> NavigationCursor:
        return replace(self._cursor, is_playing=self.is_playing)

    def _transition(self, playback: Playback) -> None:
        if not is_valid_transition(self._playback.state, playback.state):
            raise InvalidTransitionError(self._playback.state.value, playback.state.value)
        self._playback = playback

    def _is_navigable(self, group_index: int) -> bool:
        meta = self._metadata[group_index]
        return meta.input_type is not None and meta.size > 0

    def _group_size(self) -> int:
        return self._metadata[self._cursor.group_index].size

    def _tenth(self) -> int:
        return max(self._metadata[self._cursor.group_index].tenths, 1)

    # -- input ---------------------------------------------------------

    def handle(self, command: Command) -> bool:
        """Process one command.

        Args:
            command: Command to process

        Returns:
            False when the command was rejected (e.g. group bound hit)
        """
        with self._lock:
            self._cancel_scheduled()
            logger.debug(
                "Command %s at group=%d point=%d",
                command.value, self._cursor.group_index, self._cursor.point_index,
            )

            if command in (Command.SPEED_UP, Command.SPEED_DOWN):
                return self._change_speed(1 if command is Command.SPEED_UP else -1)
            if command is Command.PLAY_ALL_RIGHT:
                return self._start_autoplay(Direction.RIGHT)
            if command is Command.PLAY_ALL_LEFT:
                return self._start_autoplay(Direction.LEFT)
            if command is Command.HELP:
                self._listener.announce(help_text())
                return True

            if not self._handlers[command]():
                logger.debug("Command %s rejected", command.value)
                return False
            self._present()
            return True

    def stop(self) -> None:
        """Cancel autoplay and any pending description."""
        with self._lock:
            self._cancel_scheduled()

    def _cancel_scheduled(self) -> None:
        if isinstance(self._playback, AutoPlaying):
            self._playback.timer.cancel()
            self._transition(Positioned())
        if self._pending_description is not None:
            self._pending_description.cancel()
            self._pending_description = None

    # -- movement ------------------------------------------------------

    def _step(self, delta: int) -> bool:
        last = self._group_size() - 1
        self._cursor.point_index = min(max(self._cursor.point_index + delta, 0), last)
        return True

    def _jump_to(self, index: int) -> bool:
        self._cursor.point_index = min(max(index, 0), self._group_size() - 1)
        return True

    def _jump_to_extremum(self, which: str) -> bool:
        meta = self._metadata[self._cursor.group_index]
        if not meta.has_scalar_values:
            return False
        index = meta.minimum_point_index if which == "minimum" else meta.maximum_point_index
        return self._jump_to(index)

    def _switch_group(self, delta: int) -> bool:
        index = self._cursor.group_index + delta
        while 0 <= index < len(self._metadata) and not self._is_navigable(index):
            index += delta
        if not 0 <= index < len(self._metadata):
            return False

        self._cursor.group_index = index
        self._cursor.point_index = min(self._cursor.point_index, self._group_size() - 1)
        self._cursor.stat_index = -1
        self._cursor.pending_group_announcement = True
        return True

    def _replay(self) -> bool:
        self._cursor.pending_group_announcement = True
        return True

    def _change_stat(self, delta: int) -> bool:
        stats = self._metadata[self._cursor.group_index].available_stats
        if not stats:
            return False
        self._cursor.stat_index = min(max(self._cursor.stat_index + delta, -1), len(stats) - 1)
        return True

    def _change_speed(self, delta: int) -> bool:
        index = self._cursor.speed_index + delta
        changed = 0 <= index < len(self._speeds)
        if changed:
            self._cursor.speed_index = index
        self._listener.announce(speed_announcement(self.speed))
        return changed

    # -- output --------------------------------------------------------

    def _present(self) -> None:
        self._listener.play(self._snapshot())
        self._description_token += 1
        token = self._description_token
        self._pending_description = self._scheduler.call_later(
            self._note_length, lambda: self._speak_current(token),
        )

    def _speak_current(self, token: int) -> None:
        with self._lock:
            if token != self._description_token or self._pending_description is None:
                return
            self._pending_description = None
            announce_group = self._cursor.pending_group_announcement
            # consumed even when the label turns out to be empty
            self._cursor.pending_group_announcement = False
            self._listener.speak(self._snapshot(), announce_group)

    # -- autoplay ------------------------------------------------------

    def _at_bound(self, direction: Direction) -> bool:
        if direction is Direction.RIGHT:
            return self._cursor.point_index >= self._group_size() - 1
        return self._cursor.point_index <= 0

    def _start_autoplay(self, direction: Direction) -> bool:
        self._listener.play(self._snapshot())
        if self._at_bound(direction):
            return True

        self._generation += 1
        generation = self._generation
        timer = self._scheduler.call_every(self.speed / 1000, lambda: self._tick(generation))
        self._transition(AutoPlaying(direction=direction, timer=timer))
        logger.debug("Autoplay %s every %dms", direction.name.lower(), self.speed)
        return True

    def _tick(self, generation: int) -> None:
        with self._lock:
            playing = self._playback
            if not isinstance(playing, AutoPlaying) or generation != self._generation:
                # cancelled while this tick was waiting on the lock
                return
            self._cursor.point_index += playing.direction.value
            self._listener.play(self._snapshot())
            if self._at_bound(playing.direction):
                playing.timer.cancel()
                self._transition(Positioned())
