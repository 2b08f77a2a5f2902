"""
Sonifier - The sonification engine.

Architecture:
    raw data -> DataSeries -> axes + GroupMetadata -> NavigationStateMachine
             -> to_bin / to_pan per step -> ToneRenderer + Announcer

The engine owns its classified copy of the data and its axes; both are
built once at construction and never change. The caller supplies the
output collaborators (tone renderer, announcer) and optionally the
timer source.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import numpy as np

from chart_sonify.announcer import Announcer, LoggingAnnouncer
from chart_sonify.audio.synth import SynthConfig, ToneRenderer, ToneSynthesizer
from chart_sonify.axes.axis import (
    AxisData,
    format_wrapper,
    initialize_axis,
    is_unplayable,
    uses_axis,
)
from chart_sonify.axes.scale import axis_position, to_bin, to_pan
from chart_sonify.config import SonifierConfig
from chart_sonify.data.metadata import (
    GroupMetadata,
    calculate_metadata_by_group,
    check_for_number_input,
)
from chart_sonify.data.points import (
    AlternateAxisPoint,
    BoxPoint,
    DataPoint,
    HighLowPoint,
    OHLCPoint,
    SimplePoint,
    stat_value,
)
from chart_sonify.data.series import DataSeries, normalize_series
from chart_sonify.descriptions import (
    axis_summary,
    chart_summary,
    describe_point,
    group_prefix,
    instructions,
)
from chart_sonify.errors import EmptyDataError
from chart_sonify.navigation.commands import Command, command_for_key
from chart_sonify.navigation.machine import NavigationStateMachine
from chart_sonify.navigation.scheduler import Scheduler, ThreadingScheduler
from chart_sonify.navigation.states import NavigationCursor, NavigationState

logger = logging.getLogger(__name__)


def tone_values(point: DataPoint, stat: Optional[str] = None) -> list[float]:
    """Values that sound together for a point.

    Multi-valued points with no statistic selected play their extremes
    as a chord: high and low, or open and close for OHLC.
    """
    if isinstance(point, SimplePoint):
        return [point.y]
    if isinstance(point, AlternateAxisPoint):
        return [point.y2]
    if isinstance(point, (OHLCPoint, HighLowPoint, BoxPoint)):
        if stat == "outlier":
            return list(stat_value(point, "outlier") or ())
        if stat is not None:
            return [stat_value(point, stat)]
        if isinstance(point, OHLCPoint):
            return [point.open, point.close]
        return [point.high, point.low]
    return []


class Sonifier:
    """Navigable audio-and-speech rendition of a data series.

    Example:
        engine = Sonifier(
            [{"x": 0, "y": 1}, {"x": 1, "y": 5}, {"x": 2, "y": 3}],
            config=SonifierConfig(title="Visits"),
            tone_renderer=ToneSynthesizer(),
            announcer=StreamAnnouncer(),
        )
        engine.focus()                    # speaks the summary
        engine.handle(Command.STEP_RIGHT) # tone, then "1, 5"
        engine.handle_key("End")          # tone, then "2, 3"
    """

    def __init__(
        self,
        data: Any,
        config: Optional[SonifierConfig] = None,
        tone_renderer: Optional[ToneRenderer] = None,
        announcer: Optional[Announcer] = None,
        scheduler: Optional[Scheduler] = None,
        strict: bool = False,
    ):
        """Build the engine.

        Args:
            data: Numbers, points, or a mapping of group label to points
            config: Engine configuration
            tone_renderer: Receives emit_tone calls (default: ToneSynthesizer)
            announcer: Receives announce calls (default: LoggingAnnouncer)
            scheduler: Timer source (default: ThreadingScheduler)
            strict: Reject records matching no point shape

        Raises:
            ConfigurationError: invalid axes, empty data, bad options
        """
        self.config = config or SonifierConfig()
        self.tone_renderer = tone_renderer or self._synthesizer()
        self.announcer = announcer or LoggingAnnouncer()
        self.scheduler = scheduler or ThreadingScheduler()

        self.series: DataSeries = normalize_series(data, strict=strict)
        if not len(self.series):
            raise EmptyDataError()
        groups = self.series.groups
        axes = self.config.axes

        self.x_axis: AxisData = initialize_axis(groups, "x", axes.get("x"))
        self.y_axis: AxisData = initialize_axis(groups, "y", axes.get("y"))
        self.y2_axis: Optional[AxisData] = None
        if uses_axis(groups, "y2") or "y2" in axes:
            self.y2_axis = initialize_axis(groups, "y2", axes.get("y2"))

        self.metadata: list[GroupMetadata] = check_for_number_input(
            calculate_metadata_by_group(groups),
            self.series.numeric_groups,
        )
        self.summary = self._build_summary()

        self._machine = NavigationStateMachine(
            self.metadata,
            self,
            self.scheduler,
            speeds=self.config.speeds,
            speed_index=self.config.speed_index,
            note_length=self.config.note_length,
        )
        logger.info(
            "Sonifier ready: %d groups, %d points",
            len(groups), sum(m.size for m in self.metadata),
        )

    # -- queries -------------------------------------------------------

    @property
    def labels(self) -> tuple[str, ...]:
        return self.series.labels

    @property
    def cursor(self) -> NavigationCursor:
        return self._machine.cursor

    @property
    def state(self) -> NavigationState:
        return self._machine.state

    @property
    def speed(self) -> int:
        """Current autoplay interval in milliseconds."""
        return self._machine.speed

    def point_at(self, group_index: int, point_index: int) -> DataPoint:
        group = self.series.groups[group_index]
        if group is None:
            raise IndexError(f"Group {group_index} is absent")
        return group[point_index]

    def current_point(self) -> DataPoint:
        cursor = self.cursor
        return self.point_at(cursor.group_index, cursor.point_index)

    def axis_for(self, point: DataPoint) -> AxisData:
        """The value axis a point sounds against."""
        if isinstance(point, AlternateAxisPoint) and self.y2_axis is not None:
            return self.y2_axis
        return self.y_axis

    def selected_stat(self, cursor: NavigationCursor) -> Optional[str]:
        stats = self.metadata[cursor.group_index].available_stats
        if 0 <= cursor.stat_index < len(stats):
            return stats[cursor.stat_index]
        return None

    def chord_for(self, point: DataPoint, stat: Optional[str] = None) -> list[tuple[int, float]]:
        """(bin, pan) pairs played for a point; unplayable values are skipped."""
        axis = self.axis_for(point)
        pan = to_pan(axis_position(point.x, self.x_axis))
        return [
            (to_bin(value, axis.minimum, axis.maximum, self.config.bin_count, axis.type), pan)
            for value in tone_values(point, stat)
            if not is_unplayable(value, axis)
        ]

    def describe(self, point: DataPoint, stat: Optional[str] = None) -> str:
        return describe_point(
            point,
            format_wrapper(self.x_axis),
            format_wrapper(self.axis_for(point)),
            stat=stat,
            label_first=self.config.label_first,
        )

    def describe_all(self) -> list[tuple[str, list[str]]]:
        """Every point description, per present group."""
        return [
            (label, [self.describe(point) for point in group])
            for label, group in zip(self.series.labels, self.series.groups)
            if group is not None
        ]

    def _build_summary(self) -> str:
        groups = self.series.groups
        parts = [chart_summary(self.config.title, len(groups))]
        parts.append(axis_summary("x", self.x_axis))
        uses_y = any(
            isinstance(p, (SimplePoint, OHLCPoint, HighLowPoint, BoxPoint))
            for row in groups if row is not None for p in row
        )
        if uses_y:
            parts.append(axis_summary("y", self.y_axis))
        if self.y2_axis is not None:
            parts.append(axis_summary("y2", self.y2_axis))
        parts.append(instructions())
        return " ".join(parts)

    # -- input ---------------------------------------------------------

    def focus(self) -> str:
        """Focus acquired: announce the chart summary."""
        self.announcer.announce(self.summary)
        return self.summary

    def handle(self, command: Command) -> bool:
        """Process one navigation command. False when rejected."""
        return self._machine.handle(command)

    def handle_key(self, key: str, shift: bool = False, ctrl: bool = False) -> bool:
        """Translate and process a key press. Unbound keys are ignored."""
        command = command_for_key(key, shift=shift, ctrl=ctrl)
        if command is None:
            return False
        return self.handle(command)

    def close(self) -> None:
        """Stop autoplay and drop any pending description."""
        self._machine.stop()

    def __enter__(self) -> "Sonifier":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # -- NavigationListener --------------------------------------------

    def play(self, cursor: NavigationCursor) -> None:
        point = self.point_at(cursor.group_index, cursor.point_index)
        for bin_index, pan in self.chord_for(point, self.selected_stat(cursor)):
            self.tone_renderer.emit_tone(bin_index, pan, self.config.note_length)

        if point.callback is not None:
            point.callback()
        if self.config.on_point is not None:
            self.config.on_point(point, cursor.group_index, cursor.point_index)

    def speak(self, cursor: NavigationCursor, announce_group: bool) -> None:
        point = self.point_at(cursor.group_index, cursor.point_index)
        prefix = group_prefix(self.series.labels[cursor.group_index]) if announce_group else ""
        self.announcer.announce(prefix + self.describe(point, self.selected_stat(cursor)))

    def announce(self, text: str) -> None:
        self.announcer.announce(text)

    # -- offline rendering ---------------------------------------------

    def _synthesizer(self) -> ToneSynthesizer:
        return ToneSynthesizer(SynthConfig(pitch_table=self.config.pitch_table))

    def render_group(
        self,
        group_index: int = 0,
        synthesizer: Optional[ToneSynthesizer] = None,
        speed: Optional[int] = None,
    ) -> np.ndarray:
        """Render an autoplay pass over a group to stereo PCM.

        Args:
            group_index: Group to render
            synthesizer: Synth to render with (default: the engine's renderer
                if it is a ToneSynthesizer, else a new one)
            speed: Interval between points in ms (default: current speed)
        """
        if synthesizer is None:
            synthesizer = (
                self.tone_renderer if isinstance(self.tone_renderer, ToneSynthesizer)
                else self._synthesizer()
            )
        group: Sequence[DataPoint] = self.series.groups[group_index] or ()
        chords = [self.chord_for(point) for point in group]
        interval = (speed or self.speed) / 1000
        return synthesizer.render_sequence(chords, interval, self.config.note_length)
