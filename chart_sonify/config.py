"""
Sonifier configuration.

Defines the construction-time options of the engine and loads chart
documents from JSON.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional, Sequence, Union

from chart_sonify.axes.axis import AxisOptions
from chart_sonify.axes.scale import PITCH_TABLE
from chart_sonify.errors import ConfigurationError

NOTE_LENGTH = 0.25
"""Audible duration of one note, in seconds."""

DEFAULT_SPEEDS: tuple[int, ...] = (1000, 250, 100, 50, 25)
"""Autoplay tick intervals in milliseconds. Index 0 is the slowest."""


@dataclass
class SonifierConfig:
    """Configuration for a Sonifier.

    Args:
        title: Chart title, used in the focus summary.
        axes: Overrides per axis name ("x", "y", "y2").
        speeds: Autoplay intervals in ms; SPEED_DOWN moves toward index 0.
        speed_index: Initial index into speeds.
        note_length: Tone duration in seconds; descriptions follow after it.
        pitch_table: Frequencies addressed by bin index.
        on_point: Called with (point, group_index, point_index) on each tone.
        label_first: Announce simple point labels before their values.

    Example:
        config = SonifierConfig(
            title="Rainfall",
            axes={"y": AxisOptions(label="mm", type="log10")},
            speeds=(1000, 500, 250),
        )
    """

    title: str = ""
    axes: dict[str, AxisOptions] = field(default_factory=dict)
    speeds: Sequence[int] = DEFAULT_SPEEDS
    speed_index: int = 1
    note_length: float = NOTE_LENGTH
    pitch_table: Sequence[float] = PITCH_TABLE
    on_point: Optional[Callable[..., None]] = None
    label_first: bool = False

    def __post_init__(self) -> None:
        """Validate configuration."""
        self.speeds = tuple(self.speeds)
        self.pitch_table = tuple(self.pitch_table)
        if not self.speeds:
            raise ConfigurationError("speeds must not be empty")
        if any(s <= 0 for s in self.speeds):
            raise ConfigurationError("speeds must be positive milliseconds")
        if not 0 <= self.speed_index < len(self.speeds):
            raise ConfigurationError(
                f"speed_index must be within 0-{len(self.speeds) - 1}, got {self.speed_index}"
            )
        if self.note_length <= 0:
            raise ConfigurationError("note_length must be > 0")
        if len(self.pitch_table) < 2:
            raise ConfigurationError("pitch_table needs at least 2 entries")
        unknown = set(self.axes) - {"x", "y", "y2"}
        if unknown:
            raise ConfigurationError(f"Unknown axes: {sorted(unknown)}")

    @property
    def bin_count(self) -> int:
        """Highest bin index, so that the axis maximum hits the last pitch."""
        return len(self.pitch_table) - 1

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SonifierConfig":
        """Build from a JSON-style mapping."""
        axes = {
            name: AxisOptions.from_dict(options)
            for name, options in (data.get("axes") or {}).items()
        }
        kwargs: dict[str, Any] = {"title": data.get("title", ""), "axes": axes}
        for key in ("speeds", "speed_index", "note_length", "label_first", "pitch_table"):
            if key in data:
                kwargs[key] = data[key]
        return cls(**kwargs)


@dataclass
class ChartDocument:
    """A chart loaded from disk: raw data plus configuration."""
    data: Any
    config: SonifierConfig


def load_chart(path: Union[str, Path]) -> ChartDocument:
    """Load a JSON chart document.

    Format:
        {"title": "...", "axes": {"x": {...}, "y": {...}}, "data": [...] | {...}}

    Raises:
        ConfigurationError: missing data or invalid options
        OSError: unreadable file
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            document = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"{path}: invalid JSON: {e}") from e

    if isinstance(document, list):
        document = {"data": document}
    if not isinstance(document, dict) or "data" not in document:
        raise ConfigurationError(f"{path}: chart document needs a 'data' field")

    return ChartDocument(data=document["data"], config=SonifierConfig.from_dict(document))
