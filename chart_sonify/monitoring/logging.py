"""
Structured logging for chart-sonify.

The CLI reports what it did as events: a chart was loaded, a key was
handled, a group was rendered, something failed. Each event is one line
on stderr, either JSON (for tooling) or a short human-readable form.
Library modules keep using the standard logging hierarchy under
"chart_sonify"; configure_logging sets both thresholds at once.
"""

from __future__ import annotations

import json
import logging
import sys
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TextIO


class LogLevel(Enum):
    """Log levels."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def numeric(self) -> int:
        """Matching standard logging level."""
        return getattr(logging, self.name)


@dataclass
class ChartEvent:
    """One emitted event: name, level, message and structured fields."""

    level: LogLevel
    event: str
    message: str = ""
    fields: dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)

    def to_json(self) -> str:
        return json.dumps(
            {
                "timestamp": self.timestamp,
                "level": self.level.value,
                "event": self.event,
                "message": self.message,
                **self.fields,
            },
            default=str,
        )

    def to_text(self) -> str:
        clock = time.strftime("%H:%M:%S", time.localtime(self.timestamp))
        text = f"{clock} {self.level.name:<7} {self.event}"
        if self.message:
            text += f": {self.message}"
        if self.fields:
            text += " (" + " ".join(f"{k}={v}" for k, v in self.fields.items()) + ")"
        return text


class StructuredLogger:
    """Chart event log with JSON or human-readable output.

    Example:
        log = StructuredLogger(json_format=False)
        log.chart_loaded("rainfall.json", groups=2, points=24)
        log.command_handled("step_right", accepted=True, group=0, point=3)
    """

    def __init__(
        self,
        level: LogLevel = LogLevel.INFO,
        output: TextIO | None = None,
        json_format: bool = True,
    ):
        self._level = level
        self._output = output or sys.stderr
        self._json_format = json_format
        self._lock = threading.Lock()

    @property
    def level(self) -> LogLevel:
        return self._level

    def _log(self, level: LogLevel, event: str, message: str = "", **fields: Any) -> None:
        if level.numeric < self._level.numeric:
            return
        record = ChartEvent(level, event, message, fields)
        line = record.to_json() if self._json_format else record.to_text()
        with self._lock:
            print(line, file=self._output)

    def debug(self, event: str, message: str = "", **fields: Any) -> None:
        self._log(LogLevel.DEBUG, event, message, **fields)

    def info(self, event: str, message: str = "", **fields: Any) -> None:
        self._log(LogLevel.INFO, event, message, **fields)

    def warning(self, event: str, message: str = "", **fields: Any) -> None:
        self._log(LogLevel.WARNING, event, message, **fields)

    def error(self, event: str, message: str = "", **fields: Any) -> None:
        self._log(LogLevel.ERROR, event, message, **fields)

    # Chart events

    def chart_loaded(self, path: str, groups: int, points: int) -> None:
        self.info(
            "chart_loaded",
            f"Loaded {points} points in {groups} groups",
            path=path,
            groups=groups,
            points=points,
        )

    def command_handled(self, command: str, accepted: bool, **position: Any) -> None:
        self.debug("command_handled", command=command, accepted=accepted, **position)

    def group_rendered(self, group_index: int, samples: int, sample_rate: int) -> None:
        self.info(
            "group_rendered",
            f"Rendered {samples / sample_rate:.2f}s of audio",
            group_index=group_index,
            samples=samples,
            sample_rate=sample_rate,
        )

    def sonification_error(self, error: Exception) -> None:
        self.error(
            "sonification_error",
            str(error),
            error_type=type(error).__name__,
            **getattr(error, "details", {}),
        )


def configure_logging(
    level: LogLevel | str = LogLevel.WARNING,
    output: TextIO | None = None,
    json_format: bool = False,
) -> StructuredLogger:
    """Create the CLI event logger and align the "chart_sonify" logger level.

    Args:
        level: Minimum level, as a LogLevel or its name
        output: Output stream (default: stderr)
        json_format: JSON lines instead of human-readable text

    Returns:
        The event logger
    """
    if isinstance(level, str):
        level = LogLevel(level.lower())
    logging.getLogger("chart_sonify").setLevel(level.numeric)
    return StructuredLogger(level=level, output=output, json_format=json_format)
