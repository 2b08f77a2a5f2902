"""
Announcers - Where composed text goes on its way to assistive technology.

The engine only ever calls announce(text). How the text reaches a
screen reader (live region, speech API, terminal) is the announcer's
business.
"""

from __future__ import annotations

import logging
import sys
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Optional, Protocol, TextIO, runtime_checkable


@dataclass
class Announcement:
    """A delivered announcement.

    Attributes:
        text: The text announced
        timestamp: When it was announced (time.time())
    """
    text: str
    timestamp: float = field(default_factory=time.time)


@runtime_checkable
class Announcer(Protocol):
    """Protocol for accessibility announcers."""

    def announce(self, text: str) -> None:
        """Deliver text to the user."""
        ...


class StreamAnnouncer:
    """Write announcements to a text stream, one per line.

    Example:
        announcer = StreamAnnouncer(prefix="> ")
        announcer.announce("Speed, 250")   # prints "> Speed, 250"
    """

    def __init__(
        self,
        output: Optional[TextIO] = None,
        prefix: str = "",
        history_size: int = 100,
    ) -> None:
        self._output = output or sys.stdout
        self._prefix = prefix
        self.history: deque[Announcement] = deque(maxlen=history_size)

    def announce(self, text: str) -> None:
        self.history.append(Announcement(text))
        print(f"{self._prefix}{text}", file=self._output, flush=True)


class LoggingAnnouncer:
    """Send announcements to a logger, for headless hosts."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO) -> None:
        self._logger = logger or logging.getLogger("chart_sonify.announcements")
        self._level = level

    def announce(self, text: str) -> None:
        self._logger.log(self._level, "%s", text)
