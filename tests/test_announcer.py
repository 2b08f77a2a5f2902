"""
Announcer Tests - Stream and logging announcers.
"""

import io
import logging

from chart_sonify.announcer import Announcer, LoggingAnnouncer, StreamAnnouncer


class TestStreamAnnouncer:
    """Tests for StreamAnnouncer."""

    def test_writes_lines(self):
        out = io.StringIO()
        announcer = StreamAnnouncer(out, prefix="> ")
        announcer.announce("Speed, 250")
        announcer.announce("1, 5")
        assert out.getvalue() == "> Speed, 250\n> 1, 5\n"

    def test_history_bounded(self):
        announcer = StreamAnnouncer(io.StringIO(), history_size=2)
        for text in ("a", "b", "c"):
            announcer.announce(text)
        assert [a.text for a in announcer.history] == ["b", "c"]

    def test_protocol(self):
        assert isinstance(StreamAnnouncer(io.StringIO()), Announcer)


class TestLoggingAnnouncer:
    """Tests for LoggingAnnouncer."""

    def test_logs_text(self, caplog):
        with caplog.at_level(logging.INFO, logger="chart_sonify.announcements"):
            LoggingAnnouncer().announce("Pears, 0, 3")
        assert "Pears, 0, 3" in caplog.text
