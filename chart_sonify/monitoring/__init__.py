"""
Monitoring - Structured event logging.

Components:
    StructuredLogger   - JSON or human-readable chart events
    ChartEvent         - One emitted event
    configure_logging  - Build the CLI logger and set the package log level

Example:
    from chart_sonify.monitoring import configure_logging

    log = configure_logging("debug")
    log.chart_loaded("sales.json", groups=2, points=40)
"""

from chart_sonify.monitoring.logging import (
    ChartEvent,
    LogLevel,
    StructuredLogger,
    configure_logging,
)

__all__ = [
    "ChartEvent",
    "LogLevel",
    "StructuredLogger",
    "configure_logging",
]
