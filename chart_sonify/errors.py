"""
Sonification Errors - Domain-specific error types.

Error hierarchy:
    SonificationError (base)
    ├── ConfigurationError (construction time, also a ValueError)
    │   ├── InvalidAxisError
    │   └── EmptyDataError
    ├── MalformedPointError
    └── InvalidTransitionError

Nothing raised during normal navigation: out-of-range movement and
speed changes are clamped, malformed points contribute no axis values.
"""

from __future__ import annotations

from typing import Any


class SonificationError(Exception):
    """Base error for all sonification errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(SonificationError, ValueError):
    """
    Raised when the engine cannot be built from the supplied data/config.

    Only construction-time invariant violations end up here.
    """


class InvalidAxisError(ConfigurationError):
    """
    Raised for an axis whose bounds violate the axis invariants.

    Examples:
    - log10 axis with minimum <= 0
    - minimum > maximum
    """

    def __init__(
        self,
        axis: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(f"Axis '{axis}': {message}", details)
        self.axis = axis


class EmptyDataError(ConfigurationError):
    """Raised when no group contains a navigable point."""

    def __init__(self, message: str = "No data to sonify", details: dict[str, Any] | None = None):
        super().__init__(message, details)


class MalformedPointError(SonificationError):
    """Raised by strict conversion of a record matching no point shape."""

    def __init__(
        self,
        record: Any,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        msg = message or f"Record matches no known point shape: {record!r}"
        super().__init__(msg, details)
        self.record = record


class InvalidTransitionError(SonificationError):
    """
    Raised for a navigation state transition outside the transition table.

    Indicates a bug in the state machine, never bad user input.
    """

    def __init__(
        self,
        from_state: str,
        to_state: str,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        msg = message or f"Invalid transition: {from_state} → {to_state}"
        super().__init__(msg, details)
        self.from_state = from_state
        self.to_state = to_state
