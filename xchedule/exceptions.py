# File: xchedule/exceptions.py
"""
Error types raised while building an event tree.

Every error carries the field path of the offending value
(e.g. ``trip.schedule[day1].time``) once it is known.
"""

from typing import Optional, Sequence


class XcheduleError(Exception):
    """Base class for all event configuration errors."""

    def __init__(self, message: str, field_path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field_path = field_path

    def __str__(self) -> str:
        if self.field_path:
            return f"{self.field_path}: {self.message}"
        return self.message


class ValidationError(XcheduleError):
    """Raised when a required field is missing/empty or a period is malformed."""

    pass


class ParseError(XcheduleError):
    """Raised when a time, timezone or document cannot be parsed."""

    pass


class ResolutionError(XcheduleError):
    """Raised when a schedule entry is neither inline nor a discoverable file."""

    pass


class CyclicScheduleError(ResolutionError):
    """Raised when a schedule entry references an event already being resolved."""

    def __init__(self, cycle: Sequence[str], field_path: Optional[str] = None):
        self.cycle = tuple(cycle)
        super().__init__(
            f"Cyclic schedule reference: {' -> '.join(self.cycle)}",
            field_path=field_path,
        )


class ConfigIOError(XcheduleError, OSError):
    """Raised when the workspace or a referenced config file can't be read."""

    pass
