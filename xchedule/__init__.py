"""
Xchedule: builds typed event trees from YAML/JSON/TOML event configs.
"""

from xchedule.core.config_source import ConfigSource
from xchedule.core.event_builder import EventBuilder, build_event, build_event_from_file
from xchedule.exceptions import (
    XcheduleError, ValidationError, ParseError, ResolutionError,
    CyclicScheduleError, ConfigIOError
)
from xchedule.models import Event, TimeSpec, Member, Location, AlertSpec

__version__ = "0.1.0"

__all__ = [
    "ConfigSource",
    "EventBuilder",
    "build_event",
    "build_event_from_file",
    "XcheduleError",
    "ValidationError",
    "ParseError",
    "ResolutionError",
    "CyclicScheduleError",
    "ConfigIOError",
    "Event",
    "TimeSpec",
    "Member",
    "Location",
    "AlertSpec"
]
