# File: xchedule/models/event.py
"""
Data models for Xchedule events.
Typed dataclasses built from event configuration documents.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, List, Optional


@dataclass(frozen=True)
class TimeSpec:
    """A single instant, or a period when ``period`` is set."""
    start: datetime
    end: Optional[datetime] = None
    period: bool = False

    def __post_init__(self):
        """Validate that a period has an end and an instant has none."""
        if self.period and self.end is None:
            raise ValueError("A period needs an end time")
        if not self.period and self.end is not None:
            raise ValueError("An instant can't have an end time")

    def duration_minutes(self) -> int:
        """Calculate period duration in minutes (0 for an instant)."""
        if not self.period:
            return 0
        return int((self.end - self.start).total_seconds() / 60)


@dataclass(frozen=True)
class Member:
    """Someone who attends an event."""
    name: str


@dataclass(frozen=True)
class Location:
    """Where an event takes place. Not read from config yet."""
    name: str = ""
    address: str = ""
    lat_lng: str = ""
    map_url: str = ""


@dataclass(frozen=True)
class AlertSpec:
    """Reminder times for an event, in configured order."""
    times: List[datetime] = field(default_factory=list)


@dataclass(frozen=True)
class Event:
    """A titled, timed node in a schedule tree."""
    title: str
    time: TimeSpec
    locations: List[Location] = field(default_factory=list)
    members: List[Member] = field(default_factory=list)
    schedule: List['Event'] = field(default_factory=list)
    alert: AlertSpec = field(default_factory=AlertSpec)
    notes: List[str] = field(default_factory=list)
    is_root: bool = False

    def __post_init__(self):
        """Validate event data."""
        if not self.title:
            raise ValueError("Event title can't be empty")

    def walk(self) -> Iterator['Event']:
        """Yield this event and all descendants, depth-first pre-order."""
        yield self
        for child in self.schedule:
            yield from child.walk()

    def __repr__(self) -> str:
        return (
            f"Event(title={self.title!r}, start={self.time.start.isoformat()}, "
            f"children={len(self.schedule)}, is_root={self.is_root})"
        )
