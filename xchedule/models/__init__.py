from .event import Event, TimeSpec, Member, Location, AlertSpec
from .schedule_ref import InlineRef, FileRef, ScheduleRef

__all__ = [
    "Event",
    "TimeSpec",
    "Member",
    "Location",
    "AlertSpec",
    "InlineRef",
    "FileRef",
    "ScheduleRef"
]
