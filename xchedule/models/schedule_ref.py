# File: xchedule/models/schedule_ref.py

from dataclasses import dataclass, field
from typing import Any, Dict, Union


@dataclass(frozen=True)
class InlineRef:
    """Schedule entry defined as a nested map in the parent document."""
    identifier: str
    document: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FileRef:
    """Schedule entry to be looked up as a file in the workspace."""
    identifier: str


ScheduleRef = Union[InlineRef, FileRef]
