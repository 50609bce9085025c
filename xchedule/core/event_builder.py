# File: xchedule/core/event_builder.py
"""
Event tree builder.

Reads an event from a ConfigSource and recursively resolves its schedule.
Each schedule identifier is either a nested map in the same document
(inline) or a file in the workspace whose name starts with the identifier.
Inline definitions win over files.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from xchedule.core.config_discovery import ConfigDiscovery
from xchedule.core.config_manager import Config
from xchedule.core.config_source import ConfigSource
from xchedule.core.time_resolver import TimeResolver
from xchedule.exceptions import CyclicScheduleError, ValidationError, XcheduleError
from xchedule.models import (
    AlertSpec, Event, FileRef, InlineRef, Location, Member, ScheduleRef
)
from xchedule.utils.logger import setup_logger

logger = setup_logger(__name__)

ROOT_PATH = "<root>"

# (label, backing file or None) for each event on the path being built
Frame = Tuple[str, Optional[Path]]


@contextmanager
def field_path(path: str) -> Iterator[None]:
    """Tag errors raised inside the block with ``path`` unless already tagged."""
    try:
        yield
    except XcheduleError as e:
        if e.field_path is None:
            e.field_path = path
        raise


def source_file(source: ConfigSource) -> Optional[Path]:
    return source.path.resolve() if source.path is not None else None


def resolve_reference(source: ConfigSource, identifier: str) -> ScheduleRef:
    """Decide whether a schedule entry is defined inline or in a file."""
    raw = source.get_map(identifier)
    if raw:
        return InlineRef(identifier=identifier, document=raw)
    return FileRef(identifier=identifier)


class EventBuilder:
    """Builds typed Event trees from configuration documents."""

    def __init__(
        self,
        workspace: Union[str, Path, None] = None,
        time_resolver: Optional[TimeResolver] = None,
        discovery: Optional[ConfigDiscovery] = None,
    ):
        """
        Initialize the builder.

        Args:
            workspace: Directory searched for referenced event files
                (default: Config.WORKSPACE_DIR)
            time_resolver: Parser for time fields
            discovery: File lookup for schedule entries that aren't inline
        """
        self.workspace = Path(workspace) if workspace is not None else Config.WORKSPACE_DIR
        self.time_resolver = time_resolver or TimeResolver()
        self.discovery = discovery or ConfigDiscovery()

    def build_event(self, source: ConfigSource, is_root: bool = True) -> Event:
        """
        Build one event and its whole schedule tree.

        Raises:
            XcheduleError: On the first invalid or unresolvable field, tagged
                with the field path of the nested event it came from
        """
        path = source.path.stem if source.path is not None else ROOT_PATH

        event = self._build(source, is_root, path, ((path, source_file(source)),))
        if is_root:
            logger.info(f"Built event tree '{event.title}' with {sum(1 for _ in event.walk())} events")
        return event

    def _build(
        self,
        source: ConfigSource,
        is_root: bool,
        path: str,
        active: Tuple[Frame, ...],
    ) -> Event:
        title = self._get_title(source, path)

        with field_path(f"{path}.timezone"):
            tz = self.time_resolver.resolve_timezone(source.get_string("timezone"))

        with field_path(f"{path}.time"):
            time = self.time_resolver.resolve_period(source.get_string("time"), tz)

        with field_path(f"{path}.alerts.time"):
            alert = self._get_alert(source, tz)

        event = Event(
            title=title,
            time=time,
            locations=self._get_locations(source),
            members=self._get_members(source),
            schedule=self._get_schedule(source, path, active),
            alert=alert,
            notes=self._get_notes(source),
            is_root=is_root,
        )
        logger.debug(f"Built event {path}: {event!r}")
        return event

    # ==================== Fields ====================

    @staticmethod
    def _get_title(source: ConfigSource, path: str) -> str:
        title = source.get_string("title")
        if not title.strip():
            raise ValidationError("No title for event", field_path=f"{path}.title")
        return title

    @staticmethod
    def _get_locations(source: ConfigSource) -> List[Location]:
        # Reserved: 'locations' is accepted in documents but not read yet
        return []

    @staticmethod
    def _get_members(source: ConfigSource) -> List[Member]:
        return [Member(name=name) for name in source.get_string_list("members")]

    @staticmethod
    def _get_notes(source: ConfigSource) -> List[str]:
        return source.get_string_list("notes")

    def _get_alert(self, source: ConfigSource, tz) -> AlertSpec:
        raw_alerts = source.get_string_map_string_list("alerts")
        times = []
        for raw in raw_alerts.get("time", []):
            try:
                times.append(self.time_resolver.parse_instant(raw, tz))
            except XcheduleError as e:
                e.message = f"Error while parsing alert time: {e.message}"
                raise
        return AlertSpec(times=times)

    # ==================== Schedule ====================

    def _get_schedule(
        self,
        source: ConfigSource,
        path: str,
        active: Tuple[Frame, ...],
    ) -> List[Event]:
        labels = [label for label, _ in active]
        files = [file for _, file in active]

        events: List[Event] = []
        for identifier in source.get_string_list("schedule"):
            entry_path = f"{path}.schedule[{identifier}]"

            # The root frame is not a schedule entry; only its file can close a cycle
            if identifier in labels[1:]:
                start = labels.index(identifier, 1)
                raise CyclicScheduleError(tuple(labels[start:]) + (identifier,), field_path=entry_path)

            with field_path(entry_path):
                ref = resolve_reference(source, identifier)
                child_source = self._open_reference(source, ref)

            child_file = source_file(child_source) if isinstance(ref, FileRef) else None
            if child_file is not None and child_file in files:
                start = files.index(child_file)
                raise CyclicScheduleError(tuple(labels[start:]) + (identifier,), field_path=entry_path)

            events.append(
                self._build(child_source, False, entry_path, active + ((identifier, child_file),))
            )
        return events

    def _open_reference(self, source: ConfigSource, ref: ScheduleRef) -> ConfigSource:
        if isinstance(ref, InlineRef):
            logger.debug(f"Got inline event '{ref.identifier}': {ref.document}")
            return ConfigSource.from_mapping(
                ref.document, source.config_type, name=f"{source.name}:{ref.identifier}"
            )

        logger.debug(f"Looking up event '{ref.identifier}' in {self.workspace}")
        return self.discovery.find(ref.identifier, self.workspace)


def build_event(
    source: ConfigSource,
    is_root: bool = True,
    workspace: Union[str, Path, None] = None,
) -> Event:
    """Build an event tree with a default EventBuilder."""
    return EventBuilder(workspace=workspace).build_event(source, is_root)


def build_event_from_file(path: Union[str, Path], workspace: Union[str, Path, None] = None) -> Event:
    """Load a root event file and build its tree; the workspace defaults to the file's directory."""
    path = Path(path)
    source = ConfigSource.from_file(path)
    return build_event(source, True, workspace if workspace is not None else path.parent)
