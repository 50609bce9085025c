# File: xchedule/core/time_resolver.py
"""
Time resolution module.
Parses event time text into timezone-aware datetimes and periods.
"""

import datetime
from typing import List, Optional, Pattern, Tuple

import pytz

from xchedule.core.config_manager import Config
from xchedule.exceptions import ParseError, ValidationError
from xchedule.models import TimeSpec
from xchedule.utils.logger import setup_logger

logger = setup_logger(__name__)


class TimeResolver:
    """Resolves instants, periods and timezones from config text."""

    def __init__(
        self,
        formats: Optional[List[Tuple[str, Pattern]]] = None,
        separator: str = Config.PERIOD_SEPARATOR,
    ):
        """
        Initialize time resolver.

        Args:
            formats: (strptime format, digit-width pattern) pairs tried in
                order (default: Config.TIME_FORMATS)
            separator: Text splitting the two sides of a period
        """
        self.formats = list(formats or Config.TIME_FORMATS)
        self.separator = separator

    @staticmethod
    def resolve_timezone(name: Optional[str]) -> Optional[datetime.tzinfo]:
        """
        Look up an IANA timezone.

        Returns None for an empty name, meaning process-local time.
        """
        if not name or not name.strip():
            return None
        try:
            return pytz.timezone(name.strip())
        except pytz.UnknownTimeZoneError as e:
            raise ParseError(f"Invalid timezone name: {name}") from e

    @staticmethod
    def localize(naive: datetime.datetime, tz: Optional[datetime.tzinfo]) -> datetime.datetime:
        """Attach a timezone to a wall-clock time."""
        if tz is None:
            return naive.astimezone()
        if hasattr(tz, "localize"):
            return tz.localize(naive)
        return naive.replace(tzinfo=tz)

    def parse_instant(self, text: str, tz: Optional[datetime.tzinfo] = None) -> datetime.datetime:
        """
        Parse one instant, trying every accepted format in order.

        Args:
            text: Time text such as '2016-01-20 10:00' or '2016/01/20 3:04PM'
            tz: Timezone of the wall-clock time (None for local time)

        Returns:
            Timezone-aware datetime
        """
        value = text.strip()
        for fmt, pattern in self.formats:
            if not pattern.match(value):
                continue
            try:
                naive = datetime.datetime.strptime(value, fmt)
            except ValueError:
                continue
            return self.localize(naive, tz)

        raise ParseError(f"Can't parse <{value}>, valid format {Config.TIME_FORMAT_HINT}")

    def resolve_period(self, text: str, tz: Optional[datetime.tzinfo] = None) -> TimeSpec:
        """
        Resolve 'time' text into an instant or a period.

        '<instant>' gives an instant, '<instant> ~ <instant>' a period.
        """
        parts = [part.strip() for part in text.split(self.separator)]
        logger.debug(f"Get period: {parts} (len: {len(parts)})")

        if len(parts) > 2 or (len(parts) == 1 and not parts[0]):
            raise ValidationError(
                f"Wrong time <{text}>, should be '<time>' or '<time> {self.separator} <time>'"
            )

        try:
            start = self.parse_instant(parts[0], tz)
        except ParseError as e:
            raise ParseError(f"Error while parsing start time: {e.message}") from e

        if len(parts) == 1:
            return TimeSpec(start=start)

        try:
            end = self.parse_instant(parts[1], tz)
        except ParseError as e:
            raise ParseError(f"Error while parsing end time: {e.message}") from e

        return TimeSpec(start=start, end=end, period=True)
