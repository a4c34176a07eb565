"""
Date and timezone utilities.

Centralizes all date/time operations with proper timezone handling.
LTER stations record in UTC+1 while the backend stores and buckets in UTC.
"""

import logging
import re
from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple

import pytz
from pytz.tzinfo import BaseTzInfo

from . import constants

# Local time of the stations, UTC+1 without daylight saving
LOCAL_TZ = pytz.FixedOffset(constants.LOCAL_UTC_OFFSET_MINUTES)

_RFC3339_RE = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d+))?"
    r"(?P<tz>Z|z|[+-]\d{2}:\d{2})$"
)


class DateUtils:
    """Utilities for date and timezone handling."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize date utilities.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def parse_timezone(timezone_str: str) -> BaseTzInfo:
        """
        Parse timezone string to pytz timezone object.

        Args:
            timezone_str: Timezone string (e.g., 'Etc/GMT-1', 'UTC')

        Returns:
            pytz timezone object

        Raises:
            ValueError: If timezone is invalid
        """
        try:
            return pytz.timezone(timezone_str)
        except pytz.exceptions.UnknownTimeZoneError:
            raise ValueError(f"Invalid timezone: {timezone_str}")

    @staticmethod
    def local_day_start(day: date) -> datetime:
        """
        Get the first instant of a calendar day in station local time.

        Args:
            day: Calendar date in station local time

        Returns:
            Timezone-aware datetime in UTC
        """
        local = LOCAL_TZ.localize(datetime.combine(day, time.min))
        return local.astimezone(pytz.UTC)

    def query_time_range(self, start: date, end: date) -> Tuple[datetime, datetime]:
        """
        Get the UTC time range covering full local days from start to end.

        The backend stores UTC. The start is shifted back by one hour and the
        end is pinned to 22:59:59.999 UTC so that each local calendar day is
        captured completely once timestamps are read back at UTC+1.

        Args:
            start: First calendar day (station local time)
            end: Last calendar day (station local time)

        Returns:
            Tuple of (start_datetime, end_datetime), both UTC and aware

        Example:
            start=end=2022-01-10 returns
            (2022-01-09 23:00:00+00:00, 2022-01-10 22:59:59.999000+00:00)
        """
        start_dt = pytz.UTC.localize(datetime.combine(start, time.min)) - timedelta(hours=1)
        end_dt = pytz.UTC.localize(datetime.combine(end, time(22, 59, 59, 999000)))

        self.logger.debug(
            f"Query range for {start.isoformat()}..{end.isoformat()}: "
            f"{start_dt.isoformat()} to {end_dt.isoformat()}"
        )

        return start_dt, end_dt

    @staticmethod
    def parse_rfc3339(value: str) -> datetime:
        """
        Parse an RFC3339 timestamp as returned by the backend.

        Fractional seconds beyond microseconds are truncated.

        Args:
            value: Timestamp string (e.g., '2022-01-10T00:15:00+01:00')

        Returns:
            Timezone-aware datetime in UTC

        Raises:
            ValueError: If the string is not an RFC3339 timestamp
        """
        if not isinstance(value, str):
            raise ValueError(f"Timestamp must be a string, got {type(value).__name__}")

        match = _RFC3339_RE.match(value.strip())
        if not match:
            raise ValueError(f"Invalid RFC3339 timestamp: {value!r}")

        dt = datetime.strptime(match.group("base").replace(" ", "T"), "%Y-%m-%dT%H:%M:%S")

        frac = match.group("frac")
        if frac:
            dt = dt.replace(microsecond=int(frac[:6].ljust(6, "0")))

        tz = match.group("tz")
        if tz in ("Z", "z"):
            return pytz.UTC.localize(dt)

        sign = 1 if tz[0] == "+" else -1
        offset = sign * (int(tz[1:3]) * 60 + int(tz[4:6]))
        return pytz.FixedOffset(offset).localize(dt).astimezone(pytz.UTC)

    @staticmethod
    def format_rfc3339(dt: datetime) -> str:
        """
        Format a datetime as an RFC3339 UTC string for query literals.

        Trailing zeros of fractional seconds are dropped.

        Args:
            dt: Datetime object (naive values are taken as UTC)

        Returns:
            String such as '2022-01-10T22:59:59.999Z'
        """
        dt = DateUtils.to_utc(dt)
        text = dt.strftime("%Y-%m-%dT%H:%M:%S")
        if dt.microsecond:
            text += f".{dt.microsecond:06d}".rstrip("0")
        return text + "Z"

    @staticmethod
    def to_utc(dt: datetime) -> datetime:
        """
        Convert datetime to UTC.

        Args:
            dt: Datetime object (can be naive or aware)

        Returns:
            Datetime in UTC (timezone-aware)
        """
        if dt.tzinfo is None:
            # Assume UTC if no timezone
            return pytz.UTC.localize(dt)
        return dt.astimezone(pytz.UTC)
