"""
Request data models.

Contains the request handed to the browser and the statement it returns.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Sequence, Tuple

from ..taxonomy import Group, parse_groups

DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class Message:
    """
    Request for measurement data.

    Dates are calendar days in station local time (UTC+1), both inclusive.
    """

    groups: Tuple[Group, ...]
    stations: Tuple[str, ...]
    start: date
    end: date
    landuse: Tuple[str, ...] = field(default_factory=tuple)
    show_std: bool = False

    def __post_init__(self):
        # Accept any sequence or a single value but keep the message hashable
        object.__setattr__(self, "groups", _as_tuple(self.groups))
        object.__setattr__(self, "stations", tuple(str(s) for s in _as_tuple(self.stations)))
        object.__setattr__(self, "landuse", tuple(str(value) for value in _as_tuple(self.landuse)))

    @classmethod
    def parse(
        cls,
        measurements: Optional[Sequence[str]],
        stations: Optional[Sequence[str]],
        start: str,
        end: str,
        landuse: Optional[Sequence[str]] = None,
        show_std: bool = False,
        today: Optional[date] = None
    ) -> "Message":
        """
        Build a message from wire values.

        Args:
            measurements: Group identifiers, e.g. ["0", "9"]
            stations: Station identifiers
            start: Start date (YYYY-MM-DD)
            end: End date (YYYY-MM-DD)
            landuse: Optional land use filter
            show_std: Include standard deviation measurements
            today: Reference date for the future check (defaults to today)

        Returns:
            Message

        Raises:
            ValueError: If dates cannot be parsed or required values are missing
        """
        try:
            start_date = datetime.strptime(start or "", DATE_FORMAT).date()
        except ValueError as e:
            raise ValueError(f"could not parse start date: {e}")

        try:
            end_date = datetime.strptime(end or "", DATE_FORMAT).date()
        except ValueError as e:
            raise ValueError(f"could not parse end date: {e}")

        if end_date > (today or date.today()):
            raise ValueError("end date is in the future")

        if start_date > end_date:
            raise ValueError("start date is after end date")

        if not measurements:
            raise ValueError("at least one measurement must be given")

        if not stations:
            raise ValueError("at least one station must be given")

        return cls(
            groups=tuple(parse_groups(*_as_tuple(measurements))),
            stations=stations,
            start=start_date,
            end=end_date,
            landuse=landuse,
            show_std=show_std,
        )


def _as_tuple(value) -> tuple:
    if value is None:
        return ()
    if isinstance(value, (str, int)):
        return (value,)
    return tuple(value)


@dataclass(frozen=True)
class Stmt:
    """Query text together with the database it runs against."""

    query: str
    database: str
