"""
Statements for measurement data.

Two shapes are built from a request: a batch with one statement per
measurement, executed to fetch data, and a single combined statement that
is handed out as text for users to run themselves.
"""

import logging
from typing import Any, List, Optional, Sequence, Tuple

from .builder import AND, OR, Eq, TimeRange, select, join_statements
from ..core import constants
from ..core.date_utils import DateUtils
from ..models import Message


class StatementBuilder:
    """Build InfluxQL statements for a request."""

    def __init__(
        self,
        timezone: str = constants.DEFAULT_QUERY_TIMEZONE,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize statement builder.

        Args:
            timezone: Zone the backend labels returned timestamps in
            logger: Logger instance
        """
        self.timezone = timezone
        self.logger = logger or logging.getLogger(__name__)
        self.date_utils = DateUtils(self.logger)

    def _filters(self, message: Message) -> list:
        start, end = self.date_utils.query_time_range(message.start, message.end)

        filters = [Eq(OR, constants.STATION_TAG, *message.stations)]
        if message.landuse:
            filters += [AND, Eq(OR, "landuse", *message.landuse)]
        filters += [AND, TimeRange(start, end)]
        return filters

    def series_query(
        self,
        measurements: Sequence[str],
        message: Message
    ) -> Tuple[str, List[List[Any]]]:
        """
        Build one statement per measurement, joined into a single batch.

        Args:
            measurements: Raw measurement names
            message: Request

        Returns:
            Tuple of (batch text, arguments of each statement)
        """
        statements = []
        args: List[List[Any]] = []
        filters = self._filters(message)

        for measure in measurements:
            text, arg = (
                select(measure, *constants.METADATA_COLUMNS)
                .from_(measure)
                .where(*filters)
                .group_by(*constants.SERIES_GROUP_BY)
                .order_by("time").asc().tz(self.timezone)
                .query()
            )
            statements.append(text)
            args.append(arg)

        return join_statements(statements), args

    def export_query(
        self,
        measurements: Sequence[str],
        message: Message
    ) -> Tuple[str, List[Any]]:
        """
        Build a single statement selecting all measurements as columns.

        Args:
            measurements: Raw measurement names
            message: Request

        Returns:
            Tuple of (statement text, arguments)

        Raises:
            ValueError: If no measurements are given
        """
        columns = [
            "station",
            "landuse",
            constants.ELEVATION_COLUMN,
            "latitude",
            "longitude",
            *measurements,
        ]

        return (
            select(*columns)
            .from_(*measurements)
            .where(*self._filters(message))
            .order_by("time").asc().tz(self.timezone)
            .query()
        )
