"""
Data access facade.

The only entry point the rest of the application uses to get measurement
series and exportable query statements.
"""

import logging
from typing import List, Optional

from .core import constants
from .core.context import Context, check_context
from .core.date_utils import DateUtils
from .core.exceptions import DataNotFoundError
from .core.logger import LoggerContext
from .models import Message, Stmt, TimeSeries
from .query import StatementBuilder
from .services import MeasurementResolver, SeriesReconstructor, StationGroups
from .taxonomy import Group


class DataBrowser:
    """Answer measurement requests against an InfluxDB database."""

    def __init__(
        self,
        api_client,
        database: str,
        timezone: str = constants.DEFAULT_QUERY_TIMEZONE,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize browser.

        Args:
            api_client: Driver providing query() and show_measurements()
            database: Database holding the measurements
            timezone: Zone the backend labels returned timestamps in
            logger: Logger instance
        """
        self.api_client = api_client
        self.database = database
        self.logger = logger or logging.getLogger(__name__)

        self.resolver = MeasurementResolver(api_client, database, logger=self.logger)
        self.statements = StatementBuilder(timezone=timezone, logger=self.logger)
        self.reconstructor = SeriesReconstructor(logger=self.logger)
        self.station_groups = StationGroups(api_client, database, logger=self.logger)

    def series(self, message: Optional[Message], ctx: Optional[Context] = None) -> TimeSeries:
        """
        Get continuous series for a request.

        All measurements are fetched in a single batched query. Errors of
        the driver are passed on unchanged.

        Args:
            message: Request
            ctx: Cancellation context

        Returns:
            TimeSeries with one measurement per result group

        Raises:
            DataNotFoundError: If no request is given
        """
        if message is None:
            raise DataNotFoundError()

        check_context(ctx)

        measurements = self.resolver.resolve(message.groups, message.show_std, ctx=ctx)
        if not measurements:
            self.logger.info("No measurements found for the requested groups")
            return TimeSeries()

        query, args = self.statements.series_query(measurements, message)

        with LoggerContext(
            self.logger, "series query",
            measurements=len(measurements), statements=len(args)
        ) as op:
            response = self.api_client.query(query, self.database, ctx=ctx)
            op.record(series=sum(len(result.series) for result in response.results))

        start = DateUtils.local_day_start(message.start)
        return self.reconstructor.reconstruct(response, start)

    def query(self, message: Message, ctx: Optional[Context] = None) -> Stmt:
        """
        Get the combined statement for a request without running it.

        Only the catalog is read to resolve the measurement names.

        Args:
            message: Request
            ctx: Cancellation context

        Returns:
            Statement with query text and database

        Raises:
            DataNotFoundError: If no request is given or no measurement matches
        """
        if message is None:
            raise DataNotFoundError()

        measurements = self.resolver.resolve(message.groups, message.show_std, ctx=ctx)
        if not measurements:
            raise DataNotFoundError("no measurements found for the requested groups")

        query, _ = self.statements.export_query(measurements, message)
        return Stmt(query=query, database=self.database)

    def groups_by_station(self, station_id: int, ctx: Optional[Context] = None) -> List[Group]:
        """
        Get the groups a station has measurements for.

        Args:
            station_id: Station identifier
            ctx: Cancellation context

        Returns:
            Groups, served from cache after the first lookup
        """
        return self.station_groups.get(station_id, ctx=ctx)
