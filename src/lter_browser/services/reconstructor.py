"""
Series reconstruction service.

Turns the raw rows of a per-measurement batch into continuous series.

The backend only returns rows where data exists. Every measurement is
rebuilt on a fixed 15 minute grid starting at the request start: missing
samples in front of each returned row are filled with NaN points. Nothing
is filled after the last returned row.

Row layout (fixed positions):
    time, value, elevation, latitude, longitude, depth
"""

import logging
import math
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core import constants
from ..core.date_utils import DateUtils
from ..models import Measurement, Point, QueryResponse, RawSeries, TimeSeries

TIME, VALUE, ELEVATION, LATITUDE, LONGITUDE, DEPTH = range(6)


def to_float(cell: Any) -> float:
    """
    Coerce a numeric cell to float.

    Raises:
        ValueError: If the cell is missing or not numeric
    """
    if cell is None or isinstance(cell, bool):
        raise ValueError(f"not a number: {cell!r}")
    try:
        value = float(cell)
    except (TypeError, ValueError) as e:
        raise ValueError(f"not a number: {cell!r}") from e
    if math.isnan(value) or math.isinf(value):
        raise ValueError(f"not a finite number: {cell!r}")
    return value


def to_int(cell: Any) -> int:
    """
    Coerce a numeric cell to int. Fractional values are rejected.

    Raises:
        ValueError: If the cell is missing, not numeric or not integral
    """
    if cell is None or isinstance(cell, bool):
        raise ValueError(f"not an integer: {cell!r}")
    try:
        value = Decimal(str(cell))
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"not an integer: {cell!r}") from e
    if not value.is_finite() or value != value.to_integral_value():
        raise ValueError(f"not an integer: {cell!r}")
    return int(value)


def _cell(row, index: int) -> Any:
    return row[index] if index < len(row) else None


class SeriesReconstructor:
    """Rebuild continuous measurement series from raw result rows."""

    def __init__(
        self,
        interval: timedelta = constants.DEFAULT_COLLECTION_INTERVAL,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize reconstructor.

        Args:
            interval: Sampling interval of the stations
            logger: Logger instance
        """
        self.interval = interval
        self.logger = logger or logging.getLogger(__name__)

    def reconstruct(self, response: QueryResponse, start: datetime) -> TimeSeries:
        """
        Build a TimeSeries from a query response.

        Args:
            response: Response of the per-measurement batch
            start: Request start instant (timezone-aware)

        Returns:
            One measurement per result group, in response order
        """
        ts = TimeSeries()
        start = DateUtils.to_utc(start)

        for result in response.results:
            for serie in result.series:
                ts.append(self.reconstruct_series(serie, start))

        return ts

    def reconstruct_series(self, serie: RawSeries, start: datetime) -> Measurement:
        """
        Build one measurement from a single result group.

        Args:
            serie: Raw result group, rows in ascending time order
            start: Request start instant (timezone-aware)

        Returns:
            Measurement with a gap free point list
        """
        measurement = Measurement(
            label=serie.name,
            station=serie.tags.get("station", ""),
            landuse=serie.tags.get("landuse", ""),
            aggregation=serie.tags.get("aggr", ""),
            unit=serie.tags.get("unit", ""),
        )

        cursor = DateUtils.to_utc(start)
        metadata_set = False

        for row in serie.values:
            try:
                timestamp = DateUtils.parse_rfc3339(_cell(row, TIME))
            except ValueError as e:
                self.logger.warning(f"{serie.name}: cannot convert timestamp: {e}. skipping.")
                continue

            if timestamp < cursor:
                self.logger.warning(
                    f"{serie.name}: row at {timestamp.isoformat()} is before "
                    f"{cursor.isoformat()}. skipping."
                )
                continue

            # Fill missing samples up to this row
            while timestamp > cursor:
                measurement.points.append(Point(timestamp=cursor, value=math.nan))
                cursor += self.interval

            try:
                value = to_float(_cell(row, VALUE))
            except ValueError as e:
                self.logger.warning(f"{serie.name}: cannot convert value: {e}. skipping.")
                continue

            if not metadata_set:
                self._set_metadata(measurement, row)
                metadata_set = True

            measurement.depth = self._parse_depth(_cell(row, DEPTH))

            measurement.points.append(Point(timestamp=timestamp, value=value))
            cursor = timestamp + self.interval

        return measurement

    @staticmethod
    def _set_metadata(measurement: Measurement, row) -> None:
        try:
            measurement.elevation = to_int(_cell(row, ELEVATION))
        except ValueError:
            measurement.elevation = constants.ELEVATION_UNKNOWN

        try:
            measurement.latitude = to_float(_cell(row, LATITUDE))
        except ValueError:
            measurement.latitude = constants.COORDINATE_UNKNOWN

        try:
            measurement.longitude = to_float(_cell(row, LONGITUDE))
        except ValueError:
            measurement.longitude = constants.COORDINATE_UNKNOWN

    @staticmethod
    def _parse_depth(cell: Any) -> int:
        if cell is None:
            return constants.DEPTH_NONE
        try:
            return to_int(cell)
        except ValueError:
            return constants.DEPTH_PARSE_ERROR
