"""
Time series data models.

Contains the reconstructed measurement series handed to consumers.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from ..core import constants


@dataclass
class Point:
    """Single measured point. A NaN value marks a missing sample."""

    timestamp: datetime
    value: float

    @property
    def is_missing(self) -> bool:
        return math.isnan(self.value)


@dataclass
class Measurement:
    """A single measurement of one station with metadata and points."""

    label: str
    station: str = ""
    aggregation: str = ""
    unit: str = ""
    landuse: str = ""
    elevation: int = constants.ELEVATION_UNKNOWN
    depth: int = constants.DEPTH_NONE
    latitude: float = constants.COORDINATE_UNKNOWN
    longitude: float = constants.COORDINATE_UNKNOWN
    points: List[Point] = field(default_factory=list)

    @property
    def name(self) -> str:
        """
        Label without the aggregation function.

        For measurements with a depth the zero padded depth in front of the
        aggregation is removed as well, e.g. "st_05_avg" -> "st".
        """
        if not self.aggregation:
            return self.label
        if self.depth > 0:
            return self.label.replace(f"_{self.depth:02d}_{self.aggregation}", "")
        return self.label.replace(f"_{self.aggregation}", "")

    def depth_to_string(self) -> str:
        """Depth as text, empty for measurements without depth."""
        if self.depth == constants.DEPTH_NONE:
            return ""
        return str(self.depth)

    @property
    def missing_count(self) -> int:
        return sum(1 for p in self.points if p.is_missing)


class TimeSeries(list):
    """Ordered collection of measurements answering one request."""
