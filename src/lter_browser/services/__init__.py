"""
Business logic services for the LTER station browser.

Services combine driver calls with the taxonomy and query building.
"""

from .resolver import MeasurementResolver
from .reconstructor import SeriesReconstructor
from .station_groups import StationGroups

__all__ = [
    "MeasurementResolver",
    "SeriesReconstructor",
    "StationGroups",
]
