"""
Data models for the LTER station browser.

Contains DTOs for requests, backend responses and reconstructed series.
"""

from .series import Point, Measurement, TimeSeries
from .request import Message, Stmt
from .response import QueryResponse, Result, RawSeries

__all__ = [
    "Point",
    "Measurement",
    "TimeSeries",
    "Message",
    "Stmt",
    "QueryResponse",
    "Result",
    "RawSeries",
]
