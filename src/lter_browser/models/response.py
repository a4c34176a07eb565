"""
Backend response data models.

Mirrors the JSON body of the InfluxDB 1.x /query endpoint:

    {"results": [{"statement_id": 0,
                  "series": [{"name": "air_t_avg",
                              "tags": {"station": "s1", ...},
                              "columns": ["time", "air_t_avg", ...],
                              "values": [["2022-01-10T00:00:00+01:00", 1.5, ...]]}]}]}
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class RawSeries:
    """One result group: a measurement and a combination of tag values."""

    name: str
    tags: Dict[str, str] = field(default_factory=dict)
    columns: List[str] = field(default_factory=list)
    values: List[List[Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RawSeries":
        return cls(
            name=data.get("name", ""),
            tags=dict(data.get("tags") or {}),
            columns=list(data.get("columns") or []),
            values=[list(row) for row in data.get("values") or []],
        )


@dataclass
class Result:
    """Result of one statement in a batch."""

    statement_id: int = 0
    series: List[RawSeries] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Result":
        return cls(
            statement_id=data.get("statement_id", 0),
            series=[RawSeries.from_dict(s) for s in data.get("series") or []],
            error=data.get("error"),
        )


@dataclass
class QueryResponse:
    """Full response of a query request."""

    results: List[Result] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QueryResponse":
        return cls(
            results=[Result.from_dict(r) for r in data.get("results") or []],
            error=data.get("error"),
        )

    def error_message(self) -> Optional[str]:
        """First error reported by the backend, None if all statements succeeded."""
        if self.error:
            return self.error
        for result in self.results:
            if result.error:
                return result.error
        return None

    def values(self) -> List[Any]:
        """All cells of all rows, flattened. Used for catalog listings."""
        return [
            cell
            for result in self.results
            for serie in result.series
            for row in serie.values
            for cell in row
        ]
