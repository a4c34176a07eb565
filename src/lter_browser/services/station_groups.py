"""
Per station group lookup.

Caches which groups a station has measurements for. The cache is shared by
all callers and guarded by a reader/writer lock.
"""

import logging
from typing import Dict, List, Optional, Protocol

from ..core import constants
from ..core.context import Context
from ..core.rwlock import RWLock
from ..models import QueryResponse
from ..query import quote_literal
from ..taxonomy import Group, groups_for_identifier


class QueryClient(Protocol):
    """Part of the driver the lookup needs."""

    def query(self, query: str, database: str, ctx: Optional[Context] = None) -> QueryResponse:
        ...


class StationGroups:
    """Cached lookup of the groups measured by a station."""

    def __init__(
        self,
        api_client: QueryClient,
        database: str,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize lookup.

        Args:
            api_client: Driver used on cache misses
            database: Database holding the measurements
            logger: Logger instance
        """
        self.api_client = api_client
        self.database = database
        self.logger = logger or logging.getLogger(__name__)

        self._lock = RWLock()
        self._cache: Dict[int, List[Group]] = {}

    def get(self, station_id: int, ctx: Optional[Context] = None) -> List[Group]:
        """
        Get the groups of a station.

        A hit returns the cached list. A miss asks the backend, stores the
        result and returns it. Concurrent misses for the same station may
        each ask the backend; the last one stored wins.

        Args:
            station_id: Station identifier
            ctx: Cancellation context

        Returns:
            Groups in group order
        """
        with self._lock.read_locked():
            groups = self._cache.get(station_id)
        if groups is not None:
            return list(groups)

        groups = self._fetch(station_id, ctx)

        with self._lock.write_locked():
            self._cache[station_id] = groups

        return list(groups)

    def invalidate(self, station_id: Optional[int] = None) -> None:
        """Drop one station, or all stations, from the cache."""
        with self._lock.write_locked():
            if station_id is None:
                self._cache.clear()
            else:
                self._cache.pop(station_id, None)

    def _fetch(self, station_id: int, ctx: Optional[Context]) -> List[Group]:
        query = (
            f"SHOW MEASUREMENTS WHERE {constants.STATION_TAG}="
            f"{quote_literal(station_id)}"
        )
        response = self.api_client.query(query, self.database, ctx=ctx)

        found = set()
        for name in response.values():
            if name is None:
                continue
            found.update(groups_for_identifier(str(name)))

        groups = sorted(found)
        self.logger.debug(f"Station {station_id} has groups {[g.label for g in groups]}")
        return groups
