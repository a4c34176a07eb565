"""
Measurement resolution service.

Finds the raw measurement names in the backend catalog that belong to the
requested groups.
"""

import logging
from typing import Iterable, List, Optional, Protocol

import requests  # type: ignore

from ..core import constants
from ..core.context import Context, check_context
from ..core.exceptions import BackendError
from ..taxonomy import compiled_pattern, group_pattern


class CatalogClient(Protocol):
    """Part of the driver the resolver needs."""

    def show_measurements(
        self, pattern: str, database: str, ctx: Optional[Context] = None
    ) -> List[str]:
        ...


class MeasurementResolver:
    """Resolve groups to raw measurement names."""

    def __init__(
        self,
        api_client: CatalogClient,
        database: str,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize resolver.

        Args:
            api_client: Driver with catalog access
            database: Database holding the measurements
            logger: Logger instance
        """
        self.api_client = api_client
        self.database = database
        self.logger = logger or logging.getLogger(__name__)

    def resolve(
        self,
        groups: Iterable,
        include_std: bool = False,
        ctx: Optional[Context] = None
    ) -> List[str]:
        """
        Get the unique measurement names of the given groups.

        Resolution is best effort: when the catalog lookup of one group
        fails, the error is logged and the remaining groups are still
        resolved. Cancellation is not swallowed.

        Args:
            groups: Requested groups
            include_std: Keep standard deviation measurements
            ctx: Cancellation context

        Returns:
            Measurement names in order of first appearance
        """
        measurements: List[str] = []

        for group in groups:
            pattern = group_pattern(group)
            if pattern is None:
                continue

            check_context(ctx)

            try:
                names = self.api_client.show_measurements(pattern, self.database, ctx=ctx)
            except (requests.exceptions.RequestException, BackendError) as e:
                self.logger.error(f"Catalog lookup for group {group!r} failed, skipping: {e}")
                continue

            compiled = compiled_pattern(group)
            for name in names:
                if not compiled.search(name):
                    continue
                if name.endswith(constants.STD_SUFFIX) and not include_std:
                    continue
                if name not in measurements:
                    measurements.append(name)

        self.logger.debug(f"Resolved {len(measurements)} measurements: {measurements}")
        return measurements
