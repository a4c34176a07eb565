"""
API layer for the InfluxDB 1.x HTTP API.

Provides the driver the browser runs its statements through.
"""

import logging
from typing import Optional

from .client import APIClient
from .query import QueryAPI


class InfluxAPI(QueryAPI, APIClient):
    """
    Unified API client for InfluxDB.

    Combines the HTTP session handling with query operations.
    """

    def __init__(
        self,
        base_url: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: int = 30,
        max_retries: int = 0,
        verify_ssl: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize unified API client.

        Args:
            base_url: Base URL of the InfluxDB server
            username: Username for basic authentication
            password: Password for basic authentication
            timeout: Request timeout in seconds
            max_retries: Maximum number of HTTP retry attempts
            verify_ssl: Whether to verify SSL certificates
            logger: Logger instance
        """
        super().__init__(
            base_url=base_url,
            username=username,
            password=password,
            timeout=timeout,
            max_retries=max_retries,
            verify_ssl=verify_ssl,
            logger=logger
        )


__all__ = [
    "APIClient",
    "QueryAPI",
    "InfluxAPI",
]
