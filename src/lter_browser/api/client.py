"""
Base API client for the InfluxDB 1.x HTTP API.

Handles HTTP requests, session management, and error handling.
"""

import logging
from typing import Dict, Optional

import requests  # type: ignore
from requests.adapters import HTTPAdapter  # type: ignore
from urllib3.util.retry import Retry  # type: ignore

from ..core.context import Context, check_context


class APIClient:
    """Base client for interacting with the InfluxDB HTTP API."""

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
        Initialize API client.

        Args:
            base_url: Base URL of the InfluxDB server
            username: Username for basic authentication
            password: Password for basic authentication
            timeout: Request timeout in seconds
            max_retries: Maximum number of HTTP retry attempts (0 disables)
            verify_ssl: Whether to verify SSL certificates
            logger: Logger instance
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)
        self.verify_ssl = verify_ssl

        if not verify_ssl:
            import urllib3
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

        self.session = requests.Session()
        if max_retries:
            retry_strategy = Retry(
                total=max_retries,
                backoff_factor=1,
                status_forcelist=[429, 502, 503, 504],
                allowed_methods=["GET"]
            )
            adapter = HTTPAdapter(max_retries=retry_strategy)
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

        if username:
            self.session.auth = (username, password or "")

        self.session.headers.update({"Accept": "application/json"})

    def _request_timeout(self, ctx: Optional[Context]) -> float:
        if ctx is None or ctx.remaining() is None:
            return self.timeout
        return min(self.timeout, ctx.remaining())

    def _make_request(
        self,
        method: str,
        endpoint: str,
        ctx: Optional[Context] = None,
        **kwargs
    ) -> requests.Response:
        """
        Make HTTP request to API.

        Args:
            method: HTTP method (GET, POST, ...)
            endpoint: API endpoint (without base URL)
            ctx: Cancellation context, checked before sending
            **kwargs: Additional arguments for requests

        Returns:
            Response object

        Raises:
            QueryCancelledError: If the context is done
            requests.exceptions.RequestException: On request failure
        """
        check_context(ctx)

        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        kwargs.setdefault("verify", self.verify_ssl)

        self.logger.debug(f"{method} {url}")

        try:
            response = self.session.request(
                method=method,
                url=url,
                timeout=self._request_timeout(ctx),
                **kwargs
            )
            response.raise_for_status()
            return response

        except requests.exceptions.RequestException as e:
            self.logger.error(f"API request failed: {method} {url} - {e}")
            raise

    def get(
        self,
        endpoint: str,
        params: Optional[Dict] = None,
        ctx: Optional[Context] = None
    ) -> requests.Response:
        """
        Make GET request.

        Args:
            endpoint: API endpoint
            params: Query parameters
            ctx: Cancellation context

        Returns:
            Response object
        """
        return self._make_request("GET", endpoint, ctx=ctx, params=params)

    def close(self) -> None:
        """Close the session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
