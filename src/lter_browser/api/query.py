"""
Query operations for the InfluxDB HTTP API.

Runs InfluxQL statements and decodes their results.
"""

import json
import logging
from decimal import Decimal
from typing import Callable, List, Optional

import requests  # type: ignore

from ..core.context import Context
from ..core.exceptions import BackendError
from ..models import QueryResponse


class QueryAPI:
    """Query-related API operations."""

    # Type hints for attributes provided by APIClient base class
    logger: logging.Logger
    get: Callable[..., requests.Response]

    def query(
        self,
        query: str,
        database: str,
        ctx: Optional[Context] = None
    ) -> QueryResponse:
        """
        Execute one or more InfluxQL statements.

        Numbers are decoded as Decimal so callers coerce them explicitly;
        JSON null stays None.

        Args:
            query: Query text, statements separated by ";"
            database: Target database
            ctx: Cancellation context

        Returns:
            Decoded response

        Raises:
            BackendError: If the backend reports an error or the body is not
                a JSON object of the expected shape
            requests.exceptions.RequestException: On transport failure
        """
        self.logger.debug(f"Query on {database}: {query}")

        try:
            response = self.get("/query", params={"q": query, "db": database}, ctx=ctx)
        except requests.exceptions.HTTPError as e:
            # Influx returns the error payload with 4xx statuses
            message = _error_from_body(e.response)
            if message is None:
                raise
            raise BackendError(message, query=query) from e

        try:
            body = json.loads(response.text, parse_float=Decimal, parse_int=Decimal)
        except ValueError as e:
            raise BackendError(f"invalid response body: {e}", query=query) from e

        if not isinstance(body, dict):
            raise BackendError(
                f"invalid response body: expected an object, got {type(body).__name__}",
                query=query
            )

        # Nested results/series entries of the wrong shape
        try:
            result = QueryResponse.from_dict(body)
        except (AttributeError, TypeError) as e:
            raise BackendError(f"invalid response body: {e}", query=query) from e

        error = result.error_message()
        if error:
            raise BackendError(error, query=query)

        return result

    def show_measurements(
        self,
        pattern: str,
        database: str,
        ctx: Optional[Context] = None
    ) -> List[str]:
        """
        List measurement names matching a regular expression.

        Args:
            pattern: Regular expression (without delimiters)
            database: Target database
            ctx: Cancellation context

        Returns:
            Measurement names
        """
        escaped = pattern.replace("/", "\\/")
        response = self.query(
            f"SHOW MEASUREMENTS WITH MEASUREMENT =~ /{escaped}/", database, ctx=ctx
        )
        return [str(value) for value in response.values() if value is not None]


def _error_from_body(response: Optional[requests.Response]) -> Optional[str]:
    if response is None:
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("error")
    return None
