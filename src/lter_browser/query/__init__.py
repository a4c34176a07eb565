"""
Query building for the InfluxDB backend.

Provides the compositional builder and the statements built for requests.
"""

from .builder import (
    AND,
    OR,
    Combinator,
    Condition,
    Eq,
    TimeRange,
    QueryBuilder,
    select,
    quote_literal,
    join_statements,
)
from .statements import StatementBuilder

__all__ = [
    "AND",
    "OR",
    "Combinator",
    "Condition",
    "Eq",
    "TimeRange",
    "QueryBuilder",
    "select",
    "quote_literal",
    "join_statements",
    "StatementBuilder",
]
