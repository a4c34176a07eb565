"""
Compositional InfluxQL query builder.

Assembles SELECT / FROM / WHERE / GROUP BY / ORDER BY clauses into query
text plus the list of literal arguments that went into it.

Example:
    text, args = (
        select("air_t_avg", "latitude")
        .from_("air_t_avg")
        .where(Eq(OR, "snipeit_location_ref", "1", "2"), AND, TimeRange(start, end))
        .order_by("time").asc().tz("Etc/GMT-1")
        .query()
    )
"""

from datetime import datetime
from typing import Any, List, Optional, Sequence, Tuple, Union

from ..core.date_utils import DateUtils


class Combinator:
    """Logical operator joining condition fragments."""

    def __init__(self, keyword: str):
        self.keyword = keyword

    def __repr__(self) -> str:
        return f"Combinator({self.keyword})"


AND = Combinator("AND")
OR = Combinator("OR")


def quote_literal(value: Any) -> str:
    """Render a value as a single quoted InfluxQL string literal."""
    text = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{text}'"


class Condition:
    """A WHERE fragment. Renders to text and its literal arguments."""

    def render(self) -> Tuple[str, List[Any]]:
        raise NotImplementedError


class Eq(Condition):
    """
    Field equals any of the given values.

    With several values the comparisons are joined by the combinator and
    wrapped in parentheses. Without values the condition renders empty.
    """

    def __init__(self, combinator: Combinator, field: str, *values: Any):
        self.combinator = combinator
        self.field = field
        self.values = tuple(values)

    def render(self) -> Tuple[str, List[Any]]:
        if not self.values:
            return "", []
        parts = [f"{self.field}={quote_literal(v)}" for v in self.values]
        joined = f" {self.combinator.keyword} ".join(parts)
        return f"({joined})", list(self.values)


class TimeRange(Condition):
    """Inclusive range on the time column. Instants are rendered in UTC."""

    def __init__(self, start: datetime, end: datetime):
        self.start = start
        self.end = end

    def render(self) -> Tuple[str, List[Any]]:
        start = DateUtils.format_rfc3339(self.start)
        end = DateUtils.format_rfc3339(self.end)
        return f"time >= '{start}' AND time <= '{end}'", [start, end]


WhereItem = Union[Condition, Combinator]


class QueryBuilder:
    """Builds a single InfluxQL SELECT statement."""

    def __init__(self, *columns: str):
        self._columns: List[str] = list(columns)
        self._sources: List[str] = []
        self._where: List[WhereItem] = []
        self._group_by: List[str] = []
        self._order_by: Optional[str] = None
        self._direction: str = "ASC"
        self._tz: Optional[str] = None

    def select(self, *columns: str) -> "QueryBuilder":
        """Declare output columns, raw names or "expr AS alias" forms."""
        self._columns = list(columns)
        return self

    def from_(self, *sources: str) -> "QueryBuilder":
        """Declare the measurements to read from."""
        self._sources = list(sources)
        return self

    def where(self, *items: WhereItem) -> "QueryBuilder":
        """
        Declare filter conditions.

        Conditions and combinators alternate. A combinator is only written
        between two non-empty fragments.
        """
        self._where = list(items)
        return self

    def group_by(self, *fields: str) -> "QueryBuilder":
        """Declare the tags results are partitioned by."""
        self._group_by = [f.strip() for field in fields for f in field.split(",") if f.strip()]
        return self

    def order_by(self, field: str) -> "QueryBuilder":
        self._order_by = field
        return self

    def asc(self) -> "QueryBuilder":
        self._direction = "ASC"
        return self

    def desc(self) -> "QueryBuilder":
        self._direction = "DESC"
        return self

    def tz(self, name: str) -> "QueryBuilder":
        """Set the zone the backend uses for returned timestamps."""
        self._tz = name
        return self

    def query(self) -> Tuple[str, List[Any]]:
        """
        Render the statement.

        Rendering does not modify the builder, calling it twice returns the
        same text and arguments.

        Returns:
            Tuple of (query text, literal arguments)

        Raises:
            ValueError: If no columns or no sources were declared
        """
        if not self._columns:
            raise ValueError("query needs at least one column")
        if not self._sources:
            raise ValueError("query needs at least one source")

        args: List[Any] = []
        parts = [
            "SELECT " + ", ".join(self._columns),
            "FROM " + ", ".join(self._sources),
        ]

        where, where_args = self._render_where()
        if where:
            parts.append("WHERE " + where)
            args.extend(where_args)

        if self._group_by:
            parts.append("GROUP BY " + ", ".join(self._group_by))

        if self._order_by:
            parts.append(f"ORDER BY {self._order_by} {self._direction}")

        if self._tz:
            parts.append(f"TZ({quote_literal(self._tz)})")

        return " ".join(parts), args

    def _render_where(self) -> Tuple[str, List[Any]]:
        text = ""
        args: List[Any] = []
        pending: Optional[Combinator] = None

        for item in self._where:
            if isinstance(item, Combinator):
                pending = item
                continue

            fragment, fragment_args = item.render()
            if not fragment:
                continue

            if text:
                text += f" {(pending or AND).keyword} "
            text += fragment
            args.extend(fragment_args)
            pending = None

        return text, args


def select(*columns: str) -> QueryBuilder:
    """Start a new statement with the given columns."""
    return QueryBuilder(*columns)


def join_statements(statements: Sequence[str]) -> str:
    """Join statements into one batch for a single round trip."""
    return "".join(f"{statement};" for statement in statements)
