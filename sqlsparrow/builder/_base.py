"""Builder state and the base class shared by every clause and statement mixin."""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, NamedTuple, Optional

from sqlsparrow.builder._conditions import ConditionParser
from sqlsparrow.builder._quoting import ValueQuoter
from sqlsparrow.exceptions import InvalidJoinTypeError, TableNotDefinedError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from typing_extensions import Self

__all__ = ("BaseBuilder", "JoinClause", "JoinType", "QueryState", "join_segments")


class JoinType(str, Enum):
    """Supported join kinds."""

    INNER = "INNER"
    LEFT = "LEFT OUTER"
    RIGHT = "RIGHT OUTER"
    FULL = "FULL OUTER"

    @classmethod
    def parse(cls, value: "str | JoinType") -> "JoinType":
        """Validate a join kind.

        Raises:
            InvalidJoinTypeError: If the value is not a supported join kind.
        """
        if isinstance(value, JoinType):
            return value
        normalized = " ".join(str(value).upper().split())
        for member in cls:
            if normalized in {member.value, member.name}:
                return member
        msg = f"Invalid join type: {value!r}."
        raise InvalidJoinTypeError(msg)


class JoinClause(NamedTuple):
    """A join onto another table."""

    kind: JoinType
    table: str
    conditions: "tuple[str, ...]"

    def render(self) -> str:
        return join_segments(f"{self.kind.value} JOIN {self.table}", *self.conditions)


@dataclass
class QueryState:
    """Accumulated clause state for one statement in progress."""

    table: Optional[str] = None
    joins: "list[JoinClause]" = field(default_factory=list)
    where: "list[str]" = field(default_factory=list)
    order: "list[str]" = field(default_factory=list)
    group: "list[str]" = field(default_factory=list)
    having: "list[str]" = field(default_factory=list)
    distinct: bool = False
    limit: Optional[int] = None
    offset: Optional[int] = None
    sql: Optional[str] = None

    def reset(self, table: Optional[str] = None) -> None:
        """Clear every clause and select ``table``."""
        self.table = table
        self.joins = []
        self.where = []
        self.order = []
        self.group = []
        self.having = []
        self.distinct = False
        self.limit = None
        self.offset = None
        self.sql = None


def join_segments(*segments: "Optional[str]") -> str:
    """Join non-empty statement segments with single spaces."""
    return " ".join(segment for segment in segments if segment)


class BaseBuilder:
    """Holds the query state, the value quoter and the condition parser."""

    def __init__(self, table: Optional[str] = None, quoter: Optional[ValueQuoter] = None) -> None:
        self._state = QueryState()
        self._quoter = quoter or ValueQuoter()
        self._conditions = ConditionParser(self._quoter)
        if table is not None:
            self.from_(table)

    @property
    def table(self) -> Optional[str]:
        return self._state.table

    @property
    def sql(self) -> Optional[str]:
        """The last materialized statement, or None when it is unset or stale."""
        return self._state.sql

    @property
    def quoter(self) -> ValueQuoter:
        return self._quoter

    @property
    def state(self) -> QueryState:
        """A copy of the current clause state."""
        return copy.deepcopy(self._state)

    def from_(self, table: str, reset: bool = True) -> "Self":
        """Select the table the next statement operates on.

        Args:
            table: Table name.
            reset: Clear all clause state. Defaults to True.

        Returns:
            The current builder instance for method chaining.
        """
        if reset:
            self._state.reset(table.strip())
        else:
            self._state.table = table.strip()
            self._invalidate()
        return self

    def set_sql(self, sql: Optional[str]) -> "Self":
        """Install a hand-written statement to execute."""
        self._state.sql = sql.strip() if sql else None
        return self

    def quote(self, value: Any) -> str:
        """Render a value as a SQL literal."""
        return self._quoter.quote(value)

    def clone(self) -> "Self":
        """Return a builder with an independent copy of the clause state."""
        clone = copy.copy(self)
        clone._state = copy.deepcopy(self._state)
        return clone

    def _invalidate(self) -> None:
        self._state.sql = None

    def _check_table(self) -> str:
        if not self._state.table:
            raise TableNotDefinedError
        return self._state.table

    def _add_conditions(
        self, target: "list[str]", keyword: str, field: Any, value: Any = None, escape: bool = True
    ) -> None:
        join_word = None if target else keyword
        target.extend(self._conditions.parse(field, value, join_word, escape))
        self._invalidate()

    def _materialize(self, segments: "Iterable[Optional[str]]") -> "Self":
        self._state.sql = join_segments(*segments)
        return self

    def _where_segment(self) -> str:
        return join_segments(*self._state.where)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(table={self._state.table!r}, sql={self._state.sql!r})"
