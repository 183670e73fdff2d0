"""SQL statement builder.

Example:
    >>> from sqlsparrow.builder import QueryBuilder
    >>> QueryBuilder("user").where("id", 123).select().sql
    'SELECT * FROM user WHERE id=123'
"""

from sqlsparrow.builder._base import BaseBuilder, JoinClause, JoinType, QueryState
from sqlsparrow.builder._conditions import Condition, ConditionParser
from sqlsparrow.builder._quoting import ValueQuoter, escape_string
from sqlsparrow.builder.mixins import DeleteMixin, InsertMixin, SelectMixin, UpdateMixin

__all__ = (
    "BaseBuilder",
    "Condition",
    "ConditionParser",
    "JoinClause",
    "JoinType",
    "QueryBuilder",
    "QueryState",
    "ValueQuoter",
    "escape_string",
)


class QueryBuilder(SelectMixin, InsertMixin, UpdateMixin, DeleteMixin):
    """Fluent builder for SELECT, INSERT, UPDATE and DELETE statements on one table.

    A builder is not safe to share between threads; use :meth:`clone` to get an
    independent copy per statement.
    """
