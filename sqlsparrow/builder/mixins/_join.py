from typing import TYPE_CHECKING, Any, Union

from sqlsparrow.builder._base import BaseBuilder, JoinClause, JoinType

if TYPE_CHECKING:
    from typing_extensions import Self

__all__ = ("JoinClauseMixin",)


class JoinClauseMixin(BaseBuilder):
    """Mixin providing JOIN clauses for SELECT builders."""

    def join(self, table: str, fields: Any, join_type: "Union[str, JoinType]" = JoinType.INNER) -> "Self":
        """Add a table join.

        Join conditions compare columns, so their values are not quoted:
        ``join("role", {"role.id": "user.role_id"})`` renders
        ``INNER JOIN role ON role.id=user.role_id``.

        Args:
            table: Table to join to.
            fields: A mapping of join fields to columns or values, or a raw condition string.
            join_type: One of ``INNER``, ``LEFT OUTER``, ``RIGHT OUTER``, ``FULL OUTER``.

        Raises:
            InvalidJoinTypeError: If the join type is not supported.

        Returns:
            The current builder instance for method chaining.
        """
        kind = JoinType.parse(join_type)
        conditions = self._conditions.parse(fields, None, "ON", escape=False)
        self._state.joins.append(JoinClause(kind, table.strip(), tuple(conditions)))
        self._invalidate()
        return self

    def left_join(self, table: str, fields: Any) -> "Self":
        return self.join(table, fields, JoinType.LEFT)

    def right_join(self, table: str, fields: Any) -> "Self":
        return self.join(table, fields, JoinType.RIGHT)

    def full_join(self, table: str, fields: Any) -> "Self":
        return self.join(table, fields, JoinType.FULL)
