from typing import TYPE_CHECKING, Optional

from sqlsparrow.builder.mixins._group_by import GroupByClauseMixin
from sqlsparrow.builder.mixins._join import JoinClauseMixin
from sqlsparrow.builder.mixins._limit_offset import LimitOffsetClauseMixin
from sqlsparrow.builder.mixins._order_by import OrderByClauseMixin
from sqlsparrow.builder.mixins._where import HavingClauseMixin, WhereClauseMixin

if TYPE_CHECKING:
    from typing_extensions import Self

    from sqlsparrow.typing import FieldSelection

__all__ = ("SelectMixin", "render_fields")


def render_fields(fields: "FieldSelection", default: str = "*") -> str:
    """Render a field selection as a comma separated list."""
    if isinstance(fields, str):
        return fields.strip() or default
    if fields:
        return ",".join(name.strip() for name in fields)
    return default


class SelectMixin(
    JoinClauseMixin,
    WhereClauseMixin,
    HavingClauseMixin,
    GroupByClauseMixin,
    OrderByClauseMixin,
    LimitOffsetClauseMixin,
):
    """Mixin assembling SELECT statements."""

    def distinct(self, value: bool = True) -> "Self":
        """Emit ``DISTINCT`` right after ``SELECT``."""
        self._state.distinct = bool(value)
        self._invalidate()
        return self

    def select(
        self, fields: "FieldSelection" = None, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> "Self":
        """Build a select statement.

        Args:
            fields: A field list string or a sequence of field names. Defaults to ``*``.
            limit: Optional limit, stored on the builder as with :meth:`limit`.
            offset: Optional offset, stored on the builder as with :meth:`offset`.

        Raises:
            TableNotDefinedError: If no table has been selected.

        Returns:
            The current builder instance for method chaining.
        """
        table = self._check_table()
        if limit is not None or offset is not None:
            self.limit(limit, offset)
        state = self._state
        return self._materialize(
            (
                "SELECT",
                "DISTINCT" if state.distinct else "",
                render_fields(fields),
                "FROM",
                table,
                *(join.render() for join in state.joins),
                self._where_segment(),
                self._group_segment(),
                " ".join(state.having),
                self._order_segment(),
                self._limit_segment(),
                self._offset_segment(),
            )
        )
