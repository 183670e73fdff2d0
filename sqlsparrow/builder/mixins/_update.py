from typing import TYPE_CHECKING

from sqlsparrow.builder.mixins._where import WhereClauseMixin

if TYPE_CHECKING:
    from typing_extensions import Self

    from sqlsparrow.typing import StatementData

__all__ = ("UpdateMixin",)


class UpdateMixin(WhereClauseMixin):
    """Mixin assembling UPDATE statements."""

    def update(self, data: "StatementData") -> "Self":
        """Build an update statement.

        An integer key marks a raw assignment: its value is emitted verbatim,
        e.g. ``{0: "hits=hits+1"}``. Empty data leaves the statement unset.

        Args:
            data: Column to value mapping.

        Raises:
            TableNotDefinedError: If no table has been selected.

        Returns:
            The current builder instance for method chaining.
        """
        table = self._check_table()
        if not data:
            self._invalidate()
            return self
        assignments = ",".join(
            str(value) if isinstance(key, int) else f"{key}={self.quote(value)}" for key, value in data.items()
        )
        return self._materialize(("UPDATE", table, "SET", assignments, self._where_segment()))
