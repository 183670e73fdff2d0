from typing import TYPE_CHECKING, Any

from sqlsparrow.builder.mixins._where import WhereClauseMixin

if TYPE_CHECKING:
    from typing_extensions import Self

    from sqlsparrow.typing import ConditionField

__all__ = ("DeleteMixin",)


class DeleteMixin(WhereClauseMixin):
    """Mixin assembling DELETE statements."""

    def delete(self, where: "ConditionField | None" = None, value: Any = None) -> "Self":
        """Build a delete statement.

        Args:
            where: Optional condition merged into the where clause first.
            value: Value for ``where`` when it is a single field.

        Raises:
            TableNotDefinedError: If no table has been selected.

        Returns:
            The current builder instance for method chaining.
        """
        table = self._check_table()
        if where is not None:
            self.where(where, value)
        return self._materialize(("DELETE FROM", table, self._where_segment()))
