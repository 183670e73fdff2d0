from typing import TYPE_CHECKING

from sqlsparrow.builder._base import BaseBuilder

if TYPE_CHECKING:
    from typing_extensions import Self

    from sqlsparrow.typing import StatementData

__all__ = ("InsertMixin",)


class InsertMixin(BaseBuilder):
    """Mixin assembling INSERT statements."""

    def insert(self, data: "StatementData") -> "Self":
        """Build an insert statement.

        Keys and values keep the mapping's insertion order. Empty data leaves the
        statement unset.

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
        columns = ",".join(str(key) for key in data)
        values = ",".join(self.quote(value) for value in data.values())
        return self._materialize(("INSERT INTO", table, f"({columns})", "VALUES", f"({values})"))
