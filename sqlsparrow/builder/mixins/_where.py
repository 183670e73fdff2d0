from typing import TYPE_CHECKING, Any

from sqlsparrow.builder._base import BaseBuilder

if TYPE_CHECKING:
    from typing_extensions import Self

    from sqlsparrow.typing import ConditionField

__all__ = ("HavingClauseMixin", "WhereClauseMixin")


class WhereClauseMixin(BaseBuilder):
    """Mixin providing WHERE clause methods for SELECT, UPDATE, and DELETE builders."""

    def where(self, field: "ConditionField", value: Any = None) -> "Self":
        """Add where conditions.

        The first condition opens the clause with ``WHERE``; later ones are joined
        with ``AND``, or ``OR`` when the field starts with ``|``.

        Args:
            field: A condition field such as ``"id"`` or ``"name %"``, a raw
                condition when ``value`` is None, or a mapping of fields to values.
            value: The value to compare against.

        Raises:
            InvalidConditionError: If ``field`` is neither a string nor a mapping.

        Returns:
            The current builder instance for method chaining.
        """
        self._add_conditions(self._state.where, "WHERE", field, value)
        return self

    def between(self, field: str, low: Any, high: Any) -> "Self":
        """Add a ``BETWEEN`` condition with both bounds quoted."""
        return self.where(f"{field} BETWEEN {self.quote(low)} AND {self.quote(high)}")


class HavingClauseMixin(BaseBuilder):
    """Mixin providing the HAVING clause for SELECT builders."""

    def having(self, field: "ConditionField", value: Any = None) -> "Self":
        """Add having conditions, using the same grammar as :meth:`where`."""
        self._add_conditions(self._state.having, "HAVING", field, value)
        return self
