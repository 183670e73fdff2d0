from typing import TYPE_CHECKING, Union

from sqlsparrow.builder._base import BaseBuilder

if TYPE_CHECKING:
    from collections.abc import Sequence

    from typing_extensions import Self

__all__ = ("OrderByClauseMixin",)


class OrderByClauseMixin(BaseBuilder):
    """Mixin providing ORDER BY clause for SELECT builders."""

    def order_by(self, fields: "Union[str, Sequence[str]]", direction: str = "ASC") -> "Self":
        """Add sort fields.

        Args:
            fields: A field name or a sequence of field names.
            direction: ``ASC`` or ``DESC``, appended to every field.

        Returns:
            The current builder instance for method chaining.
        """
        names = [fields] if isinstance(fields, str) else list(fields)
        direction = direction.strip().upper()
        self._state.order.extend(f"{name.strip()} {direction}" for name in names)
        self._invalidate()
        return self

    def sort_asc(self, fields: "Union[str, Sequence[str]]") -> "Self":
        return self.order_by(fields, "ASC")

    def sort_desc(self, fields: "Union[str, Sequence[str]]") -> "Self":
        return self.order_by(fields, "DESC")

    def _order_segment(self) -> str:
        if not self._state.order:
            return ""
        return "ORDER BY " + ", ".join(self._state.order)
