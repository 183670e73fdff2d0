from typing import TYPE_CHECKING, Optional

from sqlsparrow.builder._base import BaseBuilder

if TYPE_CHECKING:
    from typing_extensions import Self

__all__ = ("LimitOffsetClauseMixin",)


class LimitOffsetClauseMixin(BaseBuilder):
    """Mixin providing LIMIT and OFFSET clauses for SELECT builders."""

    def limit(self, limit: Optional[int], offset: Optional[int] = None) -> "Self":
        """Limit the number of rows returned.

        Args:
            limit: The maximum number of rows to return.
            offset: Optional number of rows to skip.

        Returns:
            The current builder instance for method chaining.
        """
        if limit is not None:
            self._state.limit = int(limit)
        if offset is not None:
            self._state.offset = int(offset)
        self._invalidate()
        return self

    def offset(self, offset: Optional[int], limit: Optional[int] = None) -> "Self":
        """Skip a number of rows.

        Args:
            offset: The number of rows to skip before starting to return rows.
            limit: Optional maximum number of rows to return.

        Returns:
            The current builder instance for method chaining.
        """
        return self.limit(limit, offset)

    def _limit_segment(self) -> str:
        return "" if self._state.limit is None else f"LIMIT {self._state.limit}"

    def _offset_segment(self) -> str:
        return "" if self._state.offset is None else f"OFFSET {self._state.offset}"
