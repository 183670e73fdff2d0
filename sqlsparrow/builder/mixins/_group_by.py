from typing import TYPE_CHECKING, Union

from sqlsparrow.builder._base import BaseBuilder

if TYPE_CHECKING:
    from collections.abc import Sequence

    from typing_extensions import Self

__all__ = ("GroupByClauseMixin",)


class GroupByClauseMixin(BaseBuilder):
    """Mixin providing GROUP BY clause for SELECT builders."""

    def group_by(self, fields: "Union[str, Sequence[str]]") -> "Self":
        """Add fields to group by.

        Args:
            fields: A field name or a sequence of field names.

        Returns:
            The current builder instance for method chaining.
        """
        names = [fields] if isinstance(fields, str) else list(fields)
        self._state.group.extend(name.strip() for name in names)
        self._invalidate()
        return self

    def _group_segment(self) -> str:
        if not self._state.group:
            return ""
        return "GROUP BY " + ", ".join(self._state.group)
