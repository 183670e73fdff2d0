"""Common result types shared by all driver adapters."""

import re
from typing import Any, Final, NamedTuple, Optional

__all__ = ("EMPTY_RESULT", "NO_INSERT_ID", "ExecutionResult", "FetchedRows", "is_insert_statement")

NO_INSERT_ID: Final = -1

_INSERT_PATTERN: Final = re.compile(r"^\s*(?:INSERT|REPLACE)\b", re.IGNORECASE)


class FetchedRows(NamedTuple):
    """Rows drained from a cursor together with their column names."""

    column_names: "list[str]"
    rows: "list[Any]"


class ExecutionResult(NamedTuple):
    """Normalized outcome of one statement round trip."""

    raw_result: Optional[FetchedRows]
    row_count: int
    affected_rows: int
    insert_id: int

    @property
    def returns_rows(self) -> bool:
        return self.raw_result is not None


EMPTY_RESULT: Final = ExecutionResult(None, 0, 0, NO_INSERT_ID)


def is_insert_statement(sql: str) -> bool:
    """Check whether a statement inserts rows and may produce an insert id."""
    return _INSERT_PATTERN.match(sql) is not None
