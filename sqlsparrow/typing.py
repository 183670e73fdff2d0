from collections.abc import Mapping, Sequence
from typing import Any, Union

from typing_extensions import TypeAlias, TypeVar

__all__ = (
    "ConditionField",
    "ConnectionT",
    "DictRow",
    "FieldSelection",
    "ModelT",
    "RowT",
    "StatementData",
)

ConnectionT = TypeVar("ConnectionT")
"""Type variable for a driver connection object."""
ModelT = TypeVar("ModelT")
"""Type variable for a class that rows are converted into."""

DictRow: TypeAlias = dict[str, Any]
"""A row as a mapping of column name to value."""
RowT = TypeVar("RowT", default=dict[str, Any])

ConditionField: TypeAlias = Union[str, Mapping[str, Any]]
"""A condition field string (``"id >"``) or a mapping of such fields to values."""
FieldSelection: TypeAlias = Union[str, Sequence[str], None]
"""Fields for a SELECT: a string, a sequence of names or None for ``*``."""
StatementData: TypeAlias = Mapping[Union[str, int], Any]
"""Column to value data for INSERT and UPDATE; an integer key marks a raw assignment."""
