"""Type guard functions for runtime type checking in sqlsparrow.

These checks decide how the condition grammar and the value quoter treat a
value, replacing ad-hoc isinstance chains at the call sites.
"""

from collections.abc import Mapping
from decimal import Decimal
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from typing_extensions import TypeGuard

__all__ = ("is_mapping", "is_numeric", "is_value_sequence")


def is_numeric(value: Any) -> bool:
    """Check if a value is a number that can be emitted without quotes.

    Booleans are excluded even though they subclass ``int``.

    Args:
        value: The value to check

    Returns:
        True if the value is an int, float or Decimal
    """
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def is_value_sequence(value: Any) -> "TypeGuard[list[Any] | tuple[Any, ...]]":
    """Check if a value is a list or tuple of values for an ``IN`` comparison.

    Args:
        value: The value to check

    Returns:
        True if the value is a list or tuple
    """
    return isinstance(value, (list, tuple))


def is_mapping(value: Any) -> "TypeGuard[Mapping[Any, Any]]":
    """Check if a value is a mapping of fields to values.

    Args:
        value: The value to check

    Returns:
        True if the value is a Mapping
    """
    return isinstance(value, Mapping)
