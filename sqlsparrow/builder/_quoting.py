"""Rendering of Python values as SQL literal text."""

import datetime
from typing import Any, Callable, Final, Optional

from sqlsparrow.exceptions import EscapeError
from sqlsparrow.utils.type_guards import is_numeric

__all__ = ("ESCAPE_TABLE", "ValueQuoter", "escape_string")

ESCAPE_TABLE: Final[dict[int, str]] = str.maketrans(
    {
        "\\": "\\\\",
        "\0": "\\0",
        "\n": "\\n",
        "\r": "\\r",
        "'": "\\'",
        '"': '\\"',
        "\x1a": "\\Z",
    }
)

Escaper = Callable[[str], str]


def escape_string(value: str) -> str:
    """Escape a string with the connection-independent backslash table.

    Args:
        value: The raw string.

    Returns:
        The escaped string, without surrounding quotes.
    """
    return value.translate(ESCAPE_TABLE)


class ValueQuoter:
    """Render scalar values as SQL literals.

    Strings are escaped by the native escaper of a live connection when one
    has been installed, otherwise by :func:`escape_string`.
    """

    __slots__ = ("_escaper",)

    def __init__(self, escaper: Optional[Escaper] = None) -> None:
        self._escaper = escaper

    @property
    def escaper(self) -> Optional[Escaper]:
        return self._escaper

    def set_escaper(self, escaper: Optional[Escaper]) -> None:
        """Install or remove the connection escaper."""
        self._escaper = escaper

    def escape(self, value: str) -> str:
        """Escape a string without quoting it.

        Raises:
            EscapeError: If the connection escaper fails.
        """
        if self._escaper is None:
            return escape_string(value)
        try:
            return self._escaper(value)
        except EscapeError:
            raise
        except Exception as e:
            msg = f"Unable to escape value: {e}"
            raise EscapeError(msg) from e

    def quote(self, value: Any) -> str:
        """Render a value as SQL literal text.

        Args:
            value: The value to render.

        Returns:
            ``NULL`` for None, bare numbers, ``TRUE``/``FALSE`` for booleans,
            and single-quoted escaped text for strings and temporal values.
        """
        if value is None:
            return "NULL"
        if isinstance(value, bool):
            return "TRUE" if value else "FALSE"
        if is_numeric(value):
            return str(value)
        if isinstance(value, str):
            return f"'{self.escape(value)}'"
        if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
            return f"'{self.escape(value.isoformat())}'"
        if isinstance(value, (bytes, bytearray, memoryview)):
            return f"X'{bytes(value).hex()}'"
        return str(value)
