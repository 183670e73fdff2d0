"""Condition mini-language.

A condition field is written ``"<name>[ <operator>]"``. The operator tokens
``%``, ``!%``, ``@`` and ``!@`` stand for ``LIKE``, ``NOT LIKE``, ``IN`` and
``NOT IN``; any other token is used verbatim and a missing token means ``=``.
A leading ``|`` on the name joins the condition with ``OR`` instead of ``AND``.
Because only the first character is inspected, a column whose name starts
with ``|`` cannot be addressed.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Final, NamedTuple, Optional

from sqlsparrow.exceptions import InvalidConditionError
from sqlsparrow.utils.type_guards import is_mapping, is_numeric, is_value_sequence

if TYPE_CHECKING:
    from sqlsparrow.builder._quoting import ValueQuoter

__all__ = ("OPERATOR_TOKENS", "OR_SIGIL", "Condition", "ConditionParser", "resolve_operator")

OR_SIGIL: Final = "|"

OPERATOR_TOKENS: Final[dict[str, str]] = {
    "%": " LIKE ",
    "!%": " NOT LIKE ",
    "@": " IN ",
    "!@": " NOT IN ",
}


def resolve_operator(token: str) -> str:
    """Map an operator token to the SQL operator text.

    Args:
        token: The token following the field name, possibly empty.

    Returns:
        The operator, padded with spaces when it is a keyword.
    """
    if not token:
        return "="
    return OPERATOR_TOKENS.get(token, token)


class Condition(NamedTuple):
    """A single comparison within a clause."""

    field: str
    operator: str
    value: str
    joiner: str

    def render(self) -> str:
        expression = f"{self.field}{self.operator}{self.value}"
        return f"{self.joiner} {expression}" if self.joiner else expression


def _resolve_joiner(field: str, join_word: Optional[str]) -> "tuple[str, str]":
    """Split the OR sigil off a field and pick the joining keyword."""
    is_or = field.startswith(OR_SIGIL)
    if is_or:
        field = field[len(OR_SIGIL) :]
    if join_word is None:
        join_word = "OR" if is_or else "AND"
    return field, join_word


class ConditionParser:
    """Turn field/value pairs into rendered boolean clause fragments."""

    __slots__ = ("_quoter",)

    def __init__(self, quoter: "ValueQuoter") -> None:
        self._quoter = quoter

    def parse(
        self, field: Any, value: Any = None, join_word: Optional[str] = None, escape: bool = True
    ) -> "list[str]":
        """Parse a condition into rendered fragments.

        Args:
            field: A condition field string, a raw condition, or a mapping of fields to values.
            value: The value to compare against. ``None`` marks ``field`` as a raw condition.
            join_word: Keyword placed before the first fragment. Derived from the
                field's sigil when omitted.
            escape: Whether scalar values are quoted.

        Raises:
            InvalidConditionError: If ``field`` is neither a string nor a mapping.

        Returns:
            One rendered fragment per condition, in order.
        """
        if isinstance(field, str):
            return [self.build(field, value, join_word, escape).render()]
        if is_mapping(field):
            return self._parse_mapping(field, join_word, escape)
        msg = f"Invalid condition: expected a field string or a mapping, got {type(field).__name__}."
        raise InvalidConditionError(msg)

    def _parse_mapping(self, fields: "Mapping[Any, Any]", join_word: Optional[str], escape: bool) -> "list[str]":
        fragments: list[str] = []
        for key, item in fields.items():
            fragments.extend(self.parse(key, item, join_word, escape))
            join_word = None
        return fragments

    def build(self, field: str, value: Any = None, join_word: Optional[str] = None, escape: bool = True) -> Condition:
        """Build a single :class:`Condition` from a field string."""
        if value is None:
            raw, joiner = _resolve_joiner(field.strip(), join_word)
            return Condition(raw.strip(), "", "", joiner)

        name, _, token = field.strip().partition(" ")
        token = token.strip()
        name, joiner = _resolve_joiner(name, join_word)
        operator = resolve_operator(token)

        if is_value_sequence(value):
            if "@" not in token:
                operator = " IN "
            rendered = "(" + ",".join(self._quoter.quote(item) for item in value) + ")"
        elif escape and not is_numeric(value):
            # Only numeric types render bare; numeric-looking strings stay quoted.
            rendered = self._quoter.quote(value)
        else:
            rendered = str(value)
        return Condition(name, operator, rendered, joiner)
