"""
Conditional rows of a decision table.

A row is either a ``ValueRow`` (condition, value) or a ``FunctionRow``
(condition, func, argument). The row class is the variant tag; both are
named tuples so they index, unpack and compare like the plain tuples
callers write.
"""

from collections.abc import Sequence
from enum import Enum
from typing import Any, Callable, Iterable, List, NamedTuple, Optional, Union

from decision_monads.errors import InvalidRowError


class RowKind(str, Enum):
    """
    Kind of rows held by a decision table.

    - VALUE: rows carry the result directly
    - FUNCTION: rows carry a function and its argument, invoked lazily
    """
    VALUE = "value"
    FUNCTION = "function"


class ValueRow(NamedTuple):
    condition: Any
    value: Any

    @property
    def kind(self) -> RowKind:
        return RowKind.VALUE


class FunctionRow(NamedTuple):
    condition: Any
    func: Callable[[Any], Any]
    argument: Any

    @property
    def kind(self) -> RowKind:
        return RowKind.FUNCTION


ConditionalRow = Union[ValueRow, FunctionRow]


def is_sequence(value: Any) -> bool:
    """True for list-like values; strings and bytes do not count."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def as_row(item: Any) -> ConditionalRow:
    """
    Normalize ``item`` to a ``ValueRow`` or ``FunctionRow``.

    Raises:
        InvalidRowError: If ``item`` is not a 2- or 3-element sequence, or a
            3-element sequence whose second element is not callable
    """
    if isinstance(item, (ValueRow, FunctionRow)):
        return item
    if not is_sequence(item):
        raise InvalidRowError(item, "not a sequence")
    if len(item) == 2:
        return ValueRow(item[0], item[1])
    if len(item) == 3:
        if not callable(item[1]):
            raise InvalidRowError(item, "function slot is not callable")
        return FunctionRow(item[0], item[1], item[2])
    raise InvalidRowError(item, f"expected 2 or 3 elements, got {len(item)}")


def as_rows(items: Iterable[Any]) -> List[ConditionalRow]:
    """Normalize every item of a table; see ``as_row``."""
    return [as_row(item) for item in items]


def table_kind(rows: Iterable[ConditionalRow]) -> Optional[RowKind]:
    """
    Kind shared by every row.

    Returns:
        The common RowKind, or None for an empty or mixed table
    """
    kinds = {row.kind for row in rows}
    if len(kinds) != 1:
        return None
    return kinds.pop()
