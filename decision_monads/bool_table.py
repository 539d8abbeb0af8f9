"""
BoolTable wrapper: named boolean lookups.

Example:
    checks = BoolTable.of([
        ("user is admin", user.role == "admin"),
        ("account is active", account.active),
    ])
    if checks.q("user is admin"):
        ...
"""

from typing import Any, NamedTuple

from decision_monads.base import TableMonad
from decision_monads.diagnostics import (
    BOOL_TABLE_TYPE_ERROR_MESSAGE,
    report_lookup_miss,
    report_type_error,
)
from decision_monads.rows import is_sequence
from decision_monads.settings import settings


DEGRADED_LABEL = "BoolTable type error"


class DegradedRow(NamedTuple):
    """
    Row standing in for a table built from malformed input.

    Kept in the wrapped rows, so it survives map, concat and chain.
    Equal only to another DegradedRow, never to a plain pair.
    """
    label: str = DEGRADED_LABEL
    outcome: bool = True

    def __eq__(self, other: object) -> bool:
        return isinstance(other, DegradedRow) and tuple(self) == tuple(other)

    def __ne__(self, other: object) -> bool:
        return not self == other

    def __hash__(self):
        return hash(("DegradedRow",) + tuple(self))


class BoolTable(TableMonad):
    """
    Wrapper over (label, outcome) rows.

    Labels are matched by exact equality and the first match wins.
    A table holding a DegradedRow answers every query with
    ``bool_table.degraded_result`` (True unless configured otherwise).
    """

    @classmethod
    def of(cls, table: Any) -> "BoolTable":
        if (
            is_sequence(table)
            and len(table) > 0
            and is_sequence(table[0])
            and len(table[0]) == 2
        ):
            return cls(table)
        report_type_error("BoolTable", table, BOOL_TABLE_TYPE_ERROR_MESSAGE)
        return cls([DegradedRow()])

    @property
    def degraded(self) -> bool:
        """True if the table was built from malformed input."""
        return isinstance(self._value, list) and any(
            isinstance(row, DegradedRow) for row in self._value
        )

    def query(self, label: Any) -> bool:
        """
        Outcome of the first row labelled ``label``, coerced to bool.

        A missing label logs a warning and answers False.
        """
        if self.degraded:
            return bool(settings.get_nested("bool_table.degraded_result", True))
        if isinstance(self._value, list):
            for row in self._value:
                if is_sequence(row) and len(row) == 2 and row[0] == label:
                    return bool(row[1])
        report_lookup_miss(label)
        return False

    q = query
