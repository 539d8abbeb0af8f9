"""
Decision wrapper: a table of conditional rows run with a chosen strategy.

Rows are either (condition, value) or (condition, func, argument); a table
holds one kind only. ``run`` returns a ``Maybe``.

Example:
    table = Decision.of([
        (score > 90, "gold"),
        (score > 50, "silver"),
        (True, "bronze"),
    ])
    table.run().join()          # first matching tier
    table.run("any").join()     # every matching tier
    table.run(2).join()         # at most two matching tiers

    lazy = Decision.of([
        (is_admin, grant_all, user),
        (is_member, grant_read, user),
    ])
    lazy.run().join()           # grant_all(user) if is_admin, ...
"""

from typing import Any, Optional

from decision_monads.base import TableMonad
from decision_monads.diagnostics import report_type_error
from decision_monads.errors import InvalidRowError
from decision_monads.maybe import Maybe
from decision_monads.rows import RowKind, ValueRow, as_rows, is_sequence, table_kind
from decision_monads.settings import settings
from decision_monads.strategies import RunType, decide
from decision_monads.trace import DecisionTrace


class Decision(TableMonad):
    """Wrapper over a decision table."""

    @classmethod
    def of(cls, table: Any) -> "Decision":
        """
        Wrap a non-empty table whose rows all share one arity (2 or 3).

        Rows are normalized to ValueRow/FunctionRow. Any other input is
        reported on the diagnostic channel and replaced by the single row
        ``(True, None)``, which runs to ``Nothing``.
        """
        if is_sequence(table) and len(table) > 0:
            try:
                rows = as_rows(table)
            except InvalidRowError:
                rows = None
            if rows is not None and table_kind(rows) is not None:
                return cls(rows)
        report_type_error("Decision", table)
        return cls([ValueRow(True, None)])

    @property
    def kind(self) -> Optional[RowKind]:
        """Row kind of the table, or None if it is empty or mixed."""
        try:
            return table_kind(as_rows(self._value)) if is_sequence(self._value) else None
        except InvalidRowError:
            return None

    def run(
        self,
        mode: Optional[RunType] = None,
        trace: Optional[DecisionTrace] = None
    ) -> Maybe:
        """
        Evaluate the table.

        Args:
            mode: "first", "last", "any", or a positive int N;
                defaults to ``decision.default_mode``
            trace: Optional trace recording each row

        Returns:
            Maybe with the result; Nothing when no row matched
        """
        if mode is None:
            mode = settings.get_nested("decision.default_mode", "first")
        return decide(mode, self._value, trace)
