"""
Declarative multi-way conditionals.

Three small value wrappers replace chains of if/else:

- Truth: AND/OR/XOR/NOR over a sequence of booleans, plus forks that call
  one of two callbacks depending on the aggregate
- Decision: a table of (condition, value) or (condition, func, argument)
  rows, run to the first, last, every, or first N matching rows
- BoolTable: (label, outcome) rows queried by label

Decision runs return a Maybe (Just/Nothing). Malformed input is reported
on the package logger and replaced by a harmless instance, or raised as
InvalidTableError when ``diagnostics.on_invalid`` is ``raise``.

Example:
    from decision_monads import Decision, Truth

    Decision.of([
        (Truth.of([a, b]).and_(), "both"),
        (Truth.of([a, b]).or_(), "one"),
        (True, "none"),
    ]).run().join()
"""

from decision_monads.bool_table import BoolTable
from decision_monads.decision import Decision
from decision_monads.errors import (
    BrokenTableError,
    DecisionMonadError,
    EmptyResultError,
    InvalidRowError,
    InvalidTableError,
)
from decision_monads.maybe import Just, Maybe, Nothing
from decision_monads.rows import FunctionRow, RowKind, ValueRow
from decision_monads.strategies import RunMode
from decision_monads.trace import (
    DecisionTrace,
    Resolution,
    RowEntry,
    TraceCollector,
    TraceSummary,
)
from decision_monads.truth import Truth


__all__ = [
    # Wrappers
    "Truth",
    "Decision",
    "BoolTable",
    # Rows and modes
    "ValueRow",
    "FunctionRow",
    "RowKind",
    "RunMode",
    # Optional results
    "Maybe",
    "Just",
    "Nothing",
    # Errors
    "DecisionMonadError",
    "InvalidTableError",
    "InvalidRowError",
    "BrokenTableError",
    "EmptyResultError",
    # Trace
    "DecisionTrace",
    "RowEntry",
    "Resolution",
    "TraceCollector",
    "TraceSummary",
]
