"""
Exceptions raised by decision_monads.

Under the default ``degrade`` policy constructors never raise; these are
raised when ``diagnostics.on_invalid`` is ``raise``, when an empty result is
unwrapped, or when a row cannot be normalized.
"""

from typing import Any


class DecisionMonadError(Exception):
    """Base class for all decision_monads errors."""


class InvalidTableError(DecisionMonadError):
    """Raised when a wrapper is built from input of the wrong shape."""

    def __init__(self, kind: str, value: Any):
        self.kind = kind
        self.value = value
        super().__init__(
            f"{kind} must be passed parameters that adhere to the documented "
            f"type, got {value!r}"
        )


class InvalidRowError(DecisionMonadError):
    """Raised when an item cannot be read as a conditional row."""

    def __init__(self, row: Any, reason: str):
        self.row = row
        self.reason = reason
        super().__init__(f"Invalid conditional row {row!r}: {reason}")


class BrokenTableError(DecisionMonadError):
    """Raised when no evaluation strategy fits a table and run mode."""

    def __init__(self, mode: Any, reason: str = ""):
        self.mode = mode
        self.reason = reason
        message = f"condition table is broken for mode {mode!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class EmptyResultError(DecisionMonadError):
    """Raised when the value of an empty result is requested."""

    def __init__(self):
        super().__init__("Cannot join Nothing: no row matched")
