"""
Common value-wrapper behaviour shared by Truth, Decision and BoolTable.

Every wrapper holds one sequence and is never mutated: operations that
"change" it build a new wrapper. Subclasses add their ``of`` validating
factory and the queries specific to their table type.
"""

from typing import Any, Callable

from decision_monads.rows import is_sequence


class TableMonad:
    """
    Base wrapper over an ordered sequence.

    ``map`` and ``concat`` build the new wrapper directly, without the
    validation done by ``of``; ``chain`` hands the contents to ``f`` and
    returns whatever ``f`` returns.
    """

    def __init__(self, value: Any):
        self._value = list(value) if is_sequence(value) else value

    def _contents(self) -> Any:
        # Callers get a copy so the wrapped sequence cannot be mutated
        return list(self._value) if isinstance(self._value, list) else self._value

    def _is_filled(self) -> bool:
        return isinstance(self._value, list) and len(self._value) > 0

    def map(self, f: Callable[[Any], Any]) -> "TableMonad":
        return type(self)(f(self._contents()))

    def chain(self, f: Callable[[Any], Any]) -> Any:
        return f(self._contents())

    def ap(self, other: Any) -> Any:
        """Apply the function held by this wrapper to the contents of ``other``."""
        return other.map(self._value)

    def join(self) -> Any:
        return self._contents()

    def concat(self, other: "TableMonad") -> "TableMonad":
        return other.chain(lambda rest: type(self)(list(self._value) + list(rest)))

    def head(self) -> Any:
        """First element, or an empty list for an empty wrapper."""
        return self._value[0] if self._is_filled() else []

    def tail(self) -> Any:
        """Last element, or an empty list for an empty wrapper."""
        return self._value[-1] if self._is_filled() else []

    def is_empty(self) -> bool:
        return not self._is_filled()

    def inspect(self) -> str:
        return f"{type(self).__name__}({self._value!r})"

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and other._value == self._value

    def __hash__(self):
        return hash((type(self).__name__, repr(self._value)))

    def __repr__(self) -> str:
        return self.inspect()
