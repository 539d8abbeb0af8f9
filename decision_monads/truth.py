"""
Truth wrapper: aggregation and branching over a sequence of booleans.

Example:
    flags = Truth.of([True, True, False])
    flags.and_()   # False
    flags.or_()    # True
    flags.xor()    # True, the values are not all equal
    flags.fork_and(lambda: "deny", lambda: "allow")   # "deny"
"""

from typing import Any, Callable, Optional

from decision_monads.base import TableMonad
from decision_monads.diagnostics import report_type_error
from decision_monads.rows import is_sequence


class Truth(TableMonad):
    """
    Wrapper over a truth sequence.

    Every aggregation of an empty sequence is False. ``xor`` means
    "not all values are equal", not "exactly one is true".
    """

    @classmethod
    def of(cls, values: Any) -> "Truth":
        """
        Wrap ``values`` if it is a sequence.

        Any other input is reported on the diagnostic channel and replaced
        by ``Truth([False])``.
        """
        if is_sequence(values):
            return cls(values)
        report_type_error("Truth", values)
        return cls([False])

    # -------------------------------------------------------------------------
    # Aggregations
    # -------------------------------------------------------------------------

    def and_(self) -> bool:
        return self._is_filled() and all(self._value)

    def or_(self) -> bool:
        return self._is_filled() and any(self._value)

    def nor(self) -> bool:
        return self._is_filled() and not any(self._value)

    def xor(self) -> bool:
        return self._is_filled() and len({bool(v) for v in self._value}) > 1

    # -------------------------------------------------------------------------
    # Forks
    # -------------------------------------------------------------------------

    @staticmethod
    def _fork(result: bool, on_false: Optional[Callable[[], Any]], on_true: Optional[Callable[[], Any]]) -> Any:
        branch = on_true if result else on_false
        return branch() if branch is not None else None

    def fork_and(self, on_false: Callable[[], Any], on_true: Callable[[], Any]) -> Any:
        return self._fork(self.and_(), on_false, on_true)

    def fork_and_l(self, f: Callable[[], Any]) -> Any:
        return self._fork(self.and_(), f, None)

    def fork_and_r(self, f: Callable[[], Any]) -> Any:
        return self._fork(self.and_(), None, f)

    def fork_or(self, on_false: Callable[[], Any], on_true: Callable[[], Any]) -> Any:
        return self._fork(self.or_(), on_false, on_true)

    def fork_or_l(self, f: Callable[[], Any]) -> Any:
        return self._fork(self.or_(), f, None)

    def fork_or_r(self, f: Callable[[], Any]) -> Any:
        return self._fork(self.or_(), None, f)

    def fork_xor(self, on_false: Callable[[], Any], on_true: Callable[[], Any]) -> Any:
        return self._fork(self.xor(), on_false, on_true)

    def fork_xor_l(self, f: Callable[[], Any]) -> Any:
        return self._fork(self.xor(), f, None)

    def fork_xor_r(self, f: Callable[[], Any]) -> Any:
        return self._fork(self.xor(), None, f)

    def fork_nor(self, on_false: Callable[[], Any], on_true: Callable[[], Any]) -> Any:
        return self._fork(self.nor(), on_false, on_true)

    def fork_nor_l(self, f: Callable[[], Any]) -> Any:
        return self._fork(self.nor(), f, None)

    def fork_nor_r(self, f: Callable[[], Any]) -> Any:
        return self._fork(self.nor(), None, f)
