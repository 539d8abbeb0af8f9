"""
Optional-result carrier.

A ``Maybe`` holds zero (``Nothing``) or one (``Just``) value. Decision
strategies wrap their result in it so that "no row matched" is a value
rather than an exception. ``Just([])`` and ``Nothing()`` are different
things: the first means rows matched and produced an empty collection.

Example:
    Maybe.of(3).map(lambda x: x + 1).join()        # 4
    Maybe.of(None).map(lambda x: x + 1).is_nothing() # True
    result.fork(lambda: "none", lambda v: f"got {v}")
"""

from typing import Any, Callable, Generic, TypeVar

from decision_monads.errors import EmptyResultError


T = TypeVar("T")


class Maybe(Generic[T]):
    """Base of ``Just`` and ``Nothing``; build instances with ``Maybe.of``."""

    __slots__ = ()

    @staticmethod
    def of(value: Any) -> "Maybe":
        """``Nothing()`` for ``None``, ``Just(value)`` otherwise."""
        if value is None:
            return Nothing()
        return Just(value)

    def is_just(self) -> bool:
        return isinstance(self, Just)

    def is_nothing(self) -> bool:
        return isinstance(self, Nothing)


class Just(Maybe[T]):
    """A present value."""

    __slots__ = ("_value",)

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], Any]) -> Maybe:
        return Maybe.of(f(self._value))

    def chain(self, f: Callable[[T], Any]) -> Any:
        return f(self._value)

    def ap(self, other: Any) -> Any:
        """Apply the held function to the value inside ``other``."""
        return other.map(self._value)

    def fork(self, on_nothing: Callable[[], Any], on_just: Callable[[T], Any]) -> Any:
        return on_just(self._value)

    def join(self) -> T:
        return self._value

    def get_or_else(self, default: Any) -> T:
        return self._value

    def inspect(self) -> str:
        return f"Just({self._value!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Just) and other._value == self._value

    def __hash__(self):
        return hash(("Just", repr(self._value)))

    def __repr__(self) -> str:
        return self.inspect()


class Nothing(Maybe[Any]):
    """An absent value; every operation short-circuits."""

    __slots__ = ()

    def map(self, f: Callable[[Any], Any]) -> Maybe:
        return self

    def chain(self, f: Callable[[Any], Any]) -> Any:
        return self

    def ap(self, other: Any) -> Any:
        return self

    def fork(self, on_nothing: Callable[[], Any], on_just: Callable[[Any], Any]) -> Any:
        return on_nothing()

    def join(self) -> Any:
        raise EmptyResultError()

    def get_or_else(self, default: Any) -> Any:
        return default

    def inspect(self) -> str:
        return "Nothing()"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Nothing)

    def __hash__(self):
        return hash("Nothing")

    def __repr__(self) -> str:
        return self.inspect()
