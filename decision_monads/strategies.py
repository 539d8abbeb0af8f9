"""
Strategy dispatcher for decision tables.

A run picks one of eight strategies from the kind of rows in the table
(value or function) and the run mode (first, last, any, or a positive
count N). Every strategy is built from the same two steps: select the rows
whose condition is true, then extract each selected row (return the value,
or call the function with its argument). Results are always a ``Maybe``:
``Nothing`` when no row matched.

Example:
    rows = as_rows([(False, 1), (True, 2), (True, 3)])
    decide("first", rows).join()   # 2
    decide("any", rows).join()     # [2, 3]
    decide(1, rows).join()         # [2]
"""

import logging
from enum import Enum
from operator import attrgetter
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from decision_monads.diagnostics import report_broken_table
from decision_monads.errors import InvalidRowError
from decision_monads.logger import logger
from decision_monads.maybe import Maybe, Nothing
from decision_monads.rows import (
    ConditionalRow,
    FunctionRow,
    RowKind,
    as_rows,
    is_sequence,
    table_kind,
)
from decision_monads.settings import settings
from decision_monads.trace import DecisionTrace, Resolution


class RunMode(str, Enum):
    """Named run modes; a positive int N is the fourth, numeric, mode."""
    FIRST = "first"
    LAST = "last"
    ANY = "any"


RunType = Union[RunMode, str, int]
Strategy = Callable[[Sequence[ConditionalRow]], Maybe]


def parse_mode(mode: Any) -> Optional[Union[RunMode, int]]:
    """
    Normalize a caller-supplied run mode.

    Returns:
        A RunMode, a positive int, or None if ``mode`` is not a valid mode
    """
    if isinstance(mode, RunMode):
        return mode
    if isinstance(mode, bool):
        return None
    if isinstance(mode, int):
        return mode if mode > 0 else None
    if isinstance(mode, str):
        try:
            return RunMode(mode)
        except ValueError:
            return None
    return None


# =============================================================================
# Shared primitives
# =============================================================================

def _matching(rows: Sequence[ConditionalRow]) -> List[ConditionalRow]:
    return [row for row in rows if row.condition]


def _first_match(rows: Sequence[ConditionalRow]) -> Maybe:
    return Maybe.of(next((row for row in rows if row.condition), None))


def _last_match(rows: Sequence[ConditionalRow]) -> Maybe:
    return _first_match(rows[::-1])


def _all_matches(rows: Sequence[ConditionalRow]) -> Maybe:
    # No match is Nothing, never Just([])
    return Maybe.of(_matching(rows) or None)


_value = attrgetter("value")


def _invoke(row: FunctionRow) -> Any:
    return row.func(row.argument)


def _each(extract: Callable[[ConditionalRow], Any]) -> Callable[[List[ConditionalRow]], List[Any]]:
    return lambda rows: [extract(row) for row in rows]


def _take(n: int) -> Callable[[List[ConditionalRow]], List[ConditionalRow]]:
    return lambda rows: rows[:n]


# =============================================================================
# Strategies
# =============================================================================

def value_first(rows: Sequence[ConditionalRow]) -> Maybe:
    return _first_match(rows).map(_value)


def value_last(rows: Sequence[ConditionalRow]) -> Maybe:
    return _last_match(rows).map(_value)


def value_any(rows: Sequence[ConditionalRow]) -> Maybe:
    return _all_matches(rows).map(_each(_value))


def value_count(n: int) -> Strategy:
    def strategy(rows: Sequence[ConditionalRow]) -> Maybe:
        return _all_matches(rows).map(_take(n)).map(_each(_value))
    return strategy


def function_first(rows: Sequence[ConditionalRow]) -> Maybe:
    return _first_match(rows).map(_invoke)


def function_last(rows: Sequence[ConditionalRow]) -> Maybe:
    return _last_match(rows).map(_invoke)


def function_any(rows: Sequence[ConditionalRow]) -> Maybe:
    return _all_matches(rows).map(_each(_invoke))


def function_count(n: int) -> Strategy:
    def strategy(rows: Sequence[ConditionalRow]) -> Maybe:
        return _all_matches(rows).map(_take(n)).map(_each(_invoke))
    return strategy


_NAMED_STRATEGIES: Dict[Tuple[RowKind, RunMode], Strategy] = {
    (RowKind.FUNCTION, RunMode.FIRST): function_first,
    (RowKind.FUNCTION, RunMode.LAST): function_last,
    (RowKind.FUNCTION, RunMode.ANY): function_any,
    (RowKind.VALUE, RunMode.FIRST): value_first,
    (RowKind.VALUE, RunMode.LAST): value_last,
    (RowKind.VALUE, RunMode.ANY): value_any,
}

_COUNT_STRATEGIES: Dict[RowKind, Callable[[int], Strategy]] = {
    RowKind.FUNCTION: function_count,
    RowKind.VALUE: value_count,
}


def resolve_strategy(kind: Optional[RowKind], mode: Any) -> Optional[Strategy]:
    """
    Pick the strategy for a table of ``kind`` rows run in ``mode``.

    Returns:
        The strategy, or None when the kind is unknown or the mode invalid
    """
    parsed = parse_mode(mode)
    if kind is None or parsed is None:
        return None
    if isinstance(parsed, RunMode):
        return _NAMED_STRATEGIES[(kind, parsed)]
    return _COUNT_STRATEGIES[kind](parsed)


# =============================================================================
# Dispatcher
# =============================================================================

def _selected_indices(rows: Sequence[ConditionalRow], mode: Union[RunMode, int]) -> List[int]:
    matched = [i for i, row in enumerate(rows) if row.condition]
    if not matched:
        return []
    if mode is RunMode.FIRST:
        return matched[:1]
    if mode is RunMode.LAST:
        return matched[-1:]
    if mode is RunMode.ANY:
        return matched
    return matched[:mode]


def _resolution(mode: Union[RunMode, int], result: Maybe) -> Resolution:
    if result.is_nothing():
        return Resolution.NO_MATCH
    if isinstance(mode, RunMode):
        return Resolution(mode.value)
    return Resolution.COUNT


def _record(
    trace: DecisionTrace,
    rows: Sequence[ConditionalRow],
    mode: Union[RunMode, int],
    result: Maybe,
) -> None:
    selected = set(_selected_indices(rows, mode))
    for index, row in enumerate(rows):
        trace.record(index, row.condition, selected=index in selected)
    trace.set_result(_resolution(mode, result), result.get_or_else(None))


def _classify(table: Any) -> Tuple[Optional[List[ConditionalRow]], str]:
    if not is_sequence(table):
        return None, "table is not a sequence"
    try:
        rows = as_rows(table)
    except InvalidRowError as e:
        return None, str(e)
    if table_kind(rows) is None:
        return None, "table is empty or mixes value and function rows"
    return rows, ""


def decide(
    mode: RunType,
    table: Any,
    trace: Optional[DecisionTrace] = None
) -> Maybe:
    """
    Evaluate ``table`` with the strategy selected by its row kind and ``mode``.

    Args:
        mode: "first", "last", "any", a RunMode, or a positive int N
        table: Sequence of conditional rows (plain 2-/3-tuples are accepted)
        trace: Optional trace that receives one entry per row

    Returns:
        Maybe holding the value, the function result, or a list of them;
        Nothing when no row matched or the table is broken

    Raises:
        BrokenTableError: If no strategy fits and the policy is ``raise``
    """
    tracing = settings.get_nested("decision.enable_tracing", False)
    if trace is None and tracing:
        trace = DecisionTrace()
    if trace is not None:
        trace.mode = mode

    rows, reason = _classify(table)
    strategy = resolve_strategy(table_kind(rows) if rows else None, mode)
    if strategy is None:
        if rows is not None:
            reason = f"unknown run mode {mode!r}"
        if trace is not None:
            trace.set_result(Resolution.BROKEN)
        report_broken_table(mode, reason)
        return Nothing()

    result = strategy(rows)

    if trace is not None:
        _record(trace, rows, parse_mode(mode), result)
        if tracing and logger.is_enabled_for(logging.DEBUG):
            logger.debug(trace.to_compact_string())

    return result
