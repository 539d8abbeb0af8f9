"""
Tests for the Decision wrapper.

Covers monad laws, every run mode for value and function rows,
tables built from Truth aggregates, malformed input and the
raise policy.

Run with: pytest tests/test_decision.py -v
"""

import pytest
from unittest.mock import MagicMock

from decision_monads import (
    Decision,
    FunctionRow,
    InvalidTableError,
    Nothing,
    RowKind,
    Truth,
    ValueRow,
)
from decision_monads.diagnostics import BROKEN_TABLE_MESSAGE, TYPE_ERROR_MESSAGE


# =============================================================================
# MONAD LAWS
# =============================================================================

class TestDecisionMonadLaws:
    """Left identity, right identity and associativity."""

    def test_left_identity(self):
        a = [(True, 1)]

        def f(rows):
            return Decision.of([(row[0], row[1] + 1) for row in rows])

        assert Decision.of(a).chain(f).join() == f(a).join()

    def test_left_identity_with_appended_row(self):
        a = [(True, 1)]

        def g(rows):
            return Decision.of(rows + [(True, 16)])

        assert Decision.of(a).chain(g).join() == g(a).join()

    def test_right_identity(self):
        a = [(True, 1)]

        assert Decision.of(a).chain(Decision.of).join() == Decision.of(a).join()
        assert Decision.of(a).chain(Decision.of) == Decision.of(a)

    def test_associativity(self):
        a = [(True, 1)]

        def g(rows):
            return Decision.of(rows + [(True, 16)])

        def f(rows):
            return Decision.of(rows + [(True, 18)])

        left = Decision.of(a).chain(g).chain(f)
        right = Decision.of(a).chain(lambda x: g(x).chain(f))

        assert left.join() == right.join()


# =============================================================================
# RUN MODES
# =============================================================================

class TestValueRows:
    """Run modes over (condition, value) rows."""

    def test_first_is_default(self, value_table):
        table = Decision.of(value_table)
        assert table.run().join() == 3
        assert table.run("first").join() == 3

    def test_last(self, value_table):
        assert Decision.of(value_table).run("last").join() == 4

    def test_any(self, value_table):
        assert Decision.of(value_table).run("any").join() == [3, 3.5, 3.76, 4]

    def test_count(self, value_table):
        assert Decision.of(value_table).run(2).join() == [3, 3.5]

    def test_count_larger_than_matches(self, value_table):
        assert Decision.of(value_table).run(7).join() == [3, 3.5, 3.76, 4]

    def test_no_match_is_nothing(self):
        table = Decision.of([(False, 1), (False, 2)])
        for mode in ("first", "last", "any", 3):
            assert table.run(mode).is_nothing()

    def test_default_mode_from_settings(self, monkeypatch, value_table):
        from decision_monads.settings import settings
        monkeypatch.setitem(settings["decision"], "default_mode", "last")

        assert Decision.of(value_table).run().join() == 4


class TestFunctionRows:
    """Run modes over (condition, func, argument) rows."""

    def test_all_modes(self, function_table):
        table = Decision.of(function_table)

        assert table.run().join() == 3
        assert table.run("last").join() == 9
        assert table.run("any").join() == [3, 4, 9]
        assert table.run(2).join() == [3, 4]

    def test_returns_result_not_function(self):
        def f(x):
            return x * 10

        assert Decision.of([(True, f, 4)]).run().join() == 40

    def test_only_selected_rows_are_invoked(self):
        first = MagicMock(return_value="a")
        second = MagicMock(return_value="b")

        Decision.of([(True, first, 1), (True, second, 2)]).run()

        first.assert_called_once_with(1)
        second.assert_not_called()

    def test_function_errors_propagate(self):
        def boom(_):
            raise ValueError("boom")

        with pytest.raises(ValueError):
            Decision.of([(True, boom, None)]).run()


class TestTruthConditions:
    """Tables whose conditions come from Truth aggregates."""

    def test_truth_driven_table(self):
        full = Truth.of([False, False, True]).xor()
        partial = Truth.of([False, False])

        table = Decision.of([
            (Truth.of([True, True, False]).and_(), 1),
            (Truth.of([True]).and_(), 2),
            (partial.nor(), 3),
            (True, 4),
            (False, 19),
            (full, 23),
            (False, 55),
        ])

        assert table.run().join() == 2
        assert table.run("last").join() == 23
        assert table.run("any").join() == [2, 3, 4, 23]
        assert table.run(2).join() == [2, 3]


# =============================================================================
# CONSTRUCTION
# =============================================================================

class TestDecisionOf:
    """Validation in Decision.of."""

    def test_rows_are_tagged(self, value_table, function_table):
        assert all(isinstance(r, ValueRow) for r in Decision.of(value_table).join())
        assert all(isinstance(r, FunctionRow) for r in Decision.of(function_table).join())
        assert Decision.of(value_table).kind == RowKind.VALUE
        assert Decision.of(function_table).kind == RowKind.FUNCTION

    def test_rejects_non_sequence(self, logged_errors):
        Decision.of(False)

        logged_errors.assert_called_once_with(TYPE_ERROR_MESSAGE, False)

    def test_rejects_short_rows(self, logged_errors):
        Decision.of([[False], [True]])

        logged_errors.assert_called_once_with(TYPE_ERROR_MESSAGE, [[False], [True]])

    def test_rejects_empty_table(self, logged_errors):
        Decision.of([])

        logged_errors.assert_called_once_with(TYPE_ERROR_MESSAGE, [])

    def test_rejects_mixed_arity(self, logged_errors):
        table = [(True, 1), (True, str, 2)]
        Decision.of(table)

        logged_errors.assert_called_once_with(TYPE_ERROR_MESSAGE, table)

    def test_rejects_uncallable_function_slot(self, logged_errors):
        Decision.of([(True, "not callable", 2)])

        assert logged_errors.call_count == 1

    def test_degraded_table_runs_to_nothing(self, logged_errors):
        degraded = Decision.of("nope")

        assert degraded.join() == [(True, None)]
        assert degraded.run().is_nothing()
        assert degraded.run("any").join() == [None]

    def test_raise_policy(self, raise_policy):
        with pytest.raises(InvalidTableError) as exc_info:
            Decision.of([[False], [True]])

        assert exc_info.value.kind == "Decision"
        assert exc_info.value.value == [[False], [True]]


class TestBrokenRuns:
    """Runs that no strategy can serve."""

    @pytest.mark.parametrize("mode", ["sideways", "FIRST", 0, -1, True, 2.5])
    def test_unknown_mode(self, logged_errors, value_table, mode):
        result = Decision.of(value_table).run(mode)

        assert result == Nothing()
        assert logged_errors.call_args[0][0] == BROKEN_TABLE_MESSAGE

    def test_mixed_table_after_concat(self, logged_errors):
        mixed = Decision.of([(True, 1)]).concat(Decision.of([(True, str, 2)]))

        assert mixed.run().is_nothing()
        assert logged_errors.call_args[0][0] == BROKEN_TABLE_MESSAGE


# =============================================================================
# WRAPPER OPERATIONS
# =============================================================================

class TestDecisionOperations:
    """map, concat, head, tail, is_empty, join, ap."""

    def test_map_builds_new_decision(self, value_table):
        original = Decision.of(value_table)
        negated = original.map(lambda rows: [(not r.condition, r.value) for r in rows])

        assert negated.run().join() == 1
        assert original.run().join() == 3

    def test_concat_appends_in_order(self):
        combined = Decision.of([(False, 1)]).concat(Decision.of([(True, 2), (True, 3)]))

        assert combined.join() == [(False, 1), (True, 2), (True, 3)]
        assert combined.run("last").join() == 3

    def test_head_and_tail(self, value_table):
        table = Decision.of(value_table)

        assert table.head() == (False, 1)
        assert table.tail() == (True, 4)

    def test_empty_after_map(self, value_table):
        empty = Decision.of(value_table).map(lambda rows: [])

        assert empty.is_empty()
        assert empty.head() == []
        assert empty.tail() == []

    def test_join_is_idempotent(self, value_table):
        table = Decision.of(value_table)

        assert table.join() == table.join()
        assert Decision.of(table.join()) == table

    def test_join_returns_copy(self, value_table):
        table = Decision.of(value_table)
        rows = table.join()
        rows.clear()

        assert len(table.join()) == len(value_table)

    def test_ap(self, value_table):
        count_true = Decision.of([(True, 0)]).map(lambda _: lambda rows: [(True, sum(1 for r in rows if r[0]))])

        assert count_true.ap(Decision.of(value_table)).run().join() == 4

    def test_inspect(self):
        assert Decision.of([(True, 1)]).inspect().startswith("Decision(")
