"""
Tests for DecisionTrace and TraceCollector.
"""

from decision_monads import Decision, DecisionTrace, Resolution, RowEntry, TraceCollector


class TestRowEntry:

    def test_compact_string(self):
        assert RowEntry(0, True, selected=True).to_compact_string() == "  row 0: PASS <-"
        assert RowEntry(3, False).to_compact_string() == "  row 3: FAIL"

    def test_to_dict(self):
        assert RowEntry(1, True).to_dict() == {"index": 1, "condition": True, "selected": False}


class TestDecisionTrace:

    def test_record_and_result(self):
        trace = DecisionTrace(name="tier", mode="first")
        trace.record(0, False)
        trace.record(1, "truthy", selected=True)
        trace.set_result(Resolution.FIRST, "silver")

        assert trace.rows_checked == 2
        assert trace.rows_passed == 1
        assert trace.selected_indices == [1]
        assert trace.end_time is not None
        assert trace.elapsed_ms >= 0

    def test_to_dict(self):
        trace = DecisionTrace(name="tier", mode="first")
        trace.record(0, True, selected=True)
        trace.set_result(Resolution.FIRST, "gold")

        data = trace.to_dict()

        assert data["name"] == "tier"
        assert data["mode"] == "first"
        assert data["resolution"] == "first"
        assert data["result"] == "'gold'"
        assert data["selected"] == [0]
        assert len(data["entries"]) == 1

    def test_compact_string(self):
        trace = DecisionTrace(name="tier")
        trace.record(0, False)
        trace.record(1, True, selected=True)
        trace.set_result(Resolution.FIRST, "silver")

        assert trace.to_compact_string() == (
            "[DECISION] tier -> 'silver' (first)\n"
            "  row 0: FAIL\n"
            "  row 1: PASS <-"
        )

    def test_pending_trace(self):
        trace = DecisionTrace()

        assert trace.resolution is None
        assert trace.elapsed_ms == 0.0
        assert "pending" in trace.to_compact_string()


class TestTraceCollector:

    def test_collects_runs(self):
        collector = TraceCollector()
        table = Decision.of([(False, 1), (True, 2), (True, 3)])

        table.run("first", trace=collector.create_trace("a"))
        table.run("any", trace=collector.create_trace("b"))
        Decision.of([(False, 1)]).run(trace=collector.create_trace("c"))

        assert len(collector) == 3
        assert [t.name for t in collector] == ["a", "b", "c"]
        assert len(collector.get_traces_by_resolution(Resolution.NO_MATCH)) == 1

        summary = collector.get_summary()
        assert summary.total_traces == 3
        assert summary.by_resolution == {"first": 1, "any": 1, "no_match": 1}
        assert summary.total_rows_checked == 7
        assert summary.total_rows_selected == 3
        assert summary.to_dict()["avg_rows_per_trace"] == 2.33

    def test_add_and_clear(self):
        collector = TraceCollector()
        collector.add_trace(DecisionTrace(name="x"))

        assert len(collector.get_traces()) == 1
        collector.clear()
        assert len(collector) == 0
        assert collector.get_summary().to_dict()["avg_rows_per_trace"] == 0
