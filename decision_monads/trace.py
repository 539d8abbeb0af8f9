"""
Evaluation trace and trace collector for decision tables.

Answers "which rows were checked and why did this run return that" while
debugging tables or reviewing a batch of runs.
"""

from typing import Dict, List, Any, Optional
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Resolution(str, Enum):
    """
    How a decision run was resolved.

    - FIRST: first true row selected
    - LAST: last true row selected
    - ANY: every true row selected
    - COUNT: the first N true rows selected
    - NO_MATCH: no row had a true condition
    - BROKEN: no strategy fits the table and mode
    """
    FIRST = "first"
    LAST = "last"
    ANY = "any"
    COUNT = "count"
    NO_MATCH = "no_match"
    BROKEN = "broken"


@dataclass
class RowEntry:
    """
    Record of a single row examined during a run.

    Attributes:
        index: Position of the row in the table
        condition: Truthiness of the row condition
        selected: Whether the row contributed to the result
    """
    index: int
    condition: bool
    selected: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "index": self.index,
            "condition": self.condition,
            "selected": self.selected,
        }

    def to_compact_string(self) -> str:
        """Convert to compact string representation."""
        result_str = "PASS" if self.condition else "FAIL"
        marker = " <-" if self.selected else ""
        return f"  row {self.index}: {result_str}{marker}"


@dataclass
class DecisionTrace:
    """
    Trace of one ``Decision.run`` call.

    Attributes:
        name: Label for the table being run
        mode: Run mode as passed by the caller
        entries: One entry per row, in table order
        resolution: How the run was resolved
        result: Contained result (None when nothing matched)
        start_time: When evaluation started
        end_time: When evaluation completed
    """
    name: str = ""
    mode: Any = None
    entries: List[RowEntry] = field(default_factory=list)
    resolution: Optional[Resolution] = None
    result: Any = None
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None

    def record(self, index: int, condition: Any, selected: bool = False) -> None:
        """Record the evaluation of one row."""
        self.entries.append(
            RowEntry(index=index, condition=bool(condition), selected=selected)
        )

    def set_result(self, resolution: Resolution, result: Any = None) -> None:
        """Set the final outcome of the run."""
        self.resolution = resolution
        self.result = result
        self.end_time = datetime.now()

    @property
    def rows_checked(self) -> int:
        return len(self.entries)

    @property
    def rows_passed(self) -> int:
        return sum(1 for e in self.entries if e.condition)

    @property
    def selected_indices(self) -> List[int]:
        return [e.index for e in self.entries if e.selected]

    @property
    def elapsed_ms(self) -> float:
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds() * 1000

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert trace to dictionary representation.

        The result is included as its repr, since it may hold any value.
        """
        return {
            "name": self.name,
            "mode": str(getattr(self.mode, "value", self.mode)),
            "resolution": self.resolution.value if self.resolution else None,
            "result": repr(self.result),
            "rows_checked": self.rows_checked,
            "rows_passed": self.rows_passed,
            "selected": self.selected_indices,
            "elapsed_ms": round(self.elapsed_ms, 3),
            "entries": [e.to_dict() for e in self.entries],
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
        }

    def to_compact_string(self) -> str:
        """
        Convert to compact string for reports.

        Format:
        [DECISION] name -> result (resolution)
          row 0: FAIL
          row 1: PASS <-
        """
        name = self.name or "decision"
        resolution_str = self.resolution.value if self.resolution else "pending"
        lines = [f"[DECISION] {name} -> {self.result!r} ({resolution_str})"]
        for entry in self.entries:
            lines.append(entry.to_compact_string())
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"DecisionTrace(name={self.name!r}, "
            f"resolution={self.resolution.value if self.resolution else None}, "
            f"checked={self.rows_checked})"
        )


@dataclass
class TraceSummary:
    """
    Summary statistics for a collection of traces.

    Attributes:
        total_traces: Total number of traces
        by_resolution: Count by resolution type
        total_rows_checked: Total rows examined
        total_rows_selected: Total rows that contributed to a result
    """
    total_traces: int = 0
    by_resolution: Dict[str, int] = field(default_factory=dict)
    total_rows_checked: int = 0
    total_rows_selected: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "total_traces": self.total_traces,
            "by_resolution": self.by_resolution,
            "total_rows_checked": self.total_rows_checked,
            "total_rows_selected": self.total_rows_selected,
            "avg_rows_per_trace": (
                round(self.total_rows_checked / self.total_traces, 2)
                if self.total_traces > 0 else 0
            ),
        }


class TraceCollector:
    """
    Collector for decision traces across many runs.

    Example:
        collector = TraceCollector()

        trace = collector.create_trace("discount")
        Decision.of(rows).run("any", trace=trace)

        summary = collector.get_summary()
    """

    def __init__(self):
        self._traces: List[DecisionTrace] = []

    def create_trace(self, name: str = "") -> DecisionTrace:
        """Create a new trace and add it to the collection."""
        trace = DecisionTrace(name=name)
        self._traces.append(trace)
        return trace

    def add_trace(self, trace: DecisionTrace) -> None:
        self._traces.append(trace)

    def get_traces(self) -> List[DecisionTrace]:
        return list(self._traces)

    def get_traces_by_resolution(
        self,
        resolution: Resolution
    ) -> List[DecisionTrace]:
        """Get traces filtered by resolution type."""
        return [t for t in self._traces if t.resolution == resolution]

    def get_summary(self) -> TraceSummary:
        """
        Get summary statistics for all traces.

        Returns:
            TraceSummary with aggregated statistics
        """
        summary = TraceSummary(total_traces=len(self._traces))

        for trace in self._traces:
            if trace.resolution is not None:
                res_key = trace.resolution.value
                summary.by_resolution[res_key] = (
                    summary.by_resolution.get(res_key, 0) + 1
                )
            summary.total_rows_checked += trace.rows_checked
            summary.total_rows_selected += len(trace.selected_indices)

        return summary

    def clear(self) -> None:
        self._traces.clear()

    def __len__(self) -> int:
        return len(self._traces)

    def __iter__(self):
        return iter(self._traces)

    def __repr__(self) -> str:
        return f"TraceCollector(traces={len(self._traces)})"
