"""
recorder.py - Run Recorder & Trace Export
==========================================
Runs a registered generator once, times it, and condenses the resulting
Trace into the numbers the analytics card shows.

Usage:
    rec = record("dijkstra", graph=g, source="A")
    rec.summary.total_steps          # the analytics card
    export_trace(rec.trace)          # JSON-ready list for the browser
"""

import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import structlog

from algoviz.engine.snapshot import Trace

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Summary dataclass - what the analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class TraceSummary:
    total_steps:     int            = 0
    kind_counts:     Dict[str, int] = field(default_factory=dict)   # {"compare": 45, "swap": 9, …}
    terminal_kind:   Optional[str]  = None
    final_narration: str            = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_steps":     self.total_steps,
            "kind_counts":     dict(self.kind_counts),
            "terminal_kind":   self.terminal_kind,
            "final_narration": self.final_narration,
        }


@dataclass
class Recording:
    algo_key:     str
    trace:        Trace
    summary:      TraceSummary
    wall_time_ms: float = 0.0


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------
def summarize(trace: Trace) -> TraceSummary:
    """Count snapshots per kind, in first-appearance order."""
    counts = Counter(s.kind.value for s in trace)
    last = trace.last
    return TraceSummary(
        total_steps=len(trace),
        kind_counts=dict(counts),
        terminal_kind=trace.terminal_kind.value if trace.terminal_kind else None,
        final_narration=last.narration if last is not None else "",
    )


def record(algo_key: str, **inputs: Any) -> Recording:
    """Run the generator registered under `algo_key` with `inputs`."""
    from algoviz.algorithms import generate

    t0 = time.perf_counter()
    trace = generate(algo_key, **inputs)
    wall_ms = (time.perf_counter() - t0) * 1000

    summary = summarize(trace)
    log.info(
        "trace.recorded",
        algorithm=algo_key,
        steps=summary.total_steps,
        terminal=summary.terminal_kind,
        wall_time_ms=round(wall_ms, 3),
    )
    return Recording(algo_key=algo_key, trace=trace, summary=summary, wall_time_ms=wall_ms)


def export_trace(trace: Trace) -> List[Dict[str, Any]]:
    """Serialisable copy of every snapshot (inf → None, enum → value)."""
    return trace.to_list(json_safe=True)
