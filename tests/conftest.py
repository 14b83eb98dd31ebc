"""Shared fixtures: the example graphs every page starts with and a
deterministic, manually clocked Player."""

import pytest

from algoviz.engine import Kind, ManualClock, Player, TickScheduler, TraceBuilder
from algoviz.graph import Graph


# ---------------------------------------------------------------------------
# Graphs
# ---------------------------------------------------------------------------
@pytest.fixture
def traversal_graph() -> Graph:
    return Graph.from_edge_list("A, B, C, D, E, F", "A-B, A-D, B-C, B-D, C-E, D-F, E-F")


@pytest.fixture
def weighted_graph() -> Graph:
    return Graph.from_edge_list("A, B, C, D, E", "A-B:4, A-D:2, B-C:5, B-D:1, C-E:2, D-E:8, D-C:6")


@pytest.fixture
def mst_graph() -> Graph:
    return Graph.from_edge_list(
        "A, B, C, D, E, F",
        "A-B:4, A-D:2, B-C:1, B-D:5, C-E:8, D-E:10, D-F:7, E-F:6",
    )


@pytest.fixture
def dag() -> Graph:
    return Graph.from_edge_list("A, B, C, D, E, F", "A->B, A->C, B->D, C->D, D->E, E->F", directed=True)


# ---------------------------------------------------------------------------
# Playback
# ---------------------------------------------------------------------------
@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def scheduler(clock) -> TickScheduler:
    return TickScheduler(clock=clock)


@pytest.fixture
def player(scheduler) -> Player:
    return Player(scheduler=scheduler, speed=1.0)


def make_trace(steps: int = 4, algorithm: str = "demo"):
    """initialize, (steps - 2) compares, complete."""
    tb = TraceBuilder(algorithm)
    tb.emit(Kind.INITIALIZE, "start", line=0, value=0)
    for k in range(1, steps - 1):
        tb.emit(Kind.COMPARE, f"step {k}", line=1, value=k)
    tb.emit(Kind.COMPLETE, "done", line=2, value=steps - 1)
    return tb.build()


@pytest.fixture
def trace():
    return make_trace(4)


@pytest.fixture
def trace_factory():
    return make_trace
