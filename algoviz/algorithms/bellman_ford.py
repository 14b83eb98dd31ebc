"""
bellman_ford.py - Bellman-Ford Shortest Paths
==============================================
Relaxes every arc |V| - 1 times (undirected edges count as two arcs),
stopping early when a whole iteration changes nothing, then makes one
more pass: any arc that can still be relaxed proves a negative cycle
reachable from the source.

Records a Snapshot at:
  1. Initialise                       →  dist ∞ except source
  2. Start of each iteration          →  ITERATION_START
  3. Every arc                        →  RELAX / NO_RELAX / SKIP (tail still ∞)
  4. Iteration without any update     →  NO_CHANGE (early exit)
  5. Detection pass                   →  NEGATIVE_CYCLE or COMPLETE

A negative cycle is an answer, not an error.  Note that in an undirected
graph any negative edge forms one (u → v → u).
"""

from typing import Dict, List, Optional

from algoviz.algorithms.common import INF, fmt, joined, require_node
from algoviz.engine.snapshot import Kind, Trace, TraceBuilder
from algoviz.graph import EdgeState, Graph, NodeState


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BellmanFord(graph, source):",                  # 0
    "    dist ← {v: ∞ for v in V}; dist[source] ← 0",   # 1
    "    repeat |V| - 1 times:",                        # 2
    "        changed ← false",                          # 3
    "        for (u, v, w) in E:",                      # 4
    "            if dist[u] + w < dist[v]:",            # 5
    "                dist[v] ← dist[u] + w; changed ← true",  # 6
    "        if not changed: break",                    # 7
    "    for (u, v, w) in E:",                          # 8
    "        if dist[u] + w < dist[v]: negative cycle", # 9
    "    return dist",                                  # 10
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bellman_ford(graph: Graph, source: str) -> Trace:
    require_node(graph, source, "source")

    tb = TraceBuilder("bellman_ford")
    arcs = list(graph.arcs())
    dist: Dict[str, float]         = {nid: INF for nid in graph.nodes}
    prev: Dict[str, Optional[str]] = {nid: None for nid in graph.nodes}
    dist[source] = 0
    iteration = 0
    node_states = {nid: NodeState.UNVISITED for nid in graph.nodes}
    edge_states = {eid: EdgeState.DEFAULT for eid in graph.edges}
    node_states[source] = NodeState.SOURCE

    def emit(kind: Kind, narration: str, line: int, arc: Optional[str] = None) -> None:
        tb.emit(
            kind, narration, line=line,
            iteration=iteration,
            current_arc=arc,
            distances=dist,
            previous=prev,
            node_states=node_states,
            edge_states=edge_states,
        )

    emit(
        Kind.INITIALIZE,
        f"Initialise: dist[{source}] = 0, every other distance = ∞. "
        f"{len(arcs)} arcs will be relaxed up to {graph.node_count() - 1} times.",
        line=1,
    )

    for iteration in range(1, graph.node_count()):
        changed = False
        emit(Kind.ITERATION_START, f"Iteration {iteration}: relax every arc.", line=2)

        for u, v, w, edge in arcs:
            label = f"{u}→{v}"
            if dist[u] == INF:
                emit(Kind.SKIP, f"Arc {label}: {u} is not reached yet, skip.", line=4, arc=label)
                continue
            candidate = dist[u] + w
            if candidate < dist[v]:
                old = dist[v]
                dist[v] = candidate
                prev[v] = u
                changed = True
                edge_states[edge.id] = EdgeState.RELAXED
                if v != source:
                    node_states[v] = NodeState.VISITED
                emit(
                    Kind.RELAX,
                    f"Relax {label}: {fmt(dist[u])} + {fmt(w)} = {fmt(candidate)} "
                    f"< {fmt(old)}, so dist[{v}] = {fmt(candidate)}.",
                    line=6, arc=label,
                )
            else:
                emit(
                    Kind.NO_RELAX,
                    f"Arc {label}: {fmt(dist[u])} + {fmt(w)} = {fmt(candidate)} "
                    f"is not better than {fmt(dist[v])}.",
                    line=5, arc=label,
                )

        if not changed:
            emit(
                Kind.NO_CHANGE,
                f"No distance changed in iteration {iteration}; stop early.",
                line=7,
            )
            break

    for u, v, w, edge in arcs:
        if dist[u] != INF and dist[u] + w < dist[v]:
            edge_states[edge.id] = EdgeState.REJECTED
            emit(
                Kind.NEGATIVE_CYCLE,
                f"Arc {u}→{v} can still be relaxed ({fmt(dist[u])} + {fmt(w)} < "
                f"{fmt(dist[v])}): a negative cycle is reachable from {source}.",
                line=9, arc=f"{u}→{v}",
            )
            return tb.build()

    summary = ", ".join(f"{nid}:{fmt(d)}" for nid, d in dist.items())
    unreached = [nid for nid, d in dist.items() if d == INF]
    if unreached:
        emit(
            Kind.UNREACHABLE,
            f"No negative cycle. Distances {summary}. "
            f"Not reachable from {source}: {joined(unreached)}.",
            line=10,
        )
    else:
        emit(Kind.COMPLETE, f"No negative cycle. Final distances {summary}.", line=10)
    return tb.build()
