"""
dijkstra.py - Dijkstra's Shortest-Path Algorithm
=================================================
Array-scan Dijkstra (the textbook O(V²) form).  At every outer iteration
the unvisited node with the smallest tentative distance is chosen by a
linear scan over the nodes in insertion order, so ties always go to the
first node found.  Distances only change on a strict improvement.

Records a Snapshot at:
  1. Initialise distances     →  all ∞ except the source
  2. Select the minimum node  →  SELECT_MIN (its distance is now final)
  3. Each outgoing edge       →  RELAX (improved) / NO_RELAX / SKIP (neighbour final)
  4. Nothing left reachable   →  COMPLETE, or UNREACHABLE if some distances stay ∞

Correctness note: Dijkstra requires non-negative weights; a graph with a
negative edge is rejected as a configuration error.
"""

from typing import Dict, List, Optional

from algoviz.algorithms.common import INF, fmt, joined, path_to, require_node
from algoviz.engine.snapshot import Kind, Trace, TraceBuilder
from algoviz.errors import ConfigurationError
from algoviz.graph import EdgeState, Graph, NodeState


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, source):",                     # 0
    "    dist ← {v: ∞ for v in V}; dist[source] ← 0",   # 1
    "    unvisited ← V",                                # 2
    "    while unvisited has a node with dist < ∞:",    # 3
    "        u ← unvisited node with min dist",         # 4
    "        unvisited.remove(u)",                      # 5
    "        for (v, w) in adj(u):",                    # 6
    "            if dist[u] + w < dist[v]:",            # 7
    "                dist[v] ← dist[u] + w; prev[v] ← u",  # 8
    "            else: keep dist[v]",                   # 9
    "    return dist, prev",                            # 10
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dijkstra(graph: Graph, source: str) -> Trace:
    require_node(graph, source, "source")
    if graph.has_negative_edges():
        raise ConfigurationError(
            "Dijkstra requires non-negative edge weights; use Bellman-Ford instead"
        )

    tb = TraceBuilder("dijkstra")
    dist:      Dict[str, float]         = {nid: INF for nid in graph.nodes}
    prev:      Dict[str, Optional[str]] = {nid: None for nid in graph.nodes}
    prev_edge: Dict[str, str]           = {}
    finalised: List[str]                = []
    dist[source] = 0
    node_states = {nid: NodeState.UNVISITED for nid in graph.nodes}
    edge_states = {eid: EdgeState.DEFAULT for eid in graph.edges}
    node_states[source] = NodeState.SOURCE

    def emit(kind: Kind, narration: str, line: int, current: Optional[str] = None) -> None:
        tb.emit(
            kind, narration, line=line,
            current=current,
            distances=dist,
            previous=prev,
            visited=finalised,
            node_states=node_states,
            edge_states=edge_states,
        )

    emit(
        Kind.INITIALIZE,
        f"Initialise: dist[{source}] = 0, every other distance = ∞.",
        line=1,
    )

    while True:
        u = _select_min(graph, dist, finalised)
        if u is None:
            break
        finalised.append(u)
        node_states[u] = NodeState.CURRENT
        if u in prev_edge:
            edge_states[prev_edge[u]] = EdgeState.CHOSEN
        emit(
            Kind.SELECT_MIN,
            f"Select {u}: smallest tentative distance {fmt(dist[u])}. It is now final.",
            line=4, current=u,
        )

        for v, edge in graph.neighbours(u):
            if v in finalised:
                emit(
                    Kind.SKIP,
                    f"Edge {edge.name}: {v} is already final, skip.",
                    line=6, current=u,
                )
                continue

            candidate = dist[u] + edge.weight
            if candidate < dist[v]:
                old = dist[v]
                dist[v] = candidate
                prev[v] = u
                if v in prev_edge and edge_states[prev_edge[v]] is EdgeState.RELAXED:
                    edge_states[prev_edge[v]] = EdgeState.DEFAULT
                prev_edge[v] = edge.id
                edge_states[edge.id] = EdgeState.RELAXED
                node_states[v] = NodeState.FRONTIER
                emit(
                    Kind.RELAX,
                    f"Relax {edge.name}: {fmt(dist[u])} + {fmt(edge.weight)} = "
                    f"{fmt(candidate)} < {fmt(old)}, so dist[{v}] = {fmt(candidate)}.",
                    line=8, current=u,
                )
            else:
                emit(
                    Kind.NO_RELAX,
                    f"Edge {edge.name}: {fmt(dist[u])} + {fmt(edge.weight)} = "
                    f"{fmt(candidate)} is not better than {fmt(dist[v])}.",
                    line=9, current=u,
                )

        node_states[u] = NodeState.SOURCE if u == source else NodeState.VISITED

    summary = ", ".join(f"{nid}:{fmt(d)}" for nid, d in dist.items())
    unreached = [nid for nid, d in dist.items() if d == INF]
    if unreached:
        emit(
            Kind.UNREACHABLE,
            f"Done. Distances {summary}. Not reachable from {source}: {joined(unreached)}.",
            line=10,
        )
    else:
        emit(Kind.COMPLETE, f"Done. Final distances {summary}.", line=10)
    return tb.build()


def shortest_path(trace: Trace, target: str) -> List[str]:
    """Rebuild source → target from the last snapshot's `previous` map."""
    prev = dict(trace.last.state["previous"])
    if trace.last.state["distances"][target] == INF:
        return []
    return path_to(prev, target)


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------
def _select_min(graph: Graph, dist: Dict[str, float], finalised: List[str]) -> Optional[str]:
    best: Optional[str] = None
    for nid in graph.nodes:
        if nid in finalised or dist[nid] == INF:
            continue
        if best is None or dist[nid] < dist[best]:
            best = nid
    return best
