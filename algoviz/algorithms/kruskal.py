"""
kruskal.py - Kruskal's Minimum Spanning Tree
=============================================
Edges are stable-sorted by weight (equal weights keep insertion order) and
accepted whenever their endpoints lie in different components of a
union-find forest (path compression + union by rank).

A disconnected graph yields a minimum spanning forest; that is still a
complete answer, so the trace ends in COMPLETE with the component count
in the narration.
"""

from typing import List, Optional

from algoviz.algorithms.common import fmt, require_undirected
from algoviz.algorithms.union_find import DisjointSet
from algoviz.engine.snapshot import Kind, Trace, TraceBuilder
from algoviz.errors import ConfigurationError
from algoviz.graph import EdgeState, Graph, NodeState


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Kruskal(graph):",                          # 0
    "    sort E by weight",                         # 1
    "    make_set(v) for v in V",                   # 2
    "    for (u, v, w) in sorted E:",               # 3
    "        if find(u) != find(v):",               # 4
    "            union(u, v); mst.append((u, v, w))",  # 5
    "        else: reject (would form a cycle)",    # 6
    "        if |mst| == |V| - 1: break",           # 7
    "    return mst",                               # 8
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def kruskal(graph: Graph) -> Trace:
    require_undirected(graph, "Kruskal's algorithm")
    if graph.node_count() == 0:
        raise ConfigurationError("Graph has no nodes")

    tb = TraceBuilder("kruskal")
    ordered = sorted(graph.edges.values(), key=lambda e: e.weight)
    ds = DisjointSet(graph.nodes)
    mst: List[str] = []
    total = 0
    node_states = {nid: NodeState.UNVISITED for nid in graph.nodes}
    edge_states = {eid: EdgeState.DEFAULT for eid in graph.edges}
    target = graph.node_count() - 1

    def emit(kind: Kind, narration: str, line: int, current: Optional[str] = None) -> None:
        tb.emit(
            kind, narration, line=line,
            current_edge=current,
            sorted_edges=[e.id for e in ordered],
            parent=ds.parent,
            rank=ds.rank,
            mst_edges=mst,
            total_weight=total,
            node_states=node_states,
            edge_states=edge_states,
        )

    emit(
        Kind.INITIALIZE,
        "Sort edges by weight: "
        + (", ".join(f"{e.name}({fmt(e.weight)})" for e in ordered) or "no edges")
        + ". Every node starts in its own set.",
        line=1,
    )

    for edge in ordered:
        if len(mst) == target:
            break
        u, v = edge.source, edge.target
        ru, rv = ds.find(u), ds.find(v)
        edge_states[edge.id] = EdgeState.ACTIVE
        emit(
            Kind.EXAMINE_EDGE,
            f"Examine {edge.name} ({fmt(edge.weight)}): find({u}) = {ru}, find({v}) = {rv}.",
            line=4, current=edge.id,
        )
        if ds.union(u, v):
            mst.append(edge.id)
            total += edge.weight
            edge_states[edge.id] = EdgeState.CHOSEN
            node_states[u] = node_states[v] = NodeState.IN_TREE
            emit(
                Kind.ADD_EDGE,
                f"Different sets: add {edge.name} to the MST and union them. "
                f"Total weight {fmt(total)}.",
                line=5, current=edge.id,
            )
        else:
            edge_states[edge.id] = EdgeState.REJECTED
            emit(
                Kind.REJECT_EDGE,
                f"{u} and {v} are already connected: {edge.name} would form a cycle.",
                line=6, current=edge.id,
            )

    components = ds.components()
    if components > 1:
        narration = (
            f"Graph is disconnected: minimum spanning forest of {components} trees, "
            f"{len(mst)} edges, total weight {fmt(total)}."
        )
    else:
        narration = f"MST complete with {len(mst)} edges, total weight {fmt(total)}."
    emit(Kind.COMPLETE, narration, line=8)
    return tb.build()
