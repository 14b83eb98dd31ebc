"""
prim.py - Prim's Minimum Spanning Tree
=======================================
Grows one tree from `start` (default: the first node).  Each round scans
the edge list in insertion order and keeps the first crossing edge with
the strictly smallest weight, so equal-weight ties are broken by edge
order, exactly as the scan encounters them.

Records a Snapshot at:
  1. Initialise tree = {start}
  2. Every crossing edge examined in a round     →  EXAMINE_EDGE
  3. Cheapest crossing edge added                 →  ADD_EDGE
  4. Tree spans the graph                         →  COMPLETE
     No crossing edge left but nodes remain       →  UNREACHABLE
"""

from typing import List, Optional

from algoviz.algorithms.common import fmt, joined, require_node, require_undirected
from algoviz.engine.snapshot import Kind, Trace, TraceBuilder
from algoviz.graph import Edge, EdgeState, Graph, NodeState


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Prim(graph, start):",                              # 0
    "    tree ← {start}; mst ← []",                         # 1
    "    while |tree| < |V|:",                              # 2
    "        best ← none",                                  # 3
    "        for (u, v, w) in E:",                          # 4
    "            if exactly one of u, v in tree and w < best.w:",  # 5
    "                best ← (u, v, w)",                     # 6
    "        if best is none: stop (graph is disconnected)",  # 7
    "        mst.append(best); tree.add(new endpoint)",     # 8
    "    return mst",                                       # 9
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def prim(graph: Graph, start: Optional[str] = None) -> Trace:
    require_undirected(graph, "Prim's algorithm")
    if start is None:
        ids = graph.node_ids()
        start = ids[0] if ids else None
    require_node(graph, start, "start")

    tb = TraceBuilder("prim")
    tree:  List[str] = [start]
    mst:   List[str] = []
    total = 0
    node_states = {nid: NodeState.UNVISITED for nid in graph.nodes}
    edge_states = {eid: EdgeState.DEFAULT for eid in graph.edges}
    node_states[start] = NodeState.IN_TREE

    def emit(kind: Kind, narration: str, line: int, candidate: Optional[str] = None) -> None:
        tb.emit(
            kind, narration, line=line,
            tree=tree,
            mst_edges=mst,
            total_weight=total,
            candidate=candidate,
            node_states=node_states,
            edge_states=edge_states,
        )

    emit(Kind.INITIALIZE, f"Start Prim's algorithm from {start}: the tree is {{{start}}}.", line=1)

    while len(tree) < graph.node_count():
        best: Optional[Edge] = None
        for edge in graph.edges.values():
            if (edge.source in tree) == (edge.target in tree):
                continue
            previous = edge_states[edge.id]
            edge_states[edge.id] = EdgeState.ACTIVE
            if best is None or edge.weight < best.weight:
                best = edge
                verdict = "new cheapest crossing edge"
            else:
                verdict = f"not cheaper than {best.name} ({fmt(best.weight)})"
            emit(
                Kind.EXAMINE_EDGE,
                f"Crossing edge {edge.name} ({fmt(edge.weight)}): {verdict}.",
                line=6 if best is edge else 5, candidate=best.id,
            )
            edge_states[edge.id] = previous

        if best is None:
            missing = [nid for nid in graph.nodes if nid not in tree]
            emit(
                Kind.UNREACHABLE,
                f"No edge leaves the tree. Graph is disconnected; "
                f"not reachable: {joined(missing)}.",
                line=7,
            )
            return tb.build()

        new_node = best.target if best.source in tree else best.source
        tree.append(new_node)
        mst.append(best.id)
        total += best.weight
        edge_states[best.id] = EdgeState.CHOSEN
        node_states[new_node] = NodeState.IN_TREE
        emit(
            Kind.ADD_EDGE,
            f"Add {best.name} ({fmt(best.weight)}) to the MST; {new_node} joins the tree. "
            f"Total weight {fmt(total)}.",
            line=8, candidate=best.id,
        )

    emit(
        Kind.COMPLETE,
        f"MST complete with {len(mst)} edges, total weight {fmt(total)}.",
        line=9,
    )
    return tb.build()
