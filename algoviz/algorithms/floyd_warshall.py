"""
floyd_warshall.py - Floyd-Warshall (All-Pairs Shortest Paths)
==============================================================
The matrix algorithm.  Every snapshot carries the full N×N distance
matrix so the page can render it as a live grid.

Structure:
  for k in nodes:          ← "intermediate" node
      for i in nodes:
          for j in nodes:
              if dist[i][k] + dist[k][j] < dist[i][j]:
                  dist[i][j] = dist[i][k] + dist[k][j]

Records a Snapshot at:
  1. Initialisation (adjacency → matrix)
  2. Start of each k-round         →  ITERATION_START
  3. Each candidate pair (i, j)    →  RELAX (matrix changed) / NO_RELAX
  4. Final                         →  COMPLETE, or NEGATIVE_CYCLE when some
                                      closed walk i → k → i is negative

Pairs with i == k or j == k are skipped: they can never improve.  Node
order is the graph's insertion order.
"""

from typing import Dict, List, Optional

from algoviz.algorithms.common import INF, fmt
from algoviz.engine.snapshot import Kind, Trace, TraceBuilder
from algoviz.errors import ConfigurationError
from algoviz.graph import EdgeState, Graph, NodeState

MAX_NODES = 8

Matrix = Dict[str, Dict[str, float]]


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def FloydWarshall(graph):",                   # 0
    "    dist ← adjacency matrix (0 on diagonal)",  # 1
    "    next ← direct successor for every edge",  # 2
    "    for k in V:",                             # 3
    "        for i in V:",                         # 4
    "            for j in V:",                     # 5
    "                if dist[i][k] + dist[k][j] < dist[i][j]:",  # 6
    "                    dist[i][j] ← dist[i][k] + dist[k][j]",  # 7
    "                    next[i][j] ← next[i][k]",  # 8
    "    if dist[i][i] < 0 for some i: negative cycle",  # 9
    "    return dist, next",                       # 10
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def floyd_warshall(graph: Graph) -> Trace:
    nodes = graph.node_ids()
    if not nodes:
        raise ConfigurationError("Graph has no nodes")
    if len(nodes) > MAX_NODES:
        raise ConfigurationError(
            f"Floyd-Warshall is limited to {MAX_NODES} nodes (O(V³) steps), got {len(nodes)}"
        )

    tb = TraceBuilder("floyd_warshall")
    dist: Matrix = {i: {j: (0 if i == j else INF) for j in nodes} for i in nodes}
    nxt: Dict[str, Dict[str, Optional[str]]] = {
        i: {j: (i if i == j else None) for j in nodes} for i in nodes
    }
    for u, v, w, _ in graph.arcs():
        if w < dist[u][v]:
            dist[u][v] = w
            nxt[u][v] = v

    node_states = {nid: NodeState.UNVISITED for nid in nodes}
    edge_states = {eid: EdgeState.DEFAULT for eid in graph.edges}
    updates = 0

    def emit(kind: Kind, narration: str, line: int, k: Optional[str] = None,
             cell: Optional[tuple] = None) -> None:
        tb.emit(
            kind, narration, line=line,
            nodes=nodes,
            matrix=dist,
            next_hop=nxt,
            k=k,
            cell=cell,
            updates=updates,
            node_states=node_states,
            edge_states=edge_states,
        )

    emit(
        Kind.INITIALIZE,
        f"Initialise the {len(nodes)}×{len(nodes)} distance matrix: 0 on the diagonal, "
        f"edge weights where an edge exists, ∞ everywhere else.",
        line=1,
    )

    for k in nodes:
        node_states[k] = NodeState.CURRENT
        emit(Kind.ITERATION_START, f"k = {k}: allow paths that pass through {k}.", line=3, k=k)

        for i in nodes:
            if i == k:
                continue
            for j in nodes:
                if j == k:
                    continue
                via = dist[i][k] + dist[k][j]
                old = dist[i][j]
                _mark(graph, edge_states, i, k, j, EdgeState.ACTIVE)
                if via < old:
                    dist[i][j] = via
                    nxt[i][j] = nxt[i][k]
                    updates += 1
                    emit(
                        Kind.RELAX,
                        f"dist[{i}][{j}]: {fmt(dist[i][k])} + {fmt(dist[k][j])} = {fmt(via)} "
                        f"< {fmt(old)}, so route {i} → {j} through {k}.",
                        line=7, k=k, cell=(i, j),
                    )
                else:
                    emit(
                        Kind.NO_RELAX,
                        f"dist[{i}][{j}]: {fmt(dist[i][k])} + {fmt(dist[k][j])} = {fmt(via)} "
                        f"is not shorter than {fmt(old)}.",
                        line=6, k=k, cell=(i, j),
                    )
                _mark(graph, edge_states, i, k, j, EdgeState.DEFAULT)

        node_states[k] = NodeState.VISITED

    for i in nodes:
        for k in nodes:
            if dist[i][k] + dist[k][i] < 0:
                emit(
                    Kind.NEGATIVE_CYCLE,
                    f"The walk {i} → {k} → {i} costs {fmt(dist[i][k] + dist[k][i])}: "
                    f"the graph has a negative cycle, so shortest paths are undefined.",
                    line=9, cell=(i, k),
                )
                return tb.build()

    emit(
        Kind.COMPLETE,
        f"All-pairs shortest paths computed with {updates} update(s).",
        line=10,
    )
    return tb.build()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def reconstruct_path(next_hop, source: str, target: str) -> List[str]:
    """Walk the next-hop matrix from source to target.  [] when unreachable."""
    if next_hop[source][target] is None:
        return []
    path = [source]
    cur = source
    while cur != target and len(path) <= len(next_hop):
        cur = next_hop[cur][target]
        if cur is None:
            return []
        path.append(cur)
    return path


def _mark(graph: Graph, edge_states: Dict[str, EdgeState], i: str, k: str, j: str,
          state: EdgeState) -> None:
    for a, b in ((i, k), (k, j)):
        edge = graph.get_edge_between(a, b)
        if edge is not None:
            edge_states[edge.id] = state
