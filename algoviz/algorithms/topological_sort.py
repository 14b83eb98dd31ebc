"""
topological_sort.py - Kahn's Algorithm
=======================================
Repeatedly removes a node with in-degree 0 (FIFO queue, seeded in node
order) and decrements the in-degree of its successors.  If the queue runs
dry before every node is output, the remaining nodes sit on a cycle and
the trace ends in CYCLE_DETECTED.

The in-degree table is a private copy built from the graph; the graph
itself is never touched.
"""

from collections import deque
from typing import Dict, List, Optional

from algoviz.algorithms.common import joined
from algoviz.engine.snapshot import Kind, Trace, TraceBuilder
from algoviz.errors import ConfigurationError
from algoviz.graph import EdgeState, Graph, NodeState


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def TopologicalSort(graph):",                      # 0
    "    indegree[v] ← number of incoming edges",       # 1
    "    queue ← [v with indegree[v] == 0]",            # 2
    "    while queue is not empty:",                    # 3
    "        u ← queue.dequeue(); order.append(u)",     # 4
    "        for v in adj(u):",                         # 5
    "            indegree[v] ← indegree[v] - 1",        # 6
    "            if indegree[v] == 0: queue.enqueue(v)",  # 7
    "    if |order| < |V|: cycle detected",             # 8
    "    return order",                                 # 9
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def topological_sort(graph: Graph) -> Trace:
    if not graph.directed:
        raise ConfigurationError("Topological sort needs a directed graph")
    if graph.node_count() == 0:
        raise ConfigurationError("Graph has no nodes")

    tb = TraceBuilder("topological_sort")
    indegree: Dict[str, int] = {nid: 0 for nid in graph.nodes}
    for edge in graph.edges.values():
        indegree[edge.target] += 1
    queue = deque(nid for nid, d in indegree.items() if d == 0)
    order: List[str] = []
    node_states = {nid: NodeState.UNVISITED for nid in graph.nodes}
    edge_states = {eid: EdgeState.DEFAULT for eid in graph.edges}
    for nid in queue:
        node_states[nid] = NodeState.FRONTIER

    def emit(kind: Kind, narration: str, line: int, current: Optional[str] = None) -> None:
        tb.emit(
            kind, narration, line=line,
            current=current,
            indegree=indegree,
            queue=list(queue),
            order=order,
            node_states=node_states,
            edge_states=edge_states,
        )

    degrees = ", ".join(f"{nid}:{d}" for nid, d in indegree.items())
    emit(
        Kind.INITIALIZE,
        f"In-degrees {degrees}. Nodes with in-degree 0: [{joined(queue)}].",
        line=2,
    )

    while queue:
        u = queue.popleft()
        order.append(u)
        node_states[u] = NodeState.CURRENT
        emit(
            Kind.PROCESS_NODE,
            f"Dequeue {u} and append it to the order: {joined(order, ' → ')}.",
            line=4, current=u,
        )

        for v, edge in graph.neighbours(u):
            indegree[v] -= 1
            edge_states[edge.id] = EdgeState.CHOSEN
            emit(
                Kind.DECREMENT_INDEGREE,
                f"Remove edge {edge.name}: in-degree of {v} drops to {indegree[v]}.",
                line=6, current=u,
            )
            if indegree[v] == 0:
                queue.append(v)
                node_states[v] = NodeState.FRONTIER
                emit(
                    Kind.ENQUEUE,
                    f"{v} has no remaining prerequisites; enqueue it.",
                    line=7, current=u,
                )

        node_states[u] = NodeState.VISITED

    if len(order) < graph.node_count():
        stuck = [nid for nid in graph.nodes if nid not in order]
        emit(
            Kind.CYCLE_DETECTED,
            f"Queue is empty but {joined(stuck)} still have incoming edges: "
            f"the graph has a cycle, no topological order exists.",
            line=8,
        )
    else:
        emit(Kind.COMPLETE, f"Topological order: {joined(order, ' → ')}.", line=9)
    return tb.build()
