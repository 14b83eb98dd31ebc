"""
bfs.py - Breadth-First Search
==============================
Records a Snapshot at every meaningful event:
  1. Dequeue a node            →  it becomes CURRENT, joins the traversal order
  2. Examine each neighbour    →  DISCOVER (new, enqueued) or SKIP (seen)
  3. Queue empty               →  COMPLETE, or UNREACHABLE if some nodes
                                  were never discovered

Neighbours are examined in adjacency-list order and marked visited on
discovery, so each node is enqueued exactly once and
level[neighbour] = level[node] + 1 is fixed the first time it is seen.

Pseudocode lines are 0-indexed and match the PSEUDOCODE constant
exported alongside the generator so the UI can highlight them live.
"""

from collections import deque
from typing import Dict, List, Optional

from algoviz.algorithms.common import joined, require_node
from algoviz.engine.snapshot import Kind, Trace, TraceBuilder
from algoviz.graph import EdgeState, Graph, NodeState


# ---------------------------------------------------------------------------
# Pseudocode - each string is one displayed line; index = Snapshot.line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BFS(graph, start):",                           # 0
    "    queue ← [start]; visited ← {start}",           # 1
    "    level[start] ← 0",                             # 2
    "    while queue is not empty:",                    # 3
    "        node ← queue.dequeue()",                   # 4
    "        for neighbour in adj(node):",              # 5
    "            if neighbour not in visited:",         # 6
    "                visited.add(neighbour)",           # 7
    "                level[neighbour] ← level[node] + 1",  # 8
    "                queue.enqueue(neighbour)",         # 9
    "            else: skip",                           # 10
    "    return order, level",                          # 11
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bfs(graph: Graph, start: str) -> Trace:
    """
    Breadth-first traversal from `start`.

    Snapshot state:
        current, queue, order, visited, level, parent, discovered_edges,
        node_states, edge_states
    """
    require_node(graph, start, "start")

    tb = TraceBuilder("bfs")
    queue:   deque                     = deque([start])
    visited: List[str]                 = [start]        # discovery order
    order:   List[str]                 = []
    level:   Dict[str, int]            = {start: 0}
    parent:  Dict[str, Optional[str]]  = {start: None}
    tree:    List[str]                 = []
    node_states = {nid: NodeState.UNVISITED for nid in graph.nodes}
    edge_states = {eid: EdgeState.DEFAULT for eid in graph.edges}
    node_states[start] = NodeState.FRONTIER

    def emit(kind: Kind, narration: str, line: int, current: Optional[str] = None) -> None:
        tb.emit(
            kind, narration, line=line,
            current=current,
            queue=list(queue),
            order=order,
            visited=visited,
            level=level,
            parent=parent,
            discovered_edges=tree,
            node_states=node_states,
            edge_states=edge_states,
        )

    emit(
        Kind.INITIALIZE,
        f"Start BFS at {start}: enqueue it and mark it visited at level 0.",
        line=1,
    )

    while queue:
        node = queue.popleft()
        order.append(node)
        node_states[node] = NodeState.CURRENT
        emit(
            Kind.DEQUEUE,
            f"Dequeue {node} (level {level[node]}). Queue is now [{joined(queue)}].",
            line=4, current=node,
        )

        for nbr, edge in graph.neighbours(node):
            if nbr not in level:
                visited.append(nbr)
                level[nbr]  = level[node] + 1
                parent[nbr] = node
                queue.append(nbr)
                tree.append(edge.id)
                node_states[nbr]     = NodeState.FRONTIER
                edge_states[edge.id] = EdgeState.CHOSEN
                emit(
                    Kind.DISCOVER,
                    f"Discover {nbr} from {node}: level {level[nbr]}, enqueue it.",
                    line=9, current=node,
                )
            else:
                if edge_states[edge.id] is EdgeState.DEFAULT:
                    edge_states[edge.id] = EdgeState.REJECTED
                emit(
                    Kind.SKIP,
                    f"{nbr} was already visited; skip edge {edge.name}.",
                    line=10, current=node,
                )

        node_states[node] = NodeState.VISITED

    unreached = [nid for nid in graph.nodes if nid not in level]
    if unreached:
        emit(
            Kind.UNREACHABLE,
            f"BFS finished. Order: {joined(order, ' → ')}. "
            f"Not reachable from {start}: {joined(unreached)}.",
            line=11,
        )
    else:
        emit(
            Kind.COMPLETE,
            f"BFS complete. Order: {joined(order, ' → ')}.",
            line=11,
        )
    return tb.build()
