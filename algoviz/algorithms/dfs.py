"""
dfs.py - Depth-First Search
============================
Recursive DFS.  The recursion body receives the trace builder's `emit`
explicitly, so the only thing it writes besides its own locals is the
trace.

Records a Snapshot at:
  1. Visit a node              →  CURRENT, pushed on the recursion stack
  2. Examine each neighbour    →  DISCOVER (tree edge, recurse) or SKIP
  3. All neighbours done       →  BACKTRACK to the caller
  4. Recursion unwinds         →  COMPLETE / UNREACHABLE

The `stack` in every snapshot is the live recursion path, which is what
the UI renders as the call-stack panel.
"""

from typing import Callable, Dict, List, Optional

from algoviz.algorithms.common import joined, require_node
from algoviz.engine.snapshot import Kind, Trace, TraceBuilder
from algoviz.graph import EdgeState, Graph, NodeState


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def DFS(graph, start):",                   # 0
    "    visited ← {}",                         # 1
    "    visit(start)",                         # 2
    "def visit(node):",                         # 3
    "    visited.add(node)",                    # 4
    "    for neighbour in adj(node):",          # 5
    "        if neighbour not in visited:",     # 6
    "            visit(neighbour)",             # 7
    "        else: skip",                       # 8
    "    return            # backtrack",        # 9
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dfs(graph: Graph, start: str) -> Trace:
    require_node(graph, start, "start")

    tb = TraceBuilder("dfs")
    stack:   List[str]                = []
    order:   List[str]                = []
    parent:  Dict[str, Optional[str]] = {start: None}
    tree:    List[str]                = []
    node_states = {nid: NodeState.UNVISITED for nid in graph.nodes}
    edge_states = {eid: EdgeState.DEFAULT for eid in graph.edges}

    def emit(kind: Kind, narration: str, line: int, current: Optional[str] = None) -> None:
        tb.emit(
            kind, narration, line=line,
            current=current,
            stack=stack,
            order=order,
            visited=order,
            parent=parent,
            discovered_edges=tree,
            node_states=node_states,
            edge_states=edge_states,
        )

    emit(Kind.INITIALIZE, f"Start DFS at {start}. Nothing visited yet.", line=2)
    _visit(graph, start, emit, stack, order, parent, tree, node_states, edge_states)

    unreached = [nid for nid in graph.nodes if nid not in parent]
    if unreached:
        emit(
            Kind.UNREACHABLE,
            f"DFS finished. Order: {joined(order, ' → ')}. "
            f"Not reachable from {start}: {joined(unreached)}.",
            line=9,
        )
    else:
        emit(Kind.COMPLETE, f"DFS complete. Order: {joined(order, ' → ')}.", line=9)
    return tb.build()


# ---------------------------------------------------------------------------
# Recursion
# ---------------------------------------------------------------------------
def _visit(
    graph: Graph,
    node: str,
    emit: Callable[..., None],
    stack: List[str],
    order: List[str],
    parent: Dict[str, Optional[str]],
    tree: List[str],
    node_states: Dict[str, NodeState],
    edge_states: Dict[str, EdgeState],
) -> None:
    stack.append(node)
    order.append(node)
    node_states[node] = NodeState.CURRENT
    depth = len(stack) - 1
    emit(Kind.VISIT, f"Visit {node} at depth {depth}.", line=4, current=node)

    for nbr, edge in graph.neighbours(node):
        if nbr not in parent:
            parent[nbr] = node
            tree.append(edge.id)
            edge_states[edge.id] = EdgeState.CHOSEN
            node_states[node] = NodeState.FRONTIER
            emit(
                Kind.DISCOVER,
                f"{nbr} is unvisited: follow tree edge {edge.name} and go deeper.",
                line=7, current=node,
            )
            _visit(graph, nbr, emit, stack, order, parent, tree, node_states, edge_states)
            node_states[node] = NodeState.CURRENT
        else:
            if edge_states[edge.id] is EdgeState.DEFAULT:
                edge_states[edge.id] = EdgeState.REJECTED
            emit(
                Kind.SKIP,
                f"{nbr} was already visited; skip edge {edge.name}.",
                line=8, current=node,
            )

    stack.pop()
    node_states[node] = NodeState.VISITED
    if stack:
        emit(
            Kind.BACKTRACK,
            f"All neighbours of {node} explored; backtrack to {stack[-1]}.",
            line=9, current=stack[-1],
        )
