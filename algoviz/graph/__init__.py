"""
algoviz.graph
-------------
Graph data layer.  Public API:

    from algoviz.graph import Graph, Node, Edge
    from algoviz.graph import NodeState, EdgeState
"""

from algoviz.graph.node  import Node,  NodeState
from algoviz.graph.edge  import Edge,  EdgeState
from algoviz.graph.graph import Graph

__all__ = [
    "Node",      "NodeState",
    "Edge",      "EdgeState",
    "Graph",
]
