"""
graph.py - Graph Container & Text Import
=========================================
Single source of truth for graph structure.  Generators read it; nothing
writes to it once a run starts.

Responsibilities:
  1. Build nodes & edges                    (add_node / add_edge / create_*)
  2. Adjacency queries                      (neighbours, arcs, edges_from, …)
  3. Import from text                       (edge list, adjacency list)
  4. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Nodes & edges stored in insertion-ordered dicts keyed by id.  Iteration
    order IS the tie-break order every generator relies on (BFS neighbour
    order, Dijkstra/Prim first-found minimum, Kruskal stable sort).
  - A separate adjacency dict `_adj[node_id] → [(neighbour_id, edge_id)]`
    is maintained incrementally so neighbour queries are O(degree).
    Undirected edges appear on both endpoints, in edge insertion order.
  - Structural mistakes (duplicate node, unknown endpoint) raise
    ConfigurationError immediately: a bad graph never reaches a generator.
"""

import re
from typing import Dict, Iterator, List, Optional, Tuple, Union

from algoviz.errors import ConfigurationError
from algoviz.graph.edge import Edge
from algoviz.graph.node import Node

Number = Union[int, float]

_LABEL    = r"[A-Za-z0-9_]+"
_EDGE_RE  = re.compile(
    rf"^\s*({_LABEL})\s*(?:->|→|-)\s*({_LABEL})\s*(?::\s*(-?\d+(?:\.\d+)?))?\s*$"
)
_TOKEN_RE = re.compile(rf"^({_LABEL})(?:\((-?\d+(?:\.\d+)?)\))?$")


def _number(text: str) -> Number:
    value = float(text)
    return int(value) if value.is_integer() and "." not in text else value


class Graph:
    """
    Attributes:
        nodes      : {node_id: Node}
        edges      : {edge_id: Edge}
        directed   : bool - graph-level directedness
        _adj       : {node_id: [(neighbour_id, edge_id), …]}
    """

    def __init__(self, directed: bool = False):
        self.nodes:    Dict[str, Node] = {}
        self.edges:    Dict[str, Edge] = {}
        self.directed: bool            = directed
        self._adj:     Dict[str, List[Tuple[str, str]]] = {}

    # ==================================================================
    # NODES
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        if node.id in self.nodes:
            raise ConfigurationError(f"Duplicate node label '{node.id}'")
        self.nodes[node.id] = node
        self._adj[node.id] = []
        return node

    def create_node(self, node_id: str, label: Optional[str] = None) -> Node:
        """Convenience: create + add in one call."""
        return self.add_node(Node(node_id=node_id, label=label))

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self.nodes

    # ==================================================================
    # EDGES
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        for endpoint in edge.endpoints:
            if endpoint not in self.nodes:
                raise ConfigurationError(
                    f"Edge {edge.name} references unknown node '{endpoint}'"
                )
        if edge.id in self.edges:
            raise ConfigurationError(f"Duplicate edge {edge.name}")
        self.edges[edge.id] = edge
        self._adj[edge.source].append((edge.target, edge.id))
        if not edge.directed and edge.source != edge.target:
            self._adj[edge.target].append((edge.source, edge.id))
        return edge

    def create_edge(self, source: str, target: str, weight: Number = 1, edge_id: Optional[str] = None) -> Edge:
        if not self.directed and self.get_edge_between(target, source) is not None:
            raise ConfigurationError(f"Duplicate edge {source}-{target}")
        return self.add_edge(
            Edge(source=source, target=target, weight=weight, directed=self.directed, edge_id=edge_id)
        )

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        return self.edges.get(edge_id)

    def get_edge_between(self, a: str, b: str) -> Optional[Edge]:
        """First edge connecting a and b (direction-aware)."""
        for nbr, eid in self._adj.get(a, []):
            if nbr == b:
                return self.edges[eid]
        return None

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: str) -> List[Tuple[str, Edge]]:
        """Return [(neighbour_id, edge)] in edge insertion order."""
        return [(nbr, self.edges[eid]) for nbr, eid in self._adj.get(node_id, [])]

    def edges_from(self, node_id: str) -> List[Edge]:
        return [self.edges[eid] for _, eid in self._adj.get(node_id, [])]

    def arcs(self) -> Iterator[Tuple[str, str, Number, Edge]]:
        """Every traversable (u, v, weight, edge); undirected edges yield both ways."""
        for edge in self.edges.values():
            yield edge.source, edge.target, edge.weight, edge
            if not edge.directed and edge.source != edge.target:
                yield edge.target, edge.source, edge.weight, edge

    def degree(self, node_id: str) -> int:
        return len(self._adj.get(node_id, []))

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "directed": self.directed,
            "nodes":    [n.to_dict() for n in self.nodes.values()],
            "edges":    [e.to_dict() for e in self.edges.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        g = cls(directed=data.get("directed", False))
        for nd in data.get("nodes", []):
            g.add_node(Node.from_dict(nd))
        for ed in data.get("edges", []):
            g.add_edge(Edge.from_dict(ed))
        return g

    # ==================================================================
    # IMPORT FROM TEXT
    # ==================================================================

    # ---------- Node labels + edge list ----------
    @classmethod
    def from_edge_list(
        cls,
        nodes_text: str,
        edges_text: str,
        directed: bool = False,
    ) -> "Graph":
        """
        Parse comma-separated labels and edges.

            nodes_text: "A, B, C, D"
            edges_text: "A-B:4, A-D:2, B-C"      (weight defaults to 1)
                        "A->B, B->C"             (arrow form, same meaning)

        When nodes_text is blank the node set is taken from the edges in
        order of first appearance.
        """
        g = cls(directed=directed)

        labels = [t for t in re.split(r"[,\s]+", nodes_text or "") if t]
        for label in labels:
            if not re.fullmatch(_LABEL, label):
                raise ConfigurationError(f"Invalid node label '{label}'")
            g.create_node(label)

        tokens = [t.strip() for t in re.split(r"[,\n]+", edges_text or "") if t.strip()]
        for token in tokens:
            m = _EDGE_RE.match(token)
            if not m:
                raise ConfigurationError(
                    f"Invalid edge '{token}'; expected e.g. 'A-B' or 'A-B:4'"
                )
            src, tgt, w = m.group(1), m.group(2), m.group(3)
            if not labels:
                for endpoint in (src, tgt):
                    if not g.has_node(endpoint):
                        g.create_node(endpoint)
            g.create_edge(src, tgt, weight=_number(w) if w is not None else 1)

        if not g.nodes:
            raise ConfigurationError("Graph has no nodes")
        return g

    # ---------- Adjacency list ----------
    @classmethod
    def from_adjacency_list(cls, text: str, directed: bool = False) -> "Graph":
        """
        Parse a simple text adjacency list.

        Supported formats (one node per line):
            A: B C D            → A connects to B, C, D  (weight 1)
            A: B(3) C(7)        → A-B weight 3, A-C weight 7
            0: 1,2              → comma-separated
            A -> B, C           → arrow syntax

        Undirected graphs de-duplicate "A: B" / "B: A" pairs.
        """
        adjacency: Dict[str, List[Tuple[str, Number]]] = {}

        for line in (text or "").strip().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            for sep in (":", "→", "->"):
                if sep in line:
                    src, _, rest = line.partition(sep)
                    break
            else:
                raise ConfigurationError(f"Invalid adjacency line '{line}'; expected 'node: neighbours'")

            src = src.strip()
            if not re.fullmatch(_LABEL, src):
                raise ConfigurationError(f"Invalid node label '{src}'")
            if src in adjacency and adjacency[src]:
                raise ConfigurationError(f"Node '{src}' listed twice")
            adjacency.setdefault(src, [])

            for token in rest.replace(",", " ").split():
                m = _TOKEN_RE.match(token)
                if not m:
                    raise ConfigurationError(f"Invalid neighbour '{token}' for node '{src}'")
                tgt, w = m.group(1), m.group(2)
                adjacency.setdefault(tgt, [])
                adjacency[src].append((tgt, _number(w) if w is not None else 1))

        g = cls(directed=directed)
        for label in adjacency:
            g.create_node(label)
        for src, targets in adjacency.items():
            for tgt, w in targets:
                if not directed and g.get_edge_between(src, tgt) is not None:
                    continue
                g.create_edge(src, tgt, weight=w)

        if not g.nodes:
            raise ConfigurationError("Graph has no nodes")
        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def has_negative_edges(self) -> bool:
        return any(e.weight < 0 for e in self.edges.values())

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, directed={self.directed})"
