"""
edge.py - Graph Edge
====================
Connects two nodes and carries a weight.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - Weight defaults to 1 for unweighted graphs; algorithms that ignore
    weights simply never read it.
  - Edge ids default to "source-target" so they stay stable across runs
    and read well in narrations.
"""

from enum import Enum
from typing import Optional, Tuple


# ---------------------------------------------------------------------------
# Edge State Enum - the visual vocabulary used in snapshot `edge_states`
# ---------------------------------------------------------------------------
class EdgeState(Enum):
    DEFAULT  = "default"   # thin, neutral grey
    ACTIVE   = "active"    # the edge being examined right now
    RELAXED  = "relaxed"   # improved a distance
    CHOSEN   = "chosen"    # part of the tree / MST / result
    REJECTED = "rejected"  # examined and explicitly skipped


# ---------------------------------------------------------------------------
# Edge
# ---------------------------------------------------------------------------
class Edge:
    """
    Attributes:
        id       : Unique identifier.
        source   : ID of the tail node.
        target   : ID of the head node.
        weight   : Numeric cost (default 1).  May be negative for Bellman-Ford.
        directed : If False, traversal works in both directions.
    """

    __slots__ = ("id", "source", "target", "weight", "directed")

    def __init__(
        self,
        source: str,
        target: str,
        weight: float = 1,
        directed: bool = False,
        edge_id: Optional[str] = None,
    ):
        sep = "->" if directed else "-"
        self.id:       str   = edge_id or f"{source}{sep}{target}"
        self.source:   str   = source
        self.target:   str   = target
        self.weight:   float = weight
        self.directed: bool  = directed

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def connects(self, node_a: str, node_b: str) -> bool:
        """True if this edge links node_a ↔ node_b (respects directedness)."""
        if self.directed:
            return self.source == node_a and self.target == node_b
        return {self.source, self.target} == {node_a, node_b}

    def other_end(self, node_id: str) -> Optional[str]:
        """Given one endpoint, return the other.  None if not traversable from node_id."""
        if node_id == self.source:
            return self.target
        if node_id == self.target and not self.directed:
            return self.source
        return None

    @property
    def endpoints(self) -> Tuple[str, str]:
        return (self.source, self.target)

    @property
    def name(self) -> str:
        """Display form used in narrations, e.g. "A-B" or "A→B"."""
        return f"{self.source}{'→' if self.directed else '-'}{self.target}"

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":       self.id,
            "source":   self.source,
            "target":   self.target,
            "weight":   self.weight,
            "directed": self.directed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            source=data["source"],
            target=data["target"],
            weight=data.get("weight", 1),
            directed=data.get("directed", False),
            edge_id=data.get("id"),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        arrow = " → " if self.directed else " ↔ "
        return f"Edge({self.source}{arrow}{self.target}, w={self.weight})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
