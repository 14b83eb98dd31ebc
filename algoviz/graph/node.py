"""
node.py - Graph Node
=====================
Identity only.  Nodes carry no algorithm state: everything that changes
while an algorithm runs lives in the snapshots, never on the graph.
"""

from enum import Enum
from typing import Optional


# ---------------------------------------------------------------------------
# Node State Enum - the visual vocabulary used in snapshot `node_states`
# ---------------------------------------------------------------------------
class NodeState(Enum):
    UNVISITED  = "unvisited"   # default grey
    FRONTIER   = "frontier"    # seen but not yet processed (in queue / stack / heap)
    VISITED    = "visited"     # fully processed
    CURRENT    = "current"     # the node being expanded right now
    IN_TREE    = "in_tree"     # part of the MST / traversal tree
    SOURCE     = "source"      # start node


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
class Node:
    """
    Attributes:
        id    : Unique identifier (the label users type, e.g. "A").
        label : Human-readable name; defaults to the id.
    """

    __slots__ = ("id", "label")

    def __init__(self, node_id: str, label: Optional[str] = None):
        self.id:    str = node_id
        self.label: str = label or node_id

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {"id": self.id, "label": self.label}

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        return cls(node_id=data["id"], label=data.get("label"))

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
