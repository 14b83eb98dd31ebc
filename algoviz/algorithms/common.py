"""
common.py - Shared generator helpers
=====================================
Small precondition checks and formatting used by several generators.
"""

import math
from numbers import Real
from typing import Dict, Iterable, List, Optional, Sequence

from algoviz.errors import ConfigurationError, GeneratorError
from algoviz.graph import Graph

INF = float("inf")


def fmt(value) -> str:
    """Render a distance / key for narration: ∞ for infinity, 3 not 3.0."""
    if isinstance(value, float):
        if math.isinf(value):
            return "∞" if value > 0 else "-∞"
        if value.is_integer():
            return str(int(value))
    return str(value)


def require_node(graph: Graph, node_id: Optional[str], role: str = "start") -> str:
    if node_id is None or not graph.has_node(node_id):
        raise GeneratorError(f"{role.capitalize()} node {node_id!r} is not in the graph")
    return node_id


def require_undirected(graph: Graph, algorithm: str) -> None:
    if graph.directed:
        raise ConfigurationError(f"{algorithm} needs an undirected graph")


def require_values(values: Iterable, name: str = "values") -> List:
    """Copy `values` into a fresh list, rejecting empty or non-numeric input."""
    out = list(values)
    if not out:
        raise ConfigurationError(f"{name} must not be empty")
    for v in out:
        if isinstance(v, bool) or not isinstance(v, Real):
            raise ConfigurationError(f"{name} must be numbers, got {v!r}")
    return out


def path_to(prev: Dict[str, Optional[str]], target: str) -> List[str]:
    path = []
    cur: Optional[str] = target
    while cur is not None:
        path.append(cur)
        cur = prev.get(cur)
    path.reverse()
    return path


def joined(items: Sequence, sep: str = ", ") -> str:
    return sep.join(str(i) for i in items)
