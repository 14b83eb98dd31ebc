"""
inputs.py - Configuration Layer
================================
Turns what a user typed (or what a browser POSTed) into validated
generator arguments.  Every failure raises ConfigurationError with a
message that can be shown to the user as-is; generation is never
attempted on bad input.

    build_inputs("bfs", {"nodes": "A, B", "edges": "A-B", "start": "A"})
        → {"graph": Graph(...), "start": "A"}

Missing fields fall back to the example inputs each page starts with
(DEFAULT_PAYLOADS), so {"algo": "kmp"} alone produces a trace.
"""

import re
from numbers import Real
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from algoviz.algorithms import get_algorithm
from algoviz.algorithms.knapsack import MAX_CAPACITY, MAX_ITEMS
from algoviz.algorithms.n_queens import MAX_N
from algoviz.algorithms.sudoku import DEFAULT_PUZZLE, validate_grid
from algoviz.algorithms.union_find import MAX_OPERATIONS, MAX_SIZE
from algoviz.errors import ConfigurationError
from algoviz.graph import Graph

Number = Union[int, float]

MAX_TEXT_LENGTH = 500

# (fields that replace the example, fields that belong to it)
_FIELD_GROUPS = (
    (("nodes", "edges", "adjacency"), ("nodes", "edges", "adjacency", "directed", "start", "source")),
    (("values",),                     ("values", "target")),
    (("weights", "values"),           ("weights", "values")),
    (("size",),                       ("size", "operations")),
)


# ---------------------------------------------------------------------------
# Page defaults
# ---------------------------------------------------------------------------
_WEIGHTED = {
    "nodes": "A, B, C, D, E",
    "edges": "A-B:4, A-D:2, B-C:5, B-D:1, C-E:2, D-E:8, D-C:6",
}

DEFAULT_PAYLOADS: Dict[str, Dict[str, Any]] = {
    "bfs":              {"nodes": "A, B, C, D, E, F",
                         "edges": "A-B, A-D, B-C, B-D, C-E, D-F, E-F", "start": "A"},
    "dfs":              {"nodes": "A, B, C, D, E, F",
                         "edges": "A-B, A-D, B-C, B-D, C-E, D-F, E-F", "start": "A"},
    "dijkstra":         dict(_WEIGHTED, source="A"),
    "prim":             {"nodes": "A, B, C, D, E, F",
                         "edges": "A-B:4, A-D:2, B-C:1, B-D:5, C-E:8, D-E:10, D-F:7, E-F:6"},
    "kruskal":          {"nodes": "A, B, C, D, E, F",
                         "edges": "A-B:4, A-D:2, B-C:1, B-D:5, C-E:8, D-E:10, D-F:7, E-F:6"},
    "bellman_ford":     {"nodes": "A, B, C, D, E",
                         "edges": "A->B:4, A->D:2, B->C:5, D->B:-1, C->E:2, D->E:8, D->C:6",
                         "directed": True, "source": "A"},
    "topological_sort": {"nodes": "A, B, C, D, E, F",
                         "edges": "A->B, A->C, B->D, C->D, D->E, E->F", "directed": True},
    "selection_sort":   {"values": [64, 34, 25, 12, 22, 11, 90, 88, 45, 50]},
    "counting_sort":    {"values": [4, 2, 8, 3, 1, 9, 6, 5, 7]},
    "quick_sort":       {"values": [38, 27, 43, 3, 9, 82, 10]},
    "merge_sort":       {"values": [38, 27, 43, 3, 9, 82, 10]},
    "bucket_sort":      {"values": [0.78, 0.17, 0.39, 0.26, 0.72, 0.94, 0.21, 0.12, 0.23, 0.68],
                         "buckets": 5},
    "linear_search":    {"values": [45, 23, 67, 12, 89, 34, 56, 78, 90, 11], "target": 34},
    "binary_search":    {"values": [11, 12, 23, 34, 45, 56, 67, 78, 89, 90], "target": 67},
    "kmp":              {"text": "ABABDABACDABABCABAB", "pattern": "ABABCABAB"},
    "n_queens":         {"n": 4},
    "sudoku":           {"grid": DEFAULT_PUZZLE},
    "floyd_warshall":   {"nodes": "A, B, C, D, E",
                         "edges": "A->B:4, A->D:2, B->C:5, B->D:1, C->E:2, D->E:8, D->C:6, E->B:3",
                         "directed": True},
    "union_find":       {"size": 8,
                         "operations": "union 0 1; union 2 3; union 0 2; union 4 5; union 6 7; "
                                       "union 0 4; find 1; union 0 6; find 7"},
    "huffman":          {"text": "HUFFMAN CODING ALGORITHM"},
    "knapsack":         {"weights": [2, 3, 4, 5], "values": [3, 4, 5, 6], "capacity": 8},
}


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------
def parse_number_list(
    text: Union[str, Sequence[Any]],
    *,
    integers: bool = False,
    minimum: Optional[Number] = None,
    maximum: Optional[Number] = None,
    max_items: int = 200,
) -> List[Number]:
    """
    "64, 34, 25" → [64, 34, 25].  Commas and/or whitespace separate
    values.  A ready-made list is validated the same way.
    """
    if isinstance(text, str):
        tokens = [t for t in re.split(r"[,\s]+", text.strip()) if t]
        values = [_to_number(t) for t in tokens]
    elif isinstance(text, (list, tuple)):
        values = [_to_number(v) for v in text]
    else:
        raise ConfigurationError("Values must be a comma-separated string or a list of numbers")

    if not values:
        raise ConfigurationError("Enter at least one value")
    if len(values) > max_items:
        raise ConfigurationError(f"At most {max_items} values are supported, got {len(values)}")

    for v in values:
        if integers and not isinstance(v, int):
            raise ConfigurationError(f"Only whole numbers are allowed, got {v}")
        if minimum is not None and v < minimum:
            raise ConfigurationError(f"Values must be ≥ {minimum}, got {v}")
        if maximum is not None and v > maximum:
            raise ConfigurationError(f"Values must be ≤ {maximum}, got {v}")
    return values


def _to_number(token: Any) -> Number:
    if isinstance(token, bool):
        raise ConfigurationError(f"'{token}' is not a number")
    if isinstance(token, Real):
        value = token
    else:
        try:
            value = float(str(token).strip())
        except ValueError:
            raise ConfigurationError(f"'{token}' is not a number") from None
        if value.is_integer() and re.fullmatch(r"[+-]?\d+", str(token).strip()):
            value = int(value)
    if value != value or value in (float("inf"), float("-inf")):
        raise ConfigurationError(f"'{token}' is not a finite number")
    return value


# ---------------------------------------------------------------------------
# Puzzle grids
# ---------------------------------------------------------------------------
def parse_grid(text: Union[str, Sequence[Sequence[Any]]]) -> List[List[int]]:
    """
    One row per line, cells separated by whitespace or commas; `0` or
    `.` marks an empty cell.  "53..7...." (no separators) is accepted for
    grids up to 9×9.  The result is validated as a (base²)×(base²) puzzle
    without conflicting givens.
    """
    if isinstance(text, str):
        rows: List[List[Any]] = []
        for line in text.strip().splitlines():
            line = line.strip()
            if not line:
                continue
            cells = [c for c in re.split(r"[,\s]+", line) if c]
            if len(cells) == 1 and len(cells[0]) > 1:
                cells = list(cells[0])
            rows.append(cells)
    elif isinstance(text, (list, tuple)):
        rows = [list(r) if isinstance(r, (list, tuple)) else [r] for r in text]
    else:
        raise ConfigurationError("Grid must be text or a list of rows")

    grid = [[_cell(v, r, c) for c, v in enumerate(row)] for r, row in enumerate(rows)]
    board, _ = validate_grid(grid)
    return board


def _cell(value: Any, r: int, c: int) -> int:
    if value in (".", "_"):
        return 0
    if isinstance(value, bool):
        raise ConfigurationError(f"Cell ({r + 1}, {c + 1}) is not a number: {value!r}")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise ConfigurationError(f"Cell ({r + 1}, {c + 1}) is not a number: {value!r}") from None


# ---------------------------------------------------------------------------
# Graphs
# ---------------------------------------------------------------------------
def parse_graph(
    nodes_text: Union[str, Sequence[str]],
    edges_text: Union[str, Sequence[str]],
    directed: bool = False,
) -> Graph:
    """Labels + edge list → Graph.  Lists are joined with commas first."""
    if not isinstance(nodes_text, str):
        nodes_text = ", ".join(str(n) for n in nodes_text)
    if not isinstance(edges_text, str):
        edges_text = ", ".join(str(e) for e in edges_text)
    return Graph.from_edge_list(nodes_text, edges_text, directed=bool(directed))


# ---------------------------------------------------------------------------
# Union-find scripts
# ---------------------------------------------------------------------------
_OPERATION_RE = re.compile(
    r"^(union|u|find|f)\s*\(?\s*(\d+)\s*(?:[,\s]\s*(\d+))?\s*\)?$", re.IGNORECASE
)


def parse_operations(text: Union[str, Sequence[Any]], size: int) -> List[Tuple]:
    """
    "union 0 1; union(2, 3); find 3" → [("union", 0, 1), ("union", 2, 3), ("find", 3)].
    Operations are separated by semicolons, newlines or commas; `u` and `f`
    are accepted as short forms.  A list of strings or of
    ["union", a, b] / ["find", a] lists works too.
    """
    if isinstance(text, str):
        tokens: List[Any] = [t.strip() for t in re.split(r"[;\n]+|,(?=\s*[A-Za-z])", text) if t.strip()]
    elif isinstance(text, (list, tuple)):
        tokens = list(text)
    else:
        raise ConfigurationError("Operations must be text or a list")

    ops: List[Tuple] = []
    for token in tokens:
        if isinstance(token, (list, tuple)):
            token = " ".join(str(t) for t in token)
        m = _OPERATION_RE.match(str(token).strip())
        if not m:
            raise ConfigurationError(
                f"Invalid operation '{token}'; expected e.g. 'union 0 1' or 'find 3'"
            )
        name = "union" if m.group(1).lower().startswith("u") else "find"
        args = [int(g) for g in m.groups()[1:] if g is not None]
        arity = 2 if name == "union" else 1
        if len(args) != arity:
            raise ConfigurationError(f"'{token}': {name} takes {arity} element(s)")
        for x in args:
            if x >= size:
                raise ConfigurationError(f"'{token}': element {x} is not in 0..{size - 1}")
        ops.append((name, *args))

    if not ops:
        raise ConfigurationError("Enter at least one operation")
    if len(ops) > MAX_OPERATIONS:
        raise ConfigurationError(f"At most {MAX_OPERATIONS} operations are supported, got {len(ops)}")
    return ops


# ---------------------------------------------------------------------------
# Payload → generator kwargs
# ---------------------------------------------------------------------------
def build_inputs(algo_key: str, payload: Dict[str, Any], *, max_items: int = 200) -> Dict[str, Any]:
    info = get_algorithm(algo_key)
    if info is None:
        raise ConfigurationError(f"Unknown algorithm {algo_key!r}")

    provided = {k: v for k, v in payload.items() if v is not None}
    data = dict(DEFAULT_PAYLOADS.get(algo_key, {}))
    for primary, members in _FIELD_GROUPS:
        # a user-supplied graph or array replaces the example as a whole
        if any(k in provided for k in primary):
            for k in members:
                data.pop(k, None)
    if algo_key == "topological_sort":
        data.setdefault("directed", True)
    data.update(provided)
    kwargs: Dict[str, Any] = {}

    graph: Optional[Graph] = None
    if "graph" in info.inputs:
        if data.get("adjacency"):
            graph = Graph.from_adjacency_list(str(data["adjacency"]), directed=bool(data.get("directed", False)))
        else:
            graph = parse_graph(data.get("nodes", ""), data.get("edges", ""), directed=data.get("directed", False))
        if graph.node_count() > max_items:
            raise ConfigurationError(f"At most {max_items} nodes are supported")
        kwargs["graph"] = graph

    for role in ("start", "source"):
        if role in info.inputs:
            label = data.get(role)
            if label in (None, ""):
                label = graph.node_ids()[0]
            elif not graph.has_node(str(label)):
                raise ConfigurationError(f"{role.capitalize()} node '{label}' is not in the graph")
            kwargs[role] = str(label)

    if algo_key == "knapsack":
        kwargs["weights"] = parse_number_list(
            data.get("weights", ""), integers=True, minimum=1, max_items=min(max_items, MAX_ITEMS)
        )
        kwargs["values"] = parse_number_list(
            data.get("values", ""), minimum=0, max_items=min(max_items, MAX_ITEMS)
        )
        kwargs["capacity"] = _int_field(data, "capacity", 1, MAX_CAPACITY)
    elif "values" in info.inputs:
        bounds: Dict[str, Any] = {}
        if algo_key == "counting_sort":
            bounds = {"integers": True, "minimum": 0, "maximum": 999}
        elif algo_key == "bucket_sort":
            bounds = {"minimum": 0, "maximum": 1}
        kwargs["values"] = parse_number_list(data.get("values", ""), max_items=max_items, **bounds)

    if "buckets" in info.inputs:
        kwargs["buckets"] = _int_field(data, "buckets", 1, 20)

    if "target" in info.inputs:
        if data.get("target") in (None, ""):
            raise ConfigurationError("Enter a value to search for")
        kwargs["target"] = _to_number(data["target"])

    if algo_key == "kmp":
        kwargs["text"] = _text_field(data, "text")
        kwargs["pattern"] = _text_field(data, "pattern")
    elif "text" in info.inputs:
        kwargs["text"] = _text_field(data, "text")

    if "n" in info.inputs:
        kwargs["n"] = _int_field(data, "n", 1, MAX_N)

    if "grid" in info.inputs:
        kwargs["grid"] = parse_grid(data.get("grid", ""))

    if "size" in info.inputs:
        kwargs["size"] = _int_field(data, "size", 1, MAX_SIZE)
        if data.get("operations") not in (None, ""):
            kwargs["operations"] = parse_operations(data["operations"], kwargs["size"])

    return kwargs


def _int_field(data: Dict[str, Any], name: str, low: int, high: int) -> int:
    raw = data.get(name)
    try:
        if isinstance(raw, bool):
            raise ValueError
        value = int(str(raw).strip())
    except ValueError:
        raise ConfigurationError(f"{name} must be a whole number, got {raw!r}") from None
    if not low <= value <= high:
        raise ConfigurationError(f"{name} must be between {low} and {high}, got {value}")
    return value


def _text_field(data: Dict[str, Any], name: str) -> str:
    value = data.get(name)
    if not isinstance(value, str) or not value:
        raise ConfigurationError(f"{name.capitalize()} must not be empty")
    if len(value) > MAX_TEXT_LENGTH:
        raise ConfigurationError(f"{name.capitalize()} is limited to {MAX_TEXT_LENGTH} characters")
    return value
