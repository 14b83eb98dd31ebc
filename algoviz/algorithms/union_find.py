"""
union_find.py - Disjoint Set Union (Union-Find)
================================================
Elements 0 … size-1 start as singleton sets.  A script of operations is
replayed against the forest:

    ("union", a, b)   find both roots, then hang the lower-rank root under
                      the higher one (ties: b's root goes under a's root and
                      a's rank grows by one)
    ("find", a)       walk a → … → root, then point every node on the walk
                      straight at the root (path compression)

Records a Snapshot at:
  1. Initialise                   →  parent[i] = i, rank[i] = 0
  2. Every root lookup            →  FIND_ROOT (the walk before compression)
  3. A walk longer than one hop   →  COMPRESS_PATH
  4. Each union                   →  UNION_SETS, or SAME_SET when already joined
  5. Script finished              →  COMPLETE

DisjointSet is also what Kruskal's MST uses to detect cycles.
"""

from typing import Dict, Hashable, Iterable, List, Optional, Sequence, Tuple

from algoviz.engine.snapshot import Kind, Trace, TraceBuilder
from algoviz.errors import ConfigurationError

MAX_SIZE = 16
MAX_OPERATIONS = 40

Operation = Tuple  # ("union", a, b) | ("find", a)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def make_set(x): parent[x] ← x; rank[x] ← 0",      # 0
    "def find(x):",                                      # 1
    "    if parent[x] != x:",                            # 2
    "        parent[x] ← find(parent[x])   # compress",  # 3
    "    return parent[x]",                              # 4
    "def union(a, b):",                                  # 5
    "    ra, rb ← find(a), find(b)",                     # 6
    "    if ra == rb: return",                           # 7
    "    if rank[ra] < rank[rb]: swap(ra, rb)",          # 8
    "    parent[rb] ← ra",                               # 9
    "    if rank[ra] == rank[rb]: rank[ra] += 1",        # 10
]


# ---------------------------------------------------------------------------
# Union-find
# ---------------------------------------------------------------------------
class DisjointSet:
    def __init__(self, items: Iterable[Hashable]):
        self.parent: Dict[Hashable, Hashable] = {x: x for x in items}
        self.rank:   Dict[Hashable, int]      = {x: 0 for x in self.parent}

    def path(self, x: Hashable) -> List[Hashable]:
        """x, parent(x), … up to the root.  Does not compress."""
        walk = [x]
        while self.parent[walk[-1]] != walk[-1]:
            walk.append(self.parent[walk[-1]])
        return walk

    def find(self, x: Hashable) -> Hashable:
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[x] != root:                    # path compression
            self.parent[x], x = root, self.parent[x]
        return root

    def union(self, a: Hashable, b: Hashable) -> bool:
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        if self.rank[ra] < self.rank[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        if self.rank[ra] == self.rank[rb]:
            self.rank[ra] += 1
        return True

    def components(self) -> int:
        return len({self.find(x) for x in self.parent})

    def groups(self) -> List[List[Hashable]]:
        """Members of every set, grouped by root, in first-member order."""
        out: Dict[Hashable, List[Hashable]] = {}
        for x in self.parent:
            root = x
            while self.parent[root] != root:
                root = self.parent[root]
            out.setdefault(root, []).append(x)
        return list(out.values())


# ---------------------------------------------------------------------------
# Scripts
# ---------------------------------------------------------------------------
def default_operations(size: int) -> List[Operation]:
    """Pair neighbours, merge the pairs into ever larger blocks, then find the last element."""
    ops: List[Operation] = []
    width = 1
    while width < size:
        for a in range(0, size - width, 2 * width):
            ops.append(("union", a, a + width))
        width *= 2
    ops.append(("find", size - 1))
    return ops


def validate_operations(operations: Sequence[Sequence], size: int) -> List[Operation]:
    ops: List[Operation] = []
    for n, op in enumerate(operations, start=1):
        if not op or op[0] not in ("union", "find"):
            raise ConfigurationError(f"Operation {n} must be 'union a b' or 'find a', got {op!r}")
        arity = 3 if op[0] == "union" else 2
        if len(op) != arity:
            raise ConfigurationError(f"Operation {n} ({op[0]}) takes {arity - 1} element(s)")
        for x in op[1:]:
            if isinstance(x, bool) or not isinstance(x, int) or not 0 <= x < size:
                raise ConfigurationError(f"Operation {n}: element {x!r} is not in 0..{size - 1}")
        ops.append(tuple(op))
    if not ops:
        raise ConfigurationError("Enter at least one operation")
    if len(ops) > MAX_OPERATIONS:
        raise ConfigurationError(f"At most {MAX_OPERATIONS} operations are supported, got {len(ops)}")
    return ops


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def union_find(size: int = 8, operations: Optional[Sequence[Sequence]] = None) -> Trace:
    if isinstance(size, bool) or not isinstance(size, int) or not 1 <= size <= MAX_SIZE:
        raise ConfigurationError(f"size must be a whole number between 1 and {MAX_SIZE}, got {size!r}")
    ops = validate_operations(operations if operations is not None else default_operations(size), size)

    tb = TraceBuilder("union_find")
    ds = DisjointSet(range(size))
    ctx = {"op": None, "step": 0}

    def emit(kind: Kind, narration: str, line: int, highlight: Sequence[int] = ()) -> None:
        tb.emit(
            kind, narration, line=line,
            parent=[ds.parent[i] for i in range(size)],
            rank=[ds.rank[i] for i in range(size)],
            sets=ds.groups(),
            operation=ctx["op"],
            operation_index=ctx["step"],
            highlight=list(highlight),
        )

    def locate(x: int) -> int:
        walk = ds.path(x)
        root = walk[-1]
        if len(walk) == 1:
            text = f"find({x}): {x} is its own parent, so it is the root."
        else:
            text = f"find({x}): follow parents {' → '.join(map(str, walk))}; the root is {root}."
        emit(Kind.FIND_ROOT, text, line=2, highlight=walk)
        ds.find(x)
        if len(walk) > 2:
            emit(
                Kind.COMPRESS_PATH,
                f"Path compression: {', '.join(map(str, walk[:-2]))} now point straight at {root}.",
                line=3, highlight=walk,
            )
        return root

    emit(
        Kind.INITIALIZE,
        f"make_set for {size} element(s): each is its own root with rank 0. "
        f"{len(ops)} operation(s) to replay.",
        line=0,
    )

    for step, op in enumerate(ops, start=1):
        ctx["op"], ctx["step"] = list(op), step
        if op[0] == "find":
            locate(op[1])
            continue

        _, a, b = op
        ra, rb = locate(a), locate(b)
        if ra == rb:
            emit(
                Kind.SAME_SET,
                f"union({a}, {b}): both roots are {ra}; they are already in the same set.",
                line=7, highlight=[ra],
            )
            continue

        rank_a, rank_b = ds.rank[ra], ds.rank[rb]
        ds.union(ra, rb)
        if rank_a == rank_b:
            text = (f"union({a}, {b}): ranks tie at {rank_a}; hang {rb} under {ra} "
                    f"and raise rank[{ra}] to {ds.rank[ra]}.")
            line = 10
        else:
            hi, lo = (ra, rb) if rank_a > rank_b else (rb, ra)
            text = (f"union({a}, {b}): rank[{lo}] = {ds.rank[lo]} < rank[{hi}] = {ds.rank[hi]}; "
                    f"hang {lo} under {hi}.")
            line = 9
        emit(Kind.UNION_SETS, text, line=line, highlight=[ra, rb])

    ctx["op"] = None
    groups = ds.groups()
    emit(
        Kind.COMPLETE,
        f"All {len(ops)} operation(s) done: {len(groups)} set(s) remain.",
        line=4,
    )
    return tb.build()
