"""
snapshot.py - Snapshot, Trace & TraceBuilder
=============================================
Every Trace Generator runs its algorithm to completion and records a
Snapshot at each transition a learner needs to see.  A Snapshot is a
frozen-in-time picture of everything a renderer needs for one frame:

    • kind       what just happened (Kind enum: compare, swap, visit, …)
    • narration  plain-English sentence describing the transition
    • state      algorithm-specific data (array, queue, distances, board, …)
    • line       which pseudocode line is executing (index into PSEUDOCODE)

Design decisions:
  - `state` is deep-frozen at capture time.  dicts become read-only
    mappings, lists become tuples, sets become frozensets, so no later
    algorithm step can reach back and alter an earlier frame.
  - The TraceBuilder is the ONLY writer.  Generators thread its `emit`
    through their loops (and recursion) instead of pushing into a shared
    list.  Player and renderer are pure readers.
  - `to_dict()` hands out a thawed, mutable deep copy for renderers and
    JSON; mutating it never touches the Trace.
"""

import math
from collections.abc import Mapping, Sequence
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Optional, Union

import structlog

from algoviz.errors import GeneratorError, TraceTooLongError

log = structlog.get_logger()

# Upper bound on snapshots per trace.  The longest built-in example
# (8-queens, every solution) needs about 34k.
DEFAULT_MAX_STEPS = 50_000

_step_budget: ContextVar[int] = ContextVar("algoviz_step_budget", default=DEFAULT_MAX_STEPS)


@contextmanager
def step_budget(max_steps: int) -> Iterator[None]:
    """Cap every TraceBuilder created inside the block at `max_steps` snapshots."""
    if max_steps < 2:
        raise ValueError(f"step budget must allow at least 2 snapshots, got {max_steps}")
    token = _step_budget.set(max_steps)
    try:
        yield
    finally:
        _step_budget.reset(token)


# ---------------------------------------------------------------------------
# Kind - closed set of transition tags across every generator
# ---------------------------------------------------------------------------
class Kind(str, Enum):
    # lifecycle
    INITIALIZE         = "initialize"
    COMPLETE           = "complete"

    # terminal outcomes that are not errors
    UNREACHABLE        = "unreachable"
    CYCLE_DETECTED     = "cycle_detected"
    NEGATIVE_CYCLE     = "negative_cycle"
    NO_SOLUTION        = "no_solution"
    NOT_FOUND          = "not_found"

    # traversal
    DEQUEUE            = "dequeue"
    VISIT              = "visit"
    DISCOVER           = "discover"
    SKIP               = "skip"
    BACKTRACK          = "backtrack"

    # weighted graphs
    SELECT_MIN         = "select_min"
    EXAMINE_EDGE       = "examine_edge"
    RELAX              = "relax"
    NO_RELAX           = "no_relax"
    SELECT_EDGE        = "select_edge"
    ADD_EDGE           = "add_edge"
    REJECT_EDGE        = "reject_edge"
    ITERATION_START    = "iteration_start"
    NO_CHANGE          = "no_change"

    # topological sort
    ENQUEUE            = "enqueue"
    PROCESS_NODE       = "process_node"
    DECREMENT_INDEGREE = "decrement_indegree"

    # sorting
    PASS_START         = "pass_start"
    COMPARE            = "compare"
    NEW_MIN            = "new_min"
    SWAP               = "swap"
    COUNT              = "count"
    CUMULATIVE         = "cumulative"
    PLACE              = "place"
    PARTITION_START    = "partition_start"
    SELECT_PIVOT       = "select_pivot"
    PIVOT_PLACED       = "pivot_placed"
    DIVIDE             = "divide"
    MERGE_START        = "merge_start"
    MERGE_TAKE         = "merge_take"
    MERGE_COMPLETE     = "merge_complete"
    DISTRIBUTE         = "distribute"
    SORT_BUCKET        = "sort_bucket"
    CONCATENATE        = "concatenate"

    # searching
    PROBE              = "probe"
    NARROW             = "narrow"

    # string matching
    LPS_COMPARE        = "lps_compare"
    LPS_MATCH          = "lps_match"
    LPS_FALLBACK       = "lps_fallback"
    LPS_ZERO           = "lps_zero"
    LPS_COMPLETE       = "lps_complete"
    CHAR_MATCH         = "char_match"
    MISMATCH           = "mismatch"
    USE_LPS            = "use_lps"
    MATCH_FOUND        = "match_found"

    # backtracking
    ATTEMPT            = "attempt"
    CONFLICT           = "conflict"
    SOLUTION_FOUND     = "solution_found"
    SELECT_CELL        = "select_cell"
    CANDIDATES         = "candidates"

    # greedy / coding
    COUNT_FREQUENCIES  = "count_frequencies"
    CREATE_LEAVES      = "create_leaves"
    MERGE_NODES        = "merge_nodes"
    TREE_COMPLETE      = "tree_complete"
    ASSIGN_CODE        = "assign_code"
    ENCODE             = "encode"

    # union-find
    FIND_ROOT          = "find_root"
    COMPRESS_PATH      = "compress_path"
    UNION_SETS         = "union_sets"
    SAME_SET           = "same_set"

    # dynamic programming
    CHECK_CELL         = "check_cell"
    TOO_HEAVY          = "too_heavy"
    INCLUDE_ITEM       = "include_item"
    EXCLUDE_ITEM       = "exclude_item"
    TABLE_COMPLETE     = "table_complete"
    TRACE_BACK         = "trace_back"
    ITEM_TAKEN         = "item_taken"
    ITEM_LEFT          = "item_left"

    def __str__(self) -> str:
        return self.value


TERMINAL_KINDS: FrozenSet[Kind] = frozenset({
    Kind.COMPLETE,
    Kind.UNREACHABLE,
    Kind.CYCLE_DETECTED,
    Kind.NEGATIVE_CYCLE,
    Kind.NO_SOLUTION,
    Kind.NOT_FOUND,
})


# ---------------------------------------------------------------------------
# Freeze / thaw
# ---------------------------------------------------------------------------
_SCALARS = (str, bytes, int, float, bool, type(None), Enum)


def freeze(value: Any) -> Any:
    """Return an immutable deep copy of `value`."""
    if isinstance(value, _SCALARS):
        return value
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(freeze(v) for v in value)
    raise GeneratorError(
        f"Cannot capture a value of type {type(value).__name__} in a snapshot"
    )


def thaw(value: Any, json_safe: bool = False) -> Any:
    """Inverse of freeze(): fresh mutable containers all the way down.

    With json_safe=True, non-string mapping keys are stringified, sets
    become sorted lists and non-finite floats become None.
    """
    if isinstance(value, Mapping):
        if json_safe:
            return {_json_key(k): thaw(v, json_safe) for k, v in value.items()}
        return {k: thaw(v, json_safe) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(v, json_safe) for v in value]
    if isinstance(value, (set, frozenset)):
        if json_safe:
            return sorted((thaw(v, json_safe) for v in value), key=str)
        return {thaw(v, json_safe) for v in value}
    if json_safe:
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, float) and not math.isfinite(value):
            return None
    return value


def _json_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, tuple):
        return ",".join(str(k) for k in key)
    return str(key)


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Snapshot:
    """
    Attributes:
        index     : 0-based position of this snapshot in its Trace.
        kind      : Kind tag of the transition.
        narration : Human-readable description.  Deterministic for a given
                    input, so tests can use it as an oracle.
        state     : Read-only mapping of algorithm-specific data.
        line      : Pseudocode line (index into the generator's PSEUDOCODE),
                    or None when no single line applies.
    """

    index:     int
    kind:      Kind
    narration: str
    state:     Mapping = field(default_factory=lambda: MappingProxyType({}))
    line:      Optional[int] = None

    @property
    def is_terminal(self) -> bool:
        return self.kind in TERMINAL_KINDS

    def to_dict(self, json_safe: bool = False) -> Dict[str, Any]:
        return {
            "index":     self.index,
            "kind":      self.kind.value,
            "narration": self.narration,
            "state":     thaw(self.state, json_safe=json_safe),
            "line":      self.line,
        }


# ---------------------------------------------------------------------------
# Trace
# ---------------------------------------------------------------------------
class Trace(Sequence):
    """Ordered, read-only sequence of Snapshots from one generator run."""

    __slots__ = ("_snapshots", "algorithm")

    def __init__(self, snapshots: Iterable[Snapshot] = (), algorithm: str = ""):
        self._snapshots = tuple(snapshots)
        self.algorithm  = algorithm

    def __getitem__(self, idx: Union[int, slice]):
        if isinstance(idx, slice):
            return Trace(self._snapshots[idx], algorithm=self.algorithm)
        return self._snapshots[idx]

    def __len__(self) -> int:
        return len(self._snapshots)

    def __iter__(self) -> Iterator[Snapshot]:
        return iter(self._snapshots)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Trace):
            return NotImplemented
        return self._snapshots == other._snapshots

    def __hash__(self) -> int:
        return hash((self.algorithm, len(self._snapshots)))

    def __repr__(self) -> str:
        terminal = self.terminal_kind.value if self.terminal_kind else None
        return f"Trace(algorithm={self.algorithm!r}, steps={len(self)}, terminal={terminal})"

    # -- helpers --
    @property
    def first(self) -> Optional[Snapshot]:
        return self._snapshots[0] if self._snapshots else None

    @property
    def last(self) -> Optional[Snapshot]:
        return self._snapshots[-1] if self._snapshots else None

    @property
    def terminal_kind(self) -> Optional[Kind]:
        last = self.last
        return last.kind if last is not None and last.is_terminal else None

    def kinds(self) -> List[Kind]:
        return [s.kind for s in self._snapshots]

    def of_kind(self, kind: Kind) -> List[Snapshot]:
        return [s for s in self._snapshots if s.kind == kind]

    def to_list(self, json_safe: bool = False) -> List[Dict[str, Any]]:
        return [s.to_dict(json_safe=json_safe) for s in self._snapshots]


# ---------------------------------------------------------------------------
# TraceBuilder - the explicit emit accumulator
# ---------------------------------------------------------------------------
class TraceBuilder:
    """
    Append-only scratch-pad that generators record into.

    Usage inside a generator:
        tb = TraceBuilder("bfs")
        tb.emit(Kind.INITIALIZE, "Enqueued start node A", line=1, queue=["A"])
        ...
        tb.emit(Kind.COMPLETE, "BFS complete", line=9, queue=[])
        return tb.build()

    Rules:
        - the first snapshot must be Kind.INITIALIZE
        - nothing may be emitted after a terminal kind
        - build() needs at least two snapshots, the last one terminal
        - at most `max_steps` snapshots (default: the active step_budget);
          one more raises TraceTooLongError
    """

    def __init__(self, algorithm: str = "", max_steps: Optional[int] = None):
        self.algorithm = algorithm
        self.max_steps = max_steps if max_steps is not None else _step_budget.get()
        self._snapshots: List[Snapshot] = []
        self._closed = False

    def emit(self, kind: Kind, narration: str, line: Optional[int] = None, **state: Any) -> Snapshot:
        kind = Kind(kind)
        if self._closed:
            raise GeneratorError(
                f"{self.algorithm or 'generator'}: emitted {kind.value!r} after a terminal snapshot"
            )
        if not self._snapshots and kind is not Kind.INITIALIZE:
            raise GeneratorError(
                f"{self.algorithm or 'generator'}: first snapshot must be 'initialize', got {kind.value!r}"
            )
        if len(self._snapshots) >= self.max_steps:
            log.warning("trace.budget_exceeded", algorithm=self.algorithm, max_steps=self.max_steps)
            raise TraceTooLongError(
                f"{self.algorithm or 'generator'}: this input needs more than {self.max_steps} "
                f"steps to visualize; try a smaller or simpler input"
            )
        snap = Snapshot(
            index=len(self._snapshots),
            kind=kind,
            narration=narration,
            state=freeze(state),
            line=line,
        )
        self._snapshots.append(snap)
        if kind in TERMINAL_KINDS:
            self._closed = True
        return snap

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def closed(self) -> bool:
        return self._closed

    def build(self) -> Trace:
        if len(self._snapshots) < 2:
            raise GeneratorError(
                f"{self.algorithm or 'generator'}: a trace needs at least an initialize "
                f"and a terminal snapshot, got {len(self._snapshots)}"
            )
        if not self._closed:
            raise GeneratorError(
                f"{self.algorithm or 'generator'}: trace does not end with a terminal snapshot"
            )
        trace = Trace(self._snapshots, algorithm=self.algorithm)
        log.debug(
            "trace.generated",
            algorithm=self.algorithm,
            steps=len(trace),
            terminal=trace.last.kind.value,
        )
        return trace
