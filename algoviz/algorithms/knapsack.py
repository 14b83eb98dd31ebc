"""
knapsack.py - 0/1 Knapsack (dynamic programming table)
=======================================================
dp[i][w] is the best value reachable with the first i items and capacity
w.  Row 0 and column 0 are zero; every other cell is filled row by row:

    dp[i][w] = dp[i-1][w]                                  if weight_i > w
             = max(dp[i-1][w], dp[i-1][w - weight_i] + value_i)   otherwise

Taking the item wins only on a strict improvement.  Once the table is
full, the chosen items are read back from dp[n][W]: item i was taken
exactly when dp[i][w] differs from dp[i-1][w].
"""

from numbers import Real
from typing import List, Optional, Sequence, Tuple

from algoviz.algorithms.common import fmt
from algoviz.engine.snapshot import Kind, Trace, TraceBuilder
from algoviz.errors import ConfigurationError

MAX_ITEMS = 12
MAX_CAPACITY = 50


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Knapsack(items, W):",                              # 0
    "    dp ← (n+1) × (W+1) table of 0",                    # 1
    "    for i in 1 … n:",                                  # 2
    "        for w in 0 … W:",                              # 3
    "            if weight[i] > w: dp[i][w] ← dp[i-1][w]",  # 4
    "            else: dp[i][w] ← max(dp[i-1][w],",         # 5
    "                       dp[i-1][w-weight[i]] + value[i])",  # 6
    "    i, w ← n, W",                                      # 7
    "    while i > 0 and w > 0:",                           # 8
    "        if dp[i][w] != dp[i-1][w]: take item i; w -= weight[i]",  # 9
    "        i -= 1",                                       # 10
    "    return dp[n][W], taken",                           # 11
]


def _validate(weights: Sequence, values: Sequence, capacity) -> Tuple[List[int], List, int]:
    weights, values = list(weights), list(values)
    if not weights:
        raise ConfigurationError("Enter at least one item")
    if len(weights) != len(values):
        raise ConfigurationError(
            f"Every item needs a weight and a value: got {len(weights)} weight(s) "
            f"and {len(values)} value(s)"
        )
    if len(weights) > MAX_ITEMS:
        raise ConfigurationError(f"At most {MAX_ITEMS} items are supported, got {len(weights)}")
    for w in weights:
        if isinstance(w, bool) or not isinstance(w, int) or w < 1:
            raise ConfigurationError(f"Weights must be positive whole numbers, got {w!r}")
    for v in values:
        if isinstance(v, bool) or not isinstance(v, Real) or v < 0:
            raise ConfigurationError(f"Values must be non-negative numbers, got {v!r}")
    if isinstance(capacity, bool) or not isinstance(capacity, int) or not 1 <= capacity <= MAX_CAPACITY:
        raise ConfigurationError(
            f"Capacity must be a whole number between 1 and {MAX_CAPACITY}, got {capacity!r}"
        )
    return weights, values, capacity


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def knapsack(weights: Sequence[int], values: Sequence, capacity: int) -> Trace:
    weights, values, capacity = _validate(weights, values, capacity)
    n = len(weights)

    tb = TraceBuilder("knapsack")
    dp = [[0] * (capacity + 1) for _ in range(n + 1)]
    taken: List[int] = []
    totals = {"weight": 0, "value": 0}

    def emit(kind: Kind, narration: str, line: int, cell: Optional[Tuple[int, int]] = None) -> None:
        tb.emit(
            kind, narration, line=line,
            table=dp,
            weights=weights,
            values=values,
            capacity=capacity,
            cell=cell,
            item=cell[0] - 1 if cell is not None and cell[0] > 0 else None,
            taken=taken,
            total_weight=totals["weight"],
            total_value=totals["value"],
        )

    emit(
        Kind.INITIALIZE,
        f"Build a {n + 1} × {capacity + 1} table. dp[i][w] is the best value using "
        f"the first i items with capacity w; row 0 and column 0 stay 0.",
        line=1,
    )

    for i in range(1, n + 1):
        wi, vi = weights[i - 1], values[i - 1]
        for w in range(capacity + 1):
            emit(
                Kind.CHECK_CELL,
                f"Item {i} (weight {wi}, value {fmt(vi)}) with capacity {w}.",
                line=3, cell=(i, w),
            )
            skip = dp[i - 1][w]
            if wi > w:
                dp[i][w] = skip
                emit(
                    Kind.TOO_HEAVY,
                    f"Item {i} is too heavy ({wi} > {w}): copy dp[{i - 1}][{w}] = {fmt(skip)}.",
                    line=4, cell=(i, w),
                )
                continue
            take = dp[i - 1][w - wi] + vi
            if take > skip:
                dp[i][w] = take
                emit(
                    Kind.INCLUDE_ITEM,
                    f"Taking item {i} gives {fmt(dp[i - 1][w - wi])} + {fmt(vi)} = {fmt(take)} "
                    f"> {fmt(skip)}: dp[{i}][{w}] = {fmt(take)}.",
                    line=6, cell=(i, w),
                )
            else:
                dp[i][w] = skip
                emit(
                    Kind.EXCLUDE_ITEM,
                    f"Leaving item {i} out keeps {fmt(skip)} ≥ {fmt(take)}: dp[{i}][{w}] = {fmt(skip)}.",
                    line=5, cell=(i, w),
                )

    best = dp[n][capacity]
    emit(
        Kind.TABLE_COMPLETE,
        f"Table complete: the best value is dp[{n}][{capacity}] = {fmt(best)}. "
        f"Trace back to find the items.",
        line=7, cell=(n, capacity),
    )

    i, w = n, capacity
    while i > 0 and w > 0:
        emit(
            Kind.TRACE_BACK,
            f"Compare dp[{i}][{w}] = {fmt(dp[i][w])} with dp[{i - 1}][{w}] = {fmt(dp[i - 1][w])}.",
            line=8, cell=(i, w),
        )
        if dp[i][w] != dp[i - 1][w]:
            taken.append(i - 1)
            totals["weight"] += weights[i - 1]
            totals["value"] += values[i - 1]
            emit(
                Kind.ITEM_TAKEN,
                f"They differ: item {i} (weight {weights[i - 1]}, value {fmt(values[i - 1])}) is in the knapsack.",
                line=9, cell=(i, w),
            )
            w -= weights[i - 1]
        else:
            emit(Kind.ITEM_LEFT, f"They match: item {i} is left out.", line=10, cell=(i, w))
        i -= 1

    emit(
        Kind.COMPLETE,
        f"Take {len(taken)} item(s) with total weight {totals['weight']} "
        f"and value {fmt(totals['value'])}.",
        line=11,
    )
    return tb.build()
