"""
counting_sort.py - Counting Sort
=================================
Stable counting sort over non-negative integers: count, prefix-sum, then
place elements walking the input right-to-left.  `output_sources[k]`
records which input index ended up at output position k, so stability is
visible (and testable) on inputs with duplicate keys.
"""

from numbers import Integral
from typing import List, Optional, Sequence

from algoviz.algorithms.common import require_values
from algoviz.engine.snapshot import Kind, Trace, TraceBuilder
from algoviz.errors import ConfigurationError


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def CountingSort(A):",                         # 0
    "    k ← max(A)",                               # 1
    "    count ← [0] * (k + 1)",                    # 2
    "    for x in A: count[x] ← count[x] + 1",      # 3
    "    for v in 1 .. k: count[v] += count[v-1]",  # 4
    "    for i in n-1 down to 0:",                  # 5
    "        count[A[i]] ← count[A[i]] - 1",        # 6
    "        output[count[A[i]]] ← A[i]",           # 7
    "    return output",                            # 8
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def counting_sort(values: Sequence[int]) -> Trace:
    arr = require_values(values)
    for v in arr:
        if not isinstance(v, Integral) or v < 0:
            raise ConfigurationError(f"Counting sort needs non-negative integers, got {v!r}")

    n = len(arr)
    k = max(arr)
    tb = TraceBuilder("counting_sort")
    count = [0] * (k + 1)
    output:         List[Optional[int]] = [None] * n
    output_sources: List[Optional[int]] = [None] * n

    def emit(kind: Kind, narration: str, line: int, index=None, value=None) -> None:
        tb.emit(
            kind, narration, line=line,
            array=arr,
            count=count,
            output=output,
            output_sources=output_sources,
            index=index,
            value=value,
        )

    emit(Kind.INITIALIZE, f"Largest key is {k}: allocate {k + 1} counters.", line=2)

    for i, x in enumerate(arr):
        count[x] += 1
        emit(Kind.COUNT, f"Count A[{i}] = {x}: count[{x}] = {count[x]}.", line=3, index=i, value=x)

    for v in range(1, k + 1):
        count[v] += count[v - 1]
        emit(
            Kind.CUMULATIVE,
            f"Prefix sum: count[{v}] = {count[v]} values are ≤ {v}.",
            line=4, value=v,
        )

    for i in range(n - 1, -1, -1):
        x = arr[i]
        count[x] -= 1
        pos = count[x]
        output[pos] = x
        output_sources[pos] = i
        emit(
            Kind.PLACE,
            f"Place A[{i}] = {x} at output position {pos}.",
            line=7, index=i, value=x,
        )

    emit(Kind.COMPLETE, f"Sorted: {output}.", line=8)
    return tb.build()
