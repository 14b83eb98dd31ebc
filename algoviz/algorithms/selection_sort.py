"""
selection_sort.py - Selection Sort
===================================
Each pass scans the unsorted suffix for its minimum and exchanges it into
position i.  The exchange happens once per pass even when the minimum is
already in place (a self-swap), so n elements always take n - 1 swaps.

Records a Snapshot per pass start, per comparison, per new minimum and
per swap.
"""

from typing import List, Sequence

from algoviz.algorithms.common import require_values
from algoviz.engine.snapshot import Kind, Trace, TraceBuilder


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def SelectionSort(A):",                # 0
    "    for i in 0 .. n-2:",               # 1
    "        min ← i",                      # 2
    "        for j in i+1 .. n-1:",         # 3
    "            if A[j] < A[min]:",        # 4
    "                min ← j",              # 5
    "        swap A[i], A[min]",            # 6
    "    return A",                         # 7
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def selection_sort(values: Sequence[float]) -> Trace:
    arr = require_values(values)
    n = len(arr)

    tb = TraceBuilder("selection_sort")
    swaps = 0
    comparisons = 0

    def emit(kind: Kind, narration: str, line: int, i=None, j=None, min_index=None, sorted_upto=0) -> None:
        tb.emit(
            kind, narration, line=line,
            array=arr,
            i=i,
            j=j,
            min_index=min_index,
            sorted_upto=sorted_upto,
            swaps=swaps,
            comparisons=comparisons,
        )

    emit(Kind.INITIALIZE, f"Sort {n} values with selection sort.", line=0)

    for i in range(n - 1):
        m = i
        emit(
            Kind.PASS_START,
            f"Pass {i + 1}: assume A[{i}] = {arr[i]} is the minimum of the unsorted part.",
            line=2, i=i, min_index=m, sorted_upto=i,
        )
        for j in range(i + 1, n):
            comparisons += 1
            emit(
                Kind.COMPARE,
                f"Compare A[{j}] = {arr[j]} with current minimum A[{m}] = {arr[m]}.",
                line=4, i=i, j=j, min_index=m, sorted_upto=i,
            )
            if arr[j] < arr[m]:
                m = j
                emit(
                    Kind.NEW_MIN,
                    f"{arr[j]} is smaller: new minimum at index {j}.",
                    line=5, i=i, j=j, min_index=m, sorted_upto=i,
                )

        arr[i], arr[m] = arr[m], arr[i]
        swaps += 1
        if m == i:
            narration = f"Swap A[{i}] with itself: {arr[i]} is already in place."
        else:
            narration = f"Swap A[{i}] and A[{m}]: {arr[i]} moves to position {i}."
        emit(Kind.SWAP, narration, line=6, i=i, j=m, min_index=m, sorted_upto=i + 1)

    emit(
        Kind.COMPLETE,
        f"Sorted: {arr} with {comparisons} comparisons and {swaps} swaps.",
        line=7, sorted_upto=n,
    )
    return tb.build()
