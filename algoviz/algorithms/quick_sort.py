"""
quick_sort.py - Quick Sort (Lomuto partition)
==============================================
Recursive quick sort with the last element of each range as pivot.  The
recursion threads the trace builder's emit through explicitly; the working
array is the only other shared value and it is frozen into every snapshot
at capture time.

`sorted` lists indices whose final position is known: every placed pivot
and every range of length one.
"""

from typing import Callable, List, Sequence

from algoviz.algorithms.common import require_values
from algoviz.engine.snapshot import Kind, Trace, TraceBuilder


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def QuickSort(A, lo, hi):",                # 0
    "    if lo < hi:",                          # 1
    "        p ← Partition(A, lo, hi)",         # 2
    "        QuickSort(A, lo, p-1); QuickSort(A, p+1, hi)",  # 3
    "def Partition(A, lo, hi):",                # 4
    "    pivot ← A[hi]; i ← lo - 1",            # 5
    "    for j in lo .. hi-1:",                 # 6
    "        if A[j] <= pivot:",                # 7
    "            i ← i + 1; swap A[i], A[j]",   # 8
    "    swap A[i+1], A[hi]",                   # 9
    "    return i + 1",                         # 10
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def quick_sort(values: Sequence[float]) -> Trace:
    arr = require_values(values)
    tb = TraceBuilder("quick_sort")
    done: List[int] = []
    counters = {"comparisons": 0, "swaps": 0}

    def emit(kind: Kind, narration: str, line: int, **marks) -> None:
        state = {"lo": None, "hi": None, "pivot_index": None, "i": None, "j": None}
        state.update(marks)
        tb.emit(kind, narration, line=line, array=arr, sorted=sorted(done), **counters, **state)

    emit(Kind.INITIALIZE, f"Quick sort {len(arr)} values (Lomuto partition, last element as pivot).", line=0)
    _quick(arr, 0, len(arr) - 1, emit, done, counters)
    emit(
        Kind.COMPLETE,
        f"Sorted: {arr} with {counters['comparisons']} comparisons and {counters['swaps']} swaps.",
        line=0,
    )
    return tb.build()


# ---------------------------------------------------------------------------
# Recursion
# ---------------------------------------------------------------------------
def _quick(arr: List, lo: int, hi: int, emit: Callable[..., None], done: List[int], counters: dict) -> None:
    if lo > hi:
        return
    if lo == hi:
        done.append(lo)
        return

    emit(Kind.PARTITION_START, f"Partition A[{lo}..{hi}].", line=2, lo=lo, hi=hi)
    p = _partition(arr, lo, hi, emit, counters)
    done.append(p)
    emit(
        Kind.PIVOT_PLACED,
        f"Pivot {arr[p]} placed at its final index {p}.",
        line=9, lo=lo, hi=hi, pivot_index=p,
    )
    _quick(arr, lo, p - 1, emit, done, counters)
    _quick(arr, p + 1, hi, emit, done, counters)


def _partition(arr: List, lo: int, hi: int, emit: Callable[..., None], counters: dict) -> int:
    pivot = arr[hi]
    i = lo - 1
    emit(Kind.SELECT_PIVOT, f"Pivot is A[{hi}] = {pivot}.", line=5, lo=lo, hi=hi, pivot_index=hi, i=i)

    for j in range(lo, hi):
        counters["comparisons"] += 1
        emit(
            Kind.COMPARE,
            f"Compare A[{j}] = {arr[j]} with pivot {pivot}.",
            line=7, lo=lo, hi=hi, pivot_index=hi, i=i, j=j,
        )
        if arr[j] <= pivot:
            i += 1
            arr[i], arr[j] = arr[j], arr[i]
            counters["swaps"] += 1
            emit(
                Kind.SWAP,
                f"{arr[i]} ≤ {pivot}: swap A[{i}] and A[{j}].",
                line=8, lo=lo, hi=hi, pivot_index=hi, i=i, j=j,
            )

    arr[i + 1], arr[hi] = arr[hi], arr[i + 1]
    counters["swaps"] += 1
    return i + 1
