"""
merge_sort.py - Top-down Merge Sort
====================================
Splits at mid = (lo + hi) // 2 and merges with `<=`, so on equal keys the
element from the left half is taken first and the sort stays stable.
"""

from typing import Callable, List, Sequence

from algoviz.algorithms.common import require_values
from algoviz.engine.snapshot import Kind, Trace, TraceBuilder


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def MergeSort(A, lo, hi):",                        # 0
    "    if lo >= hi: return",                          # 1
    "    mid ← (lo + hi) // 2",                         # 2
    "    MergeSort(A, lo, mid); MergeSort(A, mid+1, hi)",  # 3
    "    Merge(A, lo, mid, hi)",                        # 4
    "def Merge(A, lo, mid, hi):",                       # 5
    "    L ← A[lo..mid]; R ← A[mid+1..hi]",             # 6
    "    while L and R are not empty:",                 # 7
    "        if L[0] <= R[0]: take L[0] else: take R[0]",  # 8
    "    append the rest of L, then the rest of R",     # 9
    "    return",                                       # 10
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def merge_sort(values: Sequence[float]) -> Trace:
    arr = require_values(values)
    tb = TraceBuilder("merge_sort")
    counters = {"comparisons": 0}

    def emit(kind: Kind, narration: str, line: int, **marks) -> None:
        state = {"lo": None, "mid": None, "hi": None, "left": [], "right": [], "write": None}
        state.update(marks)
        tb.emit(kind, narration, line=line, array=arr, comparisons=counters["comparisons"], **state)

    emit(Kind.INITIALIZE, f"Merge sort {len(arr)} values.", line=0)
    _sort(arr, 0, len(arr) - 1, emit, counters)
    emit(Kind.COMPLETE, f"Sorted: {arr} with {counters['comparisons']} comparisons.", line=10)
    return tb.build()


# ---------------------------------------------------------------------------
# Recursion
# ---------------------------------------------------------------------------
def _sort(arr: List, lo: int, hi: int, emit: Callable[..., None], counters: dict) -> None:
    if lo >= hi:
        return
    mid = (lo + hi) // 2
    emit(
        Kind.DIVIDE,
        f"Split A[{lo}..{hi}] into A[{lo}..{mid}] and A[{mid + 1}..{hi}].",
        line=2, lo=lo, mid=mid, hi=hi,
    )
    _sort(arr, lo, mid, emit, counters)
    _sort(arr, mid + 1, hi, emit, counters)
    _merge(arr, lo, mid, hi, emit, counters)


def _merge(arr: List, lo: int, mid: int, hi: int, emit: Callable[..., None], counters: dict) -> None:
    left, right = arr[lo:mid + 1], arr[mid + 1:hi + 1]
    emit(
        Kind.MERGE_START,
        f"Merge {left} and {right}.",
        line=6, lo=lo, mid=mid, hi=hi, left=left, right=right, write=lo,
    )

    i = j = 0
    k = lo
    while i < len(left) and j < len(right):
        counters["comparisons"] += 1
        emit(
            Kind.COMPARE,
            f"Compare {left[i]} (left) with {right[j]} (right).",
            line=8, lo=lo, mid=mid, hi=hi, left=left[i:], right=right[j:], write=k,
        )
        if left[i] <= right[j]:
            arr[k] = left[i]
            side = "left"
            i += 1
        else:
            arr[k] = right[j]
            side = "right"
            j += 1
        emit(
            Kind.MERGE_TAKE,
            f"Take {arr[k]} from the {side} half into position {k}.",
            line=8, lo=lo, mid=mid, hi=hi, left=left[i:], right=right[j:], write=k,
        )
        k += 1

    for rest, side in ((left[i:], "left"), (right[j:], "right")):
        for x in rest:
            arr[k] = x
            if side == "left":
                i += 1
            else:
                j += 1
            emit(
                Kind.MERGE_TAKE,
                f"Copy remaining {x} from the {side} half into position {k}.",
                line=9, lo=lo, mid=mid, hi=hi, left=left[i:], right=right[j:], write=k,
            )
            k += 1

    emit(
        Kind.MERGE_COMPLETE,
        f"A[{lo}..{hi}] is now sorted: {arr[lo:hi + 1]}.",
        line=10, lo=lo, mid=mid, hi=hi,
    )
