"""
binary_search.py - Binary Search
=================================
Classic closed-interval binary search on a non-decreasing array.
mid = (lo + hi) // 2; the interval shrinks until the target is found or
lo passes hi.
"""

from typing import List, Optional, Sequence

from algoviz.algorithms.common import require_values
from algoviz.engine.snapshot import Kind, Trace, TraceBuilder
from algoviz.errors import ConfigurationError


PSEUDOCODE: List[str] = [
    "def BinarySearch(A, target):",         # 0
    "    lo ← 0; hi ← n - 1",               # 1
    "    while lo <= hi:",                  # 2
    "        mid ← (lo + hi) // 2",         # 3
    "        if A[mid] == target: return mid",  # 4
    "        if A[mid] < target: lo ← mid + 1",  # 5
    "        else: hi ← mid - 1",           # 6
    "    return NOT FOUND",                 # 7
]


def binary_search(values: Sequence[float], target: float) -> Trace:
    arr = require_values(values)
    require_values([target], "target")
    if any(arr[k] > arr[k + 1] for k in range(len(arr) - 1)):
        raise ConfigurationError("Binary search needs the values sorted in ascending order")

    tb = TraceBuilder("binary_search")
    lo, hi = 0, len(arr) - 1
    probes = 0

    def emit(kind: Kind, narration: str, line: int, mid: Optional[int] = None, found: Optional[int] = None) -> None:
        tb.emit(
            kind, narration, line=line,
            array=arr, target=target, lo=lo, hi=hi, mid=mid,
            probes=probes, found_index=found,
        )

    emit(Kind.INITIALIZE, f"Search for {target} in A[0..{hi}].", line=1)

    while lo <= hi:
        mid = (lo + hi) // 2
        probes += 1
        emit(Kind.PROBE, f"Probe mid = ({lo} + {hi}) // 2 = {mid}: A[{mid}] = {arr[mid]}.", line=3, mid=mid)

        if arr[mid] == target:
            emit(Kind.COMPLETE, f"Found {target} at index {mid} after {probes} probes.", line=4, mid=mid, found=mid)
            return tb.build()
        if arr[mid] < target:
            lo = mid + 1
            emit(Kind.NARROW, f"{arr[mid]} < {target}: search the right half A[{lo}..{hi}].", line=5, mid=mid)
        else:
            hi = mid - 1
            emit(Kind.NARROW, f"{arr[mid]} > {target}: search the left half A[{lo}..{hi}].", line=6, mid=mid)

    emit(Kind.NOT_FOUND, f"{target} is not in the array ({probes} probes).", line=7)
    return tb.build()
