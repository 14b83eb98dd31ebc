"""
linear_search.py - Linear Search
=================================
Probes every index left to right and stops at the first match.
"""

from typing import List, Sequence

from algoviz.algorithms.common import require_values
from algoviz.engine.snapshot import Kind, Trace, TraceBuilder


PSEUDOCODE: List[str] = [
    "def LinearSearch(A, target):",         # 0
    "    for i in 0 .. n-1:",               # 1
    "        if A[i] == target: return i",  # 2
    "    return NOT FOUND",                 # 3
]


def linear_search(values: Sequence[float], target: float) -> Trace:
    arr = require_values(values)
    require_values([target], "target")

    tb = TraceBuilder("linear_search")
    checked: List[int] = []

    tb.emit(
        Kind.INITIALIZE, f"Search {len(arr)} values for {target}.", line=0,
        array=arr, target=target, index=None, checked=checked, found_index=None,
    )

    for i, x in enumerate(arr):
        checked.append(i)
        if x == target:
            tb.emit(
                Kind.PROBE, f"A[{i}] = {x} equals {target}.", line=2,
                array=arr, target=target, index=i, checked=checked, found_index=i,
            )
            tb.emit(
                Kind.COMPLETE, f"Found {target} at index {i} after {i + 1} probes.", line=2,
                array=arr, target=target, index=i, checked=checked, found_index=i,
            )
            return tb.build()
        tb.emit(
            Kind.PROBE, f"A[{i}] = {x} is not {target}.", line=2,
            array=arr, target=target, index=i, checked=checked, found_index=None,
        )

    tb.emit(
        Kind.NOT_FOUND, f"{target} is not in the array ({len(arr)} probes).", line=3,
        array=arr, target=target, index=None, checked=checked, found_index=None,
    )
    return tb.build()
