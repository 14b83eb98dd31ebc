"""
bucket_sort.py - Bucket Sort
=============================
For values in [0, 1]: value x goes to bucket min(floor(x * k), k - 1), so
1.0 lands in the last bucket.  Buckets are sorted individually (stable
insertion sort) and concatenated in bucket order.
"""

import math
from typing import List, Sequence

from algoviz.algorithms.common import require_values
from algoviz.engine.snapshot import Kind, Trace, TraceBuilder
from algoviz.errors import ConfigurationError

DEFAULT_BUCKETS = 5


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BucketSort(A, k):",                            # 0
    "    buckets ← k empty lists",                      # 1
    "    for x in A:",                                  # 2
    "        buckets[min(floor(x * k), k - 1)].append(x)",  # 3
    "    for b in buckets: insertion_sort(b)",          # 4
    "    A ← concatenation of buckets",                 # 5
    "    return A",                                     # 6
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bucket_sort(values: Sequence[float], buckets: int = DEFAULT_BUCKETS) -> Trace:
    arr = require_values(values)
    if isinstance(buckets, bool) or not isinstance(buckets, int) or buckets < 1:
        raise ConfigurationError(f"Bucket count must be a positive integer, got {buckets!r}")
    for x in arr:
        if not 0 <= x <= 1:
            raise ConfigurationError(f"Bucket sort needs values in [0, 1], got {x!r}")

    k = buckets
    tb = TraceBuilder("bucket_sort")
    bins: List[List[float]] = [[] for _ in range(k)]
    result: List[float] = []

    def emit(kind: Kind, narration: str, line: int, index=None, bucket=None) -> None:
        tb.emit(
            kind, narration, line=line,
            array=arr,
            buckets=bins,
            output=result,
            index=index,
            bucket=bucket,
        )

    emit(Kind.INITIALIZE, f"Create {k} empty buckets for {len(arr)} values.", line=1)

    for i, x in enumerate(arr):
        b = min(math.floor(x * k), k - 1)
        bins[b].append(x)
        emit(
            Kind.DISTRIBUTE,
            f"{x} goes to bucket {b} (range [{b / k:g}, {(b + 1) / k:g})).",
            line=3, index=i, bucket=b,
        )

    for b in range(k):
        if not bins[b]:
            continue
        _insertion_sort(bins[b])
        emit(Kind.SORT_BUCKET, f"Sort bucket {b}: {bins[b]}.", line=4, bucket=b)

    for b in range(k):
        result.extend(bins[b])
    emit(Kind.CONCATENATE, f"Concatenate the buckets: {result}.", line=5)

    emit(Kind.COMPLETE, f"Sorted: {result}.", line=6)
    return tb.build()


def _insertion_sort(items: List[float]) -> None:
    for i in range(1, len(items)):
        x = items[i]
        j = i - 1
        while j >= 0 and items[j] > x:
            items[j + 1] = items[j]
            j -= 1
        items[j + 1] = x
