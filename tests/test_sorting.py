import pytest

from algoviz.algorithms.bucket_sort import bucket_sort
from algoviz.algorithms.counting_sort import counting_sort
from algoviz.algorithms.merge_sort import merge_sort
from algoviz.algorithms.quick_sort import quick_sort
from algoviz.algorithms.selection_sort import selection_sort
from algoviz.engine import Kind
from algoviz.errors import ConfigurationError

VALUES = [38, 27, 43, 3, 9, 82, 10]


# ---------------------------------------------------------------------------
# Selection sort
# ---------------------------------------------------------------------------
def test_selection_sort_swaps_once_per_pass() -> None:
    values = [64, 34, 25, 12, 22, 11, 90, 88, 45, 50]
    trace = selection_sort(values)
    final = trace.last.state

    assert list(final["array"]) == sorted(values)
    assert len(trace.of_kind(Kind.SWAP)) == 9
    assert final["swaps"] == 9
    assert final["comparisons"] == 45
    assert values == [64, 34, 25, 12, 22, 11, 90, 88, 45, 50]


def test_selection_sort_single_value() -> None:
    trace = selection_sort([7])
    assert trace.kinds() == [Kind.INITIALIZE, Kind.COMPLETE]


# ---------------------------------------------------------------------------
# Counting sort
# ---------------------------------------------------------------------------
def test_counting_sort() -> None:
    trace = counting_sort([4, 2, 8, 3, 1, 9, 6, 5, 7])
    assert list(trace.last.state["output"]) == [1, 2, 3, 4, 5, 6, 7, 8, 9]
    assert len(trace.of_kind(Kind.COUNT)) == 9
    assert len(trace.of_kind(Kind.CUMULATIVE)) == 9
    assert len(trace.of_kind(Kind.PLACE)) == 9


def test_counting_sort_is_stable() -> None:
    trace = counting_sort([1, 0, 1, 0])
    final = trace.last.state
    assert list(final["output"]) == [0, 0, 1, 1]
    assert list(final["output_sources"]) == [1, 3, 0, 2]


@pytest.mark.parametrize("values", [[3, -1], [1.5, 2], []])
def test_counting_sort_rejects_bad_keys(values) -> None:
    with pytest.raises(ConfigurationError):
        counting_sort(values)


# ---------------------------------------------------------------------------
# Quick sort / merge sort
# ---------------------------------------------------------------------------
def test_quick_sort() -> None:
    trace = quick_sort(VALUES)
    final = trace.last.state
    assert list(final["array"]) == sorted(VALUES)
    assert list(final["sorted"]) == list(range(len(VALUES)))
    assert trace.terminal_kind is Kind.COMPLETE
    # the first partition of the whole range uses the last element as pivot
    first_pivot = trace.of_kind(Kind.SELECT_PIVOT)[0]
    assert first_pivot.state["pivot_index"] == 6


def test_merge_sort() -> None:
    trace = merge_sort(VALUES)
    assert list(trace.last.state["array"]) == sorted(VALUES)
    assert len(trace.of_kind(Kind.DIVIDE)) == len(VALUES) - 1
    assert len(trace.of_kind(Kind.MERGE_COMPLETE)) == len(VALUES) - 1
    first = trace.of_kind(Kind.DIVIDE)[0].state
    assert (first["lo"], first["mid"], first["hi"]) == (0, 3, 6)
    assert VALUES == [38, 27, 43, 3, 9, 82, 10]


def test_merge_sort_takes_left_on_ties() -> None:
    trace = merge_sort([2, 2])
    take = trace.of_kind(Kind.MERGE_TAKE)[0]
    assert "left" in take.narration


# ---------------------------------------------------------------------------
# Bucket sort
# ---------------------------------------------------------------------------
def test_bucket_sort() -> None:
    values = [0.78, 0.17, 0.39, 0.26, 0.72, 0.94, 0.21, 0.12, 0.23, 0.68]
    trace = bucket_sort(values)
    assert list(trace.last.state["output"]) == sorted(values)
    assert len(trace.last.state["buckets"]) == 5
    assert trace.of_kind(Kind.DISTRIBUTE)[0].state["bucket"] == 3


def test_bucket_sort_puts_one_in_last_bucket() -> None:
    trace = bucket_sort([1.0, 0.0], buckets=4)
    assert [s.state["bucket"] for s in trace.of_kind(Kind.DISTRIBUTE)] == [3, 0]
    assert list(trace.last.state["output"]) == [0.0, 1.0]


@pytest.mark.parametrize("values, buckets", [([0.5, 1.5], 5), ([0.5], 0), ([-0.1], 5)])
def test_bucket_sort_rejects_bad_input(values, buckets) -> None:
    with pytest.raises(ConfigurationError):
        bucket_sort(values, buckets=buckets)
