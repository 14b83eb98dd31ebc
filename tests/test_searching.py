import pytest

from algoviz.algorithms.binary_search import binary_search
from algoviz.algorithms.linear_search import linear_search
from algoviz.engine import Kind
from algoviz.errors import ConfigurationError

UNSORTED = [45, 23, 67, 12, 89, 34, 56, 78, 90, 11]
SORTED = [11, 12, 23, 34, 45, 56, 67, 78, 89, 90]


def test_linear_search_found() -> None:
    trace = linear_search(UNSORTED, 34)
    assert trace.terminal_kind is Kind.COMPLETE
    assert trace.last.state["found_index"] == 5
    assert len(trace.of_kind(Kind.PROBE)) == 6
    assert list(trace.last.state["checked"]) == [0, 1, 2, 3, 4, 5]


def test_linear_search_not_found() -> None:
    trace = linear_search(UNSORTED, 100)
    assert trace.terminal_kind is Kind.NOT_FOUND
    assert trace.last.state["found_index"] is None
    assert len(trace.of_kind(Kind.PROBE)) == len(UNSORTED)


def test_binary_search_found() -> None:
    trace = binary_search(SORTED, 67)
    assert trace.terminal_kind is Kind.COMPLETE
    assert trace.last.state["found_index"] == 6
    assert [s.state["mid"] for s in trace.of_kind(Kind.PROBE)] == [4, 7, 5, 6]


def test_binary_search_not_found() -> None:
    trace = binary_search(SORTED, 50)
    assert trace.terminal_kind is Kind.NOT_FOUND
    final = trace.last.state
    assert final["lo"] > final["hi"]


def test_binary_search_requires_sorted_input() -> None:
    with pytest.raises(ConfigurationError):
        binary_search(UNSORTED, 34)
