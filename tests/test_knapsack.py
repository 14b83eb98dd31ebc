import pytest

from algoviz.algorithms.knapsack import MAX_CAPACITY, MAX_ITEMS, knapsack
from algoviz.engine import Kind
from algoviz.errors import ConfigurationError


def test_example_table_and_choice() -> None:
    trace = knapsack([2, 3, 4, 5], [3, 4, 5, 6], 8)
    final = trace.last.state

    assert trace.terminal_kind is Kind.COMPLETE
    assert final["table"][4] == (0, 0, 3, 4, 5, 7, 8, 9, 10)
    assert final["taken"] == (3, 1)
    assert final["total_weight"] == 8
    assert final["total_value"] == 10
    # initialise, 4 × 9 cells checked and decided, table complete, 3 trace-back pairs, complete
    assert len(trace) == 1 + 4 * 9 * 2 + 1 + 3 * 2 + 1
    assert len(trace.of_kind(Kind.TOO_HEAVY)) == 14
    assert len(trace.of_kind(Kind.INCLUDE_ITEM)) == 18
    assert len(trace.of_kind(Kind.EXCLUDE_ITEM)) == 4
    assert [s.state["item"] for s in trace.of_kind(Kind.ITEM_TAKEN)] == [3, 1]
    assert [s.state["item"] for s in trace.of_kind(Kind.ITEM_LEFT)] == [2]


def test_table_fills_row_by_row() -> None:
    trace = knapsack([2, 3], [3, 4], 3)
    cells = [s.state["cell"] for s in trace.of_kind(Kind.CHECK_CELL)]
    assert cells == [(1, 0), (1, 1), (1, 2), (1, 3), (2, 0), (2, 1), (2, 2), (2, 3)]
    assert trace[0].state["table"] == ((0, 0, 0, 0),) * 3


def test_nothing_fits() -> None:
    trace = knapsack([5], [10], 4)
    final = trace.last.state
    assert len(trace.of_kind(Kind.TOO_HEAVY)) == 5
    assert final["taken"] == ()
    assert final["total_value"] == 0
    assert trace.terminal_kind is Kind.COMPLETE


def test_tie_keeps_the_earlier_item() -> None:
    trace = knapsack([1, 1], [2, 2], 1)
    assert trace.last.state["taken"] == (0,)
    exclude = trace.of_kind(Kind.EXCLUDE_ITEM)
    assert [s.state["cell"] for s in exclude] == [(2, 1)]


@pytest.mark.parametrize(
    "weights, values, capacity",
    [
        ([], [], 5),
        ([1, 2], [1], 5),
        ([0], [1], 5),
        ([1.5], [1], 5),
        ([True], [1], 5),
        ([1], [-1], 5),
        ([1], [1], 0),
        ([1], [1], MAX_CAPACITY + 1),
        ([1] * (MAX_ITEMS + 1), [1] * (MAX_ITEMS + 1), 5),
    ],
)
def test_rejects_bad_items(weights, values, capacity) -> None:
    with pytest.raises(ConfigurationError):
        knapsack(weights, values, capacity)
