import pytest

from algoviz.errors import ConfigurationError
from algoviz.inputs import DEFAULT_PAYLOADS, build_inputs, parse_graph, parse_grid, parse_number_list


# ---------------------------------------------------------------------------
# Number lists
# ---------------------------------------------------------------------------
def test_parse_number_list() -> None:
    assert parse_number_list("64, 34 25") == [64, 34, 25]
    assert parse_number_list("0.5, 2") == [0.5, 2]
    assert parse_number_list([3, 1.5]) == [3, 1.5]
    assert all(isinstance(v, int) for v in parse_number_list("1,2,3"))


@pytest.mark.parametrize(
    "text, kwargs",
    [
        ("", {}),
        ("1, x", {}),
        ("nan", {}),
        ("1, inf", {}),
        ([True], {}),
        ("1.5", {"integers": True}),
        ("-1", {"minimum": 0}),
        ("2", {"maximum": 1}),
        ("1, 2, 3", {"max_items": 2}),
        (42, {}),
    ],
)
def test_parse_number_list_rejects(text, kwargs) -> None:
    with pytest.raises(ConfigurationError):
        parse_number_list(text, **kwargs)


# ---------------------------------------------------------------------------
# Grids & graphs
# ---------------------------------------------------------------------------
def test_parse_grid_text_forms() -> None:
    text = "1 . . .\n0,0,3,0\n.4..\n0 0 0 2"
    assert parse_grid(text) == [
        [1, 0, 0, 0],
        [0, 0, 3, 0],
        [0, 4, 0, 0],
        [0, 0, 0, 2],
    ]


def test_parse_grid_rejects_garbage() -> None:
    with pytest.raises(ConfigurationError):
        parse_grid("1 2\nx 0")
    with pytest.raises(ConfigurationError):
        parse_grid("1 1\n0 0 0")


def test_parse_graph_accepts_lists() -> None:
    g = parse_graph(["A", "B", "C"], ["A-B:2", "B-C"])
    assert g.node_ids() == ["A", "B", "C"]
    assert g.get_edge("A-B").weight == 2


# ---------------------------------------------------------------------------
# build_inputs
# ---------------------------------------------------------------------------
def test_every_algorithm_has_defaults() -> None:
    for key in DEFAULT_PAYLOADS:
        assert build_inputs(key, {})


def test_graph_defaults_and_overrides() -> None:
    kwargs = build_inputs("bfs", {})
    assert kwargs["start"] == "A"
    assert kwargs["graph"].node_count() == 6

    kwargs = build_inputs("bfs", {"nodes": "X, Y", "edges": "X-Y"})
    assert kwargs["start"] == "X"
    assert kwargs["graph"].node_ids() == ["X", "Y"]

    kwargs = build_inputs("dfs", {"adjacency": "P: Q R\nQ: R", "start": "Q"})
    assert kwargs["start"] == "Q"
    assert kwargs["graph"].edge_count() == 3


def test_topological_sort_is_directed_by_default() -> None:
    kwargs = build_inputs("topological_sort", {"nodes": "A, B", "edges": "A->B"})
    assert kwargs["graph"].directed
    assert "start" not in kwargs


def test_unknown_start_node() -> None:
    with pytest.raises(ConfigurationError, match="Z"):
        build_inputs("bfs", {"start": "Z"})


def test_value_bounds_per_algorithm() -> None:
    assert build_inputs("counting_sort", {"values": "3, 0, 3"})["values"] == [3, 0, 3]
    with pytest.raises(ConfigurationError):
        build_inputs("counting_sort", {"values": "3, -1"})
    with pytest.raises(ConfigurationError):
        build_inputs("bucket_sort", {"values": "0.5, 2"})
    assert build_inputs("bucket_sort", {"values": "0.5"})["buckets"] == 5


def test_new_values_drop_the_example_target() -> None:
    with pytest.raises(ConfigurationError, match="search for"):
        build_inputs("linear_search", {"values": "1, 2, 3"})
    kwargs = build_inputs("linear_search", {"values": "1, 2, 3", "target": "2"})
    assert kwargs == {"values": [1, 2, 3], "target": 2}


def test_scalar_fields() -> None:
    assert build_inputs("n_queens", {"n": "5"}) == {"n": 5}
    with pytest.raises(ConfigurationError):
        build_inputs("n_queens", {"n": 9})
    with pytest.raises(ConfigurationError):
        build_inputs("kmp", {"pattern": ""})
    with pytest.raises(ConfigurationError):
        build_inputs("huffman", {"text": "x" * 501})
    with pytest.raises(ConfigurationError):
        build_inputs("bucket_sort", {"buckets": "many"})


def test_limits_and_unknown_algorithm() -> None:
    with pytest.raises(ConfigurationError):
        build_inputs("selection_sort", {"values": [1, 2, 3]}, max_items=2)
    with pytest.raises(ConfigurationError):
        build_inputs("bogo_sort", {})


def test_knapsack_fields() -> None:
    assert build_inputs("knapsack", {}) == {"weights": [2, 3, 4, 5], "values": [3, 4, 5, 6], "capacity": 8}
    kwargs = build_inputs("knapsack", {"weights": "1, 2", "values": "5, 0.5", "capacity": "3"})
    assert kwargs == {"weights": [1, 2], "values": [5, 0.5], "capacity": 3}
    with pytest.raises(ConfigurationError):
        build_inputs("knapsack", {"weights": "1.5", "values": "1"})
    with pytest.raises(ConfigurationError):
        build_inputs("knapsack", {"weights": "1", "values": "-1"})
    with pytest.raises(ConfigurationError):
        build_inputs("knapsack", {"capacity": 51})


def test_union_find_fields() -> None:
    kwargs = build_inputs("union_find", {})
    assert kwargs["size"] == 8
    assert kwargs["operations"][0] == ("union", 0, 1)
    assert len(kwargs["operations"]) == 9

    # a new size drops the example script; the generator then builds its own
    assert build_inputs("union_find", {"size": 4}) == {"size": 4}
    kwargs = build_inputs("union_find", {"size": 3, "operations": "u 0 2"})
    assert kwargs == {"size": 3, "operations": [("union", 0, 2)]}
    with pytest.raises(ConfigurationError):
        build_inputs("union_find", {"size": 3, "operations": "union 0 5"})
    with pytest.raises(ConfigurationError):
        build_inputs("union_find", {"size": 17})


def test_floyd_warshall_example_is_directed() -> None:
    kwargs = build_inputs("floyd_warshall", {})
    assert kwargs["graph"].directed
    assert kwargs["graph"].edge_count() == 8
    assert "source" not in kwargs
