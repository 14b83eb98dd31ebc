import pytest

from algoviz.errors import ConfigurationError
from algoviz.graph import Edge, Graph, Node


# ---------------------------------------------------------------------------
# Edge list import
# ---------------------------------------------------------------------------
def test_edge_list_builds_ordered_graph(weighted_graph) -> None:
    g = weighted_graph
    assert g.node_ids() == ["A", "B", "C", "D", "E"]
    assert g.edge_count() == 7
    assert g.get_edge("A-B").weight == 4
    assert [nbr for nbr, _ in g.neighbours("D")] == ["A", "B", "E", "C"]
    assert g.get_edge_between("C", "D").id == "D-C"


def test_edge_list_directed_forms() -> None:
    g = Graph.from_edge_list("A, B, C", "A->B:3, B→C, C->A:-2", directed=True)
    assert set(g.edges) == {"A->B", "B->C", "C->A"}
    assert g.get_edge("C->A").weight == -2
    assert g.get_edge_between("B", "A") is None
    assert [nbr for nbr, _ in g.neighbours("A")] == ["B"]
    assert g.has_negative_edges()


def test_edge_list_infers_nodes_when_labels_blank() -> None:
    g = Graph.from_edge_list("", "B-C:2, A-B")
    assert g.node_ids() == ["B", "C", "A"]
    assert g.get_edge("A-B").weight == 1


def test_float_weights() -> None:
    g = Graph.from_edge_list("A, B", "A-B:2.5")
    assert g.get_edge("A-B").weight == 2.5


@pytest.mark.parametrize(
    "nodes, edges",
    [
        ("A, A", ""),                 # duplicate label
        ("A, B", "A-Z"),              # unknown endpoint
        ("A, B", "A-B, B-A"),         # same undirected edge twice
        ("A, B", "A=B"),              # malformed edge
        ("A, B!", ""),                # bad label
        ("", ""),                     # empty graph
    ],
)
def test_edge_list_rejects_bad_input(nodes, edges) -> None:
    with pytest.raises(ConfigurationError):
        Graph.from_edge_list(nodes, edges)


# ---------------------------------------------------------------------------
# Adjacency list import
# ---------------------------------------------------------------------------
def test_adjacency_list_deduplicates_undirected_pairs() -> None:
    g = Graph.from_adjacency_list("A: B(3) C\nB: A, C\n# comment\nC:")
    assert g.node_ids() == ["A", "B", "C"]
    assert set(g.edges) == {"A-B", "A-C", "B-C"}
    assert g.get_edge("A-B").weight == 3


def test_adjacency_list_directed_arrow_syntax() -> None:
    g = Graph.from_adjacency_list("0 -> 1, 2\n1 -> 2", directed=True)
    assert set(g.edges) == {"0->1", "0->2", "1->2"}
    assert g.degree("2") == 0


@pytest.mark.parametrize("text", ["A B C", "A: B?", "", "A: B\nA: C"])
def test_adjacency_list_rejects_bad_input(text) -> None:
    with pytest.raises(ConfigurationError):
        Graph.from_adjacency_list(text)


# ---------------------------------------------------------------------------
# Structure & queries
# ---------------------------------------------------------------------------
def test_undirected_arcs_go_both_ways() -> None:
    g = Graph.from_edge_list("A, B", "A-B:5")
    assert [(u, v, w) for u, v, w, _ in g.arcs()] == [("A", "B", 5), ("B", "A", 5)]


def test_manual_construction_checks_endpoints() -> None:
    g = Graph()
    g.create_node("A")
    with pytest.raises(ConfigurationError):
        g.add_edge(Edge("A", "B"))
    with pytest.raises(ConfigurationError):
        g.add_node(Node("A"))


def test_edge_helpers() -> None:
    e = Edge("A", "B", weight=2)
    assert e.connects("B", "A")
    assert e.other_end("B") == "A"
    d = Edge("A", "B", directed=True)
    assert not d.connects("B", "A")
    assert d.other_end("B") is None
    assert d.name == "A→B"


def test_dict_round_trip(weighted_graph) -> None:
    clone = Graph.from_dict(weighted_graph.to_dict())
    assert clone.node_ids() == weighted_graph.node_ids()
    assert list(clone.edges) == list(weighted_graph.edges)
    assert clone.to_dict() == weighted_graph.to_dict()
