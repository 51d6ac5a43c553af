"""
Unit tests for AdjacencyListGraph.
"""

from adjacency_list_graph import AdjacencyListGraph
from graph import Edge
from nodes import NodeMetadata


def test_add_nodes_and_edges():
    g = AdjacencyListGraph()

    g.add_edge(Edge("A", "B", 1.0))
    g.add_edge(Edge("A", "C", 2.0))
    g.add_edge(Edge("B", "C", 3.0))

    assert set(g.nodes()) == {"A", "B", "C"}
    assert [e.dst for e in g.neighbors("A")] == ["B", "C"]
    assert [e.dst for e in g.neighbors("B")] == ["C"]
    assert g.neighbors("C") == ()
    assert len(g.edges()) == 3


def test_neighbors_of_unknown_node_is_empty():
    g = AdjacencyListGraph()
    assert g.neighbors("missing") == ()
    assert not g.has_node("missing")


def test_first_metadata_wins():
    g = AdjacencyListGraph()
    g.add_node("A", NodeMetadata("Calc I", 2, "Math"))
    g.add_node("A", NodeMetadata("Other", 9, "CS"))

    assert g.metadata("A") == NodeMetadata("Calc I", 2, "Math")
    assert len(g) == 1


def test_bare_node_receives_metadata_later():
    g = AdjacencyListGraph()
    g.add_edge(Edge("A", "B", 1.0))
    assert g.metadata("A") is None

    g.add_node("A", NodeMetadata("Calc I"))
    assert g.metadata("A") == NodeMetadata("Calc I")


def test_duplicate_edges_are_kept():
    g = AdjacencyListGraph()
    g.add_edge(Edge("A", "B", 1.0))
    g.add_edge(Edge("A", "B", 1.0))

    assert g.degree("A") == 2
    assert len(g.undirected_edges()) == 1


def test_undirected_edges_keep_distinct_weights():
    g = AdjacencyListGraph()
    g.add_undirected_edge(Edge("A", "B", 1.0))
    g.add_undirected_edge(Edge("B", "A", 2.0))

    keys = {e.key for e in g.undirected_edges()}
    assert keys == {("A", "B", 1.0), ("A", "B", 2.0)}


def test_undirected_edge_mirrors_metadata():
    g = AdjacencyListGraph()
    calc = NodeMetadata("Calc I", 2, "Math")
    lin = NodeMetadata("Lin Alg", 3, "Math")
    g.add_undirected_edge(
        Edge("C101", "C102", 10.0, src_meta=calc, dst_meta=lin, src_terminal=True, edge_type="prerequisite")
    )

    (back,) = g.neighbors("C102")
    assert back.dst == "C101"
    assert back.src_meta == lin
    assert back.dst_meta == calc
    assert back.dst_terminal is True
    assert back.src_terminal is False
    assert back.edge_type == "prerequisite"
    assert back.key == ("C101", "C102", 10.0)


def test_remove_node_drops_both_directions():
    g = AdjacencyListGraph()
    g.add_undirected_edge(Edge("A", "B", 1.0))
    g.add_undirected_edge(Edge("B", "C", 1.0))

    g.remove_node("C")

    assert not g.has_node("C")
    assert [e.dst for e in g.neighbors("B")] == ["A"]
    assert all("C" not in (e.src, e.dst) for e in g.edges())


def test_copy_is_independent():
    g = AdjacencyListGraph()
    g.add_undirected_edge(Edge("A", "B", 1.0))

    clone = g.copy()
    clone.remove_node("B")

    # original structure must remain intact
    assert g.has_node("B")
    assert len(g.edges()) == 2
    assert len(clone.edges()) == 0
