"""Tests for the Graph value type."""
import pytest

from wlcollide.errors import InvalidParameter
from wlcollide.graph.simple import Graph


def test_edges_are_normalized():
    g = Graph(4, [(2, 1), (0, 3), (1, 0)])
    assert g.edges == ((0, 1), (0, 3), (1, 2))
    assert g.number_of_edges == 3


def test_neighbors_and_degree():
    # Star K_{1,3} centered at 0
    g = Graph(4, [(0, 1), (0, 2), (0, 3)])
    assert g.neighbors(0) == (1, 2, 3)
    assert g.neighbors(2) == (0,)
    assert g.degree(0) == 3
    assert g.degree(3) == 1
    assert g.has_edge(2, 0)
    assert not g.has_edge(1, 2)
    assert g.degree_sequence() == (3, 1, 1, 1)


def test_isolated_vertices():
    g = Graph(5, [(0, 1)])
    assert g.isolated_vertices() == (2, 3, 4)


@pytest.mark.parametrize(
    "n, edges",
    [
        (0, []),
        (-2, []),
        (3, [(0, 3)]),
        (3, [(1, 1)]),
        (3, [(0, 1), (1, 0)]),
        (3, [(0, 1), (0, 1)]),
        (3, [(0, 1, 2)]),
    ],
)
def test_invalid_graphs(n, edges):
    with pytest.raises(InvalidParameter):
        Graph(n, edges)


def test_invalid_colors():
    with pytest.raises(InvalidParameter):
        Graph(3, [], colors=(0, 1))
    with pytest.raises(InvalidParameter):
        Graph(2, [], colors=("a", "b"))


def test_value_semantics():
    a = Graph(3, [(0, 1), (1, 2)])
    b = Graph(3, [(2, 1), (1, 0)])
    assert a == b
    assert hash(a) == hash(b)
    assert a != Graph(3, [(0, 1), (1, 2)], colors=(0, 0, 1))


def test_relabel_moves_edges_and_colors():
    g = Graph(3, [(0, 1)], colors=(5, 6, 7))
    h = g.relabel((2, 0, 1))
    assert h.edges == ((0, 2),)
    assert h.colors == (6, 7, 5)


def test_relabel_rejects_non_permutation():
    with pytest.raises(InvalidParameter):
        Graph(3, []).relabel((0, 0, 1))


def test_networkx_round_trip():
    g = Graph(4, [(0, 1), (2, 3)], colors=(1, 1, 2, 2))
    G = g.to_networkx()
    assert G.number_of_nodes() == 4
    assert G.number_of_edges() == 2
    assert Graph.from_networkx(G, color_attr="color") == g
