"""Tests for exact isomorphism confirmation."""
import pytest

from wlcollide.classify.isomorphism import are_isomorphic, find_isomorphism, profile_graph
from wlcollide.errors import ResourceExhausted
from wlcollide.graph.simple import Graph


def _cycle(n):
    return Graph(n, [(i, (i + 1) % n) for i in range(n)])


def _two_triangles():
    return Graph(6, [(0, 1), (1, 2), (0, 2), (3, 4), (4, 5), (3, 5)])


def _is_isomorphism(a, b, p):
    return sorted(tuple(sorted((p[u], p[v]))) for u, v in a.edges) == list(b.edges)


def test_find_isomorphism_relabeled_cycle():
    a = _cycle(6)
    b = a.relabel((3, 5, 0, 2, 4, 1))
    p = find_isomorphism(a, b)
    assert p is not None
    assert _is_isomorphism(a, b, p)


def test_same_one_wl_not_isomorphic():
    assert find_isomorphism(_cycle(6), _two_triangles()) is None


def test_different_edge_counts():
    assert not are_isomorphic(Graph(4, [(0, 1)]), Graph(4, [(0, 1), (2, 3)]))


def test_colors_must_match():
    a = Graph(3, [(0, 1), (1, 2)], colors=(1, 0, 0))
    b = Graph(3, [(0, 1), (1, 2)], colors=(0, 0, 1))
    c = Graph(3, [(0, 1), (1, 2)], colors=(0, 1, 0))
    assert are_isomorphic(a, b)
    assert not are_isomorphic(a, c)


def test_budget_exhaustion():
    with pytest.raises(ResourceExhausted) as info:
        find_isomorphism(_cycle(6), _two_triangles(), budget=3)
    assert info.value.limit == 3


def test_budget_counts_assignments():
    # Empty graphs: every assignment is consistent, one attempt per vertex
    assert find_isomorphism(Graph(7), Graph(7), budget=7) == tuple(range(7))


def test_profile_contents():
    prof = profile_graph(Graph(4, [(0, 1), (0, 2), (0, 3)]))
    assert prof.degree_sequence == (3, 1, 1, 1)
    assert prof.color_multiset == (0, 0, 0, 0)
    assert len(prof.vertex_digests) == 4
    assert prof.vertex_digests[1] == prof.vertex_digests[2]
