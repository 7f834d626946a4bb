"""Tests for canonical hashes of stable partitions."""
import itertools
import random

import pytest

from wlcollide.graph.simple import Graph
from wlcollide.wl.hashing import canonical_hash, class_digests, vertex_digests
from wlcollide.wl.refine import refine


def _cycle(n):
    return Graph(n, [(i, (i + 1) % n) for i in range(n)])


def _two_triangles():
    return Graph(6, [(0, 1), (1, 2), (0, 2), (3, 4), (4, 5), (3, 5)])


def _random_graph(n, p, seed):
    rng = random.Random(seed)
    edges = [(i, j) for i in range(n) for j in range(i + 1, n) if rng.random() < p]
    return Graph(n, edges)


def _random_perm(n, seed):
    perm = list(range(n))
    random.Random(seed).shuffle(perm)
    return tuple(perm)


@pytest.mark.parametrize("k", [1, 2, 3])
@pytest.mark.parametrize("seed", range(5))
def test_hash_invariant_under_relabeling(k, seed):
    g = _random_graph(6, 0.45, seed)
    h = g.relabel(_random_perm(6, seed + 100))
    assert canonical_hash(refine(g, k)) == canonical_hash(refine(h, k))


def test_hash_invariant_for_every_permutation_small():
    g = Graph(4, [(0, 1), (1, 2), (1, 3)], colors=(0, 0, 1, 0))
    base = canonical_hash(refine(g, 2))
    for perm in itertools.permutations(range(4)):
        assert canonical_hash(refine(g.relabel(perm), 2)) == base


def test_hash_separates_degree_sequences():
    path = Graph(4, [(0, 1), (1, 2), (2, 3)])
    star = Graph(4, [(0, 1), (0, 2), (0, 3)])
    assert canonical_hash(refine(path, 1)) != canonical_hash(refine(star, 1))


def test_hash_depends_on_initial_colors():
    c4 = _cycle(4)
    colored = Graph(4, c4.edges, colors=(0, 0, 1, 1))
    assert canonical_hash(refine(c4, 1)) != canonical_hash(refine(colored, 1))


def test_hash_depends_on_dimension_and_size():
    assert canonical_hash(refine(_cycle(5), 1)) != canonical_hash(refine(_cycle(5), 2))
    assert canonical_hash(refine(_cycle(5), 1)) != canonical_hash(refine(_cycle(6), 1))


def test_one_wl_cannot_split_c6_and_two_triangles():
    assert canonical_hash(refine(_cycle(6), 1)) == canonical_hash(refine(_two_triangles(), 1))
    assert canonical_hash(refine(_cycle(6), 2)) == canonical_hash(refine(_two_triangles(), 2))


def test_three_wl_splits_c6_and_two_triangles():
    assert canonical_hash(refine(_cycle(6), 3)) != canonical_hash(refine(_two_triangles(), 3))


def test_hash_ignores_color_ids():
    # Same quotient structure reached through different class numbering
    g = Graph(5, [(0, 1), (0, 2), (0, 3), (0, 4)])
    h = g.relabel((4, 3, 2, 1, 0))
    pg, ph = refine(g, 1), refine(h, 1)
    assert class_digests(pg)[pg.colors[0]] == class_digests(ph)[ph.colors[4]]
    assert canonical_hash(pg) == canonical_hash(ph)


def test_class_digests_distinct_per_class():
    p = refine(Graph(6, [(0, 1), (1, 2), (2, 3), (3, 4), (4, 5)]), 1)
    digests = class_digests(p)
    assert len(set(digests)) == p.num_classes


def test_vertex_digests_follow_vertices():
    g = Graph(4, [(0, 1), (0, 2), (0, 3)])
    vd = vertex_digests(refine(g, 2))
    assert vd[1] == vd[2] == vd[3]
    assert vd[0] != vd[1]


def test_hash_is_hex_digest():
    h = canonical_hash(refine(_cycle(4), 1))
    assert isinstance(h, str)
    assert len(h) == 32
    int(h, 16)
