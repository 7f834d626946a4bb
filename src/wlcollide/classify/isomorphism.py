"""Exact isomorphism confirmation by backtracking over 1-WL classes."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from wlcollide.config import DEFAULT_ISO_ATTEMPT_BUDGET, DEFAULT_TUPLE_STATE_CEILING
from wlcollide.errors import ResourceExhausted
from wlcollide.graph.simple import Graph
from wlcollide.wl.hashing import CanonicalHash, canonical_hash, vertex_digests
from wlcollide.wl.refine import refine


@dataclass(frozen=True)
class GraphProfile:
    """
    Cheap invariants of a graph, computed once per candidate.

    wl_hash:          1-WL canonical hash (bucket key).
    vertex_digests:   invariant 1-WL color of every vertex.
    degree_sequence:  non-increasing degrees.
    color_multiset:   sorted initial vertex colors.
    """

    wl_hash: CanonicalHash
    vertex_digests: Tuple[str, ...]
    degree_sequence: Tuple[int, ...]
    color_multiset: Tuple[int, ...]


def profile_graph(graph: Graph) -> GraphProfile:
    partition = refine(graph, 1)
    return GraphProfile(
        wl_hash=canonical_hash(partition),
        vertex_digests=vertex_digests(partition),
        degree_sequence=graph.degree_sequence(),
        color_multiset=tuple(sorted(graph.vertex_color(v) for v in range(graph.n))),
    )


def profiles_compatible(pa: GraphProfile, pb: GraphProfile) -> bool:
    return (
        pa.degree_sequence == pb.degree_sequence
        and pa.color_multiset == pb.color_multiset
        and Counter(pa.vertex_digests) == Counter(pb.vertex_digests)
    )


def wl_hash_at(graph: Graph, k: int, *, ceiling: int = DEFAULT_TUPLE_STATE_CEILING) -> CanonicalHash:
    return canonical_hash(refine(graph, k, ceiling=ceiling))


def find_isomorphism(
    a: Graph,
    b: Graph,
    *,
    budget: int = DEFAULT_ISO_ATTEMPT_BUDGET,
    profile_a: Optional[GraphProfile] = None,
    profile_b: Optional[GraphProfile] = None,
) -> Optional[Tuple[int, ...]]:
    """
    Return a permutation p with p[u] the image of vertex u of `a` in `b`, or
    None if the graphs are not isomorphic.

    Vertices may only map to vertices with the same 1-WL digest and initial
    color, which bounds the search by the product of class factorials
    (at most n!). Each tentative assignment counts against `budget`;
    ResourceExhausted is raised when it runs out.
    """
    if a.n != b.n or a.number_of_edges != b.number_of_edges:
        return None
    pa = profile_a or profile_graph(a)
    pb = profile_b or profile_graph(b)
    if not profiles_compatible(pa, pb):
        return None

    n = a.n
    candidates: List[List[int]] = []
    for u in range(n):
        key = (pa.vertex_digests[u], a.vertex_color(u))
        candidates.append([w for w in range(n) if (pb.vertex_digests[w], b.vertex_color(w)) == key])

    # Most constrained vertices first.
    order = sorted(range(n), key=lambda u: (len(candidates[u]), u))

    p = [-1] * n
    used = [False] * n
    attempts = 0

    def consistent(u: int, w: int, placed: Sequence[int]) -> bool:
        for x in placed:
            if a.has_edge(u, x) != b.has_edge(w, p[x]):
                return False
        return True

    def backtrack(i: int) -> bool:
        nonlocal attempts
        if i == n:
            return True
        u = order[i]
        placed = order[:i]
        for w in candidates[u]:
            if used[w]:
                continue
            attempts += 1
            if attempts > budget:
                raise ResourceExhausted(
                    f"isomorphism search exceeded {budget} attempts on {n} vertices",
                    required=attempts,
                    limit=budget,
                )
            if not consistent(u, w, placed):
                continue
            p[u] = w
            used[w] = True
            if backtrack(i + 1):
                return True
            p[u] = -1
            used[w] = False
        return False

    if backtrack(0):
        return tuple(p)
    return None


def are_isomorphic(a: Graph, b: Graph, *, budget: int = DEFAULT_ISO_ATTEMPT_BUDGET) -> bool:
    return find_isomorphism(a, b, budget=budget) is not None
