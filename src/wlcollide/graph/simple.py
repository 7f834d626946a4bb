"""Immutable simple graph on vertices 0..n-1 with bitset adjacency."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

import networkx as nx

from wlcollide.errors import InvalidParameter


Edge = Tuple[int, int]


def _normalize_edges(n: int, edges: Iterable[Sequence[int]]) -> Tuple[Edge, ...]:
    seen = set()
    for e in edges:
        if len(e) != 2:
            raise InvalidParameter(f"Edge {e!r} must have exactly two endpoints.")
        u, v = int(e[0]), int(e[1])
        if not (0 <= u < n and 0 <= v < n):
            raise InvalidParameter(f"Edge ({u}, {v}) references a vertex outside 0..{n - 1}.")
        if u == v:
            raise InvalidParameter(f"Self-loop at vertex {u} is not allowed in a simple graph.")
        key = (u, v) if u < v else (v, u)
        if key in seen:
            raise InvalidParameter(f"Duplicate edge {key}.")
        seen.add(key)
    return tuple(sorted(seen))


@dataclass(frozen=True)
class Graph:
    """
    Simple undirected graph with an optional initial vertex coloring.

    n:      vertex count (vertices are 0..n-1).
    edges:  any iterable of 2-sequences; stored as a sorted tuple of (u, v), u < v.
    colors: optional tuple of n ints; None means every vertex has the same color.

    Construction validates the simple-graph invariant and raises
    InvalidParameter on out-of-range endpoints, self-loops or duplicates.
    """

    n: int
    edges: Tuple[Edge, ...] = ()
    colors: Optional[Tuple[int, ...]] = None
    adj: Tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.n, int) or isinstance(self.n, bool) or self.n < 1:
            raise InvalidParameter(f"Vertex count must be an integer >= 1, got {self.n!r}.")
        edges = _normalize_edges(self.n, self.edges)
        object.__setattr__(self, "edges", edges)

        if self.colors is not None:
            colors = tuple(self.colors)
            if len(colors) != self.n:
                raise InvalidParameter(f"Expected {self.n} vertex colors, got {len(colors)}.")
            if not all(isinstance(c, int) for c in colors):
                raise InvalidParameter("Vertex colors must be integers.")
            object.__setattr__(self, "colors", colors)

        adj = [0] * self.n
        for u, v in edges:
            adj[u] |= 1 << v
            adj[v] |= 1 << u
        object.__setattr__(self, "adj", tuple(adj))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def number_of_edges(self) -> int:
        return len(self.edges)

    def vertex_color(self, v: int) -> int:
        return 0 if self.colors is None else self.colors[v]

    def has_edge(self, u: int, v: int) -> bool:
        return bool((self.adj[u] >> v) & 1)

    def degree(self, v: int) -> int:
        return bin(self.adj[v]).count("1")

    def neighbors(self, v: int) -> Tuple[int, ...]:
        out: List[int] = []
        nbr = self.adj[v]
        while nbr:
            lsb = nbr & -nbr
            out.append(lsb.bit_length() - 1)
            nbr ^= lsb
        return tuple(out)

    def degree_sequence(self) -> Tuple[int, ...]:
        """Degrees in non-increasing order."""
        return tuple(sorted((self.degree(v) for v in range(self.n)), reverse=True))

    def isolated_vertices(self) -> Tuple[int, ...]:
        return tuple(v for v in range(self.n) if self.adj[v] == 0)

    def sort_key(self) -> tuple:
        """Total order used to pick deterministic representatives."""
        return (self.n, self.edges, self.colors or ())

    # ------------------------------------------------------------------
    # Transformations
    # ------------------------------------------------------------------

    def relabel(self, perm: Sequence[int]) -> "Graph":
        """
        Image of this graph under the vertex map v -> perm[v].
        Colors travel with their vertices.
        """
        if sorted(perm) != list(range(self.n)):
            raise InvalidParameter(f"{perm!r} is not a permutation of 0..{self.n - 1}.")
        edges = [(perm[u], perm[v]) for u, v in self.edges]
        colors = None
        if self.colors is not None:
            new_colors = [0] * self.n
            for v, c in enumerate(self.colors):
                new_colors[perm[v]] = c
            colors = tuple(new_colors)
        return Graph(self.n, tuple(edges), colors)

    def to_networkx(self) -> nx.Graph:
        G = nx.Graph()
        G.add_nodes_from(range(self.n))
        G.add_edges_from(self.edges)
        if self.colors is not None:
            nx.set_node_attributes(G, dict(enumerate(self.colors)), "color")
        return G

    @classmethod
    def from_networkx(cls, G: nx.Graph, *, color_attr: Optional[str] = None) -> "Graph":
        """
        Build a Graph from a networkx graph whose nodes are exactly 0..n-1.
        """
        if isinstance(G, (nx.DiGraph, nx.MultiGraph)):
            raise InvalidParameter("Only simple undirected graphs are supported.")
        n = G.number_of_nodes()
        if set(G.nodes()) != set(range(n)):
            raise InvalidParameter("Node labels must be the integers 0..n-1.")
        colors = None
        if color_attr is not None:
            colors = tuple(int(G.nodes[v].get(color_attr, 0)) for v in range(n))
        return cls(n, tuple(G.edges()), colors)

    def __repr__(self) -> str:
        if self.colors is None:
            return f"Graph(n={self.n}, edges={list(self.edges)})"
        return f"Graph(n={self.n}, edges={list(self.edges)}, colors={list(self.colors)})"
