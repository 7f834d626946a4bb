"""
Orderly generation of simple graphs on n vertices, one per isomorphism class.

Edges follow a fixed column-wise order (0,1), (0,2), (1,2), (0,3), ...
A labeled graph is the bit string of its edges in that order and the
canonical representative of a class is the lexicographically maximal
string over all relabelings. Deleting the last edge of a canonical string
leaves a canonical string, so the canonical graphs form a tree rooted at
the empty graph: children add one edge after the parent's last edge and are
kept only if they are canonical. The tree is walked with an explicit stack
so the walk can be checkpointed and resumed.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import networkx as nx
from loguru import logger

from wlcollide.errors import InternalInvariantViolation, InvalidParameter
from wlcollide.external.nauty import geng_count, nauty_available
from wlcollide.graph.simple import Edge, Graph


# OEIS A000088: number of graphs on n unlabeled vertices.
KNOWN_GRAPH_COUNTS: Dict[int, int] = {
    1: 1,
    2: 2,
    3: 4,
    4: 11,
    5: 34,
    6: 156,
    7: 1044,
    8: 12346,
    9: 274668,
    10: 12005168,
}


@lru_cache(maxsize=None)
def edge_order(n: int) -> Tuple[Edge, ...]:
    """Global edge order: column by column, (i, j) for i < j."""
    return tuple((i, j) for j in range(n) for i in range(j))


@lru_cache(maxsize=None)
def _position_table(n: int) -> Dict[Edge, int]:
    return {e: p for p, e in enumerate(edge_order(n))}


def graph_to_mask(graph: Graph) -> int:
    """Bit string of `graph` as an int; position 0 is the most significant bit."""
    m = graph.n * (graph.n - 1) // 2
    pos = _position_table(graph.n)
    mask = 0
    for e in graph.edges:
        mask |= 1 << (m - 1 - pos[e])
    return mask


def mask_to_graph(mask: int, n: int) -> Graph:
    order = edge_order(n)
    m = len(order)
    edges = tuple(order[p] for p in range(m) if (mask >> (m - 1 - p)) & 1)
    return Graph(n, edges)


def _column_block(adj: Sequence[int], sigma: Sequence[int], j: int) -> int:
    """Column j of the relabeled graph: bits H(i, j) = G(sigma[i], sigma[j]), i < j."""
    aj = adj[sigma[j]]
    b = 0
    for i in range(j):
        b = (b << 1) | ((aj >> sigma[i]) & 1)
    return b


def _has_larger_relabeling(adj: Sequence[int], n: int) -> bool:
    """True iff some relabeling of the graph has a lexicographically larger string."""
    identity = list(range(n))
    target = [_column_block(adj, identity, j) for j in range(n)]
    sigma: List[int] = []
    used = [False] * n

    def search(j: int) -> bool:
        for v in range(n):
            if used[v]:
                continue
            sigma.append(v)
            used[v] = True
            blk = _column_block(adj, sigma, j)
            if blk > target[j]:
                return True
            if blk == target[j] and j + 1 < n and search(j + 1):
                return True
            sigma.pop()
            used[v] = False
        return False

    return search(0)


def _adjacency_from_mask(mask: int, n: int) -> List[int]:
    order = edge_order(n)
    m = len(order)
    adj = [0] * n
    for p, (u, v) in enumerate(order):
        if (mask >> (m - 1 - p)) & 1:
            adj[u] |= 1 << v
            adj[v] |= 1 << u
    return adj


def is_canonical_mask(mask: int, n: int) -> bool:
    return not _has_larger_relabeling(_adjacency_from_mask(mask, n), n)


def canonical_mask(graph: Graph) -> int:
    """
    Canonical certificate: the maximal bit string over all relabelings.

    Two graphs are isomorphic iff their certificates are equal. Vertex colors
    are ignored. Branch-and-bound over relabelings; small n only.
    """
    n = graph.n
    adj = graph.adj
    best: List[int] = []
    sigma: List[int] = []
    used = [False] * n

    def search(j: int, cur: List[int]) -> None:
        nonlocal best
        if j == n:
            if cur > best:
                best = list(cur)
            return
        for v in range(n):
            if used[v]:
                continue
            sigma.append(v)
            used[v] = True
            cand = cur + [_column_block(adj, sigma, j)]
            if cand >= best[: j + 1]:
                search(j + 1, cand)
            sigma.pop()
            used[v] = False

    search(0, [])
    mask = 0
    for j in range(1, n):
        mask = (mask << j) | best[j]
    return mask


@dataclass
class EnumeratorState:
    """
    Resumable position of an enumeration.

    stack:   DFS frames (mask, next_position); next_position is the next edge
             position to try as a child of `mask`.
    emitted: graphs yielded so far.
    started: whether the root (empty graph) has been yielded.
    """

    n: int
    stack: List[Tuple[int, int]] = field(default_factory=list)
    emitted: int = 0
    started: bool = False

    def snapshot(self) -> "EnumeratorState":
        return EnumeratorState(n=self.n, stack=list(self.stack), emitted=self.emitted, started=self.started)

    def to_dict(self) -> dict:
        return {
            "n": self.n,
            "stack": [[mask, pos] for mask, pos in self.stack],
            "emitted": self.emitted,
            "started": self.started,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "EnumeratorState":
        return cls(
            n=int(data["n"]),
            stack=[(int(mask), int(pos)) for mask, pos in data["stack"]],
            emitted=int(data["emitted"]),
            started=bool(data["started"]),
        )


class GraphEnumerator:
    """
    Lazy sequence of graphs on n vertices, one per isomorphism class.

    Iterating continues from `state`, so an enumerator built from a saved
    snapshot picks up exactly where the snapshot was taken. `max_graphs`
    caps the total number of graphs (counting those emitted before a
    resume); `truncated` tells whether the cap cut the walk short.
    With `verify`, each graph is checked against the earlier ones with
    networkx and the final count against known values.
    """

    def __init__(
        self,
        n: int,
        *,
        state: Optional[EnumeratorState] = None,
        max_graphs: Optional[int] = None,
        verify: bool = False,
    ):
        if not isinstance(n, int) or n < 1:
            raise InvalidParameter(f"n must be an integer >= 1, got {n!r}.")
        if state is not None and state.n != n:
            raise InvalidParameter(f"Checkpoint is for n={state.n}, not n={n}.")
        self.n = n
        self.m = n * (n - 1) // 2
        self.state = state if state is not None else EnumeratorState(n=n)
        self.max_graphs = max_graphs
        self.verify = verify
        self.truncated = False
        self.exhausted = False
        self._seen: Dict[str, List[nx.Graph]] = {}

    def checkpoint(self) -> EnumeratorState:
        return self.state.snapshot()

    def _accept(self, mask: int) -> Graph:
        graph = mask_to_graph(mask, self.n)
        if self.verify:
            self._cross_check(graph, mask)
        self.state.emitted += 1
        return graph

    def _cross_check(self, graph: Graph, mask: int) -> None:
        if canonical_mask(graph) != mask:
            raise InternalInvariantViolation(
                "accepted graph is not its own canonical representative",
                graph=graph,
                snapshot=self.state.to_dict(),
            )
        G = graph.to_networkx()
        h = nx.weisfeiler_lehman_graph_hash(G)
        for other in self._seen.get(h, []):
            if nx.is_isomorphic(G, other):
                raise InternalInvariantViolation(
                    "enumerator produced two isomorphic graphs",
                    graph=graph,
                    snapshot=self.state.to_dict(),
                )
        self._seen.setdefault(h, []).append(G)

    def _verify_total(self) -> None:
        expected = KNOWN_GRAPH_COUNTS.get(self.n)
        if expected is None and nauty_available():
            expected = geng_count(self.n)
        if expected is not None and expected != self.state.emitted:
            raise InternalInvariantViolation(
                f"enumerated {self.state.emitted} graphs on {self.n} vertices, expected {expected}",
                snapshot=self.state.to_dict(),
            )

    def _capped(self) -> bool:
        if self.max_graphs is not None and self.state.emitted >= self.max_graphs:
            self.truncated = True
            return True
        return False

    def __iter__(self) -> Iterator[Graph]:
        st = self.state
        if not st.started:
            if self._capped():
                return
            st.started = True
            st.stack.append((0, 0))
            yield self._accept(0)

        while st.stack:
            if self._capped():
                logger.info(f"enumeration n={self.n} stopped at max_graphs={self.max_graphs}")
                return
            mask, pos = st.stack[-1]
            if pos >= self.m:
                st.stack.pop()
                continue
            st.stack[-1] = (mask, pos + 1)
            child = mask | (1 << (self.m - 1 - pos))
            if is_canonical_mask(child, self.n):
                st.stack.append((child, pos + 1))
                yield self._accept(child)

        self.exhausted = True
        logger.info(f"enumeration n={self.n} finished: {st.emitted} graphs")
        if self.verify:
            self._verify_total()


def enumerate_graphs(
    n: int,
    *,
    max_graphs: Optional[int] = None,
    verify: bool = False,
) -> Iterator[Graph]:
    """One graph per isomorphism class on n vertices, lazily."""
    return iter(GraphEnumerator(n, max_graphs=max_graphs, verify=verify))


def count_graphs(n: int) -> int:
    return sum(1 for _ in enumerate_graphs(n))
