"""
WL color refinement over a generic state space.

k = 1 refines vertices by their graph neighbourhood (classic 1-WL).
k >= 2 refines ordered k-tuples: position i aggregates the colors of the
n tuples obtained by substituting coordinate i. Both run through the same
loop, `_refine_states`.
"""
from __future__ import annotations

import itertools
from collections import Counter
from typing import Hashable, Iterator, List, Optional, Sequence, Tuple

from loguru import logger

from wlcollide.config import DEFAULT_TUPLE_STATE_CEILING
from wlcollide.errors import InternalInvariantViolation, InvalidParameter, ResourceExhausted
from wlcollide.graph.simple import Graph
from wlcollide.wl.hashing import class_digests
from wlcollide.wl.partition import Partition, PartitionClass


class _VertexSpace:
    """States are vertices; one aggregation position, the neighbourhood."""

    def __init__(self, graph: Graph):
        self.graph = graph
        self.k = 1
        self.size = graph.n

    def seeds(self) -> List[Hashable]:
        return [(self.graph.vertex_color(v),) for v in range(self.graph.n)]

    def position_neighbors(self, s: int) -> Tuple[Sequence[int], ...]:
        return (self.graph.neighbors(s),)


class _TupleSpace:
    """
    States are ordered k-tuples in base-n order.

    Seed of tuple t: k x k matrix over {0,1,2} (0 same vertex, 1 edge,
    2 non-edge), the initial vertex colors of t, and the class digest of
    the prefix t[:k-1] under the stable (k-1)-WL partition.
    """

    def __init__(self, graph: Graph, k: int, prefix_digests: Sequence[str]):
        self.graph = graph
        self.k = k
        self.size = graph.n ** k
        self.weights = tuple(graph.n ** (k - 1 - i) for i in range(k))
        self.prefix_digests = prefix_digests

    def _atomic_type(self, t: Tuple[int, ...]) -> Tuple[Tuple[int, ...], ...]:
        G = self.graph
        rows = []
        for a in t:
            row = []
            for b in t:
                if a == b:
                    row.append(0)
                else:
                    row.append(1 if G.has_edge(a, b) else 2)
            rows.append(tuple(row))
        return tuple(rows)

    def seeds(self) -> List[Hashable]:
        n = self.graph.n
        out: List[Hashable] = []
        for s, t in enumerate(itertools.product(range(n), repeat=self.k)):
            coords = tuple(self.graph.vertex_color(v) for v in t)
            out.append((self._atomic_type(t), coords, self.prefix_digests[s // n]))
        return out

    def position_neighbors(self, s: int) -> Tuple[Sequence[int], ...]:
        n = self.graph.n
        out = []
        for w in self.weights:
            base = s - ((s // w) % n) * w
            out.append(range(base, base + n * w, w))
        return tuple(out)


def _compress(sigs: Sequence[Hashable]) -> List[int]:
    """Sequential ids by sorted signature order."""
    uniq = {sig: i for i, sig in enumerate(sorted(set(sigs)))}
    return [uniq[sig] for sig in sigs]


def _refine_states(space, *, max_rounds: int) -> Partition:
    """Iterate refinement on `space` to a fixed point and return its partition."""
    seeds = space.seeds()
    colors = _compress(seeds)
    num = len(set(colors))

    for rnd in range(1, max_rounds + 1):
        sigs = []
        for s in range(space.size):
            parts = []
            for nbrs in space.position_neighbors(s):
                cnt: Counter[int] = Counter(colors[t] for t in nbrs)
                parts.append(tuple(sorted(cnt.items())))
            sigs.append((colors[s], tuple(parts)))

        new_colors = _compress(sigs)
        new_num = max(new_colors) + 1 if new_colors else 0
        if new_num == num:
            return _assemble(space, colors, seeds, sigs, rnd)
        colors, num = new_colors, new_num

    raise InternalInvariantViolation(
        f"{space.k}-WL refinement did not stabilise within {max_rounds} rounds",
        graph=space.graph,
        round=max_rounds,
        snapshot=tuple(colors),
    )


def _assemble(space, colors: List[int], seeds: List[Hashable], sigs: list, rounds: int) -> Partition:
    num = max(colors) + 1 if colors else 0
    sizes = [0] * num
    rep: List[Optional[int]] = [None] * num
    for s, c in enumerate(colors):
        sizes[c] += 1
        if rep[c] is None:
            rep[c] = s
    classes = []
    for c in range(num):
        s = rep[c]
        classes.append(PartitionClass(size=sizes[c], label=seeds[s], links=sigs[s][1]))
    return Partition(k=space.k, n=space.graph.n, colors=tuple(colors), classes=tuple(classes), rounds=rounds)


def _check_dimension(k: int) -> None:
    if not isinstance(k, int) or k < 1:
        raise InvalidParameter(f"WL dimension k must be an integer >= 1, got {k!r}.")


def _check_ceiling(n: int, k: int, ceiling: int) -> None:
    states = n ** k
    if states > ceiling:
        raise ResourceExhausted(
            f"{k}-WL on {n} vertices needs {states} tuple states (ceiling {ceiling})",
            required=states,
            limit=ceiling,
        )


def refine_hierarchy(
    graph: Graph,
    k_max: int,
    *,
    ceiling: int = DEFAULT_TUPLE_STATE_CEILING,
    max_rounds: Optional[int] = None,
) -> Iterator[Partition]:
    """
    Yield the stable k-WL partitions of `graph` for k = 1..k_max.

    Each level seeds the next through its prefix class digests, so level
    k + 1 is at least as fine as level k. The state-count ceiling is checked
    before a level is allocated; ResourceExhausted is raised from the first
    level that does not fit, after the cheaper levels have been yielded.
    """
    _check_dimension(k_max)
    partition: Optional[Partition] = None
    for k in range(1, k_max + 1):
        _check_ceiling(graph.n, k, ceiling)
        if k == 1:
            space = _VertexSpace(graph)
        else:
            assert partition is not None
            digests = class_digests(partition)
            prefix = [digests[c] for c in partition.colors]
            space = _TupleSpace(graph, k, prefix)
        bound = space.size if max_rounds is None else max_rounds
        partition = _refine_states(space, max_rounds=bound)
        logger.debug(f"{k}-WL: n={graph.n} states={space.size} classes={partition.num_classes} rounds={partition.rounds}")
        yield partition


def refine(
    graph: Graph,
    k: int = 1,
    *,
    ceiling: int = DEFAULT_TUPLE_STATE_CEILING,
    max_rounds: Optional[int] = None,
) -> Partition:
    """
    Stable k-WL partition of `graph`.

    Raises InvalidParameter if k < 1 and ResourceExhausted if n^k exceeds
    `ceiling` (checked up front, nothing is allocated).
    """
    _check_dimension(k)
    _check_ceiling(graph.n, k, ceiling)
    partition = None
    for partition in refine_hierarchy(graph, k, ceiling=ceiling, max_rounds=max_rounds):
        pass
    return partition
