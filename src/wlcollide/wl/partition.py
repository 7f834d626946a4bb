"""Stable partitions produced by WL refinement, with their quotient structure."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Hashable, List, Sequence, Tuple


Link = Tuple[int, int]
TupleK = Tuple[int, ...]


@dataclass(frozen=True)
class PartitionClass:
    """
    One color class of a stable partition.

    size:  number of states (vertices or k-tuples) in the class.
    label: invariant seed shared by every member (initial color, or the
           equality/adjacency type of a tuple plus its prefix digest).
    links: for each aggregation position, the sorted (class id, count)
           pairs every member sees. For k = 1 there is one position, the
           graph neighbourhood, so links[0] holds internal and external
           adjacency counts of the class.
    """

    size: int
    label: Hashable
    links: Tuple[Tuple[Link, ...], ...]


@dataclass(frozen=True)
class Partition:
    """
    Stable WL partition of the n^k states of a graph.

    States are ordered k-tuples encoded in base n (vertex v for k = 1).
    colors[s] is the class id of state s; class ids index `classes` and are
    refinement-order artifacts, so nothing invariant should be read from them.
    """

    k: int
    n: int
    colors: Tuple[int, ...]
    classes: Tuple[PartitionClass, ...]
    rounds: int

    @property
    def num_states(self) -> int:
        return len(self.colors)

    @property
    def num_classes(self) -> int:
        return len(self.classes)

    def state_index(self, t: Sequence[int]) -> int:
        if len(t) != self.k:
            raise ValueError(f"Expected a {self.k}-tuple, got {tuple(t)!r}.")
        s = 0
        for v in t:
            s = s * self.n + v
        return s

    def state_tuple(self, s: int) -> TupleK:
        out = [0] * self.k
        for i in range(self.k - 1, -1, -1):
            s, out[i] = divmod(s, self.n)
        return tuple(out)

    def color_of(self, t: Sequence[int]) -> int:
        return self.colors[self.state_index(t)]

    def cells(self) -> List[List[TupleK]]:
        """Group states by class, each cell sorted, cells sorted by (size, members)."""
        groups: Dict[int, List[TupleK]] = {}
        for s, c in enumerate(self.colors):
            groups.setdefault(c, []).append(self.state_tuple(s))
        cls = list(groups.values())
        cls.sort(key=lambda L: (len(L), L))
        return cls

    def vertex_partition(self) -> Tuple[int, ...]:
        """Vertex coloring induced by the diagonal tuples (v, ..., v)."""
        return tuple(self.color_of((v,) * self.k) for v in range(self.n))

    def refines(self, other: "Partition") -> bool:
        """True iff every class of self lies inside one class of other (same state space)."""
        if (self.k, self.n) != (other.k, other.n):
            raise ValueError("Partitions live on different state spaces.")
        return is_finer(self.colors, other.colors)


def is_finer(fine: Sequence[int], coarse: Sequence[int]) -> bool:
    """True iff the coloring `fine` is at least as fine as `coarse`."""
    if len(fine) != len(coarse):
        raise ValueError("Colorings have different lengths.")
    image: Dict[int, int] = {}
    for a, b in zip(fine, coarse):
        if image.setdefault(a, b) != b:
            return False
    return True
