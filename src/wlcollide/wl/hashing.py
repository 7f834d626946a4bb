"""
Permutation-invariant digests of stable partitions.

Only the quotient structure of a partition is read (class sizes, seed
labels, link counts). Class ids are never hashed directly: classes are
named by digests computed with WL on the quotient itself, so two graphs
related by a relabeling always get identical digests.
"""
from __future__ import annotations

import hashlib
from typing import Hashable, List, Tuple

from wlcollide.wl.partition import Partition


CanonicalHash = str

DIGEST_SIZE = 16


def _digest(obj: Hashable) -> str:
    return hashlib.blake2b(repr(obj).encode("utf-8"), digest_size=DIGEST_SIZE).hexdigest()


def class_digests(partition: Partition) -> Tuple[str, ...]:
    """
    Invariant name for every class of a stable partition, indexed by class id.

    Seeds each class with (size, label), then repeatedly folds in the
    per-position multiset of (neighbour digest, count) until the number of
    distinct digests stops growing.
    """
    classes = partition.classes
    desc: List[str] = [_digest(("seed", c.size, c.label)) for c in classes]
    distinct = len(set(desc))

    for _ in range(len(classes)):
        new_desc: List[str] = []
        for c, d in zip(classes, desc):
            per_pos = tuple(
                tuple(sorted((desc[j], cnt) for j, cnt in pos))
                for pos in c.links
            )
            new_desc.append(_digest((d, per_pos)))
        desc = new_desc
        new_distinct = len(set(desc))
        if new_distinct == distinct:
            break
        distinct = new_distinct

    return tuple(desc)


def canonical_hash(partition: Partition) -> CanonicalHash:
    """Digest of the sorted multiset of (class size, class digest)."""
    digests = class_digests(partition)
    body = sorted((c.size, d) for c, d in zip(partition.classes, digests))
    return _digest(("wl", partition.k, partition.n, tuple(body)))


def vertex_digests(partition: Partition) -> Tuple[str, ...]:
    """Invariant color of every vertex, read from the diagonal tuples."""
    digests = class_digests(partition)
    return tuple(digests[c] for c in partition.vertex_partition())
