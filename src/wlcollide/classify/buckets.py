"""
Bucket classification of graphs by 1-WL hash.

Graphs sharing a 1-WL CanonicalHash land in one CollisionBucket. Inside a
bucket, exact isomorphism search splits them into IsomorphismClasses; for
buckets holding several classes, k-WL hashes for k = 2..k_max find the
least dimension that tells the classes apart.

The bucket map is only ever changed through `BucketMap.add` and
`BucketMap.merge`; workers build local maps that the parent merges.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from multiprocessing import Pool
from typing import Dict, Iterable, List, Optional, Tuple

from loguru import logger

from wlcollide.classify.isomorphism import (
    GraphProfile,
    find_isomorphism,
    profile_graph,
    profiles_compatible,
    wl_hash_at,
)
from wlcollide.config import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_ISO_ATTEMPT_BUDGET,
    DEFAULT_K_MAX,
    DEFAULT_TUPLE_STATE_CEILING,
    RunConfig,
)
from wlcollide.errors import InternalInvariantViolation, InvalidParameter, ResourceExhausted
from wlcollide.graph.simple import Graph
from wlcollide.wl.hashing import CanonicalHash, canonical_hash
from wlcollide.wl.refine import refine_hierarchy


@dataclass
class IsomorphismClass:
    """A representative graph, its 1-WL hash, and every member confirmed isomorphic to it."""

    representative: Graph
    wl_hash: CanonicalHash
    members: List[Graph] = field(default_factory=list)
    profile: Optional[GraphProfile] = field(default=None, repr=False, compare=False)

    def representative_profile(self) -> GraphProfile:
        if self.profile is None:
            self.profile = profile_graph(self.representative)
        return self.profile

    def absorb(self, other: "IsomorphismClass") -> None:
        self.members.extend(other.members)
        if other.representative.sort_key() < self.representative.sort_key():
            self.representative = other.representative
            self.profile = other.profile

    def normalize(self) -> None:
        self.members.sort(key=Graph.sort_key)


@dataclass
class CollisionBucket:
    """
    All isomorphism classes sharing one 1-WL hash.

    separating_k:    least k at which k-WL hashes of all classes are
                     pairwise distinct (None if not found up to k_max).
    pair_separation: least separating k per pair of class indices.
    notes:           recovered problems (resource ceilings, budgets).
    """

    key: CanonicalHash
    classes: List[IsomorphismClass] = field(default_factory=list)
    k_max: int = 0
    separating_k: Optional[int] = None
    pair_separation: Dict[Tuple[int, int], Optional[int]] = field(default_factory=dict)
    notes: List[str] = field(default_factory=list)
    analysed: bool = False

    @property
    def is_collision(self) -> bool:
        return len(self.classes) > 1

    @property
    def status(self) -> str:
        if not self.is_collision:
            return "trivial"
        return "separated" if self.separating_k is not None else "unseparated"

    @property
    def graph_count(self) -> int:
        return sum(len(c.members) for c in self.classes)

    def normalize(self) -> None:
        for c in self.classes:
            c.normalize()
        self.classes.sort(key=lambda c: c.representative.sort_key())

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "status": self.status,
            "k_max": self.k_max,
            "separating_k": self.separating_k,
            "pair_separation": [
                {"pair": list(pair), "k": k} for pair, k in sorted(self.pair_separation.items())
            ],
            "classes": [
                {
                    "representative": [list(e) for e in c.representative.edges],
                    "members": len(c.members),
                }
                for c in self.classes
            ],
            "notes": list(self.notes),
        }


@dataclass(frozen=True)
class ClassifierSettings:
    k_max: int = DEFAULT_K_MAX
    tuple_state_ceiling: int = DEFAULT_TUPLE_STATE_CEILING
    iso_attempt_budget: int = DEFAULT_ISO_ATTEMPT_BUDGET
    prune_dimension: int = 0

    @classmethod
    def from_config(cls, config: RunConfig) -> "ClassifierSettings":
        return cls(
            k_max=config.k_max,
            tuple_state_ceiling=config.tuple_state_ceiling,
            iso_attempt_budget=config.iso_attempt_budget,
            prune_dimension=config.prune_dimension,
        )


class BucketMap:
    """Mutable map from 1-WL hash to CollisionBucket."""

    def __init__(self, settings: Optional[ClassifierSettings] = None):
        self.settings = settings or ClassifierSettings()
        self._buckets: Dict[CanonicalHash, CollisionBucket] = {}

    def __len__(self) -> int:
        return len(self._buckets)

    def __contains__(self, key: object) -> bool:
        return key in self._buckets

    @property
    def class_count(self) -> int:
        return sum(len(b.classes) for b in self._buckets.values())

    @property
    def graph_count(self) -> int:
        return sum(b.graph_count for b in self._buckets.values())

    def _same_class(self, bucket: CollisionBucket, x: IsomorphismClass, y: IsomorphismClass) -> bool:
        first, second = sorted((x, y), key=lambda c: c.representative.sort_key())
        a, b = first.representative, second.representative
        pa, pb = first.representative_profile(), second.representative_profile()
        if not profiles_compatible(pa, pb):
            return False

        k = self.settings.prune_dimension
        if k > 1:
            try:
                ceiling = self.settings.tuple_state_ceiling
                if wl_hash_at(a, k, ceiling=ceiling) != wl_hash_at(b, k, ceiling=ceiling):
                    return False
            except ResourceExhausted as exc:
                logger.debug(f"prune at k={k} skipped: {exc}")

        try:
            perm = find_isomorphism(
                a, b, budget=self.settings.iso_attempt_budget, profile_a=pa, profile_b=pb
            )
        except ResourceExhausted as exc:
            note = f"isomorphism confirmation unresolved for {a!r} vs {b!r}: {exc}"
            logger.warning(note)
            bucket.notes.append(note)
            return False
        return perm is not None

    def _insert(self, incoming: IsomorphismClass, notes: Iterable[str] = ()) -> IsomorphismClass:
        bucket = self._buckets.get(incoming.wl_hash)
        if bucket is None:
            bucket = CollisionBucket(key=incoming.wl_hash, k_max=self.settings.k_max)
            self._buckets[incoming.wl_hash] = bucket
        bucket.notes.extend(notes)
        for cls in bucket.classes:
            if self._same_class(bucket, incoming, cls):
                cls.absorb(incoming)
                return cls
        bucket.classes.append(incoming)
        return incoming

    def add(self, graph: Graph) -> IsomorphismClass:
        """Classify one graph: bucket by 1-WL hash, then confirm isomorphism."""
        prof = profile_graph(graph)
        return self._insert(
            IsomorphismClass(representative=graph, wl_hash=prof.wl_hash, members=[graph], profile=prof)
        )

    def merge(self, other: "BucketMap") -> None:
        """Fold another map in, visiting its buckets in sorted key order."""
        for key in sorted(other._buckets):
            theirs = other._buckets[key]
            theirs.normalize()
            notes = list(theirs.notes)
            for cls in theirs.classes:
                self._insert(cls, notes)
                notes = []

    def buckets(self) -> Dict[CanonicalHash, CollisionBucket]:
        """Buckets sorted by key, classes and members in deterministic order."""
        out: Dict[CanonicalHash, CollisionBucket] = {}
        for key in sorted(self._buckets):
            bucket = self._buckets[key]
            bucket.normalize()
            out[key] = bucket
        return out

    def replace(self, bucket: CollisionBucket) -> None:
        self._buckets[bucket.key] = bucket

    def collisions(self) -> List[CollisionBucket]:
        return [b for b in self.buckets().values() if b.is_collision]


def separate_bucket(bucket: CollisionBucket, settings: ClassifierSettings) -> CollisionBucket:
    """
    Annotate `bucket` with the least k separating its classes.

    Hashes of every representative are computed level by level. A
    ResourceExhausted at some level ends the search for this bucket only;
    the remaining pairs stay unresolved and the reason lands in `notes`.
    """
    bucket.normalize()
    bucket.k_max = settings.k_max
    reps = [c.representative for c in bucket.classes]
    m = len(reps)
    bucket.pair_separation = {(i, j): None for i in range(m) for j in range(i + 1, m)}
    bucket.separating_k = None
    if m < 2:
        bucket.analysed = True
        return bucket

    levels = [refine_hierarchy(g, settings.k_max, ceiling=settings.tuple_state_ceiling) for g in reps]
    for k in range(1, settings.k_max + 1):
        try:
            hashes = [canonical_hash(next(it)) for it in levels]
        except ResourceExhausted as exc:
            note = f"k={k} not attempted: {exc}"
            logger.warning(f"bucket {bucket.key[:12]}: {note}")
            bucket.notes.append(note)
            break

        if k == 1:
            if any(h != bucket.key for h in hashes):
                raise InternalInvariantViolation(
                    "representative's 1-WL hash differs from its bucket key",
                    graph=reps[[h != bucket.key for h in hashes].index(True)],
                    snapshot=bucket.key,
                )
            continue

        for (i, j), found in bucket.pair_separation.items():
            if found is None and hashes[i] != hashes[j]:
                bucket.pair_separation[(i, j)] = k
        if bucket.separating_k is None and len(set(hashes)) == m:
            bucket.separating_k = k
            break

    bucket.analysed = True
    if bucket.separating_k is None:
        logger.info(f"bucket {bucket.key[:12]}: {m} classes unseparated up to k={settings.k_max}")
    else:
        logger.info(f"bucket {bucket.key[:12]}: {m} classes separated at k={bucket.separating_k}")
    return bucket


def chunked(it: Iterable[Graph], size: int) -> Iterable[List[Graph]]:
    buf: List[Graph] = []
    for x in it:
        buf.append(x)
        if len(buf) >= size:
            yield buf
            buf = []
    if buf:
        yield buf


def _classify_chunk(job: Tuple[List[Graph], ClassifierSettings]) -> BucketMap:
    graphs, settings = job
    local = BucketMap(settings)
    for g in graphs:
        local.add(g)
    return local


def _separate_job(job: Tuple[CollisionBucket, ClassifierSettings]) -> CollisionBucket:
    bucket, settings = job
    return separate_bucket(bucket, settings)


def classify_into(
    bucket_map: BucketMap,
    graphs: Iterable[Graph],
    *,
    pool=None,
    chunk_size: int = DEFAULT_BATCH_SIZE,
) -> None:
    """Add `graphs` to `bucket_map`, through per-chunk local maps when a pool is given."""
    if pool is None:
        for g in graphs:
            bucket_map.add(g)
        return
    jobs = ((chunk, bucket_map.settings) for chunk in chunked(graphs, chunk_size))
    for local in pool.imap(_classify_chunk, jobs, chunksize=1):
        bucket_map.merge(local)


def separate_buckets(bucket_map: BucketMap, *, pool=None) -> None:
    """Run separation on every collision bucket of the map."""
    todo = bucket_map.collisions()
    if pool is None:
        for bucket in todo:
            separate_bucket(bucket, bucket_map.settings)
        return
    jobs = [(bucket, bucket_map.settings) for bucket in todo]
    for bucket in pool.imap(_separate_job, jobs, chunksize=1):
        bucket_map.replace(bucket)


def classify(
    graphs: Iterable[Graph],
    k_max: int = DEFAULT_K_MAX,
    *,
    processes: int = 1,
    tuple_state_ceiling: int = DEFAULT_TUPLE_STATE_CEILING,
    iso_attempt_budget: int = DEFAULT_ISO_ATTEMPT_BUDGET,
    prune_dimension: int = 0,
    chunk_size: int = DEFAULT_BATCH_SIZE,
) -> Dict[CanonicalHash, CollisionBucket]:
    """
    Group `graphs` by 1-WL hash into CollisionBuckets and annotate every
    bucket holding several isomorphism classes with its separating k.

    The result does not depend on the order of `graphs`.
    """
    if not isinstance(k_max, int) or k_max < 1:
        raise InvalidParameter(f"k_max must be an integer >= 1, got {k_max!r}.")
    if processes < 1:
        raise InvalidParameter("processes must be >= 1.")
    settings = ClassifierSettings(
        k_max=k_max,
        tuple_state_ceiling=tuple_state_ceiling,
        iso_attempt_budget=iso_attempt_budget,
        prune_dimension=prune_dimension,
    )
    bucket_map = BucketMap(settings)
    if processes == 1:
        classify_into(bucket_map, graphs)
        separate_buckets(bucket_map)
    else:
        with Pool(processes=processes) as pool:
            classify_into(bucket_map, graphs, pool=pool, chunk_size=chunk_size)
            separate_buckets(bucket_map, pool=pool)
    return bucket_map.buckets()
