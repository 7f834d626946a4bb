"""Enumerate, refine, hash, classify, report."""
from __future__ import annotations

import time
from contextlib import nullcontext
from dataclasses import dataclass, field
from multiprocessing import Pool
from typing import Dict, List, Optional

from loguru import logger

from wlcollide.classify.buckets import (
    BucketMap,
    ClassifierSettings,
    CollisionBucket,
    chunked,
    classify_into,
    separate_buckets,
)
from wlcollide.config import RunConfig
from wlcollide.enumeration.orderly import GraphEnumerator
from wlcollide.io.checkpoint import load_checkpoint, save_checkpoint
from wlcollide.wl.hashing import CanonicalHash


@dataclass
class ClassificationReport:
    """Outcome of one run: every bucket, plus run-level status."""

    n: int
    k_max: int
    buckets: Dict[CanonicalHash, CollisionBucket]
    truncated: bool = False
    notes: List[str] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def class_count(self) -> int:
        return sum(len(b.classes) for b in self.buckets.values())

    @property
    def graph_count(self) -> int:
        return sum(b.graph_count for b in self.buckets.values())

    def collisions(self) -> List[CollisionBucket]:
        return [b for b in self.buckets.values() if b.is_collision]

    def unseparated(self) -> List[CollisionBucket]:
        return [b for b in self.collisions() if b.separating_k is None]

    def to_dict(self) -> dict:
        return {
            "n": self.n,
            "k_max": self.k_max,
            "truncated": self.truncated,
            "elapsed_seconds": round(self.elapsed, 3),
            "graphs": self.graph_count,
            "classes": self.class_count,
            "buckets": len(self.buckets),
            "collisions": [b.to_dict() for b in self.collisions()],
            "unseparated": [b.key for b in self.unseparated()],
            "notes": list(self.notes),
        }


def run(config: RunConfig) -> ClassificationReport:
    """
    Classify every graph on `config.n` vertices by 1-WL hash and resolve
    each collision bucket with k-WL up to `config.k_max`.

    When `config.checkpoint_path` is set, a matching checkpoint is resumed
    and a new one is written every `config.checkpoint_interval` graphs.
    """
    start = time.time()
    settings = ClassifierSettings.from_config(config)

    state = None
    bucket_map = BucketMap(settings)
    if config.checkpoint_path is not None:
        restored = load_checkpoint(config.checkpoint_path, settings, n=config.n)
        if restored is not None:
            state, bucket_map = restored

    enumerator = GraphEnumerator(config.n, state=state, max_graphs=config.max_graphs, verify=config.verify)
    logger.info(f"[n={config.n}] enumerating and classifying (k_max={config.k_max}, processes={config.processes})")

    pool_cm = Pool(processes=config.processes) if config.processes > 1 else nullcontext()
    with pool_cm as pool:
        for batch in chunked(enumerator, config.batch_size):
            classify_into(bucket_map, batch, pool=pool, chunk_size=max(1, len(batch) // config.processes))
            logger.debug(f"[n={config.n}] {enumerator.state.emitted} graphs, {len(bucket_map)} buckets")
            if config.checkpoint_path is not None and config.checkpoint_interval is not None:
                save_checkpoint(config.checkpoint_path, enumerator.checkpoint(), bucket_map)

        separate_buckets(bucket_map, pool=pool)

    if config.checkpoint_path is not None:
        save_checkpoint(config.checkpoint_path, enumerator.checkpoint(), bucket_map)

    report = ClassificationReport(
        n=config.n,
        k_max=config.k_max,
        buckets=bucket_map.buckets(),
        truncated=enumerator.truncated,
        elapsed=time.time() - start,
    )
    if report.truncated:
        report.notes.append(f"enumeration stopped after max_graphs={config.max_graphs}")
    for bucket in report.buckets.values():
        report.notes.extend(f"{bucket.key[:12]}: {note}" for note in bucket.notes)

    logger.info(
        f"[n={config.n}] {report.class_count} classes in {len(report.buckets)} buckets, "
        f"{len(report.collisions())} collisions, {len(report.unseparated())} unseparated "
        f"({report.elapsed:.2f}s)"
    )
    return report
