"""JSON checkpoints of an interrupted run: enumerator position plus bucket map."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional, Tuple

from loguru import logger

from wlcollide.classify.buckets import BucketMap, ClassifierSettings, CollisionBucket, IsomorphismClass
from wlcollide.enumeration.orderly import EnumeratorState
from wlcollide.errors import InvalidParameter
from wlcollide.graph.simple import Graph
from wlcollide.io.graph6 import g6_to_graph, graph_to_g6


CHECKPOINT_VERSION = 1


def graph_to_record(graph: Graph) -> dict:
    rec: dict = {"g6": graph_to_g6(graph)}
    if graph.colors is not None:
        rec["colors"] = list(graph.colors)
    return rec


def graph_from_record(rec: dict) -> Graph:
    g = g6_to_graph(rec["g6"])
    colors = rec.get("colors")
    if colors is None:
        return g
    return Graph(g.n, g.edges, tuple(colors))


def bucket_map_to_dict(bucket_map: BucketMap) -> list:
    out = []
    for key, bucket in bucket_map.buckets().items():
        out.append({
            "key": key,
            "notes": list(bucket.notes),
            "classes": [
                {
                    "representative": graph_to_record(c.representative),
                    "members": [graph_to_record(g) for g in c.members],
                }
                for c in bucket.classes
            ],
        })
    return out


def bucket_map_from_dict(data: list, settings: ClassifierSettings) -> BucketMap:
    bucket_map = BucketMap(settings)
    for item in data:
        bucket = CollisionBucket(key=item["key"], k_max=settings.k_max, notes=list(item["notes"]))
        for c in item["classes"]:
            bucket.classes.append(
                IsomorphismClass(
                    representative=graph_from_record(c["representative"]),
                    wl_hash=item["key"],
                    members=[graph_from_record(g) for g in c["members"]],
                )
            )
        bucket_map.replace(bucket)
    return bucket_map


def save_checkpoint(path: str | Path, state: EnumeratorState, bucket_map: BucketMap) -> None:
    """Write the checkpoint atomically (temp file, then rename)."""
    path = Path(path)
    payload = {
        "version": CHECKPOINT_VERSION,
        "n": state.n,
        "enumerator": state.to_dict(),
        "buckets": bucket_map_to_dict(bucket_map),
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(payload, f)
    os.replace(tmp, path)
    logger.debug(f"checkpoint written to {path}: {state.emitted} graphs, {len(bucket_map)} buckets")


def load_checkpoint(
    path: str | Path,
    settings: ClassifierSettings,
    *,
    n: Optional[int] = None,
) -> Optional[Tuple[EnumeratorState, BucketMap]]:
    """
    Read a checkpoint written by `save_checkpoint`.

    Returns None when the file does not exist. Raises InvalidParameter when
    it belongs to a different vertex count or format version.
    """
    path = Path(path)
    if not path.exists():
        return None
    with open(path, "r", encoding="utf-8") as f:
        payload = json.load(f)
    if payload.get("version") != CHECKPOINT_VERSION:
        raise InvalidParameter(f"Unsupported checkpoint version in {path}: {payload.get('version')!r}")
    if n is not None and payload["n"] != n:
        raise InvalidParameter(f"Checkpoint {path} is for n={payload['n']}, not n={n}.")
    state = EnumeratorState.from_dict(payload["enumerator"])
    bucket_map = bucket_map_from_dict(payload["buckets"], settings)
    logger.info(f"resuming from {path}: {state.emitted} graphs already classified")
    return state, bucket_map
