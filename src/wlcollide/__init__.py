"""
wlcollide: enumerate graphs of a fixed size, hash them with 1-WL / k-WL
color refinement, and find the buckets 1-WL cannot split.
"""

from .errors import (
    WLCollideError,
    InvalidParameter,
    ResourceExhausted,
    InternalInvariantViolation,
)
from .config import RunConfig
from .graph.simple import Graph

# Refinement and hashing
from .wl.partition import Partition, PartitionClass, is_finer
from .wl.refine import refine, refine_hierarchy
from .wl.hashing import CanonicalHash, canonical_hash, class_digests, vertex_digests

# Enumeration
from .enumeration.orderly import (
    EnumeratorState,
    GraphEnumerator,
    canonical_mask,
    count_graphs,
    enumerate_graphs,
)

# Classification
from .classify.isomorphism import are_isomorphic, find_isomorphism
from .classify.buckets import (
    BucketMap,
    CollisionBucket,
    IsomorphismClass,
    classify,
)
from .pipeline import ClassificationReport, run

__all__ = [
    # Errors
    "WLCollideError",
    "InvalidParameter",
    "ResourceExhausted",
    "InternalInvariantViolation",
    # Config / data
    "RunConfig",
    "Graph",
    # WL
    "Partition",
    "PartitionClass",
    "is_finer",
    "refine",
    "refine_hierarchy",
    "CanonicalHash",
    "canonical_hash",
    "class_digests",
    "vertex_digests",
    # Enumeration
    "EnumeratorState",
    "GraphEnumerator",
    "canonical_mask",
    "count_graphs",
    "enumerate_graphs",
    # Classification
    "are_isomorphic",
    "find_isomorphism",
    "BucketMap",
    "CollisionBucket",
    "IsomorphismClass",
    "classify",
    # Orchestration
    "ClassificationReport",
    "run",
]
