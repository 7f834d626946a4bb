from .isomorphism import (
    GraphProfile,
    are_isomorphic,
    find_isomorphism,
    profile_graph,
    wl_hash_at,
)
from .buckets import (
    BucketMap,
    ClassifierSettings,
    CollisionBucket,
    IsomorphismClass,
    classify,
    classify_into,
    separate_bucket,
    separate_buckets,
)

__all__ = [
    "GraphProfile",
    "are_isomorphic",
    "find_isomorphism",
    "profile_graph",
    "wl_hash_at",
    "BucketMap",
    "ClassifierSettings",
    "CollisionBucket",
    "IsomorphismClass",
    "classify",
    "classify_into",
    "separate_bucket",
    "separate_buckets",
]
