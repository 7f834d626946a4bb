from .partition import (
    Partition,
    PartitionClass,
    is_finer,
)
from .hashing import (
    CanonicalHash,
    canonical_hash,
    class_digests,
    vertex_digests,
)
from .refine import (
    refine,
    refine_hierarchy,
)

__all__ = [
    "Partition",
    "PartitionClass",
    "is_finer",
    "CanonicalHash",
    "canonical_hash",
    "class_digests",
    "vertex_digests",
    "refine",
    "refine_hierarchy",
]
