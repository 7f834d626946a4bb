from .orderly import (
    KNOWN_GRAPH_COUNTS,
    EnumeratorState,
    GraphEnumerator,
    canonical_mask,
    count_graphs,
    edge_order,
    enumerate_graphs,
    graph_to_mask,
    is_canonical_mask,
    mask_to_graph,
)

__all__ = [
    "KNOWN_GRAPH_COUNTS",
    "EnumeratorState",
    "GraphEnumerator",
    "canonical_mask",
    "count_graphs",
    "edge_order",
    "enumerate_graphs",
    "graph_to_mask",
    "is_canonical_mask",
    "mask_to_graph",
]
