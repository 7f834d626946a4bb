from .graph6 import (
    strip_graph6_header,
    g6_to_nx,
    g6_to_graph,
    graph_to_g6,
)
from .report import (
    family_buckets,
    format_graph_line,
    parse_graph_line,
    read_family,
    write_families,
    write_summary,
)

__all__ = [
    "strip_graph6_header",
    "g6_to_nx",
    "g6_to_graph",
    "graph_to_g6",
    "family_buckets",
    "format_graph_line",
    "parse_graph_line",
    "read_family",
    "write_families",
    "write_summary",
]
