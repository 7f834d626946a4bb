from .nauty import (
    NAUTY_GENG,
    nauty_available,
    geng_g6,
    geng_graphs,
    geng_count,
)

__all__ = [
    "NAUTY_GENG",
    "nauty_available",
    "geng_g6",
    "geng_graphs",
    "geng_count",
]
