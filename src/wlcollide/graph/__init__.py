from .simple import Edge, Graph

__all__ = [
    "Edge",
    "Graph",
]
