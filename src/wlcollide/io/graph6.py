from __future__ import annotations

import networkx as nx

from wlcollide.graph.simple import Graph


def strip_graph6_header(g6: str) -> str:
    """
    Remove optional '>>graph6<<' header and whitespace.
    """
    s = g6.strip()
    if s.startswith(">>graph6<<"):
        s = s[len(">>graph6<<") :].strip()
    return s


def g6_to_nx(g6: str) -> nx.Graph:
    """
    Parse a graph6 string into a simple undirected NetworkX Graph.
    """
    s = strip_graph6_header(g6)
    G = nx.from_graph6_bytes(s.encode("ascii"))
    # graph6 is simple by design, but guard anyway
    if isinstance(G, (nx.MultiGraph, nx.MultiDiGraph)):
        G = nx.Graph(G)
    return G


def g6_to_graph(g6: str) -> Graph:
    """
    Parse a graph6 string into a Graph on 0..n-1 (uncolored).
    """
    return Graph.from_networkx(g6_to_nx(g6))


def graph_to_g6(graph: Graph) -> str:
    """
    Encode a Graph as a graph6 string. Vertex colors are not representable.
    """
    return nx.to_graph6_bytes(graph.to_networkx(), header=False).decode("ascii").strip()
