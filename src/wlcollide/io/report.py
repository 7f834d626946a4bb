"""Report files: one edge-list file per collision family plus a JSON summary."""
from __future__ import annotations

import json
import re
from pathlib import Path
from typing import List

from wlcollide.graph.simple import Graph


_PAIR_RE = re.compile(r"\((\d+),\s*(\d*)\s*\)")


def format_graph_line(graph: Graph) -> str:
    """
    Edge list, then isolated vertices as '(v, )':
      [(0, 1), (1, 2),(3, )]
    """
    body = ", ".join(f"({u}, {v})" for u, v in graph.edges)
    isolated = ", ".join(f"({v}, )" for v in graph.isolated_vertices())
    if isolated:
        body = f"{body},{isolated}" if body else isolated
    return f"[{body}]"


def parse_graph_line(line: str) -> Graph:
    """Inverse of `format_graph_line`; n is one more than the largest vertex seen."""
    edges = []
    vertices = set()
    for a, b in _PAIR_RE.findall(line):
        u = int(a)
        vertices.add(u)
        if b != "":
            v = int(b)
            vertices.add(v)
            edges.append((u, v))
    n = max(vertices) + 1 if vertices else 1
    return Graph(n, tuple(edges))


def family_buckets(report, all_families: bool = False) -> list:
    """Buckets that get a family file, in file-index order."""
    if all_families:
        return list(report.buckets.values())
    return report.collisions()


def write_families(report, output_dir: str | Path, *, all_families: bool = False) -> List[Path]:
    """
    Write every collision bucket of `report` to
    <output_dir>/family_<i>.txt, one representative per line.

    With `all_families`, every 1-WL bucket gets a file, singletons included.
    """
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    paths = []
    for i, bucket in enumerate(family_buckets(report, all_families)):
        path = out / f"family_{i}.txt"
        with open(path, "w", encoding="utf-8") as f:
            for cls in bucket.classes:
                f.write(format_graph_line(cls.representative) + "\n")
        paths.append(path)
    return paths


def read_family(path: str | Path) -> List[Graph]:
    with open(path, "r", encoding="utf-8") as f:
        return [parse_graph_line(line) for line in f if line.strip()]


def write_summary(report, output_dir: str | Path) -> Path:
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    path = out / "summary.json"
    with open(path, "w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, indent=2)
    return path
