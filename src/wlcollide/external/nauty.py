"""Optional nauty (geng) backend used to cross-check the enumerator."""
from __future__ import annotations

import os
import shutil
import subprocess
from typing import Iterable, Iterator

from wlcollide.graph.simple import Graph
from wlcollide.io.graph6 import g6_to_graph


NAUTY_GENG = os.environ.get("NAUTY_GENG", "geng")


def nauty_available() -> bool:
    """Returns True iff geng appears runnable."""
    return shutil.which(NAUTY_GENG) is not None


def geng_g6(
    n: int,
    *,
    connected: bool = False,
    min_edges: int | None = None,
    max_edges: int | None = None,
) -> Iterable[str]:
    """Stream graph6 strings from nauty's geng, one per isomorphism class.

    Parameters
    ----------
    n : int
        Number of vertices.
    connected : bool
        Only connected graphs (-c).
    min_edges, max_edges : int, optional
        Edge count bounds (appended after n as 'n min_edges:max_edges').
    """
    if not nauty_available():
        raise RuntimeError("nauty not available (need 'geng' in PATH, or set NAUTY_GENG).")

    cmd = [NAUTY_GENG, "-q", "-g"]
    if connected:
        cmd.append("-c")
    cmd.append(str(n))
    if min_edges is not None or max_edges is not None:
        lo = str(min_edges) if min_edges is not None else ""
        hi = str(max_edges) if max_edges is not None else ""
        cmd.append(f"{lo}:{hi}")

    p = subprocess.Popen(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True)
    assert p.stdout is not None

    for line in p.stdout:
        s = line.strip()
        if not s or s.startswith(">"):
            continue
        yield s

    if p.stderr is not None:
        _ = p.stderr.read()

    p.wait()
    if p.returncode != 0:
        raise RuntimeError(f"geng failed for n={n} with return code {p.returncode}")


def geng_graphs(n: int, **kwargs) -> Iterator[Graph]:
    for g6 in geng_g6(n, **kwargs):
        yield g6_to_graph(g6)


def geng_count(n: int) -> int:
    """Number of graphs on n vertices according to geng."""
    return sum(1 for _ in geng_g6(n))
