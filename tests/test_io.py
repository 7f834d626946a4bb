"""Tests for graph6, report files and checkpoints."""
from wlcollide.classify.buckets import BucketMap, ClassifierSettings
from wlcollide.enumeration.orderly import EnumeratorState, enumerate_graphs
from wlcollide.graph.simple import Graph
from wlcollide.io.checkpoint import load_checkpoint, save_checkpoint
from wlcollide.io.graph6 import g6_to_graph, graph_to_g6, strip_graph6_header
from wlcollide.io.report import (
    family_buckets,
    format_graph_line,
    parse_graph_line,
    read_family,
    write_families,
    write_summary,
)
from wlcollide.config import RunConfig
from wlcollide.pipeline import run


def test_graph6_round_trip():
    g = Graph(5, [(0, 1), (1, 2), (3, 4)])
    assert g6_to_graph(graph_to_g6(g)) == g


def test_graph6_header():
    assert strip_graph6_header(">>graph6<<Bw\n") == "Bw"
    assert g6_to_graph(">>graph6<<Bw") == Graph(3, [(0, 1), (0, 2), (1, 2)])


def test_format_graph_line():
    assert format_graph_line(Graph(4, [(0, 1), (1, 2)])) == "[(0, 1), (1, 2),(3, )]"
    assert format_graph_line(Graph(2)) == "[(0, ), (1, )]"
    assert format_graph_line(Graph(3, [(0, 1), (1, 2), (0, 2)])) == "[(0, 1), (0, 2), (1, 2)]"


def test_parse_graph_line_inverts_format():
    for g in enumerate_graphs(4):
        assert parse_graph_line(format_graph_line(g)) == g


def test_write_families_and_summary(tmp_path):
    report = run(RunConfig(n=6))
    paths = write_families(report, tmp_path / "graphs_6")
    assert len(paths) == len(report.collisions())
    assert paths[0].name == "family_0.txt"
    family = read_family(paths[0])
    assert family == [c.representative for c in report.collisions()[0].classes]
    assert write_summary(report, tmp_path / "graphs_6").exists()


def test_write_all_families(tmp_path):
    report = run(RunConfig(n=4))
    assert write_families(report, tmp_path / "only") == []
    paths = write_families(report, tmp_path / "all", all_families=True)
    assert len(paths) == len(report.buckets) == 11
    families = [read_family(p) for p in paths]
    assert all(len(f) == 1 for f in families)
    assert [f[0] for f in families] == [b.classes[0].representative for b in family_buckets(report, True)]


def test_checkpoint_round_trip(tmp_path):
    settings = ClassifierSettings()
    bm = BucketMap(settings)
    for g in enumerate_graphs(4):
        bm.add(g)
    bm.add(Graph(4, [(0, 1)], colors=(1, 0, 0, 0)))
    state = EnumeratorState(n=4, stack=[(0, 3), (32, 4)], emitted=7, started=True)

    path = tmp_path / "sub" / "ckpt.json"
    save_checkpoint(path, state, bm)
    loaded_state, loaded = load_checkpoint(path, settings, n=4)

    assert loaded_state == state
    assert list(loaded.buckets()) == list(bm.buckets())
    for a, b in zip(loaded.buckets().values(), bm.buckets().values()):
        assert [c.representative for c in a.classes] == [c.representative for c in b.classes]
        assert [c.members for c in a.classes] == [c.members for c in b.classes]


def test_missing_checkpoint_returns_none(tmp_path):
    assert load_checkpoint(tmp_path / "nope.json", ClassifierSettings()) is None
