"""Tests for the enumerate-classify-report pipeline."""
import json

import pytest

from wlcollide.config import RunConfig
from wlcollide.errors import InvalidParameter
from wlcollide.pipeline import run


def test_n3_report():
    report = run(RunConfig(n=3))
    assert report.class_count == 4
    assert report.graph_count == 4
    assert report.collisions() == []
    assert not report.truncated


def test_n1_report():
    report = run(RunConfig(n=1))
    assert report.class_count == 1
    assert len(report.buckets) == 1
    assert report.collisions() == []


@pytest.mark.parametrize("n", [0, -1])
def test_invalid_n(n):
    with pytest.raises(InvalidParameter):
        RunConfig(n=n)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"k_max": 0},
        {"tuple_state_ceiling": 0},
        {"checkpoint_interval": 0},
        {"processes": 0},
        {"max_graphs": 0},
        {"prune_dimension": -1},
    ],
)
def test_invalid_config(kwargs):
    with pytest.raises(InvalidParameter):
        RunConfig(n=4, **kwargs)


def test_n6_report_separates_collisions():
    report = run(RunConfig(n=6, k_max=3))
    assert report.class_count == 156
    assert report.collisions()
    # the 2-regular bucket (C6, two triangles) is resolved by 3-WL
    two_regular = [
        b for b in report.collisions()
        if all(c.representative.degree_sequence() == (2,) * 6 for c in b.classes)
    ]
    assert len(two_regular) == 1
    assert two_regular[0].separating_k == 3


def test_truncated_run_is_flagged():
    report = run(RunConfig(n=5, max_graphs=10))
    assert report.truncated
    assert report.graph_count == 10
    assert any("max_graphs" in note for note in report.notes)


def test_checkpoint_written_and_resumed(tmp_path):
    path = tmp_path / "ckpt.json"
    first = run(RunConfig(n=5, checkpoint_path=str(path), checkpoint_interval=8))
    assert path.exists()
    data = json.loads(path.read_text())
    assert data["n"] == 5
    assert data["enumerator"]["emitted"] == 34

    again = run(RunConfig(n=5, checkpoint_path=str(path), checkpoint_interval=8))
    assert list(again.buckets) == list(first.buckets)
    assert again.class_count == 34


def test_resume_after_interruption(tmp_path):
    path = tmp_path / "ckpt.json"
    partial = run(RunConfig(n=5, checkpoint_path=str(path), checkpoint_interval=5, max_graphs=15))
    assert partial.truncated
    assert partial.graph_count == 15

    full = run(RunConfig(n=5, checkpoint_path=str(path), checkpoint_interval=5))
    assert not full.truncated
    assert full.class_count == 34
    assert list(full.buckets) == list(run(RunConfig(n=5)).buckets)


def test_checkpoint_for_other_n_is_rejected(tmp_path):
    path = tmp_path / "ckpt.json"
    run(RunConfig(n=3, checkpoint_path=str(path)))
    with pytest.raises(InvalidParameter):
        run(RunConfig(n=4, checkpoint_path=str(path)))


def test_report_to_dict_is_json_serialisable():
    report = run(RunConfig(n=6, k_max=3))
    data = json.loads(json.dumps(report.to_dict()))
    assert data["n"] == 6
    assert data["classes"] == 156
    assert len(data["collisions"]) == len(report.collisions())
    assert data["unseparated"] == [b.key for b in report.unseparated()]


def test_parallel_run_matches_inline():
    inline = run(RunConfig(n=5))
    parallel = run(RunConfig(n=5, processes=2, checkpoint_interval=10))
    assert list(inline.buckets) == list(parallel.buckets)
    assert inline.class_count == parallel.class_count == 34
