"""Smoke tests for the command-line entry point."""
import json

import matplotlib

matplotlib.use("Agg")

from wlcollide.cli import main


def test_cli_writes_report(tmp_path, capsys):
    out = tmp_path / "graphs_4"
    assert main(["--size", "4", "--output-dir", str(out)]) == 0
    summary = json.loads((out / "summary.json").read_text())
    assert summary["classes"] == 11
    assert summary["collisions"] == []
    assert "Generated 11 unique graph classes of size 4" in capsys.readouterr().out


def test_cli_draws_collisions(tmp_path):
    out = tmp_path / "graphs_6"
    assert main(["-s", "6", "--output-dir", str(out), "--draw"]) == 0
    assert (out / "family_0.txt").exists()
    assert (out / "family_0.png").exists()


def test_cli_invalid_size(tmp_path):
    assert main(["--size", "0", "--output-dir", str(tmp_path)]) == 1


def test_cli_internal_error_exit_code(tmp_path, monkeypatch):
    from wlcollide.enumeration import orderly

    monkeypatch.setattr(orderly, "is_canonical_mask", lambda mask, n: True)
    assert main(["-s", "4", "--verify", "--output-dir", str(tmp_path / "out")]) == 2
    assert not (tmp_path / "out").exists()


def test_cli_all_families(tmp_path):
    out = tmp_path / "graphs_3"
    assert main(["-s", "3", "--output-dir", str(out), "--all-families"]) == 0
    assert sorted(p.name for p in out.glob("family_*.txt")) == [f"family_{i}.txt" for i in range(4)]
