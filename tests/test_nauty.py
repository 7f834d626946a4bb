"""Cross-checks against nauty's geng (skipped when nauty is not installed)."""
import pytest

from wlcollide.enumeration.orderly import canonical_mask, count_graphs, enumerate_graphs
from wlcollide.external.nauty import geng_count, geng_graphs, nauty_available


@pytest.mark.skipif(not nauty_available(), reason="nauty not available")
@pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 6])
def test_counts_match_geng(n):
    assert count_graphs(n) == geng_count(n)


@pytest.mark.skipif(not nauty_available(), reason="nauty not available")
def test_same_classes_as_geng():
    ours = {canonical_mask(g) for g in enumerate_graphs(5)}
    theirs = {canonical_mask(g) for g in geng_graphs(5)}
    assert ours == theirs


def test_geng_unavailable_raises(monkeypatch):
    monkeypatch.setattr("wlcollide.external.nauty.NAUTY_GENG", "definitely-not-geng-xyz")
    assert not nauty_available()
    with pytest.raises(RuntimeError):
        list(geng_graphs(3))
