"""
Ranker Tests
Descending stable sort, 1-based ranks, share of the ranked (visible) set

Run: python -m pytest tests/test_ranker.py -v --tb=short
"""

import math

import pytest

from services.chain_models import NetworkRecord
from services.ranker import compute_share, rank, rank_of


def _chains(*pairs):
    return [NetworkRecord(name=name, tvl=tvl) for name, tvl in pairs]


class TestRankOrdering:
    """Ranks are contiguous and values non-increasing"""

    def test_ranks_contiguous_from_one(self, sample_chains):
        ranked = rank(sample_chains, by=lambda c: c.tvl)
        assert [e.rank for e in ranked] == list(range(1, len(sample_chains) + 1))

    def test_values_non_increasing(self, sample_chains):
        ranked = rank(sample_chains, by=lambda c: c.tvl)
        values = [e.value for e in ranked]
        assert all(a >= b for a, b in zip(values, values[1:]))

    def test_ties_keep_input_order(self):
        chains = _chains(("A", 5), ("B", 10), ("C", 5), ("D", 5))
        ranked = rank(chains, by=lambda c: c.tvl)
        assert [e.item.name for e in ranked] == ["B", "A", "C", "D"]

    def test_ascending(self):
        chains = _chains(("A", 5), ("B", 10), ("C", 1))
        ranked = rank(chains, by=lambda c: c.tvl, descending=False)
        assert [e.item.name for e in ranked] == ["C", "A", "B"]

    def test_empty(self):
        assert rank([], by=lambda c: c.tvl) == []


class TestShare:
    """Share is percentage of the ranked set total"""

    def test_shares_sum_to_100(self, sample_chains):
        ranked = rank(sample_chains, by=lambda c: c.tvl)
        assert sum(e.share for e in ranked) == pytest.approx(100.0)

    def test_limit_applies_before_share(self):
        chains = _chains(("A", 60), ("B", 30), ("C", 10))
        ranked = rank(chains, by=lambda c: c.tvl, limit=2)

        assert [e.item.name for e in ranked] == ["A", "B"]
        # Share of the top-2 shown (90), not of all three (100)
        assert ranked[0].share == pytest.approx(60 / 90 * 100)
        assert sum(e.share for e in ranked) == pytest.approx(100.0)

    def test_zero_total_gives_zero_share(self):
        chains = _chains(("A", 0), ("B", 0))
        ranked = rank(chains, by=lambda c: c.tvl)

        assert [e.share for e in ranked] == [0.0, 0.0]
        assert not any(math.isnan(e.share) or math.isinf(e.share) for e in ranked)

    def test_compute_share(self):
        assert compute_share(25, 100) == 25.0
        assert compute_share(5, 0) == 0.0


def test_rank_of_uses_identity():
    first = NetworkRecord(name="Dup", tvl=10)
    second = NetworkRecord(name="Dup", tvl=20)
    ranked = rank([first, second], by=lambda c: c.tvl)

    assert rank_of(ranked, second) == 1
    assert rank_of(ranked, first) == 2
    assert rank_of(ranked, NetworkRecord(name="Other")) is None
