"""
Tests for sampler.py.
"""

import pytest

from selfish_mining.config import get_rng
from selfish_mining.sampler import UniformSampler


class TestUniformSampler:

    def test_draws_in_half_open_unit_interval(self, sampler):
        values = [sampler.next() for _ in range(10_000)]
        assert all(0.0 <= v < 1.0 for v in values)
        assert 0.45 < sum(values) / len(values) < 0.55

    def test_same_seed_same_stream(self):
        a = UniformSampler(seed=11)
        b = UniformSampler(seed=11)
        assert [a.next() for _ in range(100)] == [b.next() for _ in range(100)]

    def test_different_seeds_differ(self):
        a = UniformSampler(seed=1)
        b = UniformSampler(seed=2)
        assert [a.next() for _ in range(10)] != [b.next() for _ in range(10)]

    def test_block_size_does_not_change_stream(self):
        small = UniformSampler(seed=5, block_size=3)
        large = UniformSampler(seed=5)
        assert [small.next() for _ in range(20)] == [large.next() for _ in range(20)]

    def test_stream_matches_generator(self):
        sampler = UniformSampler(seed=9)
        expected = get_rng(9).random(8).tolist()
        assert [sampler.next() for _ in range(8)] == expected

    def test_reseed_restarts_stream(self):
        sampler = UniformSampler(seed=3)
        first = [sampler.next() for _ in range(5)]
        sampler.reseed(3)
        assert [sampler.next() for _ in range(5)] == first
        assert sampler.draws == 5

    def test_counts_draws(self, sampler):
        for _ in range(7):
            sampler()
        assert sampler.draws == 7

    def test_rejects_empty_block(self):
        with pytest.raises(ValueError):
            UniformSampler(seed=1, block_size=0)
