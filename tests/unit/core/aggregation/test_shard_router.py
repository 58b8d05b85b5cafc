"""
Tests for ShardRouter key layout and write distribution.
"""
import random
from collections import Counter

import pytest

from core.aggregation import ShardRouter


class TestShardRouter:

    def test_default_keys(self):
        keys = ShardRouter().all_shard_keys()

        assert len(keys) == 100
        assert keys[0] == "global-0"
        assert keys[-1] == "global-99"
        assert keys == [f"global-{i}" for i in range(100)]

    def test_custom_logical_key_and_count(self):
        router = ShardRouter(logical_key="region", shard_count=3)

        assert router.all_shard_keys() == ["region-0", "region-1", "region-2"]

    def test_invalid_shard_count(self):
        with pytest.raises(ValueError):
            ShardRouter(shard_count=0)

    def test_shard_key_out_of_range(self):
        with pytest.raises(IndexError):
            ShardRouter(shard_count=10).shard_key(10)

    def test_write_shard_is_a_known_key(self, seeded_router):
        keys = set(seeded_router.all_shard_keys())

        for _ in range(500):
            assert seeded_router.write_shard_for() in keys

    def test_random_writes_are_approximately_uniform(self):
        router = ShardRouter(shard_count=10, rng=random.Random(2024))

        counts = Counter(router.write_shard_for() for _ in range(20000))

        assert set(counts) == set(router.all_shard_keys())
        # Expected 2000 per shard; 1700..2300 is far outside random variation
        assert all(1700 <= c <= 2300 for c in counts.values())

    def test_event_id_selection_is_stable(self):
        first = ShardRouter(rng=random.Random(1)).write_shard_for("request-abc")
        second = ShardRouter(rng=random.Random(2)).write_shard_for("request-abc")

        assert first == second

    def test_event_ids_spread_over_shards(self):
        router = ShardRouter(shard_count=10)

        counts = Counter(router.write_shard_for(f"request-{i}") for i in range(5000))

        assert len(counts) == 10
        assert all(350 <= c <= 650 for c in counts.values())
