#!/usr/bin/env python3
"""
Aggregation Cache - Read-through cache of the merged shard counters.

Each process keeps its own snapshot. Within one TTL window a process serves
the same snapshot even if the store has changed, and different processes of
a horizontally scaled deployment may serve different snapshots. Concurrent
readers that find the snapshot expired at the same moment may each refetch
all shards; that redundant read is tolerated instead of serializing refills
behind a lock.
"""

import logging
import time
from typing import Callable, Iterable, Optional

from core.aggregation.models import AggregatedStats, CachedAggregate
from core.aggregation.shards import ShardRouter
from core.aggregation.store import ShardStore

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL_SECONDS = 30.0
MERGED_STATS_ID = "global-aggregated"


def merge_shards(
    shards: Iterable[AggregatedStats],
    stats_id: str = MERGED_STATS_ID
) -> AggregatedStats:
    """Sum counters entrywise across shards and keep the latest update time.

    Shards missing from the input simply contribute nothing.
    """
    merged = AggregatedStats(stats_id=stats_id)
    for shard in shards:
        if shard is None:
            continue
        merged.total_matches += shard.total_matches
        merged.total_questions += shard.total_questions
        for candidate_id, count in shard.candidate_stats.items():
            merged.candidate_stats[candidate_id] = merged.candidate_stats.get(candidate_id, 0) + count
        if shard.last_updated and (merged.last_updated is None or shard.last_updated > merged.last_updated):
            merged.last_updated = shard.last_updated
    return merged


class AggregationCache:
    """
    Serves the merge of all shards, refetching at most once per TTL.

    Args:
        store: Shard store to read from on a miss
        router: Router enumerating every shard key
        ttl_seconds: Maximum age of a served snapshot
        clock: Monotonic time source in seconds (injectable for tests)
    """

    def __init__(
        self,
        store: ShardStore,
        router: ShardRouter,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic
    ):
        self.store = store
        self.router = router
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._cached: Optional[CachedAggregate] = None

    def _fresh(self, cached: Optional[CachedAggregate], now: float) -> bool:
        return cached is not None and now - cached.timestamp < self.ttl_seconds

    def get_aggregated(self) -> AggregatedStats:
        """Return the merged stats, refilling from the store when expired.

        Raises:
            ShardStoreError: If the batched read fails on a miss
        """
        cached = self._cached
        if self._fresh(cached, self._clock()):
            logger.debug("Aggregated stats cache hit")
            return cached.data

        logger.debug("Aggregated stats cache miss, reading all shards")
        shard_keys = self.router.all_shard_keys()
        shards = self.store.batch_get(shard_keys)
        merged = merge_shards(shards.values(), stats_id=f"{self.router.logical_key}-aggregated")

        self._cached = CachedAggregate(data=merged, timestamp=self._clock())
        logger.info(
            f"Refreshed aggregated stats from {len(shards)}/{len(shard_keys)} shards "
            f"(total_matches={merged.total_matches})"
        )
        return merged
