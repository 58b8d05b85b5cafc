"""Aggregation Module - Sharded match counters, cached reads and public stats."""
from core.aggregation.models import AggregatedStats, CachedAggregate, StatsSummary, TopResult
from core.aggregation.shards import ShardRouter
from core.aggregation.store import ShardStore, RedisShardStore, ShardStoreError
from core.aggregation.cache import AggregationCache, merge_shards
from core.aggregation.recorder import ResultRecorder
from core.aggregation.formatter import format_stats

__all__ = [
    'AggregatedStats', 'CachedAggregate', 'StatsSummary', 'TopResult',
    'ShardRouter', 'ShardStore', 'RedisShardStore', 'ShardStoreError',
    'AggregationCache', 'merge_shards', 'ResultRecorder', 'format_stats'
]
