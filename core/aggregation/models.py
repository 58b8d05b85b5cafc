#!/usr/bin/env python3
"""
Aggregation Models - Sharded counter records and the public summary.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional


@dataclass
class AggregatedStats:
    """Match counters for one shard, or the merge of all shards."""
    stats_id: str
    total_matches: int = 0
    total_questions: int = 0
    candidate_stats: Dict[str, int] = field(default_factory=dict)
    last_updated: Optional[datetime] = None


@dataclass
class CachedAggregate:
    """Merged snapshot plus the clock reading taken when it was refilled."""
    data: AggregatedStats
    timestamp: float


@dataclass
class TopResult:
    """Anonymized rank entry: counts only, never a candidate identifier."""
    rank: int
    percentage: float
    count: int


@dataclass
class StatsSummary:
    """Public, non-identifying view of the aggregated stats."""
    total_matches: int = 0
    average_questions: float = 0.0
    top_results: List[TopResult] = field(default_factory=list)
