#!/usr/bin/env python3
"""
Stats service - cached, anonymized aggregate of recorded matches.
"""

import logging

from core.app_context import AppContext
from core.aggregation import StatsSummary, ShardStoreError, format_stats
from ..models.responses import AggregatedStatsResponse, TopResultEntry

logger = logging.getLogger(__name__)


class StatsService:
    """Service for the public aggregated-stats endpoint."""

    def __init__(self, context: AppContext):
        self.cache = context.cache
        self.top_n = context.config.aggregation.top_results

    def get_summary(self) -> StatsSummary:
        """Formatted aggregate; a zeroed summary when the store cannot be read."""
        try:
            stats = self.cache.get_aggregated()
        except ShardStoreError as e:
            logger.warning(f"Aggregated stats unavailable, returning empty summary: {e}")
            return StatsSummary()
        return format_stats(stats, top_n=self.top_n)

    def get_response(self) -> AggregatedStatsResponse:
        summary = self.get_summary()
        return AggregatedStatsResponse(
            success=True,
            total_matches=summary.total_matches,
            average_questions=summary.average_questions,
            top_results=[
                TopResultEntry(rank=r.rank, percentage=r.percentage, count=r.count)
                for r in summary.top_results
            ]
        )
