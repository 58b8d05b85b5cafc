#!/usr/bin/env python3
"""
Stats Formatter - Minimal, non-identifying public summary.

Only counts leave this module: candidate identifiers are dropped before
ranking so partial leanings are never exposed.
"""

from core.utils import round1
from core.aggregation.models import AggregatedStats, StatsSummary, TopResult

DEFAULT_TOP_RESULTS = 3


def format_stats(stats: AggregatedStats, top_n: int = DEFAULT_TOP_RESULTS) -> StatsSummary:
    """Render merged stats as totals, average questions and anonymized top ranks."""
    if stats.total_matches <= 0:
        return StatsSummary()

    counts = sorted(stats.candidate_stats.values(), reverse=True)[:top_n]

    return StatsSummary(
        total_matches=stats.total_matches,
        average_questions=round1(stats.total_questions / stats.total_matches),
        top_results=[
            TopResult(
                rank=index + 1,
                percentage=round1(100.0 * count / stats.total_matches),
                count=count,
            )
            for index, count in enumerate(counts)
        ],
    )
