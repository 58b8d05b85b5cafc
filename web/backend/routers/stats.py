#!/usr/bin/env python3
"""
Stats endpoint - anonymized aggregate of all recorded matches.
"""

from fastapi import APIRouter, Depends

from ..dependencies import get_stats_service
from ..models.responses import AggregatedStatsResponse
from ..services import StatsService

router = APIRouter(prefix="/api", tags=["stats"])


@router.get("/aggregated-stats", response_model=AggregatedStatsResponse)
def get_aggregated_stats(service: StatsService = Depends(get_stats_service)):
    """
    Get total matches, average questions answered and the share of the top
    ranks.

    Ranks carry no candidate identity. Served from a short-lived
    in-process cache; an unreachable store yields a zeroed summary rather
    than an error.
    """
    return service.get_response()
