"""Business logic services."""

from .match_service import MatchService
from .stats_service import StatsService
from .catalog_service import CatalogService

__all__ = [
    'MatchService',
    'StatsService',
    'CatalogService',
]
