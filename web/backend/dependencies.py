#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from functools import lru_cache
from typing import Generator

from fastapi import Depends

from core.app_context import AppContext
from core.config_loader import get_config
from database.repositories.catalog import CatalogRepository
from .services import MatchService, StatsService, CatalogService


@lru_cache()
def get_app_context() -> AppContext:
    """
    Process-wide application context.

    Built on first use so importing the app never opens connections.
    """
    return AppContext.build(get_config())


def get_catalog() -> Generator[CatalogRepository, None, None]:
    """
    FastAPI dependency that yields a catalog repository bound to one session.

    Usage:
        @router.get("/endpoint")
        def my_endpoint(catalog: CatalogRepository = Depends(get_catalog)):
            ...
    """
    from database.uow import catalog_uow

    with catalog_uow() as repo:
        yield repo


def get_match_service(
    catalog: CatalogRepository = Depends(get_catalog),
    context: AppContext = Depends(get_app_context)
) -> MatchService:
    return MatchService(catalog, context)


def get_stats_service(context: AppContext = Depends(get_app_context)) -> StatsService:
    return StatsService(context)


def get_catalog_service(
    catalog: CatalogRepository = Depends(get_catalog),
    context: AppContext = Depends(get_app_context)
) -> CatalogService:
    return CatalogService(catalog, context.validator, context.config.questions)
