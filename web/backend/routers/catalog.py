#!/usr/bin/env python3
"""
Catalog endpoints - quiz questions, candidates and party positions.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from ..dependencies import get_catalog_service
from ..models.responses import CandidatesResponse, PositionsResponse, QuestionsResponse
from ..services import CatalogService

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/questions", response_model=QuestionsResponse)
def get_questions(
    limit: Optional[str] = Query(None, description="Number of questions (1-100, default 20)"),
    service: CatalogService = Depends(get_catalog_service)
):
    """
    Get a random quiz covering every policy area where possible.
    """
    return service.get_questions(limit)


@router.get("/candidates", response_model=CandidatesResponse)
def get_candidates(service: CatalogService = Depends(get_catalog_service)):
    """
    List all candidates sorted by name.
    """
    return service.get_candidates()


@router.get("/positions", response_model=PositionsResponse)
def get_positions(
    party: Optional[str] = Query(None, description="Party name"),
    service: CatalogService = Depends(get_catalog_service)
):
    """
    Get extracted policy positions for one party, without embeddings.
    """
    return service.get_positions(party)
