#!/usr/bin/env python3
"""
Match endpoint - score quiz answers against the candidate catalog.
"""

import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from core.config_loader import get_config
from ..dependencies import get_match_service
from ..models.requests import MatchRequest
from ..models.responses import MatchResponse
from ..services import MatchService

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

router = APIRouter(prefix="/api", tags=["match"])


def add_rate_limit_handlers(app):
    """Add rate limit exception handlers to the FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    logger.warning(f"Rate limit exceeded for {get_remote_address(request)} on {request.url.path}")
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": f"Rate limit exceeded: {exc.detail}",
            "type": "RateLimitExceeded"
        }
    )


def _match_rate_limit() -> str:
    return get_config().web.match_rate_limit


@router.post("/match", response_model=MatchResponse)
@limiter.limit(_match_rate_limit)
def calculate_match(
    request: Request,
    body: MatchRequest,
    service: MatchService = Depends(get_match_service)
):
    """
    Rank candidates by compatibility with the submitted answers.

    Each answer is `{question_id, answer}` where `answer` is 1-5 for
    agreement-scale questions or one of the option strings for
    specific-choice questions. Invalid entries are skipped; the request
    fails only when nothing usable remains.

    The top match is recorded in the anonymous aggregate without delaying
    the response.
    """
    return service.calculate(body.answers)
