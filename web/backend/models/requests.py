#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, Field
from typing import Any


class MatchRequest(BaseModel):
    """Quiz answers to match against the candidate catalog.

    `answers` is deliberately untyped: list shape, size and each entry are
    checked by the match service so malformed entries can be dropped
    individually instead of failing the whole request.
    """
    answers: Any = Field(
        default=None,
        description="List of {question_id, answer}; answer is 1-5 or an option string"
    )
