#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict


class CandidateMatch(BaseModel):
    """Ranked compatibility of one candidate."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "candidate_id": "cand-001",
                "name": "Jane Doe",
                "party": "Example Party",
                "score": 78,
                "matched_positions": 5,
                "alignment_by_area": {"economy": 82, "healthcare": 71}
            }
        }
    )

    candidate_id: str
    name: str
    party: str
    score: int = Field(ge=0, le=100)
    matched_positions: int = Field(ge=0)
    alignment_by_area: Dict[str, int] = Field(default_factory=dict)


class MatchResponse(BaseModel):
    """Response of the scoring endpoint."""
    success: bool
    matches: List[CandidateMatch]
    total_candidates: int
    questions_answered: int


class TopResultEntry(BaseModel):
    """Anonymized rank; intentionally carries no candidate identifier."""
    rank: int
    percentage: float = Field(ge=0, le=100)
    count: int


class AggregatedStatsResponse(BaseModel):
    """Public aggregate of recorded matches."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "total_matches": 1200,
                "average_questions": 18.4,
                "top_results": [
                    {"rank": 1, "percentage": 41.5, "count": 498},
                    {"rank": 2, "percentage": 30.2, "count": 362},
                    {"rank": 3, "percentage": 12.0, "count": 144}
                ]
            }
        }
    )

    success: bool
    total_matches: int
    average_questions: float
    top_results: List[TopResultEntry]


class CandidateSummary(BaseModel):
    candidate_id: str
    name: str
    party: str


class CandidatesResponse(BaseModel):
    success: bool
    candidates: List[CandidateSummary]


class PositionDetail(BaseModel):
    """Candidate position without its embedding."""
    candidate_id: str
    policy_area: str
    position: str
    extracted_at: Optional[str] = None


class PositionsResponse(BaseModel):
    success: bool
    party: str
    positions: List[PositionDetail]


class QuizQuestion(BaseModel):
    question_id: str
    text: str
    type: str
    options: Optional[List[str]] = None
    policy_area: str
    weight: float


class QuestionsResponse(BaseModel):
    success: bool
    count: int
    questions: List[QuizQuestion]
