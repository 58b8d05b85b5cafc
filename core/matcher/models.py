#!/usr/bin/env python3
"""
Matcher Models - Data structures for candidate matching.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Union

POLICY_AREAS = (
    'economy',
    'healthcare',
    'education',
    'security',
    'environment',
    'social',
    'infrastructure',
)

AGREEMENT_SCALE = 'agreement-scale'
SPECIFIC_CHOICE = 'specific-choice'
QUESTION_TYPES = (AGREEMENT_SCALE, SPECIFIC_CHOICE)

AGREEMENT_SCALE_MIN = 1
AGREEMENT_SCALE_MAX = 5


@dataclass
class Question:
    """Catalog question with its precomputed embedding."""
    question_id: str
    policy_area: str
    text: str
    type: str
    embedding: List[float]
    weight: float = 1.0
    options: Optional[List[str]] = None
    bias_score: Optional[float] = None


@dataclass
class PolicyPosition:
    """A candidate's stated position on one policy area.

    `stances` maps specific-choice question IDs to the option the candidate
    documented for that question.
    """
    candidate_id: str
    policy_area: str
    position: str
    embedding: List[float]
    name: str = ""
    party: str = ""
    stances: Dict[str, str] = field(default_factory=dict)
    extracted_at: Optional[str] = None


@dataclass
class UserAnswer:
    """Raw quiz answer as submitted by the user (never persisted)."""
    question_id: str
    answer: Union[int, float, str]


@dataclass
class AgreementAnswer:
    """Answer to an agreement-scale question, resolved to an integer scale value."""
    question_id: str
    value: int


@dataclass
class ChoiceAnswer:
    """Answer to a specific-choice question, resolved to one of its options."""
    question_id: str
    option: str


ResolvedAnswer = Union[AgreementAnswer, ChoiceAnswer]


@dataclass
class MatchResult:
    """Ranked compatibility result for a single candidate."""
    candidate_id: str
    name: str
    party: str
    score: int
    matched_positions: int
    alignment_by_area: Dict[str, int] = field(default_factory=dict)
