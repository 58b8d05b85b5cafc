"""Matcher Module - Answer validation, alignment scoring and candidate ranking."""
from core.matcher.models import (
    POLICY_AREAS, AGREEMENT_SCALE, SPECIFIC_CHOICE,
    Question, PolicyPosition, UserAnswer,
    AgreementAnswer, ChoiceAnswer, MatchResult
)
from core.matcher.validation import CatalogValidator, ValidationReport
from core.matcher.similarity import SimilarityCalculator, AlignmentScorer
from core.matcher.service import MatchingService
from core.matcher.question_selection import select_questions

__all__ = [
    'MatchingService', 'CatalogValidator', 'ValidationReport',
    'SimilarityCalculator', 'AlignmentScorer', 'select_questions',
    'POLICY_AREAS', 'AGREEMENT_SCALE', 'SPECIFIC_CHOICE',
    'Question', 'PolicyPosition', 'UserAnswer',
    'AgreementAnswer', 'ChoiceAnswer', 'MatchResult'
]
