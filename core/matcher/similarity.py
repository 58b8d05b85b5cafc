#!/usr/bin/env python3
"""
Similarity Scoring - Alignment between one answer and one candidate position.

The alignment mixes two signals:
- relevance: cosine similarity between the question embedding and the
  candidate's position embedding (how directly the question addresses what the
  candidate said on that policy area)
- direction: whether the user agrees or disagrees with the question, or
  picked the same option the candidate documented

A topically related position therefore only counts as aligned when the user's
answer points the same way.
"""
import logging
from typing import List, Optional

import numpy as np

from core.matcher.models import (
    AGREEMENT_SCALE_MIN,
    AGREEMENT_SCALE_MAX,
    Question,
    PolicyPosition,
    AgreementAnswer,
    ChoiceAnswer,
    ResolvedAnswer,
)

logger = logging.getLogger(__name__)

_SCALE_MIDPOINT = (AGREEMENT_SCALE_MIN + AGREEMENT_SCALE_MAX) / 2.0
_SCALE_HALF_RANGE = (AGREEMENT_SCALE_MAX - AGREEMENT_SCALE_MIN) / 2.0


class SimilarityCalculator:
    """Calculate cosine similarity between vectors."""

    @staticmethod
    def cosine(vec1: List[float], vec2: List[float]) -> float:
        """
        Calculate raw cosine similarity between two vectors.

        Args:
            vec1: First vector
            vec2: Second vector

        Returns:
            Cosine similarity in [-1.0, 1.0], or 0.0 if either vector is zero

        Raises:
            ValueError: If the vectors have different lengths
        """
        a = np.asarray(vec1, dtype=float)
        b = np.asarray(vec2, dtype=float)
        if a.shape != b.shape:
            raise ValueError(f"Vectors must have the same length ({a.size} != {b.size})")

        norm = float(np.linalg.norm(a) * np.linalg.norm(b))
        if norm == 0:
            return 0.0

        return max(-1.0, min(1.0, float(np.dot(a, b)) / norm))


def agreement_direction(value: int) -> float:
    """Map an agreement-scale value onto [-1, 1] (midpoint is neutral)."""
    return (value - _SCALE_MIDPOINT) / _SCALE_HALF_RANGE


def _same_option(selected: str, stance: str) -> bool:
    return selected.strip().casefold() == stance.strip().casefold()


class AlignmentScorer:
    """Scores one resolved answer against one candidate position."""

    def __init__(self, calculator: Optional[SimilarityCalculator] = None):
        self.calculator = calculator or SimilarityCalculator()

    def score(
        self,
        answer: ResolvedAnswer,
        question: Question,
        position: PolicyPosition
    ) -> Optional[float]:
        """
        Calculate alignment between a user's answer and a candidate position.

        Args:
            answer: Answer already resolved against `question`
            question: Question the answer refers to
            position: Candidate position on the question's policy area

        Returns:
            Alignment in [0.0, 1.0], or None when the pair cannot be scored
            (specific-choice question without a documented stance, or
            embeddings of different sizes)
        """
        try:
            relevance = self.calculator.cosine(question.embedding, position.embedding)
        except ValueError as e:
            logger.warning(
                f"Cannot compare question {question.question_id} with position of "
                f"{position.candidate_id}/{position.policy_area}: {e}"
            )
            return None

        if isinstance(answer, AgreementAnswer):
            direction = agreement_direction(answer.value)
        elif isinstance(answer, ChoiceAnswer):
            stance = position.stances.get(question.question_id)
            if not isinstance(stance, str):
                return None
            direction = 1.0 if _same_option(answer.option, stance) else -1.0
            # An opposing embedding says nothing about a categorical choice
            relevance = max(relevance, 0.0)
        else:
            return None

        alignment = 0.5 + 0.5 * direction * relevance
        return max(0.0, min(1.0, alignment))
