#!/usr/bin/env python3
"""
Matching Service - Ranks candidates against a set of user answers.

Pure, synchronous computation: no I/O, no randomness and no time-dependent
branching, so identical inputs always produce identical output (including
order). Safe to share between concurrent requests.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from core.utils import to_percent
from core.matcher.models import (
    Question,
    PolicyPosition,
    UserAnswer,
    MatchResult,
)
from core.matcher.similarity import AlignmentScorer
from core.matcher.validation import CatalogValidator

logger = logging.getLogger(__name__)


@dataclass
class _WeightedSum:
    weighted: float = 0.0
    weights: float = 0.0

    def add(self, alignment: float, weight: float) -> None:
        self.weighted += alignment * weight
        self.weights += weight

    def ratio(self) -> float:
        return self.weighted / self.weights if self.weights > 0 else 0.0


@dataclass
class _CandidateTally:
    name: str
    party: str
    overall: _WeightedSum = field(default_factory=_WeightedSum)
    by_area: Dict[str, _WeightedSum] = field(default_factory=dict)


def group_positions_by_candidate(
    positions: Sequence[PolicyPosition]
) -> Dict[str, Dict[str, PolicyPosition]]:
    """Group positions as candidate_id -> policy_area -> position.

    Insertion order follows the first appearance of each candidate. If the
    catalog holds more than one position for the same (candidate, area), the
    first one wins; duplicates are a data-quality issue for ingestion.
    """
    grouped: Dict[str, Dict[str, PolicyPosition]] = {}
    duplicates = 0
    for position in positions:
        areas = grouped.setdefault(position.candidate_id, {})
        if position.policy_area in areas:
            duplicates += 1
            continue
        areas[position.policy_area] = position

    if duplicates:
        logger.warning(f"Ignored {duplicates} duplicate candidate positions (first position per area wins)")
    return grouped


class MatchingService:
    """
    Service that converts answers and catalog data into ranked MatchResults.

    For every candidate and every answered question, the alignment between
    the answer and the candidate's position on the question's policy area is
    weighted by the question weight. Overall and per-area scores are weighted
    averages expressed as integer percentages.
    """

    def __init__(
        self,
        validator: Optional[CatalogValidator] = None,
        scorer: Optional[AlignmentScorer] = None
    ):
        self.validator = validator or CatalogValidator()
        self.scorer = scorer or AlignmentScorer()

    def calculate_matches(
        self,
        answers: Sequence[UserAnswer],
        positions: Sequence[PolicyPosition],
        questions: Sequence[Question]
    ) -> List[MatchResult]:
        """Calculate ranked candidate matches.

        Args:
            answers: Structurally valid user answers
            positions: Validated candidate positions
            questions: Validated questions the answers refer to

        Returns:
            MatchResults sorted by score (desc), matched policy areas (desc),
            then first appearance of the candidate in `positions`.
            Candidates with no scored question are left out entirely.
        """
        if not answers or not positions or not questions:
            return []

        questions_by_id: Dict[str, Question] = {}
        for question in questions:
            questions_by_id.setdefault(question.question_id, question)

        resolved = [
            (answer, question)
            for answer, question in self.validator.resolve_answers(answers, questions_by_id)
            if question.weight > 0
        ]
        if not resolved:
            logger.info("No answers resolved against known questions")
            return []

        grouped = group_positions_by_candidate(positions)
        order = {candidate_id: index for index, candidate_id in enumerate(grouped)}

        results: List[MatchResult] = []
        for candidate_id, areas in grouped.items():
            tally: Optional[_CandidateTally] = None

            for answer, question in resolved:
                position = areas.get(question.policy_area)
                if position is None:
                    continue

                alignment = self.scorer.score(answer, question, position)
                if alignment is None:
                    continue

                if tally is None:
                    tally = _CandidateTally(name=position.name, party=position.party)
                tally.overall.add(alignment, question.weight)
                tally.by_area.setdefault(question.policy_area, _WeightedSum()).add(alignment, question.weight)

            if tally is None:
                continue

            results.append(MatchResult(
                candidate_id=candidate_id,
                name=tally.name,
                party=tally.party,
                score=to_percent(tally.overall.ratio()),
                matched_positions=len(tally.by_area),
                alignment_by_area={
                    area: to_percent(area_sum.ratio())
                    for area, area_sum in tally.by_area.items()
                },
            ))

        results.sort(key=lambda r: (-r.score, -r.matched_positions, order[r.candidate_id]))

        logger.debug(
            f"Scored {len(results)} of {len(grouped)} candidates over {len(resolved)} answers"
        )
        return results
