#!/usr/bin/env python3
"""
Match service - validates a quiz submission, ranks candidates and records the outcome.
"""

import logging
from typing import Any

from core.app_context import AppContext
from core.matcher import CatalogValidator, MatchResult, ValidationReport
from database.repositories.catalog import CatalogRepository
from ..models.responses import CandidateMatch, MatchResponse
from ..exceptions import (
    InvalidAnswersException,
    CatalogEmptyException,
    CatalogInvalidException
)

logger = logging.getLogger(__name__)


def _log_dropped(kind: str, report: ValidationReport) -> None:
    if report.dropped:
        logger.warning(
            f"Dropped {report.dropped} invalid {kind} "
            f"({report.valid}/{report.total} valid), continuing with the valid subset"
        )


class MatchService:
    """Service for the scoring endpoint."""

    def __init__(self, catalog: CatalogRepository, context: AppContext):
        self.catalog = catalog
        self.context = context
        self.validator: CatalogValidator = context.validator
        self.config = context.config.matching

    def calculate(self, raw_answers: Any) -> MatchResponse:
        """
        Rank candidates for a quiz submission.

        Args:
            raw_answers: The `answers` field of the request body, unvalidated.

        Returns:
            Top-K ranked matches with request summary.

        Raises:
            InvalidAnswersException: Missing, empty, over-limit or fully invalid answers.
            CatalogEmptyException: No positions or questions in the catalog.
            CatalogInvalidException: Catalog present but entirely invalid.
        """
        if not isinstance(raw_answers, list) or not raw_answers:
            raise InvalidAnswersException("Invalid request body. Expected { answers: [...] }")

        if len(raw_answers) > self.config.max_answers:
            raise InvalidAnswersException(f"Too many answers. Maximum is {self.config.max_answers}.")

        answers, answer_report = self.validator.filter_answers(raw_answers)
        if not answers:
            raise InvalidAnswersException("No valid answers provided")
        _log_dropped("answers", answer_report)

        positions = self.catalog.get_all_candidate_positions()
        if not positions:
            raise CatalogEmptyException("No candidate data found. Please run the ingestion first.")

        valid_positions, position_report = self.validator.filter_positions(positions)
        if not valid_positions:
            raise CatalogInvalidException("No valid candidate data available")
        _log_dropped("candidate positions", position_report)

        questions = self.catalog.get_questions_by_ids(a.question_id for a in answers)
        if not questions:
            if not self.catalog.get_questions(1):
                raise CatalogEmptyException("No questions found. Please run the ingestion first.")
            # Unknown question IDs are unresolvable answers, not missing data
            logger.warning(f"None of the {len(answers)} answered questions exist in the catalog")

        valid_questions, question_report = self.validator.filter_questions(questions)
        if questions and not valid_questions:
            raise CatalogInvalidException("No valid questions available")
        _log_dropped("questions", question_report)

        matches = self.context.matching_service.calculate_matches(
            answers, valid_positions, valid_questions
        )
        questions_answered = len(answers)

        if matches:
            # Detached write; its outcome never affects this response
            self.context.recorder.record(matches[0].candidate_id, questions_answered)

        total_candidates = len({p.candidate_id for p in valid_positions})
        logger.info(
            f"Match calculation complete: {len(matches)} candidates scored, "
            f"top score {matches[0].score if matches else 0}, "
            f"{questions_answered} answers"
        )

        return MatchResponse(
            success=True,
            matches=[self._to_candidate_match(m) for m in matches[:self.config.top_k]],
            total_candidates=total_candidates,
            questions_answered=questions_answered
        )

    @staticmethod
    def _to_candidate_match(match: MatchResult) -> CandidateMatch:
        return CandidateMatch(
            candidate_id=match.candidate_id,
            name=match.name,
            party=match.party,
            score=match.score,
            matched_positions=match.matched_positions,
            alignment_by_area=dict(match.alignment_by_area)
        )
