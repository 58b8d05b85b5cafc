#!/usr/bin/env python3
"""
Catalog service - candidates, party positions and quiz questions.
"""

import logging
import random
from typing import Optional

from core.config_loader import QuestionsConfig
from core.matcher import CatalogValidator, select_questions
from database.repositories.catalog import CatalogRepository
from ..models.responses import (
    CandidateSummary,
    CandidatesResponse,
    PositionDetail,
    PositionsResponse,
    QuizQuestion,
    QuestionsResponse
)
from ..exceptions import InvalidQueryException, CatalogEmptyException, CatalogInvalidException

logger = logging.getLogger(__name__)


class CatalogService:
    """Service for read-only catalog endpoints."""

    def __init__(
        self,
        catalog: CatalogRepository,
        validator: CatalogValidator,
        questions_config: QuestionsConfig,
        rng: Optional[random.Random] = None
    ):
        self.catalog = catalog
        self.validator = validator
        self.questions_config = questions_config
        self.rng = rng

    def get_candidates(self) -> CandidatesResponse:
        """Unique candidates sorted by name."""
        candidates = {}
        for position in self.catalog.get_all_candidate_positions():
            if position.candidate_id not in candidates:
                candidates[position.candidate_id] = CandidateSummary(
                    candidate_id=position.candidate_id,
                    name=position.name,
                    party=position.party
                )

        ordered = sorted(candidates.values(), key=lambda c: (c.name.casefold(), c.candidate_id))
        logger.info(f"Candidates fetched: {len(ordered)}")
        return CandidatesResponse(success=True, candidates=ordered)

    def get_positions(self, party: Optional[str]) -> PositionsResponse:
        if not party or not party.strip():
            raise InvalidQueryException("Party name is required")

        party = party.strip()
        positions = self.catalog.get_positions_by_party(party)
        return PositionsResponse(
            success=True,
            party=party,
            positions=[
                PositionDetail(
                    candidate_id=p.candidate_id,
                    policy_area=p.policy_area,
                    position=p.position,
                    extracted_at=p.extracted_at
                )
                for p in positions
            ]
        )

    def parse_limit(self, limit: Optional[str]) -> int:
        """Parse the `limit` query parameter and clamp it into the configured range."""
        config = self.questions_config
        if limit is None or limit == "":
            return config.default_limit
        try:
            parsed = int(limit)
        except ValueError:
            raise InvalidQueryException("Invalid limit parameter. Must be a number.")
        return max(config.min_limit, min(parsed, config.max_limit))

    def get_questions(self, limit: Optional[str]) -> QuestionsResponse:
        count = self.parse_limit(limit)
        pool_size = max(count * 3, self.questions_config.min_pool_size)

        pool = self.catalog.get_questions(pool_size)
        if not pool:
            raise CatalogEmptyException("No questions found. Please run the ingestion first.")

        valid, report = self.validator.filter_questions(pool)
        if not valid:
            raise CatalogInvalidException("No valid questions available")
        if report.dropped:
            logger.warning(f"Dropped {report.dropped} invalid questions from pool of {report.total}")

        selected = select_questions(valid, count, rng=self.rng)
        logger.info(f"Questions selected: requested={count}, pool={len(pool)}, selected={len(selected)}")

        return QuestionsResponse(
            success=True,
            count=len(selected),
            questions=[
                QuizQuestion(
                    question_id=q.question_id,
                    text=q.text,
                    type=q.type,
                    options=q.options,
                    policy_area=q.policy_area,
                    weight=q.weight
                )
                for q in selected
            ]
        )
