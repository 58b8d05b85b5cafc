import logging
from typing import Any, Iterable, List, Optional

from sqlalchemy import func, select

from core.matcher.models import Question, PolicyPosition
from database.models import QuestionRecord, CandidatePositionRecord
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


def _embedding(value: Any) -> List[float]:
    # pgvector returns numpy arrays; the matcher works on plain lists
    if value is None:
        return []
    return [float(v) for v in value]


def to_question(record: QuestionRecord) -> Question:
    return Question(
        question_id=record.question_id,
        policy_area=record.policy_area,
        text=record.text,
        type=record.type,
        embedding=_embedding(record.embedding),
        weight=record.weight if record.weight is not None else 0.0,
        options=list(record.options) if record.options else None,
        bias_score=record.bias_score,
    )


def to_position(record: CandidatePositionRecord) -> PolicyPosition:
    return PolicyPosition(
        candidate_id=record.candidate_id,
        policy_area=record.policy_area,
        position=record.position,
        embedding=_embedding(record.embedding),
        name=record.name or '',
        party=record.party or '',
        stances=dict(record.stances) if isinstance(record.stances, dict) else {},
        extracted_at=record.extracted_at.isoformat() if record.extracted_at else None,
    )


class CatalogRepository(BaseRepository):
    """Read access to the question bank and candidate positions.

    Lookups return empty lists, never errors, when nothing matches.
    Catalog lookups are ordered by key so downstream ranking is reproducible;
    only the quiz question pool is drawn in random order.
    """

    def get_all_candidate_positions(self) -> List[PolicyPosition]:
        stmt = select(CandidatePositionRecord).order_by(
            CandidatePositionRecord.candidate_id,
            CandidatePositionRecord.policy_area
        )
        positions = [to_position(r) for r in self._all(stmt)]
        logger.debug(f"Loaded {len(positions)} candidate positions")
        return positions

    def get_positions_by_party(self, party: str) -> List[PolicyPosition]:
        stmt = (
            select(CandidatePositionRecord)
            .where(CandidatePositionRecord.party == party)
            .order_by(CandidatePositionRecord.policy_area)
        )
        return [to_position(r) for r in self._all(stmt)]

    def get_questions_by_ids(self, question_ids: Iterable[str]) -> List[Question]:
        ids = sorted({qid for qid in question_ids if qid})
        if not ids:
            return []
        stmt = (
            select(QuestionRecord)
            .where(QuestionRecord.question_id.in_(ids))
            .order_by(QuestionRecord.question_id)
        )
        return [to_question(r) for r in self._all(stmt)]

    def get_questions(self, limit: Optional[int] = None) -> List[Question]:
        """Fetch a random pool of questions (used for quiz question selection).

        Random order so every question, and every policy area, can reach the
        pool when the bank is larger than `limit`.
        """
        stmt = select(QuestionRecord).order_by(func.random())
        if limit:
            stmt = stmt.limit(limit)
        return [to_question(r) for r in self._all(stmt)]
