#!/usr/bin/env python3
"""
Catalog Validation - Defensive filtering of answers, positions and questions.

Records coming from the catalog or from the request body are of unknown
provenance. Every filter here returns only the well-formed subset together
with a ValidationReport; malformed individual records are dropped, never
raised. Deciding what an all-invalid batch means is left to the caller.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from core.utils import is_number
from core.matcher.models import (
    POLICY_AREAS,
    QUESTION_TYPES,
    AGREEMENT_SCALE,
    SPECIFIC_CHOICE,
    AGREEMENT_SCALE_MIN,
    AGREEMENT_SCALE_MAX,
    Question,
    PolicyPosition,
    UserAnswer,
    AgreementAnswer,
    ChoiceAnswer,
    ResolvedAnswer,
)

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass
class ValidationReport:
    """Counts for one filtered batch, used for logging dropped records."""
    total: int
    valid: int

    @property
    def dropped(self) -> int:
        return self.total - self.valid

    @property
    def all_invalid(self) -> bool:
        return self.total > 0 and self.valid == 0


def _get(record: Any, *names: str) -> Any:
    """Read the first present field from a mapping or an object."""
    for name in names:
        if isinstance(record, Mapping):
            if name in record:
                return record[name]
        else:
            value = getattr(record, name, _MISSING)
            if value is not _MISSING:
                return value
    return _MISSING


def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


class CatalogValidator:
    """Validates user answers and catalog records against a fixed embedding size.

    Args:
        embedding_dimensions: Required length of every embedding. When None,
            any non-empty length is accepted (positions and questions are
            still compared pairwise by the scorer).
    """

    def __init__(self, embedding_dimensions: Optional[int] = None):
        self.embedding_dimensions = embedding_dimensions

    def _valid_embedding(self, embedding: Any) -> bool:
        if isinstance(embedding, (str, bytes, Mapping)):
            return False
        try:
            values = list(embedding)
        except TypeError:
            return False
        if not values:
            return False
        if self.embedding_dimensions is not None and len(values) != self.embedding_dimensions:
            return False
        return all(is_number(v) for v in values)

    # --- answers -----------------------------------------------------------

    def is_valid_answer(self, answer: Any) -> bool:
        """Structural check that does not need the bound question."""
        question_id = _get(answer, 'question_id', 'questionId')
        if not _non_empty_str(question_id):
            return False
        value = _get(answer, 'answer')
        return is_number(value) or _non_empty_str(value)

    def filter_answers(self, answers: Iterable[Any]) -> Tuple[List[UserAnswer], ValidationReport]:
        """Keep structurally valid answers, converted to UserAnswer."""
        answers = list(answers or [])
        valid = [
            UserAnswer(
                question_id=_get(a, 'question_id', 'questionId').strip(),
                answer=_get(a, 'answer'),
            )
            for a in answers
            if self.is_valid_answer(a)
        ]
        return valid, ValidationReport(total=len(answers), valid=len(valid))

    def resolve_answer(self, answer: UserAnswer, question: Question) -> Optional[ResolvedAnswer]:
        """Resolve a raw answer into its typed variant for the bound question.

        Returns None when the answer is outside the question type's domain.
        """
        if question.type == AGREEMENT_SCALE:
            value = answer.answer
            if isinstance(value, str):
                try:
                    value = float(value.strip())
                except ValueError:
                    return None
            if not is_number(value) or value != int(value):
                return None
            value = int(value)
            if not AGREEMENT_SCALE_MIN <= value <= AGREEMENT_SCALE_MAX:
                return None
            return AgreementAnswer(question_id=answer.question_id, value=value)

        if question.type == SPECIFIC_CHOICE:
            option = answer.answer
            if not isinstance(option, str) or option not in (question.options or []):
                return None
            return ChoiceAnswer(question_id=answer.question_id, option=option)

        return None

    def resolve_answers(
        self,
        answers: Iterable[UserAnswer],
        questions_by_id: Dict[str, Question]
    ) -> List[Tuple[ResolvedAnswer, Question]]:
        """Bind answers to known questions and drop the ones outside their domain.

        Answers whose question is unknown are dropped as well; the engine has
        nothing to score them against. Later answers to the same question
        replace earlier ones.
        """
        resolved: Dict[str, Tuple[ResolvedAnswer, Question]] = {}
        for answer in answers:
            question = questions_by_id.get(answer.question_id)
            if question is None:
                logger.debug(f"Question not found for answer: {answer.question_id}")
                continue
            typed = self.resolve_answer(answer, question)
            if typed is None:
                logger.debug(f"Answer {answer.answer!r} outside domain of question {question.question_id}")
                continue
            resolved[answer.question_id] = (typed, question)
        return list(resolved.values())

    # --- catalog -----------------------------------------------------------

    def is_valid_position(self, position: Any) -> bool:
        if not _non_empty_str(_get(position, 'candidate_id')):
            return False
        if _get(position, 'policy_area') not in POLICY_AREAS:
            return False
        return self._valid_embedding(_get(position, 'embedding'))

    def is_valid_question(self, question: Any) -> bool:
        if not _non_empty_str(_get(question, 'question_id')):
            return False
        if _get(question, 'policy_area') not in POLICY_AREAS:
            return False
        question_type = _get(question, 'type')
        if question_type not in QUESTION_TYPES:
            return False
        weight = _get(question, 'weight')
        if not is_number(weight) or weight <= 0:
            return False
        if question_type == SPECIFIC_CHOICE:
            options = _get(question, 'options')
            if not isinstance(options, (list, tuple)) or not options:
                return False
        return self._valid_embedding(_get(question, 'embedding'))

    def filter_positions(self, positions: Sequence[Any]) -> Tuple[List[PolicyPosition], ValidationReport]:
        positions = list(positions or [])
        valid = [_as_position(p) for p in positions if self.is_valid_position(p)]
        return valid, ValidationReport(total=len(positions), valid=len(valid))

    def filter_questions(self, questions: Sequence[Any]) -> Tuple[List[Question], ValidationReport]:
        questions = list(questions or [])
        valid = [_as_question(q) for q in questions if self.is_valid_question(q)]
        return valid, ValidationReport(total=len(questions), valid=len(valid))


def _optional(record: Any, name: str, default: Any = None) -> Any:
    value = _get(record, name)
    return default if value is _MISSING or value is None else value


def _as_position(record: Any) -> PolicyPosition:
    if isinstance(record, PolicyPosition):
        return record
    stances = _optional(record, 'stances', {})
    return PolicyPosition(
        candidate_id=_get(record, 'candidate_id'),
        policy_area=_get(record, 'policy_area'),
        position=_optional(record, 'position', ''),
        embedding=[float(v) for v in _get(record, 'embedding')],
        name=_optional(record, 'name', ''),
        party=_optional(record, 'party', ''),
        stances=dict(stances) if isinstance(stances, Mapping) else {},
        extracted_at=_optional(record, 'extracted_at'),
    )


def _as_question(record: Any) -> Question:
    if isinstance(record, Question):
        return record
    return Question(
        question_id=_get(record, 'question_id'),
        policy_area=_get(record, 'policy_area'),
        text=_optional(record, 'text', ''),
        type=_get(record, 'type'),
        embedding=[float(v) for v in _get(record, 'embedding')],
        weight=float(_get(record, 'weight')),
        options=_optional(record, 'options'),
        bias_score=_optional(record, 'bias_score'),
    )
