import uuid

from sqlalchemy import Column, Text, Float, TIMESTAMP, UniqueConstraint, Index
from sqlalchemy.sql import text as sql_text
from sqlalchemy.dialects.postgresql import UUID, JSONB
from pgvector.sqlalchemy import Vector

from .base import Base

EMBEDDING_DIMENSIONS = 1536


class QuestionRecord(Base):
    """Quiz question with its precomputed embedding (populated by ingestion)."""
    __tablename__ = 'question_bank'

    question_id = Column(Text, primary_key=True)
    policy_area = Column(Text, nullable=False)
    text = Column(Text, nullable=False)
    type = Column(Text, nullable=False)  # agreement-scale|specific-choice
    options = Column(JSONB, nullable=True)
    embedding = Column(Vector(EMBEDDING_DIMENSIONS))
    weight = Column(Float, nullable=False, default=1.0)
    bias_score = Column(Float, nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"))

    __table_args__ = (
        Index('ix_question_bank_policy_area', 'policy_area'),
    )


class CandidatePositionRecord(Base):
    """
    A candidate's position on one policy area.

    At most one row per (candidate, policy area); duplicates are rejected
    here at ingestion rather than resolved during scoring.
    """
    __tablename__ = 'candidate_position'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    candidate_id = Column(Text, nullable=False)
    policy_area = Column(Text, nullable=False)
    name = Column(Text, nullable=False, default='')
    party = Column(Text, nullable=False, default='')
    position = Column(Text, nullable=False)
    embedding = Column(Vector(EMBEDDING_DIMENSIONS))
    # question_id -> documented option for specific-choice questions
    stances = Column(JSONB, nullable=False, default={})
    extracted_at = Column(TIMESTAMP(timezone=True), nullable=True)

    __table_args__ = (
        UniqueConstraint('candidate_id', 'policy_area', name='uq_candidate_position_area'),
        Index('ix_candidate_position_party', 'party'),
    )
