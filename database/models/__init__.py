from .base import Base
from .catalog import QuestionRecord, CandidatePositionRecord, EMBEDDING_DIMENSIONS

__all__ = [
    'Base',
    'QuestionRecord',
    'CandidatePositionRecord',
    'EMBEDDING_DIMENSIONS',
]
