"""
Repository (DAO) layer.

Interfaces (`QuestionStore`, `AnswerStore`) are what services depend on; the
SQLAlchemy and in-memory classes are interchangeable implementations.

Usage:
    from qa_service.repositories import QuestionRepository, AnswerRepository
"""

from .base_repository import BaseRepository
from .question_repository import QuestionStore, QuestionRepository
from .answer_repository import AnswerStore, AnswerRepository
from .memory_repository import InMemoryStorage, InMemoryQuestionStore, InMemoryAnswerStore

__all__ = [
    "BaseRepository",
    "QuestionStore",
    "QuestionRepository",
    "AnswerStore",
    "AnswerRepository",
    "InMemoryStorage",
    "InMemoryQuestionStore",
    "InMemoryAnswerStore",
]
