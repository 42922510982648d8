"""
Single import point for the ORM models, so `Base.metadata` knows every table:

    from qa_service.models import Question, Answer
"""

from .question import Question
from .answer import Answer

__all__ = [
    "Question",
    "Answer",
]
