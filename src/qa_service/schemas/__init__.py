from .question import Question, QuestionDetail
from .answer import Answer, AnswerDetail

__all__ = [
    "Question",
    "QuestionDetail",
    "Answer",
    "AnswerDetail",
]
