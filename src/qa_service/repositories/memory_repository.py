"""
In-memory question/answer stores.

Same interfaces and error semantics as the SQLAlchemy repositories, backed by
dicts. Useful as a drop-in backend for service tests and local experiments.
Both stores share one `InMemoryStorage` so the answers -> questions reference
can be enforced the way the database enforces its foreign key.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
import uuid

from sqlalchemy.exc import IntegrityError

from qa_service.exceptions.base import InvalidUUIDError, OtherDBError
from qa_service.schemas import Answer, AnswerDetail, Question, QuestionDetail
from qa_service.validators.uuid_validators import parse_uuid
from .answer_repository import AnswerStore, missing_question_message
from .question_repository import QuestionStore


@dataclass
class InMemoryStorage:
    questions: dict[uuid.UUID, QuestionDetail] = field(default_factory=dict)
    answers: dict[uuid.UUID, AnswerDetail] = field(default_factory=dict)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryQuestionStore(QuestionStore):

    def __init__(self, storage: InMemoryStorage | None = None):
        self.storage = storage if storage is not None else InMemoryStorage()

    async def create_question(self, question: Question) -> QuestionDetail:
        detail = QuestionDetail(
            question_uuid=uuid.uuid4(),
            title=question.title,
            description=question.description,
            created_at=_now(),
        )
        self.storage.questions[detail.question_uuid] = detail
        return detail

    async def get_questions(self) -> list[QuestionDetail]:
        return list(self.storage.questions.values())

    async def delete_question(self, question_uuid: str) -> None:
        parsed = parse_uuid(question_uuid, field="question_uuid")
        if any(a.question_uuid == parsed for a in self.storage.answers.values()):
            # Same outcome as the relational store: the foreign key blocks the delete
            cause = IntegrityError(
                "DELETE FROM questions",
                {"question_uuid": str(parsed)},
                Exception("FOREIGN KEY constraint failed"),
            )
            raise OtherDBError(cause, operation="delete_question") from cause
        self.storage.questions.pop(parsed, None)


class InMemoryAnswerStore(AnswerStore):

    def __init__(self, storage: InMemoryStorage | None = None):
        self.storage = storage if storage is not None else InMemoryStorage()

    async def create_answer(self, answer: Answer) -> AnswerDetail:
        question_uuid = parse_uuid(answer.question_uuid, field="question_uuid")
        if question_uuid not in self.storage.questions:
            raise InvalidUUIDError(missing_question_message(question_uuid))

        detail = AnswerDetail(
            answer_uuid=uuid.uuid4(),
            question_uuid=question_uuid,
            content=answer.content,
            created_at=_now(),
        )
        self.storage.answers[detail.answer_uuid] = detail
        return detail

    async def get_answers(self, question_uuid: str) -> list[AnswerDetail]:
        parsed = parse_uuid(question_uuid, field="question_uuid")
        return [a for a in self.storage.answers.values() if a.question_uuid == parsed]

    async def delete_answer(self, answer_uuid: str) -> None:
        parsed = parse_uuid(answer_uuid, field="answer_uuid")
        self.storage.answers.pop(parsed, None)
