"""
Question data access: the `QuestionStore` interface and its SQLAlchemy implementation.

The service layer depends on `QuestionStore` only, so the storage backend can be
swapped (PostgreSQL via `QuestionRepository`, `InMemoryQuestionStore`, test doubles).
"""
from abc import ABC, abstractmethod

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from qa_service.models.question import Question as QuestionRow
from qa_service.schemas import Question, QuestionDetail
from qa_service.validators.uuid_validators import parse_uuid
from .base_repository import BaseRepository


class QuestionStore(ABC):
    """
    Capability set every question backend provides.

    Raises:
        InvalidUUIDError: malformed identifier.
        OtherDBError: any other storage failure.
    """

    @abstractmethod
    async def create_question(self, question: Question) -> QuestionDetail:
        ...

    @abstractmethod
    async def get_questions(self) -> list[QuestionDetail]:
        ...

    @abstractmethod
    async def delete_question(self, question_uuid: str) -> None:
        ...


class QuestionRepository(BaseRepository[QuestionRow], QuestionStore):
    """
    PostgreSQL-backed question store.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        super().__init__(QuestionRow, session_factory)

    async def create_question(self, question: Question) -> QuestionDetail:
        """
        Insert a question; the database assigns `question_uuid` and `created_at`.

        Every failure is an OtherDBError: there is no identifier in the input.
        """
        row = await self._insert(
            "create_question",
            title=question.title,
            description=question.description,
        )
        return QuestionDetail.model_validate(row)

    async def get_questions(self) -> list[QuestionDetail]:
        rows = await self._select_where("get_questions")
        return [QuestionDetail.model_validate(row) for row in rows]

    async def delete_question(self, question_uuid: str) -> None:
        """
        Delete a question by id. Deleting an unknown id succeeds.

        Raises:
            InvalidUUIDError: `question_uuid` is malformed (no statement is executed).
            OtherDBError: storage failure, including a question that still has answers.
        """
        parsed = parse_uuid(question_uuid, field="question_uuid")
        await self._delete_where("delete_question", QuestionRow.question_uuid == parsed)
