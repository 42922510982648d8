"""
Answer data access: the `AnswerStore` interface and its SQLAlchemy implementation.
"""
from abc import ABC, abstractmethod

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from qa_service.models.answer import Answer as AnswerRow
from qa_service.schemas import Answer, AnswerDetail
from qa_service.validators.uuid_validators import parse_uuid
from .base_repository import BaseRepository


def missing_question_message(question_uuid) -> str:
    """Detail used when an answer references a question that does not exist."""
    return f"question_uuid {str(question_uuid)!r} does not reference an existing question"


class AnswerStore(ABC):
    """
    Capability set every answer backend provides.

    Raises:
        InvalidUUIDError: malformed identifier, or (create_answer) unknown question.
        OtherDBError: any other storage failure.
    """

    @abstractmethod
    async def create_answer(self, answer: Answer) -> AnswerDetail:
        ...

    @abstractmethod
    async def get_answers(self, question_uuid: str) -> list[AnswerDetail]:
        ...

    @abstractmethod
    async def delete_answer(self, answer_uuid: str) -> None:
        ...


class AnswerRepository(BaseRepository[AnswerRow], AnswerStore):
    """
    PostgreSQL-backed answer store.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        super().__init__(AnswerRow, session_factory)

    async def create_answer(self, answer: Answer) -> AnswerDetail:
        """
        Insert an answer for an existing question.

        The question's existence is not pre-checked: the insert is attempted and a
        foreign-key violation reported by the database becomes an InvalidUUIDError.

        Raises:
            InvalidUUIDError: malformed `answer.question_uuid`, or no such question.
            OtherDBError: any other storage failure.
        """
        question_uuid = parse_uuid(answer.question_uuid, field="question_uuid")
        row = await self._insert(
            "create_answer",
            invalid_reference_message=missing_question_message(question_uuid),
            question_uuid=question_uuid,
            content=answer.content,
        )
        return AnswerDetail.model_validate(row)

    async def get_answers(self, question_uuid: str) -> list[AnswerDetail]:
        """
        Return every answer of a question; an unknown question yields an empty list.
        """
        parsed = parse_uuid(question_uuid, field="question_uuid")
        rows = await self._select_where("get_answers", AnswerRow.question_uuid == parsed)
        return [AnswerDetail.model_validate(row) for row in rows]

    async def delete_answer(self, answer_uuid: str) -> None:
        parsed = parse_uuid(answer_uuid, field="answer_uuid")
        await self._delete_where("delete_answer", AnswerRow.answer_uuid == parsed)
