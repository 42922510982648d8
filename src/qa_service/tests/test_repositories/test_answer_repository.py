import uuid
from datetime import datetime

import pytest

from qa_service.exceptions.base import InvalidUUIDError, OtherDBError
from qa_service.repositories import AnswerRepository
from qa_service.repositories.answer_repository import missing_question_message
from qa_service.schemas import Answer, AnswerDetail

from ..test_fixtures.repository_fixtures import MALFORMED_UUIDS, ForbiddenSessionFactory


@pytest.mark.asyncio
class TestAnswerRepositoryCreate:

    async def test_create_answer_success(self, answer_repository, created_question, sample_answer_content):
        """
        Behavior:
            - Create an answer for an existing question.
            - The returned AnswerDetail references the question, echoes the content,
              and carries a generated UUID and a timestamp.

        Fixtures:
            - created_question: a persisted question.
            - sample_answer_content: "test content".
        """
        detail = await answer_repository.create_answer(
            Answer(question_uuid=str(created_question.question_uuid), content=sample_answer_content)
        )

        assert isinstance(detail, AnswerDetail)
        assert isinstance(detail.answer_uuid, uuid.UUID)
        assert detail.question_uuid == created_question.question_uuid
        assert detail.content == sample_answer_content
        assert isinstance(detail.created_at, datetime)

    async def test_create_answer_for_unknown_question_raises_invalid_uuid(self, answer_repository):
        """
        Behavior:
            - Create an answer whose question_uuid is well-formed but matches no question.
            - The database rejects the insert with a foreign-key violation, which is
              reported as InvalidUUIDError (not OtherDBError).

        Importance:
            - A dangling reference is the caller's mistake (400), not a server failure (500).
            - The detail names the supplied id and does not leak raw database text.
        """
        missing = uuid.uuid4()

        with pytest.raises(InvalidUUIDError) as exc_info:
            await answer_repository.create_answer(Answer(question_uuid=str(missing), content="c"))

        assert exc_info.value.detail == missing_question_message(missing)
        assert "FOREIGN KEY" not in exc_info.value.detail.upper()

    async def test_failed_create_leaves_no_row(self, answer_repository, created_question):
        with pytest.raises(InvalidUUIDError):
            await answer_repository.create_answer(Answer(question_uuid=str(uuid.uuid4()), content="c"))

        assert await answer_repository.get_answers(str(created_question.question_uuid)) == []

    @pytest.mark.parametrize("malformed", MALFORMED_UUIDS)
    async def test_create_answer_malformed_question_uuid(self, malformed):
        factory = ForbiddenSessionFactory()
        repository = AnswerRepository(factory)

        with pytest.raises(InvalidUUIDError):
            await repository.create_answer(Answer(question_uuid=malformed, content="c"))

        assert factory.calls == 0


@pytest.mark.asyncio
class TestAnswerRepositoryRead:

    async def test_get_answers_for_question_without_answers(self, answer_repository, created_question):
        assert await answer_repository.get_answers(str(created_question.question_uuid)) == []

    async def test_get_answers_for_unknown_question(self, answer_repository):
        # Unknown (well-formed) question: empty result, not an error
        assert await answer_repository.get_answers(str(uuid.uuid4())) == []

    async def test_round_trip_create_then_list(self, answer_repository, created_question):
        await answer_repository.create_answer(
            Answer(question_uuid=str(created_question.question_uuid), content="c")
        )

        answers = await answer_repository.get_answers(str(created_question.question_uuid))

        assert len([a for a in answers if a.content == "c"]) == 1

    async def test_get_answers_only_returns_answers_of_that_question(
        self, answer_repository, create_question, create_answer
    ):
        q1 = await create_question()
        q2 = await create_question()
        a1 = await create_answer(q1.question_uuid)
        await create_answer(q2.question_uuid)

        answers = await answer_repository.get_answers(str(q1.question_uuid))

        assert [a.answer_uuid for a in answers] == [a1.answer_uuid]

    @pytest.mark.parametrize("malformed", MALFORMED_UUIDS)
    async def test_get_answers_malformed_uuid(self, malformed):
        factory = ForbiddenSessionFactory()
        repository = AnswerRepository(factory)

        with pytest.raises(InvalidUUIDError):
            await repository.get_answers(malformed)

        assert factory.calls == 0


@pytest.mark.asyncio
class TestAnswerRepositoryDelete:

    async def test_create_two_then_delete_one(self, answer_repository, created_question, create_answer):
        """
        Behavior:
            - Create answers A1 and A2 for question Q1; listing Q1 returns exactly {A1, A2}.
            - Delete A1; listing Q1 returns exactly {A2}.

        Notes:
            - Compared as sets: no ordering is guaranteed.
        """
        q1 = str(created_question.question_uuid)
        a1 = await create_answer(created_question.question_uuid, content="first")
        a2 = await create_answer(created_question.question_uuid, content="second")

        before = await answer_repository.get_answers(q1)
        assert {a.answer_uuid for a in before} == {a1.answer_uuid, a2.answer_uuid}

        await answer_repository.delete_answer(str(a1.answer_uuid))

        after = await answer_repository.get_answers(q1)
        assert {a.answer_uuid for a in after} == {a2.answer_uuid}

    async def test_delete_unknown_answer_is_idempotent(self, answer_repository):
        await answer_repository.delete_answer(str(uuid.uuid4()))

    async def test_delete_answers_then_question(
        self, answer_repository, question_repository, created_question, create_answer
    ):
        """Once its answers are gone, the question itself can be deleted."""
        answer = await create_answer(created_question.question_uuid)

        await answer_repository.delete_answer(str(answer.answer_uuid))
        await question_repository.delete_question(str(created_question.question_uuid))

        assert await question_repository.get_questions() == []

    @pytest.mark.parametrize("malformed", MALFORMED_UUIDS)
    async def test_delete_answer_malformed_uuid(self, malformed):
        factory = ForbiddenSessionFactory()
        repository = AnswerRepository(factory)

        with pytest.raises(InvalidUUIDError) as exc_info:
            await repository.delete_answer(malformed)

        assert factory.calls == 0
        assert "answer_uuid" in exc_info.value.detail


@pytest.mark.asyncio
class TestAnswerRepositoryStorageFailure:

    async def test_session_factory_failure_is_other_db_error(self):
        """
        Behavior:
            - A session factory that blows up (e.g. pool exhausted, connection refused)
              turns a well-formed request into OtherDBError.
        """
        factory = ForbiddenSessionFactory()
        repository = AnswerRepository(factory)

        with pytest.raises(OtherDBError) as exc_info:
            await repository.get_answers(str(uuid.uuid4()))

        assert factory.calls == 1
        assert isinstance(exc_info.value.cause, AssertionError)
        assert exc_info.value.operation == "get_answers"
