"""Fixtures for repository tests."""

import pytest
from faker import Faker
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from qa_service.repositories import AnswerRepository, QuestionRepository
from qa_service.schemas import Answer, AnswerDetail, Question, QuestionDetail

# NOTE: All fixtures in this file depend on the `session_factory` fixture defined in conftest.py,
# which is bound to a fresh database per test.

fake = Faker()


@pytest.fixture
def question_repository(session_factory: async_sessionmaker[AsyncSession]) -> QuestionRepository:
    """
    Provide a QuestionRepository over the test session factory.

    Each repository call opens (and commits) its own session, exactly as in the service.
    """
    return QuestionRepository(session_factory)


@pytest.fixture
def answer_repository(session_factory: async_sessionmaker[AsyncSession]) -> AnswerRepository:
    return AnswerRepository(session_factory)


@pytest.fixture
def sample_question() -> Question:
    """
    Simple, deterministic question payload. Kept synchronous because it does not touch the DB.
    """
    return Question(title="title", description="description")


@pytest.fixture
def sample_answer_content() -> str:
    return "test content"


@pytest.fixture
def create_question(question_repository: QuestionRepository):
    """
    Factory helper that tests call to persist questions with optional overrides.

    Usage:
        question = await create_question(title="custom")
    """
    async def _create(**overrides) -> QuestionDetail:
        data = {
            "title": fake.sentence(nb_words=6),
            "description": fake.paragraph(nb_sentences=2),
        }
        data.update(overrides)
        return await question_repository.create_question(Question(**data))

    return _create


@pytest.fixture
async def created_question(create_question, sample_question: Question) -> QuestionDetail:
    """Create and return a single persisted question built from `sample_question`."""
    return await create_question(**sample_question.model_dump())


@pytest.fixture
async def multiple_questions(create_question) -> list[QuestionDetail]:
    """
    Create and return three persisted questions with random titles/descriptions.

    Used by the listing tests, which compare sets because no ordering is guaranteed.
    """
    return [await create_question() for _ in range(3)]


@pytest.fixture
def create_answer(answer_repository: AnswerRepository):
    """
    Factory helper: `await create_answer(question_uuid, content="...")`.
    """
    async def _create(question_uuid, content: str | None = None) -> AnswerDetail:
        payload = Answer(
            question_uuid=str(question_uuid),
            content=content if content is not None else fake.paragraph(nb_sentences=1),
        )
        return await answer_repository.create_answer(payload)

    return _create


# Strings that are not UUIDs, shared by the malformed-identifier tests
MALFORMED_UUIDS = [
    "",
    "not-a-uuid",
    "1234",
    "g" * 32,
    "b3c1e5a0-0000-0000-0000-00000000000Z",
    # Near misses that uuid.UUID() alone would accept
    "+2345678123456781234567812345678",
    " 2345678123456781234567812345678",
    "12345678-1234-5678-1234-567812345678\n",
    "1_345678123456781234567812345678",
    "----12345678123456781234567812345678",
    "1234-5678-1234-5678-1234-5678-1234-5678",
    "{{{12345678123456781234567812345678}}}",
    "urn:urn:12345678-1234-5678-1234-567812345678",
    "uuid:12345678-1234-5678-1234-567812345678",
]


class ForbiddenSessionFactory:
    """Session factory that counts calls and fails; proves no storage call was attempted."""

    def __init__(self):
        self.calls = 0

    def __call__(self, *args, **kwargs):
        self.calls += 1
        raise AssertionError("storage must not be touched")
