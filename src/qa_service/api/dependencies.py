"""
FastAPI dependencies wiring services to the session factory created at startup.

Tests replace these with `app.dependency_overrides[get_question_service] = ...`.
"""
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from qa_service.repositories import AnswerRepository, QuestionRepository
from qa_service.services import AnswerService, QuestionService


def get_session_factory(request: Request) -> async_sessionmaker[AsyncSession]:
    return request.app.state.session_factory


def get_question_service(request: Request) -> QuestionService:
    return QuestionService(QuestionRepository(get_session_factory(request)))


def get_answer_service(request: Request) -> AnswerService:
    return AnswerService(AnswerRepository(get_session_factory(request)))
