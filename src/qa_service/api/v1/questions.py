"""
Question endpoints.
"""
from fastapi import APIRouter, Depends

from qa_service.api.dependencies import get_question_service
from qa_service.schemas import Question, QuestionDetail
from qa_service.services import QuestionService

router = APIRouter()


@router.post("/question", response_model=QuestionDetail)
async def create_question(
    question: Question,
    service: QuestionService = Depends(get_question_service),
) -> QuestionDetail:
    return await service.create_question(question)


@router.get("/questions", response_model=list[QuestionDetail])
async def read_questions(
    service: QuestionService = Depends(get_question_service),
) -> list[QuestionDetail]:
    return await service.get_questions()


@router.delete("/question/{question_uuid}")
async def delete_question(
    question_uuid: str,
    service: QuestionService = Depends(get_question_service),
) -> None:
    await service.delete_question(question_uuid)
