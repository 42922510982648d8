"""
Answer endpoints.
"""
from fastapi import APIRouter, Depends

from qa_service.api.dependencies import get_answer_service
from qa_service.schemas import Answer, AnswerDetail
from qa_service.services import AnswerService

router = APIRouter()


@router.post("/answer", response_model=AnswerDetail)
async def create_answer(
    answer: Answer,
    service: AnswerService = Depends(get_answer_service),
) -> AnswerDetail:
    return await service.create_answer(answer)


# question_uuid stays a plain string so malformed ids reach the store and come back as 400
@router.get("/answers/{question_uuid}", response_model=list[AnswerDetail])
async def read_answers(
    question_uuid: str,
    service: AnswerService = Depends(get_answer_service),
) -> list[AnswerDetail]:
    return await service.get_answers(question_uuid)


@router.delete("/answer/{answer_uuid}")
async def delete_answer(
    answer_uuid: str,
    service: AnswerService = Depends(get_answer_service),
) -> None:
    await service.delete_answer(answer_uuid)
