from qa_service.repositories.answer_repository import AnswerStore
from qa_service.schemas import Answer, AnswerDetail
from .base_service import translate_db_errors


class AnswerService:
    """
    Answer operations as seen by the HTTP layer. Mirrors QuestionService.
    """

    def __init__(self, store: AnswerStore):
        self.store = store

    async def create_answer(self, answer: Answer) -> AnswerDetail:
        # Unknown question -> BadRequestError, not InternalError
        with translate_db_errors("create_answer"):
            return await self.store.create_answer(answer)

    async def get_answers(self, question_uuid: str) -> list[AnswerDetail]:
        with translate_db_errors("get_answers"):
            return await self.store.get_answers(question_uuid)

    async def delete_answer(self, answer_uuid: str) -> None:
        with translate_db_errors("delete_answer"):
            await self.store.delete_answer(answer_uuid)
