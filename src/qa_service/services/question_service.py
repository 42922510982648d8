from qa_service.repositories.question_repository import QuestionStore
from qa_service.schemas import Question, QuestionDetail
from .base_service import translate_db_errors


class QuestionService:
    """
    Question operations as seen by the HTTP layer.

    Depends on the `QuestionStore` interface only. Each method performs one store
    call; storage errors come back as BadRequestError / InternalError.
    """

    def __init__(self, store: QuestionStore):
        self.store = store

    async def create_question(self, question: Question) -> QuestionDetail:
        with translate_db_errors("create_question"):
            return await self.store.create_question(question)

    async def get_questions(self) -> list[QuestionDetail]:
        with translate_db_errors("get_questions"):
            return await self.store.get_questions()

    async def delete_question(self, question_uuid: str) -> None:
        """Idempotent: deleting an unknown (well-formed) id succeeds."""
        with translate_db_errors("delete_question"):
            await self.store.delete_question(question_uuid)
