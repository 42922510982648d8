from datetime import datetime
import uuid

from pydantic import BaseModel, ConfigDict


class Answer(BaseModel):
    """
    Input shape for creating an answer.

    `question_uuid` stays a plain string here: the DAO parses it, so a malformed
    value surfaces as InvalidUUIDError (400) rather than a schema error.
    """
    question_uuid: str
    content: str


class AnswerDetail(BaseModel):
    """Persisted answer as returned to callers."""
    model_config = ConfigDict(from_attributes=True)

    answer_uuid: uuid.UUID
    question_uuid: uuid.UUID
    content: str
    created_at: datetime
