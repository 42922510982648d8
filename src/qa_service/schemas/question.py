from datetime import datetime
import uuid

from pydantic import BaseModel, ConfigDict


class Question(BaseModel):
    """Input shape for creating a question. Both fields are required; content is not validated further."""
    title: str
    description: str


class QuestionDetail(BaseModel):
    """Persisted question as returned to callers."""
    model_config = ConfigDict(from_attributes=True)

    question_uuid: uuid.UUID
    title: str
    description: str
    created_at: datetime
