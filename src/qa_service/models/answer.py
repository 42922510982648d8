from sqlalchemy import DateTime, ForeignKey, Text, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from datetime import datetime
from qa_service.database.base import Base
import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .question import Question


class Answer(Base):
    """
    SQLAlchemy model representing an answer to a question.

    `question_uuid` must reference an existing question at insert time; the
    database enforces it (foreign key), the application does not pre-check.
    """
    __tablename__ = "answers"

    answer_uuid: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    # Foreign key to the parent question (no ON DELETE rule)
    question_uuid: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("questions.question_uuid"),
        nullable=False,
        index=True  # answers are always listed by question
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    # --- Relationships ---

    question: Mapped["Question"] = relationship(
        "Question",
        back_populates="answers"
    )

    def __repr__(self) -> str:
        return f"<Answer(answer_uuid={self.answer_uuid!r}, question_uuid={self.question_uuid!r})>"
