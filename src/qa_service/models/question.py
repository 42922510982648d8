from sqlalchemy import DateTime, Text, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from datetime import datetime
from qa_service.database.base import Base
import uuid
from typing import TYPE_CHECKING

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .answer import Answer


class Question(Base):
    """
    SQLAlchemy model for a Question.

    A question is created once and never updated; it is removed only by an explicit delete.
    """
    __tablename__ = "questions"

    # Primary key: UUID assigned at insert time, never reused
    question_uuid: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False
    )

    # Set by the database clock on insert
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    # --- Relationships ---

    # One-to-Many. No cascade: deleting a question with answers is rejected by the FK.
    answers: Mapped[list["Answer"]] = relationship(
        "Answer",
        back_populates="question",
        lazy="select",
        passive_deletes="all",
    )

    def __repr__(self) -> str:
        return f"<Question(question_uuid={self.question_uuid!r}, title={self.title!r})>"
