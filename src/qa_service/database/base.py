"""
Declarative base shared by the `questions` and `answers` tables.

The naming convention gives constraints stable names, so the foreign key from
answers to questions is reported as `fk_answers_question_uuid_questions` by
Postgres diagnostics (see exceptions/integrity_classifier.py).
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
