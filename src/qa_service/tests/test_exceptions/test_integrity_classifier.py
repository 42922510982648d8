from types import SimpleNamespace

import pytest
from sqlalchemy.exc import IntegrityError

from qa_service.exceptions.integrity_classifier import (
    CheckConstraintError,
    ForeignKeyConstraintError,
    NotNullConstraintError,
    UniqueConstraintError,
    UnknownIntegrityError,
    classify_integrity_error,
)


class FakeDriverError(Exception):
    """Stands in for a DBAPI exception; attributes are set per test."""


def make_integrity_error(orig: BaseException) -> IntegrityError:
    return IntegrityError("INSERT INTO answers ...", {}, orig)


class TestClassifyFromSqlstate:

    @pytest.mark.parametrize(
        "code, expected",
        [
            ("23503", ForeignKeyConstraintError),
            ("23505", UniqueConstraintError),
            ("23502", NotNullConstraintError),
            ("23514", CheckConstraintError),
        ],
    )
    def test_pgcode(self, code, expected):
        orig = FakeDriverError("whatever the server said")
        orig.pgcode = code

        exc_cls, _ = classify_integrity_error(make_integrity_error(orig))

        assert exc_cls is expected

    def test_sqlstate_attribute(self):
        # psycopg 3 style
        orig = FakeDriverError("insert or update violates foreign key constraint")
        orig.sqlstate = "23503"

        exc_cls, _ = classify_integrity_error(make_integrity_error(orig))

        assert exc_cls is ForeignKeyConstraintError

    def test_sqlstate_on_chained_cause(self):
        """
        Behavior:
            - The adapter exception carries no code, but the driver exception chained
              as its __cause__ does (asyncpg under SQLAlchemy's adapter).
        """
        driver_error = FakeDriverError("driver")
        driver_error.sqlstate = "23503"
        driver_error.constraint_name = "fk_answers_question_uuid_questions"
        adapter_error = FakeDriverError("adapter")
        adapter_error.__cause__ = driver_error

        exc_cls, constraint = classify_integrity_error(make_integrity_error(adapter_error))

        assert exc_cls is ForeignKeyConstraintError
        assert constraint == "fk_answers_question_uuid_questions"

    def test_constraint_name_from_diag(self):
        orig = FakeDriverError("fk")
        orig.pgcode = "23503"
        orig.diag = SimpleNamespace(constraint_name="fk_answers_question_uuid_questions")

        _, constraint = classify_integrity_error(make_integrity_error(orig))

        assert constraint == "fk_answers_question_uuid_questions"

    def test_unknown_code(self):
        orig = FakeDriverError("exclusion")
        orig.pgcode = "23P01"

        exc_cls, _ = classify_integrity_error(make_integrity_error(orig))

        assert exc_cls is UnknownIntegrityError


class TestClassifyFromMessage:

    @pytest.mark.parametrize(
        "message, expected",
        [
            ("FOREIGN KEY constraint failed", ForeignKeyConstraintError),
            ('Key (question_uuid)=(...) is not present in table "questions".', ForeignKeyConstraintError),
            ("UNIQUE constraint failed: questions.question_uuid", UniqueConstraintError),
            ("NOT NULL constraint failed: answers.content", NotNullConstraintError),
            ("CHECK constraint failed: content_not_empty", CheckConstraintError),
            ("something else entirely", UnknownIntegrityError),
        ],
    )
    def test_sqlite_messages(self, message, expected):
        exc_cls, constraint = classify_integrity_error(make_integrity_error(Exception(message)))

        assert exc_cls is expected
        assert constraint is None
