r"""
Classification of SQLAlchemy IntegrityError into constraint kinds.

The classes below are internal tags ("what exactly failed in the database").
They are never raised to callers; `mapper.py` turns them into a DBError:

| Constraint-level (internal)  | → | DAO-level (external)                              |
| ---------------------------- | - | ------------------------------------------------- |
| `ForeignKeyConstraintError`  | → | `InvalidUUIDError` (answer creation only)         |
| anything else                | → | `OtherDBError`                                    |

Postgres reports a SQLSTATE code, which is the reliable signal. The location of that
code depends on the driver:
    - psycopg2 and SQLAlchemy's asyncpg adapter: `orig.pgcode`
    - psycopg 3: `orig.sqlstate`
    - asyncpg itself (chained under the adapter): `orig.__cause__.sqlstate`
Other backends (SQLite in tests, MySQL) only give a message, so we fall back to keywords.
"""
import logging
from enum import Enum
from typing import Type
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)

# =================================================================================================================
# Constraint-specific tags
# =================================================================================================================


class ConstraintViolationError(Exception):
    """Base for integrity/constraint violation tags."""
    pass


class UniqueConstraintError(ConstraintViolationError):
    """Unique constraint / duplicate value."""
    pass


class NotNullConstraintError(ConstraintViolationError):
    """NOT NULL violation (missing required field)."""
    pass


class ForeignKeyConstraintError(ConstraintViolationError):
    """Foreign key constraint violated."""
    pass


class CheckConstraintError(ConstraintViolationError):
    """CHECK constraint violated."""
    pass


class UnknownIntegrityError(ConstraintViolationError):
    """Unrecognized integrity error."""
    pass


# =================================================================================================================
# Postgres error code mapping
# =================================================================================================================

# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    UNIQUE_VIOLATION = "23505"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    CHECK_VIOLATION = "23514"


PGCODE_EXCEPTION_MAP = {
    PostgresErrorCodes.UNIQUE_VIOLATION.value: UniqueConstraintError,
    PostgresErrorCodes.NOT_NULL_VIOLATION.value: NotNullConstraintError,
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION.value: ForeignKeyConstraintError,
    PostgresErrorCodes.CHECK_VIOLATION.value: CheckConstraintError,
}


# =================================================================================================================
# Integrity Error Classifiers
# =================================================================================================================

def _match_any(msg: str, keywords: list[str]) -> bool:
    return any(keyword in msg for keyword in keywords)


def _extract_sqlstate(orig) -> str | None:
    """Return the Postgres SQLSTATE carried by a DBAPI error, whichever driver raised it."""
    for candidate in (orig, getattr(orig, "__cause__", None)):
        if candidate is None:
            continue
        code = getattr(candidate, "pgcode", None) or getattr(candidate, "sqlstate", None)
        if code:
            return str(code)
    return None


def _extract_constraint_name(orig) -> str | None:
    diag = getattr(orig, "diag", None)
    if diag is not None and getattr(diag, "constraint_name", None):
        return diag.constraint_name
    cause = getattr(orig, "__cause__", None)
    return getattr(orig, "constraint_name", None) or getattr(cause, "constraint_name", None)


def _classify_from_postgres_diag(orig) -> tuple[Type[ConstraintViolationError] | None, str | None]:
    """
    Classify Postgres integrity error based on SQLSTATE and diagnostics.
    """
    sqlstate = _extract_sqlstate(orig)
    if not sqlstate:
        return None, None

    constraint_name = _extract_constraint_name(orig)
    exception_class = PGCODE_EXCEPTION_MAP.get(sqlstate)

    if exception_class:
        logger.debug(
            "Postgres integrity diagnostic",
            extra={"pgcode": sqlstate, "constraint_name": constraint_name},
        )
        return exception_class, constraint_name

    logger.warning(
        "Unknown Postgres integrity error code encountered",
        extra={"pgcode": sqlstate, "constraint_name": constraint_name},
    )
    return UnknownIntegrityError, constraint_name


def _classify_from_generic_message(msg: str) -> tuple[Type[ConstraintViolationError], None]:
    """
    Classify integrity error based on message content (fallback for SQLite, MySQL, etc).
    """
    normalized = msg.lower()

    if _match_any(normalized, ["foreign key constraint", "foreign key", "is not present in table"]):
        return ForeignKeyConstraintError, None

    if _match_any(normalized, ["unique constraint", "unique failed", "unique violation", "duplicate"]):
        return UniqueConstraintError, None

    if _match_any(normalized, ["not null constraint", "not null", "null value in column"]):
        return NotNullConstraintError, None

    if _match_any(normalized, ["check constraint", "check failed"]):
        return CheckConstraintError, None

    logger.warning("Unknown integrity error message encountered", extra={"message_snippet": (msg or "")[:200]})
    return UnknownIntegrityError, None


def classify_integrity_error(exc: IntegrityError) -> tuple[Type[ConstraintViolationError], str | None]:
    """
    Classify a SQLAlchemy IntegrityError into a ConstraintViolationError subclass.

    Returns:
        A tuple of (ExceptionClass, constraint_name if available)
    """
    orig = exc.orig

    # Prefer the SQLSTATE code when the driver exposes one
    exception_class, constraint_name = _classify_from_postgres_diag(orig)
    if exception_class is not None:
        return exception_class, constraint_name

    return _classify_from_generic_message(str(orig) if orig is not None else str(exc))
