import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError

from .integrity_classifier import (
    classify_integrity_error,
    ForeignKeyConstraintError,
)
from .base import DBError, InvalidUUIDError, OtherDBError

logger = logging.getLogger(__name__)


# -----------------------
# Mapper
# -----------------------

def map_integrity_error(
    exc: IntegrityError,
    operation: str,
    *,
    model_name: str | None = None,
    invalid_reference_message: str | None = None,
) -> DBError:
    """
    Map a SQLAlchemy IntegrityError to a DBError (returned, not raised).

    Only a foreign-key violation with an `invalid_reference_message` becomes an
    InvalidUUIDError; every other integrity failure is an OtherDBError.
    """
    exc_cls, constraint_name = classify_integrity_error(exc)

    if exc_cls is ForeignKeyConstraintError and invalid_reference_message is not None:
        # Expected client-level scenario: the caller referenced an id that does not exist
        logger.info(
            "mapper.foreign_key_violation",
            extra={"operation": operation, "model": model_name, "constraint": constraint_name},
        )
        # Raw DB text stays at DEBUG; it never reaches the caller
        logger.debug(
            "mapper.foreign_key_violation_raw",
            extra={"operation": operation, "raw": str(exc.orig) if exc.orig is not None else str(exc)},
        )
        return InvalidUUIDError(invalid_reference_message)

    logger.warning(
        "mapper.integrity_error",
        extra={
            "operation": operation,
            "model": model_name,
            "constraint": constraint_name,
            "kind": exc_cls.__name__,
        },
    )
    return OtherDBError(exc, operation=operation)


# -----------------------
# Async context manager to DRY error handling in repositories
# -----------------------
@asynccontextmanager
async def db_error_handler(
    operation: str,
    model_name: str | None = None,
    *,
    invalid_reference_message: str | None = None,
):
    """
    Classify every storage failure raised inside the block exactly once.

    Usage:
        async with db_error_handler("create_answer", "Answer", invalid_reference_message=...):
            async with self.session_factory() as session, session.begin():
                ... one statement ...

    - DBError raised inside the block passes through untouched.
    - IntegrityError -> InvalidUUIDError (foreign key + invalid_reference_message) or OtherDBError.
    - Any other exception -> OtherDBError, logged with stack trace.

    Rollback is owned by the `session.begin()` block inside; nothing is retried.
    """
    try:
        yield
    except DBError:
        raise
    except IntegrityError as exc:
        raise map_integrity_error(
            exc,
            operation,
            model_name=model_name,
            invalid_reference_message=invalid_reference_message,
        ) from exc
    except Exception as exc:
        # Unexpected exceptions are logged with stack trace for diagnostics.
        logger.exception(
            "Unexpected DB error during %s", operation,
            extra={"operation": operation, "model": model_name},
        )
        raise OtherDBError(exc, operation=operation) from exc
