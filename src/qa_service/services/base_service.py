"""
DBError -> HandlerError translation shared by every service.

Mapping (must hold for every operation):

| DAO raises          | Service raises                                        |
| ------------------- | ----------------------------------------------------- |
| `InvalidUUIDError`  | `BadRequestError(detail)`                             |
| `OtherDBError`      | `InternalError("Something went wrong! Please try again.")` |

Every DBError is logged at ERROR with the operation name and the original error.
The real cause of an internal failure goes to the log only, never to the caller.
"""
import logging
from contextlib import contextmanager

from qa_service.exceptions.base import (
    DBError,
    InvalidUUIDError,
    BadRequestError,
    InternalError,
)

logger = logging.getLogger(__name__)


def to_handler_error(operation: str, err: DBError) -> BadRequestError | InternalError:
    """Log `err` and return the caller-visible error for it."""
    if isinstance(err, InvalidUUIDError):
        logger.error(
            "Error on %s: %s", operation, err.detail,
            extra={"operation": operation, "error": repr(err)},
        )
        return BadRequestError(err.detail)

    cause = getattr(err, "cause", None)
    logger.error(
        "Unexpected error found on %s: %r", operation, cause if cause is not None else err,
        exc_info=err,
        extra={"operation": operation, "error": repr(err)},
    )
    return InternalError.default()


@contextmanager
def translate_db_errors(operation: str):
    """
    Usage:
        with translate_db_errors("create_question"):
            return await self.store.create_question(question)
    """
    try:
        yield
    except DBError as err:
        raise to_handler_error(operation, err) from err
