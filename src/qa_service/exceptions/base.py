# qa_service/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # DBError (storage-level) and HandlerError (caller-visible) taxonomies
# │   ├── integrity_classifier.py    # SQL-level / DB-specific constraint classification
# │   └── mapper.py                  # Map SQL-level / DB-specific errors to DBError
"""
Error taxonomy shared by the repository (DAO) and service layers.

Two levels:
  - DBError: raised by DAOs. Exactly two variants:
      * InvalidUUIDError: malformed identifier, or an answer referencing a question
        that does not exist (foreign-key violation on answer creation).
      * OtherDBError: any other storage failure (connection loss, unexpected
        constraint violation, schema mismatch). Wraps the original cause.
  - HandlerError: raised by services, consumed by the HTTP layer.
      * BadRequestError: the caller's input was invalid.
      * InternalError: unexpected failure; always the same fixed message.
"""


# =================================================================================================================
# Storage-level errors (raised by DAOs)
# =================================================================================================================

class DBError(Exception):
    """Base exception for DAO errors."""


class InvalidUUIDError(DBError):
    """
    A supplied identifier is malformed, or a referenced identifier does not exist.

    - detail: human-friendly description built from what the caller supplied
    """

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class OtherDBError(DBError):
    """
    Any storage failure that is not an identifier problem.

    - cause: the original exception (also chained as __cause__ by the raiser)
    - operation: DAO operation name, for logs only
    """

    def __init__(self, cause: BaseException, *, operation: str | None = None):
        message = f"{operation} failed: {cause!r}" if operation else repr(cause)
        super().__init__(message)
        self.cause = cause
        self.operation = operation


# =================================================================================================================
# Caller-visible errors (raised by services)
# =================================================================================================================

DEFAULT_INTERNAL_ERROR_MESSAGE = "Something went wrong! Please try again."


class HandlerError(Exception):
    """
    Base exception for service errors.

    - message: message safe to show to clients
    - error_code: canonical short code used by clients
    """

    # Map canonical error_code -> HTTP status.
    ERROR_CODE_TO_STATUS = {
        "bad_request": 400,
        "internal_error": 500,
    }

    error_code: str = "internal_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and self.message == other.message

    def __hash__(self) -> int:
        return hash((type(self), self.message))

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict suitable for HTTP responses:
            {"detail": "...", "code": "bad_request"}
        """
        return {"detail": self.message, "code": self.error_code}

    def http_status(self) -> int:
        return self.ERROR_CODE_TO_STATUS.get(self.error_code, 500)


class BadRequestError(HandlerError):
    error_code = "bad_request"


class InternalError(HandlerError):
    error_code = "internal_error"

    def __init__(self, message: str = DEFAULT_INTERNAL_ERROR_MESSAGE):
        super().__init__(message)

    @classmethod
    def default(cls) -> "InternalError":
        return cls(DEFAULT_INTERNAL_ERROR_MESSAGE)


__all__ = [
    "DBError",
    "InvalidUUIDError",
    "OtherDBError",
    "HandlerError",
    "BadRequestError",
    "InternalError",
    "DEFAULT_INTERNAL_ERROR_MESSAGE",
]
