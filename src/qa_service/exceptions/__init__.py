from .base import (
    DBError,
    InvalidUUIDError,
    OtherDBError,
    HandlerError,
    BadRequestError,
    InternalError,
    DEFAULT_INTERNAL_ERROR_MESSAGE,
)

__all__ = [
    "DBError",
    "InvalidUUIDError",
    "OtherDBError",
    "HandlerError",
    "BadRequestError",
    "InternalError",
    "DEFAULT_INTERNAL_ERROR_MESSAGE",
]
