# qa_service/api/v1/error_handlers.py
"""
FastAPI exception handlers that map service-level errors to HTTP responses.

Services raise qa_service.exceptions.base.HandlerError subclasses:
    - BadRequestError -> 400, payload {"detail": <reason>, "code": "bad_request"}
    - InternalError   -> 500, payload {"detail": "Something went wrong! Please try again.", "code": "internal_error"}

The status and payload live on the exception classes (.http_status() / .to_payload());
the handlers here only render them.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import logging
from qa_service.exceptions.base import (
    HandlerError,
    BadRequestError,
    InternalError,
)

logger = logging.getLogger(__name__)


async def bad_request_handler(request: Request, exc: BadRequestError) -> JSONResponse:
    logger.info("BadRequestError for %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def internal_error_handler(request: Request, exc: InternalError) -> JSONResponse:
    # The cause was already logged with its traceback by the service layer
    logger.warning("InternalError for %s %s", request.method, request.url.path)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def handler_error_handler(request: Request, exc: HandlerError) -> JSONResponse:
    """Fallback for any other HandlerError subclass."""
    logger.warning("HandlerError for %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BadRequestError, bad_request_handler)
    app.add_exception_handler(InternalError, internal_error_handler)
    app.add_exception_handler(HandlerError, handler_error_handler)
