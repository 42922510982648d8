"""
Application factory.

Run with:
    uvicorn qa_service.main:create_app --factory
or the `qa-service` console script.
"""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from qa_service.api.v1 import answers, questions
from qa_service.api.v1.error_handlers import register_exception_handlers
from qa_service.config.settings import Settings, get_settings
from qa_service.core.logging import RequestIDMiddleware, setup_logging, stop_queue_logging
from qa_service.database.session import build_engine, build_session_factory, create_tables

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One engine (and connection pool) per process, shared by every request.
    settings: Settings = app.state.settings
    engine = build_engine(settings)
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    try:
        if settings.DB_CREATE_TABLES:
            await create_tables(engine)
        logger.info("app.started", extra={"env": settings.ENV})
        yield
    finally:
        await engine.dispose()
        logger.info("app.stopped")
        stop_queue_logging()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(title="qa-service", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    # Added last so it runs first and every log line (CORS included) has a request id
    app.add_middleware(RequestIDMiddleware)

    app.include_router(questions.router, tags=["questions"])
    app.include_router(answers.router, tags=["answers"])

    register_exception_handlers(app)
    return app


def run() -> None:
    import uvicorn

    uvicorn.run("qa_service.main:create_app", factory=True, host="0.0.0.0", port=8000)
