"""
Core pytest configuration for the entire test suite.

This module provides only the database setup and logging installation needed across
ALL types of tests (repositories, services, API, logging).

Domain-specific fixtures are located in:
- tests/test_fixtures/repository_fixtures.py  (SQLAlchemy repositories + sample data)
- tests/test_fixtures/store_fixtures.py       (store mocks and in-memory stores for service/API tests)
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import os
import logging
from pathlib import Path
from urllib.parse import urlparse
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Keep this block above the qa_service imports so collection is not flooded by
# Faker / SQLAlchemy / asyncio debug output.
NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
    "urllib3",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from qa_service.config.settings import get_settings
from qa_service.core.logging.builder import setup_logging
from qa_service.database.base import Base
from qa_service.database.session import build_session_factory, create_engine_from_url, create_tables

# -------------------------------
# Load settings
# -------------------------------
settings = get_settings()
logger = logging.getLogger(__name__)


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install application logging for the entire test session.

    - Calls `setup_logging(settings)` so tests run with the same formatters, handlers and
      filters (request_id, redact) the service uses.
    - pytest re-attaches its capture handler to the root logger for every test phase,
      so `caplog.records` keeps working after dictConfig replaced the root handlers.
    """
    setup_logging(settings)
    yield


# ------------------------------------------------------------------------------------------------
# Determining the Test Database URL
# ------------------------------------------------------------------------------------------------


def safe_log_db_url(db_url: str) -> str:
    """
    Return the database URL without credentials, for logging.

    Keeps scheme, host, port and database name.
    """
    parsed = urlparse(db_url)
    return f"{parsed.scheme}://{parsed.hostname or ''}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


def get_test_database_url(tmp_path: Path) -> str:
    """
    Determine the test database URL.

    1. `TEST_DATABASE_URL` environment variable (CI/CD, e.g. a throwaway PostgreSQL database)
    2. App's `DATABASE_URL` when `TESTING=true` and `TEST_POSTGRES_DB` is set
    3. A fresh SQLite file under the test's tmp_path (no server needed)
    """
    if test_url := os.getenv("TEST_DATABASE_URL"):
        return test_url

    if settings.TESTING and settings.TEST_POSTGRES_DB:
        return settings.DATABASE_URL

    return f"sqlite+aiosqlite:///{tmp_path / 'test_database.db'}"


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
async def async_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """
    Engine with freshly created `questions` / `answers` tables.

    Repositories commit their own transactions, so isolation comes from a new database
    (SQLite) or from dropping the tables at teardown (PostgreSQL), not from rollbacks.
    """
    url = get_test_database_url(tmp_path)
    logger.debug("Using test DB: %s", safe_log_db_url(url))

    engine = create_engine_from_url(url)
    await create_tables(engine)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture()
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_session_factory(async_engine)


# Repository / store fixtures, registered globally
from .test_fixtures.repository_fixtures import (  # noqa: E402
    question_repository,
    answer_repository,
    sample_question,
    sample_answer_content,
    create_question,
    created_question,
    multiple_questions,
    create_answer,
)
from .test_fixtures.store_fixtures import (  # noqa: E402
    question_store_mock,
    answer_store_mock,
    memory_storage,
    memory_question_store,
    memory_answer_store,
)
