"""
Engine and session-factory construction.

The engine owns the process-wide connection pool. It is created once at startup
(see `qa_service.main`) and the resulting `async_sessionmaker` is injected into the
repositories; nothing in this module keeps global state.
"""
import logging

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from qa_service.config.settings import Settings
from qa_service.database.base import Base

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores REFERENCES clauses unless this pragma is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine_from_url(url: str, *, echo: bool = False, **pool_options) -> AsyncEngine:
    """
    Create an AsyncEngine for `url`.

    Pool options are only passed to backends with a real connection pool;
    for SQLite, foreign-key enforcement is switched on for every connection.
    """
    is_sqlite = make_url(url).get_backend_name() == "sqlite"
    if is_sqlite:
        engine = create_async_engine(url, echo=echo)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    else:
        engine = create_async_engine(url, echo=echo, **pool_options)

    logger.debug("database.engine_created", extra={"backend": make_url(url).get_backend_name()})
    return engine


def build_engine(settings: Settings) -> AsyncEngine:
    return create_engine_from_url(
        settings.DATABASE_URL,
        echo=settings.SQLALCHEMY_ECHO,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_pre_ping=settings.DB_POOL_PRE_PING,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: repositories read server-generated columns after commit
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create `questions` and `answers` if they do not exist yet."""
    # Import models so they register with Base.metadata
    from qa_service import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("database.tables_ready", extra={"tables": sorted(Base.metadata.tables)})
