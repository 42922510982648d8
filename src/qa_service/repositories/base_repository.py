"""
Base repository class providing the statement helpers shared by the SQLAlchemy DAOs.

Each helper runs exactly one statement in its own short transaction:

    async with self.session_factory() as session, session.begin():
        ...

so every DAO operation is atomic on its own and nothing spans two operations.
All failures go through `db_error_handler`, which classifies them into
InvalidUUIDError / OtherDBError exactly once.

Unlike the abstract stores (`QuestionStore`, `AnswerStore`), `BaseRepository`
does not define the public operations; it only provides shared plumbing.
"""
from qa_service.exceptions.mapper import db_error_handler

import time
from typing import TypeVar, Generic, Type, Any
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy import select, delete
import logging

from qa_service.database.base import Base

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository over an async session factory.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, model: Type[ModelType], session_factory: async_sessionmaker[AsyncSession]):
        """
        Initialize the repository.

        Args:
            model: The SQLAlchemy model class (not an instance), used to build statements.
            session_factory: `async_sessionmaker` bound to the process-wide pooled engine.
                Created once at startup and shared by every repository.
        """
        self.model = model
        self.session_factory = session_factory

    @property
    def model_name(self) -> str:
        return self.model.__name__

    # =================================================================================================================
    # Create
    # =================================================================================================================

    async def _insert(
        self,
        operation: str,
        *,
        invalid_reference_message: str | None = None,
        **values: Any,
    ) -> ModelType:
        """
        INSERT one row and return it with server-generated columns populated.

        Logging:
        - DEBUG: start event with the provided keys (not values).
        - INFO: success event with the new primary key and duration_ms.
        """
        logger.debug(
            f"repo.{operation}.start",
            extra={
                "model": self.model_name,
                "operation": operation,
                "provided_keys": sorted(values.keys()),
            },
        )
        start = time.perf_counter()

        async with db_error_handler(operation, self.model_name, invalid_reference_message=invalid_reference_message):
            async with self.session_factory() as session, session.begin():
                entity = self.model(**values)
                session.add(entity)
                # flush sends the INSERT (constraint violations surface here);
                # refresh loads server defaults such as created_at
                await session.flush()
                await session.refresh(entity)

        logger.info(
            f"repo.{operation}.success",
            extra={
                "model": self.model_name,
                "operation": operation,
                "id": str(self._primary_key(entity)),
                "duration_ms": _elapsed_ms(start),
            },
        )
        return entity

    # =================================================================================================================
    # Read
    # =================================================================================================================

    async def _select_where(self, operation: str, *criteria) -> list[ModelType]:
        """
        SELECT every row matching `criteria` (all rows when none are given).

        No ORDER BY is applied: row order is whatever the database returns.
        """
        start = time.perf_counter()

        async with db_error_handler(operation, self.model_name):
            async with self.session_factory() as session, session.begin():
                query = select(self.model)
                if criteria:
                    query = query.where(*criteria)
                result = await session.execute(query)
                entities = list(result.scalars().all())

        logger.debug(
            f"repo.{operation}.success",
            extra={
                "model": self.model_name,
                "operation": operation,
                "count": len(entities),
                "duration_ms": _elapsed_ms(start),
            },
        )
        return entities

    # =================================================================================================================
    # Delete
    # =================================================================================================================

    async def _delete_where(self, operation: str, *criteria) -> int:
        """
        DELETE rows matching `criteria` and return how many were removed.

        Zero rows is not an error: deletes are idempotent, callers do not
        distinguish "not found" from "deleted".
        """
        start = time.perf_counter()

        async with db_error_handler(operation, self.model_name):
            async with self.session_factory() as session, session.begin():
                result = await session.execute(delete(self.model).where(*criteria))
                rowcount = result.rowcount

        if rowcount:
            logger.info(
                f"repo.{operation}.success",
                extra={
                    "model": self.model_name,
                    "operation": operation,
                    "rowcount": rowcount,
                    "duration_ms": _elapsed_ms(start),
                },
            )
        else:
            logger.debug(
                f"repo.{operation}.nothing_to_delete",
                extra={"model": self.model_name, "operation": operation},
            )
        return rowcount

    def _primary_key(self, entity: ModelType) -> Any:
        mapper = entity.__mapper__
        return mapper.primary_key_from_instance(entity)[0]
