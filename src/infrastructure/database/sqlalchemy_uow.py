"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.exceptions import PersistenceError
from infrastructure.database.repositories.sqlalchemy_task_list_repo import (
    SQLAlchemyTaskListRepository,
)
from infrastructure.database.repositories.sqlalchemy_task_repo import SQLAlchemyTaskRepository

logger = structlog.get_logger()


class SQLAlchemyUnitOfWork:
    """Unit of Work implementation using SQLAlchemy."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

    @property
    def tasks(self) -> SQLAlchemyTaskRepository:
        """Get task repository."""
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return SQLAlchemyTaskRepository(self._session)

    @property
    def lists(self) -> SQLAlchemyTaskListRepository:
        """Get task list repository."""
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return SQLAlchemyTaskListRepository(self._session)

    async def commit(self) -> None:
        """Commit the current transaction.

        A failed commit is rolled back and reported as PersistenceError.
        """
        if not self._session:
            return
        try:
            await self._session.commit()
        except SQLAlchemyError as e:
            logger.error("commit_failed", error=str(e), error_type=type(e).__name__)
            await self.rollback()
            raise PersistenceError() from e

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        if self._session:
            await self._session.rollback()

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        """Enter the context manager and create session."""
        self._session = self._session_factory()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Any,
    ) -> None:
        """Exit the context manager and cleanup."""
        if self._session:
            if exc_type:
                await self.rollback()
            await self._session.close()
            self._session = None
