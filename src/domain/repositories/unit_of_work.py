"""Unit of Work protocol."""

from typing import Protocol

from domain.repositories.task_list_repository import ITaskListRepository
from domain.repositories.task_repository import ITaskRepository


class IUnitOfWork(Protocol):
    """Unit of Work interface for managing transactions."""

    tasks: ITaskRepository
    lists: ITaskListRepository

    async def commit(self) -> None:
        """Commit the current transaction.

        Raises ``PersistenceError`` if the store rejects the commit.
        """
        ...

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...
