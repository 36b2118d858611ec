"""TaskList repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.task_list import TaskList


class ITaskListRepository(Protocol):
    """Repository interface for TaskList entities."""

    async def get(self, id: UUID) -> TaskList | None:
        """Get a list by ID."""
        ...

    async def get_all(self) -> list[TaskList]:
        """Get all lists ordered by title."""
        ...

    async def create(self, task_list: TaskList) -> TaskList:
        """Create a new list."""
        ...

    async def update(self, task_list: TaskList) -> TaskList:
        """Update an existing list."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a list and return success status."""
        ...
