"""Task repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.task import Task


class ITaskRepository(Protocol):
    """Repository interface for Task entities."""

    async def get(self, id: UUID) -> Task | None:
        """Get a task by ID."""
        ...

    async def get_all(self) -> list[Task]:
        """Get every task in store order (flat list for tree assembly)."""
        ...

    async def get_for_list(self, list_id: UUID) -> list[Task]:
        """Get all tasks whose list is ``list_id``."""
        ...

    async def create(self, task: Task) -> Task:
        """Create a new task."""
        ...

    async def update(self, task: Task) -> Task:
        """Update an existing task."""
        ...

    async def update_many(self, tasks: list[Task]) -> None:
        """Persist field changes for several tasks."""
        ...

    async def delete_many(self, ids: list[UUID]) -> int:
        """Delete the given tasks and return how many were removed."""
        ...
