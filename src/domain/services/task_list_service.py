"""TaskList service layer with business logic."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import TaskListNotFoundError
from domain.entities.task_list import TaskList
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.task_tree import TaskTree

logger = structlog.get_logger()


class TaskListService:
    """Service layer for TaskList business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_all(self) -> list[TaskList]:
        async with self._uow_factory() as uow:
            return await uow.lists.get_all()  # type: ignore[no-any-return]

    async def get_by_id(self, list_id: UUID) -> TaskList:
        async with self._uow_factory() as uow:
            task_list = await uow.lists.get(list_id)
            if not task_list:
                raise TaskListNotFoundError(str(list_id))
            return task_list

    async def create(self, title: str) -> TaskList:
        async with self._uow_factory() as uow:
            created = await uow.lists.create(TaskList(title=title))
            await uow.commit()
        return created

    async def rename(self, list_id: UUID, title: str) -> TaskList:
        async with self._uow_factory() as uow:
            task_list = await uow.lists.get(list_id)
            if not task_list:
                raise TaskListNotFoundError(str(list_id))

            task_list.title = title
            updated = await uow.lists.update(task_list)
            await uow.commit()
        return updated

    async def delete(self, list_id: UUID) -> int:
        """Delete a list together with its tasks and their subtasks.

        Returns the number of tasks removed.
        """
        async with self._uow_factory() as uow:
            if not await uow.lists.get(list_id):
                raise TaskListNotFoundError(str(list_id))

            tree = TaskTree(await uow.tasks.get_all())
            ids: dict[UUID, None] = {}
            for member in await uow.tasks.get_for_list(list_id):
                for task in tree.subtree(member.id):
                    ids[task.id] = None

            deleted = await uow.tasks.delete_many(list(ids)) if ids else 0
            await uow.lists.delete(list_id)
            await uow.commit()

        logger.info("list_deleted", list_id=str(list_id), deleted_tasks=deleted)
        return deleted  # type: ignore[no-any-return]
