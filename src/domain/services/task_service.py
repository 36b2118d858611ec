"""Task service layer with business logic."""

from collections.abc import Callable
from datetime import date, timedelta
from enum import StrEnum
from typing import cast
from uuid import UUID

import structlog

from core.exceptions import (
    CircularReferenceError,
    TaskListNotFoundError,
    TaskNotFoundError,
    UndoUnavailableError,
)
from domain.entities.matrix import Quadrant
from domain.entities.task import Priority, Task
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.completion_undo import CompletionUndoSlot
from domain.services.task_tree import TaskTree

logger = structlog.get_logger()


class TaskSort(StrEnum):
    """Orderings offered for the flat task listing."""

    STORE = "store"
    TITLE = "title"
    PRIORITY = "priority"


class RescheduleOption(StrEnum):
    """Quick reschedule choices; a picked date goes through reassign_due_date."""

    TODAY = "today"
    TOMORROW = "tomorrow"
    CLEAR = "clear"


class TaskService:
    """Service layer for Task business logic.

    Completing a task cascades down to every descendant. Un-completing a
    task walks up instead: the task and each completed ancestor above it
    are reopened, stopping at the first ancestor that is already open.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        undo_slot: CompletionUndoSlot | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._uow_factory = uow_factory
        self._undo = undo_slot or CompletionUndoSlot(window_seconds=3.0)
        self._today = today

    async def get_all(self, sort: TaskSort = TaskSort.STORE) -> list[Task]:
        """Get every task as a flat list."""
        async with self._uow_factory() as uow:
            tasks = await uow.tasks.get_all()

        if sort == TaskSort.TITLE:
            return sorted(tasks, key=lambda t: t.title)
        if sort == TaskSort.PRIORITY:
            return sorted(tasks, key=lambda t: (-t.priority.rank, t.title))
        return list(tasks)

    async def get_by_id(self, task_id: UUID) -> Task:
        async with self._uow_factory() as uow:
            return await self._get_task(uow, task_id)

    async def create_task(
        self,
        title: str,
        details: str = "",
        priority: Priority = Priority.NONE,
        list_id: UUID | None = None,
        parent_id: UUID | None = None,
        due_date: date | None = None,
        is_matrix_task: bool = False,
        is_pinned: bool = False,
        image_data: bytes | None = None,
    ) -> Task:
        """Create a new task. Title validation is left to the caller."""
        async with self._uow_factory() as uow:
            if parent_id:
                await self._get_task(uow, parent_id)
            if list_id:
                await self._get_list(uow, list_id)

            task = Task(
                title=title,
                details=details,
                priority=priority,
                list_id=list_id,
                parent_id=parent_id,
                due_date=due_date,
                is_matrix_task=is_matrix_task,
                is_pinned=is_pinned,
                image_data=image_data,
            )

            created = await uow.tasks.create(task)
            await uow.commit()

        logger.info(
            "task_created",
            task_id=str(created.id),
            parent_id=str(parent_id) if parent_id else None,
            is_matrix_task=is_matrix_task,
        )
        return created

    async def create_matrix_task(
        self,
        title: str,
        quadrant: Quadrant,
        due_date: date | None = None,
        parent_id: UUID | None = None,
        details: str = "",
    ) -> Task:
        """Create a task straight into a matrix quadrant, due today unless given."""
        return await self.create_task(
            title=title,
            details=details,
            priority=quadrant.priority,
            parent_id=parent_id,
            due_date=due_date or self._today(),
            is_matrix_task=True,
        )

    async def update(
        self,
        task_id: UUID,
        title: str | None = None,
        details: str | None = None,
        priority: Priority | None = None,
        is_pinned: bool | None = None,
        is_not_done: bool | None = None,
        is_matrix_task: bool | None = None,
        image_data: object = ...,  # Sentinel to detect explicit None
        due_date: object = ...,
        list_id: object = ...,
        parent_id: object = ...,
    ) -> Task:
        """Partially update a task. Reparenting is checked for cycles."""
        async with self._uow_factory() as uow:
            task = await self._get_task(uow, task_id)

            if parent_id is not ... and parent_id != task.parent_id:
                if parent_id is not None:
                    tree = TaskTree(await uow.tasks.get_all())
                    if cast(UUID, parent_id) not in tree:
                        raise TaskNotFoundError(str(parent_id))
                    if tree.would_create_cycle(task_id, cast(UUID, parent_id)):
                        raise CircularReferenceError("Cannot move task under its own subtask")
                task.parent_id = cast(UUID | None, parent_id)

            if list_id is not ... and list_id != task.list_id:
                if list_id is not None:
                    await self._get_list(uow, cast(UUID, list_id))
                task.list_id = cast(UUID | None, list_id)

            if title is not None:
                task.title = title
            if details is not None:
                task.details = details
            if priority is not None:
                task.priority = priority
            if is_pinned is not None:
                task.is_pinned = is_pinned
            if is_not_done is not None:
                task.is_not_done = is_not_done
            if is_matrix_task is not None:
                task.is_matrix_task = is_matrix_task
            if image_data is not ...:
                task.image_data = cast(bytes | None, image_data)
            if due_date is not ...:
                task.due_date = cast(date | None, due_date)

            task.touch()
            updated = await uow.tasks.update(task)
            await uow.commit()

        return updated

    async def set_completed(self, task_id: UUID, value: bool) -> Task:
        """Complete a task with its subtree, or reopen it with its ancestors."""
        async with self._uow_factory() as uow:
            tree = TaskTree(await uow.tasks.get_all())
            task = tree.get(task_id)
            if task is None:
                raise TaskNotFoundError(str(task_id))

            previous: dict[UUID, bool] = {}
            if value:
                changed = [t for t in tree.subtree(task_id) if not t.is_completed]
                previous = {t.id: t.is_completed for t in changed}
                for t in changed:
                    t.complete()
            else:
                changed = []
                for t in [task, *tree.ancestors(task_id)]:
                    if not t.is_completed:
                        break
                    t.uncomplete()
                    changed.append(t)

            if changed:
                await uow.tasks.update_many(changed)
                await uow.commit()

        if value:
            self._undo.record(previous)
        else:
            self._undo.clear()

        logger.info(
            "task_completed" if value else "task_reopened",
            task_id=str(task_id),
            changed_count=len(changed),
        )
        return task

    async def undo_last_completion(self) -> list[Task]:
        """Revert the most recent completion cascade while its window is open."""
        record = self._undo.peek()
        if record is None:
            raise UndoUnavailableError()

        async with self._uow_factory() as uow:
            tree = TaskTree(await uow.tasks.get_all())
            restored: list[Task] = []
            for task_id, was_completed in record.previous.items():
                task = tree.get(task_id)
                if task is None:
                    continue
                task.is_completed = was_completed
                task.touch()
                restored.append(task)

            if restored:
                await uow.tasks.update_many(restored)
                await uow.commit()

        self._undo.clear()
        logger.info("completion_undone", restored_count=len(restored))
        return restored

    async def toggle_pinned(self, task_id: UUID) -> Task:
        async with self._uow_factory() as uow:
            task = await self._get_task(uow, task_id)
            task.is_pinned = not task.is_pinned
            task.touch()
            updated = await uow.tasks.update(task)
            await uow.commit()
        return updated

    async def mark_not_done(self, task_id: UUID, value: bool = True) -> Task:
        """Flag a task as abandoned ("won't do"), or clear the flag."""
        async with self._uow_factory() as uow:
            task = await self._get_task(uow, task_id)
            task.is_not_done = value
            task.touch()
            updated = await uow.tasks.update(task)
            await uow.commit()
        return updated

    async def reassign_due_date(self, task_id: UUID, new_date: date | None) -> Task:
        async with self._uow_factory() as uow:
            task = await self._get_task(uow, task_id)
            task.due_date = new_date
            task.touch()
            updated = await uow.tasks.update(task)
            await uow.commit()

        logger.info(
            "task_rescheduled",
            task_id=str(task_id),
            due_date=new_date.isoformat() if new_date else None,
        )
        return updated

    async def reschedule(self, task_id: UUID, option: RescheduleOption) -> Task:
        today = self._today()
        new_date: date | None
        if option == RescheduleOption.TODAY:
            new_date = today
        elif option == RescheduleOption.TOMORROW:
            new_date = today + timedelta(days=1)
        else:
            new_date = None
        return await self.reassign_due_date(task_id, new_date)

    async def delete_task(self, task_id: UUID) -> list[UUID]:
        """Delete a task and all its descendants. Returns the deleted ids."""
        async with self._uow_factory() as uow:
            tree = TaskTree(await uow.tasks.get_all())
            if task_id not in tree:
                raise TaskNotFoundError(str(task_id))

            ids = [t.id for t in tree.subtree(task_id)]
            await uow.tasks.delete_many(ids)
            await uow.commit()

        logger.info("task_deleted", task_id=str(task_id), deleted_count=len(ids))
        return ids

    async def depth(self, task_id: UUID) -> int:
        async with self._uow_factory() as uow:
            tree = TaskTree(await uow.tasks.get_all())
        if task_id not in tree:
            raise TaskNotFoundError(str(task_id))
        return tree.depth(task_id)

    async def share_text(self, task_id: UUID) -> str:
        """Plain-text rendering handed to the platform share sheet."""
        task = await self.get_by_id(task_id)
        text = f"Task: {task.title}"
        if task.details:
            text += f"\nDetails: {task.details}"
        return text

    async def _get_task(self, uow: IUnitOfWork, task_id: UUID) -> Task:
        task = await uow.tasks.get(task_id)
        if not task:
            raise TaskNotFoundError(str(task_id))
        return task

    async def _get_list(self, uow: IUnitOfWork, list_id: UUID) -> None:
        if not await uow.lists.get(list_id):
            raise TaskListNotFoundError(str(list_id))
