"""SQLAlchemy implementation of Task repository."""

from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.task import Priority, Task
from infrastructure.database.models import TaskModel


class SQLAlchemyTaskRepository:
    """SQLAlchemy implementation of ITaskRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Task | None:
        """Get a task by ID."""
        stmt = select(TaskModel).where(TaskModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Task]:
        """Get every task in insertion order."""
        stmt = select(TaskModel).order_by(TaskModel.seq, TaskModel.created_at)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_for_list(self, list_id: UUID) -> list[Task]:
        """Get all tasks that belong to a list."""
        stmt = (
            select(TaskModel)
            .where(TaskModel.list_id == list_id)
            .order_by(TaskModel.seq)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, task: Task) -> Task:
        """Create a new task at the end of the store order."""
        next_seq = await self._session.scalar(select(func.coalesce(func.max(TaskModel.seq), 0)))
        model = self._to_model(task)
        model.seq = (next_seq or 0) + 1
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, task: Task) -> Task:
        """Update an existing task."""
        stmt = select(TaskModel).where(TaskModel.id == task.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Task {task.id} not found")

        self._apply(model, task)
        await self._session.flush()
        return self._to_entity(model)

    async def update_many(self, tasks: list[Task]) -> None:
        """Write back several tasks in one round trip."""
        if not tasks:
            return
        by_id = {t.id: t for t in tasks}
        stmt = select(TaskModel).where(TaskModel.id.in_(list(by_id)))
        result = await self._session.execute(stmt)
        for model in result.scalars():
            self._apply(model, by_id[model.id])
        await self._session.flush()

    async def delete_many(self, ids: list[UUID]) -> int:
        """Delete exactly the given tasks; callers pass the whole subtree."""
        if not ids:
            return 0
        stmt = delete(TaskModel).where(TaskModel.id.in_(ids))
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount or 0  # type: ignore[attr-defined]

    def _apply(self, model: TaskModel, entity: Task) -> None:
        """Copy mutable entity fields onto the ORM model."""
        model.parent_id = entity.parent_id
        model.list_id = entity.list_id
        model.title = entity.title
        model.details = entity.details
        model.is_completed = entity.is_completed
        model.is_not_done = entity.is_not_done
        model.priority = entity.priority.value
        model.is_pinned = entity.is_pinned
        model.image_data = entity.image_data
        model.due_date = entity.due_date
        model.is_matrix_task = entity.is_matrix_task
        model.refresh_id = entity.refresh_id
        model.updated_at = entity.updated_at

    def _to_entity(self, model: TaskModel) -> Task:
        """Convert ORM model to domain entity."""
        return Task(
            id=model.id,
            parent_id=model.parent_id,
            list_id=model.list_id,
            title=model.title,
            details=model.details,
            is_completed=model.is_completed,
            is_not_done=model.is_not_done,
            priority=Priority(model.priority),
            is_pinned=model.is_pinned,
            image_data=model.image_data,
            due_date=model.due_date,
            is_matrix_task=model.is_matrix_task,
            refresh_id=model.refresh_id,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Task) -> TaskModel:
        """Convert domain entity to ORM model."""
        return TaskModel(
            id=entity.id,
            parent_id=entity.parent_id,
            list_id=entity.list_id,
            title=entity.title,
            details=entity.details,
            is_completed=entity.is_completed,
            is_not_done=entity.is_not_done,
            priority=entity.priority.value,
            is_pinned=entity.is_pinned,
            image_data=entity.image_data,
            due_date=entity.due_date,
            is_matrix_task=entity.is_matrix_task,
            refresh_id=entity.refresh_id,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
