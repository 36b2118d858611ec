"""SQLAlchemy implementation of TaskList repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.task_list import TaskList
from infrastructure.database.models import TaskListModel


class SQLAlchemyTaskListRepository:
    """SQLAlchemy implementation of ITaskListRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> TaskList | None:
        stmt = select(TaskListModel).where(TaskListModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[TaskList]:
        stmt = select(TaskListModel).order_by(TaskListModel.title, TaskListModel.created_at)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, task_list: TaskList) -> TaskList:
        model = TaskListModel(
            id=task_list.id,
            title=task_list.title,
            created_at=task_list.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, task_list: TaskList) -> TaskList:
        stmt = select(TaskListModel).where(TaskListModel.id == task_list.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"List {task_list.id} not found")

        model.title = task_list.title
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        stmt = select(TaskListModel).where(TaskListModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    def _to_entity(self, model: TaskListModel) -> TaskList:
        return TaskList(id=model.id, title=model.title, created_at=model.created_at)
