"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.services.completion_undo import CompletionUndoSlot
from domain.services.task_list_service import TaskListService
from domain.services.task_service import TaskService
from domain.services.view_service import ViewService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_task_service() -> TaskService:
    """Get Task service instance (owns the process-wide undo slot)."""
    return TaskService(
        get_uow_factory(),
        undo_slot=CompletionUndoSlot(window_seconds=settings.undo_window_seconds),
    )


@lru_cache
def get_task_list_service() -> TaskListService:
    """Get TaskList service instance."""
    return TaskListService(get_uow_factory())


@lru_cache
def get_view_service() -> ViewService:
    """Get View service instance."""
    return ViewService(get_uow_factory(), max_depth=settings.max_display_depth)
