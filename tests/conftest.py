"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Callable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from infrastructure.database.models import Base
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

# Test database URL (SQLite in memory, one shared connection)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with all tables."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """Unit of Work factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
async def client(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client wired to the in-memory database.

    Service dependencies are overridden so every request goes through a
    Unit of Work on the test engine.
    """
    from api.v1.dependencies import (
        get_task_list_service,
        get_task_service,
        get_view_service,
    )
    from domain.services.completion_undo import CompletionUndoSlot
    from domain.services.task_list_service import TaskListService
    from domain.services.task_service import TaskService
    from domain.services.view_service import ViewService
    from infrastructure.database.session import get_async_session
    from main import create_app

    app = create_app(with_lifespan=False)

    task_service = TaskService(uow_factory, undo_slot=CompletionUndoSlot(window_seconds=60))
    list_service = TaskListService(uow_factory)
    view_service = ViewService(uow_factory)

    app.dependency_overrides[get_task_service] = lambda: task_service
    app.dependency_overrides[get_task_list_service] = lambda: list_service
    app.dependency_overrides[get_view_service] = lambda: view_service

    async def _session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = _session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
