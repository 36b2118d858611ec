"""Shared fixtures for unit tests."""

from datetime import date
from typing import Any
from unittest.mock import AsyncMock

import pytest

from domain.entities.task import Task

TODAY = date(2025, 6, 1)


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.tasks = AsyncMock()
        self.lists = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


def make_chain(length: int, **fields: Any) -> list[Task]:
    """Tasks where each one is the parent of the next."""
    chain: list[Task] = []
    for i in range(length):
        parent_id = chain[-1].id if chain else None
        chain.append(Task(title=f"Level {i}", parent_id=parent_id, **fields))
    return chain


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def today() -> date:
    return TODAY
