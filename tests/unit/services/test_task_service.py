"""Unit tests for Task service layer."""

from datetime import date
from uuid import uuid4

import pytest

from core.exceptions import (
    CircularReferenceError,
    TaskListNotFoundError,
    TaskNotFoundError,
    UndoUnavailableError,
)
from domain.entities.matrix import Quadrant
from domain.entities.task import Priority, Task
from domain.entities.task_list import TaskList
from domain.services.completion_undo import CompletionUndoSlot
from domain.services.task_service import RescheduleOption, TaskService, TaskSort

# FakeUnitOfWork is provided by the shared conftest at tests/unit/conftest.py.
from tests.unit.conftest import TODAY, FakeUnitOfWork, make_chain


@pytest.fixture
def undo_slot() -> CompletionUndoSlot:
    return CompletionUndoSlot(window_seconds=60)


@pytest.fixture
def service(uow: FakeUnitOfWork, undo_slot: CompletionUndoSlot) -> TaskService:
    """Create service with fake UoW and a fixed today."""
    return TaskService(lambda: uow, undo_slot=undo_slot, today=lambda: TODAY)


def _updated_ids(uow: FakeUnitOfWork) -> set:
    (changed,) = uow.tasks.update_many.call_args.args
    return {t.id for t in changed}


class TestTaskServiceGetAll:
    @pytest.mark.asyncio
    async def test_store_order(self, service: TaskService, uow: FakeUnitOfWork) -> None:
        tasks = [Task(title="b"), Task(title="a")]
        uow.tasks.get_all.return_value = tasks

        result = await service.get_all()

        assert result == tasks

    @pytest.mark.asyncio
    async def test_sort_by_priority(self, service: TaskService, uow: FakeUnitOfWork) -> None:
        low = Task(title="low", priority=Priority.LOW)
        high = Task(title="high", priority=Priority.HIGH)
        none = Task(title="none")
        uow.tasks.get_all.return_value = [low, none, high]

        result = await service.get_all(TaskSort.PRIORITY)

        assert result == [high, low, none]

    @pytest.mark.asyncio
    async def test_sort_by_title(self, service: TaskService, uow: FakeUnitOfWork) -> None:
        uow.tasks.get_all.return_value = [Task(title="b"), Task(title="a")]

        result = await service.get_all(TaskSort.TITLE)

        assert [t.title for t in result] == ["a", "b"]


class TestTaskServiceGetById:
    @pytest.mark.asyncio
    async def test_raises_when_not_found(self, service: TaskService, uow: FakeUnitOfWork) -> None:
        uow.tasks.get.return_value = None

        with pytest.raises(TaskNotFoundError):
            await service.get_by_id(uuid4())


class TestTaskServiceCreate:
    @pytest.mark.asyncio
    async def test_creates_root_task(self, service: TaskService, uow: FakeUnitOfWork) -> None:
        uow.tasks.create.side_effect = lambda task: task

        result = await service.create_task(title="New Task")

        assert result.title == "New Task"
        assert result.parent_id is None
        assert not result.is_completed
        assert uow.committed

    @pytest.mark.asyncio
    async def test_creates_subtask(self, service: TaskService, uow: FakeUnitOfWork) -> None:
        parent = Task(title="Parent")
        uow.tasks.get.return_value = parent
        uow.tasks.create.side_effect = lambda task: task

        result = await service.create_task(title="Child", parent_id=parent.id)

        assert result.parent_id == parent.id
        uow.tasks.get.assert_called_once_with(parent.id)

    @pytest.mark.asyncio
    async def test_missing_parent_raises(self, service: TaskService, uow: FakeUnitOfWork) -> None:
        uow.tasks.get.return_value = None

        with pytest.raises(TaskNotFoundError):
            await service.create_task(title="Child", parent_id=uuid4())

        uow.tasks.create.assert_not_called()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_missing_list_raises(self, service: TaskService, uow: FakeUnitOfWork) -> None:
        uow.lists.get.return_value = None

        with pytest.raises(TaskListNotFoundError):
            await service.create_task(title="Listed", list_id=uuid4())

    @pytest.mark.asyncio
    async def test_create_in_list(self, service: TaskService, uow: FakeUnitOfWork) -> None:
        task_list = TaskList(title="Work")
        uow.lists.get.return_value = task_list
        uow.tasks.create.side_effect = lambda task: task

        result = await service.create_task(title="Listed", list_id=task_list.id)

        assert result.list_id == task_list.id

    @pytest.mark.asyncio
    async def test_matrix_task_defaults_due_today(
        self, service: TaskService, uow: FakeUnitOfWork
    ) -> None:
        uow.tasks.create.side_effect = lambda task: task

        result = await service.create_matrix_task("Call", Quadrant.NOT_URGENT_IMPORTANT)

        assert result.is_matrix_task
        assert result.priority == Priority.MEDIUM
        assert result.due_date == TODAY

    @pytest.mark.asyncio
    async def test_matrix_task_keeps_given_date(
        self, service: TaskService, uow: FakeUnitOfWork
    ) -> None:
        uow.tasks.create.side_effect = lambda task: task

        result = await service.create_matrix_task(
            "Call", Quadrant.URGENT_IMPORTANT, due_date=date(2025, 7, 1)
        )

        assert result.due_date == date(2025, 7, 1)


class TestTaskServiceUpdate:
    @pytest.mark.asyncio
    async def test_updates_given_fields_only(
        self, service: TaskService, uow: FakeUnitOfWork
    ) -> None:
        task = Task(title="Old", details="keep", due_date=TODAY)
        uow.tasks.get.return_value = task
        uow.tasks.update.side_effect = lambda t: t

        result = await service.update(task.id, title="New")

        assert result.title == "New"
        assert result.details == "keep"
        assert result.due_date == TODAY
        assert uow.committed

    @pytest.mark.asyncio
    async def test_explicit_none_clears_due_date(
        self, service: TaskService, uow: FakeUnitOfWork
    ) -> None:
        task = Task(title="Dated", due_date=TODAY)
        uow.tasks.get.return_value = task
        uow.tasks.update.side_effect = lambda t: t

        result = await service.update(task.id, due_date=None)

        assert result.due_date is None

    @pytest.mark.asyncio
    async def test_update_changes_refresh_id(
        self, service: TaskService, uow: FakeUnitOfWork
    ) -> None:
        task = Task(title="Old")
        before = task.refresh_id
        uow.tasks.get.return_value = task
        uow.tasks.update.side_effect = lambda t: t

        result = await service.update(task.id, details="more")

        assert result.refresh_id != before

    @pytest.mark.asyncio
    async def test_reparent_under_descendant_raises(
        self, service: TaskService, uow: FakeUnitOfWork
    ) -> None:
        chain = make_chain(3)
        uow.tasks.get.return_value = chain[0]
        uow.tasks.get_all.return_value = chain

        with pytest.raises(CircularReferenceError):
            await service.update(chain[0].id, parent_id=chain[2].id)

        assert not uow.committed

    @pytest.mark.asyncio
    async def test_reparent_to_unknown_parent_raises(
        self, service: TaskService, uow: FakeUnitOfWork
    ) -> None:
        task = Task(title="Task")
        uow.tasks.get.return_value = task
        uow.tasks.get_all.return_value = [task]

        with pytest.raises(TaskNotFoundError):
            await service.update(task.id, parent_id=uuid4())

    @pytest.mark.asyncio
    async def test_move_to_root(self, service: TaskService, uow: FakeUnitOfWork) -> None:
        chain = make_chain(2)
        uow.tasks.get.return_value = chain[1]
        uow.tasks.update.side_effect = lambda t: t

        result = await service.update(chain[1].id, parent_id=None)

        assert result.parent_id is None


class TestTaskServiceCompletion:
    @pytest.mark.asyncio
    async def test_completion_cascades_to_descendants(
        self, service: TaskService, uow: FakeUnitOfWork
    ) -> None:
        root = Task(title="Root")
        a = Task(title="A", parent_id=root.id)
        a1 = Task(title="A1", parent_id=a.id)
        other = Task(title="Other")
        uow.tasks.get_all.return_value = [root, a, a1, other]

        await service.set_completed(root.id, True)

        assert root.is_completed and a.is_completed and a1.is_completed
        assert not other.is_completed
        assert _updated_ids(uow) == {root.id, a.id, a1.id}
        assert uow.committed

    @pytest.mark.asyncio
    async def test_completing_completed_subtree_writes_nothing(
        self, service: TaskService, uow: FakeUnitOfWork
    ) -> None:
        chain = make_chain(2, is_completed=True)
        uow.tasks.get_all.return_value = chain

        await service.set_completed(chain[0].id, True)

        uow.tasks.update_many.assert_not_called()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_uncomplete_reopens_completed_ancestors(
        self, service: TaskService, uow: FakeUnitOfWork
    ) -> None:
        chain = make_chain(3, is_completed=True)
        uow.tasks.get_all.return_value = chain

        await service.set_completed(chain[2].id, False)

        assert not any(t.is_completed for t in chain)
        assert _updated_ids(uow) == {t.id for t in chain}

    @pytest.mark.asyncio
    async def test_uncomplete_stops_at_open_ancestor(
        self, service: TaskService, uow: FakeUnitOfWork
    ) -> None:
        chain = make_chain(4, is_completed=True)
        chain[1].is_completed = False
        uow.tasks.get_all.return_value = chain

        await service.set_completed(chain[3].id, False)

        assert chain[0].is_completed
        assert not chain[2].is_completed
        assert not chain[3].is_completed
        assert _updated_ids(uow) == {chain[2].id, chain[3].id}

    @pytest.mark.asyncio
    async def test_uncomplete_leaves_descendants(
        self, service: TaskService, uow: FakeUnitOfWork
    ) -> None:
        chain = make_chain(2, is_completed=True)
        uow.tasks.get_all.return_value = chain

        await service.set_completed(chain[0].id, False)

        assert chain[1].is_completed

    @pytest.mark.asyncio
    async def test_unknown_task_raises(self, service: TaskService, uow: FakeUnitOfWork) -> None:
        uow.tasks.get_all.return_value = []

        with pytest.raises(TaskNotFoundError):
            await service.set_completed(uuid4(), True)


class TestTaskServiceUndo:
    @pytest.mark.asyncio
    async def test_undo_restores_previous_flags(
        self, service: TaskService, uow: FakeUnitOfWork
    ) -> None:
        root = Task(title="Root")
        done_child = Task(title="Done", parent_id=root.id, is_completed=True)
        open_child = Task(title="Open", parent_id=root.id)
        uow.tasks.get_all.return_value = [root, done_child, open_child]

        await service.set_completed(root.id, True)
        restored = await service.undo_last_completion()

        assert {t.id for t in restored} == {root.id, open_child.id}
        assert not root.is_completed
        assert not open_child.is_completed
        assert done_child.is_completed

    @pytest.mark.asyncio
    async def test_undo_without_record_raises(self, service: TaskService) -> None:
        with pytest.raises(UndoUnavailableError):
            await service.undo_last_completion()

    @pytest.mark.asyncio
    async def test_undo_is_single_use(self, service: TaskService, uow: FakeUnitOfWork) -> None:
        task = Task(title="Task")
        uow.tasks.get_all.return_value = [task]

        await service.set_completed(task.id, True)
        await service.undo_last_completion()

        with pytest.raises(UndoUnavailableError):
            await service.undo_last_completion()

    @pytest.mark.asyncio
    async def test_uncomplete_clears_undo(self, service: TaskService, uow: FakeUnitOfWork) -> None:
        task = Task(title="Task")
        uow.tasks.get_all.return_value = [task]

        await service.set_completed(task.id, True)
        await service.set_completed(task.id, False)

        with pytest.raises(UndoUnavailableError):
            await service.undo_last_completion()


class TestTaskServiceFlags:
    @pytest.mark.asyncio
    async def test_toggle_pinned(self, service: TaskService, uow: FakeUnitOfWork) -> None:
        task = Task(title="Task")
        uow.tasks.get.return_value = task
        uow.tasks.update.side_effect = lambda t: t

        first = await service.toggle_pinned(task.id)
        assert first.is_pinned

        second = await service.toggle_pinned(task.id)
        assert not second.is_pinned

    @pytest.mark.asyncio
    async def test_mark_not_done(self, service: TaskService, uow: FakeUnitOfWork) -> None:
        task = Task(title="Task")
        uow.tasks.get.return_value = task
        uow.tasks.update.side_effect = lambda t: t

        result = await service.mark_not_done(task.id)

        assert result.is_not_done
        assert uow.committed


class TestTaskServiceReschedule:
    @pytest.mark.parametrize(
        ("option", "expected"),
        [
            (RescheduleOption.TODAY, date(2025, 6, 1)),
            (RescheduleOption.TOMORROW, date(2025, 6, 2)),
            (RescheduleOption.CLEAR, None),
        ],
    )
    @pytest.mark.asyncio
    async def test_reschedule_options(
        self,
        service: TaskService,
        uow: FakeUnitOfWork,
        option: RescheduleOption,
        expected: date | None,
    ) -> None:
        task = Task(title="Task", due_date=date(2025, 5, 20))
        uow.tasks.get.return_value = task
        uow.tasks.update.side_effect = lambda t: t

        result = await service.reschedule(task.id, option)

        assert result.due_date == expected

    @pytest.mark.asyncio
    async def test_reassign_to_picked_date(
        self, service: TaskService, uow: FakeUnitOfWork
    ) -> None:
        task = Task(title="Task")
        uow.tasks.get.return_value = task
        uow.tasks.update.side_effect = lambda t: t

        result = await service.reassign_due_date(task.id, date(2025, 12, 24))

        assert result.due_date == date(2025, 12, 24)


class TestTaskServiceDelete:
    @pytest.mark.asyncio
    async def test_deletes_whole_subtree(self, service: TaskService, uow: FakeUnitOfWork) -> None:
        root = Task(title="Root")
        a = Task(title="A", parent_id=root.id)
        a1 = Task(title="A1", parent_id=a.id)
        sibling = Task(title="Sibling")
        uow.tasks.get_all.return_value = [root, a, a1, sibling]

        deleted = await service.delete_task(root.id)

        assert set(deleted) == {root.id, a.id, a1.id}
        uow.tasks.delete_many.assert_called_once_with(deleted)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_delete_unknown_raises(self, service: TaskService, uow: FakeUnitOfWork) -> None:
        uow.tasks.get_all.return_value = []

        with pytest.raises(TaskNotFoundError):
            await service.delete_task(uuid4())

        uow.tasks.delete_many.assert_not_called()


class TestTaskServiceMisc:
    @pytest.mark.asyncio
    async def test_depth(self, service: TaskService, uow: FakeUnitOfWork) -> None:
        chain = make_chain(4)
        uow.tasks.get_all.return_value = chain

        assert await service.depth(chain[3].id) == 3

    @pytest.mark.asyncio
    async def test_share_text_with_details(
        self, service: TaskService, uow: FakeUnitOfWork
    ) -> None:
        uow.tasks.get.return_value = Task(title="Buy milk", details="2 litres")

        text = await service.share_text(uuid4())

        assert text == "Task: Buy milk\nDetails: 2 litres"

    @pytest.mark.asyncio
    async def test_share_text_without_details(
        self, service: TaskService, uow: FakeUnitOfWork
    ) -> None:
        uow.tasks.get.return_value = Task(title="Buy milk")

        assert await service.share_text(uuid4()) == "Task: Buy milk"
