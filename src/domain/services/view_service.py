"""Screen views: filter the task collection and flatten it into rows."""

from collections.abc import Callable, Collection
from datetime import date
from uuid import UUID

from domain.entities.matrix import Quadrant, suggested_due_date
from domain.entities.screen import ScreenView
from domain.entities.task import Task, TaskRow
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services import view_filters as vf
from domain.services.flattener import DEFAULT_MAX_DEPTH, collect_done, flatten
from domain.services.task_tree import TaskTree


class ViewService:
    """Builds the rows for the home, calendar, matrix and not-done screens.

    Expansion state belongs to the caller and is passed in as a set of task
    ids; nothing here writes to the store.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        max_depth: int = DEFAULT_MAX_DEPTH,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._uow_factory = uow_factory
        self._max_depth = max_depth
        self._today = today

    async def home(
        self, list_id: UUID | None = None, expanded: Collection[UUID] = ()
    ) -> ScreenView:
        tree = await self._load_tree()
        roots = vf.home_tasks(tree.all(), list_id)
        sections = self._pinned_and_normal(roots, tree, expanded, vf.pending_child)
        return ScreenView(
            screen="home",
            sections=sections,
            meta={"list_id": str(list_id) if list_id else None},
        )

    async def calendar(
        self, day: date | None = None, expanded: Collection[UUID] = ()
    ) -> ScreenView:
        day = day or self._today()
        tree = await self._load_tree()
        pending, done = vf.calendar_tasks(tree.all(), day)

        sections = self._pinned_and_normal(
            vf.bucket_roots(pending), tree, expanded, vf.calendar_child(day)
        )
        sections["done"] = flatten(
            vf.bucket_roots(done),
            tree,
            expanded,
            self._max_depth,
            vf.calendar_child(day, completed=True),
        )
        return ScreenView(screen="calendar", sections=sections, meta={"day": day.isoformat()})

    async def matrix(self, quadrant: Quadrant, expanded: Collection[UUID] = ()) -> ScreenView:
        tree = await self._load_tree()
        members = vf.quadrant_tasks(tree.all(), quadrant)
        pending_roots = vf.bucket_roots(t for t in members if t.is_pending)

        sections = self._pinned_and_normal(pending_roots, tree, expanded, vf.pending_child)
        sections["done"] = collect_done(vf.bucket_roots(members), tree, self._max_depth)
        return ScreenView(
            screen="matrix",
            sections=sections,
            meta={
                "quadrant": quadrant.value,
                "priority": quadrant.priority.value,
                "suggested_due_date": suggested_due_date(quadrant, self._today()).isoformat(),
            },
        )

    async def matrix_overview(self) -> dict[Quadrant, list[Task]]:
        """Every quadrant's member tasks, for the four-cell summary."""
        tree = await self._load_tree()
        tasks = tree.all()
        return {quadrant: vf.quadrant_tasks(tasks, quadrant) for quadrant in Quadrant}

    async def not_done(self, expanded: Collection[UUID] = ()) -> ScreenView:
        tree = await self._load_tree()
        roots = vf.bucket_roots(vf.not_done_tasks(tree.all()))
        sections = self._pinned_and_normal(roots, tree, expanded, vf.is_not_done)
        return ScreenView(screen="not_done", sections=sections)

    async def _load_tree(self) -> TaskTree:
        async with self._uow_factory() as uow:
            return TaskTree(await uow.tasks.get_all())

    def _pinned_and_normal(
        self,
        roots: list[Task],
        tree: TaskTree,
        expanded: Collection[UUID],
        child_filter: vf.TaskPredicate,
    ) -> dict[str, list[TaskRow]]:
        pinned, normal = vf.split_pinned(roots)
        return {
            "pinned": flatten(pinned, tree, expanded, self._max_depth, child_filter),
            "normal": flatten(normal, tree, expanded, self._max_depth, child_filter),
        }
