"""Turn task subtrees into indented display rows."""

from collections.abc import Collection, Iterable
from uuid import UUID

from domain.entities.task import Task, TaskRow
from domain.services.task_tree import TaskTree
from domain.services.view_filters import TaskPredicate

DEFAULT_MAX_DEPTH = 5


def flatten(
    roots: Iterable[Task],
    tree: TaskTree,
    expanded: Collection[UUID],
    max_depth: int = DEFAULT_MAX_DEPTH,
    child_filter: TaskPredicate | None = None,
) -> list[TaskRow]:
    """Depth-first, pre-order rows for each root in the given order.

    Every visited task yields a row. Descent stops at ``max_depth`` or at a
    task whose id is not in ``expanded``. Children keep store order and are
    skipped when ``child_filter`` rejects them.
    """
    rows: list[TaskRow] = []
    for root in roots:
        stack: list[tuple[Task, int]] = [(root, 0)]
        while stack:
            task, level = stack.pop()
            rows.append(TaskRow(task=task, level=level))

            if level >= max_depth or task.id not in expanded:
                continue

            children = tree.children(task.id)
            if child_filter is not None:
                children = [c for c in children if child_filter(c)]
            stack.extend((child, level + 1) for child in reversed(children))
    return rows


def collect_done(
    roots: Iterable[Task],
    tree: TaskTree,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[TaskRow]:
    """Completed (and not abandoned) tasks anywhere under the roots.

    Expansion state is ignored; the whole subtree down to ``max_depth`` is
    searched and each hit keeps the level it sits at.
    """
    rows: list[TaskRow] = []
    for root in roots:
        stack: list[tuple[Task, int]] = [(root, 0)]
        while stack:
            task, level = stack.pop()
            if task.is_completed and not task.is_not_done:
                rows.append(TaskRow(task=task, level=level))
            if level >= max_depth:
                continue
            stack.extend((child, level + 1) for child in reversed(tree.children(task.id)))
    return rows
