"""Predicates deciding which tasks each screen shows.

Everything here is read-only; callers pass the full task collection and the
screen's selectors.
"""

from collections.abc import Callable, Iterable
from datetime import date
from uuid import UUID

from domain.entities.matrix import Quadrant
from domain.entities.task import Task

TaskPredicate = Callable[[Task], bool]


def is_home_root(task: Task, list_id: UUID | None = None) -> bool:
    """Undated, unfinished, non-matrix root in the selected list (or no list)."""
    return (
        task.is_root
        and not task.is_completed
        and not task.is_not_done
        and task.due_date is None
        and not task.is_matrix_task
        and task.list_id == list_id
    )


def is_on_day(task: Task, day: date) -> bool:
    """Calendar membership, regardless of completion."""
    return task.due_date == day and not task.is_not_done and not task.is_matrix_task


def in_quadrant(task: Task, quadrant: Quadrant) -> bool:
    return (
        task.is_matrix_task
        and not task.is_not_done
        and task.due_date is not None
        and task.priority == quadrant.priority
    )


def is_not_done(task: Task) -> bool:
    return task.is_not_done


def home_tasks(tasks: Iterable[Task], list_id: UUID | None = None) -> list[Task]:
    """Home screen roots sorted by title."""
    return sorted((t for t in tasks if is_home_root(t, list_id)), key=lambda t: t.title)


def calendar_tasks(tasks: Iterable[Task], day: date) -> tuple[list[Task], list[Task]]:
    """Tasks due on ``day`` split into (pending, done)."""
    pending: list[Task] = []
    done: list[Task] = []
    for task in tasks:
        if not is_on_day(task, day):
            continue
        if task.is_completed:
            done.append(task)
        else:
            pending.append(task)
    return pending, done


def quadrant_tasks(tasks: Iterable[Task], quadrant: Quadrant) -> list[Task]:
    return [t for t in tasks if in_quadrant(t, quadrant)]


def not_done_tasks(tasks: Iterable[Task]) -> list[Task]:
    return [t for t in tasks if is_not_done(t)]


def split_pinned(tasks: Iterable[Task]) -> tuple[list[Task], list[Task]]:
    """Partition into (pinned, normal), keeping order."""
    pinned: list[Task] = []
    normal: list[Task] = []
    for task in tasks:
        (pinned if task.is_pinned else normal).append(task)
    return pinned, normal


def bucket_roots(tasks: Iterable[Task]) -> list[Task]:
    """Members whose parent is not itself a member.

    A subtask that matches the same screen is reached through its parent
    instead of being listed twice.
    """
    members = list(tasks)
    member_ids = {t.id for t in members}
    return [t for t in members if t.parent_id not in member_ids]


# Child filters applied while flattening


def pending_child(task: Task) -> bool:
    return task.is_pending


def calendar_child(day: date, completed: bool = False) -> TaskPredicate:
    """Children shown under a calendar root in the pending or done section.

    Undated children follow their parent. A child due on ``day`` is itself a
    calendar member, so it only appears in the section matching its own
    completion.
    """

    def _include(task: Task) -> bool:
        if task.is_not_done:
            return False
        if task.due_date is None:
            return True
        return task.due_date == day and task.is_completed == completed

    return _include
