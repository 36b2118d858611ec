"""In-memory index over a flat task collection.

The store keeps only ``parent_id``; children are derived here so the two
directions of the relationship can never disagree.
"""

from collections.abc import Iterable
from uuid import UUID

from domain.entities.task import Task


class TaskTree:
    """Arena of tasks keyed by id with derived parent/child lookups."""

    def __init__(self, tasks: Iterable[Task]) -> None:
        self._tasks: dict[UUID, Task] = {}
        self._children: dict[UUID, list[UUID]] = {}
        for task in tasks:
            self._tasks[task.id] = task
        # Second pass so children keep store order regardless of parent position
        for task in self._tasks.values():
            if task.parent_id is not None and task.parent_id in self._tasks:
                self._children.setdefault(task.parent_id, []).append(task.id)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    def get(self, task_id: UUID) -> Task | None:
        return self._tasks.get(task_id)

    def all(self) -> list[Task]:
        return list(self._tasks.values())

    def children(self, task_id: UUID) -> list[Task]:
        """Direct subtasks of ``task_id`` in store order."""
        return [self._tasks[child_id] for child_id in self._children.get(task_id, [])]

    def descendants(self, task_id: UUID) -> list[Task]:
        """Every task below ``task_id``, each visited once."""
        result: list[Task] = []
        seen: set[UUID] = {task_id}
        stack = list(reversed(self._children.get(task_id, [])))
        while stack:
            current_id = stack.pop()
            if current_id in seen:
                continue
            seen.add(current_id)
            result.append(self._tasks[current_id])
            stack.extend(reversed(self._children.get(current_id, [])))
        return result

    def subtree(self, task_id: UUID) -> list[Task]:
        """The task itself followed by its descendants."""
        task = self._tasks.get(task_id)
        if task is None:
            return []
        return [task, *self.descendants(task_id)]

    def ancestors(self, task_id: UUID) -> list[Task]:
        """Parent, grandparent, ... up to the root."""
        result: list[Task] = []
        seen: set[UUID] = {task_id}
        task = self._tasks.get(task_id)
        current_id = task.parent_id if task else None

        while current_id is not None and current_id not in seen:
            parent = self._tasks.get(current_id)
            if parent is None:
                break
            seen.add(current_id)
            result.append(parent)
            current_id = parent.parent_id

        return result

    def depth(self, task_id: UUID) -> int:
        """Number of ancestors; 0 for a root."""
        return len(self.ancestors(task_id))

    def would_create_cycle(self, task_id: UUID, new_parent_id: UUID) -> bool:
        """Check if moving task under new_parent would create a cycle."""
        if new_parent_id == task_id:
            return True
        return any(a.id == task_id for a in self.ancestors(new_parent_id))
