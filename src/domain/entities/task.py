"""Task domain entity."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID, uuid4


class Priority(StrEnum):
    """Task priority, also used to place matrix tasks into quadrants."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"

    @property
    def rank(self) -> int:
        """Display rank: higher sorts first."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
    Priority.NONE: 0,
}


@dataclass
class Task:
    """Domain entity for a Task."""

    title: str
    id: UUID = field(default_factory=uuid4)
    details: str = ""
    is_completed: bool = False
    is_not_done: bool = False
    priority: Priority = Priority.NONE
    is_pinned: bool = False
    image_data: bytes | None = None
    due_date: date | None = None
    is_matrix_task: bool = False
    list_id: UUID | None = None
    parent_id: UUID | None = None
    refresh_id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @property
    def is_pending(self) -> bool:
        """Neither completed nor abandoned."""
        return not self.is_completed and not self.is_not_done

    def touch(self) -> None:
        """Record a mutation so dependent views recompute."""
        self.refresh_id = uuid4()
        self.updated_at = datetime.utcnow()

    def complete(self) -> None:
        """Mark the task as completed."""
        self.is_completed = True
        self.touch()

    def uncomplete(self) -> None:
        """Mark the task as not completed."""
        self.is_completed = False
        self.touch()

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at


@dataclass(frozen=True, slots=True)
class TaskRow:
    """One display row: a task and its indentation level."""

    task: Task
    level: int
