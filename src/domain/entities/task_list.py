"""TaskList domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class TaskList:
    """A user-defined named grouping of root tasks.

    Membership lives on the task side (``Task.list_id``).
    """

    title: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
