"""Read models returned by the screen views."""

from dataclasses import dataclass, field
from typing import Any

from domain.entities.task import TaskRow


@dataclass(frozen=True, slots=True)
class ScreenView:
    """Display rows of one screen, grouped into named sections.

    Sections keep insertion order: ``pinned`` then ``normal``, then ``done``
    for screens that show finished tasks.
    """

    screen: str
    sections: dict[str, list[TaskRow]]
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def row_count(self) -> int:
        return sum(len(rows) for rows in self.sections.values())
