"""Eisenhower matrix quadrants."""

from datetime import date, timedelta
from enum import StrEnum

from domain.entities.task import Priority


class Quadrant(StrEnum):
    """Urgency/importance quadrant of the Eisenhower matrix."""

    URGENT_IMPORTANT = "urgent_important"
    NOT_URGENT_IMPORTANT = "not_urgent_important"
    URGENT_NOT_IMPORTANT = "urgent_not_important"
    NOT_URGENT_NOT_IMPORTANT = "not_urgent_not_important"

    @property
    def priority(self) -> Priority:
        """Priority a matrix task must carry to land in this quadrant."""
        return _QUADRANT_PRIORITY[self]


_QUADRANT_PRIORITY = {
    Quadrant.URGENT_IMPORTANT: Priority.HIGH,
    Quadrant.NOT_URGENT_IMPORTANT: Priority.MEDIUM,
    Quadrant.URGENT_NOT_IMPORTANT: Priority.LOW,
    Quadrant.NOT_URGENT_NOT_IMPORTANT: Priority.NONE,
}

# Days from today
_SUGGESTED_OFFSETS = {
    Quadrant.URGENT_IMPORTANT: 1,
    Quadrant.NOT_URGENT_IMPORTANT: 7,
    Quadrant.URGENT_NOT_IMPORTANT: 2,
    Quadrant.NOT_URGENT_NOT_IMPORTANT: 14,
}


def suggested_due_date(quadrant: Quadrant, today: date) -> date:
    """Default due date offered when adding a task straight into a quadrant."""
    return today + timedelta(days=_SUGGESTED_OFFSETS[quadrant])
