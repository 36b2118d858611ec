"""Single-slot undo for the most recent completion."""

import time
from collections.abc import Callable
from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, slots=True)
class CompletionRecord:
    """Completion flags as they were before a completion cascade."""

    previous: dict[UUID, bool]
    recorded_at: float


class CompletionUndoSlot:
    """Holds at most one completion that can still be reverted.

    A record expires ``window_seconds`` after it was stored; clearing the
    slot drops it early.
    """

    def __init__(
        self,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._window = window_seconds
        self._clock = clock
        self._record: CompletionRecord | None = None

    def record(self, previous: dict[UUID, bool]) -> None:
        if not previous:
            return
        self._record = CompletionRecord(previous=dict(previous), recorded_at=self._clock())

    def clear(self) -> None:
        self._record = None

    def peek(self) -> CompletionRecord | None:
        """Return the live record without consuming it."""
        if self._record is None:
            return None
        if self._clock() - self._record.recorded_at > self._window:
            self._record = None
        return self._record
