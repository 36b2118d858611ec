"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Not found errors (404)
    TASK_NOT_FOUND = "TASK_NOT_FOUND"
    LIST_NOT_FOUND = "LIST_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CIRCULAR_REFERENCE = "CIRCULAR_REFERENCE"

    # Conflict errors (409)
    UNDO_UNAVAILABLE = "UNDO_UNAVAILABLE"

    # Server errors (500/503)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class TaskNotFoundError(AppException):
    """Task not found."""

    def __init__(self, task_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.TASK_NOT_FOUND,
            message=f"Task not found: {task_id}",
            status_code=404,
            details={"task_id": task_id},
        )


class TaskListNotFoundError(AppException):
    """Task list not found."""

    def __init__(self, list_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.LIST_NOT_FOUND,
            message=f"List not found: {list_id}",
            status_code=404,
            details={"list_id": list_id},
        )


class CircularReferenceError(AppException):
    """Circular reference detected in hierarchy."""

    def __init__(self, message: str = "Circular reference detected") -> None:
        super().__init__(
            error_code=ErrorCode.CIRCULAR_REFERENCE,
            message=message,
            status_code=400,
        )


class UndoUnavailableError(AppException):
    """There is no completion left to undo."""

    def __init__(self, message: str = "Nothing to undo") -> None:
        super().__init__(
            error_code=ErrorCode.UNDO_UNAVAILABLE,
            message=message,
            status_code=409,
        )


class PersistenceError(AppException):
    """The store failed to commit a change."""

    def __init__(self, message: str = "Could not save changes") -> None:
        super().__init__(
            error_code=ErrorCode.DATABASE_ERROR,
            message=message,
            status_code=503,
        )
