"""Pydantic schemas for Task API."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import Base64Bytes, BaseModel, ConfigDict, Field, model_validator

from domain.entities.task import Priority
from domain.services.task_service import RescheduleOption


class TaskBase(BaseModel):
    """Base schema for Task."""

    title: str = Field(..., min_length=1, max_length=255)
    details: str = Field("", max_length=5000)
    priority: Priority = Priority.NONE
    parent_id: UUID | None = None
    list_id: UUID | None = None
    due_date: date | None = None


class TaskCreate(TaskBase):
    """Schema for creating a Task."""

    is_matrix_task: bool = False
    is_pinned: bool = False
    image_data: Base64Bytes | None = None


class MatrixTaskCreate(BaseModel):
    """Schema for adding a task straight into a matrix quadrant."""

    title: str = Field(..., min_length=1, max_length=255)
    details: str = Field("", max_length=5000)
    parent_id: UUID | None = None
    due_date: date | None = None


class TaskUpdate(BaseModel):
    """Schema for updating a Task (all fields optional).

    Nullable fields are only applied when present in the request body, so
    ``{"due_date": null}`` clears the date while omitting it leaves it alone.
    """

    title: str | None = Field(None, min_length=1, max_length=255)
    details: str | None = Field(None, max_length=5000)
    priority: Priority | None = None
    is_pinned: bool | None = None
    is_not_done: bool | None = None
    is_matrix_task: bool | None = None
    image_data: Base64Bytes | None = None
    due_date: date | None = None
    list_id: UUID | None = None
    parent_id: UUID | None = None


class RescheduleRequest(BaseModel):
    """Either a quick option or an explicit date."""

    option: RescheduleOption | None = None
    due_date: date | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "RescheduleRequest":
        if (self.option is None) == (self.due_date is None):
            raise ValueError("Provide exactly one of 'option' or 'due_date'")
        return self


class NotDoneRequest(BaseModel):
    value: bool = True


class TaskResponse(BaseModel):
    """Schema for Task response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "parent_id": None,
                "list_id": None,
                "title": "Buy milk",
                "details": "",
                "is_completed": False,
                "is_not_done": False,
                "priority": "none",
                "is_pinned": False,
                "has_image": False,
                "due_date": None,
                "is_matrix_task": False,
                "refresh_id": "9b2d7c1e-0d1f-4a55-9d8e-3c1f0f8e2a11",
                "created_at": "2025-06-01T10:00:00",
                "updated_at": "2025-06-01T10:00:00",
            }
        },
    )

    id: UUID
    parent_id: UUID | None
    list_id: UUID | None
    title: str
    details: str
    is_completed: bool
    is_not_done: bool
    priority: Priority
    is_pinned: bool
    has_image: bool = False
    due_date: date | None
    is_matrix_task: bool
    refresh_id: UUID
    created_at: datetime
    updated_at: datetime


class TaskCollectionResponse(BaseModel):
    """Schema for list of Tasks response."""

    data: list[TaskResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class TaskDetailResponse(BaseModel):
    """Schema for single Task response."""

    data: TaskResponse
    meta: dict[str, Any] = Field(default_factory=dict)


class ShareTextResponse(BaseModel):
    text: str
