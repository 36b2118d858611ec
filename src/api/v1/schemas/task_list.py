"""Pydantic schemas for TaskList API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TaskListCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)


class TaskListUpdate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)


class TaskListResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    created_at: datetime


class TaskListCollectionResponse(BaseModel):
    data: list[TaskListResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class TaskListDetailResponse(BaseModel):
    data: TaskListResponse
