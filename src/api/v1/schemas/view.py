"""Pydantic schemas for screen views."""

from typing import Any

from pydantic import BaseModel, Field

from api.v1.schemas.task import TaskResponse


class RowResponse(BaseModel):
    """One indented display row."""

    level: int = Field(..., ge=0)
    task: TaskResponse


class ScreenResponse(BaseModel):
    """Rows of a screen grouped by section (pinned, normal, done)."""

    screen: str
    sections: dict[str, list[RowResponse]]
    meta: dict[str, Any] = Field(default_factory=dict)


class QuadrantSummary(BaseModel):
    quadrant: str
    priority: str
    tasks: list[TaskResponse]


class MatrixOverviewResponse(BaseModel):
    data: list[QuadrantSummary]
