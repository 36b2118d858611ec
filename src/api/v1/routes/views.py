"""Screen view API routes.

Expansion state is owned by the client and sent as repeated ``expanded``
query parameters; nothing here changes stored tasks except the matrix
shortcut for adding a task into a quadrant.
"""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from api.v1.dependencies import get_task_service, get_view_service
from api.v1.routes.tasks import build_task_response
from api.v1.schemas.common import NOT_FOUND_RESPONSE
from api.v1.schemas.task import MatrixTaskCreate, TaskDetailResponse
from api.v1.schemas.view import (
    MatrixOverviewResponse,
    QuadrantSummary,
    RowResponse,
    ScreenResponse,
)
from domain.entities.matrix import Quadrant
from domain.entities.screen import ScreenView
from domain.services.task_service import TaskService
from domain.services.view_service import ViewService

router = APIRouter(prefix="/views", tags=["views"])

_EXPANDED = Query([], description="Ids of tasks whose subtasks are shown")


@router.get("/home", response_model=ScreenResponse, summary="Home screen rows")
async def home_view(
    list_id: UUID | None = Query(None, description="Selected list; omit for tasks in no list"),
    expanded: list[UUID] = _EXPANDED,
    service: ViewService = Depends(get_view_service),
) -> ScreenResponse:
    """Undated, unfinished root tasks of the selected list, sorted by title."""
    return _build_screen_response(await service.home(list_id=list_id, expanded=expanded))


@router.get("/calendar", response_model=ScreenResponse, summary="Calendar day rows")
async def calendar_view(
    day: date | None = Query(None, description="Selected day; defaults to today"),
    expanded: list[UUID] = _EXPANDED,
    service: ViewService = Depends(get_view_service),
) -> ScreenResponse:
    return _build_screen_response(await service.calendar(day=day, expanded=expanded))


@router.get("/matrix", response_model=MatrixOverviewResponse, summary="All matrix quadrants")
async def matrix_overview(
    service: ViewService = Depends(get_view_service),
) -> MatrixOverviewResponse:
    overview = await service.matrix_overview()
    return MatrixOverviewResponse(
        data=[
            QuadrantSummary(
                quadrant=quadrant.value,
                priority=quadrant.priority.value,
                tasks=[build_task_response(t) for t in tasks],
            )
            for quadrant, tasks in overview.items()
        ]
    )


@router.get(
    "/matrix/{quadrant}",
    response_model=ScreenResponse,
    summary="Rows of one matrix quadrant",
)
async def matrix_view(
    quadrant: Quadrant,
    expanded: list[UUID] = _EXPANDED,
    service: ViewService = Depends(get_view_service),
) -> ScreenResponse:
    return _build_screen_response(await service.matrix(quadrant, expanded=expanded))


@router.post(
    "/matrix/{quadrant}/tasks",
    response_model=TaskDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a task to a matrix quadrant",
    responses=NOT_FOUND_RESPONSE,
)
async def create_matrix_task(
    quadrant: Quadrant,
    body: MatrixTaskCreate,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    """Priority comes from the quadrant; the due date defaults to today."""
    task = await service.create_matrix_task(
        title=body.title,
        quadrant=quadrant,
        due_date=body.due_date,
        parent_id=body.parent_id,
        details=body.details,
    )
    return TaskDetailResponse(data=build_task_response(task))


@router.get("/not-done", response_model=ScreenResponse, summary="Abandoned tasks")
async def not_done_view(
    expanded: list[UUID] = _EXPANDED,
    service: ViewService = Depends(get_view_service),
) -> ScreenResponse:
    return _build_screen_response(await service.not_done(expanded=expanded))


def _build_screen_response(view: ScreenView) -> ScreenResponse:
    return ScreenResponse(
        screen=view.screen,
        sections={
            name: [RowResponse(level=row.level, task=build_task_response(row.task)) for row in rows]
            for name, rows in view.sections.items()
        },
        meta={**view.meta, "row_count": view.row_count},
    )
