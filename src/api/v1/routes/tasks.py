"""Task API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from api.v1.dependencies import get_task_service
from api.v1.schemas.common import NOT_FOUND_RESPONSE, ErrorResponse
from api.v1.schemas.task import (
    NotDoneRequest,
    RescheduleRequest,
    ShareTextResponse,
    TaskCollectionResponse,
    TaskCreate,
    TaskDetailResponse,
    TaskResponse,
    TaskUpdate,
)
from domain.entities.task import Task
from domain.services.task_service import TaskService, TaskSort

router = APIRouter(prefix="/tasks", tags=["tasks"])

_NULLABLE_UPDATE_FIELDS = ("image_data", "due_date", "list_id", "parent_id")


@router.get(
    "",
    response_model=TaskCollectionResponse,
    summary="List all tasks",
)
async def list_tasks(
    service: TaskService = Depends(get_task_service),
    sort: TaskSort = Query(TaskSort.STORE, description="store, title or priority"),
    include_completed: bool = Query(True, description="Include completed tasks"),
) -> TaskCollectionResponse:
    """
    Get all tasks as a flat list.

    The client assembles the tree using `parent_id` references, or uses the
    `/views/*` endpoints for ready-made indented rows.
    """
    tasks = await service.get_all(sort=sort)
    if not include_completed:
        tasks = [t for t in tasks if not t.is_completed]

    result = [build_task_response(t) for t in tasks]
    return TaskCollectionResponse(
        data=result,
        meta={
            "total": len(result),
            "root_count": len([t for t in result if t.parent_id is None]),
        },
    )


@router.post(
    "/undo-completion",
    response_model=TaskCollectionResponse,
    summary="Undo the last completion",
    responses={409: {"model": ErrorResponse, "description": "Nothing to undo"}},
)
async def undo_completion(
    service: TaskService = Depends(get_task_service),
) -> TaskCollectionResponse:
    """Revert the most recent completion cascade while its undo window is open."""
    restored = await service.undo_last_completion()
    return TaskCollectionResponse(
        data=[build_task_response(t) for t in restored],
        meta={"total": len(restored)},
    )


@router.get(
    "/{task_id}",
    response_model=TaskDetailResponse,
    summary="Get a task",
    responses=NOT_FOUND_RESPONSE,
)
async def get_task(
    task_id: UUID,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    """Get a specific task by ID, with its nesting depth."""
    task = await service.get_by_id(task_id)
    depth = await service.depth(task_id)
    return TaskDetailResponse(data=build_task_response(task), meta={"depth": depth})


@router.post(
    "",
    response_model=TaskDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
    responses={
        **NOT_FOUND_RESPONSE,
        422: {"description": "Validation error"},
    },
)
async def create_task(
    body: TaskCreate,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    """
    Create a new task.

    With `parent_id` the task becomes a subtask; with `list_id` it joins a list.
    """
    task = await service.create_task(
        title=body.title,
        details=body.details,
        priority=body.priority,
        list_id=body.list_id,
        parent_id=body.parent_id,
        due_date=body.due_date,
        is_matrix_task=body.is_matrix_task,
        is_pinned=body.is_pinned,
        image_data=body.image_data,
    )
    return TaskDetailResponse(data=build_task_response(task))


@router.patch(
    "/{task_id}",
    response_model=TaskDetailResponse,
    summary="Update a task",
    responses={
        **NOT_FOUND_RESPONSE,
        400: {"model": ErrorResponse, "description": "Circular reference detected"},
    },
)
async def update_task(
    task_id: UUID,
    body: TaskUpdate,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    """
    Update an existing task. All fields are optional (partial update).

    Send `null` for `due_date`, `list_id`, `parent_id` or `image_data` to clear it.
    """
    # Nullable fields: only pass them if explicitly set in the request
    nullable = {
        name: getattr(body, name) if name in body.model_fields_set else ...
        for name in _NULLABLE_UPDATE_FIELDS
    }

    task = await service.update(
        task_id=task_id,
        title=body.title,
        details=body.details,
        priority=body.priority,
        is_pinned=body.is_pinned,
        is_not_done=body.is_not_done,
        is_matrix_task=body.is_matrix_task,
        **nullable,
    )
    return TaskDetailResponse(data=build_task_response(task))


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a task",
    responses=NOT_FOUND_RESPONSE,
)
async def delete_task(
    task_id: UUID,
    service: TaskService = Depends(get_task_service),
) -> None:
    """Delete a task and all its subtasks (cascade delete)."""
    await service.delete_task(task_id)
    return None


@router.post(
    "/{task_id}/complete",
    response_model=TaskDetailResponse,
    summary="Complete a task and its subtasks",
    responses=NOT_FOUND_RESPONSE,
)
async def complete_task(
    task_id: UUID,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    task = await service.set_completed(task_id, True)
    return TaskDetailResponse(data=build_task_response(task))


@router.post(
    "/{task_id}/uncomplete",
    response_model=TaskDetailResponse,
    summary="Reopen a task and its completed ancestors",
    responses=NOT_FOUND_RESPONSE,
)
async def uncomplete_task(
    task_id: UUID,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    task = await service.set_completed(task_id, False)
    return TaskDetailResponse(data=build_task_response(task))


@router.post(
    "/{task_id}/pin",
    response_model=TaskDetailResponse,
    summary="Toggle pinning",
    responses=NOT_FOUND_RESPONSE,
)
async def toggle_pin(
    task_id: UUID,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    task = await service.toggle_pinned(task_id)
    return TaskDetailResponse(data=build_task_response(task))


@router.post(
    "/{task_id}/not-done",
    response_model=TaskDetailResponse,
    summary="Mark a task as won't do",
    responses=NOT_FOUND_RESPONSE,
)
async def mark_not_done(
    task_id: UUID,
    body: NotDoneRequest | None = None,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    value = body.value if body else True
    task = await service.mark_not_done(task_id, value)
    return TaskDetailResponse(data=build_task_response(task))


@router.post(
    "/{task_id}/reschedule",
    response_model=TaskDetailResponse,
    summary="Move a task to another day",
    responses=NOT_FOUND_RESPONSE,
)
async def reschedule_task(
    task_id: UUID,
    body: RescheduleRequest,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    """Reschedule to today, tomorrow, a picked date, or clear the due date."""
    if body.option is not None:
        task = await service.reschedule(task_id, body.option)
    else:
        task = await service.reassign_due_date(task_id, body.due_date)
    return TaskDetailResponse(data=build_task_response(task))


@router.get(
    "/{task_id}/share",
    response_model=ShareTextResponse,
    summary="Plain-text version of a task for sharing",
    responses=NOT_FOUND_RESPONSE,
)
async def share_task(
    task_id: UUID,
    service: TaskService = Depends(get_task_service),
) -> ShareTextResponse:
    return ShareTextResponse(text=await service.share_text(task_id))


@router.get(
    "/{task_id}/image",
    summary="Download the attached image",
    responses=NOT_FOUND_RESPONSE,
)
async def get_task_image(
    task_id: UUID,
    service: TaskService = Depends(get_task_service),
) -> Response:
    task = await service.get_by_id(task_id)
    if task.image_data is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task has no image")
    return Response(content=task.image_data, media_type="application/octet-stream")


def build_task_response(task: Task) -> TaskResponse:
    """Convert domain entity to response schema."""
    return TaskResponse(
        id=task.id,
        parent_id=task.parent_id,
        list_id=task.list_id,
        title=task.title,
        details=task.details,
        is_completed=task.is_completed,
        is_not_done=task.is_not_done,
        priority=task.priority,
        is_pinned=task.is_pinned,
        has_image=task.image_data is not None,
        due_date=task.due_date,
        is_matrix_task=task.is_matrix_task,
        refresh_id=task.refresh_id,
        created_at=task.created_at,
        updated_at=task.updated_at,
    )
