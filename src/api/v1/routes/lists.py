"""Task list API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from api.v1.dependencies import get_task_list_service
from api.v1.schemas.common import NOT_FOUND_RESPONSE
from api.v1.schemas.task_list import (
    TaskListCollectionResponse,
    TaskListCreate,
    TaskListDetailResponse,
    TaskListResponse,
    TaskListUpdate,
)
from domain.services.task_list_service import TaskListService

router = APIRouter(prefix="/lists", tags=["lists"])


@router.get("", response_model=TaskListCollectionResponse, summary="List all task lists")
async def list_lists(
    service: TaskListService = Depends(get_task_list_service),
) -> TaskListCollectionResponse:
    """Get all task lists, ordered by title."""
    lists = await service.get_all()
    return TaskListCollectionResponse(
        data=[TaskListResponse.model_validate(item) for item in lists],
        meta={"total": len(lists)},
    )


@router.get(
    "/{list_id}",
    response_model=TaskListDetailResponse,
    summary="Get a task list",
    responses=NOT_FOUND_RESPONSE,
)
async def get_list(
    list_id: UUID,
    service: TaskListService = Depends(get_task_list_service),
) -> TaskListDetailResponse:
    task_list = await service.get_by_id(list_id)
    return TaskListDetailResponse(data=TaskListResponse.model_validate(task_list))


@router.post(
    "",
    response_model=TaskListDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task list",
)
async def create_list(
    body: TaskListCreate,
    service: TaskListService = Depends(get_task_list_service),
) -> TaskListDetailResponse:
    task_list = await service.create(body.title)
    return TaskListDetailResponse(data=TaskListResponse.model_validate(task_list))


@router.patch(
    "/{list_id}",
    response_model=TaskListDetailResponse,
    summary="Rename a task list",
    responses=NOT_FOUND_RESPONSE,
)
async def rename_list(
    list_id: UUID,
    body: TaskListUpdate,
    service: TaskListService = Depends(get_task_list_service),
) -> TaskListDetailResponse:
    task_list = await service.rename(list_id, body.title)
    return TaskListDetailResponse(data=TaskListResponse.model_validate(task_list))


@router.delete(
    "/{list_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a task list",
    responses=NOT_FOUND_RESPONSE,
)
async def delete_list(
    list_id: UUID,
    service: TaskListService = Depends(get_task_list_service),
) -> None:
    """Delete a list together with every task in it and their subtasks."""
    await service.delete(list_id)
    return None
