# casetasks/routers/tasks.py
from typing import Optional

from fastapi import APIRouter, Depends, status

from casetasks.errors import ValidationError
from casetasks.models.task import TaskStatus
from casetasks.models.user import User
from casetasks.schemas.base import ApiResponse, MessageOut
from casetasks.schemas.task import Pagination, TaskCreate, TaskListOut, TaskOut, TaskStats, TaskUpdate
from casetasks.services.tasks import TaskService
from casetasks.utils.auth import get_current_user
from casetasks.utils.dependencies import get_task_service
from casetasks.utils.responses import envelope

MAX_PAGE_SIZE = 100

router = APIRouter()


def _check_pagination(page: int, limit: int) -> None:
    details = []
    if page < 1:
        details.append({"field": "page", "message": "Page must be >= 1"})
    if limit < 1 or limit > MAX_PAGE_SIZE:
        details.append({"field": "limit", "message": f"Limit must be between 1 and {MAX_PAGE_SIZE}"})
    if details:
        raise ValidationError(
            f"Invalid pagination parameters. Page must be >= 1, limit must be between 1 and {MAX_PAGE_SIZE}",
            details=details,
        )


@router.get("", response_model=ApiResponse[TaskListOut])
def get_all_tasks(
    page: int = 1,
    limit: int = 10,
    status: Optional[TaskStatus] = None,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """List the current user's tasks, newest first, optionally filtered by status"""
    _check_pagination(page, limit)

    result = service.get_all_tasks(current_user.id, page, limit, status)
    return envelope(TaskListOut(
        tasks=[TaskOut.model_validate(task) for task in result.tasks],
        pagination=Pagination(page=page, limit=limit, total=result.total, pages=result.pages),
    ))


# Declared before /{task_id} so "stats" is not parsed as an id
@router.get("/stats", response_model=ApiResponse[TaskStats])
def get_task_stats(
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    return envelope(service.get_task_stats(current_user.id))


@router.get("/{task_id}", response_model=ApiResponse[TaskOut])
def get_task(
    task_id: int,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    return envelope(TaskOut.model_validate(service.get_task_by_id(task_id, current_user.id)))


@router.post("", response_model=ApiResponse[TaskOut], status_code=status.HTTP_201_CREATED)
def create_task(
    task: TaskCreate,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    return envelope(TaskOut.model_validate(service.create_task(task, current_user.id)))


@router.put("/{task_id}", response_model=ApiResponse[TaskOut])
def update_task(
    task_id: int,
    task_update: TaskUpdate,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Partial update; any status may be set from any other status"""
    return envelope(TaskOut.model_validate(service.update_task(task_id, task_update, current_user.id)))


@router.delete("/{task_id}", response_model=ApiResponse[MessageOut])
def delete_task(
    task_id: int,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    service.delete_task(task_id, current_user.id)
    return envelope(MessageOut(message="Task deleted successfully"))
