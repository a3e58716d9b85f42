"""REST API endpoints for an owner's tasks."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status

from taskapi.api.schemas import CreateTaskRequest, TaskResponse, UpdateTaskRequest
from taskapi.domain.errors import TaskNotFoundError, TaskValidationError
from taskapi.domain.filters import FilterCriteria
from taskapi.infra.repository import TaskRepository
from taskapi.services.task_service import TaskService

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


def get_task_service() -> TaskService:
    return TaskService(TaskRepository())


def get_owner_id(x_user_id: str | None = Header(default=None)) -> str:
    """Owner identity forwarded by the upstream gateway."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing user identity")
    return x_user_id.strip()


def get_filter_criteria(
    status_: str | None = Query(default=None, alias="status"),
    priority: str | None = Query(default=None),
    search: str | None = Query(default=None),
    due_date: str | None = Query(default=None, alias="dueDate"),
    due_date_from: str | None = Query(default=None, alias="dueDateFrom"),
    due_date_to: str | None = Query(default=None, alias="dueDateTo"),
    overdue: str | None = Query(default=None),
    upcoming: str | None = Query(default=None),
) -> FilterCriteria:
    return FilterCriteria(
        status=status_,
        priority=priority,
        search=search,
        due_date=due_date,
        due_date_from=due_date_from,
        due_date_to=due_date_to,
        overdue=overdue,
        upcoming=upcoming,
    )


@router.post("", status_code=status.HTTP_201_CREATED)
def create_task(
    body: CreateTaskRequest,
    owner_id: str = Depends(get_owner_id),
    service: TaskService = Depends(get_task_service),
) -> dict[str, Any]:
    """Create a task for the calling owner."""
    try:
        task = service.create_task(owner_id, body.model_dump(exclude_unset=True))
    except TaskValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"message": "Task created", "task": TaskResponse.dump(task)}


@router.get("")
def list_tasks(
    criteria: FilterCriteria = Depends(get_filter_criteria),
    owner_id: str = Depends(get_owner_id),
    service: TaskService = Depends(get_task_service),
) -> dict[str, Any]:
    """List the caller's tasks, filtered by the query string."""
    tasks = service.list_tasks(owner_id, criteria)
    return {"tasks": [TaskResponse.dump(task) for task in tasks]}


@router.get("/{task_id}")
def get_task(
    task_id: int,
    owner_id: str = Depends(get_owner_id),
    service: TaskService = Depends(get_task_service),
) -> dict[str, Any]:
    try:
        task = service.get_task(owner_id, task_id)
    except TaskNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Task not found") from exc
    return {"task": TaskResponse.dump(task)}


@router.api_route("/{task_id}", methods=["PUT", "PATCH"])
def update_task(
    task_id: int,
    body: UpdateTaskRequest,
    owner_id: str = Depends(get_owner_id),
    service: TaskService = Depends(get_task_service),
) -> dict[str, Any]:
    """Apply a partial update; only title, description, status, priority and dueDate are accepted."""
    try:
        task = service.update_task(owner_id, task_id, body.changes())
    except TaskNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Task not found or unauthorized") from exc
    except TaskValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"message": "Task updated", "task": TaskResponse.dump(task)}


@router.delete("/{task_id}")
def delete_task(
    task_id: int,
    owner_id: str = Depends(get_owner_id),
    service: TaskService = Depends(get_task_service),
) -> dict[str, Any]:
    try:
        service.delete_task(owner_id, task_id)
    except TaskNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Task not found or unauthorized") from exc
    return {"message": "Task deleted"}
