from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from taskapi.domain.entities import TaskEntity
from taskapi.domain.enums import TaskPriority, TaskStatus
from taskapi.domain.errors import TaskNotFoundError, TaskValidationError
from taskapi.domain.filters import FilterCriteria
from taskapi.domain.translator import translate
from taskapi.infra.repository import TaskRepository

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"title", "description", "status", "priority", "due_date"})


class TaskService:
    def __init__(self, repo: TaskRepository, clock: Callable[[], datetime] = datetime.now) -> None:
        self._repo = repo
        self._clock = clock

    def list_tasks(self, owner_id: str, criteria: FilterCriteria) -> list[TaskEntity]:
        predicate = translate(owner_id, criteria, now=self._clock())
        return self._repo.list_tasks(predicate)

    def get_task(self, owner_id: str, task_id: int) -> TaskEntity:
        task = self._repo.get_task(task_id, owner_id)
        if not task:
            raise TaskNotFoundError(task_id)
        return task

    def create_task(self, owner_id: str, data: dict) -> TaskEntity:
        normalized = self._normalize_data(data)
        if not str(normalized.get("title") or "").strip():
            raise TaskValidationError("Title is required")
        task = self._repo.create_task(owner_id, normalized)
        logger.info("Created task %s for owner %s", task.id, owner_id)
        return task

    def update_task(self, owner_id: str, task_id: int, data: dict) -> TaskEntity:
        self._validate_update(data)
        normalized = self._normalize_data(data)
        task = self._repo.update_task(task_id, owner_id, normalized)
        if not task:
            raise TaskNotFoundError(task_id)
        logger.info("Updated task %s fields %s", task_id, sorted(normalized))
        return task

    def delete_task(self, owner_id: str, task_id: int) -> None:
        if not self._repo.delete_task(task_id, owner_id):
            raise TaskNotFoundError(task_id)
        logger.info("Deleted task %s for owner %s", task_id, owner_id)

    @staticmethod
    def _validate_update(data: dict) -> None:
        unknown = set(data) - UPDATABLE_FIELDS
        if unknown:
            logger.warning("Rejected update with fields %s", sorted(unknown))
            raise TaskValidationError("Invalid task fields")
        if "title" in data and not str(data["title"] or "").strip():
            raise TaskValidationError("Title is required")

    def _normalize_data(self, data: dict) -> dict:
        normalized = {key: value for key, value in data.items() if key in UPDATABLE_FIELDS}
        if isinstance(normalized.get("status"), TaskStatus):
            normalized["status"] = normalized["status"].value
        if isinstance(normalized.get("priority"), TaskPriority):
            normalized["priority"] = normalized["priority"].value
        for key in ("title", "status", "priority"):
            if key in normalized and normalized[key] is None:
                del normalized[key]
        if "description" in normalized and normalized["description"] is None:
            normalized["description"] = ""
        return normalized
