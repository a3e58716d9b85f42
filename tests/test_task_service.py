from __future__ import annotations

from dataclasses import replace
from datetime import datetime

import pytest

from taskapi.domain.entities import TaskEntity
from taskapi.domain.enums import TaskPriority, TaskStatus
from taskapi.domain.errors import InvalidOwnerError, TaskNotFoundError, TaskValidationError
from taskapi.domain.filters import FilterCriteria
from taskapi.domain.predicate import DueDateBounds, TaskPredicate
from taskapi.services.task_service import TaskService

NOW = datetime(2024, 3, 20, 15, 30, 0)


def _due_matches(due: DueDateBounds, value: datetime | None) -> bool:
    if value is None:
        return False
    if due.gte is not None and value < due.gte:
        return False
    if due.lte is not None and value > due.lte:
        return False
    return due.lt is None or value < due.lt


def _matches(predicate: TaskPredicate, task: TaskEntity) -> bool:
    if task.owner_id != predicate.owner_id:
        return False
    if predicate.status is not None and task.status != predicate.status:
        return False
    if predicate.status_not is not None and task.status == predicate.status_not:
        return False
    if predicate.priority is not None and task.priority != predicate.priority:
        return False
    if predicate.search is not None:
        needle = predicate.search.lower()
        if needle not in task.title.lower() and needle not in task.description.lower():
            return False
    return predicate.due is None or _due_matches(predicate.due, task.due_date)


class FakeRepo:
    def __init__(self) -> None:
        self.tasks: list[TaskEntity] = []
        self.predicates: list[TaskPredicate] = []
        self._id = 1

    def list_tasks(self, predicate: TaskPredicate) -> list[TaskEntity]:
        self.predicates.append(predicate)
        return [t for t in self.tasks if _matches(predicate, t)]

    def get_task(self, task_id: int, owner_id: str) -> TaskEntity | None:
        return next((t for t in self.tasks if t.id == task_id and t.owner_id == owner_id), None)

    def create_task(self, owner_id: str, data: dict) -> TaskEntity:
        task = TaskEntity(
            id=self._id,
            owner_id=owner_id,
            title=data.get("title", ""),
            description=data.get("description", ""),
            status=data.get("status", TaskStatus.PENDING.value),
            priority=data.get("priority", TaskPriority.MEDIUM.value),
            due_date=data.get("due_date"),
            created_at=NOW,
            updated_at=NOW,
        )
        self.tasks.append(task)
        self._id += 1
        return task

    def update_task(self, task_id: int, owner_id: str, data: dict) -> TaskEntity | None:
        task = self.get_task(task_id, owner_id)
        if not task:
            return None
        updated = replace(task, **data)
        self.tasks = [updated if t.id == task_id else t for t in self.tasks]
        return updated

    def delete_task(self, task_id: int, owner_id: str) -> bool:
        before = len(self.tasks)
        self.tasks = [t for t in self.tasks if not (t.id == task_id and t.owner_id == owner_id)]
        return len(self.tasks) != before


@pytest.fixture
def repo() -> FakeRepo:
    return FakeRepo()


@pytest.fixture
def service(repo: FakeRepo) -> TaskService:
    return TaskService(repo, clock=lambda: NOW)


def test_list_tasks_only_returns_callers_tasks(service: TaskService) -> None:
    service.create_task("alice", {"title": "Buy groceries"})
    service.create_task("bob", {"title": "Buy groceries too"})

    tasks = service.list_tasks("alice", FilterCriteria(search="GROCERIES"))

    assert [t.owner_id for t in tasks] == ["alice"]


def test_list_tasks_uses_injected_clock(service: TaskService, repo: FakeRepo) -> None:
    service.create_task("alice", {"title": "Late", "due_date": datetime(2024, 3, 19, 9, 0)})
    service.create_task("alice", {"title": "Done late", "due_date": datetime(2024, 3, 18), "status": "completed"})
    service.create_task("alice", {"title": "Later", "due_date": datetime(2024, 3, 22)})

    overdue = service.list_tasks("alice", FilterCriteria(overdue="true"))
    upcoming = service.list_tasks("alice", FilterCriteria(upcoming="3"))

    assert [t.title for t in overdue] == ["Late"]
    assert [t.title for t in upcoming] == ["Later"]
    assert repo.predicates[0].due.lt == NOW


def test_list_tasks_rejects_blank_owner(service: TaskService) -> None:
    with pytest.raises(InvalidOwnerError):
        service.list_tasks("", FilterCriteria())


def test_create_requires_title(service: TaskService) -> None:
    with pytest.raises(TaskValidationError, match="Title is required"):
        service.create_task("alice", {"description": "no title"})


def test_create_normalizes_enums(service: TaskService) -> None:
    task = service.create_task(
        "alice",
        {"title": "Plan", "status": TaskStatus.IN_PROGRESS, "priority": TaskPriority.HIGH},
    )

    assert task.status == "in-progress"
    assert task.priority == "high"


def test_update_rejects_fields_outside_allow_list(service: TaskService, repo: FakeRepo) -> None:
    task = service.create_task("alice", {"title": "Mine"})

    with pytest.raises(TaskValidationError, match="Invalid task fields"):
        service.update_task("alice", task.id, {"title": "Stolen", "owner_id": "bob"})

    assert repo.tasks[0].owner_id == "alice"
    assert repo.tasks[0].title == "Mine"


def test_update_rejects_blank_title(service: TaskService) -> None:
    task = service.create_task("alice", {"title": "Mine"})

    with pytest.raises(TaskValidationError):
        service.update_task("alice", task.id, {"title": "  "})


def test_update_merges_allowed_fields(service: TaskService) -> None:
    task = service.create_task("alice", {"title": "Draft", "description": "v1"})

    updated = service.update_task("alice", task.id, {"status": TaskStatus.COMPLETED, "description": None})

    assert updated.status == "completed"
    assert updated.description == ""
    assert updated.title == "Draft"


def test_update_of_another_owners_task_is_not_found(service: TaskService) -> None:
    task = service.create_task("alice", {"title": "Mine"})

    with pytest.raises(TaskNotFoundError):
        service.update_task("bob", task.id, {"title": "Yours"})


def test_get_and_delete_are_owner_scoped(service: TaskService, repo: FakeRepo) -> None:
    task = service.create_task("alice", {"title": "Mine"})

    with pytest.raises(TaskNotFoundError):
        service.get_task("bob", task.id)
    with pytest.raises(TaskNotFoundError):
        service.delete_task("bob", task.id)

    service.delete_task("alice", task.id)
    assert repo.tasks == []
