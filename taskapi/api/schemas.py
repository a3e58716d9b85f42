"""Request and response bodies for the task endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from taskapi.domain.entities import TaskEntity
from taskapi.domain.enums import TaskPriority, TaskStatus


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _local_wall_clock(value: datetime | None) -> datetime | None:
    # Stored due dates and filter bounds are naive local times.
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


class CreateTaskRequest(_CamelModel):
    """Body for ``POST /api/tasks``. A missing title is reported as 400, not 422."""

    title: str | None = Field(default=None, max_length=200)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None

    @field_validator("due_date")
    @classmethod
    def due_date_as_local(cls, value: datetime | None) -> datetime | None:
        return _local_wall_clock(value)


class UpdateTaskRequest(_CamelModel):
    """Body for ``PUT/PATCH /api/tasks/{id}``.

    Unknown keys are kept so the service can reject them explicitly.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    title: str | None = Field(default=None, max_length=200)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None

    @field_validator("due_date")
    @classmethod
    def due_date_as_local(cls, value: datetime | None) -> datetime | None:
        return _local_wall_clock(value)

    def changes(self) -> dict[str, Any]:
        declared = type(self).model_fields
        data = {name: getattr(self, name) for name in self.model_fields_set if name in declared}
        data.update(self.model_extra or {})
        return data


class TaskResponse(_CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    title: str
    description: str
    status: str
    priority: str
    due_date: datetime | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def dump(cls, task: TaskEntity) -> dict[str, Any]:
        return cls.model_validate(task).model_dump(by_alias=True, mode="json")
