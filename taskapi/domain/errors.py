from __future__ import annotations


class TaskError(Exception):
    """Base class for task domain errors."""


class InvalidOwnerError(TaskError, ValueError):
    """Raised when a query is requested without an owner identity."""


class TaskNotFoundError(TaskError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class TaskValidationError(TaskError, ValueError):
    pass
