from __future__ import annotations

from typing import Optional

from sqlalchemy import or_, select

from taskapi.domain.entities import TaskEntity
from taskapi.domain.predicate import TaskPredicate

from .db import SessionLocal
from .models import TaskModel

LIKE_ESCAPE = "\\"

UPDATABLE_COLUMNS = frozenset({"title", "description", "status", "priority", "due_date"})


def _to_entity(model: TaskModel) -> TaskEntity:
    return TaskEntity(
        id=model.id,
        owner_id=model.owner_id,
        title=model.title,
        description=model.description,
        status=model.status,
        priority=model.priority,
        due_date=model.due_date,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def escape_like(text: str) -> str:
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def _apply_predicate(stmt, predicate: TaskPredicate) -> object:
    stmt = stmt.where(TaskModel.owner_id == predicate.owner_id)

    if predicate.status is not None:
        stmt = stmt.where(TaskModel.status == predicate.status)
    if predicate.status_not is not None:
        stmt = stmt.where(TaskModel.status != predicate.status_not)
    if predicate.priority is not None:
        stmt = stmt.where(TaskModel.priority == predicate.priority)

    if predicate.search is not None:
        pattern = f"%{escape_like(predicate.search)}%"
        stmt = stmt.where(
            or_(
                TaskModel.title.ilike(pattern, escape=LIKE_ESCAPE),
                TaskModel.description.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )

    due = predicate.due
    if due is not None:
        if due.gte is not None:
            stmt = stmt.where(TaskModel.due_date >= due.gte)
        if due.lte is not None:
            stmt = stmt.where(TaskModel.due_date <= due.lte)
        if due.lt is not None:
            stmt = stmt.where(TaskModel.due_date < due.lt)

    return stmt


class TaskRepository:
    def __init__(self, session_factory=SessionLocal) -> None:
        self._session_factory = session_factory

    def list_tasks(self, predicate: TaskPredicate) -> list[TaskEntity]:
        with self._session_factory() as session:
            stmt = select(TaskModel)
            stmt = _apply_predicate(stmt, predicate)
            stmt = stmt.order_by(
                TaskModel.due_date.is_(None),
                TaskModel.due_date.asc(),
                TaskModel.created_at.desc(),
                TaskModel.id.desc(),
            )
            return [_to_entity(task) for task in session.scalars(stmt)]

    def get_task(self, task_id: int, owner_id: str) -> Optional[TaskEntity]:
        with self._session_factory() as session:
            task = self._owned(session, task_id, owner_id)
            return _to_entity(task) if task else None

    def create_task(self, owner_id: str, data: dict) -> TaskEntity:
        with self._session_factory() as session:
            values = {key: value for key, value in data.items() if key in UPDATABLE_COLUMNS}
            task = TaskModel(owner_id=owner_id, **values)
            session.add(task)
            session.commit()
            session.refresh(task)
            return _to_entity(task)

    def update_task(self, task_id: int, owner_id: str, data: dict) -> Optional[TaskEntity]:
        with self._session_factory() as session:
            task = self._owned(session, task_id, owner_id)
            if not task:
                return None

            for key in UPDATABLE_COLUMNS.intersection(data):
                setattr(task, key, data[key])
            session.commit()
            session.refresh(task)
            return _to_entity(task)

    def delete_task(self, task_id: int, owner_id: str) -> bool:
        with self._session_factory() as session:
            task = self._owned(session, task_id, owner_id)
            if not task:
                return False
            session.delete(task)
            session.commit()
            return True

    @staticmethod
    def _owned(session, task_id: int, owner_id: str) -> Optional[TaskModel]:
        return session.scalar(
            select(TaskModel).where(TaskModel.id == task_id, TaskModel.owner_id == owner_id)
        )
