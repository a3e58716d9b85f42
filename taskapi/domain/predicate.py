from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Optional


class DueKind(StrEnum):
    EXACT_DAY = "exact_day"
    RANGE = "range"
    OVERDUE = "overdue"
    UPCOMING = "upcoming"


@dataclass(frozen=True)
class DueDateBounds:
    """A single constraint on ``due_date``.

    ``gte`` and ``lte`` are inclusive, ``lt`` is exclusive. Unset bounds do not
    constrain.
    """

    kind: DueKind
    gte: Optional[datetime] = None
    lte: Optional[datetime] = None
    lt: Optional[datetime] = None


@dataclass(frozen=True)
class TaskPredicate:
    """Storage-agnostic conjunction of constraints for one owner's tasks."""

    owner_id: str
    status: str | None = None
    status_not: str | None = None
    priority: str | None = None
    search: str | None = None
    due: DueDateBounds | None = None
