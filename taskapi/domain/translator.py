"""Translate raw list filters into a :class:`TaskPredicate`.

Temporal filters are mutually exclusive and resolved in a fixed order:
exact due date, explicit range, overdue, upcoming. Malformed temporal values
are ignored rather than rejected, so a bad ``dueDate`` falls through to the
next rule instead of failing the request.
"""
from __future__ import annotations

import logging
import re
from datetime import date, datetime, time, timedelta
from typing import Optional

from .enums import TaskStatus
from .errors import InvalidOwnerError
from .filters import FilterCriteria
from .predicate import DueDateBounds, DueKind, TaskPredicate

logger = logging.getLogger(__name__)

START_OF_DAY = time(0, 0, 0, 0)
END_OF_DAY = time(23, 59, 59, 999_000)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _present(value: str | None) -> str | None:
    if value is None or value == "":
        return None
    return value


def parse_calendar_date(value: str | None) -> Optional[date]:
    """Return the calendar date in ``value`` or ``None`` if it does not parse."""
    text = _present(value)
    if text is None:
        return None
    text = text.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def parse_day_count(value: str | None) -> Optional[int]:
    """Leading-integer parse; only positive counts are returned."""
    text = _present(value)
    if text is None:
        return None
    match = _LEADING_INT.match(text)
    if not match:
        return None
    days = int(match.group(1))
    return days if days > 0 else None


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, START_OF_DAY)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, END_OF_DAY)


def _exact_day(criteria: FilterCriteria) -> DueDateBounds | None:
    day = parse_calendar_date(criteria.due_date)
    if day is None:
        return None
    return DueDateBounds(DueKind.EXACT_DAY, gte=start_of_day(day), lte=end_of_day(day))


def _explicit_range(criteria: FilterCriteria) -> DueDateBounds | None:
    day_from = parse_calendar_date(criteria.due_date_from)
    day_to = parse_calendar_date(criteria.due_date_to)
    if day_from is None and day_to is None:
        return None
    return DueDateBounds(
        DueKind.RANGE,
        gte=start_of_day(day_from) if day_from else None,
        lte=end_of_day(day_to) if day_to else None,
    )


def _upcoming(criteria: FilterCriteria, now: datetime) -> DueDateBounds | None:
    days = parse_day_count(criteria.upcoming)
    if days is None:
        return None
    return DueDateBounds(DueKind.UPCOMING, gte=now, lte=now + timedelta(days=days))


def translate(
    owner_id: str,
    criteria: FilterCriteria,
    now: datetime | None = None,
) -> TaskPredicate:
    """Build the predicate for ``owner_id``'s task list.

    ``now`` is read once per call when not supplied, so the bounds of the
    overdue and upcoming windows share the same instant.
    """
    if owner_id is None or not str(owner_id).strip():
        raise InvalidOwnerError("owner identity is required")
    if now is None:
        now = datetime.now()

    status = _present(criteria.status)
    status_not = None
    priority = _present(criteria.priority)
    search = _present(criteria.search)

    due = _exact_day(criteria) or _explicit_range(criteria)
    if due is None and criteria.overdue == "true":
        if status == TaskStatus.COMPLETED.value:
            logger.warning(
                "overdue filter replaces status=%s for owner %s", status, owner_id
            )
        due = DueDateBounds(DueKind.OVERDUE, lt=now)
        status = None
        status_not = TaskStatus.COMPLETED.value
    if due is None:
        due = _upcoming(criteria, now)

    predicate = TaskPredicate(
        owner_id=str(owner_id),
        status=status,
        status_not=status_not,
        priority=priority,
        search=search,
        due=due,
    )
    logger.debug("Translated %s into %s", criteria, predicate)
    return predicate
