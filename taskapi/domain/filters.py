from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FilterCriteria:
    """Raw list filters exactly as received from the query string.

    Every field is optional text. Blank values count as absent.
    """

    status: str | None = None
    priority: str | None = None
    search: str | None = None
    due_date: str | None = None
    due_date_from: str | None = None
    due_date_to: str | None = None
    overdue: str | None = None
    upcoming: str | None = None
