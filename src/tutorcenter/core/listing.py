"""Search, filter and pagination over in-memory row lists.

These mirror what the dashboard pages do with a fetched array: linear
scans over small lists and fixed-size page slices.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, Sequence, TypeVar

from tutorcenter.core.views import ReportRow, SessionRow, StudentRow

ITEMS_PER_PAGE = 5

# Filter value meaning "no filter"
ALL = "all"

RowT = TypeVar("RowT")


@dataclass
class Page(Generic[RowT]):
    """One page of a filtered list."""

    items: list[RowT] = field(default_factory=list)
    page: int = 1
    per_page: int = ITEMS_PER_PAGE
    total: int = 0
    total_pages: int = 0
    start: int = 0  # 1-based index of first item shown, 0 when empty
    end: int = 0  # 1-based index of last item shown

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def paginate(items: Sequence[RowT], page: int = 1, per_page: int = ITEMS_PER_PAGE) -> Page[RowT]:
    """Slice ``items`` into one page.

    The page number is clamped into [1, total_pages] so that a stale page
    index after filtering still shows results.
    """
    if per_page < 1:
        raise ValueError("per_page must be >= 1")

    total = len(items)
    total_pages = math.ceil(total / per_page)
    page = min(max(page, 1), max(total_pages, 1))

    offset = (page - 1) * per_page
    sliced = list(items[offset : offset + per_page])

    return Page(
        items=sliced,
        page=page,
        per_page=per_page,
        total=total,
        total_pages=total_pages,
        start=offset + 1 if sliced else 0,
        end=offset + len(sliced),
    )


def _is_active(value: str | None) -> bool:
    return bool(value) and value != ALL


def _in_range(iso_date: str, date_from: str | None, date_to: str | None) -> bool:
    # ISO dates compare correctly as strings
    if date_from and iso_date < date_from:
        return False
    if date_to and iso_date > date_to:
        return False
    return True


def filter_students(
    rows: Iterable[StudentRow],
    search: str | None = None,
    grade: str | None = None,
) -> list[StudentRow]:
    """Case-insensitive name search plus exact grade match."""
    needle = (search or "").lower()
    result = []
    for row in rows:
        if needle and needle not in row.name.lower():
            continue
        if _is_active(grade) and row.grade != grade:
            continue
        result.append(row)
    return result


def filter_sessions(
    rows: Iterable[SessionRow],
    status: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
) -> list[SessionRow]:
    """Filter by status label and an inclusive ISO date range."""
    return [
        row
        for row in rows
        if (not _is_active(status) or row.status == status)
        and _in_range(row.date, date_from, date_to)
    ]


def filter_reports(
    rows: Iterable[ReportRow],
    student: str | None = None,
    status: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
) -> list[ReportRow]:
    """Filter by student name, status label and an inclusive ISO date range."""
    result = []
    for row in rows:
        if _is_active(student) and row.student != student:
            continue
        if _is_active(status) and row.status != status:
            continue
        if (date_from or date_to) and not row.date:
            continue
        if not _in_range(row.date, date_from, date_to):
            continue
        result.append(row)
    return result


def unique_values(rows: Iterable[Any], attr: str) -> list[Any]:
    """Distinct attribute values in first-seen order, for filter drop-downs."""
    seen: dict[Any, None] = {}
    for row in rows:
        seen.setdefault(getattr(row, attr), None)
    return list(seen)
