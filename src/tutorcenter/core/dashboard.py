"""Dashboard summary and calendar grouping."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable

from tutorcenter.core.views import (
    STATUS_COMPLETED,
    STATUS_UPCOMING,
    SessionRow,
    StudentRow,
    TutorRow,
)
from tutorcenter.utils.validators import parse_month

UPCOMING_LIMIT = 5


@dataclass
class DashboardSummary:
    total_students: int = 0
    total_tutors: int = 0
    upcoming_sessions: int = 0
    completed_sessions: int = 0
    average_attendance: float = 0.0
    total_earnings: float = 0.0
    next_sessions: list[SessionRow] = field(default_factory=list)
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def build_dashboard(
    students: list[StudentRow],
    tutors: list[TutorRow],
    sessions: list[SessionRow],
    now: datetime | None = None,
) -> DashboardSummary:
    """Aggregate counts and the next few upcoming sessions.

    Args:
        students: Student rows
        tutors: Tutor rows
        sessions: Session rows (status already computed)
        now: Reference time for the summary

    Returns:
        DashboardSummary
    """
    upcoming = sorted(
        (s for s in sessions if s.status == STATUS_UPCOMING),
        key=lambda s: s.start_time,
    )
    completed = sum(1 for s in sessions if s.status == STATUS_COMPLETED)

    average = 0.0
    if students:
        average = round(sum(s.attendance for s in students) / len(students), 1)

    return DashboardSummary(
        total_students=len(students),
        total_tutors=len(tutors),
        upcoming_sessions=len(upcoming),
        completed_sessions=completed,
        average_attendance=average,
        total_earnings=round(sum(t.earnings for t in tutors), 2),
        next_sessions=upcoming[:UPCOMING_LIMIT],
        generated_at=now or datetime.now(timezone.utc),
    )


def group_by_date(
    sessions: Iterable[SessionRow], month: str | None = None
) -> dict[str, list[SessionRow]]:
    """Group session rows by ISO date, in date then start-time order.

    Args:
        sessions: Session rows
        month: Optional "YYYY-MM" restricting the result to one month

    Raises:
        InvalidMonthError: If month is not in YYYY-MM form
    """
    if month is not None:
        parse_month(month)

    days: dict[str, list[SessionRow]] = {}
    for row in sorted(sessions, key=lambda s: s.start_time):
        if month and not row.date.startswith(month):
            continue
        days.setdefault(row.date, []).append(row)
    return dict(sorted(days.items()))
