"""Flat view objects built from joined ORM rows.

The dashboard lists show one row per entity with display names resolved
from the related user record and a status label derived from timestamps.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, datetime, timezone
from typing import Any

from tutorcenter.db.models import Report, Student, Tutor, TutoringSession, User

STATUS_UPCOMING = "Upcoming"
STATUS_COMPLETED = "Completed"
STATUS_CANCELED = "Canceled"


@dataclass
class StudentRow:
    id: str
    name: str
    grade: str
    attendance: float
    sessions: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class TutorRow:
    id: str
    name: str
    earnings: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class SessionRow:
    id: str
    title: str
    description: str | None
    date: str  # ISO date of start_time
    start_time: datetime
    end_time: datetime
    student_id: str
    student_name: str
    tutor_id: str
    tutor_name: str
    status: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ReportRow:
    id: str
    date: str  # ISO date, "" when the report is undated
    student: str
    student_id: str
    title: str
    subject: str
    status: str
    attendance: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (as returned by SQLite) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def display_name(user: User | None) -> str:
    """Full name when both parts are set, otherwise the email."""
    if user is None:
        return ""
    if user.first_name and user.last_name:
        return f"{user.first_name} {user.last_name}"
    return user.email


def initials(name: str) -> str:
    """Upper-cased first letter of each word ("Emma Wilson" -> "EW")."""
    return "".join(part[0] for part in name.split() if part).upper()


def attendance_level(attendance: float) -> str:
    """Badge level for an attendance percentage.

    Returns:
        "high" above 90, "medium" from 75 to 90, "low" below 75
    """
    if attendance > 90:
        return "high"
    if attendance >= 75:
        return "medium"
    return "low"


def session_status(session: TutoringSession, now: datetime | None = None) -> str:
    """Status label for a session relative to ``now``."""
    if session.canceled:
        return STATUS_CANCELED
    now = as_utc(now or datetime.now(timezone.utc))
    if as_utc(session.end_time) < now:
        return STATUS_COMPLETED
    return STATUS_UPCOMING


def student_row(student: Student) -> StudentRow:
    return StudentRow(
        id=student.id,
        name=display_name(student.user),
        grade=student.grade or "N/A",
        attendance=student.attendance or 0,
        sessions=len(student.sessions),
    )


def tutor_row(tutor: Tutor) -> TutorRow:
    return TutorRow(
        id=tutor.id,
        name=display_name(tutor.user),
        earnings=tutor.earnings or 0,
    )


def session_row(session: TutoringSession, now: datetime | None = None) -> SessionRow:
    start = as_utc(session.start_time)
    return SessionRow(
        id=session.id,
        title=session.title,
        description=session.description,
        date=start.date().isoformat(),
        start_time=start,
        end_time=as_utc(session.end_time),
        student_id=session.student_id,
        student_name=display_name(session.student.user if session.student else None),
        tutor_id=session.tutor_id,
        tutor_name=display_name(session.tutor.user if session.tutor else None),
        status=session_status(session, now),
    )


def report_row(report: Report) -> ReportRow:
    report_date: date | None = report.report_date
    return ReportRow(
        id=report.id,
        date=report_date.isoformat() if report_date else "",
        student=display_name(report.student.user if report.student else None),
        student_id=report.student_id,
        title=report.title,
        subject=report.subject or "",
        status=report.status,
        attendance=report.attendance or 0,
    )
