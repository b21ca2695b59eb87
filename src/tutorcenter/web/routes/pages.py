"""Dashboard page views.

Read-only endpoints that return what each dashboard page renders: the
fetched rows after search, filters and pagination, plus the values the
page's filter drop-downs offer.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

import structlog
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tutorcenter.core.dashboard import build_dashboard, group_by_date
from tutorcenter.core.export import ExportNotAvailableError, export_reports
from tutorcenter.core.listing import (
    ITEMS_PER_PAGE,
    Page,
    filter_reports,
    filter_sessions,
    filter_students,
    paginate,
    unique_values,
)
from tutorcenter.core.views import (
    ReportRow,
    SessionRow,
    attendance_level,
    initials,
    report_row,
    session_row,
    student_row,
    tutor_row,
)
from tutorcenter.db import repository
from tutorcenter.db.database import get_session
from tutorcenter.utils.validators import InvalidMonthError
from tutorcenter.web.auth import enforce_configured_auth
from tutorcenter.web.errors import ApiError, NotFoundError, data_error
from tutorcenter.web.schemas import (
    CalendarDay,
    CalendarResponse,
    DashboardResponse,
    ReportRowResponse,
    ReportsPageResponse,
    SessionRowResponse,
    SessionsPageResponse,
    StudentProfileResponse,
    StudentRowResponse,
    StudentsPageResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/pages", tags=["pages"], dependencies=[Depends(enforce_configured_auth)]
)

RECENT_SESSIONS_LIMIT = 5


def _page_info(page: Page) -> dict:
    return {
        "page": page.page,
        "per_page": page.per_page,
        "total": page.total,
        "total_pages": page.total_pages,
        "start": page.start,
        "end": page.end,
        "has_previous": page.has_previous,
        "has_next": page.has_next,
    }


def _session_rows(db: Session, student_id: str | None = None) -> list[SessionRow]:
    now = datetime.now(timezone.utc)
    return [session_row(s, now) for s in repository.list_sessions(db, student_id=student_id)]


def _report_rows(db: Session) -> list[ReportRow]:
    return [report_row(r) for r in repository.list_reports(db)]


@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(db: Session = Depends(get_session)) -> DashboardResponse:
    """Summary counts and the next upcoming sessions."""
    try:
        students = [student_row(s) for s in repository.list_students(db)]
        tutors = [tutor_row(t) for t in repository.list_tutors(db)]
        sessions = _session_rows(db)
    except SQLAlchemyError as e:
        raise data_error("dashboard.fetch_failed", "Failed to fetch dashboard", e)

    summary = build_dashboard(students, tutors, sessions)
    return DashboardResponse(
        total_students=summary.total_students,
        total_tutors=summary.total_tutors,
        upcoming_sessions=summary.upcoming_sessions,
        completed_sessions=summary.completed_sessions,
        average_attendance=summary.average_attendance,
        total_earnings=summary.total_earnings,
        next_sessions=[SessionRowResponse(**s.to_dict()) for s in summary.next_sessions],
        generated_at=summary.generated_at,
    )


@router.get("/students", response_model=StudentsPageResponse)
def students_page(
    search: str = Query(default="", max_length=100),
    grade: str = Query(default="all"),
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=ITEMS_PER_PAGE, ge=1, le=100),
    db: Session = Depends(get_session),
) -> StudentsPageResponse:
    """Students list filtered by name search and grade."""
    try:
        rows = [student_row(s) for s in repository.list_students(db)]
    except SQLAlchemyError as e:
        raise data_error("students.fetch_failed", "Failed to fetch students", e)

    result = paginate(filter_students(rows, search=search, grade=grade), page, per_page)
    return StudentsPageResponse(
        **_page_info(result),
        items=[StudentRowResponse(**r.to_dict()) for r in result.items],
        grades=sorted(unique_values(rows, "grade")),
    )


@router.get("/students/{student_id}", response_model=StudentProfileResponse)
def student_profile(student_id: str, db: Session = Depends(get_session)) -> StudentProfileResponse:
    """Profile card for one student with their most recent sessions."""
    try:
        student = repository.get_student(db, student_id)
        if student is None:
            raise NotFoundError("Student")
        sessions = _session_rows(db, student_id=student_id)
    except SQLAlchemyError as e:
        raise data_error("students.fetch_failed", "Failed to fetch student", e)

    row = student_row(student)
    recent = sorted(sessions, key=lambda s: s.start_time, reverse=True)[:RECENT_SESSIONS_LIMIT]

    return StudentProfileResponse(
        student=StudentRowResponse(**row.to_dict()),
        email=student.user.email,
        initials=initials(row.name),
        attendance_level=attendance_level(row.attendance),
        recent_sessions=[SessionRowResponse(**s.to_dict()) for s in recent],
    )


@router.get("/sessions", response_model=SessionsPageResponse)
def sessions_page(
    status_filter: str = Query(default="all", alias="status"),
    date_from: str | None = Query(default=None),
    date_to: str | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=ITEMS_PER_PAGE, ge=1, le=100),
    db: Session = Depends(get_session),
) -> SessionsPageResponse:
    """Sessions list filtered by status and an inclusive date range."""
    try:
        rows = _session_rows(db)
    except SQLAlchemyError as e:
        raise data_error("sessions.fetch_failed", "Failed to fetch sessions", e)

    filtered = filter_sessions(rows, status=status_filter, date_from=date_from, date_to=date_to)
    result = paginate(filtered, page, per_page)
    return SessionsPageResponse(
        **_page_info(result),
        items=[SessionRowResponse(**r.to_dict()) for r in result.items],
    )


@router.get("/reports", response_model=ReportsPageResponse)
def reports_page(
    student: str = Query(default="all"),
    status_filter: str = Query(default="all", alias="status"),
    date_from: str | None = Query(default=None),
    date_to: str | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=ITEMS_PER_PAGE, ge=1, le=100),
    db: Session = Depends(get_session),
) -> ReportsPageResponse:
    """Reports list filtered by student, status and date range."""
    try:
        rows = _report_rows(db)
    except SQLAlchemyError as e:
        raise data_error("reports.fetch_failed", "Failed to fetch reports", e)

    filtered = filter_reports(
        rows, student=student, status=status_filter, date_from=date_from, date_to=date_to
    )
    result = paginate(filtered, page, per_page)
    return ReportsPageResponse(
        **_page_info(result),
        items=[ReportRowResponse(**r.to_dict()) for r in result.items],
        students=unique_values(rows, "student"),
    )


@router.get("/reports/export")
def export_reports_page(
    fmt: Literal["csv", "pdf"] = Query(default="csv", alias="format"),
    student: str = Query(default="all"),
    status_filter: str = Query(default="all", alias="status"),
    date_from: str | None = Query(default=None),
    date_to: str | None = Query(default=None),
    db: Session = Depends(get_session),
) -> Response:
    """Download the filtered reports. Only CSV is offered for now."""
    try:
        rows = _report_rows(db)
    except SQLAlchemyError as e:
        raise data_error("reports.fetch_failed", "Failed to fetch reports", e)

    filtered = filter_reports(
        rows, student=student, status=status_filter, date_from=date_from, date_to=date_to
    )
    try:
        content, media_type = export_reports(filtered, fmt)
    except ExportNotAvailableError as e:
        raise ApiError(status.HTTP_501_NOT_IMPLEMENTED, str(e))

    logger.info("reports.exported", format=fmt, rows=len(filtered))
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="reports.{fmt}"'},
    )


@router.get("/calendar", response_model=CalendarResponse)
def calendar(
    month: str | None = Query(default=None, description="YYYY-MM"),
    db: Session = Depends(get_session),
) -> CalendarResponse:
    """Sessions grouped by day, optionally for a single month."""
    try:
        rows = _session_rows(db)
    except SQLAlchemyError as e:
        raise data_error("sessions.fetch_failed", "Failed to fetch sessions", e)

    try:
        days = group_by_date(rows, month=month)
    except InvalidMonthError as e:
        raise ApiError(status.HTTP_400_BAD_REQUEST, str(e))

    return CalendarResponse(
        month=month,
        days=[
            CalendarDay(date=day, sessions=[SessionRowResponse(**s.to_dict()) for s in items])
            for day, items in days.items()
        ],
    )
