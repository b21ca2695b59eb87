"""Pydantic schemas for the Web API.

Request bodies and response models for users, students, tutors, sessions,
reports, settings and the dashboard page views.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Annotated, Literal

from pydantic import AfterValidator, BaseModel, Field, field_validator, model_validator

from tutorcenter.core.views import as_utc

SessionStatus = Literal["Upcoming", "Completed", "Canceled"]
Theme = Literal["light", "dark", "system"]

# SQLite hands back naive values; they are UTC
UtcDateTime = Annotated[datetime, AfterValidator(as_utc)]


def _reject_null(value):
    if value is None:
        raise ValueError("may not be null")
    return value


# =============================================================================
# USER SCHEMAS
# =============================================================================


class UserCreate(BaseModel):
    """Request body for creating a user.

    ``id`` may carry the identity provider's user id so that settings keyed
    by the authenticated user resolve to this record.
    """

    id: str | None = Field(default=None, min_length=1, max_length=64)
    email: str = Field(..., min_length=3, max_length=255)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)


class UserUpdate(BaseModel):
    email: str | None = Field(default=None, min_length=3, max_length=255)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)

    @field_validator("email")
    @classmethod
    def _not_null(cls, value):
        return _reject_null(value)


class UserResponse(BaseModel):
    id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    created_at: UtcDateTime
    updated_at: UtcDateTime

    model_config = {"from_attributes": True}


class _WithUser(BaseModel):
    """Either an existing ``user_id`` or a nested ``user`` to create."""

    user_id: str | None = None
    user: UserCreate | None = None

    @model_validator(mode="after")
    def _one_user_reference(self):
        if (self.user_id is None) == (self.user is None):
            raise ValueError("Provide exactly one of 'user_id' or 'user'")
        return self


# =============================================================================
# STUDENT SCHEMAS
# =============================================================================


class StudentCreate(_WithUser):
    """Request body for creating a student."""

    grade: str | None = Field(default=None, max_length=50)
    attendance: float | None = Field(default=None, ge=0, le=100)


class StudentUpdate(BaseModel):
    grade: str | None = Field(default=None, max_length=50)
    attendance: float | None = Field(default=None, ge=0, le=100)


class StudentRowResponse(BaseModel):
    """Flat student row for list views."""

    id: str
    name: str
    grade: str
    attendance: float
    sessions: int


class StudentResponse(BaseModel):
    """Full student record with its user."""

    id: str
    user_id: str
    grade: str | None = None
    attendance: float | None = None
    created_at: UtcDateTime
    updated_at: UtcDateTime
    user: UserResponse | None = None

    model_config = {"from_attributes": True}


# =============================================================================
# TUTOR SCHEMAS
# =============================================================================


class TutorCreate(_WithUser):
    """Request body for creating a tutor."""

    earnings: float | None = Field(default=None, ge=0)


class TutorUpdate(BaseModel):
    earnings: float | None = Field(default=None, ge=0)


class TutorRowResponse(BaseModel):
    id: str
    name: str
    earnings: float


class TutorResponse(BaseModel):
    id: str
    user_id: str
    earnings: float | None = None
    created_at: UtcDateTime
    updated_at: UtcDateTime
    user: UserResponse | None = None

    model_config = {"from_attributes": True}


# =============================================================================
# SESSION SCHEMAS
# =============================================================================


class SessionCreate(BaseModel):
    """Request body for scheduling a session."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    start_time: UtcDateTime
    end_time: UtcDateTime
    student_id: str
    tutor_id: str
    canceled: bool = False

    @model_validator(mode="after")
    def _ends_after_start(self):
        if self.end_time < self.start_time:
            raise ValueError("end_time must not be before start_time")
        return self


class SessionUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    start_time: UtcDateTime | None = None
    end_time: UtcDateTime | None = None
    student_id: str | None = None
    tutor_id: str | None = None
    canceled: bool | None = None

    @field_validator("title", "start_time", "end_time", "student_id", "tutor_id", "canceled")
    @classmethod
    def _not_null(cls, value):
        return _reject_null(value)


class SessionRowResponse(BaseModel):
    """Flat session row for list and calendar views."""

    id: str
    title: str
    description: str | None = None
    date: str
    start_time: datetime
    end_time: datetime
    student_id: str
    student_name: str
    tutor_id: str
    tutor_name: str
    status: SessionStatus


class SessionResponse(BaseModel):
    """Full session record with student and tutor."""

    id: str
    title: str
    description: str | None = None
    start_time: UtcDateTime
    end_time: UtcDateTime
    canceled: bool
    student_id: str
    tutor_id: str
    created_at: UtcDateTime
    updated_at: UtcDateTime
    student: StudentResponse | None = None
    tutor: TutorResponse | None = None

    model_config = {"from_attributes": True}


# =============================================================================
# REPORT SCHEMAS
# =============================================================================


class ReportCreate(BaseModel):
    student_id: str
    title: str = Field(..., min_length=1, max_length=200)
    subject: str | None = Field(default=None, max_length=100)
    content: str | None = None
    status: SessionStatus = "Completed"
    attendance: float = Field(default=0, ge=0, le=100)
    report_date: date | None = None


class ReportUpdate(BaseModel):
    student_id: str | None = None
    title: str | None = Field(default=None, min_length=1, max_length=200)
    subject: str | None = Field(default=None, max_length=100)
    content: str | None = None
    status: SessionStatus | None = None
    attendance: float | None = Field(default=None, ge=0, le=100)
    report_date: date | None = None

    @field_validator("student_id", "title", "status")
    @classmethod
    def _not_null(cls, value):
        return _reject_null(value)


class ReportRowResponse(BaseModel):
    id: str
    date: str
    student: str
    student_id: str
    title: str
    subject: str
    status: str
    attendance: float


class ReportResponse(BaseModel):
    id: str
    student_id: str
    title: str
    subject: str | None = None
    content: str | None = None
    status: str
    attendance: float | None = None
    report_date: date | None = None
    created_at: UtcDateTime
    updated_at: UtcDateTime
    student: StudentResponse | None = None

    model_config = {"from_attributes": True}


# =============================================================================
# SETTINGS SCHEMAS
# =============================================================================


class SettingCreate(BaseModel):
    theme: Theme = "system"
    language: str = Field(default="en", min_length=2, max_length=10)
    high_contrast: bool = False
    large_text: bool = False
    reduce_motion: bool = False
    email_notifications: bool = True
    push_notifications: bool = False
    session_reminders: bool = True


class SettingUpdate(BaseModel):
    theme: Theme | None = None
    language: str | None = Field(default=None, min_length=2, max_length=10)
    high_contrast: bool | None = None
    large_text: bool | None = None
    reduce_motion: bool | None = None
    email_notifications: bool | None = None
    push_notifications: bool | None = None
    session_reminders: bool | None = None


class SettingResponse(SettingCreate):
    id: str
    user_id: str
    created_at: UtcDateTime
    updated_at: UtcDateTime

    model_config = {"from_attributes": True}


class UpdateCountResponse(BaseModel):
    """Number of rows touched by a bulk update."""

    count: int


# =============================================================================
# PAGE VIEW SCHEMAS
# =============================================================================


class PageInfo(BaseModel):
    page: int
    per_page: int
    total: int
    total_pages: int
    start: int
    end: int
    has_previous: bool
    has_next: bool


class StudentsPageResponse(PageInfo):
    items: list[StudentRowResponse]
    grades: list[str]


class SessionsPageResponse(PageInfo):
    items: list[SessionRowResponse]


class ReportsPageResponse(PageInfo):
    items: list[ReportRowResponse]
    students: list[str]


class StudentProfileResponse(BaseModel):
    student: StudentRowResponse
    email: str
    initials: str
    attendance_level: Literal["high", "medium", "low"]
    recent_sessions: list[SessionRowResponse]


class DashboardResponse(BaseModel):
    total_students: int
    total_tutors: int
    upcoming_sessions: int
    completed_sessions: int
    average_attendance: float
    total_earnings: float
    next_sessions: list[SessionRowResponse]
    generated_at: datetime


class CalendarDay(BaseModel):
    date: str
    sessions: list[SessionRowResponse]


class CalendarResponse(BaseModel):
    month: str | None = None
    days: list[CalendarDay]


# =============================================================================
# MISC SCHEMAS
# =============================================================================


class ProtectedResponse(BaseModel):
    message: str
    user_id: str


class TableNameResponse(BaseModel):
    table_name: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
