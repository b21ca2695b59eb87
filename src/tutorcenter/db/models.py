"""Database models.

Tables:
- users: Identity records (one per person, keyed by identity-provider id or uuid)
- students: Student profile (grade, attendance %) attached 1:1 to a user
- tutors: Tutor profile (earnings) attached 1:1 to a user
- sessions: Scheduled tutoring sessions between one student and one tutor
- reports: Per-student progress reports
- settings: Per-user display and notification preferences

Uniqueness, foreign keys and cascades are declared here and enforced by the
database.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, relationship


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base for all tables."""


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )


class User(TimestampMixin, Base):
    """A person known to the system (student, tutor or staff)."""

    __tablename__ = "users"

    id = Column(String(64), primary_key=True, default=_new_id)
    email = Column(String(255), unique=True, nullable=False)
    first_name = Column(String(100))
    last_name = Column(String(100))

    student = relationship(
        "Student",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    tutor = relationship(
        "Tutor",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    settings = relationship(
        "Setting", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email})>"


class Student(TimestampMixin, Base):
    __tablename__ = "students"

    id = Column(String(64), primary_key=True, default=_new_id)
    user_id = Column(
        String(64), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    grade = Column(String(50))
    attendance = Column(Float)

    user = relationship("User", back_populates="student")
    sessions = relationship(
        "TutoringSession",
        back_populates="student",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    reports = relationship(
        "Report", back_populates="student", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self):
        return f"<Student(id={self.id}, grade={self.grade})>"


class Tutor(TimestampMixin, Base):
    __tablename__ = "tutors"

    id = Column(String(64), primary_key=True, default=_new_id)
    user_id = Column(
        String(64), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    earnings = Column(Float)

    user = relationship("User", back_populates="tutor")
    sessions = relationship(
        "TutoringSession",
        back_populates="tutor",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Tutor(id={self.id}, earnings={self.earnings})>"


class TutoringSession(TimestampMixin, Base):
    """One scheduled lesson. Named to avoid clashing with the ORM Session."""

    __tablename__ = "sessions"

    id = Column(String(64), primary_key=True, default=_new_id)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    canceled = Column(Boolean, default=False, nullable=False)
    student_id = Column(
        String(64), ForeignKey("students.id", ondelete="CASCADE"), nullable=False
    )
    tutor_id = Column(
        String(64), ForeignKey("tutors.id", ondelete="CASCADE"), nullable=False
    )

    student = relationship("Student", back_populates="sessions")
    tutor = relationship("Tutor", back_populates="sessions")

    __table_args__ = (
        Index("idx_sessions_start_time", "start_time"),
        Index("idx_sessions_student", "student_id"),
        Index("idx_sessions_tutor", "tutor_id"),
    )

    def __repr__(self):
        return f"<TutoringSession(id={self.id}, title={self.title})>"


class Report(TimestampMixin, Base):
    __tablename__ = "reports"

    id = Column(String(64), primary_key=True, default=_new_id)
    student_id = Column(
        String(64), ForeignKey("students.id", ondelete="CASCADE"), nullable=False
    )
    title = Column(String(200), nullable=False)
    subject = Column(String(100))
    content = Column(Text)
    status = Column(String(20), default="Completed", nullable=False)
    attendance = Column(Float, default=0)
    report_date = Column(Date)

    student = relationship("Student", back_populates="reports")

    __table_args__ = (Index("idx_reports_student", "student_id"),)


class Setting(TimestampMixin, Base):
    """Display and notification preferences for one user."""

    __tablename__ = "settings"

    id = Column(String(64), primary_key=True, default=_new_id)
    user_id = Column(
        String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    theme = Column(String(20), default="system", nullable=False)
    language = Column(String(10), default="en", nullable=False)
    high_contrast = Column(Boolean, default=False, nullable=False)
    large_text = Column(Boolean, default=False, nullable=False)
    reduce_motion = Column(Boolean, default=False, nullable=False)
    email_notifications = Column(Boolean, default=True, nullable=False)
    push_notifications = Column(Boolean, default=False, nullable=False)
    session_reminders = Column(Boolean, default=True, nullable=False)

    user = relationship("User", back_populates="settings")
