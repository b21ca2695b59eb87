"""Repository functions over the ORM models.

Provides the CRUD operations used by the route handlers. Each function
takes an open ORM session and never commits; the caller owns the
transaction.
"""

from __future__ import annotations

from typing import Any, TypeVar

import structlog
from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload

from tutorcenter.db.models import (
    Base,
    Report,
    Setting,
    Student,
    Tutor,
    TutoringSession,
    User,
)

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


# =============================================================================
# GENERIC CRUD
# =============================================================================


def get_by_id(db: Session, model: type[ModelT], entity_id: str, *options) -> ModelT | None:
    """Get a row by primary key.

    Args:
        db: Open ORM session
        model: Mapped class
        entity_id: Primary key value
        options: Loader options (e.g. selectinload) applied to the query

    Returns:
        The row if found, None otherwise
    """
    stmt = select(model).where(model.id == entity_id)
    if options:
        stmt = stmt.options(*options)
    return db.scalars(stmt).first()


def create(db: Session, model: type[ModelT], data: dict[str, Any]) -> ModelT:
    """Insert a new row and flush so database constraints are checked.

    Raises:
        sqlalchemy.exc.IntegrityError: On unique or foreign-key violations
    """
    obj = model(**data)
    db.add(obj)
    db.flush()
    db.refresh(obj)
    logger.debug("repository.created", table=model.__tablename__, id=obj.id)
    return obj


def update_fields(db: Session, obj: ModelT, data: dict[str, Any]) -> ModelT:
    """Apply field values to an existing row and flush."""
    for key, value in data.items():
        setattr(obj, key, value)
    db.flush()
    db.refresh(obj)
    return obj


def delete(db: Session, obj: Base) -> None:
    """Delete a row. Dependent rows are removed by the database cascade."""
    db.delete(obj)
    db.flush()


# =============================================================================
# USERS
# =============================================================================


def list_users(db: Session) -> list[User]:
    return list(db.scalars(select(User).order_by(User.created_at)).all())


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.scalars(select(User).where(User.email == email)).first()


# =============================================================================
# STUDENTS / TUTORS
# =============================================================================


def list_students(db: Session) -> list[Student]:
    """All students with their user and sessions loaded."""
    stmt = (
        select(Student)
        .options(selectinload(Student.user), selectinload(Student.sessions))
        .order_by(Student.created_at)
    )
    return list(db.scalars(stmt).all())


def get_student(db: Session, student_id: str) -> Student | None:
    return get_by_id(
        db, Student, student_id, selectinload(Student.user), selectinload(Student.sessions)
    )


def list_tutors(db: Session) -> list[Tutor]:
    stmt = select(Tutor).options(selectinload(Tutor.user)).order_by(Tutor.created_at)
    return list(db.scalars(stmt).all())


def get_tutor(db: Session, tutor_id: str) -> Tutor | None:
    return get_by_id(db, Tutor, tutor_id, selectinload(Tutor.user))


# =============================================================================
# SESSIONS
# =============================================================================


def _session_loaders() -> tuple:
    return (
        selectinload(TutoringSession.student).selectinload(Student.user),
        selectinload(TutoringSession.tutor).selectinload(Tutor.user),
    )


def list_sessions(db: Session, student_id: str | None = None) -> list[TutoringSession]:
    """All sessions ordered by start time, with student and tutor users loaded.

    Args:
        db: Open ORM session
        student_id: Restrict to one student's sessions
    """
    stmt = select(TutoringSession).options(*_session_loaders())
    if student_id is not None:
        stmt = stmt.where(TutoringSession.student_id == student_id)
    stmt = stmt.order_by(TutoringSession.start_time)
    return list(db.scalars(stmt).all())


def get_session_by_id(db: Session, session_id: str) -> TutoringSession | None:
    return get_by_id(db, TutoringSession, session_id, *_session_loaders())


# =============================================================================
# REPORTS
# =============================================================================


def list_reports(db: Session) -> list[Report]:
    stmt = (
        select(Report)
        .options(selectinload(Report.student).selectinload(Student.user))
        .order_by(Report.report_date.desc(), Report.created_at.desc())
    )
    return list(db.scalars(stmt).all())


def get_report(db: Session, report_id: str) -> Report | None:
    return get_by_id(
        db, Report, report_id, selectinload(Report.student).selectinload(Student.user)
    )


# =============================================================================
# SETTINGS
# =============================================================================


def list_settings_for_user(db: Session, user_id: str) -> list[Setting]:
    stmt = select(Setting).where(Setting.user_id == user_id).order_by(Setting.created_at)
    return list(db.scalars(stmt).all())


def update_settings_for_user(db: Session, user_id: str, data: dict[str, Any]) -> int:
    """Update every settings row owned by a user.

    Returns:
        Number of rows updated
    """
    if not data:
        return len(list_settings_for_user(db, user_id))

    result = db.execute(
        update(Setting)
        .where(Setting.user_id == user_id)
        .values(**data)
        .execution_options(synchronize_session="evaluate")
    )
    db.flush()
    logger.debug("repository.settings_updated", user_id=user_id, count=result.rowcount)
    return result.rowcount
