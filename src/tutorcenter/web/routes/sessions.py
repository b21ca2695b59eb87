"""Tutoring session endpoints."""

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tutorcenter.core.views import as_utc, session_row
from tutorcenter.db import repository
from tutorcenter.db.database import get_session
from tutorcenter.db.models import TutoringSession
from tutorcenter.web.auth import enforce_configured_auth
from tutorcenter.web.errors import ApiError, NotFoundError, data_error
from tutorcenter.web.schemas import (
    SessionCreate,
    SessionResponse,
    SessionRowResponse,
    SessionUpdate,
)

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/sessions", tags=["sessions"], dependencies=[Depends(enforce_configured_auth)]
)


@router.get("", response_model=list[SessionRowResponse])
def list_sessions(db: Session = Depends(get_session)) -> list[SessionRowResponse]:
    """List all sessions as flat rows.

    Each row carries the student and tutor display names and a status
    label (Upcoming, Completed or Canceled) computed against the current
    time.
    """
    try:
        sessions = repository.list_sessions(db)
    except SQLAlchemyError as e:
        raise data_error("sessions.fetch_failed", "Failed to fetch sessions", e)

    now = datetime.now(timezone.utc)
    return [SessionRowResponse(**session_row(s, now).to_dict()) for s in sessions]


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
def create_session(body: SessionCreate, db: Session = Depends(get_session)) -> SessionResponse:
    """Schedule a session between a student and a tutor."""
    try:
        session = repository.create(db, TutoringSession, body.model_dump())
        db.commit()
        response = SessionResponse.model_validate(session)
    except SQLAlchemyError as e:
        raise data_error("sessions.create_failed", "Failed to create session", e)

    logger.info(
        "sessions.created",
        session_id=session.id,
        student_id=session.student_id,
        tutor_id=session.tutor_id,
    )
    return response


@router.get("/{session_id}", response_model=SessionResponse)
def get_session_by_id(session_id: str, db: Session = Depends(get_session)) -> SessionResponse:
    """Get session details with student and tutor (each with their user)."""
    try:
        session = repository.get_session_by_id(db, session_id)
    except SQLAlchemyError as e:
        raise data_error("sessions.fetch_failed", "Failed to fetch session", e)

    if session is None:
        raise NotFoundError("Session")
    return SessionResponse.model_validate(session)


@router.put("/{session_id}", response_model=SessionResponse)
def update_session(
    session_id: str, body: SessionUpdate, db: Session = Depends(get_session)
) -> SessionResponse:
    """Update a session (reschedule, reassign, cancel)."""
    changes = body.model_dump(exclude_unset=True)
    try:
        session = repository.get_session_by_id(db, session_id)
        if session is None:
            raise NotFoundError("Session")

        start = changes.get("start_time") or session.start_time
        end = changes.get("end_time") or session.end_time
        if as_utc(end) < as_utc(start):
            raise ApiError(
                status.HTTP_422_UNPROCESSABLE_ENTITY, "end_time must not be before start_time"
            )

        repository.update_fields(db, session, changes)
        db.commit()
        response = SessionResponse.model_validate(session)
    except SQLAlchemyError as e:
        raise data_error("sessions.update_failed", "Failed to update session", e)

    return response


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(session_id: str, db: Session = Depends(get_session)) -> None:
    """Delete a session by ID."""
    try:
        session = repository.get_by_id(db, TutoringSession, session_id)
        if session is None:
            raise NotFoundError("Session")
        repository.delete(db, session)
        db.commit()
    except SQLAlchemyError as e:
        raise data_error("sessions.delete_failed", "Failed to delete session", e)

    logger.info("sessions.deleted", session_id=session_id)

