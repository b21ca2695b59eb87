"""Tutor endpoints."""

import structlog
from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tutorcenter.core.views import tutor_row
from tutorcenter.db import repository
from tutorcenter.db.database import get_session
from tutorcenter.db.models import Tutor
from tutorcenter.web.auth import enforce_configured_auth
from tutorcenter.web.errors import NotFoundError, data_error
from tutorcenter.web.routes.users import create_user_record
from tutorcenter.web.schemas import (
    TutorCreate,
    TutorResponse,
    TutorRowResponse,
    TutorUpdate,
)

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/tutors", tags=["tutors"], dependencies=[Depends(enforce_configured_auth)]
)


@router.get("", response_model=list[TutorRowResponse])
def list_tutors(db: Session = Depends(get_session)) -> list[TutorRowResponse]:
    """List all tutors as flat rows."""
    try:
        tutors = repository.list_tutors(db)
    except SQLAlchemyError as e:
        raise data_error("tutors.fetch_failed", "Failed to fetch tutors", e)

    return [TutorRowResponse(**tutor_row(t).to_dict()) for t in tutors]


@router.post("", response_model=TutorResponse, status_code=status.HTTP_201_CREATED)
def create_tutor(body: TutorCreate, db: Session = Depends(get_session)) -> TutorResponse:
    """Create a tutor for an existing user, or together with a new user."""
    try:
        user_id = body.user_id
        if body.user is not None:
            user_id = create_user_record(db, body.user).id

        tutor = repository.create(db, Tutor, {"user_id": user_id, "earnings": body.earnings})
        db.commit()
        response = TutorResponse.model_validate(tutor)
    except SQLAlchemyError as e:
        raise data_error("tutors.create_failed", "Failed to create tutor", e)

    logger.info("tutors.created", tutor_id=tutor.id, user_id=user_id)
    return response


@router.get("/{tutor_id}", response_model=TutorResponse)
def get_tutor(tutor_id: str, db: Session = Depends(get_session)) -> TutorResponse:
    """Get a specific tutor by ID, with the related user."""
    try:
        tutor = repository.get_tutor(db, tutor_id)
    except SQLAlchemyError as e:
        raise data_error("tutors.fetch_failed", "Failed to fetch tutor", e)

    if tutor is None:
        raise NotFoundError("Tutor")
    return TutorResponse.model_validate(tutor)


@router.put("/{tutor_id}", response_model=TutorResponse)
def update_tutor(
    tutor_id: str, body: TutorUpdate, db: Session = Depends(get_session)
) -> TutorResponse:
    try:
        tutor = repository.get_tutor(db, tutor_id)
        if tutor is None:
            raise NotFoundError("Tutor")
        repository.update_fields(db, tutor, body.model_dump(exclude_unset=True))
        db.commit()
        response = TutorResponse.model_validate(tutor)
    except SQLAlchemyError as e:
        raise data_error("tutors.update_failed", "Failed to update tutor", e)

    return response


@router.delete("/{tutor_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tutor(tutor_id: str, db: Session = Depends(get_session)) -> None:
    try:
        tutor = repository.get_by_id(db, Tutor, tutor_id)
        if tutor is None:
            raise NotFoundError("Tutor")
        repository.delete(db, tutor)
        db.commit()
    except SQLAlchemyError as e:
        raise data_error("tutors.delete_failed", "Failed to delete tutor", e)

    logger.info("tutors.deleted", tutor_id=tutor_id)
