"""Student endpoints."""

import structlog
from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tutorcenter.core.views import student_row
from tutorcenter.db import repository
from tutorcenter.db.database import get_session
from tutorcenter.db.models import Student
from tutorcenter.web.auth import enforce_configured_auth
from tutorcenter.web.errors import NotFoundError, data_error
from tutorcenter.web.routes.users import create_user_record
from tutorcenter.web.schemas import (
    StudentCreate,
    StudentResponse,
    StudentRowResponse,
    StudentUpdate,
)

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/students", tags=["students"], dependencies=[Depends(enforce_configured_auth)]
)


@router.get("", response_model=list[StudentRowResponse])
def list_students(db: Session = Depends(get_session)) -> list[StudentRowResponse]:
    """List all students as flat rows (name, grade, attendance, session count)."""
    try:
        students = repository.list_students(db)
    except SQLAlchemyError as e:
        raise data_error("students.fetch_failed", "Failed to fetch students", e)

    return [StudentRowResponse(**student_row(s).to_dict()) for s in students]


@router.post("", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
def create_student(body: StudentCreate, db: Session = Depends(get_session)) -> StudentResponse:
    """Create a student for an existing user, or together with a new user."""
    try:
        user_id = body.user_id
        if body.user is not None:
            user_id = create_user_record(db, body.user).id

        student = repository.create(
            db,
            Student,
            {"user_id": user_id, "grade": body.grade, "attendance": body.attendance},
        )
        db.commit()
        response = StudentResponse.model_validate(student)
    except SQLAlchemyError as e:
        raise data_error("students.create_failed", "Failed to create student", e)

    logger.info("students.created", student_id=student.id, user_id=user_id)
    return response


@router.get("/{student_id}", response_model=StudentResponse)
def get_student(student_id: str, db: Session = Depends(get_session)) -> StudentResponse:
    """Get a specific student by ID, with the related user."""
    try:
        student = repository.get_student(db, student_id)
    except SQLAlchemyError as e:
        raise data_error("students.fetch_failed", "Failed to fetch student", e)

    if student is None:
        raise NotFoundError("Student")
    return StudentResponse.model_validate(student)


@router.put("/{student_id}", response_model=StudentResponse)
def update_student(
    student_id: str, body: StudentUpdate, db: Session = Depends(get_session)
) -> StudentResponse:
    """Update grade and/or attendance."""
    try:
        student = repository.get_student(db, student_id)
        if student is None:
            raise NotFoundError("Student")
        repository.update_fields(db, student, body.model_dump(exclude_unset=True))
        db.commit()
        response = StudentResponse.model_validate(student)
    except SQLAlchemyError as e:
        raise data_error("students.update_failed", "Failed to update student", e)

    return response


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_student(student_id: str, db: Session = Depends(get_session)) -> None:
    """Delete a student by ID. Their sessions and reports go with them."""
    try:
        student = repository.get_by_id(db, Student, student_id)
        if student is None:
            raise NotFoundError("Student")
        repository.delete(db, student)
        db.commit()
    except SQLAlchemyError as e:
        raise data_error("students.delete_failed", "Failed to delete student", e)

    logger.info("students.deleted", student_id=student_id)
