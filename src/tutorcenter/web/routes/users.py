"""User endpoints."""

import structlog
from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tutorcenter.db import repository
from tutorcenter.db.database import get_session
from tutorcenter.db.models import User
from tutorcenter.utils.validators import validate_email
from tutorcenter.web.auth import enforce_configured_auth
from tutorcenter.web.errors import ApiError, NotFoundError, data_error
from tutorcenter.web.schemas import UserCreate, UserResponse, UserUpdate

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/users", tags=["users"], dependencies=[Depends(enforce_configured_auth)]
)


def _check_email(email: str | None) -> None:
    if email is not None and not validate_email(email):
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Invalid email format")


def create_user_record(db: Session, data: UserCreate) -> User:
    """Insert a user from a request body (shared by student/tutor creation).

    Raises:
        ApiError: 400 if the email is malformed
        sqlalchemy.exc.IntegrityError: If the email or id is already taken
    """
    _check_email(data.email)
    return repository.create(db, User, data.model_dump(exclude_none=True))


@router.get("", response_model=list[UserResponse])
def list_users(db: Session = Depends(get_session)) -> list[UserResponse]:
    """List all users."""
    try:
        users = repository.list_users(db)
    except SQLAlchemyError as e:
        raise data_error("users.fetch_failed", "Failed to fetch users", e)
    return [UserResponse.model_validate(u) for u in users]


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(body: UserCreate, db: Session = Depends(get_session)) -> UserResponse:
    """Create a user."""
    try:
        user = create_user_record(db, body)
        db.commit()
    except SQLAlchemyError as e:
        raise data_error("users.create_failed", "Failed to create user", e)

    logger.info("users.created", user_id=user.id)
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, db: Session = Depends(get_session)) -> UserResponse:
    """Get a specific user by ID."""
    try:
        user = repository.get_by_id(db, User, user_id)
    except SQLAlchemyError as e:
        raise data_error("users.fetch_failed", "Failed to fetch user", e)

    if user is None:
        raise NotFoundError("User")
    return UserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str, body: UserUpdate, db: Session = Depends(get_session)
) -> UserResponse:
    """Update a user's email or name."""
    _check_email(body.email)
    try:
        user = repository.get_by_id(db, User, user_id)
        if user is None:
            raise NotFoundError("User")
        repository.update_fields(db, user, body.model_dump(exclude_unset=True))
        db.commit()
    except SQLAlchemyError as e:
        raise data_error("users.update_failed", "Failed to update user", e)

    return UserResponse.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: str, db: Session = Depends(get_session)) -> None:
    """Delete a user and, by cascade, their student/tutor profile and settings."""
    try:
        user = repository.get_by_id(db, User, user_id)
        if user is None:
            raise NotFoundError("User")
        repository.delete(db, user)
        db.commit()
    except SQLAlchemyError as e:
        raise data_error("users.delete_failed", "Failed to delete user", e)

    logger.info("users.deleted", user_id=user_id)
