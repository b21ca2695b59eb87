"""Settings endpoints.

Settings are scoped to the authenticated user; every handler requires a
signed-in request.
"""

import structlog
from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tutorcenter.db import repository
from tutorcenter.db.database import get_session
from tutorcenter.db.models import Setting
from tutorcenter.web.auth import require_user
from tutorcenter.web.errors import data_error
from tutorcenter.web.schemas import (
    SettingCreate,
    SettingResponse,
    SettingUpdate,
    UpdateCountResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=list[SettingResponse])
def list_settings(
    user_id: str = Depends(require_user), db: Session = Depends(get_session)
) -> list[SettingResponse]:
    """List the caller's settings."""
    try:
        settings = repository.list_settings_for_user(db, user_id)
    except SQLAlchemyError as e:
        raise data_error("settings.fetch_failed", "Failed to fetch settings", e)

    return [SettingResponse.model_validate(s) for s in settings]


@router.post("", response_model=SettingResponse, status_code=status.HTTP_201_CREATED)
def create_setting(
    body: SettingCreate,
    user_id: str = Depends(require_user),
    db: Session = Depends(get_session),
) -> SettingResponse:
    """Create a settings row owned by the caller."""
    try:
        setting = repository.create(db, Setting, {**body.model_dump(), "user_id": user_id})
        db.commit()
        response = SettingResponse.model_validate(setting)
    except SQLAlchemyError as e:
        raise data_error("settings.create_failed", "Failed to create setting", e)

    logger.info("settings.created", setting_id=setting.id, user_id=user_id)
    return response


@router.put("", response_model=UpdateCountResponse)
def update_settings(
    body: SettingUpdate,
    user_id: str = Depends(require_user),
    db: Session = Depends(get_session),
) -> UpdateCountResponse:
    """Apply the given fields to every settings row owned by the caller."""
    try:
        count = repository.update_settings_for_user(
            db, user_id, body.model_dump(exclude_unset=True, exclude_none=True)
        )
        db.commit()
    except SQLAlchemyError as e:
        raise data_error("settings.update_failed", "Failed to update setting", e)

    return UpdateCountResponse(count=count)
