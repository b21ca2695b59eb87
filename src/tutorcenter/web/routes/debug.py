"""Diagnostic endpoints (dev only)."""

import structlog
from fastapi import APIRouter, status
from sqlalchemy.exc import SQLAlchemyError

from tutorcenter.db.database import list_table_names
from tutorcenter.web.errors import ApiError
from tutorcenter.web.schemas import TableNameResponse

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["debug"])


@router.get("/debug-db", response_model=list[TableNameResponse])
def debug_db() -> list[TableNameResponse]:
    """List the tables present in the connected database."""
    try:
        tables = list_table_names()
    except SQLAlchemyError as e:
        logger.error("debug_db.failed", error=str(e))
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")

    logger.info("debug_db", tables=len(tables))
    return [TableNameResponse(table_name=name) for name in tables]
