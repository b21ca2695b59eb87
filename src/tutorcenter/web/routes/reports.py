"""Report endpoints."""

import structlog
from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tutorcenter.db import repository
from tutorcenter.db.database import get_session
from tutorcenter.db.models import Report
from tutorcenter.web.auth import enforce_configured_auth
from tutorcenter.web.errors import NotFoundError, data_error
from tutorcenter.web.schemas import ReportCreate, ReportResponse, ReportUpdate

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/reports", tags=["reports"], dependencies=[Depends(enforce_configured_auth)]
)


@router.get("", response_model=list[ReportResponse])
def list_reports(db: Session = Depends(get_session)) -> list[ReportResponse]:
    """List all reports, newest first, each with its student and user."""
    try:
        reports = repository.list_reports(db)
    except SQLAlchemyError as e:
        raise data_error("reports.fetch_failed", "Failed to fetch reports", e)

    return [ReportResponse.model_validate(r) for r in reports]


@router.post("", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
def create_report(body: ReportCreate, db: Session = Depends(get_session)) -> ReportResponse:
    try:
        report = repository.create(db, Report, body.model_dump())
        db.commit()
        response = ReportResponse.model_validate(report)
    except SQLAlchemyError as e:
        raise data_error("reports.create_failed", "Failed to create report", e)

    logger.info("reports.created", report_id=report.id, student_id=report.student_id)
    return response


@router.get("/{report_id}", response_model=ReportResponse)
def get_report(report_id: str, db: Session = Depends(get_session)) -> ReportResponse:
    try:
        report = repository.get_report(db, report_id)
    except SQLAlchemyError as e:
        raise data_error("reports.fetch_failed", "Failed to fetch report", e)

    if report is None:
        raise NotFoundError("Report")
    return ReportResponse.model_validate(report)


@router.put("/{report_id}", response_model=ReportResponse)
def update_report(
    report_id: str, body: ReportUpdate, db: Session = Depends(get_session)
) -> ReportResponse:
    try:
        report = repository.get_report(db, report_id)
        if report is None:
            raise NotFoundError("Report")
        repository.update_fields(db, report, body.model_dump(exclude_unset=True))
        db.commit()
        response = ReportResponse.model_validate(report)
    except SQLAlchemyError as e:
        raise data_error("reports.update_failed", "Failed to update report", e)

    return response


@router.delete("/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_report(report_id: str, db: Session = Depends(get_session)) -> None:
    try:
        report = repository.get_by_id(db, Report, report_id)
        if report is None:
            raise NotFoundError("Report")
        repository.delete(db, report)
        db.commit()
    except SQLAlchemyError as e:
        raise data_error("reports.delete_failed", "Failed to delete report", e)

    logger.info("reports.deleted", report_id=report_id)
