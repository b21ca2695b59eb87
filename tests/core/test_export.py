"""Tests for report export."""

import pytest

from tutorcenter.core.export import (
    CSV_HEADER,
    ExportNotAvailableError,
    export_reports,
    reports_to_csv,
)
from tutorcenter.core.views import ReportRow


def _row(**overrides) -> ReportRow:
    values = {
        "id": "r1",
        "date": "2025-03-01",
        "student": "Emma Wilson",
        "student_id": "st1",
        "title": "Weekly",
        "subject": "Math",
        "status": "Completed",
        "attendance": 92.0,
    }
    values.update(overrides)
    return ReportRow(**values)


def test_csv_header_only_when_empty():
    assert reports_to_csv([]) == ",".join(CSV_HEADER) + "\n"


def test_csv_rows():
    content = reports_to_csv([_row(), _row(date="2025-03-08", attendance=87.5)])
    assert content.splitlines() == [
        "Date,Student,Subject,Status,Attendance",
        "2025-03-01,Emma Wilson,Math,Completed,92",
        "2025-03-08,Emma Wilson,Math,Completed,87.5",
    ]


def test_csv_quotes_commas():
    content = reports_to_csv([_row(subject="Math, Algebra")])
    assert '"Math, Algebra"' in content


def test_export_csv_media_type():
    content, media_type = export_reports([_row()], "CSV")
    assert media_type == "text/csv"
    assert content.startswith("Date,")


def test_export_pdf_not_available():
    with pytest.raises(ExportNotAvailableError) as exc_info:
        export_reports([_row()], "pdf")
    assert str(exc_info.value) == "PDF export feature will be implemented soon."
    assert exc_info.value.format == "pdf"


def test_export_unknown_format():
    with pytest.raises(ValueError):
        export_reports([], "xlsx")
