"""Report export."""

from __future__ import annotations

import csv
import io
from typing import Iterable

from tutorcenter.core.views import ReportRow

CSV_HEADER = ["Date", "Student", "Subject", "Status", "Attendance"]


class ExportNotAvailableError(Exception):
    """Raised for export formats that are not offered yet."""

    def __init__(self, fmt: str):
        self.format = fmt
        super().__init__(f"{fmt.upper()} export feature will be implemented soon.")


def reports_to_csv(rows: Iterable[ReportRow]) -> str:
    """Render report rows as CSV text with a header line."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for row in rows:
        writer.writerow([row.date, row.student, row.subject, row.status, f"{row.attendance:g}"])
    return buffer.getvalue()


def export_reports(rows: Iterable[ReportRow], fmt: str) -> tuple[str, str]:
    """Export report rows.

    Returns:
        (content, media_type)

    Raises:
        ExportNotAvailableError: For "pdf"
        ValueError: For unknown formats
    """
    fmt = fmt.lower()
    if fmt == "csv":
        return reports_to_csv(rows), "text/csv"
    if fmt == "pdf":
        raise ExportNotAvailableError(fmt)
    raise ValueError(f"Unknown export format '{fmt}'")
