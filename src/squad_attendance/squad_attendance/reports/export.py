from __future__ import annotations

import csv
import io
import json
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from ..attendance.model import AttendanceReportRow
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..common.validators import require_choice
from ..core.constants import DEFAULT_EXPORT_DAYS, EXPORT_ROW_LIMIT
from ..core.enums import ExportFormat

EXPORT_COLUMNS = [
    "Date",
    "User Name",
    "Squad",
    "Check In",
    "Check Out",
    "Total Hours",
    "Late Minutes",
    "Compliance Status",
    "Notes",
]

NO_SQUAD = "No Squad"


@dataclass(frozen=True)
class ExportFile:
    content: str
    filename: str
    mimetype: str


def period_range(period: str, today: date) -> tuple[date, date]:
    """Date range for an export period.

    `today`, `week` (from the latest Sunday), `month` (from the 1st); anything
    else means the last 30 days.
    """

    if period == "today":
        return today, today
    if period == "week":
        days_since_sunday = (today.weekday() + 1) % 7
        return today - timedelta(days=days_since_sunday), today
    if period == "month":
        return today.replace(day=1), today
    return today - timedelta(days=DEFAULT_EXPORT_DAYS), today


def to_export_row(r: AttendanceReportRow) -> dict:
    return {
        "Date": r.work_date.strftime("%Y-%m-%d"),
        "User Name": r.email or "Unknown",
        "Squad": r.squad_name or NO_SQUAD,
        "Check In": r.check_in_time.isoformat() if r.check_in_time else "",
        "Check Out": r.check_out_time.isoformat() if r.check_out_time else "",
        "Total Hours": r.total_hours or 0,
        "Late Minutes": r.late_minutes or 0,
        "Compliance Status": r.compliance_status.value,
        "Notes": r.compliance_notes or "",
    }


def to_csv(rows: list[dict]) -> str:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=EXPORT_COLUMNS)
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return out.getvalue()


def to_json(rows: list[dict]) -> str:
    return json.dumps(rows, indent=2)


class ExportService:
    def __init__(self, attendance: AttendanceRepository, *, row_limit: int = EXPORT_ROW_LIMIT):
        self._attendance = attendance
        self._row_limit = int(row_limit)

    def export_rows(self, *, period: str, squad_id: Optional[int] = None, today: Optional[date] = None) -> list[dict]:
        today = today or now_local().date()
        start, end = period_range(period, today)
        rows = self._attendance.get_report_rows(
            start_date=start,
            end_date=end,
            squad_ids=(squad_id,) if squad_id is not None else (),
            limit=self._row_limit,
        )
        return [to_export_row(r) for r in rows]

    def export(
        self,
        *,
        format: str = ExportFormat.CSV.value,
        period: str = "month",
        squad_id: Optional[int] = None,
        today: Optional[date] = None,
    ) -> ExportFile:
        fmt = require_choice(format, ExportFormat, "export format")
        today = today or now_local().date()
        rows = self.export_rows(period=period, squad_id=squad_id, today=today)

        filename = f"attendance-report-{period}-{today.isoformat()}.{fmt.value}"
        if fmt == ExportFormat.CSV:
            return ExportFile(content=to_csv(rows), filename=filename, mimetype="text/csv")
        return ExportFile(content=to_json(rows), filename=filename, mimetype="application/json")
