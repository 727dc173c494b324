from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import ComplianceStatus, ReportFrequency, ReportStatus, ReportType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json
from .model import ReportAutomation, ReportConfig, ReportFilters, ReportMetrics, SquadPerformance
from .repository import ReportRepository

_SELECT = """
    SELECT report_id, title, report_type, start_date, end_date, filters,
           auto_generate, frequency, email_recipients, next_scheduled_run,
           status, metrics, generated_at, created_by
    FROM reports
"""


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, report_id: int) -> Optional[ReportConfig]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE report_id=%s", (int(report_id),))
            r = fetchone(cur)
            return self._to_report(r) if r else None

    def create(self, report: ReportConfig) -> int:
        a = report.automation
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO reports(
                    title, report_type, start_date, end_date, filters,
                    auto_generate, frequency, email_recipients, next_scheduled_run, status, created_by
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    report.title,
                    report.report_type.value,
                    report.start_date,
                    report.end_date,
                    dump_json(report.filters),
                    int(a.auto_generate),
                    a.frequency.value if a.frequency else None,
                    dump_json(list(a.email_recipients)),
                    a.next_scheduled_run,
                    report.status.value,
                    report.created_by,
                ),
            )
            return int(cur.lastrowid)

    def save_generation(self, report_id: int, *, metrics: ReportMetrics, generated_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE reports SET metrics=%s, generated_at=%s, status=%s WHERE report_id=%s",
                (dump_json(metrics), generated_at, ReportStatus.GENERATED.value, int(report_id)),
            )
            return cur.rowcount > 0

    def update_status(self, report_id: int, status: ReportStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE reports SET status=%s WHERE report_id=%s", (status.value, int(report_id)))
            return cur.rowcount > 0

    def update_next_run(self, report_id: int, next_run: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE reports SET next_scheduled_run=%s WHERE report_id=%s",
                (next_run, int(report_id)),
            )
            return cur.rowcount > 0

    def list_due(self, now: datetime) -> Sequence[ReportConfig]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE auto_generate=1 AND next_scheduled_run <= %s AND status <> %s
                ORDER BY next_scheduled_run ASC
                """,
                (now, ReportStatus.ARCHIVED.value),
            )
            return [self._to_report(r) for r in fetchall(cur)]

    def list_automated(self) -> Sequence[ReportConfig]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE auto_generate=1 ORDER BY next_scheduled_run ASC")
            return [self._to_report(r) for r in fetchall(cur)]

    @staticmethod
    def _to_report(r: dict) -> ReportConfig:
        filters = load_json(r.get("filters")) or {}
        metrics = load_json(r.get("metrics"))
        return ReportConfig(
            report_id=int(r["report_id"]),
            title=r["title"],
            report_type=ReportType(r["report_type"]),
            start_date=r["start_date"],
            end_date=r["end_date"],
            filters=ReportFilters(
                squad_ids=tuple(int(v) for v in filters.get("squad_ids") or ()),
                user_ids=tuple(int(v) for v in filters.get("user_ids") or ()),
                compliance_statuses=tuple(ComplianceStatus(v) for v in filters.get("compliance_statuses") or ()),
            ),
            automation=ReportAutomation(
                auto_generate=bool(r.get("auto_generate")),
                frequency=ReportFrequency(r["frequency"]) if r.get("frequency") else None,
                email_recipients=tuple(load_json(r.get("email_recipients")) or ()),
                next_scheduled_run=r.get("next_scheduled_run"),
            ),
            status=ReportStatus(r["status"]),
            metrics=_metrics_from_dict(metrics) if metrics else None,
            generated_at=r.get("generated_at"),
            created_by=r.get("created_by"),
        )


def _metrics_from_dict(data: dict) -> ReportMetrics:
    return ReportMetrics(
        total_members=int(data.get("total_members") or 0),
        total_attendance_logs=int(data.get("total_attendance_logs") or 0),
        compliance_rate=float(data.get("compliance_rate") or 0),
        average_working_hours=float(data.get("average_working_hours") or 0),
        absence_days=int(data.get("absence_days") or 0),
        top_performing_squads=tuple(SquadPerformance(**s) for s in data.get("top_performing_squads") or ()),
    )
