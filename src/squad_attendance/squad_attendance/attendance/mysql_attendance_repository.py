from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import ComplianceStatus, WorkMode
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository

_COLUMNS = (
    "user_id",
    "squad_id",
    "sprint_id",
    "work_date",
    "check_in_time",
    "check_out_time",
    "work_mode",
    "location",
    "notes",
    "verified",
    "total_hours",
    "compliance_status",
    "compliance_notes",
    "late_minutes",
    "early_checkout_minutes",
)

_SELECT = f"SELECT attendance_id, {', '.join(_COLUMNS)} FROM attendance_records"


def _values(record: AttendanceRecord) -> tuple:
    return (
        record.user_id,
        record.squad_id,
        record.sprint_id,
        record.work_date,
        record.check_in_time,
        record.check_out_time,
        record.work_mode.value,
        record.location,
        record.notes,
        int(record.verified),
        record.total_hours,
        record.compliance_status.value,
        record.compliance_notes,
        record.late_minutes,
        record.early_checkout_minutes,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return self._to_record(r) if r else None

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE user_id=%s AND work_date=%s", (int(user_id), work_date))
            r = fetchone(cur)
            return self._to_record(r) if r else None

    def insert(self, record: AttendanceRecord) -> int:
        placeholders = ",".join(["%s"] * len(_COLUMNS))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO attendance_records({', '.join(_COLUMNS)}) VALUES({placeholders})",
                _values(record),
            )
            return int(cur.lastrowid)

    def update(self, record: AttendanceRecord) -> bool:
        assignments = ", ".join(f"{c}=%s" for c in _COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE attendance_records SET {assignments} WHERE attendance_id=%s",
                _values(record) + (int(record.attendance_id),),
            )
            return cur.rowcount > 0

    def delete(self, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            return cur.rowcount > 0

    def list_open_for_date(self, work_date: date, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE work_date=%s AND check_in_time IS NOT NULL AND check_out_time IS NULL
                ORDER BY attendance_id ASC
                LIMIT %s
                """,
                (work_date, int(limit)),
            )
            return [self._to_record(r) for r in fetchall(cur)]

    def list_for_squad_and_date(self, squad_id: int, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE squad_id=%s AND work_date=%s", (int(squad_id), work_date))
            return [self._to_record(r) for r in fetchall(cur)]

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        squad_ids: Sequence[int] = (),
        user_ids: Sequence[int] = (),
        compliance_statuses: Sequence[ComplianceStatus] = (),
        limit: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        clauses = ["ar.work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if squad_ids:
            clauses.append(f"ar.squad_id IN ({in_clause(squad_ids)})")
            params.extend(int(s) for s in squad_ids)
        if user_ids:
            clauses.append(f"ar.user_id IN ({in_clause(user_ids)})")
            params.extend(int(u) for u in user_ids)
        if compliance_statuses:
            clauses.append(f"ar.compliance_status IN ({in_clause(compliance_statuses)})")
            params.extend(ComplianceStatus(s).value for s in compliance_statuses)

        limit_sql = ""
        if limit is not None:
            limit_sql = "LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    ar.attendance_id, ar.user_id, u.name AS user_name, u.email,
                    ar.squad_id, s.name AS squad_name,
                    ar.work_date, ar.check_in_time, ar.check_out_time,
                    ar.total_hours, ar.late_minutes, ar.compliance_status, ar.compliance_notes
                FROM attendance_records ar
                JOIN users u ON u.user_id = ar.user_id
                LEFT JOIN squads s ON s.squad_id = ar.squad_id
                WHERE {' AND '.join(clauses)}
                ORDER BY ar.work_date DESC, ar.user_id ASC
                {limit_sql}
                """,
                tuple(params),
            )
            return [
                AttendanceReportRow(
                    attendance_id=int(r["attendance_id"]),
                    user_id=int(r["user_id"]),
                    user_name=r["user_name"],
                    email=r["email"],
                    squad_id=r.get("squad_id"),
                    squad_name=r.get("squad_name"),
                    work_date=r["work_date"],
                    check_in_time=r.get("check_in_time"),
                    check_out_time=r.get("check_out_time"),
                    total_hours=float(r.get("total_hours") or 0),
                    late_minutes=int(r.get("late_minutes") or 0),
                    compliance_status=ComplianceStatus(r["compliance_status"]),
                    compliance_notes=r.get("compliance_notes"),
                )
                for r in fetchall(cur)
            ]

    @staticmethod
    def _to_record(r: dict) -> AttendanceRecord:
        return AttendanceRecord(
            attendance_id=int(r["attendance_id"]),
            user_id=int(r["user_id"]),
            squad_id=r.get("squad_id"),
            sprint_id=r.get("sprint_id"),
            work_date=r["work_date"],
            check_in_time=r.get("check_in_time"),
            check_out_time=r.get("check_out_time"),
            work_mode=WorkMode(r.get("work_mode") or WorkMode.REMOTE.value),
            location=r.get("location"),
            notes=r.get("notes"),
            verified=bool(r.get("verified")),
            total_hours=float(r.get("total_hours") or 0),
            compliance_status=ComplianceStatus(r.get("compliance_status") or ComplianceStatus.PENDING.value),
            compliance_notes=r.get("compliance_notes"),
            late_minutes=int(r.get("late_minutes") or 0),
            early_checkout_minutes=int(r.get("early_checkout_minutes") or 0),
        )
