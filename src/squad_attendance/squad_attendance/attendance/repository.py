from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import ComplianceStatus
from .model import AttendanceRecord, AttendanceReportRow


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def insert(self, record: AttendanceRecord) -> int:
        raise NotImplementedError

    def update(self, record: AttendanceRecord) -> bool:
        """Persist every column of `record`, derived fields included."""

        raise NotImplementedError

    def delete(self, attendance_id: int) -> bool:
        raise NotImplementedError

    def list_open_for_date(self, work_date: date, limit: int) -> Sequence[AttendanceRecord]:
        """Records of the day with a check-in but no check-out."""

        raise NotImplementedError

    def list_for_squad_and_date(self, squad_id: int, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

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
        """Rows joined with user and squad names; every filter applies before `limit`."""
        raise NotImplementedError
