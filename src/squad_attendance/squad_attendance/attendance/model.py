from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ComplianceStatus, WorkMode

# Written by the compliance hook only.
DERIVED_FIELDS = (
    "total_hours",
    "compliance_status",
    "compliance_notes",
    "late_minutes",
    "early_checkout_minutes",
)


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one user's attendance for one work day."""

    attendance_id: Optional[int]
    user_id: int
    squad_id: Optional[int]
    work_date: date
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime] = None
    work_mode: WorkMode = WorkMode.REMOTE
    sprint_id: Optional[int] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    verified: bool = False
    total_hours: float = 0.0
    compliance_status: ComplianceStatus = ComplianceStatus.PENDING
    compliance_notes: Optional[str] = None
    late_minutes: int = 0
    early_checkout_minutes: int = 0

    @property
    def is_open(self) -> bool:
        return self.check_in_time is not None and self.check_out_time is None


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for exports and metrics (record joined with user and squad)."""

    attendance_id: int
    user_id: int
    user_name: str
    email: str
    squad_id: Optional[int]
    squad_name: Optional[str]
    work_date: date
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    total_hours: float
    late_minutes: int
    compliance_status: ComplianceStatus
    compliance_notes: Optional[str] = None
