from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import ComplianceStatus, ReportFrequency, ReportStatus, ReportType


@dataclass(frozen=True)
class ReportFilters:
    squad_ids: tuple[int, ...] = ()
    user_ids: tuple[int, ...] = ()
    compliance_statuses: tuple[ComplianceStatus, ...] = ()


@dataclass(frozen=True)
class ReportAutomation:
    auto_generate: bool = False
    frequency: Optional[ReportFrequency] = None
    email_recipients: tuple[str, ...] = ()
    next_scheduled_run: Optional[datetime] = None


@dataclass(frozen=True)
class SquadPerformance:
    name: str
    score: float
    average_hours: float


@dataclass(frozen=True)
class ReportMetrics:
    total_members: int
    total_attendance_logs: int
    compliance_rate: float
    average_working_hours: float
    absence_days: int
    top_performing_squads: tuple[SquadPerformance, ...] = ()


@dataclass(frozen=True)
class ReportConfig:
    """A saved report definition together with its last generated metrics."""

    report_id: Optional[int]
    title: str
    report_type: ReportType
    start_date: date
    end_date: date
    filters: ReportFilters = field(default_factory=ReportFilters)
    automation: ReportAutomation = field(default_factory=ReportAutomation)
    status: ReportStatus = ReportStatus.DRAFT
    metrics: Optional[ReportMetrics] = None
    generated_at: Optional[datetime] = None
    created_by: Optional[int] = None


@dataclass(frozen=True)
class ScheduledRunResult:
    processed_reports: int
    failures: tuple[int, ...] = ()
