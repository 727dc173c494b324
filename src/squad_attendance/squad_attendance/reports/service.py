from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..common.serialization import snapshot
from ..common.validators import require_choice, require_non_empty
from ..core.constants import EXPORT_ROW_LIMIT
from ..core.enums import AuditOperation, EntityType, NotificationType, ReportStatus, ReportType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..events.dispatcher import ChangeDispatcher
from ..events.model import ChangeEvent
from ..notifications.service import NotificationService
from ..users.model import Actor
from ..users.repository import UserRepository
from .metrics import calculate_metrics
from .model import ReportAutomation, ReportConfig, ReportFilters, ReportMetrics, ScheduledRunResult
from .repository import ReportRepository
from .scheduling import next_run_time

logger = logging.getLogger(__name__)


class ReportService:
    """Report generation, the scheduled report sweep and report setup."""

    def __init__(
        self,
        reports: ReportRepository,
        attendance: AttendanceRepository,
        users: UserRepository,
        notifications: NotificationService,
        *,
        dispatcher: ChangeDispatcher | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._reports = reports
        self._attendance = attendance
        self._users = users
        self._notifications = notifications
        self._dispatcher = dispatcher or ChangeDispatcher()
        self._clock = clock or now_local

    def create_report(
        self,
        actor: Actor,
        *,
        title: str,
        report_type: str,
        start_date: date,
        end_date: date,
        filters: ReportFilters | None = None,
        automation: ReportAutomation | None = None,
    ) -> ReportConfig:
        if actor.role not in {Role.ADMIN, Role.SQUAD_LEAD}:
            raise AuthorizationError("Only admins and squad leads can create reports")
        if end_date < start_date:
            raise ValidationError("End date must not be before start date")

        automation = automation or ReportAutomation()
        if automation.auto_generate and automation.frequency:
            automation = replace(automation, next_scheduled_run=next_run_time(automation.frequency, self._clock()))

        report = ReportConfig(
            report_id=None,
            title=require_non_empty(title, "Title"),
            report_type=require_choice(report_type, ReportType, "report type"),
            start_date=start_date,
            end_date=end_date,
            filters=filters or ReportFilters(),
            automation=automation,
            created_by=actor.user_id,
        )
        report = replace(report, report_id=self._reports.create(report))

        self._dispatcher.dispatch(
            ChangeEvent(
                entity_type=EntityType.REPORT,
                entity_id=report.report_id,
                operation=AuditOperation.CREATE,
                actor=actor,
                after=snapshot(report),
            )
        )
        return report

    def generate(self, report_id: int) -> ReportMetrics:
        report = self._reports.get_by_id(int(report_id))
        if not report:
            raise NotFoundError(f"Report {report_id} not found")

        rows = self._attendance.get_report_rows(
            start_date=report.start_date,
            end_date=report.end_date,
            squad_ids=report.filters.squad_ids,
            user_ids=report.filters.user_ids,
            compliance_statuses=report.filters.compliance_statuses,
            limit=EXPORT_ROW_LIMIT,
        )
        rows = list(rows)
        if len(rows) == EXPORT_ROW_LIMIT:
            logger.warning("Report %s hit the %d row limit; metrics cover a partial range", report.report_id, EXPORT_ROW_LIMIT)
        metrics = calculate_metrics(rows, start_date=report.start_date, end_date=report.end_date)

        self._reports.save_generation(report.report_id, metrics=metrics, generated_at=self._clock())

        if report.automation.auto_generate and report.automation.email_recipients:
            for email in report.automation.email_recipients:
                self._send_to(email, report.report_id)
            self._reports.update_status(report.report_id, ReportStatus.SENT)

        logger.info("Report %s generated from %d attendance logs", report.report_id, metrics.total_attendance_logs)
        return metrics

    def run_scheduled(self, now: datetime | None = None) -> ScheduledRunResult:
        """Generate every due report; one failing report never stops the others."""

        now = now or self._clock()
        processed = 0
        failures: list[int] = []

        for report in self._reports.list_due(now):
            try:
                self.generate(report.report_id)
                processed += 1
            except Exception:
                logger.exception("Scheduled generation of report %s failed", report.report_id)
                failures.append(report.report_id)

            try:
                self._reports.update_next_run(report.report_id, next_run_time(report.automation.frequency, now))
            except Exception:
                logger.exception("Could not reschedule report %s", report.report_id)
                if report.report_id not in failures:
                    failures.append(report.report_id)

        return ScheduledRunResult(processed_reports=processed, failures=tuple(failures))

    def list_scheduled(self) -> list[dict]:
        return [
            {
                "id": r.report_id,
                "title": r.title,
                "frequency": r.automation.frequency.value if r.automation.frequency else None,
                "next_run": r.automation.next_scheduled_run.isoformat() if r.automation.next_scheduled_run else None,
                "status": r.status.value,
                "email_count": len(r.automation.email_recipients),
            }
            for r in self._reports.list_automated()
        ]

    def _send_to(self, email: str, report_id: int) -> Optional[int]:
        # Delivery is in-app only; recipients without an account are skipped.
        user = self._users.get_by_email(email.strip().lower())
        if not user:
            logger.info("Report %s recipient %s has no account, skipping", report_id, email)
            return None
        return self._notifications.notify(
            user.user_id,
            title="Automated Attendance Report",
            message=f"Your scheduled attendance report has been generated. Report ID: {report_id}",
            type=NotificationType.REPORT,
            related_type=EntityType.REPORT,
            related_id=report_id,
        )
