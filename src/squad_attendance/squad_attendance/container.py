from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.hooks import ComplianceHook
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .audit.mysql_audit_repository import MySQLAuditRepository
from .audit.recorder import AuditRecorder
from .audit.service import AuditLogService
from .compliance.evaluator import ComplianceEvaluator
from .compliance.factory import ComplianceRuleFactory
from .database.connection import DBConfig, DatabaseConnection
from .events.dispatcher import ChangeDispatcher
from .leave.mysql_leave_repository import MySQLLeaveRequestRepository
from .leave.service import LeaveService
from .notifications.leave_observer import LeaveNotificationObserver
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.reminders import CheckoutReminderSweep
from .notifications.service import NotificationService
from .policies.defaults import policy_from_settings
from .policies.resolver import PolicyResolver
from .reports.export import ExportService
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.service import ReportService
from .squads.mysql_squad_repository import MySQLSquadRepository
from .squads.service import SquadService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    squads_repo: MySQLSquadRepository
    attendance_repo: MySQLAttendanceRepository
    leave_repo: MySQLLeaveRequestRepository
    notifications_repo: MySQLNotificationRepository
    reports_repo: MySQLReportRepository
    audit_repo: MySQLAuditRepository

    dispatcher: ChangeDispatcher
    policy_resolver: PolicyResolver

    audit_log_service: AuditLogService
    auth_service: AuthService
    attendance_service: AttendanceService
    leave_service: LeaveService
    notification_service: NotificationService
    checkout_reminder_sweep: CheckoutReminderSweep
    squad_service: SquadService
    export_service: ExportService
    report_service: ReportService


def build_container(
    *,
    db_config: dict,
    policy_defaults: Optional[dict] = None,
    reminder_deduplicate: bool = False,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    users_repo = MySQLUserRepository(conn)
    squads_repo = MySQLSquadRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    leave_repo = MySQLLeaveRequestRepository(conn)
    notifications_repo = MySQLNotificationRepository(conn)
    reports_repo = MySQLReportRepository(conn)
    audit_repo = MySQLAuditRepository(conn)

    notification_service = NotificationService(notifications_repo)

    # Audit first, then notifications.
    dispatcher = ChangeDispatcher(
        [
            AuditRecorder(audit_repo),
            LeaveNotificationObserver(notification_service, users_repo, squads_repo),
        ]
    )

    policy_resolver = PolicyResolver(squads_repo, defaults=policy_from_settings(policy_defaults))
    hook = ComplianceHook(policy_resolver, ComplianceEvaluator(ComplianceRuleFactory()))

    audit_log_service = AuditLogService(audit_repo)
    auth_service = AuthService(users_repo, dispatcher)
    attendance_service = AttendanceService(
        attendance_repo,
        users_repo,
        hook,
        squads=squads_repo,
        dispatcher=dispatcher,
    )
    leave_service = LeaveService(leave_repo, users_repo, squads_repo, dispatcher=dispatcher)
    checkout_reminder_sweep = CheckoutReminderSweep(
        attendance_repo,
        notification_service,
        notification_store=notifications_repo,
        deduplicate=reminder_deduplicate,
    )
    squad_service = SquadService(squads_repo, users_repo, attendance_repo)
    export_service = ExportService(attendance_repo)
    report_service = ReportService(
        reports_repo,
        attendance_repo,
        users_repo,
        notification_service,
        dispatcher=dispatcher,
    )

    return Container(
        conn=conn,
        users_repo=users_repo,
        squads_repo=squads_repo,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        notifications_repo=notifications_repo,
        reports_repo=reports_repo,
        audit_repo=audit_repo,
        dispatcher=dispatcher,
        policy_resolver=policy_resolver,
        audit_log_service=audit_log_service,
        auth_service=auth_service,
        attendance_service=attendance_service,
        leave_service=leave_service,
        notification_service=notification_service,
        checkout_reminder_sweep=checkout_reminder_sweep,
        squad_service=squad_service,
        export_service=export_service,
        report_service=report_service,
    )
