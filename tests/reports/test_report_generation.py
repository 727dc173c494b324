from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from src.squad_attendance.squad_attendance.attendance.model import AttendanceRecord
from src.squad_attendance.squad_attendance.core.enums import ComplianceStatus, ReportFrequency, ReportStatus, ReportType
from src.squad_attendance.squad_attendance.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.squad_attendance.squad_attendance.notifications.service import NotificationService
from src.squad_attendance.squad_attendance.reports import service as report_service_module
from src.squad_attendance.squad_attendance.reports.model import ReportAutomation, ReportConfig, ReportFilters
from src.squad_attendance.squad_attendance.reports.scheduling import next_run_time
from src.squad_attendance.squad_attendance.reports.service import ReportService

NOW = datetime(2026, 1, 31, 10, 0)


@pytest.fixture
def service(store):
    notifications = NotificationService(store.notifications, clock=lambda: NOW)
    return ReportService(store.reports, store.attendance, store.users, notifications, clock=lambda: NOW)


def attendance(user_id, squad_id, day, status, hours):
    return AttendanceRecord(
        attendance_id=None,
        user_id=user_id,
        squad_id=squad_id,
        work_date=day,
        check_in_time=datetime(day.year, day.month, day.day, 9, 0),
        check_out_time=datetime(day.year, day.month, day.day, 17, 0),
        total_hours=hours,
        compliance_status=status,
    )


def report(**kwargs) -> ReportConfig:
    values = dict(
        report_id=None,
        title="Weekly compliance",
        report_type=ReportType.COMPLIANCE,
        start_date=date(2026, 3, 2),
        end_date=date(2026, 3, 6),
    )
    values.update(kwargs)
    return ReportConfig(**values)


@pytest.fixture
def week_of_logs(store):
    store.attendance.add(attendance(3, 1, date(2026, 3, 2), ComplianceStatus.COMPLIANT, 8.0))
    store.attendance.add(attendance(3, 1, date(2026, 3, 3), ComplianceStatus.LATE_CHECKIN, 6.5))
    store.attendance.add(attendance(4, 2, date(2026, 3, 2), ComplianceStatus.COMPLIANT, 8.0))


@pytest.mark.parametrize(
    "frequency, expected",
    [
        (ReportFrequency.DAILY, datetime(2026, 2, 1, 10, 0)),
        (ReportFrequency.WEEKLY, datetime(2026, 2, 7, 10, 0)),
        (ReportFrequency.SPRINT, datetime(2026, 2, 14, 10, 0)),
        (ReportFrequency.MONTHLY, datetime(2026, 2, 28, 10, 0)),
        (None, datetime(2026, 2, 7, 10, 0)),
    ],
)
def test_next_run_time(frequency, expected):
    assert next_run_time(frequency, NOW) == expected


def test_generate_computes_metrics(service, store, week_of_logs):
    saved = store.reports.add(report())

    metrics = service.generate(saved.report_id)

    assert metrics.total_members == 2
    assert metrics.total_attendance_logs == 3
    assert metrics.compliance_rate == pytest.approx(2 / 3)
    assert metrics.average_working_hours == pytest.approx(7.5)
    assert metrics.absence_days == 2
    assert [s.name for s in metrics.top_performing_squads] == ["Mobile", "Platform"]
    assert metrics.top_performing_squads[1].score == pytest.approx(0.5)

    stored = store.reports.get_by_id(saved.report_id)
    assert stored.status == ReportStatus.GENERATED
    assert stored.generated_at == NOW


def test_generate_applies_filters(service, store, week_of_logs):
    saved = store.reports.add(report(filters=ReportFilters(compliance_statuses=(ComplianceStatus.LATE_CHECKIN,))))

    metrics = service.generate(saved.report_id)

    assert metrics.total_attendance_logs == 1
    assert metrics.compliance_rate == 0.0


def test_filters_are_applied_before_the_row_limit(service, store, week_of_logs, monkeypatch):
    monkeypatch.setattr(report_service_module, "EXPORT_ROW_LIMIT", 1)
    saved = store.reports.add(report(filters=ReportFilters(squad_ids=(1, 2), user_ids=(4,))))

    metrics = service.generate(saved.report_id)

    assert metrics.total_attendance_logs == 1
    assert metrics.total_members == 1
    assert [s.name for s in metrics.top_performing_squads] == ["Mobile"]


def test_generate_without_logs(service, store):
    metrics = service.generate(store.reports.add(report()).report_id)

    assert metrics.total_attendance_logs == 0
    assert metrics.compliance_rate == 0.0
    assert metrics.absence_days == 4


def test_generate_unknown_report(service):
    with pytest.raises(NotFoundError):
        service.generate(42)


def test_recipients_with_accounts_are_notified(service, store):
    automation = ReportAutomation(
        auto_generate=True,
        frequency=ReportFrequency.WEEKLY,
        email_recipients=(" MIA@example.com", "ghost@example.com"),
    )
    saved = store.reports.add(report(automation=automation))

    service.generate(saved.report_id)

    (note,) = store.notifications.items
    assert note.recipient_id == 3
    assert note.title == "Automated Attendance Report"
    assert note.message.endswith(f"Report ID: {saved.report_id}")
    assert store.reports.get_by_id(saved.report_id).status == ReportStatus.SENT


def test_scheduled_run_isolates_failures(service, store, monkeypatch):
    failing = store.reports.add(
        report(automation=ReportAutomation(True, ReportFrequency.DAILY, (), NOW - timedelta(hours=1)))
    )
    monthly = store.reports.add(
        report(automation=ReportAutomation(True, ReportFrequency.MONTHLY, (), datetime(2026, 1, 31, 9, 0)))
    )
    store.reports.add(report(automation=ReportAutomation(True, ReportFrequency.DAILY, (), NOW + timedelta(hours=1))))
    store.reports.add(report())

    save_generation = store.reports.save_generation

    def flaky_save(report_id, **kwargs):
        if report_id == failing.report_id:
            raise RuntimeError("disk full")
        return save_generation(report_id, **kwargs)

    monkeypatch.setattr(store.reports, "save_generation", flaky_save)

    result = service.run_scheduled(NOW)

    assert result.processed_reports == 1
    assert result.failures == (failing.report_id,)
    assert store.reports.get_by_id(monthly.report_id).automation.next_scheduled_run == datetime(2026, 2, 28, 10, 0)
    # A failed report is still moved to its next slot.
    assert store.reports.get_by_id(failing.report_id).automation.next_scheduled_run == datetime(2026, 2, 1, 10, 0)


def test_archived_reports_are_not_due(service, store):
    store.reports.add(
        report(
            status=ReportStatus.ARCHIVED,
            automation=ReportAutomation(True, ReportFrequency.DAILY, (), NOW - timedelta(days=1)),
        )
    )
    assert service.run_scheduled(NOW).processed_reports == 0


def test_create_report_schedules_first_run(service, actor_of):
    created = service.create_report(
        actor_of(2),
        title="Squad pulse",
        report_type="squad",
        start_date=date(2026, 1, 1),
        end_date=date(2026, 1, 31),
        automation=ReportAutomation(auto_generate=True, frequency=ReportFrequency.DAILY),
    )

    assert created.report_id is not None
    assert created.created_by == 2
    assert created.automation.next_scheduled_run == datetime(2026, 2, 1, 10, 0)
    (listed,) = service.list_scheduled()
    assert listed["frequency"] == "daily"
    assert listed["status"] == "draft"


def test_create_report_validation(service, actor_of):
    with pytest.raises(AuthorizationError):
        service.create_report(
            actor_of(3), title="x", report_type="daily", start_date=date(2026, 1, 1), end_date=date(2026, 1, 2)
        )
    with pytest.raises(ValidationError):
        service.create_report(
            actor_of(1), title="x", report_type="daily", start_date=date(2026, 1, 2), end_date=date(2026, 1, 1)
        )
    with pytest.raises(ValidationError):
        service.create_report(
            actor_of(1), title="x", report_type="yearly", start_date=date(2026, 1, 1), end_date=date(2026, 1, 2)
        )
