from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for access decisions."""

    ADMIN = "admin"
    SQUAD_LEAD = "squad_lead"
    MEMBER = "member"
    VIEWER = "viewer"


class WorkMode(str, Enum):
    REMOTE = "remote"
    OFFICE = "office"
    CLIENT_SITE = "client-site"
    OUT_OF_OFFICE = "ooo"


class ComplianceStatus(str, Enum):
    """Attendance classification against the squad policy.

    Mutually exclusive; when several violations apply the earlier member of
    LATE_CHECKIN, EARLY_CHECKOUT, INSUFFICIENT_HOURS wins.
    """

    PENDING = "pending"
    MISSING_CHECKOUT = "missing-checkout"
    LATE_CHECKIN = "late-checkin"
    EARLY_CHECKOUT = "early-checkout"
    INSUFFICIENT_HOURS = "insufficient-hours"
    COMPLIANT = "compliant"


class LeaveType(str, Enum):
    VACATION = "vacation"
    SICK = "sick"
    PUBLIC_HOLIDAY = "public-holiday"
    TRAINING = "training"


class LeaveStatus(str, Enum):
    """Two-level approval chain: squad lead first, then admin."""

    PENDING_SQUAD_LEAD = "pending-squad-lead"
    REJECTED_SQUAD_LEAD = "rejected-squad-lead"
    PENDING_ADMIN = "pending-admin"
    APPROVED = "approved"
    REJECTED_ADMIN = "rejected-admin"

    @property
    def is_terminal(self) -> bool:
        return self in {LeaveStatus.APPROVED, LeaveStatus.REJECTED_SQUAD_LEAD, LeaveStatus.REJECTED_ADMIN}


class NotificationType(str, Enum):
    LEAVE = "leave"
    REMINDER = "reminder"
    REPORT = "report"


class EntityType(str, Enum):
    """Tracked entities; values double as table names."""

    ATTENDANCE = "attendance_records"
    LEAVE_REQUEST = "leave_requests"
    USER = "users"
    SQUAD = "squads"
    SPRINT = "sprints"
    REPORT = "reports"
    NOTIFICATION = "notifications"
    AUDIT_LOG = "audit_logs"


class AuditOperation(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    LOGIN = "login"
    LOGOUT = "logout"
    APPROVE = "approve"
    REJECT = "reject"


class AuditSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AuditCategory(str, Enum):
    ATTENDANCE = "attendance"
    LEAVE = "leave"
    USER = "user"
    SQUAD = "squad"
    SYSTEM = "system"
    SECURITY = "security"
    REPORT = "report"


class ReportType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    SPRINT = "sprint"
    SQUAD = "squad"
    COMPLIANCE = "compliance"
    CUSTOM = "custom"


class ReportFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    SPRINT = "sprint"


class ReportStatus(str, Enum):
    DRAFT = "draft"
    GENERATED = "generated"
    SENT = "sent"
    ARCHIVED = "archived"


class ExportFormat(str, Enum):
    CSV = "csv"
    JSON = "json"
