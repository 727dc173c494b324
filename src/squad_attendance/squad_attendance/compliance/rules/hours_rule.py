from __future__ import annotations

from ...core.enums import ComplianceStatus
from ...policies.model import AttendancePolicy
from ..model import AttendanceMeasure
from .base import ComplianceRule, format_hours


class InsufficientHoursRule(ComplianceRule):
    status = ComplianceStatus.INSUFFICIENT_HOURS

    def is_violated(self, measure: AttendanceMeasure, policy: AttendancePolicy) -> bool:
        return measure.total_hours < policy.minimum_work_hours

    def describe(self, measure: AttendanceMeasure, policy: AttendancePolicy) -> str:
        return (
            f"Insufficient hours: {measure.total_hours:.2f}h "
            f"(minimum: {format_hours(policy.minimum_work_hours)}h)"
        )
