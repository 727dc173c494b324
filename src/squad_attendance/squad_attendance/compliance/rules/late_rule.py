from __future__ import annotations

from ...core.enums import ComplianceStatus
from ...policies.model import AttendancePolicy
from ..model import AttendanceMeasure
from .base import ComplianceRule


class LateCheckinRule(ComplianceRule):
    """Checked in later than the standard time plus the late threshold."""

    status = ComplianceStatus.LATE_CHECKIN

    def is_violated(self, measure: AttendanceMeasure, policy: AttendancePolicy) -> bool:
        return measure.late_minutes > policy.late_threshold_minutes

    def describe(self, measure: AttendanceMeasure, policy: AttendancePolicy) -> str:
        return f"Late by {measure.late_minutes} minutes"
