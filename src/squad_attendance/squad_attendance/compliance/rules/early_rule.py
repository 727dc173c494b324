from __future__ import annotations

from ...core.enums import ComplianceStatus
from ...policies.model import AttendancePolicy
from ..model import AttendanceMeasure
from .base import ComplianceRule


class EarlyCheckoutRule(ComplianceRule):
    """Checked out before the standard time minus the early-checkout threshold."""

    status = ComplianceStatus.EARLY_CHECKOUT

    def is_violated(self, measure: AttendanceMeasure, policy: AttendancePolicy) -> bool:
        return measure.early_checkout_minutes > policy.early_checkout_threshold_minutes

    def describe(self, measure: AttendanceMeasure, policy: AttendancePolicy) -> str:
        return f"Early checkout by {measure.early_checkout_minutes} minutes"
