"""Attendance compliance evaluation.

Given a check-in/check-out pair and a resolved policy, derive total hours,
lateness, early-checkout minutes and the compliance status. The evaluator is
pure: identical inputs always produce identical results.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import minutes_between, on_same_day, round_half_up
from ..core.enums import ComplianceStatus
from ..policies.model import AttendancePolicy
from .factory import ComplianceRuleFactory
from .model import AttendanceMeasure, ComplianceResult
from .rules.base import format_hours

PENDING_CHECKOUT_NOTE = "Pending check-out"


def round_to_quarter_hour(hours: float) -> float:
    """Business rule: worked time is booked in quarter hours (7.85h -> 7.75h)."""
    return math.floor(hours * 4 + 0.5) / 4


class ComplianceEvaluator:
    def __init__(self, factory: Optional[ComplianceRuleFactory] = None):
        self._factory = factory or ComplianceRuleFactory()

    def evaluate(
        self,
        check_in_time: Optional[datetime],
        check_out_time: Optional[datetime],
        policy: AttendancePolicy,
    ) -> ComplianceResult:
        if check_in_time is None:
            return ComplianceResult(status=ComplianceStatus.PENDING)

        standard_check_in = on_same_day(check_in_time, policy.standard_check_in_time)
        late_minutes = max(0, round_half_up(minutes_between(standard_check_in, check_in_time)))

        if check_out_time is None:
            return ComplianceResult(
                status=ComplianceStatus.MISSING_CHECKOUT,
                late_minutes=late_minutes,
                notes=PENDING_CHECKOUT_NOTE,
            )

        # Inverted pairs are rejected before they get here; legacy rows count as zero hours.
        worked_hours = max(0.0, minutes_between(check_in_time, check_out_time) / 60)
        total_hours = round_to_quarter_hour(worked_hours)

        standard_check_out = on_same_day(check_out_time, policy.standard_check_out_time)
        early_minutes = max(0, round_half_up(minutes_between(check_out_time, standard_check_out)))

        measure = AttendanceMeasure(
            late_minutes=late_minutes,
            early_checkout_minutes=early_minutes,
            total_hours=total_hours,
        )
        violated = [rule for rule in self._factory.for_policy(policy) if rule.is_violated(measure, policy)]

        if not violated:
            return ComplianceResult(
                status=ComplianceStatus.COMPLIANT,
                total_hours=total_hours,
                late_minutes=late_minutes,
                early_checkout_minutes=early_minutes,
                notes=f"Total hours: {format_hours(total_hours)}h - All requirements met",
            )

        return ComplianceResult(
            status=violated[0].status,
            total_hours=total_hours,
            late_minutes=late_minutes,
            early_checkout_minutes=early_minutes,
            notes="; ".join(rule.describe(measure, policy) for rule in violated),
        )


_default_evaluator = ComplianceEvaluator()


def evaluate(
    check_in_time: Optional[datetime],
    check_out_time: Optional[datetime],
    policy: AttendancePolicy,
) -> ComplianceResult:
    return _default_evaluator.evaluate(check_in_time, check_out_time, policy)
