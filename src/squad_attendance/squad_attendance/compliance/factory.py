from __future__ import annotations

from dataclasses import dataclass

from ..policies.model import AttendancePolicy
from .rules.base import ComplianceRule
from .rules.early_rule import EarlyCheckoutRule
from .rules.hours_rule import InsufficientHoursRule
from .rules.late_rule import LateCheckinRule


@dataclass
class ComplianceRuleFactory:
    """Factory Pattern: the rules that apply to a policy, highest precedence first.

    The order is the status precedence: late check-in beats early checkout,
    which beats insufficient hours.
    """

    def for_policy(self, policy: AttendancePolicy) -> list[ComplianceRule]:
        if policy.flexible_hours:
            # Flexible squads are judged on total hours only.
            return [InsufficientHoursRule()]
        return [LateCheckinRule(), EarlyCheckoutRule(), InsufficientHoursRule()]
