from __future__ import annotations

from src.squad_attendance.squad_attendance.compliance.factory import ComplianceRuleFactory
from src.squad_attendance.squad_attendance.compliance.model import AttendanceMeasure
from src.squad_attendance.squad_attendance.compliance.rules.early_rule import EarlyCheckoutRule
from src.squad_attendance.squad_attendance.compliance.rules.hours_rule import InsufficientHoursRule
from src.squad_attendance.squad_attendance.compliance.rules.late_rule import LateCheckinRule
from src.squad_attendance.squad_attendance.policies.defaults import DEFAULT_POLICY, policy_from_settings


def test_rules_come_in_precedence_order():
    rules = ComplianceRuleFactory().for_policy(DEFAULT_POLICY)
    assert [type(r) for r in rules] == [LateCheckinRule, EarlyCheckoutRule, InsufficientHoursRule]


def test_flexible_policy_only_gets_hours_rule():
    rules = ComplianceRuleFactory().for_policy(policy_from_settings({"flexible_hours": True}))
    assert [type(r) for r in rules] == [InsufficientHoursRule]


def test_rule_descriptions():
    measure = AttendanceMeasure(late_minutes=20, early_checkout_minutes=45, total_hours=6.5)

    assert LateCheckinRule().describe(measure, DEFAULT_POLICY) == "Late by 20 minutes"
    assert EarlyCheckoutRule().describe(measure, DEFAULT_POLICY) == "Early checkout by 45 minutes"
    assert InsufficientHoursRule().describe(measure, DEFAULT_POLICY) == "Insufficient hours: 6.50h (minimum: 8h)"
