from __future__ import annotations

from datetime import time

from src.squad_attendance.squad_attendance.policies.defaults import DEFAULT_POLICY, policy_from_settings
from src.squad_attendance.squad_attendance.policies.model import AttendanceRules
from src.squad_attendance.squad_attendance.policies.resolver import PolicyResolver


def test_unknown_or_missing_squad_gets_defaults(store):
    resolver = PolicyResolver(store.squads)

    assert resolver.resolve_for_squad(None) == DEFAULT_POLICY
    assert resolver.resolve_for_squad(999) == DEFAULT_POLICY


def test_squad_without_overrides_gets_defaults(store):
    assert PolicyResolver(store.squads).resolve_for_squad(2) == DEFAULT_POLICY


def test_overrides_apply_field_by_field(store):
    policy = PolicyResolver(store.squads).resolve_for_squad(1)

    assert policy.minimum_work_hours == 7.5
    assert policy.standard_check_in_time == time(9, 30)
    # not overridden by Platform
    assert policy.standard_check_out_time == time(17, 0)
    assert policy.late_threshold_minutes == 15
    assert policy.early_checkout_threshold_minutes == 30
    assert policy.flexible_hours is False


def test_malformed_override_falls_back_to_default_for_that_field_only():
    rules = AttendanceRules(standard_check_in_time="9 o'clock", late_threshold_minutes=5)

    policy = PolicyResolver().resolve(rules)

    assert policy.standard_check_in_time == DEFAULT_POLICY.standard_check_in_time
    assert policy.late_threshold_minutes == 5


def test_injected_defaults_are_used_as_the_fallback(store):
    defaults = policy_from_settings({"minimum_work_hours": 6, "standard_check_out_time": "16:00"})
    resolver = PolicyResolver(store.squads, defaults=defaults)

    assert resolver.resolve_for_squad(2).minimum_work_hours == 6.0
    assert resolver.resolve_for_squad(1).minimum_work_hours == 7.5
    assert resolver.resolve_for_squad(1).standard_check_out_time == time(16, 0)


def test_policy_from_settings_keeps_builtin_values_for_missing_keys():
    assert policy_from_settings({}) == DEFAULT_POLICY
    assert policy_from_settings(None) == DEFAULT_POLICY
