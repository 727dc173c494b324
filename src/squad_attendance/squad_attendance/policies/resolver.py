from __future__ import annotations

import logging
from typing import Optional

from ..common.datetime_utils import parse_hhmm
from ..squads.repository import SquadRepository
from .defaults import DEFAULT_POLICY
from .model import AttendancePolicy, AttendanceRules

logger = logging.getLogger(__name__)


class PolicyResolver:
    """Resolve the effective attendance policy for a squad.

    Resolution is field by field: a squad may override `minimum_work_hours`
    while still inheriting the default `late_threshold_minutes`. A missing
    squad or a malformed override never fails, it degrades to the default.
    """

    def __init__(self, squads: Optional[SquadRepository] = None, *, defaults: AttendancePolicy = DEFAULT_POLICY):
        self._squads = squads
        self._defaults = defaults

    @property
    def defaults(self) -> AttendancePolicy:
        return self._defaults

    def resolve_for_squad(self, squad_id: Optional[int]) -> AttendancePolicy:
        if squad_id is None or self._squads is None:
            return self._defaults

        squad = self._squads.get_by_id(int(squad_id))
        if not squad:
            return self._defaults
        return self.resolve(squad.attendance_rules)

    def resolve(self, rules: Optional[AttendanceRules]) -> AttendancePolicy:
        if rules is None:
            return self._defaults

        d = self._defaults
        return AttendancePolicy(
            minimum_work_hours=self._pick(rules.minimum_work_hours, d.minimum_work_hours, float, "minimum_work_hours"),
            standard_check_in_time=self._pick(
                rules.standard_check_in_time, d.standard_check_in_time, parse_hhmm, "standard_check_in_time"
            ),
            standard_check_out_time=self._pick(
                rules.standard_check_out_time, d.standard_check_out_time, parse_hhmm, "standard_check_out_time"
            ),
            late_threshold_minutes=self._pick(
                rules.late_threshold_minutes, d.late_threshold_minutes, int, "late_threshold_minutes"
            ),
            early_checkout_threshold_minutes=self._pick(
                rules.early_checkout_threshold_minutes,
                d.early_checkout_threshold_minutes,
                int,
                "early_checkout_threshold_minutes",
            ),
            flexible_hours=self._pick(rules.flexible_hours, d.flexible_hours, bool, "flexible_hours"),
        )

    @staticmethod
    def _pick(value, default, convert, field_name: str):
        if value is None or value == "":
            return default
        try:
            return convert(value)
        except (AttributeError, TypeError, ValueError):
            logger.warning("Ignoring invalid %s override %r, using default %r", field_name, value, default)
            return default
