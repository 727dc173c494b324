from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import parse_hhmm
from ..core import constants
from .model import AttendancePolicy

DEFAULT_POLICY = AttendancePolicy(
    minimum_work_hours=float(constants.DEFAULT_MINIMUM_WORK_HOURS),
    standard_check_in_time=parse_hhmm(constants.DEFAULT_STANDARD_CHECK_IN_TIME),
    standard_check_out_time=parse_hhmm(constants.DEFAULT_STANDARD_CHECK_OUT_TIME),
    late_threshold_minutes=constants.DEFAULT_LATE_THRESHOLD_MINUTES,
    early_checkout_threshold_minutes=constants.DEFAULT_EARLY_CHECKOUT_THRESHOLD_MINUTES,
)


def policy_from_settings(values: Optional[dict]) -> AttendancePolicy:
    """Build the process-wide default policy from the ATTENDANCE_POLICY_DEFAULTS setting.

    Keys that are not configured keep the built-in defaults.
    """

    values = values or {}
    return AttendancePolicy(
        minimum_work_hours=float(values.get("minimum_work_hours", DEFAULT_POLICY.minimum_work_hours)),
        standard_check_in_time=(
            parse_hhmm(values["standard_check_in_time"])
            if values.get("standard_check_in_time")
            else DEFAULT_POLICY.standard_check_in_time
        ),
        standard_check_out_time=(
            parse_hhmm(values["standard_check_out_time"])
            if values.get("standard_check_out_time")
            else DEFAULT_POLICY.standard_check_out_time
        ),
        late_threshold_minutes=int(values.get("late_threshold_minutes", DEFAULT_POLICY.late_threshold_minutes)),
        early_checkout_threshold_minutes=int(
            values.get("early_checkout_threshold_minutes", DEFAULT_POLICY.early_checkout_threshold_minutes)
        ),
        flexible_hours=bool(values.get("flexible_hours", DEFAULT_POLICY.flexible_hours)),
    )
