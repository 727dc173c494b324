from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional


@dataclass(frozen=True)
class AttendancePolicy:
    """Fully resolved attendance policy; every field always has a value."""

    minimum_work_hours: float
    standard_check_in_time: time
    standard_check_out_time: time
    late_threshold_minutes: int
    early_checkout_threshold_minutes: int
    flexible_hours: bool = False


@dataclass(frozen=True)
class AttendanceRules:
    """Per-squad overrides as stored with the squad.

    Any field may be missing; missing fields fall back to the defaults one by one.
    Times are kept as "HH:MM" strings, the way they are edited.
    """

    minimum_work_hours: Optional[float] = None
    standard_check_in_time: Optional[str] = None
    standard_check_out_time: Optional[str] = None
    late_threshold_minutes: Optional[int] = None
    early_checkout_threshold_minutes: Optional[int] = None
    flexible_hours: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "AttendanceRules":
        data = data or {}
        return cls(
            minimum_work_hours=data.get("minimum_work_hours"),
            standard_check_in_time=data.get("standard_check_in_time"),
            standard_check_out_time=data.get("standard_check_out_time"),
            late_threshold_minutes=data.get("late_threshold_minutes"),
            early_checkout_threshold_minutes=data.get("early_checkout_threshold_minutes"),
            flexible_hours=data.get("flexible_hours"),
        )
