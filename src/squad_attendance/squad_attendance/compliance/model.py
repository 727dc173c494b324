from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ComplianceStatus


@dataclass(frozen=True)
class AttendanceMeasure:
    """What was measured for one day, before comparing against thresholds."""

    late_minutes: int
    early_checkout_minutes: int
    total_hours: float


@dataclass(frozen=True)
class ComplianceResult:
    status: ComplianceStatus
    total_hours: float = 0.0
    late_minutes: int = 0
    early_checkout_minutes: int = 0
    notes: Optional[str] = None
