from __future__ import annotations

from abc import ABC, abstractmethod

from ...core.enums import ComplianceStatus
from ...policies.model import AttendancePolicy
from ..model import AttendanceMeasure


class ComplianceRule(ABC):
    """Strategy Pattern: one policy threshold and the status it produces when broken."""

    status: ComplianceStatus

    @abstractmethod
    def is_violated(self, measure: AttendanceMeasure, policy: AttendancePolicy) -> bool:
        raise NotImplementedError

    @abstractmethod
    def describe(self, measure: AttendanceMeasure, policy: AttendancePolicy) -> str:
        raise NotImplementedError


def format_hours(value: float) -> str:
    """8.0 -> "8", 7.75 -> "7.75"."""
    return f"{value:g}"
