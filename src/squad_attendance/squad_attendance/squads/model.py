from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..policies.model import AttendanceRules


@dataclass(frozen=True)
class Squad:
    """Domain entity: a squad (team) owning membership and attendance rules."""

    squad_id: int
    name: str
    lead_id: Optional[int] = None
    description: Optional[str] = None
    project: Optional[str] = None
    time_zone: str = "UTC"
    workdays: tuple[str, ...] = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")
    active_sprint_id: Optional[int] = None
    attendance_rules: AttendanceRules = field(default_factory=AttendanceRules)


@dataclass(frozen=True)
class PresenceRow:
    """Read-model for the squad presence board."""

    user_id: int
    name: str
    email: str
    work_mode: str
    state: str
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    compliance_status: Optional[str] = None
