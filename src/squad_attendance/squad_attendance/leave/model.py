from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    """Domain entity: a leave request moving through the two-level approval chain."""

    request_id: Optional[int]
    user_id: int
    squad_id: int
    leave_type: LeaveType
    reason: str
    duration: str
    status: LeaveStatus = LeaveStatus.PENDING_SQUAD_LEAD
    created_at: Optional[datetime] = None
    squad_lead_id: Optional[int] = None
    squad_lead_decided_at: Optional[datetime] = None
    admin_id: Optional[int] = None
    admin_decided_at: Optional[datetime] = None
