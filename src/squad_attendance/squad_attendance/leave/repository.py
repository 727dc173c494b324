from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import LeaveRequest


class LeaveRequestRepository(Protocol):
    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def create(self, request: LeaveRequest) -> int:
        raise NotImplementedError

    def update_decision(self, request: LeaveRequest) -> bool:
        """Persist status and approval stamps."""

        raise NotImplementedError

    def list_all(self, *, limit: int = 200) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def list_for_user(self, user_id: int, *, limit: int = 200) -> Sequence[LeaveRequest]:
        raise NotImplementedError
