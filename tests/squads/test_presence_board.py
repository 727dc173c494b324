from __future__ import annotations

from datetime import date, datetime

import pytest

from src.squad_attendance.squad_attendance.attendance.model import AttendanceRecord
from src.squad_attendance.squad_attendance.core.enums import ComplianceStatus, WorkMode
from src.squad_attendance.squad_attendance.core.exceptions import AuthorizationError, NotFoundError
from src.squad_attendance.squad_attendance.squads.service import CHECKED_IN, CHECKED_OUT, NOT_CHECKED_IN, SquadService

TODAY = date(2026, 3, 2)


@pytest.fixture
def service(store):
    return SquadService(store.squads, store.users, store.attendance)


def test_board_shows_each_member_state(service, store, actor_of):
    store.attendance.add(
        AttendanceRecord(
            attendance_id=None,
            user_id=2,
            squad_id=1,
            work_date=TODAY,
            check_in_time=datetime(2026, 3, 2, 9, 5),
            check_out_time=datetime(2026, 3, 2, 17, 45),
            work_mode=WorkMode.CLIENT_SITE,
            compliance_status=ComplianceStatus.COMPLIANT,
        )
    )

    board = {row.user_id: row for row in service.presence_board(actor_of(3), 1, today=TODAY)}

    assert board[2].state == CHECKED_OUT
    assert board[2].work_mode == "client-site"
    assert (board[2].check_in_time, board[2].check_out_time) == ("09:05", "17:45")
    assert board[3].state == NOT_CHECKED_IN
    assert board[3].work_mode == "office"


def test_open_record_is_checked_in(service, store, actor_of):
    store.attendance.add(
        AttendanceRecord(
            attendance_id=None,
            user_id=3,
            squad_id=1,
            work_date=TODAY,
            check_in_time=datetime(2026, 3, 2, 8, 55),
        )
    )

    (row,) = [r for r in service.presence_board(actor_of(1), 1, today=TODAY) if r.user_id == 3]
    assert row.state == CHECKED_IN
    assert row.check_out_time is None


def test_access_rules(service, actor_of):
    assert service.presence_board(actor_of(6), 2, today=TODAY)
    with pytest.raises(AuthorizationError):
        service.presence_board(actor_of(3), 2, today=TODAY)
    with pytest.raises(NotFoundError):
        service.presence_board(actor_of(1), 9, today=TODAY)
