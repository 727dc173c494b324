from __future__ import annotations

from datetime import datetime

import pytest

from src.squad_attendance.squad_attendance.core.enums import NotificationType
from src.squad_attendance.squad_attendance.core.exceptions import NotFoundError
from src.squad_attendance.squad_attendance.notifications.service import NotificationService


@pytest.fixture
def service(store):
    return NotificationService(store.notifications, clock=lambda: datetime(2026, 3, 2, 9, 0))


def test_notify_and_read(service, actor_of):
    nid = service.notify(3, title="Hello", message="World", type=NotificationType.LEAVE)

    assert [n.notification_id for n in service.list_for(actor_of(3), unread_only=True)] == [nid]
    service.mark_read(actor_of(3), nid)
    assert service.list_for(actor_of(3), unread_only=True) == []
    assert len(service.list_for(actor_of(3))) == 1


def test_cannot_mark_someone_elses_notification(service, actor_of):
    nid = service.notify(3, title="Hello", message="World", type=NotificationType.LEAVE)

    with pytest.raises(NotFoundError):
        service.mark_read(actor_of(4), nid)


def test_notify_swallows_store_errors(service, store):
    store.notifications.fail = True
    assert service.notify(3, title="x", message="y", type=NotificationType.LEAVE) is None
