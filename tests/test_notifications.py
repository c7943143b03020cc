import asyncio
from datetime import datetime, timedelta

import pytest

from app.core.exceptions import NotFoundError
from app.db import collections
from app.models.notification import NotificationType
from app.services import notification_service
from conftest import register_user


def seed(store, user_id, created_at, read=False, invitation_id=None):
    document = {
        "userId": user_id,
        "type": NotificationType.COMPANY_INVITATION.value,
        "read": read,
        "createdAt": created_at,
        "data": {"invitationId": invitation_id},
    }
    if invitation_id:
        document["invitationId"] = invitation_id
    return asyncio.run(store.add(collections.NOTIFICATIONS, document))


def test_notifications_are_listed_newest_first(client, store):
    user = register_user(client, "Ana", "ana@example.com")
    base = datetime(2024, 1, 1, 12, 0, 0)
    oldest = seed(store, user["uid"], base)
    newest = seed(store, user["uid"], base + timedelta(hours=2))
    middle = seed(store, user["uid"], base + timedelta(hours=1))
    seed(store, "someone-else", base + timedelta(hours=3))

    notifications = client.get("/api/users/me/notifications", headers=user["headers"]).json()["data"]

    assert [n["id"] for n in notifications] == [newest, middle, oldest]
    assert notifications[-1]["createdAt"] == "2024-01-01T12:00:00.000Z"


def test_mark_as_read(client, store):
    user = register_user(client, "Ana", "ana@example.com")
    first = seed(store, user["uid"], datetime(2024, 1, 1))
    seed(store, user["uid"], datetime(2024, 1, 2))

    response = client.patch(f"/api/users/me/notifications/{first}/read", headers=user["headers"])

    assert response.status_code == 200
    count = client.get("/api/users/me/notifications/unread-count", headers=user["headers"]).json()["data"]["count"]
    assert count == 1


def test_mark_as_read_rejects_other_users(client, store):
    user = register_user(client, "Ana", "ana@example.com")
    foreign = seed(store, "someone-else", datetime(2024, 1, 1))

    response = client.patch(f"/api/users/me/notifications/{foreign}/read", headers=user["headers"])

    assert response.status_code == 404
    assert asyncio.run(store.get(collections.NOTIFICATIONS, foreign))["read"] is False


def test_create_notification_stores_invitation_id_top_level(store):
    created = asyncio.run(notification_service.create_notification(
        store, "u1", NotificationType.COMPANY_INVITATION, {"invitationId": "inv1", "companyId": "c1"},
    ))

    stored = asyncio.run(store.get(collections.NOTIFICATIONS, created["id"]))
    assert stored["invitationId"] == "inv1"
    assert stored["read"] is False
    assert stored["createdAt"] is not None
    assert created["data"] == {"invitationId": "inv1", "companyId": "c1"}


def test_find_by_invitation(store):
    seed(store, "u1", datetime(2024, 1, 1), invitation_id="inv1")

    found = asyncio.run(notification_service.find_by_invitation(store, "u1", "inv1"))
    assert found["data"]["invitationId"] == "inv1"
    assert asyncio.run(notification_service.find_by_invitation(store, "u2", "inv1")) is None


def test_mark_as_read_missing_notification(store):
    with pytest.raises(NotFoundError):
        asyncio.run(notification_service.mark_as_read(store, "missing", "u1"))
