"""
app/services/notification_service.py

Purpose: Per-user notifications

- Create notifications (company invitations today)
- List newest first, count unread
- Mark as read (owner only)
- Look up the notification linked to an invitation
"""

from typing import Optional, Dict, Any, List

from app.core.exceptions import NotFoundError
from app.core.logging import get_logger, LogContext
from app.db import collections
from app.db.store import DocumentStore, SERVER_TIMESTAMP
from app.models.notification import NotificationType
from utils.time_utils import to_iso

logger = get_logger(__name__)


def serialize_notification(document: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": document["id"],
        "userId": document.get("userId"),
        "type": document.get("type"),
        "read": document.get("read") is True,
        "createdAt": to_iso(document.get("createdAt")),
        "data": document.get("data") or {},
    }


async def create_notification(
    store: DocumentStore,
    user_id: str,
    type: NotificationType,
    data: Dict[str, Any],
) -> Dict[str, Any]:
    """
    Creates an unread notification for a user.

    For company invitations the invitation id is also stored top-level
    so the notification can be found from the invitation.
    """
    document: Dict[str, Any] = {
        "userId": user_id,
        "type": type.value,
        "read": False,
        "createdAt": SERVER_TIMESTAMP,
        "data": data,
    }
    if type == NotificationType.COMPANY_INVITATION and data.get("invitationId"):
        document["invitationId"] = data["invitationId"]

    notification_id = await store.add(collections.NOTIFICATIONS, document)

    with LogContext(user_id=user_id, notification_id=notification_id):
        logger.info(f"Notification created ({type.value})")

    return serialize_notification({**document, "id": notification_id, "createdAt": None})


async def get_notifications(store: DocumentStore, uid: str) -> List[Dict[str, Any]]:
    """
    Returns all notifications of a user, newest first.
    """
    documents = await store.query(
        collections.NOTIFICATIONS,
        {"userId": uid},
        order_by="createdAt",
        descending=True,
    )
    return [serialize_notification(document) for document in documents]


async def get_unread_count(store: DocumentStore, uid: str) -> int:
    return await store.count(collections.NOTIFICATIONS, {"userId": uid, "read": False})


async def mark_as_read(store: DocumentStore, notification_id: str, uid: str):
    """
    Marks a notification as read.

    Raises:
        NotFoundError: if it does not exist or belongs to another user
    """
    document = await store.get(collections.NOTIFICATIONS, notification_id)
    if document is None or document.get("userId") != uid:
        raise NotFoundError("Notification")

    await store.update(collections.NOTIFICATIONS, notification_id, {"read": True})

    with LogContext(user_id=uid, notification_id=notification_id):
        logger.debug("Notification marked as read")


async def find_by_invitation(
    store: DocumentStore,
    uid: str,
    invitation_id: str,
) -> Optional[Dict[str, Any]]:
    """
    Returns the user's notification for an invitation, if any.
    """
    document = await store.find_one(
        collections.NOTIFICATIONS,
        {"userId": uid, "invitationId": invitation_id},
    )
    return serialize_notification(document) if document else None
