"""
app/services/invitation_service.py

Purpose: Company invitations

- Create a pending invitation and notify the invitee
- Invitee-only retrieval with company and inviter names
- Accept (creates the membership) or decline, once

Writes are independent store calls; a failure between two of them
leaves the earlier writes in place.
"""

from typing import Dict, Any, Optional

from app.core.exceptions import AppError, ForbiddenError, NotFoundError
from app.core.logging import get_logger, LogContext
from app.db import collections
from app.db.store import DocumentStore, SERVER_TIMESTAMP
from app.models.invitation import InvitationStatus, is_valid_transition
from app.models.notification import NotificationType
from app.models.roles import Role
from app.services import notification_service
from utils.constants import (
    MSG_INVITATION_ALREADY_RESPONDED,
    MSG_FORBIDDEN_ACCEPT,
    MSG_FORBIDDEN_DECLINE,
)
from utils.time_utils import to_iso

logger = get_logger(__name__)


def serialize_invitation(document: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": document["id"],
        "companyId": document.get("companyId"),
        "userId": document.get("userId"),
        "invitedBy": document.get("invitedBy"),
        "role": document.get("role"),
        "status": document.get("status"),
        "createdAt": to_iso(document.get("createdAt")),
        "respondedAt": to_iso(document.get("respondedAt"), default_now=False),
    }


async def create_invitation(
    store: DocumentStore,
    company_id: str,
    invited_by: str,
    user_id: str,
    role: Role,
    company_name: str,
    inviter_name: str,
) -> Dict[str, Any]:
    """
    Writes a pending invitation, then the invitee's notification.

    Returns:
        The serialized invitation
    """
    document = {
        "companyId": company_id,
        "userId": user_id,
        "invitedBy": invited_by,
        "role": role.value,
        "status": InvitationStatus.PENDING.value,
        "createdAt": SERVER_TIMESTAMP,
    }
    invitation_id = await store.add(collections.INVITATIONS, document)

    with LogContext(user_id=user_id, company_id=company_id, invitation_id=invitation_id):
        logger.info(f"Invitation created with role {role.value}")

        await notification_service.create_notification(
            store,
            user_id,
            NotificationType.COMPANY_INVITATION,
            {
                "invitationId": invitation_id,
                "companyId": company_id,
                "companyName": company_name,
                "role": role.value,
                "inviterName": inviter_name,
            },
        )

    return serialize_invitation({**document, "id": invitation_id, "createdAt": None})


async def get_invitation(store: DocumentStore, invitation_id: str, uid: str) -> Dict[str, Any]:
    """
    Returns an invitation with companyName and inviterName.

    Only the invitee can see it; anyone else gets NotFoundError so the
    invitation's existence is not disclosed.
    """
    document = await store.get(collections.INVITATIONS, invitation_id)
    if document is None or document.get("userId") != uid:
        raise NotFoundError("Invitation")

    company = await store.get(collections.COMPANIES, document.get("companyId", ""))
    inviter = await store.get(collections.USERS, document.get("invitedBy", ""))

    return {
        **serialize_invitation(document),
        "companyName": (company or {}).get("name") or "",
        "inviterName": (inviter or {}).get("name") or "",
    }


async def _load_for_response(
    store: DocumentStore,
    invitation_id: str,
    uid: str,
    target: InvitationStatus,
    forbidden_message: str,
) -> Dict[str, Any]:
    document = await store.get(collections.INVITATIONS, invitation_id)
    if document is None:
        raise NotFoundError("Invitation")

    if document.get("userId") != uid:
        raise ForbiddenError(forbidden_message)

    if not is_valid_transition(document.get("status"), target):
        raise AppError(MSG_INVITATION_ALREADY_RESPONDED, 400, "INVITATION_ALREADY_RESPONDED")

    return document


async def _mark_notification_read(store: DocumentStore, uid: str, invitation_id: str):
    notification: Optional[Dict[str, Any]] = await notification_service.find_by_invitation(
        store, uid, invitation_id
    )
    if notification:
        await notification_service.mark_as_read(store, notification["id"], uid)


async def accept_invitation(store: DocumentStore, invitation_id: str, uid: str):
    """
    Accepts a pending invitation.

    Creates the membership with the invited role, marks the invitation
    accepted and its notification read.

    Raises:
        NotFoundError: unknown invitation
        ForbiddenError: caller is not the invitee
        AppError: INVITATION_ALREADY_RESPONDED
    """
    with LogContext(user_id=uid, invitation_id=invitation_id):
        invitation = await _load_for_response(
            store, invitation_id, uid, InvitationStatus.ACCEPTED, MSG_FORBIDDEN_ACCEPT
        )

        await store.add(collections.MEMBERSHIPS, {
            "userId": invitation["userId"],
            "companyId": invitation["companyId"],
            "role": invitation["role"],
            "joinedAt": SERVER_TIMESTAMP,
        })

        await store.update(collections.INVITATIONS, invitation_id, {
            "status": InvitationStatus.ACCEPTED.value,
            "respondedAt": SERVER_TIMESTAMP,
        })

        await _mark_notification_read(store, uid, invitation_id)

        logger.info(f"Invitation accepted, joined company {invitation['companyId']} as {invitation['role']}")


async def decline_invitation(store: DocumentStore, invitation_id: str, uid: str):
    """
    Declines a pending invitation and marks its notification read.

    Raises:
        NotFoundError: unknown invitation
        ForbiddenError: caller is not the invitee
        AppError: INVITATION_ALREADY_RESPONDED
    """
    with LogContext(user_id=uid, invitation_id=invitation_id):
        await _load_for_response(
            store, invitation_id, uid, InvitationStatus.DECLINED, MSG_FORBIDDEN_DECLINE
        )

        await store.update(collections.INVITATIONS, invitation_id, {
            "status": InvitationStatus.DECLINED.value,
            "respondedAt": SERVER_TIMESTAMP,
        })

        await _mark_notification_read(store, uid, invitation_id)

        logger.info("Invitation declined")
