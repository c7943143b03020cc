"""
app/services/company_service.py

Purpose: Company (organization) management

- Create a company with the creator as owner
- Read and partially update company data (owner/admin)
- List members and invite new ones (owner/admin)
"""

from typing import Optional, Dict, Any, List

from app.core.exceptions import AppError, ForbiddenError, NotFoundError
from app.core.logging import get_logger, LogContext
from app.db import collections
from app.db.store import DocumentStore, SERVER_TIMESTAMP
from app.models.invitation import InvitationStatus
from app.models.roles import Role, can_manage, can_grant
from app.schemas.company import CLEARABLE_FIELDS, CompanyCreate, CompanyUpdate, MemberInvite
from app.services import invitation_service, user_service
from utils.constants import (
    MSG_FORBIDDEN_UPDATE_COMPANY,
    MSG_FORBIDDEN_VIEW_MEMBERS,
    MSG_FORBIDDEN_ADD_MEMBER,
    MSG_FORBIDDEN_GRANT_OWNER,
    MSG_USER_NOT_REGISTERED,
    MSG_ALREADY_MEMBER,
    MSG_PENDING_INVITATION,
    UNKNOWN_USER_NAME,
)
from utils.time_utils import to_iso

logger = get_logger(__name__)

ADDRESS_FIELDS = ("street", "city", "state", "postalCode", "country")


def serialize_company(document: Dict[str, Any]) -> Dict[str, Any]:
    address = document.get("address") or {}
    return {
        "id": document["id"],
        "name": document.get("name") or "",
        "email": document.get("email") or "",
        "phone": document.get("phone") or "",
        "address": {field: address.get(field) or "" for field in ADDRESS_FIELDS},
        "website": document.get("website"),
        "description": document.get("description"),
        "industry": document.get("industry"),
        "createdAt": to_iso(document.get("createdAt")),
    }


async def get_membership(store: DocumentStore, uid: str, company_id: str) -> Optional[Dict[str, Any]]:
    """
    Returns the membership linking a user to a company, if any.
    """
    return await store.find_one(
        collections.MEMBERSHIPS,
        {"userId": uid, "companyId": company_id},
    )


async def _require_manager(store: DocumentStore, uid: str, company_id: str, message: str) -> Dict[str, Any]:
    membership = await get_membership(store, uid, company_id)
    if membership is None or not can_manage(membership.get("role")):
        raise ForbiddenError(message)
    return membership


async def create_company(store: DocumentStore, data: CompanyCreate, uid: str) -> Dict[str, Any]:
    """
    Creates a company and an owner membership for the requester.
    """
    document: Dict[str, Any] = {
        "name": data.name,
        "email": data.email,
        "phone": data.phone,
        "address": data.address.model_dump(by_alias=True),
        "createdAt": SERVER_TIMESTAMP,
    }
    for field in CLEARABLE_FIELDS:
        value = getattr(data, field)
        if value:
            document[field] = value

    company_id = await store.add(collections.COMPANIES, document)

    await store.add(collections.MEMBERSHIPS, {
        "userId": uid,
        "companyId": company_id,
        "role": Role.OWNER.value,
        "joinedAt": SERVER_TIMESTAMP,
    })

    with LogContext(user_id=uid, company_id=company_id):
        logger.info("Company created with requester as owner")

    return await get_company(store, company_id)


async def get_company(store: DocumentStore, company_id: str) -> Dict[str, Any]:
    document = await store.get(collections.COMPANIES, company_id)
    if document is None:
        raise NotFoundError("Company")
    return serialize_company(document)


async def update_company(
    store: DocumentStore,
    company_id: str,
    data: CompanyUpdate,
    uid: str,
) -> Dict[str, Any]:
    """
    Applies a partial update to a company.

    Only fields present in `data` are written. The address is merged
    with the stored one field by field.

    Raises:
        NotFoundError: unknown company
        ForbiddenError: requester is not owner/admin
    """
    with LogContext(user_id=uid, company_id=company_id):
        document = await store.get(collections.COMPANIES, company_id)
        if document is None:
            raise NotFoundError("Company")

        await _require_manager(store, uid, company_id, MSG_FORBIDDEN_UPDATE_COMPANY)

        patch = data.model_dump(by_alias=True, exclude_unset=True)
        changes: Dict[str, Any] = {}

        for field in ("name", "email", "phone"):
            if field in patch:
                changes[field] = patch[field]

        if patch.get("address") is not None:
            current = document.get("address") or {}
            changes["address"] = {
                field: patch["address"][field] if field in patch["address"] else current.get(field)
                for field in ADDRESS_FIELDS
            }

        for field in CLEARABLE_FIELDS:
            if field in patch:
                changes[field] = patch[field]

        await store.update(collections.COMPANIES, company_id, changes)
        logger.info(f"Company updated: {sorted(changes)}")

        return await get_company(store, company_id)


async def get_company_members(store: DocumentStore, company_id: str, uid: str) -> List[Dict[str, Any]]:
    """
    Lists the members of a company with their names and emails.

    Raises:
        ForbiddenError: requester is not owner/admin
    """
    await _require_manager(store, uid, company_id, MSG_FORBIDDEN_VIEW_MEMBERS)

    memberships = await store.query(collections.MEMBERSHIPS, {"companyId": company_id})

    members = []
    for membership in memberships:
        user = await store.get(collections.USERS, membership.get("userId", ""))
        members.append({
            "userId": membership.get("userId"),
            "name": (user or {}).get("name") or UNKNOWN_USER_NAME,
            "email": (user or {}).get("email") or "",
            "role": membership.get("role"),
            "joinedAt": to_iso(membership.get("joinedAt")),
        })

    return members


async def add_company_member(
    store: DocumentStore,
    company_id: str,
    uid: str,
    data: MemberInvite,
) -> Dict[str, Any]:
    """
    Invites a registered user to the company.

    The invitee becomes a member only after accepting; the returned
    member is a placeholder with an empty joinedAt.

    Raises:
        ForbiddenError: requester is not owner/admin, or an admin grants owner
        AppError: USER_NOT_REGISTERED (404), ALREADY_MEMBER / PENDING_INVITATION (409)
    """
    with LogContext(user_id=uid, company_id=company_id):
        membership = await _require_manager(store, uid, company_id, MSG_FORBIDDEN_ADD_MEMBER)

        if not can_grant(membership.get("role"), data.role):
            raise ForbiddenError(MSG_FORBIDDEN_GRANT_OWNER)

        invitee = await user_service.find_user_by_email(store, data.email)
        if invitee is None:
            raise AppError(MSG_USER_NOT_REGISTERED, 404, "USER_NOT_REGISTERED")

        if await get_membership(store, invitee["id"], company_id) is not None:
            raise AppError(MSG_ALREADY_MEMBER, 409, "ALREADY_MEMBER")

        pending = await store.find_one(collections.INVITATIONS, {
            "userId": invitee["id"],
            "companyId": company_id,
            "status": InvitationStatus.PENDING.value,
        })
        if pending is not None:
            raise AppError(MSG_PENDING_INVITATION, 409, "PENDING_INVITATION")

        company = await get_company(store, company_id)
        inviter = await store.get(collections.USERS, uid)

        invitation = await invitation_service.create_invitation(
            store,
            company_id=company_id,
            invited_by=uid,
            user_id=invitee["id"],
            role=data.role,
            company_name=company["name"],
            inviter_name=(inviter or {}).get("name") or "",
        )

        return {
            "userId": invitee["id"],
            "name": invitee.get("name") or "",
            "email": invitee.get("email") or "",
            "role": data.role.value,
            "joinedAt": "",
            "invitationId": invitation["id"],
        }
