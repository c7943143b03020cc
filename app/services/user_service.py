"""
app/services/user_service.py

Purpose: User data management

- Create the user record at registration
- User retrieval (by uid, by email)
- Partial profile updates
- The user's companies through their memberships
"""

from typing import Optional, Dict, Any, List

from app.core.exceptions import NotFoundError
from app.core.logging import get_logger, LogContext
from app.db import collections
from app.db.store import DocumentStore, SERVER_TIMESTAMP
from app.models.roles import Role
from app.schemas.user import UserUpdate
from utils.time_utils import to_iso
from utils.validation_utils import normalize_email

logger = get_logger(__name__)


def serialize_user(document: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": document["id"],
        "name": document.get("name") or "",
        "email": document.get("email") or "",
        "phone": document.get("phone"),
        "createdAt": to_iso(document.get("createdAt")),
    }


async def create_user(
    store: DocumentStore,
    uid: str,
    name: str,
    email: str,
    phone: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Writes the user document under the identity-provider uid.
    """
    document: Dict[str, Any] = {
        "name": name,
        "email": normalize_email(email),
        "createdAt": SERVER_TIMESTAMP,
    }
    if phone:
        document["phone"] = phone

    stored = await store.set(collections.USERS, uid, document)

    with LogContext(user_id=uid):
        logger.info("User record created")

    return serialize_user(stored)


async def get_user(store: DocumentStore, uid: str) -> Dict[str, Any]:
    """
    Retrieves a user by uid.

    Raises:
        NotFoundError: if the user does not exist
    """
    document = await store.get(collections.USERS, uid)
    if document is None:
        raise NotFoundError("User")
    return serialize_user(document)


async def find_user_by_email(store: DocumentStore, email: str) -> Optional[Dict[str, Any]]:
    """
    Looks a user up by (normalized) email.

    Returns:
        User or None if not found
    """
    document = await store.find_one(collections.USERS, {"email": normalize_email(email)})
    return serialize_user(document) if document else None


async def update_user(store: DocumentStore, uid: str, data: UserUpdate) -> Dict[str, Any]:
    """
    Updates name, email and phone when present. An empty phone clears it.
    """
    with LogContext(user_id=uid):
        patch = data.model_dump(exclude_unset=True)

        changes: Dict[str, Any] = {}
        if "name" in patch:
            changes["name"] = patch["name"]
        if "email" in patch:
            changes["email"] = patch["email"]
        if "phone" in patch:
            changes["phone"] = patch["phone"]

        if not await store.update(collections.USERS, uid, changes):
            raise NotFoundError("User")

        logger.info(f"User profile updated: {sorted(changes)}")
        return await get_user(store, uid)


async def get_user_companies(store: DocumentStore, uid: str) -> List[Dict[str, Any]]:
    """
    Returns every company the user belongs to, with the membership role.
    Memberships whose company no longer exists are skipped.
    """
    # Imported here: company_service depends on this module
    from app.services.company_service import serialize_company

    memberships = await store.query(collections.MEMBERSHIPS, {"userId": uid})

    companies = []
    for membership in memberships:
        company_id = membership.get("companyId", "")
        company = await store.get(collections.COMPANIES, company_id)
        if company is None:
            continue

        snapshot = serialize_company(company)
        companies.append({
            "companyId": company_id,
            "companyName": snapshot["name"],
            "role": membership.get("role") or Role.MEMBER.value,
            "joinedAt": to_iso(membership.get("joinedAt")),
            "company": snapshot,
        })

    return companies
