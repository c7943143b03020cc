"""
app/api/users.py

Purpose: Current-user endpoints

- Profile read / partial update
- Companies the user belongs to
- Notifications, unread count, mark as read
"""

from typing import Optional, Dict, Any

from fastapi import APIRouter, Body, Depends

from app.api.deps import AuthenticatedUser, get_current_user, get_store
from app.api.validation import parse_body, USER_MESSAGES
from app.db.store import DocumentStore
from app.schemas.response import success_response
from app.schemas.user import UserUpdate
from app.services import notification_service, user_service
from utils.constants import MSG_PROFILE_UPDATED, MSG_NOTIFICATION_READ

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me")
async def get_me(
    current: AuthenticatedUser = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
):
    return success_response(await user_service.get_user(store, current.uid))


@router.put("/me")
async def update_me(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    current: AuthenticatedUser = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
):
    data = parse_body(UserUpdate, payload, USER_MESSAGES)
    user = await user_service.update_user(store, current.uid, data)
    return success_response(user, MSG_PROFILE_UPDATED)


@router.get("/me/companies")
async def get_my_companies(
    current: AuthenticatedUser = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
):
    return success_response(await user_service.get_user_companies(store, current.uid))


@router.get("/me/notifications")
async def get_my_notifications(
    current: AuthenticatedUser = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
):
    return success_response(await notification_service.get_notifications(store, current.uid))


@router.get("/me/notifications/unread-count")
async def get_my_unread_count(
    current: AuthenticatedUser = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
):
    count = await notification_service.get_unread_count(store, current.uid)
    return success_response({"count": count})


@router.patch("/me/notifications/{notification_id}/read")
async def mark_notification_read(
    notification_id: str,
    current: AuthenticatedUser = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
):
    await notification_service.mark_as_read(store, notification_id, current.uid)
    return success_response({"id": notification_id, "read": True}, MSG_NOTIFICATION_READ)
