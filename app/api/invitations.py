from fastapi import APIRouter, Depends

from app.api.deps import AuthenticatedUser, get_current_user, get_store
from app.db.store import DocumentStore
from app.schemas.response import success_response
from app.services import invitation_service
from utils.constants import MSG_INVITATION_ACCEPTED, MSG_INVITATION_DECLINED

router = APIRouter(prefix="/invitations", tags=["invitations"])


@router.get("/{invitation_id}")
async def get_invitation(
    invitation_id: str,
    current: AuthenticatedUser = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
):
    return success_response(await invitation_service.get_invitation(store, invitation_id, current.uid))


@router.post("/{invitation_id}/accept")
async def accept_invitation(
    invitation_id: str,
    current: AuthenticatedUser = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
):
    await invitation_service.accept_invitation(store, invitation_id, current.uid)
    return success_response({"accepted": True}, MSG_INVITATION_ACCEPTED)


@router.post("/{invitation_id}/decline")
async def decline_invitation(
    invitation_id: str,
    current: AuthenticatedUser = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
):
    await invitation_service.decline_invitation(store, invitation_id, current.uid)
    return success_response({"declined": True}, MSG_INVITATION_DECLINED)
