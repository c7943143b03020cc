"""
app/api/companies.py

Purpose: Company endpoints

- Create, read, partial update
- Member listing and invitations (owner/admin)
"""

from typing import Optional, Dict, Any

from fastapi import APIRouter, Body, Depends

from app.api.deps import AuthenticatedUser, get_current_user, get_store
from app.api.validation import (
    parse_body,
    COMPANY_MESSAGES,
    COMPANY_UPDATE_MESSAGES,
    COMPANY_FIELD_NAMES,
    MEMBER_MESSAGES,
)
from app.db.store import DocumentStore
from app.schemas.company import CompanyCreate, CompanyUpdate, MemberInvite
from app.schemas.response import success_response
from app.services import company_service
from utils.constants import MSG_COMPANY_CREATED, MSG_COMPANY_UPDATED, MSG_INVITATION_SENT

router = APIRouter(prefix="/companies", tags=["companies"])


@router.post("", status_code=201)
async def create_company(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    current: AuthenticatedUser = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
):
    data = parse_body(CompanyCreate, payload, COMPANY_MESSAGES, COMPANY_FIELD_NAMES)
    company = await company_service.create_company(store, data, current.uid)
    return success_response(company, MSG_COMPANY_CREATED)


@router.get("/{company_id}")
async def get_company(
    company_id: str,
    current: AuthenticatedUser = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
):
    return success_response(await company_service.get_company(store, company_id))


@router.put("/{company_id}")
async def update_company(
    company_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    current: AuthenticatedUser = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
):
    data = parse_body(CompanyUpdate, payload, COMPANY_UPDATE_MESSAGES, COMPANY_FIELD_NAMES)
    company = await company_service.update_company(store, company_id, data, current.uid)
    return success_response(company, MSG_COMPANY_UPDATED)


@router.get("/{company_id}/members")
async def get_company_members(
    company_id: str,
    current: AuthenticatedUser = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
):
    return success_response(await company_service.get_company_members(store, company_id, current.uid))


@router.post("/{company_id}/members", status_code=201)
async def add_company_member(
    company_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    current: AuthenticatedUser = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
):
    """
    Sends an invitation; the invitee joins only after accepting.
    """
    data = parse_body(MemberInvite, payload, MEMBER_MESSAGES)
    member = await company_service.add_company_member(store, company_id, current.uid, data)
    return success_response({"invitationSent": True, "member": member}, MSG_INVITATION_SENT)
