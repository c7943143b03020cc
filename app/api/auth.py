"""
app/api/auth.py

Purpose: Registration and login endpoints

- POST /auth/register (user, plus company in with_company mode)
- POST /auth/login
"""

from typing import Optional, Dict, Any

from fastapi import APIRouter, Body, Depends, Request

from app.api.deps import get_store, get_identity_provider
from app.api.validation import parse_body, REGISTER_MESSAGES, REGISTER_FIELD_NAMES, LOGIN_MESSAGES
from app.core.logging import get_logger
from app.db.store import DocumentStore
from app.schemas.response import success_response
from app.schemas.user import RegisterRequest, RegisterWithCompanyRequest, LoginRequest
from app.services import auth_service
from app.services.identity_provider import FirebaseIdentityProvider

logger = get_logger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=201)
async def register(
    request: Request,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    store: DocumentStore = Depends(get_store),
    identity: FirebaseIdentityProvider = Depends(get_identity_provider),
):
    """
    Creates the account and user record.

    In with_company mode the body must also carry the company, which is
    created with the new user as owner.
    """
    company = None
    if request.app.state.settings.registration_creates_company:
        data = parse_body(RegisterWithCompanyRequest, payload, REGISTER_MESSAGES, REGISTER_FIELD_NAMES)
        company = data.company
    else:
        data = parse_body(RegisterRequest, payload, REGISTER_MESSAGES, REGISTER_FIELD_NAMES)

    result = await auth_service.register(store, identity, data.user, company=company)
    return success_response(result, result["message"])


@router.post("/login")
async def login(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    store: DocumentStore = Depends(get_store),
    identity: FirebaseIdentityProvider = Depends(get_identity_provider),
):
    data = parse_body(LoginRequest, payload, LOGIN_MESSAGES)

    result = await auth_service.login(store, identity, data.email, data.password)
    return success_response(result, result["message"])
