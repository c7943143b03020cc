"""
app/api/deps.py

Purpose: Shared route dependencies

- Document store and identity provider from app.state
- Bearer token verification into the authenticated identity
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.exceptions import UnauthorizedError, ServiceUnavailableError
from app.core.logging import get_logger
from app.db.store import DocumentStore
from app.services.identity_provider import (
    FirebaseIdentityProvider,
    IdentityProviderError,
    ProviderErrorKind,
)
from utils.constants import (
    MSG_NO_TOKEN,
    MSG_TOKEN_EXPIRED,
    MSG_INVALID_TOKEN,
    MSG_AUTH_FAILED,
    MSG_AUTH_UNAVAILABLE,
    MSG_AUTH_NOT_CONFIGURED,
    MSG_STORE_NOT_CONFIGURED,
)

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class AuthenticatedUser:
    uid: str
    email: Optional[str] = None


def get_store(request: Request) -> DocumentStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise ServiceUnavailableError(MSG_STORE_NOT_CONFIGURED)
    return store


def get_identity_provider(request: Request) -> FirebaseIdentityProvider:
    identity = getattr(request.app.state, "identity_provider", None)
    if identity is None:
        raise ServiceUnavailableError(MSG_AUTH_NOT_CONFIGURED)
    return identity


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    identity: FirebaseIdentityProvider = Depends(get_identity_provider),
) -> AuthenticatedUser:
    """
    Verifies the `Authorization: Bearer <idToken>` header.

    Raises:
        UnauthorizedError: missing, expired or invalid token
        ServiceUnavailableError: identity provider unreachable
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError(MSG_NO_TOKEN)

    try:
        account = await identity.verify_token(credentials.credentials)
    except IdentityProviderError as e:
        if e.kind == ProviderErrorKind.UNAVAILABLE:
            raise ServiceUnavailableError(MSG_AUTH_UNAVAILABLE)
        if e.kind == ProviderErrorKind.TOKEN_EXPIRED:
            raise UnauthorizedError(MSG_TOKEN_EXPIRED)
        if e.kind == ProviderErrorKind.INVALID_TOKEN:
            raise UnauthorizedError(MSG_INVALID_TOKEN)
        logger.info(f"Token verification failed: {e.kind.value}")
        raise UnauthorizedError(MSG_AUTH_FAILED)

    return AuthenticatedUser(uid=account.uid, email=account.email)
