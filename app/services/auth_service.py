"""
app/services/auth_service.py

Purpose: Registration and login

- Creates the identity-provider account, then the user document
- Optionally creates the first company (REGISTRATION_MODE=with_company)
- Password sign-in through the identity provider
- Translates provider error kinds into API errors
"""

from typing import Optional, Dict, Any

from app.core.exceptions import (
    AppError,
    ValidationError,
    UnauthorizedError,
    ServiceUnavailableError,
)
from app.core.logging import get_logger, LogContext
from app.db import collections
from app.db.store import DocumentStore
from app.schemas.company import CompanyCreate
from app.schemas.user import UserRegistration
from app.services import company_service, user_service
from app.services.identity_provider import (
    FirebaseIdentityProvider,
    IdentityProviderError,
    ProviderErrorKind,
)
from utils.constants import (
    MSG_REGISTERED,
    MSG_REGISTERED_WITH_COMPANY,
    MSG_LOGGED_IN,
    MSG_EMAIL_TAKEN,
    MSG_WEAK_PASSWORD,
    MSG_PASSWORD_REJECTED,
    MSG_INVALID_EMAIL,
    MSG_BAD_CREDENTIALS,
    MSG_ACCOUNT_DISABLED,
    MSG_TOO_MANY_ATTEMPTS,
    MSG_LOGIN_FAILED,
    MSG_USER_RECORD_MISSING,
    MSG_AUTH_UNAVAILABLE,
    MSG_VALIDATION_FAILED,
)
from utils.validation_utils import normalize_email

logger = get_logger(__name__)


def _registration_error(error: IdentityProviderError) -> AppError:
    if error.kind == ProviderErrorKind.EMAIL_EXISTS:
        return ValidationError(MSG_EMAIL_TAKEN, {"userEmail": MSG_EMAIL_TAKEN})
    if error.kind == ProviderErrorKind.WEAK_PASSWORD:
        return ValidationError(MSG_PASSWORD_REJECTED, {"userPassword": MSG_WEAK_PASSWORD})
    if error.kind == ProviderErrorKind.INVALID_EMAIL:
        return ValidationError(MSG_VALIDATION_FAILED, {"userEmail": MSG_INVALID_EMAIL})
    if error.kind == ProviderErrorKind.UNAVAILABLE:
        return ServiceUnavailableError(MSG_AUTH_UNAVAILABLE)
    return AppError(f"Could not create the account: {error.message}", 500, "IDENTITY_PROVIDER_ERROR")


def _login_error(error: IdentityProviderError) -> AppError:
    if error.kind == ProviderErrorKind.INVALID_CREDENTIALS:
        return UnauthorizedError(MSG_BAD_CREDENTIALS)
    if error.kind == ProviderErrorKind.USER_DISABLED:
        return UnauthorizedError(MSG_ACCOUNT_DISABLED)
    if error.kind == ProviderErrorKind.RATE_LIMITED:
        return UnauthorizedError(MSG_TOO_MANY_ATTEMPTS)
    if error.kind == ProviderErrorKind.UNAVAILABLE:
        return ServiceUnavailableError(MSG_AUTH_UNAVAILABLE)
    return UnauthorizedError(MSG_LOGIN_FAILED)


async def register(
    store: DocumentStore,
    identity: FirebaseIdentityProvider,
    user: UserRegistration,
    company: Optional[CompanyCreate] = None,
) -> Dict[str, Any]:
    """
    Registers a new user.

    When `company` is given the company and an owner membership are
    created as well. Each write is a separate store call; an account
    may exist without its user document if a later write fails.

    Returns:
        {uid, email, message} plus companyId when a company was created
    """
    email = normalize_email(user.email)

    try:
        account = await identity.create_user(email, user.password, user.name)
    except IdentityProviderError as e:
        logger.info(f"Registration rejected by identity provider: {e.kind.value}")
        raise _registration_error(e)

    with LogContext(user_id=account.uid):
        await user_service.create_user(store, account.uid, user.name, email, user.phone)

        result: Dict[str, Any] = {"uid": account.uid, "email": email, "message": MSG_REGISTERED}

        if company is not None:
            created = await company_service.create_company(store, company, account.uid)
            result["companyId"] = created["id"]
            result["message"] = MSG_REGISTERED_WITH_COMPANY

        logger.info("User registered")
        return result


async def login(
    store: DocumentStore,
    identity: FirebaseIdentityProvider,
    email: str,
    password: str,
) -> Dict[str, Any]:
    """
    Signs a user in with email and password.

    Raises:
        UnauthorizedError: bad credentials, disabled account, too many
            attempts, or no user document for the account
        ServiceUnavailableError: the identity provider is unreachable
    """
    try:
        session = await identity.sign_in_with_password(normalize_email(email), password)
    except IdentityProviderError as e:
        logger.info(f"Login rejected by identity provider: {e.kind.value}")
        raise _login_error(e)

    with LogContext(user_id=session.uid):
        if await store.get(collections.USERS, session.uid) is None:
            logger.warning("Identity account has no user document")
            raise UnauthorizedError(MSG_USER_RECORD_MISSING)

        logger.info("User signed in")

        return {
            "uid": session.uid,
            "email": session.email,
            "idToken": session.id_token,
            "refreshToken": session.refresh_token,
            "expiresIn": session.expires_in,
            "message": MSG_LOGGED_IN,
        }
