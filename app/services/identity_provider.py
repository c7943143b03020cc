"""
app/services/identity_provider.py

Purpose: Identity provider integration (Firebase Auth REST API)

- Creates email/password accounts
- Verifies bearer ID tokens
- Password sign-in returning ID and refresh tokens
- Maps provider error codes once, into ProviderErrorKind
"""

import httpx
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any
from app.core.config import Settings
from app.core.logging import get_logger

logger = get_logger(__name__)


class ProviderErrorKind(str, Enum):
    EMAIL_EXISTS = "email_exists"
    WEAK_PASSWORD = "weak_password"
    INVALID_EMAIL = "invalid_email"
    TOKEN_EXPIRED = "token_expired"
    INVALID_TOKEN = "invalid_token"
    INVALID_CREDENTIALS = "invalid_credentials"
    USER_DISABLED = "user_disabled"
    RATE_LIMITED = "rate_limited"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


# Identity Toolkit error codes -> kinds
PROVIDER_ERROR_CODES: Dict[str, ProviderErrorKind] = {
    "EMAIL_EXISTS": ProviderErrorKind.EMAIL_EXISTS,
    "WEAK_PASSWORD": ProviderErrorKind.WEAK_PASSWORD,
    "INVALID_EMAIL": ProviderErrorKind.INVALID_EMAIL,
    "MISSING_EMAIL": ProviderErrorKind.INVALID_EMAIL,
    "EMAIL_NOT_FOUND": ProviderErrorKind.INVALID_CREDENTIALS,
    "INVALID_PASSWORD": ProviderErrorKind.INVALID_CREDENTIALS,
    "INVALID_LOGIN_CREDENTIALS": ProviderErrorKind.INVALID_CREDENTIALS,
    "MISSING_PASSWORD": ProviderErrorKind.INVALID_CREDENTIALS,
    "USER_DISABLED": ProviderErrorKind.USER_DISABLED,
    "TOO_MANY_ATTEMPTS_TRY_LATER": ProviderErrorKind.RATE_LIMITED,
    "TOKEN_EXPIRED": ProviderErrorKind.TOKEN_EXPIRED,
    "CREDENTIAL_TOO_OLD_LOGIN_AGAIN": ProviderErrorKind.TOKEN_EXPIRED,
    "INVALID_ID_TOKEN": ProviderErrorKind.INVALID_TOKEN,
    "USER_NOT_FOUND": ProviderErrorKind.INVALID_TOKEN,
}


class IdentityProviderError(Exception):
    """Raised by the identity provider adapter with a mapped error kind."""

    def __init__(self, kind: ProviderErrorKind, message: str = ""):
        self.kind = kind
        self.message = message or kind.value
        super().__init__(self.message)


def map_provider_error(message: Optional[str]) -> ProviderErrorKind:
    """
    Maps an Identity Toolkit error message to its kind.

    Messages look like "WEAK_PASSWORD : Password should be at least 6 characters".
    """
    if not message:
        return ProviderErrorKind.UNKNOWN
    code = message.split(":")[0].strip().split(" ")[0]
    return PROVIDER_ERROR_CODES.get(code, ProviderErrorKind.UNKNOWN)


@dataclass
class ProviderAccount:
    uid: str
    email: Optional[str] = None


@dataclass
class SignInResult:
    uid: str
    email: str
    id_token: str
    refresh_token: str
    expires_in: Optional[str] = None


class FirebaseIdentityProvider:
    """
    Client for the Firebase Auth (Identity Toolkit v1) REST API.
    Owns one httpx.AsyncClient; call close() on shutdown.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://identitytoolkit.googleapis.com/v1",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    @classmethod
    def from_settings(cls, config: Settings) -> Optional["FirebaseIdentityProvider"]:
        """
        Builds the provider, or returns None when no API key is configured.
        """
        if not config.FIREBASE_WEB_API_KEY:
            logger.warning("FIREBASE_WEB_API_KEY not set; identity provider disabled")
            return None
        return cls(
            api_key=config.FIREBASE_WEB_API_KEY,
            base_url=config.IDENTITY_TOOLKIT_URL,
            timeout=config.IDENTITY_TIMEOUT_SECONDS,
        )

    async def _post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = await self._client.post(
                f"/accounts:{endpoint}",
                params={"key": self._api_key},
                json=payload,
            )
        except httpx.TimeoutException:
            logger.error(f"Identity provider timeout on {endpoint}")
            raise IdentityProviderError(ProviderErrorKind.UNAVAILABLE, "Identity provider timed out")
        except httpx.RequestError as e:
            logger.error(f"Network error calling identity provider ({endpoint}): {e}")
            raise IdentityProviderError(ProviderErrorKind.UNAVAILABLE, "Identity provider unreachable")

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code >= 400 or "error" in body:
            message = (body.get("error") or {}).get("message", "")
            if message:
                kind = map_provider_error(message)
            elif response.status_code >= 500:
                kind = ProviderErrorKind.UNAVAILABLE
            else:
                kind = ProviderErrorKind.UNKNOWN
            logger.info(f"Identity provider rejected {endpoint}: {message or response.status_code}")
            raise IdentityProviderError(kind, message)

        return body

    async def create_user(self, email: str, password: str, display_name: str) -> ProviderAccount:
        """
        Creates an email/password account.

        Raises:
            IdentityProviderError: EMAIL_EXISTS, WEAK_PASSWORD, INVALID_EMAIL, ...
        """
        body = await self._post("signUp", {
            "email": email,
            "password": password,
            "displayName": display_name,
            "returnSecureToken": True,
        })
        logger.info(f"Identity account created: {body['localId']}")
        return ProviderAccount(uid=body["localId"], email=body.get("email", email))

    async def verify_token(self, id_token: str) -> ProviderAccount:
        """
        Resolves a bearer ID token to the account it was issued for.

        Raises:
            IdentityProviderError: TOKEN_EXPIRED, INVALID_TOKEN, USER_DISABLED, ...
        """
        body = await self._post("lookup", {"idToken": id_token})
        users = body.get("users") or []
        if not users:
            raise IdentityProviderError(ProviderErrorKind.INVALID_TOKEN, "No account for token")

        account = users[0]
        if account.get("disabled"):
            raise IdentityProviderError(ProviderErrorKind.USER_DISABLED, "USER_DISABLED")
        return ProviderAccount(uid=account["localId"], email=account.get("email"))

    async def sign_in_with_password(self, email: str, password: str) -> SignInResult:
        """
        Password grant.

        Raises:
            IdentityProviderError: INVALID_CREDENTIALS, USER_DISABLED, RATE_LIMITED, ...
        """
        body = await self._post("signInWithPassword", {
            "email": email,
            "password": password,
            "returnSecureToken": True,
        })
        return SignInResult(
            uid=body["localId"],
            email=body.get("email", email),
            id_token=body["idToken"],
            refresh_token=body["refreshToken"],
            expires_in=body.get("expiresIn"),
        )

    async def close(self):
        await self._client.aclose()
