import itertools
from typing import Dict, Any

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from app.core.config import Settings
from app.db.store import DocumentStore
from app.main import create_app
from app.services.identity_provider import (
    IdentityProviderError,
    ProviderAccount,
    ProviderErrorKind,
    SignInResult,
)

DEFAULT_PASSWORD = "Secret123"


class FakeIdentityProvider:
    """
    In-memory stand-in for FirebaseIdentityProvider.
    Issues tokens of the form "token-<uid>".
    """

    def __init__(self):
        self.accounts: Dict[str, Dict[str, Any]] = {}
        self._ids = itertools.count(1)

    def add_account(self, email: str, password: str = DEFAULT_PASSWORD, name: str = "") -> str:
        uid = f"uid{next(self._ids)}"
        self.accounts[email] = {"uid": uid, "password": password, "name": name, "disabled": False}
        return uid

    async def create_user(self, email, password, display_name):
        if email in self.accounts:
            raise IdentityProviderError(ProviderErrorKind.EMAIL_EXISTS, "EMAIL_EXISTS")
        if len(password) < 6:
            raise IdentityProviderError(ProviderErrorKind.WEAK_PASSWORD, "WEAK_PASSWORD")
        uid = self.add_account(email, password, display_name)
        return ProviderAccount(uid=uid, email=email)

    async def verify_token(self, id_token):
        if id_token == "expired":
            raise IdentityProviderError(ProviderErrorKind.TOKEN_EXPIRED, "TOKEN_EXPIRED")
        for email, account in self.accounts.items():
            if id_token == f"token-{account['uid']}":
                return ProviderAccount(uid=account["uid"], email=email)
        raise IdentityProviderError(ProviderErrorKind.INVALID_TOKEN, "INVALID_ID_TOKEN")

    async def sign_in_with_password(self, email, password):
        account = self.accounts.get(email)
        if account is None or account["password"] != password:
            raise IdentityProviderError(ProviderErrorKind.INVALID_CREDENTIALS, "INVALID_LOGIN_CREDENTIALS")
        if account["disabled"]:
            raise IdentityProviderError(ProviderErrorKind.USER_DISABLED, "USER_DISABLED")
        return SignInResult(
            uid=account["uid"],
            email=email,
            id_token=f"token-{account['uid']}",
            refresh_token=f"refresh-{account['uid']}",
            expires_in="3600",
        )

    async def close(self):
        pass


def make_settings(**overrides) -> Settings:
    values = {"ENVIRONMENT": "development", "REGISTRATION_MODE": "user_only", "LOG_LEVEL": "WARNING"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def store():
    return DocumentStore(AsyncMongoMockClient()["nexa_test"])


@pytest.fixture
def identity():
    return FakeIdentityProvider()


@pytest.fixture
def app(settings, store, identity):
    return create_app(settings, store=store, identity_provider=identity)


@pytest.fixture
def client(app):
    return TestClient(app)


def auth_headers(uid: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer token-{uid}"}


def register_user(client: TestClient, name: str, email: str, password: str = DEFAULT_PASSWORD) -> Dict[str, Any]:
    """
    Registers through the API; returns {uid, email, headers}.
    """
    response = client.post("/api/auth/register", json={
        "user": {"name": name, "email": email, "password": password},
    })
    assert response.status_code == 201, response.json()
    data = response.json()["data"]
    return {"uid": data["uid"], "email": data["email"], "headers": auth_headers(data["uid"])}


COMPANY_PAYLOAD = {
    "name": "Acme Corp",
    "email": "contact@acme.com",
    "phone": "+1 555 0100",
    "address": {
        "street": "123 Main Street",
        "city": "Springfield",
        "state": "Illinois",
        "postalCode": "62701",
        "country": "us",
    },
    "website": "https://acme.com",
    "industry": "technology",
}


def create_company(client: TestClient, headers: Dict[str, str], **overrides) -> Dict[str, Any]:
    response = client.post("/api/companies", json={**COMPANY_PAYLOAD, **overrides}, headers=headers)
    assert response.status_code == 201, response.json()
    return response.json()["data"]


def invite(client: TestClient, company_id: str, headers: Dict[str, str], email: str, role: str):
    return client.post(
        f"/api/companies/{company_id}/members",
        json={"email": email, "role": role},
        headers=headers,
    )
