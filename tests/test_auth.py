import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from conftest import make_settings, register_user, auth_headers, COMPANY_PAYLOAD, DEFAULT_PASSWORD


def test_register_creates_user(client):
    response = client.post("/api/auth/register", json={
        "user": {"name": "  Ana Lopez ", "email": "Ana@Example.com", "password": DEFAULT_PASSWORD},
    })

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["email"] == "ana@example.com"
    assert "companyId" not in body["data"]
    assert body["message"]

    me = client.get("/api/users/me", headers=auth_headers(body["data"]["uid"])).json()["data"]
    assert me["name"] == "Ana Lopez"
    assert me["email"] == "ana@example.com"
    assert me["phone"] is None
    assert me["createdAt"].endswith("Z")


def test_register_ignores_company_in_user_only_mode(client, store):
    response = client.post("/api/auth/register", json={
        "user": {"name": "Ana", "email": "ana@example.com", "password": DEFAULT_PASSWORD},
        "company": COMPANY_PAYLOAD,
    })
    assert response.status_code == 201
    companies = client.get("/api/users/me/companies", headers=auth_headers(response.json()["data"]["uid"]))
    assert companies.json()["data"] == []


@pytest.mark.parametrize("company", [{}, "acme", None, {"name": "X"}])
def test_register_ignores_malformed_company_in_user_only_mode(client, company):
    response = client.post("/api/auth/register", json={
        "user": {"name": "Ana", "email": "ana@example.com", "password": DEFAULT_PASSWORD},
        "company": company,
    })

    assert response.status_code == 201
    assert "companyId" not in response.json()["data"]


def test_register_rejects_malformed_company_in_with_company_mode(store, identity):
    app = create_app(make_settings(REGISTRATION_MODE="with_company"), store=store, identity_provider=identity)

    response = TestClient(app).post("/api/auth/register", json={
        "user": {"name": "Ana", "email": "ana@example.com", "password": DEFAULT_PASSWORD},
        "company": "acme",
    })

    assert response.status_code == 400
    assert response.json()["error"]["errors"] == {"company": "company is required"}
    assert identity.accounts == {}


def test_register_reports_form_field_names(client):
    response = client.post("/api/auth/register", json={"user": {"name": "A", "email": "nope"}})

    assert response.status_code == 400
    errors = response.json()["error"]["errors"]
    assert set(errors) == {"userName", "userEmail", "userPassword"}


def test_register_duplicate_email(client):
    register_user(client, "Ana", "ana@example.com")

    response = client.post("/api/auth/register", json={
        "user": {"name": "Other", "email": "ANA@example.com", "password": DEFAULT_PASSWORD},
    })

    assert response.status_code == 400
    assert "userEmail" in response.json()["error"]["errors"]


def test_register_with_company_mode(store, identity):
    app = create_app(make_settings(REGISTRATION_MODE="with_company"), store=store, identity_provider=identity)
    client = TestClient(app)

    response = client.post("/api/auth/register", json={
        "user": {"name": "Ana", "email": "ana@example.com", "password": DEFAULT_PASSWORD},
        "company": COMPANY_PAYLOAD,
    })

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["companyId"]

    companies = client.get("/api/users/me/companies", headers=auth_headers(data["uid"])).json()["data"]
    assert len(companies) == 1
    assert companies[0]["companyId"] == data["companyId"]
    assert companies[0]["role"] == "owner"


def test_register_with_company_mode_requires_company(store, identity):
    app = create_app(make_settings(REGISTRATION_MODE="with_company"), store=store, identity_provider=identity)

    response = TestClient(app).post("/api/auth/register", json={
        "user": {"name": "Ana", "email": "ana@example.com", "password": DEFAULT_PASSWORD},
        "company": {"name": "X", "address": {"city": "Springfield"}},
    })

    assert response.status_code == 400
    errors = response.json()["error"]["errors"]
    assert errors["companyName"]
    assert errors["companyEmail"]
    assert errors["street"]
    assert "city" not in errors
    assert identity.accounts == {}


def test_login_returns_tokens(client):
    user = register_user(client, "Ana", "ana@example.com")

    response = client.post("/api/auth/login", json={"email": "ana@example.com", "password": DEFAULT_PASSWORD})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["uid"] == user["uid"]
    assert data["idToken"] == f"token-{user['uid']}"
    assert data["refreshToken"]
    assert data["expiresIn"] == "3600"


def test_login_wrong_password(client):
    register_user(client, "Ana", "ana@example.com")

    response = client.post("/api/auth/login", json={"email": "ana@example.com", "password": "Wrong1234"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


def test_login_without_user_document(client, identity):
    identity.add_account("ghost@example.com")

    response = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": DEFAULT_PASSWORD})

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "User not found in the database"


def test_login_validation(client):
    response = client.post("/api/auth/login", json={"email": "bad"})
    assert response.status_code == 400
    assert set(response.json()["error"]["errors"]) == {"email", "password"}


def test_protected_route_requires_token(client):
    response = client.get("/api/users/me")
    assert response.status_code == 401
    assert response.json()["error"]["message"] == "No token provided"


def test_protected_route_rejects_bad_tokens(client):
    assert client.get("/api/users/me", headers={"Authorization": "Bearer nope"}).json()["error"]["message"] == "Invalid token"
    assert client.get("/api/users/me", headers={"Authorization": "Bearer expired"}).json()["error"]["message"] == "Token expired"


def test_update_profile(client):
    user = register_user(client, "Ana", "ana@example.com")
    client.put("/api/users/me", json={"phone": "555"}, headers=user["headers"])

    response = client.put("/api/users/me", json={"name": " Ana Maria ", "phone": ""}, headers=user["headers"])

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Ana Maria"
    assert data["phone"] is None

    response = client.put("/api/users/me", json={"email": None}, headers=user["headers"])
    assert response.status_code == 400
    assert response.json()["error"]["errors"] == {"email": "A valid email address is required"}
