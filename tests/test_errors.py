from fastapi.testclient import TestClient
import pytest

from app.core.exceptions import AppError, NotFoundError, ValidationError
from app.core.errors import flatten_request_errors
from app.main import create_app
from conftest import make_settings, FakeIdentityProvider


def test_404_not_found(client):
    response = client.get("/non-existent-route")
    assert response.status_code == 404
    data = response.json()
    assert data["success"] is False
    assert data["error"]["message"] == "Route not found"
    assert data["error"]["code"] == "HTTP_ERROR"


def test_request_shape_error_uses_validation_envelope(client):
    response = client.post("/api/auth/login", json=["not", "an", "object"])
    assert response.status_code == 400
    data = response.json()
    assert data["error"]["code"] == "VALIDATION_ERROR"
    assert data["error"]["errors"]


def test_app_error_envelope(app, client):
    @app.get("/test-custom-error")
    def trigger_custom_error():
        raise NotFoundError("Item")

    response = client.get("/test-custom-error")
    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": {"message": "Item not found", "code": "NOT_FOUND"},
    }


def test_validation_error_carries_field_errors(app, client):
    @app.get("/test-validation")
    def trigger_validation_error():
        raise ValidationError(errors={"userEmail": "Taken"})

    response = client.get("/test-validation")
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["errors"] == {"userEmail": "Taken"}


def test_app_error_with_custom_code(app, client):
    @app.get("/test-conflict")
    def trigger_conflict():
        raise AppError("Already there", 409, "ALREADY_MEMBER")

    response = client.get("/test-conflict")
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "ALREADY_MEMBER"


def test_unhandled_exception_shows_message_in_development(app):
    @app.get("/boom")
    def boom():
        raise RuntimeError("kaboom")

    response = TestClient(app, raise_server_exceptions=False).get("/boom")
    assert response.status_code == 500
    assert response.json()["error"]["message"] == "kaboom"


def test_unhandled_exception_is_hidden_in_production(store):
    config = make_settings(ENVIRONMENT="production", FIREBASE_WEB_API_KEY="key")
    app = create_app(config, store=store, identity_provider=FakeIdentityProvider())

    @app.get("/boom")
    def boom():
        raise RuntimeError("kaboom")

    response = TestClient(app, raise_server_exceptions=False).get("/boom")
    assert response.status_code == 500
    assert response.json()["error"] == {"message": "Internal server error", "code": "INTERNAL_ERROR"}


def test_missing_identity_provider_returns_503(settings, store):
    client = TestClient(create_app(settings, store=store, identity_provider=None))
    response = client.post("/api/auth/login", json={"email": "a@b.com", "password": "x"})
    assert response.status_code == 503
    assert response.json()["error"]["code"] == "SERVICE_UNAVAILABLE"


def test_liveness_and_process_time_header(client):
    response = client.get("/live")
    assert response.status_code == 200
    assert response.json() == {"status": "alive"}
    assert "x-process-time" in response.headers


@pytest.mark.parametrize("loc, expected", [
    (("body", "user", "email"), "user.email"),
    (("query", "limit"), "limit"),
    (("body",), "body"),
])
def test_flatten_request_errors(loc, expected):
    assert flatten_request_errors([{"loc": loc, "msg": "bad"}]) == {expected: "bad"}
