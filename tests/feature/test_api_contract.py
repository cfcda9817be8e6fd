"""HTTP contract checks: validation errors, unknown routes, health and 500s."""

import pytest
from httpx import ASGITransport, AsyncClient

from src.infrastructure.repositories.user_repository import UserRepository


@pytest.mark.parametrize(
    "payload, field",
    [
        ({"email": "not-an-email", "password": "Test1234!"}, "email"),
        ({"email": "a@x.com", "password": "short"}, "password"),
        ({"email": "a@x.com"}, "password"),
    ],
)
async def test_register_validation_errors(async_client, payload, field):
    response = await async_client.post("/api/auth/register", json=payload)

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "validation_error"
    assert field in {detail["field"] for detail in error["details"]}


async def test_weak_password_message_names_the_rule(async_client):
    response = await async_client.post(
        "/api/auth/register", json={"email": "a@x.com", "password": "alllowercase1"}
    )

    [detail] = response.json()["error"]["details"]
    assert detail == {
        "field": "password",
        "message": "Password must contain at least one uppercase letter",
    }


async def test_confirm_weak_password_reports_new_password_field(async_client):
    response = await async_client.post(
        "/api/auth/password-reset/confirm", json={"token": "abc", "newPassword": "weak"}
    )

    assert response.status_code == 400
    assert response.json()["error"]["details"][0]["field"] == "newPassword"


async def test_confirm_requires_token(async_client):
    response = await async_client.post(
        "/api/auth/password-reset/confirm", json={"token": "", "newPassword": "NewPass123!"}
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "validation_error"


async def test_login_requires_password(async_client):
    response = await async_client.post(
        "/api/auth/login", json={"email": "a@x.com", "password": ""}
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "validation_error"


async def test_unknown_route_is_not_found(async_client):
    response = await async_client.get("/api/auth/nothing-here")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "not_found"


async def test_health_reports_database_status(async_client):
    response = await async_client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["database"] == "healthy"
    assert "timestamp" in body


async def test_request_id_header_is_echoed(async_client):
    response = await async_client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["x-request-id"] == "req-123"


async def test_storage_failure_surfaces_as_server_error(app, mocker):
    mocker.patch.object(UserRepository, "get_by_email", side_effect=RuntimeError("db gone"))
    transport = ASGITransport(app=app, raise_app_exceptions=False)

    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post(
            "/api/auth/register", json={"email": "a@x.com", "password": "Test1234!"}
        )

    assert response.status_code == 500
    assert response.json() == {
        "error": {"code": "server_error", "message": "Internal server error"}
    }
