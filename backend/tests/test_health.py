"""Health endpoint and fallback error envelope smoke tests."""

from typing import Any

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_health_check_returns_ok(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.get("/api/v1/health-check")
    assert response.status_code == 200
    assert response.text == "OK"
    assert response.headers.get("X-Request-ID")


async def test_unknown_route_uses_error_envelope(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.get("/api/v1/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {
        "code": 9002,
        "status": "error",
        "message": "API not found",
    }


async def test_security_headers_are_applied(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.get("/api/v1/health-check")
    assert response.headers.get("X-Content-Type-Options") == "nosniff"


async def test_unknown_route_message_is_localized(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.get("/api/v1/404", params={"lang": "es"})
    assert response.status_code == 404
    assert response.json() == {
        "code": 9002,
        "status": "error",
        "message": "API no encontrada",
    }

    from_header = await client.get(
        "/api/v1/404", headers={"Accept-Language": "es-ES,es;q=0.9,en;q=0.8"}
    )
    assert from_header.json()["message"] == "API no encontrada"

    unsupported = await client.get("/api/v1/404", params={"lang": "fr"})
    assert unsupported.json()["message"] == "API not found"


async def test_business_errors_are_localized(
    app_context: dict[str, Any], create_user
) -> None:
    client: AsyncClient = app_context["client"]
    alice = await create_user("alice")
    bob = await create_user("bob")

    denied = await client.put(
        f"/api/v1/users/{bob.id}",
        params={"lang": "es"},
        json={"fullname": "Nope"},
        headers=app_context["auth_headers"](alice),
    )
    assert denied.status_code == 403
    assert denied.json()["message"] == (
        "Acceso denegado - No tienes permiso para: actualizar usuario"
    )

    short_token = await client.get(
        "/api/v1/accounts/confirm/abc", headers={"Accept-Language": "es"}
    )
    assert short_token.json()["message"] == (
        'la longitud de "token" debe ser de 16 caracteres'
    )
