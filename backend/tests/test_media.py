"""Media catalog API tests."""

from __future__ import annotations

import uuid
from typing import Any

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

# roughly 2.2 km and 11 km north of the origin
NEARBY = {"latitude": 0.02, "longitude": 0.0}
FAR_AWAY = {"latitude": 0.1, "longitude": 0.0}


async def _post_media(
    client: AsyncClient, headers: dict[str, str], **fields: Any
) -> dict[str, Any]:
    payload = {"link": "https://cdn.example.com/photo.jpg", **fields}
    response = await client.post("/api/v1/media", json=payload, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


async def test_create_and_read_media(app_context: dict[str, Any], create_user) -> None:
    client: AsyncClient = app_context["client"]
    alice = await create_user("alice")
    headers = app_context["auth_headers"](alice)

    created = await _post_media(
        client, headers, caption="Sunset", type="VIDEO", **NEARBY
    )
    assert created["code"] == 3000
    media = created["data"]
    assert media["type"] == "VIDEO"
    assert media["caption"] == "Sunset"
    assert media["owner"] == {
        "id": str(alice.id),
        "username": "alice",
        "fullname": "Alice",
    }

    fetched = await client.get(f"/api/v1/media/{media['id']}", headers=headers)
    assert fetched.status_code == 200
    assert fetched.json()["code"] == 3001
    assert fetched.json()["data"]["id"] == media["id"]

    me = await client.get("/api/v1/users/self", headers=headers)
    assert me.json()["data"]["counts"]["media"] == 1


async def test_create_media_defaults_and_validation(
    app_context: dict[str, Any], create_user
) -> None:
    client: AsyncClient = app_context["client"]
    headers = app_context["auth_headers"](await create_user("alice"))

    created = await _post_media(client, headers)
    assert created["data"]["type"] == "IMAGE"
    assert created["data"]["latitude"] == 0.0

    bad_type = await client.post(
        "/api/v1/media",
        json={"link": "https://cdn.example.com/x.jpg", "type": "image"},
        headers=headers,
    )
    assert bad_type.status_code == 400
    assert bad_type.json()["code"] == 9000
    assert '"type"' in bad_type.json()["message"]

    bad_latitude = await client.post(
        "/api/v1/media",
        json={"link": "https://cdn.example.com/x.jpg", "latitude": 91},
        headers=headers,
    )
    assert bad_latitude.status_code == 400
    assert bad_latitude.json()["code"] == 9000


async def test_unknown_and_malformed_media_ids(
    app_context: dict[str, Any], create_user
) -> None:
    client: AsyncClient = app_context["client"]
    headers = app_context["auth_headers"](await create_user("alice"))
    for media_id in (str(uuid.uuid4()), "123"):
        response = await client.get(f"/api/v1/media/{media_id}", headers=headers)
        assert response.status_code == 404
        assert response.json()["code"] == 3002


async def test_only_owner_can_delete_media(
    app_context: dict[str, Any], create_user
) -> None:
    client: AsyncClient = app_context["client"]
    alice = await create_user("alice")
    bob = await create_user("bob")
    alice_headers = app_context["auth_headers"](alice)
    media_id = (await _post_media(client, alice_headers))["data"]["id"]

    denied = await client.delete(
        f"/api/v1/media/{media_id}", headers=app_context["auth_headers"](bob)
    )
    assert denied.status_code == 403
    assert denied.json() == {
        "code": 9001,
        "status": "error",
        "message": "Access Denied - You don't have permission to: delete media",
    }

    await client.post(
        f"/api/v1/media/{media_id}/comments",
        json={"text": "Nice!"},
        headers=alice_headers,
    )
    deleted = await client.delete(f"/api/v1/media/{media_id}", headers=alice_headers)
    assert deleted.status_code == 200
    assert deleted.json()["code"] == 3003
    assert deleted.json()["data"]["id"] == media_id

    gone = await client.get(f"/api/v1/media/{media_id}", headers=alice_headers)
    assert gone.status_code == 404
    me = await client.get("/api/v1/users/self", headers=alice_headers)
    assert me.json()["data"]["counts"]["media"] == 0


async def test_search_media_within_distance_band(
    app_context: dict[str, Any], create_user
) -> None:
    client: AsyncClient = app_context["client"]
    headers = app_context["auth_headers"](await create_user("alice"))

    await _post_media(client, headers, caption="too close", latitude=0.001)
    older = await _post_media(client, headers, caption="older", **NEARBY)
    await _post_media(client, headers, caption="too far", **FAR_AWAY)
    newer = await _post_media(
        client, headers, caption="newer", latitude=0.0, longitude=0.03
    )

    response = await client.get(
        "/api/v1/media",
        params={"latitude": 0, "longitude": 0},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["code"] == 3004
    ids = [item["id"] for item in response.json()["data"]]
    assert ids == [newer["data"]["id"], older["data"]["id"]]


async def test_search_requires_coordinates(
    app_context: dict[str, Any], create_user
) -> None:
    client: AsyncClient = app_context["client"]
    headers = app_context["auth_headers"](await create_user("alice"))
    response = await client.get(
        "/api/v1/media", params={"latitude": 10}, headers=headers
    )
    assert response.status_code == 400
    assert response.json()["code"] == 9000
    assert '"longitude"' in response.json()["message"]


async def test_comments_are_listed_oldest_first(
    app_context: dict[str, Any], create_user
) -> None:
    client: AsyncClient = app_context["client"]
    alice = await create_user("alice")
    bob = await create_user("bob")
    alice_headers = app_context["auth_headers"](alice)
    bob_headers = app_context["auth_headers"](bob)
    media_id = (await _post_media(client, alice_headers))["data"]["id"]

    first = await client.post(
        f"/api/v1/media/{media_id}/comments",
        json={"text": "first"},
        headers=bob_headers,
    )
    assert first.status_code == 200
    assert first.json()["code"] == 3005
    assert first.json()["data"]["author"]["username"] == "bob"
    await client.post(
        f"/api/v1/media/{media_id}/comments",
        json={"text": "second"},
        headers=alice_headers,
    )

    listing = await client.get(
        f"/api/v1/media/{media_id}/comments", headers=alice_headers
    )
    assert listing.json()["code"] == 3006
    assert [c["text"] for c in listing.json()["data"]] == ["first", "second"]


async def test_media_requires_authentication(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.post(
        "/api/v1/media", json={"link": "https://cdn.example.com/photo.jpg"}
    )
    assert response.status_code == 403
    assert response.json()["code"] == 1006
