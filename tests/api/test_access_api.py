"""Access API tests: session roles, world gates, current world, refresh and logout."""

from httpx import AsyncClient

from casehub.main import app


async def test_access_without_token_returns_401(client: AsyncClient) -> None:
    response = await client.get("/api/v1/me/access")
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"
    assert response.headers.get("WWW-Authenticate") == "Bearer"


async def test_access_with_invalid_token_returns_401(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/me/access", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401


async def test_expired_token_returns_401(client: AsyncClient, make_token) -> None:
    token = make_token("u-editor", expires_in=-60)
    response = await client.get(
        "/api/v1/me/access", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 401


async def test_editor_access(client: AsyncClient, auth_headers) -> None:
    """Editor with a single JDE grant: not superadmin, JDE only."""
    response = await client.get("/api/v1/me/access", headers=auth_headers("u-editor"))
    assert response.status_code == 200
    data = response.json()
    assert data["user_id"] == "u-editor"
    assert data["roles"] == ["editor"]
    assert data["is_super_admin"] is False
    assert [w["code"] for w in data["accessible_worlds"]] == ["JDE"]
    assert data["accessible_worlds"][0]["theme_colors"]["primary"] == "#1d4ed8"
    assert data["profile"]["display_name"] == "Eddie"
    assert data["current_world"] is None


async def test_unknown_roles_are_not_exposed(client: AsyncClient, auth_headers) -> None:
    response = await client.get("/api/v1/me/access", headers=auth_headers("u-mixed"))
    data = response.json()
    assert data["roles"] == ["viewer"]
    assert [w["code"] for w in data["accessible_worlds"]] == ["JDE", "JDMO"]


async def test_world_access_flags(client: AsyncClient, auth_headers) -> None:
    headers = auth_headers("u-editor")
    expected = {"JDE": True, "DBCS": False, "jde": False, "UNKNOWN": False}
    for code, has_access in expected.items():
        response = await client.get(f"/api/v1/me/worlds/{code}/access", headers=headers)
        assert response.status_code == 200
        assert response.json() == {"world_code": code, "has_access": has_access}


async def test_superadmin_without_grant_has_no_world_access(
    client: AsyncClient, auth_headers
) -> None:
    headers = auth_headers("u-super")
    data = (await client.get("/api/v1/me/access", headers=headers)).json()
    assert data["is_super_admin"] is True
    assert data["roles"] == ["editor", "superadmin"]

    response = await client.get("/api/v1/me/worlds/JDE/access", headers=headers)
    assert response.json()["has_access"] is False
    response = await client.get("/api/v1/me/worlds/DBCS/access", headers=headers)
    assert response.json()["has_access"] is True


async def test_set_and_clear_current_world(client: AsyncClient, auth_headers) -> None:
    headers = auth_headers("u-mixed", "s-mixed")
    response = await client.put(
        "/api/v1/me/current-world", headers=headers, json={"world_code": "JDMO"}
    )
    assert response.status_code == 200
    assert response.json()["current_world"]["code"] == "JDMO"

    # Same session keeps the selection.
    data = (await client.get("/api/v1/me/access", headers=headers)).json()
    assert data["current_world"]["code"] == "JDMO"

    response = await client.put(
        "/api/v1/me/current-world", headers=headers, json={"world_code": None}
    )
    assert response.json()["current_world"] is None


async def test_current_world_must_be_accessible(client: AsyncClient, auth_headers) -> None:
    response = await client.put(
        "/api/v1/me/current-world",
        headers=auth_headers("u-editor"),
        json={"world_code": "DBCS"},
    )
    assert response.status_code == 403
    body = response.json()
    assert body["error"] == "PERMISSION_DENIED"
    assert body["details"]["world_code"] == "DBCS"


async def test_refresh_picks_up_new_grant(client: AsyncClient, auth_headers, store) -> None:
    headers = auth_headers("u-editor", "s-refresh")
    before = (await client.get("/api/v1/me/access", headers=headers)).json()
    assert [w["code"] for w in before["accessible_worlds"]] == ["JDE"]

    store.add("user_world_access", {"id": "uwa-9", "user_id": "u-editor", "world_id": "w-jdmo"})
    # Cached until refreshed.
    cached = (await client.get("/api/v1/me/access", headers=headers)).json()
    assert [w["code"] for w in cached["accessible_worlds"]] == ["JDE"]

    response = await client.post("/api/v1/me/refresh", headers=headers)
    assert response.status_code == 200
    assert [w["code"] for w in response.json()["accessible_worlds"]] == ["JDE", "JDMO"]


async def test_logout_clears_session(client: AsyncClient, auth_headers) -> None:
    headers = auth_headers("u-editor", "s-logout")
    await client.get("/api/v1/me/access", headers=headers)
    registry = app.state.session_registry
    assert registry.get("s-logout") is not None

    response = await client.post("/api/v1/auth/logout", headers=headers)
    assert response.status_code == 204
    assert registry.get("s-logout") is None

    # The same bearer token cannot reopen the session.
    again = await client.get("/api/v1/me/access", headers=headers)
    assert again.status_code == 401
    assert again.json()["error"] == "AUTHENTICATION_ERROR"
    assert registry.get("s-logout") is None


async def test_logout_without_token_returns_401(client: AsyncClient) -> None:
    response = await client.post("/api/v1/auth/logout")
    assert response.status_code == 401
