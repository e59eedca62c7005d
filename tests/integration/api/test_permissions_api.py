import pytest

from tests.utils.auth_helpers import bearer, register


@pytest.mark.asyncio
async def test_list_permissions_contains_catalogue(client, admin):
    response = await client.get("/permissions", headers=bearer(admin["access_token"]))

    assert response.status_code == 200
    names = {p["name"] for p in response.json()}
    assert {"users.read", "users.manage", "roles.manage", "admin.access"} <= names


@pytest.mark.asyncio
async def test_create_permission(client, admin):
    headers = bearer(admin["access_token"])

    response = await client.post(
        "/permissions",
        json={"name": "reports.view", "description": "View reports"},
        headers=headers,
    )

    assert response.status_code == 201
    assert response.json()["name"] == "reports.view"
    assert response.json()["is_active"] is True

    duplicate = await client.post("/permissions", json={"name": "reports.view"}, headers=headers)
    assert duplicate.status_code == 409


@pytest.mark.asyncio
async def test_create_permission_with_bad_name(client, admin):
    response = await client.post(
        "/permissions", json={"name": "Reports"}, headers=bearer(admin["access_token"])
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_PERMISSION_NAME"


@pytest.mark.asyncio
async def test_permissions_forbidden_for_regular_user(client):
    body = await register(client, "alice@example.com")

    response = await client.get("/permissions", headers=bearer(body["access_token"]))

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_delete_unknown_permission(client, admin):
    response = await client.delete("/permissions/9999", headers=bearer(admin["access_token"]))

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "PERMISSION_NOT_FOUND"


@pytest.mark.asyncio
async def test_deleted_permission_name_can_be_reused(client, admin):
    """
    Given a permission granted to a role and then deleted
    When creating a permission with the same name
    Then it succeeds and no role still grants it
    """
    headers = bearer(admin["access_token"])
    first = (
        await client.post("/permissions", json={"name": "reports.read"}, headers=headers)
    ).json()
    role = (
        await client.post(
            "/roles", json={"name": "auditor", "permission_ids": [first["id"]]}, headers=headers
        )
    ).json()
    assert role["permissions"] == ["reports.read"]
    await client.delete(f"/permissions/{first['id']}", headers=headers)

    recreated = await client.post(
        "/permissions", json={"name": "reports.read", "description": "Read reports"}, headers=headers
    )

    assert recreated.status_code == 201
    assert recreated.json()["id"] == first["id"]
    assert recreated.json()["is_active"] is True
    auditor = (await client.get(f"/roles/{role['id']}", headers=headers)).json()
    assert auditor["permissions"] == []
