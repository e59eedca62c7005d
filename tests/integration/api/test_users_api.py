import pytest

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.users import SeedAdminUseCase
from tests.utils.auth_helpers import DEFAULT_PASSWORD, bearer, login, register


@pytest.mark.asyncio
async def test_list_users_paginated_and_filtered(client, admin):
    headers = bearer(admin["access_token"])
    await register(client, "alice@example.com", name="Alice")
    await register(client, "bob@example.com", name="Bob")

    first_page = await client.get("/users", params={"page": 1, "limit": 2}, headers=headers)
    filtered = await client.get("/users", params={"email": "alice"}, headers=headers)

    assert first_page.status_code == 200
    body = first_page.json()
    assert [u["email"] for u in body["data"]] == ["admin@example.com", "alice@example.com"]
    assert body["pagination"] == {"page": 1, "limit": 2, "total": 3, "total_pages": 2}
    assert body["data"][0]["role"] == "admin"
    assert "password_hash" not in body["data"][0]
    assert [u["name"] for u in filtered.json()["data"]] == ["Alice"]


@pytest.mark.asyncio
async def test_regular_user_can_read_but_not_write_users(client):
    alice = await register(client, "alice@example.com")
    headers = bearer(alice["access_token"])

    listed = await client.get("/users", headers=headers)
    fetched = await client.get(f"/users/{alice['user']['id']}", headers=headers)
    created = await client.post(
        "/users", json={"email": "eve@example.com", "password": DEFAULT_PASSWORD}, headers=headers
    )
    deleted = await client.delete(f"/users/{alice['user']['id']}", headers=headers)

    assert listed.status_code == 200
    assert fetched.json()["email"] == "alice@example.com"
    assert created.status_code == 403
    assert deleted.status_code == 403


@pytest.mark.asyncio
async def test_users_require_authentication(client):
    response = await client.get("/users")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "MISSING_TOKEN"


@pytest.mark.asyncio
async def test_admin_creates_user_who_can_log_in(client, admin, email_sender):
    headers = bearer(admin["access_token"])

    response = await client.post(
        "/users",
        json={"email": "carol@example.com", "password": DEFAULT_PASSWORD, "name": "Carol"},
        headers=headers,
    )

    assert response.status_code == 201
    assert response.json()["role"] == "user"
    assert response.json()["is_active"] is True
    assert (await login(client, "carol@example.com"))["user"]["name"] == "Carol"

    duplicate = await client.post(
        "/users", json={"email": "carol@example.com", "password": DEFAULT_PASSWORD}, headers=headers
    )
    assert duplicate.status_code == 409
    assert duplicate.json()["error"]["code"] == "EMAIL_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_deactivated_user_is_locked_out(client, admin):
    """
    Given a logged-in user
    When an administrator deactivates the account
    Then the access token, the refresh token and new logins are all refused
    """
    alice = await register(client, "alice@example.com")

    response = await client.put(
        f"/users/{alice['user']['id']}",
        json={"is_active": False},
        headers=bearer(admin["access_token"]),
    )

    assert response.status_code == 200
    assert response.json()["is_active"] is False

    me = await client.get("/auth/me", headers=bearer(alice["access_token"]))
    assert me.status_code == 401
    assert me.json()["error"]["code"] == "USER_INACTIVE"

    refresh = await client.post("/auth/refresh", json={"refresh_token": alice["refresh_token"]})
    assert refresh.status_code == 403

    relogin = await client.post(
        "/auth/login", json={"email": "alice@example.com", "password": DEFAULT_PASSWORD}
    )
    assert relogin.status_code == 403
    assert relogin.json()["error"]["code"] == "USER_INACTIVE"


@pytest.mark.asyncio
async def test_update_user_email(client, admin):
    headers = bearer(admin["access_token"])
    alice = await register(client, "alice@example.com")
    await register(client, "bob@example.com")

    taken = await client.put(
        f"/users/{alice['user']['id']}", json={"email": "bob@example.com"}, headers=headers
    )
    changed = await client.put(
        f"/users/{alice['user']['id']}", json={"email": "alice@new.example.com"}, headers=headers
    )

    assert taken.status_code == 409
    assert changed.status_code == 200
    assert changed.json()["email"] == "alice@new.example.com"
    await login(client, "alice@new.example.com")


@pytest.mark.asyncio
async def test_delete_user(client, admin):
    headers = bearer(admin["access_token"])
    alice = await register(client, "alice@example.com")

    deleted = await client.delete(f"/users/{alice['user']['id']}", headers=headers)

    assert deleted.status_code == 204
    missing = await client.get(f"/users/{alice['user']['id']}", headers=headers)
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "USER_NOT_FOUND"
    me = await client.get("/auth/me", headers=bearer(alice["access_token"]))
    assert me.status_code == 401

    again = await client.delete(f"/users/{alice['user']['id']}", headers=headers)
    assert again.status_code == 404


@pytest.mark.asyncio
async def test_seed_admin_is_idempotent_and_promotes(client, admin, db_session, passwords):
    """
    Given the admin already seeded and a registered regular user
    When seeding again for each email
    Then the admin is untouched and the regular user is promoted
    """
    alice = await register(client, "alice@example.com")

    async with SqlAlchemyUnitOfWork(db_session) as uow:
        again = await SeedAdminUseCase(uow, passwords).execute(
            "admin@example.com", "Other!Passw0rd"
        )
    async with SqlAlchemyUnitOfWork(db_session) as uow:
        promoted = await SeedAdminUseCase(uow, passwords).execute(
            "alice@example.com", DEFAULT_PASSWORD
        )

    assert (again.value.created, again.value.promoted) == (False, False)
    assert (promoted.value.created, promoted.value.promoted) == (False, True)
    await login(client, "admin@example.com")
    me = await client.get("/auth/me", headers=bearer(alice["access_token"]))
    assert me.json()["user"]["role"] == "admin"
