from datetime import timedelta

import pytest
from sqlmodel import update

from src.domain.base import utcnow
from src.domain.entities import User
from tests.utils.auth_helpers import bearer, login, register

FORGOT_MESSAGE = "If an account with that email exists, a password reset link has been sent."


async def request_reset(client, email_sender, email):
    response = await client.post("/auth/forgot-password", json={"email": email})
    assert response.status_code == 200
    return email_sender.password_resets[-1][1]


@pytest.mark.asyncio
async def test_forgot_password_does_not_reveal_accounts(client, email_sender):
    """
    Given one registered and one unknown email
    When requesting a reset for both
    Then both get the same response and only the known one gets mail
    """
    await register(client, "alice@example.com")

    known = await client.post("/auth/forgot-password", json={"email": "alice@example.com"})
    unknown = await client.post("/auth/forgot-password", json={"email": "nobody@example.com"})

    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json() == {"message": FORGOT_MESSAGE}
    assert [email for email, _ in email_sender.password_resets] == ["alice@example.com"]
    assert len(email_sender.password_resets[0][1]) == 64


@pytest.mark.asyncio
async def test_reset_password_flow(client, email_sender, test_data):
    """
    Given a reset token from the forgot-password mail
    When resetting the password
    Then the new password works, the old one does not, and sessions are revoked
    """
    body = await register(client, "alice@example.com")
    token = await request_reset(client, email_sender, "alice@example.com")
    new_password = test_data.get("new_password")

    response = await client.post(
        "/auth/reset-password", json={"token": token, "new_password": new_password}
    )

    assert response.status_code == 200
    assert response.json() == {"message": "Password has been reset successfully"}

    refresh = await client.post("/auth/refresh", json={"refresh_token": body["refresh_token"]})
    assert refresh.status_code == 401

    old_login = await client.post(
        "/auth/login", json={"email": "alice@example.com", "password": "Str0ng!Pw"}
    )
    assert old_login.status_code == 401
    await login(client, "alice@example.com", new_password)


@pytest.mark.asyncio
async def test_reset_token_is_single_use(client, email_sender):
    await register(client, "alice@example.com")
    token = await request_reset(client, email_sender, "alice@example.com")
    payload = {"token": token, "new_password": "N3w!Passw0rd"}

    first = await client.post("/auth/reset-password", json=payload)
    second = await client.post("/auth/reset-password", json=payload)

    assert first.status_code == 200
    assert second.status_code == 400
    assert second.json()["error"]["code"] == "INVALID_RESET_TOKEN"


@pytest.mark.asyncio
async def test_new_reset_request_replaces_previous_token(client, email_sender):
    await register(client, "alice@example.com")
    first = await request_reset(client, email_sender, "alice@example.com")
    second = await request_reset(client, email_sender, "alice@example.com")

    stale = await client.post(
        "/auth/reset-password", json={"token": first, "new_password": "N3w!Passw0rd"}
    )
    fresh = await client.post(
        "/auth/reset-password", json={"token": second, "new_password": "N3w!Passw0rd"}
    )

    assert stale.status_code == 400
    assert fresh.status_code == 200


@pytest.mark.asyncio
async def test_expired_reset_token(client, email_sender, db_session):
    body = await register(client, "alice@example.com")
    token = await request_reset(client, email_sender, "alice@example.com")
    await db_session.execute(
        update(User)
        .where(User.id == body["user"]["id"])
        .values(password_reset_expires=utcnow() - timedelta(minutes=1))
    )
    await db_session.commit()

    response = await client.post(
        "/auth/reset-password", json={"token": token, "new_password": "N3w!Passw0rd"}
    )

    assert response.status_code == 400
    assert response.json()["error"] == {
        "code": "INVALID_RESET_TOKEN",
        "message": "Invalid or expired password reset token",
    }


@pytest.mark.asyncio
async def test_reset_with_weak_password(client, email_sender):
    await register(client, "alice@example.com")
    token = await request_reset(client, email_sender, "alice@example.com")

    response = await client.post("/auth/reset-password", json={"token": token, "new_password": "weak"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "WEAK_PASSWORD"


@pytest.mark.asyncio
async def test_change_password(client, test_data):
    """
    Given an authenticated user
    When changing the password with the right current password
    Then only the new password logs in and the stored refresh token is cleared
    """
    body = await register(client, "alice@example.com")
    new_password = test_data.get("new_password")

    response = await client.post(
        "/auth/change-password",
        json={"current_password": "Str0ng!Pw", "new_password": new_password},
        headers=bearer(body["access_token"]),
    )

    assert response.status_code == 200
    assert response.json() == {"message": "Password has been changed successfully"}
    refresh = await client.post("/auth/refresh", json={"refresh_token": body["refresh_token"]})
    assert refresh.status_code == 401
    await login(client, "alice@example.com", new_password)


@pytest.mark.asyncio
async def test_change_password_wrong_current(client):
    body = await register(client, "alice@example.com")

    response = await client.post(
        "/auth/change-password",
        json={"current_password": "Wr0ng!Pw", "new_password": "N3w!Passw0rd"},
        headers=bearer(body["access_token"]),
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_CURRENT_PASSWORD"


@pytest.mark.asyncio
async def test_change_password_weak_new_password_keeps_old_one(client):
    body = await register(client, "alice@example.com")

    response = await client.post(
        "/auth/change-password",
        json={"current_password": "Str0ng!Pw", "new_password": "weak"},
        headers=bearer(body["access_token"]),
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "WEAK_PASSWORD"
    await login(client, "alice@example.com")


@pytest.mark.asyncio
async def test_change_password_requires_authentication(client):
    response = await client.post(
        "/auth/change-password",
        json={"current_password": "Str0ng!Pw", "new_password": "N3w!Passw0rd"},
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "MISSING_TOKEN"
