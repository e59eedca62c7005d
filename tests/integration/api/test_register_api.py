import pytest

from tests.utils.json_compare import exclude_keys


@pytest.mark.asyncio
async def test_register_success(client, test_data, email_sender):
    """
    Given a new email and a strong password
    When registering
    Then the user is created with the "user" role and a token pair
    """
    request = test_data.get_copy("register_request")

    response = await client.post("/auth/register", json=request)

    assert response.status_code == 201
    body = response.json()
    assert exclude_keys(body["user"], {"id"}) == {
        "email": "alice@example.com",
        "name": "Alice",
        "role": "user",
    }
    assert body["access_token"]
    assert body["refresh_token"]
    assert "password_hash" not in body["user"]
    assert email_sender.welcomes == [("alice@example.com", "Alice")]


@pytest.mark.asyncio
async def test_register_tokens_work(client, test_data):
    response = await client.post("/auth/register", json=test_data.get_copy("register_request"))
    access_token = response.json()["access_token"]

    me = await client.get("/auth/me", headers={"Authorization": f"Bearer {access_token}"})

    assert me.status_code == 200
    assert me.json()["user"]["email"] == "alice@example.com"


@pytest.mark.asyncio
async def test_register_duplicate_email(client, test_data):
    """
    Given an email that is already registered
    When registering again
    Then 409 Conflict is returned
    """
    request = test_data.get_copy("register_request")
    await client.post("/auth/register", json=request)

    response = await client.post("/auth/register", json=request)

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "EMAIL_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_register_weak_passwords(client, test_data):
    """Each weak password reports the first rule it breaks"""
    request = test_data.get_copy("register_request")

    for case in test_data.get("weak_passwords"):
        request["password"] = case["password"]
        response = await client.post("/auth/register", json=request)

        assert response.status_code == 400
        assert response.json()["error"] == {"code": "WEAK_PASSWORD", "message": case["message"]}


@pytest.mark.asyncio
async def test_register_invalid_email(client, test_data):
    request = test_data.get_copy("register_request")
    request["email"] = "not-an-email"

    response = await client.post("/auth/register", json=request)

    assert response.status_code == 422
