import pytest
from httpx import AsyncClient

REGISTRATION = {"name": "Alice Smith", "email": "alice@example.com", "password": "pa55word123"}


async def register(client: AsyncClient, mailer) -> str:
    response = await client.post("/v1/users", json=REGISTRATION)
    assert response.status_code == 202
    return mailer.sent[-1]["data"]["activation_token"]


@pytest.mark.asyncio
async def test_register_user_sends_welcome_email(client: AsyncClient, mailer):
    response = await client.post("/v1/users", json=REGISTRATION)

    assert response.status_code == 202
    user = response.json()["user"]
    assert user["email"] == "alice@example.com"
    assert user["activated"] is False
    assert "password" not in user

    assert len(mailer.sent) == 1
    email = mailer.sent[0]
    assert email["recipient"] == "alice@example.com"
    assert email["template"] == "user_welcome"
    assert email["data"]["user_id"] == user["id"]


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, mailer):
    await client.post("/v1/users", json=REGISTRATION)

    response = await client.post("/v1/users", json=REGISTRATION)

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "EMAIL_ALREADY_EXISTS"
    assert len(mailer.sent) == 1


@pytest.mark.asyncio
async def test_register_invalid_email(client: AsyncClient):
    response = await client.post("/v1/users", json={**REGISTRATION, "email": "not-an-email"})

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "FAILED_VALIDATION"
    assert "email" in response.json()["error"]["details"]


@pytest.mark.asyncio
async def test_register_short_password(client: AsyncClient):
    response = await client.post("/v1/users", json={**REGISTRATION, "password": "short"})

    assert response.status_code == 422
    assert response.json()["error"]["details"] == {"password": "must be at least 8 bytes long"}


@pytest.mark.asyncio
async def test_activation_flow(client: AsyncClient, mailer):
    activation_token = await register(client, mailer)

    response = await client.put("/v1/users/activated", json={"token": activation_token})

    assert response.status_code == 200
    assert response.json()["user"]["activated"] is True

    # Token is consumed
    response = await client.put("/v1/users/activated", json={"token": activation_token})
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_new_user_can_read_but_not_write_movies(client: AsyncClient, mailer):
    activation_token = await register(client, mailer)
    await client.put("/v1/users/activated", json={"token": activation_token})

    response = await client.post(
        "/v1/tokens/authentication",
        json={"email": REGISTRATION["email"], "password": REGISTRATION["password"]},
    )
    headers = {"Authorization": f"Bearer {response.json()['authentication_token']['token']}"}

    assert (await client.get("/v1/movies", headers=headers)).status_code == 200
    response = await client.post(
        "/v1/movies",
        json={"title": "Moana", "year": 2016, "runtime": 107, "genres": ["animation"]},
        headers=headers,
    )
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "PERMISSION_DENIED"


@pytest.mark.asyncio
async def test_resend_activation_token(client: AsyncClient, mailer):
    first_token = await register(client, mailer)

    response = await client.post("/v1/tokens/activation", json={"email": REGISTRATION["email"]})

    assert response.status_code == 202
    second_token = mailer.sent[-1]["data"]["activation_token"]
    assert mailer.sent[-1]["template"] == "token_activation"
    assert second_token != first_token

    # Issuing a new token leaves the old one valid
    response = await client.put("/v1/users/activated", json={"token": first_token})
    assert response.status_code == 200

    # Activation removed every activation token of the user
    response = await client.put("/v1/users/activated", json={"token": second_token})
    assert response.status_code == 422

    response = await client.post("/v1/tokens/activation", json={"email": REGISTRATION["email"]})
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "ALREADY_ACTIVATED"


@pytest.mark.asyncio
async def test_password_reset_flow(client: AsyncClient, mailer):
    activation_token = await register(client, mailer)
    await client.put("/v1/users/activated", json={"token": activation_token})

    response = await client.post(
        "/v1/tokens/password-reset", json={"email": REGISTRATION["email"]}
    )
    assert response.status_code == 202
    reset_token = mailer.sent[-1]["data"]["password_reset_token"]

    response = await client.put(
        "/v1/users/password", json={"password": "brand-new-pass", "token": reset_token}
    )
    assert response.status_code == 200
    assert response.json() == {"message": "Your password was successfully reset"}

    response = await client.post(
        "/v1/tokens/authentication",
        json={"email": REGISTRATION["email"], "password": REGISTRATION["password"]},
    )
    assert response.status_code == 401

    response = await client.post(
        "/v1/tokens/authentication",
        json={"email": REGISTRATION["email"], "password": "brand-new-pass"},
    )
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_password_reset_requires_activated_account(client: AsyncClient, mailer):
    await register(client, mailer)

    response = await client.post(
        "/v1/tokens/password-reset", json={"email": REGISTRATION["email"]}
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "ACCOUNT_NOT_ACTIVATED"


@pytest.mark.asyncio
async def test_password_reset_unknown_email(client: AsyncClient):
    response = await client.post(
        "/v1/tokens/password-reset", json={"email": "nobody@example.com"}
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "EMAIL_NOT_FOUND"
