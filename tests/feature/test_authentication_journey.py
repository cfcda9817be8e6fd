"""End-to-end journeys through the HTTP API.

Each test drives a freshly started application (lifespan included) backed by
its own SQLite database, with the email transport replaced by a mock so the
reset link can be read back.
"""

from sqlalchemy import select

from src.domain.entities.password_reset_token import PasswordResetToken
from src.domain.entities.user import User

REGISTER_URL = "/api/auth/register"
LOGIN_URL = "/api/auth/login"
RESET_REQUEST_URL = "/api/auth/password-reset/request"
RESET_CONFIRM_URL = "/api/auth/password-reset/confirm"


def sent_reset_token(email_sender) -> str:
    text_body = email_sender.send.await_args.kwargs["text_body"]
    return text_body.split("token=")[1].split()[0]


async def all_rows(app, model):
    async with app.state.database.session() as session:
        result = await session.execute(select(model))
        return result.scalars().all()


async def test_register_login_reset_journey(async_client, app, email_sender):
    response = await async_client.post(
        REGISTER_URL, json={"email": "a@x.com", "password": "Test1234!"}
    )
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "User registered successfully"
    assert body["user"]["email"] == "a@x.com"
    assert set(body["user"]) == {"id", "email"}

    response = await async_client.post(
        LOGIN_URL, json={"email": "a@x.com", "password": "Test1234!"}
    )
    assert response.status_code == 200
    assert response.json()["accessToken"]
    assert response.json()["user"]["id"] == body["user"]["id"]
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("refreshToken=")
    assert "HttpOnly" in set_cookie

    response = await async_client.post(
        LOGIN_URL, json={"email": "a@x.com", "password": "Wrong1234!"}
    )
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "invalid_credentials"

    response = await async_client.post(RESET_REQUEST_URL, json={"email": "a@x.com"})
    assert response.status_code == 200
    tokens = await all_rows(app, PasswordResetToken)
    assert len(tokens) == 1
    assert tokens[0].used is False
    raw_token = sent_reset_token(email_sender)
    assert tokens[0].token_hash != raw_token

    response = await async_client.post(
        RESET_CONFIRM_URL, json={"token": raw_token, "newPassword": "NewPass123!"}
    )
    assert response.status_code == 200
    assert response.json() == {
        "message": "Password has been reset successfully. Please log in with your new password."
    }

    response = await async_client.post(
        RESET_CONFIRM_URL, json={"token": raw_token, "newPassword": "NewPass123!"}
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "invalid_token"


async def test_reset_logs_out_and_swaps_passwords(async_client, app, email_sender):
    await async_client.post(REGISTER_URL, json={"email": "a@x.com", "password": "Test1234!"})
    await async_client.post(LOGIN_URL, json={"email": "a@x.com", "password": "Test1234!"})
    [user] = await all_rows(app, User)
    assert user.refresh_token_hash is not None

    await async_client.post(RESET_REQUEST_URL, json={"email": "a@x.com"})
    await async_client.post(
        RESET_CONFIRM_URL,
        json={"token": sent_reset_token(email_sender), "newPassword": "NewPass123!"},
    )

    [user] = await all_rows(app, User)
    assert user.refresh_token_hash is None

    old = await async_client.post(LOGIN_URL, json={"email": "a@x.com", "password": "Test1234!"})
    new = await async_client.post(LOGIN_URL, json={"email": "a@x.com", "password": "NewPass123!"})
    assert old.status_code == 401
    assert new.status_code == 200


async def test_each_login_replaces_the_session(async_client, app):
    await async_client.post(REGISTER_URL, json={"email": "a@x.com", "password": "Test1234!"})

    await async_client.post(LOGIN_URL, json={"email": "a@x.com", "password": "Test1234!"})
    [first] = await all_rows(app, User)
    await async_client.post(LOGIN_URL, json={"email": "a@x.com", "password": "Test1234!"})
    [second] = await all_rows(app, User)

    assert first.refresh_token_hash != second.refresh_token_hash


async def test_duplicate_registration_is_a_conflict(async_client):
    await async_client.post(REGISTER_URL, json={"email": "a@x.com", "password": "Test1234!"})

    response = await async_client.post(
        REGISTER_URL, json={"email": "A@X.COM", "password": "Other1234!"}
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "duplicate_email"


async def test_unknown_email_and_wrong_password_are_indistinguishable(async_client):
    await async_client.post(REGISTER_URL, json={"email": "a@x.com", "password": "Test1234!"})

    unknown = await async_client.post(
        LOGIN_URL, json={"email": "ghost@x.com", "password": "Test1234!"}
    )
    wrong = await async_client.post(LOGIN_URL, json={"email": "a@x.com", "password": "Nope1234!"})

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json()
    assert "set-cookie" not in unknown.headers


async def test_reset_request_does_not_reveal_accounts(async_client, app, email_sender):
    await async_client.post(REGISTER_URL, json={"email": "a@x.com", "password": "Test1234!"})

    known = await async_client.post(RESET_REQUEST_URL, json={"email": "a@x.com"})
    unknown = await async_client.post(RESET_REQUEST_URL, json={"email": "ghost@x.com"})

    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json() == {
        "message": "If an account exists with this email, a password reset link has been sent."
    }
    assert len(await all_rows(app, PasswordResetToken)) == 1
    email_sender.send.assert_awaited_once()


async def test_reset_request_succeeds_when_delivery_fails(async_client, app, email_sender):
    await async_client.post(REGISTER_URL, json={"email": "a@x.com", "password": "Test1234!"})
    email_sender.send.side_effect = ConnectionError("smtp unreachable")

    response = await async_client.post(RESET_REQUEST_URL, json={"email": "a@x.com"})

    assert response.status_code == 200
    assert len(await all_rows(app, PasswordResetToken)) == 1


async def test_expired_token_then_invalid_token(async_client, email_sender, clock):
    await async_client.post(REGISTER_URL, json={"email": "a@x.com", "password": "Test1234!"})
    await async_client.post(RESET_REQUEST_URL, json={"email": "a@x.com"})
    raw_token = sent_reset_token(email_sender)
    clock.advance(minutes=61)

    first = await async_client.post(
        RESET_CONFIRM_URL, json={"token": raw_token, "newPassword": "NewPass123!"}
    )
    second = await async_client.post(
        RESET_CONFIRM_URL, json={"token": raw_token, "newPassword": "NewPass123!"}
    )

    assert first.status_code == 400
    assert first.json()["error"]["code"] == "expired_token"
    assert second.status_code == 400
    assert second.json()["error"]["code"] == "invalid_token"


async def test_unknown_token_is_invalid(async_client):
    response = await async_client.post(
        RESET_CONFIRM_URL, json={"token": "f" * 128, "newPassword": "NewPass123!"}
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "invalid_token"


async def test_successful_register_and_login_are_logged(async_client, mocker):
    register_logger = mocker.patch("src.adapters.api.v1.auth.routes.register.logger")
    login_logger = mocker.patch("src.adapters.api.v1.auth.routes.login.logger")

    registered = await async_client.post(
        REGISTER_URL, json={"email": "a@x.com", "password": "Test1234!"}
    )
    await async_client.post(LOGIN_URL, json={"email": "a@x.com", "password": "Nope1234!"})
    login_logger.info.assert_not_called()
    await async_client.post(LOGIN_URL, json={"email": "a@x.com", "password": "Test1234!"})

    user_id = registered.json()["user"]["id"]
    register_logger.info.assert_called_once_with("User registered via API", user_id=user_id)
    login_logger.info.assert_called_once_with("User logged in via API", user_id=user_id)
