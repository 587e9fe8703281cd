from typing import Any, Dict, List

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.db.models import PasswordReset, User
from shared.utils.auth import create_jwt_token
from tests.conftest import TEST_PASSWORD
from tests.utils.assertions import assert_envelope, assert_error
from user_service.api.v1.endpoints import password
from user_service.services import auth
from user_service.services.verification import create_email_otp, verify_email_otp


def registration_payload(email: str, **overrides: Any) -> Dict[str, Any]:
    return {
        "email": email,
        "username": "new.shooter",
        "full_name": "Ram Bahadur",
        "address": "Thamel Marg, Kathmandu 44600",
        "password": "Sup3rSecret!",
        "confirm_password": "Sup3rSecret!",
        "user_type": "freelancer",
        **overrides,
    }


async def verify_email(db: AsyncSession, email: str) -> None:
    issued = await create_email_otp(db, email)
    await verify_email_otp(db, email, issued.plain)


async def test_register_requires_verified_email(test_client: AsyncClient):
    response = await test_client.post(
        "/api/v1/auth/register", json=registration_payload("fresh@example.com")
    )

    assert_error(response, 400, "Email not verified")


async def test_register_after_verification(
    test_client: AsyncClient, test_db_session: AsyncSession
):
    await verify_email(test_db_session, "fresh@example.com")

    response = await test_client.post(
        "/api/v1/auth/register", json=registration_payload("Fresh@Example.com")
    )

    data = assert_envelope(response, 201)
    assert data["user"]["email"] == "fresh@example.com"
    assert data["user"]["user_type"] == "freelancer"
    assert data["user"]["is_verified"] is True
    assert "password_hash" not in data["user"]
    assert data["token"]
    assert data["expires_in"] > 0
    assert "access_token" in response.cookies


async def test_register_rejects_mismatched_passwords(test_client: AsyncClient):
    response = await test_client.post(
        "/api/v1/auth/register",
        json=registration_payload(
            "fresh@example.com", confirm_password="Different1!"
        ),
    )

    assert response.status_code == 422


async def test_register_rejects_taken_username(
    test_client: AsyncClient, test_db_session: AsyncSession, user: User
):
    await verify_email(test_db_session, "fresh@example.com")

    response = await test_client.post(
        "/api/v1/auth/register",
        json=registration_payload("fresh@example.com", username=user.username),
    )

    assert_error(response, 409, "already taken")


async def test_register_losing_a_uniqueness_race_returns_conflict(
    test_client: AsyncClient,
    test_db_session: AsyncSession,
    user: User,
    monkeypatch: pytest.MonkeyPatch,
):
    await verify_email(test_db_session, "fresh@example.com")

    # The check passed before the other account was committed
    async def nothing_taken(db, username, email):
        return None

    monkeypatch.setattr(auth, "validate_unique_user", nothing_taken)
    response = await test_client.post(
        "/api/v1/auth/register",
        json=registration_payload("fresh@example.com", username=user.username),
    )

    assert_error(response, 409, "already exists")
    stored = await test_db_session.scalar(
        select(User).where(User.email == "fresh@example.com")
    )
    assert stored is None


async def test_login_success_sets_cookie(test_client: AsyncClient, user: User):
    response = await test_client.post(
        "/api/v1/auth/login",
        json={"email": user.email.upper(), "password": TEST_PASSWORD},
    )

    data = assert_envelope(response, 200)
    assert response.json()["message"] == "Login successful"
    assert data["user"]["id"] == user.id
    assert response.cookies.get("access_token") == data["token"]


@pytest.mark.parametrize(
    "email, password_value",
    [
        ("photographer@example.com", "WrongPassword1!"),
        ("nobody@example.com", TEST_PASSWORD),
    ],
)
async def test_login_failures_look_alike(
    test_client: AsyncClient, user: User, email: str, password_value: str
):
    response = await test_client.post(
        "/api/v1/auth/login", json={"email": email, "password": password_value}
    )

    assert_error(response, 401, "Invalid email or password")


async def test_login_rejects_oauth_account_without_password(
    test_client: AsyncClient, test_db_session: AsyncSession
):
    test_db_session.add(
        User(
            email="oauth@example.com",
            username="oauth",
            full_name="OAuth Person",
            provider="google",
        )
    )
    await test_db_session.commit()

    response = await test_client.post(
        "/api/v1/auth/login",
        json={"email": "oauth@example.com", "password": TEST_PASSWORD},
    )

    assert_error(response, 401, "Invalid email or password")


async def test_me_returns_token_owner(
    test_client: AsyncClient, user: User, user_headers: Dict[str, str]
):
    response = await test_client.get("/api/v1/auth/me", headers=user_headers)

    data = assert_envelope(response, 200)
    assert data["id"] == user.id
    assert data["email"] == user.email


async def test_me_accepts_cookie_token(
    test_client: AsyncClient, user: User, user_headers: Dict[str, str]
):
    token = user_headers["Authorization"].split(" ", 1)[1]
    test_client.cookies.set("access_token", token)

    response = await test_client.get("/api/v1/auth/me")

    assert assert_envelope(response, 200)["id"] == user.id


async def test_me_requires_token(test_client: AsyncClient):
    response = await test_client.get("/api/v1/auth/me")

    assert_error(response, 401, "Missing authentication token")


async def test_me_rejects_forged_token(test_client: AsyncClient, user: User):
    response = await test_client.get(
        "/api/v1/auth/me",
        headers={"Authorization": "Bearer not.a.real-token"},
    )

    assert_error(response, 401, "Invalid or expired token")


async def test_me_rejects_admin_token(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    response = await test_client.get("/api/v1/auth/me", headers=admin_headers)

    assert_error(response, 401)


async def test_me_rejects_token_for_deleted_user(test_client: AsyncClient):
    token = create_jwt_token({"uid": "gone01", "role": "user"})

    response = await test_client.get(
        "/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"}
    )

    assert_error(response, 401)


@pytest.fixture
def sent_resets(monkeypatch: pytest.MonkeyPatch) -> List[Dict[str, Any]]:
    outbox: List[Dict[str, Any]] = []

    def fake_send(**kwargs: Any) -> bool:
        outbox.append(kwargs)
        return True

    monkeypatch.setattr(password, "send_password_reset_email", fake_send)
    return outbox


async def test_forgot_password_answers_the_same_for_unknown_email(
    test_client: AsyncClient, user: User, sent_resets: List[Dict[str, Any]]
):
    known = await test_client.post(
        "/api/v1/auth/forgot-password", json={"email": user.email}
    )
    unknown = await test_client.post(
        "/api/v1/auth/forgot-password", json={"email": "nobody@example.com"}
    )

    assert_envelope(known, 200)
    assert_envelope(unknown, 200)
    assert known.json()["message"] == unknown.json()["message"]
    assert len(sent_resets) == 1


async def test_reset_password_flow(
    test_client: AsyncClient,
    test_db_session: AsyncSession,
    user: User,
    sent_resets: List[Dict[str, Any]],
):
    await test_client.post("/api/v1/auth/forgot-password", json={"email": user.email})
    token = sent_resets[0]["reset_token"]

    stored = (
        await test_db_session.execute(
            select(PasswordReset).where(PasswordReset.user_id == user.id)
        )
    ).scalar_one()
    assert stored.token_hash != token

    reset = {
        "email": user.email,
        "token": token,
        "password": "BrandNew123!",
        "confirm_password": "BrandNew123!",
    }
    response = await test_client.post("/api/v1/auth/reset-password", json=reset)
    assert_envelope(response, 200)

    reused = await test_client.post("/api/v1/auth/reset-password", json=reset)
    assert_error(reused, 400, "Invalid or expired reset token")

    old_login = await test_client.post(
        "/api/v1/auth/login", json={"email": user.email, "password": TEST_PASSWORD}
    )
    assert_error(old_login, 401)
    new_login = await test_client.post(
        "/api/v1/auth/login", json={"email": user.email, "password": "BrandNew123!"}
    )
    assert_envelope(new_login, 200)


async def test_reset_password_rejects_unknown_token(
    test_client: AsyncClient, user: User
):
    response = await test_client.post(
        "/api/v1/auth/reset-password",
        json={
            "email": user.email,
            "token": "made-up-token",
            "password": "BrandNew123!",
            "confirm_password": "BrandNew123!",
        },
    )

    assert_error(response, 400, "Invalid or expired reset token")


async def test_user_lookup_is_admin_only(
    test_client: AsyncClient,
    user: User,
    user_headers: Dict[str, str],
    admin_headers: Dict[str, str],
):
    denied = await test_client.get(
        f"/api/v1/users/email/{user.email}", headers=user_headers
    )
    assert_error(denied, 401)

    allowed = await test_client.get(
        f"/api/v1/users/email/{user.email}", headers=admin_headers
    )
    assert assert_envelope(allowed, 200)["id"] == user.id

    missing = await test_client.get(
        "/api/v1/users/email/nobody@example.com", headers=admin_headers
    )
    assert_error(missing, 404)


async def test_create_or_update_user_upserts_by_email(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    payload = {
        "email": "oauth.person@example.com",
        "name": "OAuth Person",
        "provider": "google",
        "avatar": "https://example.com/avatar.png",
    }

    created = await test_client.post(
        "/api/v1/users/create-or-update", json=payload, headers=admin_headers
    )
    first = assert_envelope(created, 201)
    assert first["provider"] == "google"

    updated = await test_client.post(
        "/api/v1/users/create-or-update",
        json={**payload, "name": "Renamed Person"},
        headers=admin_headers,
    )
    second = assert_envelope(updated, 200)
    assert second["id"] == first["id"]
    assert second["full_name"] == "Renamed Person"
