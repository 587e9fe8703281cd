from typing import Dict

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from admin_service.services import admin_accounts
from admin_service.services.admin_accounts import seed_default_admin
from shared.db.models import Admin
from tests.conftest import TEST_PASSWORD
from tests.app_settings import AppTestSettings
from tests.utils.assertions import assert_envelope, assert_error


async def test_admin_login_returns_admin_token(test_client: AsyncClient, admin: Admin):
    response = await test_client.post(
        "/api/v1/admin/login",
        json={"email": admin.email, "password": TEST_PASSWORD},
    )

    data = assert_envelope(response, 200)
    assert response.json()["message"] == "Login successful"
    assert data["admin"]["email"] == admin.email
    assert data["admin"]["last_login"] is not None
    assert "password_hash" not in data["admin"]

    me = await test_client.get(
        "/api/v1/admin/me", headers={"Authorization": f"Bearer {data['token']}"}
    )
    assert assert_envelope(me, 200)["id"] == admin.id


async def test_admin_login_rejects_wrong_password(
    test_client: AsyncClient, admin: Admin
):
    response = await test_client.post(
        "/api/v1/admin/login",
        json={"email": admin.email, "password": "NotThePassword1!"},
    )

    assert_error(response, 401, "Invalid email or password")


async def test_inactive_admin_cannot_log_in(
    test_client: AsyncClient, test_db_session: AsyncSession, admin: Admin
):
    admin.is_active = False
    await test_db_session.commit()

    response = await test_client.post(
        "/api/v1/admin/login",
        json={"email": admin.email, "password": TEST_PASSWORD},
    )

    assert_error(response, 403, "inactive")


async def test_admin_crud(test_client: AsyncClient, admin_headers: Dict[str, str]):
    created = await test_client.post(
        "/api/v1/admin",
        json={
            "email": "Editor@Example.com",
            "name": "Gita Editor",
            "password": "EditorPass123!",
        },
        headers=admin_headers,
    )
    new_admin = assert_envelope(created, 201)
    assert new_admin["email"] == "editor@example.com"

    listed = await test_client.get("/api/v1/admin", headers=admin_headers)
    emails = [item["email"] for item in assert_envelope(listed, 200)]
    assert "editor@example.com" in emails

    updated = await test_client.put(
        f"/api/v1/admin/{new_admin['id']}",
        json={"name": "Gita Chief Editor"},
        headers=admin_headers,
    )
    changed = assert_envelope(updated, 200)
    assert changed["name"] == "Gita Chief Editor"
    assert changed["email"] == "editor@example.com"

    deleted = await test_client.delete(
        f"/api/v1/admin/{new_admin['id']}", headers=admin_headers
    )
    assert_envelope(deleted, 200)

    again = await test_client.delete(
        f"/api/v1/admin/{new_admin['id']}", headers=admin_headers
    )
    assert_error(again, 404, "Admin not found")


async def test_create_admin_with_taken_email_conflicts(
    test_client: AsyncClient, admin: Admin, admin_headers: Dict[str, str]
):
    response = await test_client.post(
        "/api/v1/admin",
        json={"email": admin.email, "name": "Someone Else", "password": "Another123!"},
        headers=admin_headers,
    )

    assert_error(response, 409, "already exists")


async def test_create_admin_losing_an_email_race_conflicts(
    test_client: AsyncClient,
    admin: Admin,
    admin_headers: Dict[str, str],
    monkeypatch: pytest.MonkeyPatch,
):
    # The lookup ran before the other admin was committed
    async def not_found(db, email):
        return None

    monkeypatch.setattr(admin_accounts, "get_admin_by_email", not_found)
    response = await test_client.post(
        "/api/v1/admin",
        json={"email": admin.email, "name": "Someone Else", "password": "Another123!"},
        headers=admin_headers,
    )

    assert_error(response, 409, "already exists")


async def test_update_missing_admin_returns_404(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    response = await test_client.put(
        "/api/v1/admin/nope00", json={"name": "Nobody Here"}, headers=admin_headers
    )

    assert_error(response, 404, "Admin not found")


async def test_admin_routes_reject_user_tokens(
    test_client: AsyncClient, user_headers: Dict[str, str]
):
    response = await test_client.get("/api/v1/admin", headers=user_headers)

    assert_error(response, 401, "Admin token required")


async def test_admin_routes_reject_deactivated_admin(
    test_client: AsyncClient,
    test_db_session: AsyncSession,
    admin: Admin,
    admin_headers: Dict[str, str],
):
    admin.is_active = False
    await test_db_session.commit()

    response = await test_client.get("/api/v1/admin/me", headers=admin_headers)

    assert_error(response, 401)


async def test_seed_default_admin_is_idempotent(
    test_db_session: AsyncSession, test_settings: AppTestSettings
):
    first = await seed_default_admin(test_db_session, test_settings)
    second = await seed_default_admin(test_db_session, test_settings)

    assert first is not None
    assert first.email == test_settings.DEFAULT_ADMIN_EMAIL.lower()
    assert second is None
    count = await test_db_session.scalar(select(func.count()).select_from(Admin))
    assert count == 1
