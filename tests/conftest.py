"""
Test configuration and fixtures for the FastAPI application.

This module provides:
- An in-memory SQLite database (aiosqlite) shared by the app and the test
- The FastAPI app wired to that database, and an httpx client for it
- Admin and user accounts with ready-made auth headers
"""

# Test settings must be applied before the application is imported
from tests.app_settings import AppTestSettings, get_test_settings  # isort: skip

from typing import AsyncGenerator, Dict

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from admin_service.services.auth import issue_admin_token
from main import create_app
from shared.db.models import Admin, PlatformBase, User, UserType
from shared.db.sessions.database import get_db
from shared.utils.auth import hash_password
from user_service.services.auth import issue_user_token

TEST_PASSWORD = "Password123!"


@pytest.fixture
def test_settings() -> AppTestSettings:
    """Provide test settings."""
    return get_test_settings()


@pytest_asyncio.fixture(scope="function")
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """One in-memory database per test; StaticPool keeps it on one connection."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(PlatformBase.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_session_factory(
    test_engine: AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture(scope="function")
async def test_db_session(
    test_session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Session for seeding and inspecting rows; commit what requests should see."""
    async with test_session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def test_app(
    test_session_factory: async_sessionmaker[AsyncSession],
    test_settings: AppTestSettings,
) -> AsyncGenerator[FastAPI, None]:
    app = create_app(test_settings)

    # Every request gets its own session on the shared test database
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    yield app

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def test_client(test_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=test_app)
    async with AsyncClient(
        transport=transport, base_url="http://testserver", timeout=30.0
    ) as client:
        yield client


# Accounts


@pytest_asyncio.fixture
async def admin(test_db_session: AsyncSession) -> Admin:
    account = Admin(
        email="root@example.com",
        name="Root Admin",
        password_hash=hash_password(TEST_PASSWORD),
    )
    test_db_session.add(account)
    await test_db_session.commit()
    return account


@pytest_asyncio.fixture
async def user(test_db_session: AsyncSession) -> User:
    account = User(
        email="photographer@example.com",
        username="photographer",
        full_name="Sita Photographer",
        address="Lakeside Road, Pokhara",
        password_hash=hash_password(TEST_PASSWORD),
        user_type=UserType.FREELANCER,
        is_verified=True,
    )
    test_db_session.add(account)
    await test_db_session.commit()
    return account


@pytest_asyncio.fixture
async def other_user(test_db_session: AsyncSession) -> User:
    account = User(
        email="buyer@example.com",
        username="buyer",
        full_name="Hari Buyer",
        password_hash=hash_password(TEST_PASSWORD),
        is_verified=True,
    )
    test_db_session.add(account)
    await test_db_session.commit()
    return account


@pytest.fixture
def admin_headers(admin: Admin) -> Dict[str, str]:
    return {"Authorization": f"Bearer {issue_admin_token(admin)}"}


@pytest.fixture
def user_headers(user: User) -> Dict[str, str]:
    return {"Authorization": f"Bearer {issue_user_token(user)}"}


@pytest.fixture
def other_user_headers(other_user: User) -> Dict[str, str]:
    return {"Authorization": f"Bearer {issue_user_token(other_user)}"}


@pytest.fixture
def png_bytes() -> bytes:
    """A small valid PNG produced with Pillow."""
    import io

    from PIL import Image

    buffer = io.BytesIO()
    Image.new("RGB", (64, 48), color=(200, 120, 40)).save(buffer, format="PNG")
    return buffer.getvalue()
