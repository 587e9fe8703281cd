from pathlib import Path
from typing import Dict

from fastapi import FastAPI
from httpx import AsyncClient

from shared.utils.file_uploads import upload_root
from tests.app_settings import AppTestSettings
from tests.utils.assertions import assert_envelope, assert_error


async def test_root_and_health(test_client: AsyncClient):
    root = await test_client.get("/")
    assert root.status_code == 200
    assert root.json()["docs_url"] == "/docs"

    health = await test_client.get("/health")
    assert health.json() == {"status": "healthy", "message": "API is running fine!"}


async def test_request_metadata_headers(test_client: AsyncClient):
    response = await test_client.get("/health")

    assert response.headers["X-Method"] == "GET"
    assert response.headers["X-Path"] == "/health"
    assert response.headers["X-API-Execution-Time"].endswith("seconds")


async def test_unknown_route_uses_error_envelope(test_client: AsyncClient):
    response = await test_client.get("/api/v1/does-not-exist")

    assert_error(response, 404, "Not Found")
    body = response.json()
    assert body["path"] == "/api/v1/does-not-exist"
    assert body["method"] == "GET"


async def test_validation_errors_use_error_envelope(test_client: AsyncClient):
    response = await test_client.post("/api/v1/auth/login", json={})

    assert_error(response, 422, "Validation error")


async def test_uploaded_files_are_served(
    test_client: AsyncClient, user_headers: Dict[str, str], png_bytes: bytes
):
    uploaded = await test_client.post(
        "/api/v1/uploads/profile",
        files={"file": ("avatar.png", png_bytes, "image/png")},
        headers=user_headers,
    )
    url = assert_envelope(uploaded, 201)["url"]

    served = await test_client.get(url)

    assert served.status_code == 200
    assert served.content == png_bytes


def test_upload_mount_serves_the_directory_uploads_are_written_to(
    test_app: FastAPI, test_settings: AppTestSettings
):
    mount = next(route for route in test_app.routes if route.name == "uploads")

    assert Path(mount.app.directory) == upload_root()
    assert upload_root() == Path(test_settings.UPLOAD_ROOT).resolve()
