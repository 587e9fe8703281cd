from pathlib import Path
from typing import Dict

import pytest
from httpx import AsyncClient

from shared.core.config import settings
from shared.core.exceptions import ValidationError
from tests.utils.assertions import assert_envelope, assert_error
from upload_service.services.uploads import delete_stored_file


async def test_single_upload_goes_to_category_directory(
    test_client: AsyncClient, user_headers: Dict[str, str], png_bytes: bytes
):
    response = await test_client.post(
        "/api/v1/uploads/single",
        params={"category": "course"},
        files={"file": ("Cover Image.png", png_bytes, "image/png")},
        headers=user_headers,
    )

    data = assert_envelope(response, 201)
    assert data["path"].startswith("courses/")
    assert data["url"] == f"{settings.UPLOAD_URL_PREFIX}/{data['path']}"
    assert data["original_name"] == "Cover Image.png"
    assert data["mime_type"] == "image/png"
    assert data["size"] == len(png_bytes)
    assert data["thumbnail_url"] is not None
    assert (Path(settings.UPLOAD_ROOT) / data["path"]).is_file()


async def test_unknown_category_falls_back_to_general(
    test_client: AsyncClient, admin_headers: Dict[str, str], png_bytes: bytes
):
    response = await test_client.post(
        "/api/v1/uploads/single",
        params={"category": "whatever"},
        files={"file": ("a.png", png_bytes, "image/png")},
        headers=admin_headers,
    )

    assert assert_envelope(response, 201)["path"].startswith("general/")


@pytest.mark.parametrize(
    "endpoint, directory", [("profile", "profiles"), ("hero", "hero")]
)
async def test_single_image_endpoints(
    test_client: AsyncClient,
    user_headers: Dict[str, str],
    png_bytes: bytes,
    endpoint: str,
    directory: str,
):
    response = await test_client.post(
        f"/api/v1/uploads/{endpoint}",
        files={"file": ("a.png", png_bytes, "image/png")},
        headers=user_headers,
    )

    assert assert_envelope(response, 201)["path"].startswith(f"{directory}/")


@pytest.mark.parametrize(
    "endpoint, directory, limit",
    [
        ("course", "courses", 5),
        ("marketplace", "marketplace", 10),
        ("event", "events", 10),
    ],
)
async def test_category_endpoints_accept_several_images(
    test_client: AsyncClient,
    user_headers: Dict[str, str],
    png_bytes: bytes,
    endpoint: str,
    directory: str,
    limit: int,
):
    def images(count: int):
        return [("files", (f"{i}.png", png_bytes, "image/png")) for i in range(count)]

    response = await test_client.post(
        f"/api/v1/uploads/{endpoint}", files=images(limit), headers=user_headers
    )
    data = assert_envelope(response, 201)
    assert len(data) == limit
    assert all(item["path"].startswith(f"{directory}/") for item in data)
    assert response.json()["message"] == (
        f"{limit} {endpoint} images uploaded successfully"
    )

    too_many = await test_client.post(
        f"/api/v1/uploads/{endpoint}", files=images(limit + 1), headers=user_headers
    )
    assert_error(too_many, 400, f"Maximum {limit} files")


async def test_mixed_upload_sorts_fields_into_directories(
    test_client: AsyncClient, user_headers: Dict[str, str], png_bytes: bytes
):
    image = ("a.png", png_bytes, "image/png")

    response = await test_client.post(
        "/api/v1/uploads/mixed",
        files=[
            ("profileImage", image),
            ("courseImages", image),
            ("courseImages", image),
            ("heroImage", image),
        ],
        headers=user_headers,
    )

    data = assert_envelope(response, 201)
    assert set(data) == {"profileImage", "courseImages", "heroImage"}
    assert data["profileImage"][0]["path"].startswith("profiles/")
    assert [item["path"].split("/")[0] for item in data["courseImages"]] == [
        "courses",
        "courses",
    ]
    assert data["heroImage"][0]["path"].startswith("hero/")
    for items in data.values():
        for item in items:
            assert (Path(settings.UPLOAD_ROOT) / item["path"]).is_file()


async def test_mixed_upload_enforces_per_field_limits(
    test_client: AsyncClient, user_headers: Dict[str, str], png_bytes: bytes
):
    image = ("a.png", png_bytes, "image/png")
    profiles_before = len(list((Path(settings.UPLOAD_ROOT) / "profiles").glob("*")))

    response = await test_client.post(
        "/api/v1/uploads/mixed",
        files=[("profileImage", image), ("heroImage", image), ("heroImage", image)],
        headers=user_headers,
    )

    assert_error(response, 400, "allowed for heroImage")
    assert response.json()["details"]["field"] == "heroImage"
    profiles_after = len(list((Path(settings.UPLOAD_ROOT) / "profiles").glob("*")))
    assert profiles_after == profiles_before


async def test_mixed_upload_requires_a_file(
    test_client: AsyncClient, user_headers: Dict[str, str]
):
    response = await test_client.post(
        "/api/v1/uploads/mixed", data={"note": "nothing"}, headers=user_headers
    )

    assert_error(response, 400, "No files uploaded")


async def test_course_image_upload_is_admin_only(
    test_client: AsyncClient,
    admin_headers: Dict[str, str],
    user_headers: Dict[str, str],
    png_bytes: bytes,
):
    files = [("files", (f"{i}.png", png_bytes, "image/png")) for i in range(2)]

    response = await test_client.post(
        "/api/v1/courses/upload-images", files=files, headers=admin_headers
    )
    data = assert_envelope(response, 201)
    assert response.json()["message"] == "Images uploaded successfully"
    assert len(data) == 2
    assert all(item["url"].startswith("/uploads/courses/") for item in data)

    forbidden = await test_client.post(
        "/api/v1/courses/upload-images", files=files, headers=user_headers
    )
    assert_error(forbidden, 401, "Admin token required")

    six = [("files", (f"{i}.png", png_bytes, "image/png")) for i in range(6)]
    too_many = await test_client.post(
        "/api/v1/courses/upload-images", files=six, headers=admin_headers
    )
    assert_error(too_many, 400, "Maximum 5 files")


async def test_upload_rejects_disallowed_type(
    test_client: AsyncClient, user_headers: Dict[str, str]
):
    response = await test_client.post(
        "/api/v1/uploads/single",
        files={"file": ("script.sh", b"#!/bin/sh\necho hi\n", "image/png")},
        headers=user_headers,
    )

    assert_error(response, 400, "Unsupported file type")


async def test_upload_rejects_empty_file(
    test_client: AsyncClient, user_headers: Dict[str, str]
):
    response = await test_client.post(
        "/api/v1/uploads/single",
        files={"file": ("empty.png", b"", "image/png")},
        headers=user_headers,
    )

    assert_error(response, 400, "empty")


async def test_multiple_upload(
    test_client: AsyncClient, user_headers: Dict[str, str], png_bytes: bytes
):
    response = await test_client.post(
        "/api/v1/uploads/multiple",
        params={"category": "marketplace"},
        files=[
            ("files", ("one.png", png_bytes, "image/png")),
            ("files", ("two.png", png_bytes, "image/png")),
        ],
        headers=user_headers,
    )

    data = assert_envelope(response, 201)
    assert response.json()["message"] == "2 files uploaded successfully"
    assert [item["original_name"] for item in data] == ["one.png", "two.png"]


async def test_multiple_upload_is_all_or_nothing(
    test_client: AsyncClient, user_headers: Dict[str, str], png_bytes: bytes
):
    before = {p.name for p in (Path(settings.UPLOAD_ROOT) / "hero").glob("*")}

    response = await test_client.post(
        "/api/v1/uploads/multiple",
        params={"category": "hero"},
        files=[
            ("files", ("good.png", png_bytes, "image/png")),
            ("files", ("bad.txt", b"plain text", "text/plain")),
        ],
        headers=user_headers,
    )

    assert_error(response, 400)
    after = {p.name for p in (Path(settings.UPLOAD_ROOT) / "hero").glob("*")}
    assert after == before


async def test_delete_uploaded_file(
    test_client: AsyncClient, user_headers: Dict[str, str], png_bytes: bytes
):
    uploaded = await test_client.post(
        "/api/v1/uploads/hero",
        files={"file": ("a.png", png_bytes, "image/png")},
        headers=user_headers,
    )
    data = assert_envelope(uploaded, 201)
    stored = Path(settings.UPLOAD_ROOT) / data["path"]

    deleted = await test_client.delete(
        f"/api/v1/uploads/{data['path']}", headers=user_headers
    )
    assert assert_envelope(deleted, 200) == {"path": data["path"]}
    assert not stored.exists()

    again = await test_client.delete(
        f"/api/v1/uploads/{data['path']}", headers=user_headers
    )
    assert_error(again, 404, "File not found")


async def test_delete_refuses_paths_outside_upload_root():
    with pytest.raises(ValidationError):
        await delete_stored_file("..", "passwd")


async def test_upload_stats(
    test_client: AsyncClient, user_headers: Dict[str, str], png_bytes: bytes
):
    await test_client.post(
        "/api/v1/uploads/single",
        params={"category": "course"},
        files={"file": ("a.png", png_bytes, "image/png")},
        headers=user_headers,
    )

    response = await test_client.get("/api/v1/uploads/stats", headers=user_headers)

    stats = assert_envelope(response, 200)
    assert stats["directories"]["courses"]["files"] >= 1
    assert stats["total_files"] >= 1
    assert stats["total_size"] > 0


async def test_uploads_require_authentication(
    test_client: AsyncClient, png_bytes: bytes
):
    response = await test_client.post(
        "/api/v1/uploads/single",
        files={"file": ("a.png", png_bytes, "image/png")},
    )

    assert_error(response, 401, "Missing authentication token")
