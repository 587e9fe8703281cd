from typing import Dict

from httpx import AsyncClient

from tests.utils.assertions import assert_envelope, assert_error
from tests.utils.factories import AsyncTestDataFactory


async def create_course(
    client: AsyncClient, headers: Dict[str, str], **overrides
) -> Dict:
    response = await client.post(
        "/api/v1/courses",
        json=AsyncTestDataFactory.create_course_data(**overrides),
        headers=headers,
    )
    return assert_envelope(response, 201)


async def test_create_and_fetch_course(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    course = await create_course(
        test_client, admin_headers, title="Wedding Photography Essentials"
    )

    assert course["price"] == 4999.0
    assert course["is_active"] is True
    assert course["curriculum"][0]["lessons"][0]["title"] == "Aperture"

    response = await test_client.get(f"/api/v1/courses/{course['id']}")
    fetched = assert_envelope(response, 200)
    assert fetched["title"] == "Wedding Photography Essentials"


async def test_create_course_requires_admin(
    test_client: AsyncClient, user_headers: Dict[str, str]
):
    response = await test_client.post(
        "/api/v1/courses",
        json=AsyncTestDataFactory.create_course_data(),
        headers=user_headers,
    )

    assert_error(response, 401)


async def test_create_course_rejects_empty_tags(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    response = await test_client.post(
        "/api/v1/courses",
        json=AsyncTestDataFactory.create_course_data(tags=[]),
        headers=admin_headers,
    )

    assert response.status_code == 422


async def test_list_courses_paginates(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    for _ in range(3):
        await create_course(test_client, admin_headers)

    response = await test_client.get("/api/v1/courses", params={"page": 1, "limit": 2})

    data = assert_envelope(response, 200)
    assert len(data["courses"]) == 2
    assert data["pagination"]["total"] == 3
    assert data["pagination"]["page"] == 1


async def test_search_matches_instructor_and_ignores_inactive(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    active = await create_course(test_client, admin_headers, instructor="Ansel Adams")
    hidden = await create_course(test_client, admin_headers, instructor="Ansel Hidden")
    await test_client.patch(
        f"/api/v1/courses/{hidden['id']}/toggle-status", headers=admin_headers
    )

    response = await test_client.get("/api/v1/courses/search", params={"q": "ansel"})

    ids = [course["id"] for course in assert_envelope(response, 200)]
    assert ids == [active["id"]]


async def test_search_treats_wildcards_literally(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    await create_course(test_client, admin_headers)

    response = await test_client.get("/api/v1/courses/search", params={"q": "%"})

    assert assert_envelope(response, 200) == []


async def test_filter_by_level(test_client: AsyncClient, admin_headers: Dict[str, str]):
    await create_course(test_client, admin_headers, level="Advanced")
    await create_course(test_client, admin_headers, level="Beginner")

    response = await test_client.get("/api/v1/courses/level/advanced")

    levels = [course["level"] for course in assert_envelope(response, 200)]
    assert levels == ["Advanced"]


async def test_update_course_keeps_unspecified_fields(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    course = await create_course(test_client, admin_headers)

    response = await test_client.put(
        f"/api/v1/courses/{course['id']}",
        json={"price": "3999.50"},
        headers=admin_headers,
    )

    updated = assert_envelope(response, 200)
    assert updated["price"] == 3999.5
    assert updated["title"] == course["title"]


async def test_toggle_status_twice_restores_state(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    course = await create_course(test_client, admin_headers)
    url = f"/api/v1/courses/{course['id']}/toggle-status"

    first = await test_client.patch(url, headers=admin_headers)
    assert assert_envelope(first, 200)["is_active"] is False
    assert first.json()["message"] == "Course deactivated successfully"

    second = await test_client.patch(url, headers=admin_headers)
    assert assert_envelope(second, 200)["is_active"] is True


async def test_delete_course_then_404(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    course = await create_course(test_client, admin_headers)

    deleted = await test_client.delete(
        f"/api/v1/courses/{course['id']}", headers=admin_headers
    )
    assert assert_envelope(deleted, 200) == {"id": course["id"]}

    missing = await test_client.delete(
        f"/api/v1/courses/{course['id']}", headers=admin_headers
    )
    assert_error(missing, 404, "Course not found")

    fetched = await test_client.get(f"/api/v1/courses/{course['id']}")
    assert_error(fetched, 404)
