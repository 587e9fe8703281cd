from typing import Dict

from httpx import AsyncClient

from tests.utils.assertions import assert_envelope, assert_error
from tests.utils.factories import AsyncTestDataFactory


async def create_event(client: AsyncClient, headers: Dict[str, str], **overrides):
    response = await client.post(
        "/api/v1/events",
        json=AsyncTestDataFactory.create_event_data(**overrides),
        headers=headers,
    )
    return assert_envelope(response, 201)


async def create_catering(client: AsyncClient, headers: Dict[str, str], **overrides):
    response = await client.post(
        "/api/v1/catering-services",
        json=AsyncTestDataFactory.create_catering_data(**overrides),
        headers=headers,
    )
    return assert_envelope(response, 201)


async def create_equipment(client: AsyncClient, headers: Dict[str, str], **overrides):
    response = await client.post(
        "/api/v1/equipment",
        json=AsyncTestDataFactory.create_equipment_data(**overrides),
        headers=headers,
    )
    return assert_envelope(response, 201)


async def test_create_event_computes_prices(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    event = await create_event(test_client, admin_headers, discount_amount="200.00")

    assert event["status"] == "DRAFT"
    assert event["total_price"] == 1000.0
    assert event["final_price"] == 800.0
    assert event["catering_services"] == []
    assert event["equipment_rentals"] == []


async def test_discount_larger_than_price_gives_zero(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    event = await create_event(test_client, admin_headers, discount_amount="1500.00")

    assert event["final_price"] == 0.0


async def test_create_event_with_embedded_items(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    catering = await create_catering(test_client, admin_headers)
    equipment = await create_equipment(test_client, admin_headers)

    event = await create_event(
        test_client,
        admin_headers,
        catering_services=[{"catering_service_id": catering["id"], "quantity": 100}],
        equipment_rentals=[
            {
                "equipment_id": equipment["id"],
                "rental_start_date": "2026-11-01T09:00:00Z",
                "rental_end_date": "2026-11-04T09:00:00Z",
            }
        ],
    )

    booking = event["catering_services"][0]
    assert booking["unit_price"] == 25.0
    assert booking["total_price"] == 2500.0
    assert booking["catering_service"]["name"] == catering["name"]

    rental = event["equipment_rentals"][0]
    assert rental["rental_days"] == 3
    assert rental["total_price"] == 450.0
    assert rental["security_deposit"] == 1000.0
    assert rental["status"] == "PENDING"


async def test_create_event_is_all_or_nothing(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    catering = await create_catering(test_client, admin_headers)

    response = await test_client.post(
        "/api/v1/events",
        json=AsyncTestDataFactory.create_event_data(
            catering_services=[
                {"catering_service_id": catering["id"], "quantity": 10},
                {"catering_service_id": "nope00", "quantity": 10},
            ]
        ),
        headers=admin_headers,
    )
    assert_error(response, 404, "Catering service not found")

    listed = await test_client.get("/api/v1/events")
    assert assert_envelope(listed, 200)["pagination"]["total"] == 0


async def test_create_event_requires_admin(
    test_client: AsyncClient, user_headers: Dict[str, str]
):
    response = await test_client.post(
        "/api/v1/events",
        json=AsyncTestDataFactory.create_event_data(),
        headers=user_headers,
    )

    assert_error(response, 401)


async def test_update_event_recomputes_final_price(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    event = await create_event(test_client, admin_headers)

    response = await test_client.put(
        f"/api/v1/events/{event['id']}",
        json={"base_price": "2000.00", "discount_amount": "500.00"},
        headers=admin_headers,
    )

    updated = assert_envelope(response, 200)
    assert updated["total_price"] == 2000.0
    assert updated["final_price"] == 1500.0
    assert updated["title"] == event["title"]


async def test_list_events_filters_and_searches(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    await create_event(test_client, admin_headers, title="Sharma Wedding")
    await create_event(
        test_client, admin_headers, title="Annual Summit", event_type="CONFERENCE"
    )

    by_type = await test_client.get(
        "/api/v1/events", params={"event_type": "CONFERENCE"}
    )
    titles = [e["title"] for e in assert_envelope(by_type, 200)["events"]]
    assert titles == ["Annual Summit"]

    by_search = await test_client.get("/api/v1/events", params={"search": "sharma"})
    titles = [e["title"] for e in assert_envelope(by_search, 200)["events"]]
    assert titles == ["Sharma Wedding"]


async def test_event_stats(test_client: AsyncClient, admin_headers: Dict[str, str]):
    catering = await create_catering(test_client, admin_headers)
    await create_event(
        test_client,
        admin_headers,
        base_price="1000.00",
        catering_services=[{"catering_service_id": catering["id"], "quantity": 2}],
    )
    await create_event(
        test_client,
        admin_headers,
        base_price="3000.00",
        discount_amount="1000.00",
        event_type="BIRTHDAY",
    )

    response = await test_client.get("/api/v1/events/stats")

    stats = assert_envelope(response, 200)
    assert stats["total_events"] == 2
    assert stats["total_revenue"] == 3000.0
    assert stats["average_event_value"] == 1500.0
    assert len(stats["monthly_revenue"]) == 12
    assert sum(bucket["revenue"] for bucket in stats["monthly_revenue"]) == 3000.0
    types = {row["event_type"]: row["count"] for row in stats["events_by_type"]}
    assert types == {"WEDDING": 1, "BIRTHDAY": 1}
    assert stats["popular_catering_services"][0]["service_id"] == catering["id"]
    assert stats["popular_catering_services"][0]["booking_count"] == 1


async def test_delete_event_then_404(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    event = await create_event(test_client, admin_headers)

    deleted = await test_client.delete(
        f"/api/v1/events/{event['id']}", headers=admin_headers
    )
    assert_envelope(deleted, 200)

    missing = await test_client.get(f"/api/v1/events/{event['id']}")
    assert_error(missing, 404, "Event not found")
