from typing import Dict

from httpx import AsyncClient

from tests.utils.assertions import assert_envelope, assert_error
from tests.utils.factories import AsyncTestDataFactory

WINDOW = {
    "rental_start_date": "2026-11-01T09:00:00Z",
    "rental_end_date": "2026-11-03T09:00:00Z",
}


async def _post(client: AsyncClient, url: str, payload: Dict, headers: Dict) -> Dict:
    return assert_envelope(await client.post(url, json=payload, headers=headers), 201)


async def make_event(client: AsyncClient, headers: Dict[str, str]) -> Dict:
    return await _post(
        client, "/api/v1/events", AsyncTestDataFactory.create_event_data(), headers
    )


async def test_attach_catering_uses_per_person_price(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    event = await make_event(test_client, admin_headers)
    service = await _post(
        test_client,
        "/api/v1/catering-services",
        AsyncTestDataFactory.create_catering_data(),
        admin_headers,
    )

    row = await _post(
        test_client,
        f"/api/v1/events/{event['id']}/catering-services",
        {"catering_service_id": service["id"], "quantity": 40},
        admin_headers,
    )

    assert row["unit_price"] == 25.0
    assert row["total_price"] == 1000.0
    assert row["is_confirmed"] is False


async def test_catering_without_per_person_price_uses_base_price(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    event = await make_event(test_client, admin_headers)
    service = await _post(
        test_client,
        "/api/v1/catering-services",
        AsyncTestDataFactory.create_catering_data(price_per_person=None),
        admin_headers,
    )

    row = await _post(
        test_client,
        f"/api/v1/events/{event['id']}/catering-services",
        {"catering_service_id": service["id"], "quantity": 2},
        admin_headers,
    )

    assert row["unit_price"] == 500.0
    assert row["total_price"] == 1000.0


async def test_update_catering_quantity_reprices(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    event = await make_event(test_client, admin_headers)
    service = await _post(
        test_client,
        "/api/v1/catering-services",
        AsyncTestDataFactory.create_catering_data(),
        admin_headers,
    )
    row = await _post(
        test_client,
        f"/api/v1/events/{event['id']}/catering-services",
        {"catering_service_id": service["id"], "quantity": 10},
        admin_headers,
    )

    response = await test_client.put(
        f"/api/v1/event-catering-services/{row['id']}",
        json={"quantity": 12, "is_confirmed": True},
        headers=admin_headers,
    )

    updated = assert_envelope(response, 200)
    assert updated["quantity"] == 12
    assert updated["total_price"] == 300.0
    assert updated["is_confirmed"] is True


async def test_attach_rental_computes_days_and_total(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    event = await make_event(test_client, admin_headers)
    equipment = await _post(
        test_client,
        "/api/v1/equipment",
        AsyncTestDataFactory.create_equipment_data(),
        admin_headers,
    )

    row = await _post(
        test_client,
        f"/api/v1/events/{event['id']}/equipment-rentals",
        {"equipment_id": equipment["id"], **WINDOW},
        admin_headers,
    )

    assert row["rental_days"] == 2
    assert row["daily_rate"] == 150.0
    assert row["total_price"] == 300.0
    assert row["security_deposit"] == 1000.0


async def test_unavailable_equipment_cannot_be_rented(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    event = await make_event(test_client, admin_headers)
    equipment = await _post(
        test_client,
        "/api/v1/equipment",
        AsyncTestDataFactory.create_equipment_data(status="MAINTENANCE"),
        admin_headers,
    )

    response = await test_client.post(
        f"/api/v1/events/{event['id']}/equipment-rentals",
        json={"equipment_id": equipment["id"], **WINDOW},
        headers=admin_headers,
    )

    assert_error(response, 400, "not available")


async def test_rental_end_must_follow_start(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    event = await make_event(test_client, admin_headers)

    response = await test_client.post(
        f"/api/v1/events/{event['id']}/equipment-rentals",
        json={
            "equipment_id": "any001",
            "rental_start_date": "2026-11-03T09:00:00Z",
            "rental_end_date": "2026-11-03T09:00:00Z",
        },
        headers=admin_headers,
    )

    assert response.status_code == 422


async def test_update_rental_window_recomputes_total(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    event = await make_event(test_client, admin_headers)
    equipment = await _post(
        test_client,
        "/api/v1/equipment",
        AsyncTestDataFactory.create_equipment_data(),
        admin_headers,
    )
    row = await _post(
        test_client,
        f"/api/v1/events/{event['id']}/equipment-rentals",
        {"equipment_id": equipment["id"], **WINDOW},
        admin_headers,
    )

    extended = await test_client.put(
        f"/api/v1/event-equipment-rentals/{row['id']}",
        json={"rental_end_date": "2026-11-06T09:00:00Z", "status": "CONFIRMED"},
        headers=admin_headers,
    )
    updated = assert_envelope(extended, 200)
    assert updated["rental_days"] == 5
    assert updated["total_price"] == 750.0
    assert updated["status"] == "CONFIRMED"

    inverted = await test_client.put(
        f"/api/v1/event-equipment-rentals/{row['id']}",
        json={"rental_end_date": "2026-10-30T09:00:00Z"},
        headers=admin_headers,
    )
    assert_error(inverted, 422, "after the start date")


async def test_attach_to_missing_event_returns_404(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    response = await test_client.post(
        "/api/v1/events/nope00/catering-services",
        json={"catering_service_id": "nope00", "quantity": 1},
        headers=admin_headers,
    )

    assert_error(response, 404, "Event not found")


async def test_remove_event_items(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    event = await make_event(test_client, admin_headers)
    service = await _post(
        test_client,
        "/api/v1/catering-services",
        AsyncTestDataFactory.create_catering_data(),
        admin_headers,
    )
    row = await _post(
        test_client,
        f"/api/v1/events/{event['id']}/catering-services",
        {"catering_service_id": service["id"], "quantity": 1},
        admin_headers,
    )

    removed = await test_client.delete(
        f"/api/v1/event-catering-services/{row['id']}", headers=admin_headers
    )
    assert_envelope(removed, 200)

    detail = await test_client.get(f"/api/v1/events/{event['id']}")
    assert assert_envelope(detail, 200)["catering_services"] == []

    again = await test_client.delete(
        f"/api/v1/event-catering-services/{row['id']}", headers=admin_headers
    )
    assert_error(again, 404)


async def test_catering_catalog_filters(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    await _post(
        test_client,
        "/api/v1/catering-services",
        AsyncTestDataFactory.create_catering_data(name="Momo Platter"),
        admin_headers,
    )
    await _post(
        test_client,
        "/api/v1/catering-services",
        AsyncTestDataFactory.create_catering_data(
            name="Lassi", category="BEVERAGES"
        ),
        admin_headers,
    )

    response = await test_client.get(
        "/api/v1/catering-services", params={"category": "BEVERAGES"}
    )

    names = [s["name"] for s in assert_envelope(response, 200)["services"]]
    assert names == ["Lassi"]


async def test_rental_window_mixing_naive_and_aware_dates(
    test_client: AsyncClient, admin_headers: Dict[str, str]
):
    event = await make_event(test_client, admin_headers)
    equipment = await _post(
        test_client,
        "/api/v1/equipment",
        AsyncTestDataFactory.create_equipment_data(),
        admin_headers,
    )
    url = f"/api/v1/events/{event['id']}/equipment-rentals"

    row = await _post(
        test_client,
        url,
        {
            "equipment_id": equipment["id"],
            "rental_start_date": "2026-11-01T09:00:00Z",
            "rental_end_date": "2026-11-03T09:00:00",
        },
        admin_headers,
    )
    assert row["rental_days"] == 2

    inverted = await test_client.post(
        url,
        json={
            "equipment_id": equipment["id"],
            "rental_start_date": "2026-11-03T09:00:00",
            "rental_end_date": "2026-11-01T09:00:00+00:00",
        },
        headers=admin_headers,
    )
    assert_error(inverted, 422)

    extended = await test_client.put(
        f"/api/v1/event-equipment-rentals/{row['id']}",
        json={
            "rental_start_date": "2026-11-01T09:00:00",
            "rental_end_date": "2026-11-04T09:00:00Z",
        },
        headers=admin_headers,
    )
    assert assert_envelope(extended, 200)["rental_days"] == 3

    mixed_inverted = await test_client.put(
        f"/api/v1/event-equipment-rentals/{row['id']}",
        json={
            "rental_start_date": "2026-11-05T09:00:00Z",
            "rental_end_date": "2026-11-02T09:00:00",
        },
        headers=admin_headers,
    )
    assert_error(mixed_inverted, 422)
