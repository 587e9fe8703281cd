"""
Catering bookings and equipment rentals attached to events.

Prices are copied onto the join rows when they are created. Changing a
row's quantity or rental window reprices it from the current catering
service or equipment price; other edits leave the stored prices alone.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from event_service.schemas.event_items import (
    EventCateringCreateRequest,
    EventCateringUpdateRequest,
    EventRentalCreateRequest,
    EventRentalUpdateRequest,
)
from event_service.services.pricing import (
    catering_unit_price,
    rental_days_between,
)
from event_service.services.response_builder import (
    catering_service_not_found_response,
    equipment_not_found_response,
    equipment_unavailable_response,
    event_catering_not_found_response,
    event_not_found_response,
    event_rental_not_found_response,
    invalid_rental_window_response,
)
from shared.core.logging_config import get_logger
from shared.db.models import (
    CateringService,
    Equipment,
    EquipmentStatus,
    Event,
    EventCateringService,
    EventEquipmentRental,
)
from shared.utils.data_utils import to_money
from shared.utils.timezone_utils import ensure_utc

logger = get_logger(__name__)


async def _get_event(db: AsyncSession, event_id: str) -> Event:
    event = await db.get(Event, event_id)
    if event is None:
        event_not_found_response()
    return event


async def build_catering_row(
    db: AsyncSession, payload: EventCateringCreateRequest
) -> EventCateringService:
    """Price a catering booking; the caller adds it to an event."""
    service = await db.get(CateringService, payload.catering_service_id)
    if service is None:
        catering_service_not_found_response()

    unit_price = catering_unit_price(service)
    return EventCateringService(
        catering_service_id=service.id,
        quantity=payload.quantity,
        unit_price=unit_price,
        total_price=to_money(unit_price * payload.quantity),
        custom_instructions=payload.custom_instructions,
        special_dietary_requirements=payload.special_dietary_requirements,
    )


async def build_rental_row(
    db: AsyncSession, payload: EventRentalCreateRequest
) -> EventEquipmentRental:
    """Price an equipment rental; the caller adds it to an event."""
    equipment = await db.get(Equipment, payload.equipment_id)
    if equipment is None:
        equipment_not_found_response()
    if equipment.status != EquipmentStatus.AVAILABLE:
        equipment_unavailable_response()

    rental_days = rental_days_between(
        payload.rental_start_date, payload.rental_end_date
    )
    daily_rate = to_money(equipment.daily_rental_price)
    return EventEquipmentRental(
        equipment_id=equipment.id,
        rental_start_date=payload.rental_start_date,
        rental_end_date=payload.rental_end_date,
        rental_days=rental_days,
        daily_rate=daily_rate,
        total_price=to_money(daily_rate * rental_days),
        security_deposit=to_money(equipment.security_deposit),
        delivery_address=payload.delivery_address,
        delivery_date=payload.delivery_date,
        pickup_date=payload.pickup_date,
        delivery_notes=payload.delivery_notes,
        pickup_notes=payload.pickup_notes,
        condition_before=payload.condition_before,
        admin_notes=payload.admin_notes,
    )


# --------------------- Catering ---------------------


async def add_catering_to_event(
    db: AsyncSession, event_id: str, payload: EventCateringCreateRequest
) -> EventCateringService:
    await _get_event(db, event_id)
    row = await build_catering_row(db, payload)
    row.event_id = event_id
    db.add(row)
    await db.commit()
    logger.info(
        "Catering service %s added to event %s", row.catering_service_id, event_id
    )
    return row


async def get_event_catering_or_404(
    db: AsyncSession, booking_id: str
) -> EventCateringService:
    row = await db.get(EventCateringService, booking_id)
    if row is None:
        event_catering_not_found_response()
    return row


async def update_event_catering(
    db: AsyncSession, booking_id: str, payload: EventCateringUpdateRequest
) -> EventCateringService:
    row = await get_event_catering_or_404(db, booking_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)

    if changes.get("quantity") is not None:
        service: Optional[CateringService] = await db.get(
            CateringService, row.catering_service_id
        )
        unit_price = (
            catering_unit_price(service) if service is not None else row.unit_price
        )
        row.unit_price = unit_price
        row.total_price = to_money(unit_price * changes["quantity"])

    for field, value in changes.items():
        setattr(row, field, value)
    await db.commit()
    return row


async def remove_event_catering(db: AsyncSession, booking_id: str) -> None:
    row = await get_event_catering_or_404(db, booking_id)
    await db.delete(row)
    await db.commit()


# --------------------- Equipment rentals ---------------------


async def add_rental_to_event(
    db: AsyncSession, event_id: str, payload: EventRentalCreateRequest
) -> EventEquipmentRental:
    await _get_event(db, event_id)
    row = await build_rental_row(db, payload)
    row.event_id = event_id
    db.add(row)
    await db.commit()
    logger.info("Equipment %s rented for event %s", row.equipment_id, event_id)
    return row


async def get_event_rental_or_404(
    db: AsyncSession, rental_id: str
) -> EventEquipmentRental:
    row = await db.get(EventEquipmentRental, rental_id)
    if row is None:
        event_rental_not_found_response()
    return row


async def update_event_rental(
    db: AsyncSession, rental_id: str, payload: EventRentalUpdateRequest
) -> EventEquipmentRental:
    row = await get_event_rental_or_404(db, rental_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)

    if changes.get("rental_start_date") or changes.get("rental_end_date"):
        start = ensure_utc(changes.get("rental_start_date") or row.rental_start_date)
        end = ensure_utc(changes.get("rental_end_date") or row.rental_end_date)
        if end <= start:
            invalid_rental_window_response()

        equipment = await db.get(Equipment, row.equipment_id)
        daily_rate = (
            to_money(equipment.daily_rental_price)
            if equipment is not None
            else row.daily_rate
        )
        row.rental_days = rental_days_between(start, end)
        row.daily_rate = daily_rate
        row.total_price = to_money(daily_rate * row.rental_days)

    for field, value in changes.items():
        setattr(row, field, value)
    await db.commit()
    return row


async def remove_event_rental(db: AsyncSession, rental_id: str) -> None:
    row = await get_event_rental_or_404(db, rental_id)
    await db.delete(row)
    await db.commit()
