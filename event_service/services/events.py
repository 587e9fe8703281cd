from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from event_service.schemas.events import EventCreateRequest, EventUpdateRequest
from event_service.services.event_items import build_catering_row, build_rental_row
from event_service.services.pricing import compute_event_prices
from event_service.services.response_builder import event_not_found_response
from shared.core.logging_config import get_logger
from shared.db.models import (
    Event,
    EventCateringService,
    EventEquipmentRental,
    EventStatus,
    EventType,
)
from shared.db.sessions.database import atomic
from shared.utils.pagination import like_pattern, ordering, paginate

logger = get_logger(__name__)


async def create_event(db: AsyncSession, payload: EventCreateRequest) -> Event:
    """
    Create an event together with any embedded catering bookings and
    equipment rentals. Either every row is written or none is.
    """
    values = payload.model_dump(exclude={"catering_services", "equipment_rentals"})
    total_price, final_price = compute_event_prices(
        payload.base_price, payload.discount_amount
    )

    async with atomic(db):
        event = Event(**values, total_price=total_price, final_price=final_price)
        for item in payload.catering_services:
            event.catering_services.append(await build_catering_row(db, item))
        for rental in payload.equipment_rentals:
            event.equipment_rentals.append(await build_rental_row(db, rental))
        db.add(event)

    logger.info(
        "Event %s created with %d catering bookings and %d rentals",
        event.id,
        len(payload.catering_services),
        len(payload.equipment_rentals),
    )
    return await get_event_detail(db, event.id)


async def get_event_or_404(db: AsyncSession, event_id: str) -> Event:
    event = await db.get(Event, event_id)
    if event is None:
        event_not_found_response()
    return event


async def get_event_detail(db: AsyncSession, event_id: str) -> Event:
    """Load an event with its catering bookings and equipment rentals."""
    result = await db.execute(
        select(Event)
        .where(Event.id == event_id)
        .options(
            selectinload(Event.catering_services).selectinload(
                EventCateringService.catering_service
            ),
            selectinload(Event.equipment_rentals).selectinload(
                EventEquipmentRental.equipment
            ),
        )
        .execution_options(populate_existing=True)
    )
    event = result.scalar_one_or_none()
    if event is None:
        event_not_found_response()
    return event


async def list_events(
    db: AsyncSession,
    page: int,
    limit: int,
    event_type: Optional[EventType] = None,
    status: Optional[EventStatus] = None,
    event_date_from: Optional[datetime] = None,
    event_date_to: Optional[datetime] = None,
    location: Optional[str] = None,
    city: Optional[str] = None,
    search: Optional[str] = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
) -> Tuple[List[Event], Dict[str, Any]]:
    query = select(Event)

    if event_type is not None:
        query = query.where(Event.event_type == event_type)
    if status is not None:
        query = query.where(Event.status == status)
    if event_date_from is not None:
        query = query.where(Event.event_date >= event_date_from)
    if event_date_to is not None:
        query = query.where(Event.event_date <= event_date_to)
    if location:
        query = query.where(Event.location.ilike(like_pattern(location), escape="\\"))
    if city:
        query = query.where(Event.city.ilike(like_pattern(city), escape="\\"))
    if search:
        pattern = like_pattern(search)
        query = query.where(
            or_(
                Event.title.ilike(pattern, escape="\\"),
                Event.description.ilike(pattern, escape="\\"),
                Event.location.ilike(pattern, escape="\\"),
                Event.contact_name.ilike(pattern, escape="\\"),
                Event.contact_email.ilike(pattern, escape="\\"),
            )
        )

    query = query.order_by(ordering(Event, sort_by, sort_order))
    return await paginate(db, query, page, limit)


async def update_event(
    db: AsyncSession, event_id: str, payload: EventUpdateRequest
) -> Event:
    event = await get_event_or_404(db, event_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)

    for field, value in changes.items():
        setattr(event, field, value)

    if "base_price" in changes or "discount_amount" in changes:
        event.total_price, event.final_price = compute_event_prices(
            event.base_price, event.discount_amount
        )

    await db.commit()
    return event


async def delete_event(db: AsyncSession, event_id: str) -> None:
    event = await get_event_or_404(db, event_id)
    await db.delete(event)
    await db.commit()
    logger.info("Event %s deleted", event_id)
