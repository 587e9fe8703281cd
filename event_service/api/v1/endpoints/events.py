from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import JSONResponse

from event_service.schemas.event_items import (
    EventCateringCreateRequest,
    EventCateringResponse,
    EventRentalCreateRequest,
    EventRentalResponse,
)
from event_service.schemas.events import (
    EventCreateRequest,
    EventDetailResponse,
    EventResponse,
    EventSortField,
    EventUpdateRequest,
    SortOrder,
)
from event_service.services.event_items import (
    add_catering_to_event,
    add_rental_to_event,
)
from event_service.services.event_stats import fetch_event_stats
from event_service.services.events import (
    create_event,
    delete_event,
    get_event_detail,
    list_events,
    update_event,
)
from shared.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from shared.core.api_response import api_response
from shared.db.models import EventStatus, EventType
from shared.db.sessions.database import get_db
from shared.dependencies.auth import CurrentAdmin
from shared.utils.exception_handlers import exception_handler

router = APIRouter()


@router.get("")
@exception_handler
async def get_events(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    event_type: Optional[EventType] = Query(None),
    event_status: Optional[EventStatus] = Query(None, alias="status"),
    event_date_from: Optional[datetime] = Query(None),
    event_date_to: Optional[datetime] = Query(None),
    location: Optional[str] = Query(None),
    city: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    sort_by: EventSortField = Query("created_at"),
    sort_order: SortOrder = Query("desc"),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """List events with filters, pagination and sorting."""
    events, pagination = await list_events(
        db,
        page,
        limit,
        event_type=event_type,
        status=event_status,
        event_date_from=event_date_from,
        event_date_to=event_date_to,
        location=location,
        city=city,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Events retrieved successfully",
        data={
            "events": [EventResponse.model_validate(e) for e in events],
            "pagination": pagination,
        },
    )


@router.get("/stats")
@exception_handler
async def get_event_stats(
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    event_type: Optional[EventType] = Query(None),
    event_status: Optional[EventStatus] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    stats = await fetch_event_stats(
        db,
        start_date=start_date,
        end_date=end_date,
        event_type=event_type,
        status=event_status,
    )
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Event statistics retrieved successfully",
        data=stats,
    )


@router.get("/{event_id}")
@exception_handler
async def get_event(event_id: str, db: AsyncSession = Depends(get_db)) -> JSONResponse:
    event = await get_event_detail(db, event_id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Event retrieved successfully",
        data=EventDetailResponse.model_validate(event),
    )


@router.post("", status_code=status.HTTP_201_CREATED)
@exception_handler
async def add_event(
    payload: EventCreateRequest,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """
    Create an event.

    Catering bookings and equipment rentals embedded in the body are
    created in the same transaction as the event.
    """
    event = await create_event(db, payload)
    return api_response(
        status_code=status.HTTP_201_CREATED,
        message="Event created successfully",
        data=EventDetailResponse.model_validate(event),
    )


@router.put("/{event_id}")
@exception_handler
async def edit_event(
    event_id: str,
    payload: EventUpdateRequest,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    event = await update_event(db, event_id, payload)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Event updated successfully",
        data=EventResponse.model_validate(event),
    )


@router.delete("/{event_id}")
@exception_handler
async def remove_event(
    event_id: str,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    await delete_event(db, event_id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Event deleted successfully",
        data={"id": event_id},
    )


@router.post("/{event_id}/catering-services", status_code=status.HTTP_201_CREATED)
@exception_handler
async def attach_catering(
    event_id: str,
    payload: EventCateringCreateRequest,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    row = await add_catering_to_event(db, event_id, payload)
    return api_response(
        status_code=status.HTTP_201_CREATED,
        message="Catering service added to event successfully",
        data=EventCateringResponse.model_validate(row),
    )


@router.post("/{event_id}/equipment-rentals", status_code=status.HTTP_201_CREATED)
@exception_handler
async def attach_rental(
    event_id: str,
    payload: EventRentalCreateRequest,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    row = await add_rental_to_event(db, event_id, payload)
    return api_response(
        status_code=status.HTTP_201_CREATED,
        message="Equipment rental added to event successfully",
        data=EventRentalResponse.model_validate(row),
    )
