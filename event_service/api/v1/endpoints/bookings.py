from datetime import date
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import JSONResponse

from event_service.schemas.bookings import (
    BookingCreateRequest,
    BookingResponse,
    BookingStatsResponse,
    BookingUpdateRequest,
)
from event_service.services.bookings import (
    create_booking,
    deactivate_booking,
    fetch_booking_stats,
    get_booking_or_404,
    list_bookings,
    update_booking,
)
from shared.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from shared.core.api_response import api_response
from shared.db.models import BookingStatus
from shared.db.sessions.database import get_db
from shared.dependencies.auth import CurrentAdmin
from shared.utils import email_utils
from shared.utils.exception_handlers import exception_handler

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
@exception_handler
async def book_package(
    payload: BookingCreateRequest,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """
    Book a photography package.

    Public endpoint used by the plan pages; the client receives an
    acknowledgement email while the studio reviews the request.
    """
    booking = await create_booking(db, payload)

    background_tasks.add_task(
        email_utils.send_booking_confirmation_email,
        email=booking.email,
        full_name=booking.full_name,
        booking_id=booking.id,
        package_name=booking.package_name,
        package_price=booking.package_price,
        event_date=booking.event_date,
        event_time=booking.event_time,
        event_location=booking.event_location,
        special_requirements=booking.special_requirements,
    )

    return api_response(
        status_code=status.HTTP_201_CREATED,
        message="Booking created successfully",
        data=BookingResponse.model_validate(booking),
    )


@router.get("")
@exception_handler
async def get_bookings(
    _: CurrentAdmin,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    booking_status: Optional[BookingStatus] = Query(None, alias="status"),
    package_type: Optional[str] = Query(None),
    booking_type: Optional[str] = Query(None),
    is_active: Optional[bool] = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    bookings, pagination = await list_bookings(
        db,
        page,
        limit,
        status=booking_status,
        package_type=package_type,
        booking_type=booking_type,
        is_active=is_active,
        date_from=date_from,
        date_to=date_to,
    )
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Bookings retrieved successfully",
        data={
            "bookings": [BookingResponse.model_validate(b) for b in bookings],
            "pagination": pagination,
        },
    )


@router.get("/stats")
@exception_handler
async def get_booking_stats(
    _: CurrentAdmin, db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    stats = await fetch_booking_stats(db)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Booking statistics retrieved successfully",
        data=BookingStatsResponse(**stats),
    )


@router.get("/{booking_id}")
@exception_handler
async def get_booking(
    booking_id: str, _: CurrentAdmin, db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    booking = await get_booking_or_404(db, booking_id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Booking retrieved successfully",
        data=BookingResponse.model_validate(booking),
    )


@router.put("/{booking_id}")
@exception_handler
async def edit_booking(
    booking_id: str,
    payload: BookingUpdateRequest,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    booking = await update_booking(db, booking_id, payload)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Booking updated successfully",
        data=BookingResponse.model_validate(booking),
    )


@router.delete("/{booking_id}")
@exception_handler
async def remove_booking(
    booking_id: str, _: CurrentAdmin, db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    booking = await deactivate_booking(db, booking_id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Booking deleted successfully",
        data=BookingResponse.model_validate(booking),
    )
