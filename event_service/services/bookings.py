from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from event_service.schemas.bookings import BookingCreateRequest, BookingUpdateRequest
from event_service.services.response_builder import booking_not_found_response
from shared.core.logging_config import get_logger
from shared.db.models import Booking, BookingStatus
from shared.utils.pagination import paginate

logger = get_logger(__name__)


async def create_booking(db: AsyncSession, payload: BookingCreateRequest) -> Booking:
    booking = Booking(**payload.model_dump())
    db.add(booking)
    await db.commit()
    logger.info(
        "Booking %s created for package %s", booking.id, booking.package_name
    )
    return booking


async def get_booking_or_404(db: AsyncSession, booking_id: str) -> Booking:
    booking = await db.get(Booking, booking_id)
    if booking is None:
        booking_not_found_response()
    return booking


async def list_bookings(
    db: AsyncSession,
    page: int,
    limit: int,
    status: Optional[BookingStatus] = None,
    package_type: Optional[str] = None,
    booking_type: Optional[str] = None,
    is_active: Optional[bool] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> Tuple[List[Booking], Dict[str, Any]]:
    query = select(Booking)
    if status is not None:
        query = query.where(Booking.status == status)
    if package_type:
        query = query.where(Booking.package_type == package_type)
    if booking_type:
        query = query.where(Booking.booking_type == booking_type)
    if is_active is not None:
        query = query.where(Booking.is_active.is_(is_active))
    if date_from is not None:
        query = query.where(Booking.event_date >= date_from)
    if date_to is not None:
        query = query.where(Booking.event_date <= date_to)

    query = query.order_by(Booking.created_at.desc())
    return await paginate(db, query, page, limit)


async def update_booking(
    db: AsyncSession, booking_id: str, payload: BookingUpdateRequest
) -> Booking:
    booking = await get_booking_or_404(db, booking_id)
    for field, value in payload.model_dump(
        exclude_unset=True, exclude_none=True
    ).items():
        setattr(booking, field, value)
    await db.commit()
    return booking


async def deactivate_booking(db: AsyncSession, booking_id: str) -> Booking:
    """Soft delete; the row stays for reporting."""
    booking = await get_booking_or_404(db, booking_id)
    booking.is_active = False
    await db.commit()
    logger.info("Booking %s deactivated", booking_id)
    return booking


async def fetch_booking_stats(db: AsyncSession) -> Dict[str, int]:
    """Counts of active bookings, overall and per headline status."""
    result = await db.execute(
        select(Booking.status, func.count(Booking.id))
        .where(Booking.is_active.is_(True))
        .group_by(Booking.status)
    )
    counts = {status: count for status, count in result.all()}
    return {
        "total": sum(counts.values()),
        "pending": counts.get(BookingStatus.PENDING, 0),
        "confirmed": counts.get(BookingStatus.CONFIRMED, 0),
        "completed": counts.get(BookingStatus.COMPLETED, 0),
    }
