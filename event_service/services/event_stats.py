from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.constants import MONTHLY_WINDOW, STATS_TOP_N
from shared.core.logging_config import get_logger
from shared.db.models import (
    CateringService,
    Equipment,
    Event,
    EventCateringService,
    EventEquipmentRental,
    EventStatus,
    EventType,
)
from shared.utils.data_utils import ZERO, to_money
from shared.utils.execution_time import measure_execution_time
from shared.utils.timezone_utils import ensure_utc, last_month_keys, month_key

logger = get_logger(__name__)


def _event_filters(
    start_date: Optional[datetime],
    end_date: Optional[datetime],
    event_type: Optional[EventType],
    status: Optional[EventStatus],
) -> List[Any]:
    filters: List[Any] = []
    if start_date is not None:
        filters.append(Event.event_date >= start_date)
    if end_date is not None:
        filters.append(Event.event_date <= end_date)
    if event_type is not None:
        filters.append(Event.event_type == event_type)
    if status is not None:
        filters.append(Event.status == status)
    return filters


async def _monthly_revenue(
    db: AsyncSession, filters: List[Any]
) -> List[Dict[str, Any]]:
    keys = last_month_keys(MONTHLY_WINDOW)
    window_start = datetime(
        int(keys[0][:4]), int(keys[0][5:]), 1, tzinfo=timezone.utc
    )
    result = await db.execute(
        select(Event.created_at, Event.final_price).where(
            *filters, Event.created_at >= window_start
        )
    )

    buckets = {key: ZERO for key in keys}
    for created_at, final_price in result.all():
        key = month_key(ensure_utc(created_at))
        if key in buckets:
            buckets[key] += to_money(final_price)
    return [{"month": key, "revenue": to_money(buckets[key])} for key in keys]


@measure_execution_time("EventStats")
async def fetch_event_stats(
    db: AsyncSession,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    event_type: Optional[EventType] = None,
    status: Optional[EventStatus] = None,
) -> Dict[str, Any]:
    """
    Dashboard figures for events matching the optional filters.

    Revenue is the sum of ``final_price``. Monthly revenue buckets use the
    event's creation month and cover the last twelve months, oldest first.
    """
    filters = _event_filters(start_date, end_date, event_type, status)

    totals = await db.execute(
        select(
            func.count(Event.id),
            func.coalesce(func.sum(Event.final_price), 0),
        ).where(*filters)
    )
    total_events, total_revenue = totals.one()
    total_revenue = to_money(total_revenue)
    average_event_value = (
        to_money(total_revenue / total_events) if total_events else to_money(ZERO)
    )

    by_type = await db.execute(
        select(
            Event.event_type,
            func.count(Event.id),
            func.coalesce(func.sum(Event.final_price), 0),
        )
        .where(*filters)
        .group_by(Event.event_type)
    )
    by_status = await db.execute(
        select(Event.status, func.count(Event.id))
        .where(*filters)
        .group_by(Event.status)
    )

    booking_count = func.count(EventCateringService.id).label("booking_count")
    top_catering = await db.execute(
        select(
            EventCateringService.catering_service_id,
            CateringService.name,
            booking_count,
            func.coalesce(func.sum(EventCateringService.total_price), 0),
        )
        .join(
            CateringService,
            CateringService.id == EventCateringService.catering_service_id,
        )
        .join(Event, Event.id == EventCateringService.event_id)
        .where(*filters)
        .group_by(EventCateringService.catering_service_id, CateringService.name)
        .order_by(desc("booking_count"))
        .limit(STATS_TOP_N)
    )

    rental_count = func.count(EventEquipmentRental.id).label("rental_count")
    top_equipment = await db.execute(
        select(
            EventEquipmentRental.equipment_id,
            Equipment.name,
            rental_count,
            func.coalesce(func.sum(EventEquipmentRental.total_price), 0),
        )
        .join(Equipment, Equipment.id == EventEquipmentRental.equipment_id)
        .join(Event, Event.id == EventEquipmentRental.event_id)
        .where(*filters)
        .group_by(EventEquipmentRental.equipment_id, Equipment.name)
        .order_by(desc("rental_count"))
        .limit(STATS_TOP_N)
    )

    return {
        "total_events": total_events,
        "total_revenue": total_revenue,
        "average_event_value": average_event_value,
        "monthly_revenue": await _monthly_revenue(db, filters),
        "events_by_type": [
            {"event_type": row[0], "count": row[1], "revenue": to_money(row[2])}
            for row in by_type.all()
        ],
        "events_by_status": [
            {"status": row[0], "count": row[1]} for row in by_status.all()
        ],
        "popular_catering_services": [
            {
                "service_id": row[0],
                "service_name": row[1],
                "booking_count": row[2],
                "revenue": to_money(row[3]),
            }
            for row in top_catering.all()
        ],
        "popular_equipment": [
            {
                "equipment_id": row[0],
                "equipment_name": row[1],
                "rental_count": row[2],
                "revenue": to_money(row[3]),
            }
            for row in top_equipment.all()
        ],
    }
