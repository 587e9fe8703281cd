from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from event_service.schemas.equipment import (
    EquipmentCreateRequest,
    EquipmentUpdateRequest,
)
from event_service.services.response_builder import equipment_not_found_response
from shared.core.logging_config import get_logger
from shared.db.models import Equipment, EquipmentCategory, EquipmentStatus
from shared.utils.pagination import like_pattern, ordering, paginate

logger = get_logger(__name__)


async def create_equipment(
    db: AsyncSession, payload: EquipmentCreateRequest
) -> Equipment:
    equipment = Equipment(**payload.model_dump())
    db.add(equipment)
    await db.commit()
    logger.info("Equipment %s created", equipment.id)
    return equipment


async def get_equipment_or_404(db: AsyncSession, equipment_id: str) -> Equipment:
    equipment = await db.get(Equipment, equipment_id)
    if equipment is None:
        equipment_not_found_response()
    return equipment


async def list_equipment(
    db: AsyncSession,
    page: int,
    limit: int,
    category: Optional[EquipmentCategory] = None,
    status: Optional[EquipmentStatus] = None,
    search: Optional[str] = None,
    sort_by: str = "name",
    sort_order: str = "asc",
) -> Tuple[List[Equipment], Dict[str, Any]]:
    query = select(Equipment)
    if category is not None:
        query = query.where(Equipment.category == category)
    if status is not None:
        query = query.where(Equipment.status == status)
    if search:
        pattern = like_pattern(search)
        query = query.where(
            or_(
                Equipment.name.ilike(pattern, escape="\\"),
                Equipment.description.ilike(pattern, escape="\\"),
                Equipment.brand.ilike(pattern, escape="\\"),
                Equipment.model.ilike(pattern, escape="\\"),
            )
        )
    query = query.order_by(ordering(Equipment, sort_by, sort_order))
    return await paginate(db, query, page, limit)


async def update_equipment(
    db: AsyncSession, equipment_id: str, payload: EquipmentUpdateRequest
) -> Equipment:
    equipment = await get_equipment_or_404(db, equipment_id)
    for field, value in payload.model_dump(
        exclude_unset=True, exclude_none=True
    ).items():
        setattr(equipment, field, value)
    await db.commit()
    return equipment


async def delete_equipment(db: AsyncSession, equipment_id: str) -> None:
    equipment = await get_equipment_or_404(db, equipment_id)
    await db.delete(equipment)
    await db.commit()
    logger.info("Equipment %s deleted", equipment_id)
