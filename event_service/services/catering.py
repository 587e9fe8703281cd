from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from event_service.schemas.catering import (
    CateringServiceCreateRequest,
    CateringServiceUpdateRequest,
)
from event_service.services.response_builder import (
    catering_service_not_found_response,
)
from shared.core.logging_config import get_logger
from shared.db.models import CateringCategory, CateringService
from shared.utils.pagination import like_pattern, ordering, paginate

logger = get_logger(__name__)


async def create_catering_service(
    db: AsyncSession, payload: CateringServiceCreateRequest
) -> CateringService:
    service = CateringService(**payload.model_dump())
    db.add(service)
    await db.commit()
    logger.info("Catering service %s created", service.id)
    return service


async def get_catering_service_or_404(
    db: AsyncSession, service_id: str
) -> CateringService:
    service = await db.get(CateringService, service_id)
    if service is None:
        catering_service_not_found_response()
    return service


async def list_catering_services(
    db: AsyncSession,
    page: int,
    limit: int,
    category: Optional[CateringCategory] = None,
    is_active: Optional[bool] = None,
    search: Optional[str] = None,
    sort_by: str = "name",
    sort_order: str = "asc",
) -> Tuple[List[CateringService], Dict[str, Any]]:
    query = select(CateringService)
    if category is not None:
        query = query.where(CateringService.category == category)
    if is_active is not None:
        query = query.where(CateringService.is_active.is_(is_active))
    if search:
        pattern = like_pattern(search)
        query = query.where(
            or_(
                CateringService.name.ilike(pattern, escape="\\"),
                CateringService.description.ilike(pattern, escape="\\"),
            )
        )
    query = query.order_by(ordering(CateringService, sort_by, sort_order))
    return await paginate(db, query, page, limit)


async def update_catering_service(
    db: AsyncSession, service_id: str, payload: CateringServiceUpdateRequest
) -> CateringService:
    service = await get_catering_service_or_404(db, service_id)
    for field, value in payload.model_dump(
        exclude_unset=True, exclude_none=True
    ).items():
        setattr(service, field, value)
    await db.commit()
    return service


async def delete_catering_service(db: AsyncSession, service_id: str) -> None:
    service = await get_catering_service_or_404(db, service_id)
    await db.delete(service)
    await db.commit()
    logger.info("Catering service %s deleted", service_id)
