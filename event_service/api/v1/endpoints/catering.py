from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import JSONResponse

from event_service.schemas.catering import (
    CateringServiceCreateRequest,
    CateringServiceResponse,
    CateringServiceUpdateRequest,
    CateringSortField,
)
from event_service.schemas.events import SortOrder
from event_service.services.catering import (
    create_catering_service,
    delete_catering_service,
    get_catering_service_or_404,
    list_catering_services,
    update_catering_service,
)
from shared.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from shared.core.api_response import api_response
from shared.db.models import CateringCategory
from shared.db.sessions.database import get_db
from shared.dependencies.auth import CurrentAdmin
from shared.utils.exception_handlers import exception_handler

router = APIRouter()


@router.get("")
@exception_handler
async def get_catering_services(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    category: Optional[CateringCategory] = Query(None),
    is_active: Optional[bool] = Query(None),
    search: Optional[str] = Query(None),
    sort_by: CateringSortField = Query("name"),
    sort_order: SortOrder = Query("asc"),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    services, pagination = await list_catering_services(
        db,
        page,
        limit,
        category=category,
        is_active=is_active,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Catering services retrieved successfully",
        data={
            "services": [CateringServiceResponse.model_validate(s) for s in services],
            "pagination": pagination,
        },
    )


@router.get("/{service_id}")
@exception_handler
async def get_catering_service(
    service_id: str, db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    service = await get_catering_service_or_404(db, service_id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Catering service retrieved successfully",
        data=CateringServiceResponse.model_validate(service),
    )


@router.post("", status_code=status.HTTP_201_CREATED)
@exception_handler
async def add_catering_service(
    payload: CateringServiceCreateRequest,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    service = await create_catering_service(db, payload)
    return api_response(
        status_code=status.HTTP_201_CREATED,
        message="Catering service created successfully",
        data=CateringServiceResponse.model_validate(service),
    )


@router.put("/{service_id}")
@exception_handler
async def edit_catering_service(
    service_id: str,
    payload: CateringServiceUpdateRequest,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    service = await update_catering_service(db, service_id, payload)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Catering service updated successfully",
        data=CateringServiceResponse.model_validate(service),
    )


@router.delete("/{service_id}")
@exception_handler
async def remove_catering_service(
    service_id: str,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    await delete_catering_service(db, service_id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Catering service deleted successfully",
        data={"id": service_id},
    )
