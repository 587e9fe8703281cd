from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import JSONResponse

from event_service.schemas.equipment import (
    EquipmentCreateRequest,
    EquipmentResponse,
    EquipmentSortField,
    EquipmentUpdateRequest,
)
from event_service.schemas.events import SortOrder
from event_service.services.equipment import (
    create_equipment,
    delete_equipment,
    get_equipment_or_404,
    list_equipment,
    update_equipment,
)
from shared.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from shared.core.api_response import api_response
from shared.db.models import EquipmentCategory, EquipmentStatus
from shared.db.sessions.database import get_db
from shared.dependencies.auth import CurrentAdmin
from shared.utils.exception_handlers import exception_handler

router = APIRouter()


@router.get("")
@exception_handler
async def get_equipment_list(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    category: Optional[EquipmentCategory] = Query(None),
    equipment_status: Optional[EquipmentStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None),
    sort_by: EquipmentSortField = Query("name"),
    sort_order: SortOrder = Query("asc"),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    equipment, pagination = await list_equipment(
        db,
        page,
        limit,
        category=category,
        status=equipment_status,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Equipment retrieved successfully",
        data={
            "equipment": [EquipmentResponse.model_validate(e) for e in equipment],
            "pagination": pagination,
        },
    )


@router.get("/{equipment_id}")
@exception_handler
async def get_equipment(
    equipment_id: str, db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    equipment = await get_equipment_or_404(db, equipment_id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Equipment retrieved successfully",
        data=EquipmentResponse.model_validate(equipment),
    )


@router.post("", status_code=status.HTTP_201_CREATED)
@exception_handler
async def add_equipment(
    payload: EquipmentCreateRequest,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    equipment = await create_equipment(db, payload)
    return api_response(
        status_code=status.HTTP_201_CREATED,
        message="Equipment created successfully",
        data=EquipmentResponse.model_validate(equipment),
    )


@router.put("/{equipment_id}")
@exception_handler
async def edit_equipment(
    equipment_id: str,
    payload: EquipmentUpdateRequest,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    equipment = await update_equipment(db, equipment_id, payload)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Equipment updated successfully",
        data=EquipmentResponse.model_validate(equipment),
    )


@router.delete("/{equipment_id}")
@exception_handler
async def remove_equipment(
    equipment_id: str,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    await delete_equipment(db, equipment_id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Equipment deleted successfully",
        data={"id": equipment_id},
    )
