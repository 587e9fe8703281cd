from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import JSONResponse

from admin_service.schemas.admin_user import (
    AdminCreateRequest,
    AdminResponse,
    AdminUpdateRequest,
)
from admin_service.services.admin_accounts import (
    create_admin,
    delete_admin,
    list_admins,
    update_admin,
)
from shared.core.api_response import api_response
from shared.db.sessions.database import get_db
from shared.dependencies.auth import CurrentAdmin
from shared.utils.exception_handlers import exception_handler

router = APIRouter()


@router.get("/me")
@exception_handler
async def get_my_profile(current_admin: CurrentAdmin) -> JSONResponse:
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Admin profile retrieved successfully",
        data=AdminResponse.model_validate(current_admin),
    )


@router.get("")
@exception_handler
async def get_admins(
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    admins = await list_admins(db)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Admins retrieved successfully",
        data=[AdminResponse.model_validate(a) for a in admins],
    )


@router.post("", status_code=status.HTTP_201_CREATED)
@exception_handler
async def add_admin(
    payload: AdminCreateRequest,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    admin = await create_admin(db, payload)
    return api_response(
        status_code=status.HTTP_201_CREATED,
        message="Admin created successfully",
        data=AdminResponse.model_validate(admin),
    )


@router.put("/{admin_id}")
@exception_handler
async def edit_admin(
    admin_id: str,
    payload: AdminUpdateRequest,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    admin = await update_admin(db, admin_id, payload)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Admin updated successfully",
        data=AdminResponse.model_validate(admin),
    )


@router.delete("/{admin_id}")
@exception_handler
async def remove_admin(
    admin_id: str,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    await delete_admin(db, admin_id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Admin deleted successfully",
        data={"id": admin_id},
    )
