from fastapi import APIRouter, Depends, status
from pydantic import EmailStr
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import JSONResponse

from shared.core.api_response import api_response
from shared.db.sessions.database import get_db
from shared.dependencies.auth import CurrentAdmin
from shared.utils.exception_handlers import exception_handler
from user_service.schemas.register import UserUpsertRequest
from user_service.schemas.user import UserResponse
from user_service.services.user_service import (
    create_or_update_user,
    get_user_by_email_or_404,
)

router = APIRouter()


@router.post("/create-or-update")
@exception_handler
async def upsert_user(
    payload: UserUpsertRequest,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Create or refresh an OAuth user, keyed by email."""
    user, created = await create_or_update_user(db, payload)
    return api_response(
        status_code=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        message="User created successfully" if created else "User updated successfully",
        data=UserResponse.model_validate(user),
    )


@router.get("/email/{email}")
@exception_handler
async def get_user_by_email(
    email: EmailStr,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    user = await get_user_by_email_or_404(db, email)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="User retrieved successfully",
        data=UserResponse.model_validate(user),
    )
