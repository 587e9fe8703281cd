from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import JSONResponse

from shared.core.api_response import api_response
from shared.core.config import settings
from shared.db.sessions.database import get_db
from shared.utils.email_utils import send_password_reset_email
from shared.utils.exception_handlers import exception_handler
from user_service.schemas.register import EmailRequest, ResetPasswordRequest
from user_service.services.password_reset_service import (
    create_password_reset,
    reset_password,
)

router = APIRouter()

FORGOT_PASSWORD_MESSAGE = (
    "If an account exists for this email, a password reset link has been sent"
)


@router.post("/forgot-password")
@exception_handler
async def forgot_password(
    payload: EmailRequest,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Always answers 200, whether or not the account exists."""
    issued = await create_password_reset(db, payload.email)
    if issued is not None:
        user, secret = issued
        background_tasks.add_task(
            send_password_reset_email,
            email=user.email,
            full_name=user.full_name,
            reset_token=secret.plain,
            expiry_minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES,
        )

    return api_response(
        status_code=status.HTTP_200_OK,
        message=FORGOT_PASSWORD_MESSAGE,
    )


@router.post("/reset-password")
@exception_handler
async def reset_password_endpoint(
    payload: ResetPasswordRequest,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    user = await reset_password(db, payload.email, payload.token, payload.password)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Password reset successfully",
        data={"email": user.email},
    )
