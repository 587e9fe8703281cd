from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import JSONResponse

from shared.core.api_response import api_response
from shared.core.config import settings
from shared.db.sessions.database import get_db
from shared.utils.email_utils import send_verification_email
from shared.utils.exception_handlers import exception_handler
from user_service.schemas.register import EmailRequest, VerifyOtpRequest
from user_service.schemas.user import OtpSentResponse
from user_service.services.verification import (
    create_email_otp,
    verify_email_otp,
)

router = APIRouter()


async def _issue_and_send(
    email: str, background_tasks: BackgroundTasks, db: AsyncSession
) -> JSONResponse:
    issued = await create_email_otp(db, email)
    background_tasks.add_task(
        send_verification_email,
        email=email.lower(),
        otp=issued.plain,
        expires_in_minutes=settings.OTP_EXPIRE_MINUTES,
    )
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Verification email sent successfully",
        data=OtpSentResponse(
            email=email.lower(),
            expires_in=settings.OTP_EXPIRE_MINUTES * 60,
        ),
    )


@router.post("/send-verification")
@exception_handler
async def send_verification(
    payload: EmailRequest,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """
    Email a 6 digit code to an address that is not registered yet.

    Earlier unused codes for the address stop working.
    """
    return await _issue_and_send(payload.email, background_tasks, db)


@router.post("/resend-otp")
@exception_handler
async def resend_otp(
    payload: EmailRequest,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    return await _issue_and_send(payload.email, background_tasks, db)


@router.post("/verify-otp")
@exception_handler
async def verify_otp(
    payload: VerifyOtpRequest,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    await verify_email_otp(db, payload.email, payload.otp)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Email verified successfully",
        data={"email": payload.email.lower(), "is_verified": True},
    )
