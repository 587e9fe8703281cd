from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import JSONResponse

from shared.db.sessions.database import get_db
from shared.utils.email_utils import send_welcome_email
from shared.utils.exception_handlers import exception_handler
from user_service.schemas.register import UserRegisterRequest
from user_service.services.auth import issue_user_token, register_user
from user_service.services.response_builders import (
    auth_success_response,
    set_auth_cookie,
)

router = APIRouter()


@router.post("/register", status_code=status.HTTP_201_CREATED)
@exception_handler
async def register(
    user_data: UserRegisterRequest,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """
    Register a new user.

    The email must have been verified through ``/auth/verify-otp`` within
    the last hour. A welcome email is sent in the background.
    """
    user = await register_user(db, user_data)
    token = issue_user_token(user)

    background_tasks.add_task(
        send_welcome_email, email=user.email, full_name=user.full_name
    )

    response = auth_success_response(
        user,
        token,
        message="Account created successfully",
        status_code=status.HTTP_201_CREATED,
    )
    return set_auth_cookie(response, token)
