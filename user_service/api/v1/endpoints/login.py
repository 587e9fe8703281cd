from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import JSONResponse

from shared.core.api_response import api_response
from shared.core.logging_config import get_logger
from shared.db.sessions.database import get_db
from shared.dependencies.auth import CurrentUser
from shared.utils.exception_handlers import exception_handler
from user_service.schemas.register import UserLoginRequest
from user_service.schemas.user import UserResponse
from user_service.services.auth import authenticate_user, issue_user_token
from user_service.services.response_builders import (
    auth_success_response,
    set_auth_cookie,
)

logger = get_logger(__name__)

router = APIRouter()


@router.post("/login")
@exception_handler
async def login(
    payload: UserLoginRequest,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    user = await authenticate_user(db, payload.email, payload.password)
    token = issue_user_token(user)
    logger.info("User %s logged in", user.id)

    response = auth_success_response(user, token, message="Login successful")
    return set_auth_cookie(response, token)


@router.get("/me")
@exception_handler
async def get_me(current_user: CurrentUser) -> JSONResponse:
    return api_response(
        status_code=status.HTTP_200_OK,
        message="User retrieved successfully",
        data=UserResponse.model_validate(current_user),
    )
