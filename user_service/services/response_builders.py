# response_builders.py
from fastapi import status
from starlette.responses import JSONResponse

from shared.core.api_response import api_response
from shared.core.config import settings
from shared.db.models import User
from user_service.schemas.user import AuthResponse, UserResponse


def auth_success_response(
    user: User, token: str, message: str, status_code: int = status.HTTP_200_OK
) -> JSONResponse:
    payload = AuthResponse(user=UserResponse.model_validate(user), token=token)
    return api_response(
        status_code=status_code,
        message=message,
        data={
            **payload.model_dump(),
            "expires_in": settings.JWT_ACCESS_TOKEN_EXPIRE_SECONDS,
        },
    )


def set_auth_cookie(response: JSONResponse, token: str) -> JSONResponse:
    response.set_cookie(
        key="access_token",
        value=token,
        httponly=True,
        secure=settings.ENVIRONMENT == "production",
        samesite="lax",
        max_age=settings.JWT_ACCESS_TOKEN_EXPIRE_SECONDS,
        path="/",
    )
    return response
