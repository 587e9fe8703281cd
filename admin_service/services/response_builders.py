# response_builders.py
from fastapi import status
from starlette.responses import JSONResponse

from admin_service.schemas.admin_user import AdminResponse
from shared.core.api_response import api_response
from shared.db.models import Admin


def admin_not_found_response() -> JSONResponse:
    return api_response(
        status_code=status.HTTP_404_NOT_FOUND,
        message="Admin not found",
        log_error=False,
    )


def invalid_credentials_response() -> JSONResponse:
    return api_response(
        status_code=status.HTTP_401_UNAUTHORIZED,
        message="Invalid email or password",
        log_error=True,
    )


def admin_email_taken_response(email: str) -> JSONResponse:
    return api_response(
        status_code=status.HTTP_409_CONFLICT,
        message=f"Admin with email {email} already exists",
        log_error=True,
    )


def admin_login_success_response(admin: Admin, token: str) -> JSONResponse:
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Login successful",
        data={
            "admin": AdminResponse.model_validate(admin),
            "token": token,
        },
    )
