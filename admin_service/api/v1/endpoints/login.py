from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import JSONResponse

from admin_service.schemas.admin_user import AdminLoginRequest
from admin_service.services.auth import authenticate_admin, issue_admin_token
from admin_service.services.response_builders import (
    admin_login_success_response,
)
from shared.core.config import settings
from shared.core.logging_config import get_logger
from shared.db.sessions.database import get_db
from shared.utils.exception_handlers import exception_handler

logger = get_logger(__name__)

router = APIRouter()


@router.post("/login")
@exception_handler
async def admin_login(
    payload: AdminLoginRequest,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Authenticate an administrator and return a role ``admin`` token."""
    admin = await authenticate_admin(db, payload.email, payload.password)
    token = issue_admin_token(admin)

    response = admin_login_success_response(admin, token)
    response.set_cookie(
        key="access_token",
        value=token,
        httponly=True,
        secure=settings.ENVIRONMENT == "production",
        samesite="lax",
        max_age=settings.JWT_ACCESS_TOKEN_EXPIRE_SECONDS,
        path="/",
    )
    logger.info("Admin %s logged in", admin.id)
    return response
