"""
Authentication dependencies.

Identity is taken only from a verified JWT, sent either as a Bearer token
or in the ``access_token`` cookie. The ``role`` claim decides which table
the ``uid`` claim is looked up in.
"""

from typing import Annotated, Any, Dict, NoReturn, Optional, Union

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from shared.core.api_response import build_response_body
from shared.core.logging_config import get_logger
from shared.db.models import Admin, User
from shared.db.sessions.database import get_db
from shared.utils.auth import ROLE_ADMIN, ROLE_USER, verify_jwt_token

logger = get_logger(__name__)

# OAuth2 scheme for token authentication; missing tokens are reported by
# the dependencies below so the envelope stays consistent
user_oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl="/api/v1/auth/login", scheme_name="UserAuth", auto_error=False
)
admin_oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl="/api/v1/admin/login", scheme_name="AdminAuth", auto_error=False
)


def extract_token_from_request(request: Request) -> Optional[str]:
    """Extract token from Authorization header or cookie"""
    header = request.headers.get("authorization")
    if header and header.lower().startswith("bearer "):
        return header[7:].strip() or None
    cookie = request.cookies.get("access_token")
    return (
        cookie
        if cookie and cookie.lower() not in ["undefined", "null"]
        else None
    )


def _unauthorized(message: str) -> NoReturn:
    logger.warning("Unauthorized: %s", message)
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=build_response_body(status.HTTP_401_UNAUTHORIZED, message),
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_request_token(request: Request, token: Optional[str]) -> Dict[str, Any]:
    auth_token = token or extract_token_from_request(request)
    if not auth_token:
        _unauthorized("Missing authentication token")

    try:
        return verify_jwt_token(auth_token)
    except ValueError as e:
        logger.warning("Token verification failed: %s", e)
        _unauthorized("Invalid or expired token")


async def get_current_user(
    request: Request,
    token: Annotated[Optional[str], Depends(user_oauth2_scheme)],
    db: AsyncSession = Depends(get_db),
) -> User:
    """Current end user from a token with role ``user``."""
    payload = decode_request_token(request, token)
    if payload.get("role") != ROLE_USER:
        _unauthorized("User token required")

    user = await db.get(User, payload["uid"])
    if user is None:
        _unauthorized("User no longer exists")
    return user


async def get_current_admin(
    request: Request,
    token: Annotated[Optional[str], Depends(admin_oauth2_scheme)],
    db: AsyncSession = Depends(get_db),
) -> Admin:
    """Current administrator from a token with role ``admin``."""
    payload = decode_request_token(request, token)
    if payload.get("role") != ROLE_ADMIN:
        _unauthorized("Admin token required")

    admin = await db.get(Admin, payload["uid"])
    if admin is None or not admin.is_active:
        _unauthorized("Admin account is inactive or missing")
    return admin


async def get_current_principal(
    request: Request,
    token: Annotated[Optional[str], Depends(user_oauth2_scheme)],
    db: AsyncSession = Depends(get_db),
) -> Union[User, Admin]:
    """Either an end user or an administrator."""
    payload = decode_request_token(request, token)
    role = payload.get("role")

    principal: Union[User, Admin, None] = None
    if role == ROLE_USER:
        principal = await db.get(User, payload["uid"])
    elif role == ROLE_ADMIN:
        admin = await db.get(Admin, payload["uid"])
        principal = admin if admin is not None and admin.is_active else None

    if principal is None:
        _unauthorized("Invalid or expired token")
    return principal


CurrentUser = Annotated[User, Depends(get_current_user)]
CurrentAdmin = Annotated[Admin, Depends(get_current_admin)]
CurrentPrincipal = Annotated[Union[User, Admin], Depends(get_current_principal)]
