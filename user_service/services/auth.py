from typing import Optional

from fastapi import status
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.core.api_response import api_response
from shared.core.exceptions import ConflictError, UnauthorizedError
from shared.core.logging_config import get_logger
from shared.db.models import User
from shared.utils.auth import (
    ROLE_USER,
    create_jwt_token,
    hash_password,
    verify_password,
)
from user_service.schemas.register import UserRegisterRequest
from user_service.services.verification import has_recent_verification

logger = get_logger(__name__)


async def fetch_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(User.by_email_query(email))
    return result.scalar_one_or_none()


async def validate_unique_user(
    db: AsyncSession, username: str, email: str
) -> None:
    result = await db.execute(
        select(User.email, User.username).where(
            or_(User.email == email.lower(), User.username == username.lower())
        )
    )
    for existing_email, existing_username in result.all():
        if existing_email == email.lower():
            raise ConflictError("User with this email already exists")
        if existing_username == username.lower():
            raise ConflictError(f"Username {username.lower()} is already taken")


def issue_user_token(user: User) -> str:
    return create_jwt_token(
        {"uid": user.id, "role": ROLE_USER, "email": user.email}
    )


async def register_user(db: AsyncSession, payload: UserRegisterRequest) -> User:
    """
    Create an account for an address verified by OTP within the window.
    """
    email = payload.email.lower()
    if not await has_recent_verification(db, email):
        api_response(
            status_code=status.HTTP_400_BAD_REQUEST,
            message="Email not verified",
            log_error=True,
        )

    await validate_unique_user(db, payload.username, email)

    user = User(
        email=email,
        username=payload.username.lower(),
        full_name=payload.full_name,
        address=payload.address,
        password_hash=hash_password(payload.password),
        user_type=payload.user_type,
        is_verified=True,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as e:
        # Another registration took the email or username after the check
        await db.rollback()
        logger.warning("Registration for %s lost a uniqueness race", email)
        raise ConflictError(
            "User with this email or username already exists"
        ) from e
    logger.info("User %s registered", user.id)
    return user


async def authenticate_user(db: AsyncSession, email: str, password: str) -> User:
    """Unknown email, OAuth-only account and wrong password all look alike."""
    user = await fetch_user_by_email(db, email)
    if (
        user is None
        or not user.password_hash
        or not verify_password(password, user.password_hash)
    ):
        logger.warning("Failed login for %s", email.lower())
        raise UnauthorizedError("Invalid email or password")
    return user
