from fastapi import status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.core.api_response import api_response
from shared.core.logging_config import get_logger
from shared.db.models import User, UserType
from shared.utils.id_generators import generate_lower_uppercase
from user_service.schemas.register import UserUpsertRequest
from user_service.services.auth import fetch_user_by_email

logger = get_logger(__name__)


async def get_user_by_email_or_404(db: AsyncSession, email: str) -> User:
    user = await fetch_user_by_email(db, email)
    if user is None:
        api_response(
            status_code=status.HTTP_404_NOT_FOUND,
            message="User not found",
        )
    return user


async def _available_username(db: AsyncSession, base: str) -> str:
    """``base`` if free, otherwise ``base`` plus a short random suffix."""
    candidate = base
    while True:
        result = await db.execute(
            select(User.id).where(User.username == candidate)
        )
        if result.scalar_one_or_none() is None:
            return candidate
        candidate = f"{base}-{generate_lower_uppercase(4).lower()}"


async def create_or_update_user(
    db: AsyncSession, payload: UserUpsertRequest
) -> tuple[User, bool]:
    """
    Upsert an OAuth user by email.

    OAuth accounts have no password and count as verified.

    Returns:
        (user, created)
    """
    email = payload.email.lower()
    user = await fetch_user_by_email(db, email)
    created = user is None

    if user is None:
        user = User(
            email=email,
            username=await _available_username(db, email.split("@")[0].lower()),
            full_name=payload.name,
            user_type=UserType.USER,
            provider=payload.provider or "oauth",
            avatar=payload.avatar,
            is_verified=True,
        )
        db.add(user)
    else:
        user.full_name = payload.name
        if payload.avatar:
            user.avatar = payload.avatar
        if payload.provider:
            user.provider = payload.provider

    await db.commit()
    logger.info("User %s %s", user.id, "created" if created else "updated")
    return user, created
