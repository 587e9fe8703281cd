"""
Password reset with single-use, hashed tokens.
"""

from typing import Optional

from fastapi import status
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shared.core.api_response import api_response
from shared.core.config import settings
from shared.core.logging_config import get_logger
from shared.core.security import hash_secret
from shared.db.models import PasswordReset, User
from shared.db.sessions.database import atomic
from shared.utils.auth import hash_password
from shared.utils.otp_and_tokens import IssuedSecret, issue_reset_token
from shared.utils.timezone_utils import ensure_utc, utc_now
from user_service.services.auth import fetch_user_by_email

logger = get_logger(__name__)


async def create_password_reset(
    db: AsyncSession, email: str
) -> Optional[tuple[User, IssuedSecret]]:
    """
    Issue a reset token when the account exists.

    Returns None for unknown addresses; callers answer identically either
    way so the endpoint cannot be used to discover accounts.
    """
    user = await fetch_user_by_email(db, email)
    if user is None:
        logger.info("Password reset requested for unknown email")
        return None

    # Older unused tokens stop working once a new one is issued
    await db.execute(
        update(PasswordReset)
        .where(PasswordReset.user_id == user.id, PasswordReset.is_used.is_(False))
        .values(is_used=True)
    )
    issued = issue_reset_token(
        user.email, expires_in_minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES
    )
    db.add(
        PasswordReset(
            user_id=user.id,
            token_hash=issued.hashed,
            expires_at=issued.expires_at,
        )
    )
    await db.commit()
    return user, issued


async def reset_password(
    db: AsyncSession, email: str, token: str, new_password: str
) -> User:
    email = email.lower()
    user = await fetch_user_by_email(db, email)
    record: Optional[PasswordReset] = None
    if user is not None:
        result = await db.execute(
            select(PasswordReset).where(
                PasswordReset.user_id == user.id,
                PasswordReset.token_hash == hash_secret(token, email),
            )
        )
        record = result.scalar_one_or_none()

    if (
        record is None
        or record.is_used
        or ensure_utc(record.expires_at) < utc_now()
    ):
        api_response(
            status_code=status.HTTP_400_BAD_REQUEST,
            message="Invalid or expired reset token",
            log_error=True,
        )

    async with atomic(db):
        user.password_hash = hash_password(new_password)
        record.is_used = True

    logger.info("Password reset completed for user %s", user.id)
    return user
