"""
Email verification with one-time codes.

Only the keyed hash of each code is stored. A code is good for
``OTP_EXPIRE_MINUTES`` and can be used once; sending a new code
invalidates every earlier unused one for the same address.
"""

from datetime import timedelta
from typing import Optional

from fastapi import status
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shared.core.api_response import api_response
from shared.core.config import settings
from shared.core.exceptions import ConflictError
from shared.core.logging_config import get_logger
from shared.core.security import verify_secret
from shared.db.models import EmailVerification, User
from shared.utils.otp_and_tokens import IssuedSecret, issue_otp
from shared.utils.timezone_utils import ensure_utc, utc_now

logger = get_logger(__name__)

INVALID_OTP_MESSAGE = "Invalid or expired OTP"


async def ensure_email_available(db: AsyncSession, email: str) -> None:
    result = await db.execute(User.by_email_query(email))
    if result.scalar_one_or_none() is not None:
        raise ConflictError("User with this email already exists")


async def create_email_otp(db: AsyncSession, email: str) -> IssuedSecret:
    """
    Issue a fresh code for ``email`` and persist its hash.

    Returns:
        IssuedSecret: ``plain`` must be emailed and then discarded.
    """
    email = email.lower()
    await ensure_email_available(db, email)

    await db.execute(
        update(EmailVerification)
        .where(
            EmailVerification.email == email,
            EmailVerification.is_used.is_(False),
        )
        .values(is_used=True)
    )

    issued = issue_otp(
        email,
        length=settings.OTP_LENGTH,
        expires_in_minutes=settings.OTP_EXPIRE_MINUTES,
    )
    db.add(
        EmailVerification(
            email=email,
            otp_hash=issued.hashed,
            expires_at=issued.expires_at,
        )
    )
    await db.commit()
    logger.info("Verification code issued for %s", email)
    return issued


async def verify_email_otp(db: AsyncSession, email: str, otp: str) -> None:
    """Mark the newest unused code as used, or fail with a single 400."""
    email = email.lower()
    result = await db.execute(
        select(EmailVerification)
        .where(
            EmailVerification.email == email,
            EmailVerification.is_used.is_(False),
        )
        .order_by(EmailVerification.created_at.desc())
        .limit(1)
    )
    record: Optional[EmailVerification] = result.scalar_one_or_none()

    if (
        record is None
        or ensure_utc(record.expires_at) < utc_now()
        or not verify_secret(otp, email, record.otp_hash)
    ):
        logger.warning("OTP verification failed for %s", email)
        api_response(
            status_code=status.HTTP_400_BAD_REQUEST,
            message=INVALID_OTP_MESSAGE,
            log_error=True,
        )

    record.is_used = True
    record.used_at = utc_now()
    await db.commit()


async def has_recent_verification(db: AsyncSession, email: str) -> bool:
    """True when a code for ``email`` was verified within the window."""
    window_start = utc_now() - timedelta(
        minutes=settings.OTP_VERIFIED_WINDOW_MINUTES
    )
    result = await db.execute(
        select(EmailVerification.id)
        .where(
            EmailVerification.email == email.lower(),
            EmailVerification.used_at.is_not(None),
            EmailVerification.used_at >= window_start,
        )
        .limit(1)
    )
    return result.scalar_one_or_none() is not None
