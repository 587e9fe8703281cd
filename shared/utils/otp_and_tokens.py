import secrets
import string
from dataclasses import dataclass
from datetime import datetime, timedelta

from shared.core.security import hash_secret
from shared.utils.timezone_utils import utc_now


@dataclass(frozen=True)
class IssuedSecret:
    """A freshly generated one-time secret.

    ``plain`` goes to the recipient (email body, reset link) and is never
    persisted; ``hashed`` is what gets stored.
    """

    plain: str
    hashed: str
    expires_at: datetime


def generate_otp(length: int = 6) -> str:
    return "".join(secrets.choice(string.digits) for _ in range(length))


def issue_otp(
    scope: str, length: int = 6, expires_in_minutes: int = 10
) -> IssuedSecret:
    """
    Generate a numeric OTP bound to ``scope`` (the email address).

    Returns:
        IssuedSecret: The code, its keyed hash and its expiry
    """
    otp = generate_otp(length)
    return IssuedSecret(
        plain=otp,
        hashed=hash_secret(otp, scope),
        expires_at=utc_now() + timedelta(minutes=expires_in_minutes),
    )


def issue_reset_token(
    scope: str, expires_in_minutes: int = 60, nbytes: int = 32
) -> IssuedSecret:
    """URL-safe password reset token, hashed like OTPs."""
    token = secrets.token_urlsafe(nbytes)
    return IssuedSecret(
        plain=token,
        hashed=hash_secret(token, scope),
        expires_at=utc_now() + timedelta(minutes=expires_in_minutes),
    )
