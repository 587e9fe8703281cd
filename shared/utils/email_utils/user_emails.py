"""User email functions for Mero Tasbir."""

from datetime import datetime, timezone
from urllib.parse import quote

from pydantic import EmailStr

from shared.core.config import settings
from shared.core.logging_config import get_logger
from shared.utils.email import email_sender

logger = get_logger(__name__)


def _year() -> str:
    return str(datetime.now(tz=timezone.utc).year)


def send_verification_email(
    email: EmailStr,
    otp: str,
    expires_in_minutes: int = 10,
) -> bool:
    """Send the one-time verification code used before registration."""
    context = {
        "email": email,
        "otp": otp,
        "expires_in_minutes": expires_in_minutes,
        "support_email": settings.SUPPORT_EMAIL,
        "year": _year(),
    }

    success = email_sender.send_email(
        to=email,
        subject="Your Mero Tasbir verification code",
        template_file="email/otp_verification.html",
        context=context,
    )

    if not success:
        logger.warning("Failed to send verification email to %s", email)

    return success


def send_welcome_email(email: EmailStr, full_name: str) -> bool:
    context = {
        "full_name": full_name,
        "email": email,
        "welcome_url": settings.FRONTEND_URL,
        "year": _year(),
    }

    success = email_sender.send_email(
        to=email,
        subject="Welcome to Mero Tasbir",
        template_file="email/welcome.html",
        context=context,
    )

    if not success:
        logger.warning("Failed to send welcome email to %s", email)

    return success


def send_password_reset_email(
    email: EmailStr,
    full_name: str,
    reset_token: str,
    expiry_minutes: int = 60,
) -> bool:
    """
    Send a password reset link.

    The link carries the plaintext token; only its hash is stored.
    """
    encoded_email = quote(email, safe="")
    reset_link = (
        f"{settings.FRONTEND_URL}/reset-password"
        f"?email={encoded_email}&token={reset_token}"
    )
    context = {
        "full_name": full_name,
        "email": email,
        "reset_link": reset_link,
        "request_time": datetime.now(tz=timezone.utc).strftime(
            "%Y-%m-%d %H:%M:%S UTC"
        ),
        "expiry_minutes": expiry_minutes,
        "year": _year(),
    }

    success = email_sender.send_email(
        to=email,
        subject="Reset your Mero Tasbir password",
        template_file="email/password_reset.html",
        context=context,
    )

    if not success:
        logger.warning("Failed to send password reset email to %s", email)

    return success
