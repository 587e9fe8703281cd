"""Email utilities package for Mero Tasbir."""

from .booking_emails import send_booking_confirmation_email
from .user_emails import (
    send_password_reset_email,
    send_verification_email,
    send_welcome_email,
)

__all__ = [
    # User email functions
    "send_verification_email",
    "send_welcome_email",
    "send_password_reset_email",
    # Booking email functions
    "send_booking_confirmation_email",
]
