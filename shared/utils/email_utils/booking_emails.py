"""Booking email functions for Mero Tasbir."""

from datetime import date, datetime, timezone
from typing import Optional

from pydantic import EmailStr

from shared.core.config import settings
from shared.core.logging_config import get_logger
from shared.utils.email import email_sender

logger = get_logger(__name__)


def send_booking_confirmation_email(
    email: EmailStr,
    full_name: str,
    booking_id: str,
    package_name: str,
    package_price: str,
    event_date: date,
    event_time: str,
    event_location: str,
    special_requirements: Optional[str] = None,
) -> bool:
    """Acknowledge a package booking request; the studio confirms later."""
    context = {
        "full_name": full_name,
        "booking_id": booking_id,
        "package_name": package_name,
        "package_price": package_price,
        "event_date": event_date.strftime("%d %B %Y"),
        "event_time": event_time,
        "event_location": event_location,
        "special_requirements": special_requirements,
        "support_email": settings.SUPPORT_EMAIL,
        "year": str(datetime.now(tz=timezone.utc).year),
    }

    success = email_sender.send_email(
        to=email,
        subject=f"Booking received: {package_name}",
        template_file="email/booking_confirmation.html",
        context=context,
    )

    if not success:
        logger.warning(
            "Failed to send booking confirmation for %s to %s",
            booking_id,
            email,
        )

    return success
