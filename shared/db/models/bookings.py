from datetime import date
from enum import Enum
from typing import Optional

from sqlalchemy import Boolean, Date, Integer, String, Text
from sqlalchemy import Enum as SQLAlchemyEnum
from sqlalchemy.orm import Mapped, mapped_column

from shared.db.models.base import PlatformBase, TimestampMixin
from shared.utils.id_generators import generate_lower_uppercase


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class Booking(TimestampMixin, PlatformBase):
    """A client's booking of a photography/videography package."""

    __tablename__ = "bookings"

    id: Mapped[str] = mapped_column(
        String(6), primary_key=True, default=generate_lower_uppercase
    )
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[str] = mapped_column(String(20), nullable=False)
    event_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    event_time: Mapped[str] = mapped_column(String(20), nullable=False)
    event_location: Mapped[str] = mapped_column(String(500), nullable=False)
    guest_count: Mapped[int] = mapped_column(Integer, nullable=False)
    event_type: Mapped[str] = mapped_column(String(100), nullable=False)
    package_type: Mapped[str] = mapped_column(
        String(100), nullable=False, index=True
    )
    package_name: Mapped[str] = mapped_column(String(255), nullable=False)
    # Kept verbatim as entered by the plan page, e.g. "NPR 45,000"
    package_price: Mapped[str] = mapped_column(String(100), nullable=False)
    special_requirements: Mapped[Optional[str]] = mapped_column(Text)
    booking_type: Mapped[Optional[str]] = mapped_column(String(50), index=True)
    business_type: Mapped[Optional[str]] = mapped_column(String(100))
    personal_type: Mapped[Optional[str]] = mapped_column(String(100))
    status: Mapped[BookingStatus] = mapped_column(
        SQLAlchemyEnum(BookingStatus, name="booking_status", native_enum=False),
        default=BookingStatus.PENDING,
        nullable=False,
    )
    admin_notes: Mapped[Optional[str]] = mapped_column(Text)
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, nullable=False
    )
