"""
Database models package.

Every ORM model is imported here so that ``PlatformBase.metadata`` knows
about all tables before ``create_all`` runs.

Usage:
    from shared.db.models import Course, User
"""

from .admins import Admin
from .base import PlatformBase
from .bookings import Booking, BookingStatus
from .courses import Course
from .events import (
    CateringCategory,
    CateringService,
    Equipment,
    EquipmentCategory,
    EquipmentStatus,
    Event,
    EventCateringService,
    EventEquipmentRental,
    EventStatus,
    EventType,
    RentalStatus,
)
from .hero import HeroSection
from .marketplace import (
    ItemAvailability,
    ItemCondition,
    ItemType,
    MarketplaceItem,
)
from .media import (
    Media,
    MediaCategory,
    MediaLike,
    MediaSale,
    SaleStatus,
    Withdrawal,
    WithdrawalStatus,
)
from .users import EmailVerification, PasswordReset, User, UserType

__all__ = [
    "PlatformBase",
    # Identity
    "Admin",
    "User",
    "UserType",
    "EmailVerification",
    "PasswordReset",
    # Catalog
    "Course",
    "MarketplaceItem",
    "ItemType",
    "ItemCondition",
    "ItemAvailability",
    "HeroSection",
    # Events
    "Event",
    "EventType",
    "EventStatus",
    "CateringService",
    "CateringCategory",
    "Equipment",
    "EquipmentCategory",
    "EquipmentStatus",
    "EventCateringService",
    "EventEquipmentRental",
    "RentalStatus",
    "Booking",
    "BookingStatus",
    # Media
    "Media",
    "MediaCategory",
    "MediaLike",
    "MediaSale",
    "SaleStatus",
    "Withdrawal",
    "WithdrawalStatus",
]
