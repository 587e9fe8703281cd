from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, List, Optional

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, Numeric
from sqlalchemy import Enum as SQLAlchemyEnum
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.db.models.base import PlatformBase, TimestampMixin
from shared.db.types import JSONType
from shared.utils.id_generators import generate_lower_uppercase


class EventType(str, Enum):
    WEDDING = "WEDDING"
    CORPORATE = "CORPORATE"
    BIRTHDAY = "BIRTHDAY"
    ANNIVERSARY = "ANNIVERSARY"
    CONFERENCE = "CONFERENCE"
    PARTY = "PARTY"
    OTHER = "OTHER"


class EventStatus(str, Enum):
    DRAFT = "DRAFT"
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class CateringCategory(str, Enum):
    APPETIZERS = "APPETIZERS"
    MAIN_COURSE = "MAIN_COURSE"
    DESSERTS = "DESSERTS"
    BEVERAGES = "BEVERAGES"
    SNACKS = "SNACKS"
    SPECIAL_DIETARY = "SPECIAL_DIETARY"


class EquipmentCategory(str, Enum):
    PHOTOGRAPHY = "PHOTOGRAPHY"
    VIDEOGRAPHY = "VIDEOGRAPHY"
    LIGHTING = "LIGHTING"
    AUDIO = "AUDIO"
    STAGING = "STAGING"
    DECORATION = "DECORATION"
    OTHER = "OTHER"


class EquipmentStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    RENTED = "RENTED"
    MAINTENANCE = "MAINTENANCE"
    OUT_OF_ORDER = "OUT_OF_ORDER"


class RentalStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    RENTED = "RENTED"
    RETURNED = "RETURNED"
    CANCELLED = "CANCELLED"


class Event(TimestampMixin, PlatformBase):
    __tablename__ = "events"

    id: Mapped[str] = mapped_column(
        String(6), primary_key=True, default=generate_lower_uppercase
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text)
    event_type: Mapped[EventType] = mapped_column(
        SQLAlchemyEnum(EventType, name="event_type", native_enum=False),
        nullable=False,
    )
    status: Mapped[EventStatus] = mapped_column(
        SQLAlchemyEnum(EventStatus, name="event_status", native_enum=False),
        default=EventStatus.DRAFT,
        nullable=False,
    )
    event_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    start_time: Mapped[Optional[str]] = mapped_column(String(5))
    end_time: Mapped[Optional[str]] = mapped_column(String(5))
    duration: Mapped[Optional[int]] = mapped_column(Integer)

    location: Mapped[str] = mapped_column(String(200), nullable=False)
    address: Mapped[Optional[str]] = mapped_column(String(500))
    city: Mapped[Optional[str]] = mapped_column(String(100))
    state: Mapped[Optional[str]] = mapped_column(String(100))
    country: Mapped[Optional[str]] = mapped_column(String(100))

    expected_guests: Mapped[Optional[int]] = mapped_column(Integer)
    min_guests: Mapped[Optional[int]] = mapped_column(Integer)
    max_guests: Mapped[Optional[int]] = mapped_column(Integer)

    base_price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), nullable=False
    )
    discount_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), nullable=False
    )
    total_price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), nullable=False
    )
    final_price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), nullable=False
    )

    contact_name: Mapped[str] = mapped_column(String(100), nullable=False)
    contact_email: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_phone: Mapped[Optional[str]] = mapped_column(String(20))

    special_requests: Mapped[Optional[str]] = mapped_column(Text)
    dietary_restrictions: Mapped[Optional[str]] = mapped_column(Text)
    accessibility_needs: Mapped[Optional[str]] = mapped_column(Text)
    images: Mapped[List[str]] = mapped_column(JSONType, default=list)
    videos: Mapped[List[str]] = mapped_column(JSONType, default=list)
    admin_notes: Mapped[Optional[str]] = mapped_column(Text)
    internal_notes: Mapped[Optional[str]] = mapped_column(Text)

    catering_services: Mapped[List["EventCateringService"]] = relationship(
        back_populates="event", cascade="all, delete-orphan"
    )
    equipment_rentals: Mapped[List["EventEquipmentRental"]] = relationship(
        back_populates="event", cascade="all, delete-orphan"
    )


class CateringService(TimestampMixin, PlatformBase):
    __tablename__ = "catering_services"

    id: Mapped[str] = mapped_column(
        String(6), primary_key=True, default=generate_lower_uppercase
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text)
    category: Mapped[CateringCategory] = mapped_column(
        SQLAlchemyEnum(
            CateringCategory, name="catering_category", native_enum=False
        ),
        nullable=False,
    )
    base_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    price_per_person: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2))
    min_order_quantity: Mapped[Optional[int]] = mapped_column(Integer)
    max_order_quantity: Mapped[Optional[int]] = mapped_column(Integer)
    preparation_time: Mapped[Optional[int]] = mapped_column(Integer)
    serving_style: Mapped[Optional[str]] = mapped_column(String(100))
    dietary_info: Mapped[List[str]] = mapped_column(JSONType, default=list)
    allergens: Mapped[List[str]] = mapped_column(JSONType, default=list)
    available_days: Mapped[List[str]] = mapped_column(JSONType, default=list)
    advance_booking_days: Mapped[Optional[int]] = mapped_column(Integer)
    images: Mapped[List[str]] = mapped_column(JSONType, default=list)
    admin_notes: Mapped[Optional[str]] = mapped_column(Text)
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, nullable=False
    )

    event_bookings: Mapped[List["EventCateringService"]] = relationship(
        back_populates="catering_service", cascade="all, delete-orphan"
    )


class Equipment(TimestampMixin, PlatformBase):
    __tablename__ = "equipment"

    id: Mapped[str] = mapped_column(
        String(6), primary_key=True, default=generate_lower_uppercase
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text)
    category: Mapped[EquipmentCategory] = mapped_column(
        SQLAlchemyEnum(
            EquipmentCategory, name="equipment_category", native_enum=False
        ),
        nullable=False,
    )
    brand: Mapped[Optional[str]] = mapped_column(String(100))
    model: Mapped[Optional[str]] = mapped_column(String(100))
    serial_number: Mapped[Optional[str]] = mapped_column(String(100))
    specifications: Mapped[dict[str, Any]] = mapped_column(
        JSONType, default=dict
    )
    daily_rental_price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False
    )
    weekly_rental_price: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(12, 2)
    )
    monthly_rental_price: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(12, 2)
    )
    security_deposit: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2))
    status: Mapped[EquipmentStatus] = mapped_column(
        SQLAlchemyEnum(
            EquipmentStatus, name="equipment_status", native_enum=False
        ),
        default=EquipmentStatus.AVAILABLE,
        nullable=False,
    )
    available_from: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True)
    )
    available_to: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True)
    )
    advance_booking_days: Mapped[Optional[int]] = mapped_column(Integer)
    dimensions: Mapped[Optional[str]] = mapped_column(String(100))
    weight: Mapped[Optional[float]] = mapped_column(Float)
    color: Mapped[Optional[str]] = mapped_column(String(50))
    condition: Mapped[Optional[str]] = mapped_column(String(20))
    images: Mapped[List[str]] = mapped_column(JSONType, default=list)
    admin_notes: Mapped[Optional[str]] = mapped_column(Text)
    maintenance_notes: Mapped[Optional[str]] = mapped_column(Text)
    last_maintenance: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True)
    )
    next_maintenance: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True)
    )

    rentals: Mapped[List["EventEquipmentRental"]] = relationship(
        back_populates="equipment", cascade="all, delete-orphan"
    )


class EventCateringService(TimestampMixin, PlatformBase):
    __tablename__ = "event_catering_services"

    id: Mapped[str] = mapped_column(
        String(6), primary_key=True, default=generate_lower_uppercase
    )
    event_id: Mapped[str] = mapped_column(
        ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    catering_service_id: Mapped[str] = mapped_column(
        ForeignKey("catering_services.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    total_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    custom_instructions: Mapped[Optional[str]] = mapped_column(Text)
    special_dietary_requirements: Mapped[Optional[str]] = mapped_column(Text)
    is_confirmed: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    is_delivered: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )

    event: Mapped["Event"] = relationship(back_populates="catering_services")
    catering_service: Mapped["CateringService"] = relationship(
        back_populates="event_bookings"
    )


class EventEquipmentRental(TimestampMixin, PlatformBase):
    __tablename__ = "event_equipment_rentals"

    id: Mapped[str] = mapped_column(
        String(6), primary_key=True, default=generate_lower_uppercase
    )
    event_id: Mapped[str] = mapped_column(
        ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    equipment_id: Mapped[str] = mapped_column(
        ForeignKey("equipment.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    rental_start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    rental_end_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    rental_days: Mapped[int] = mapped_column(Integer, nullable=False)
    daily_rate: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    total_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    security_deposit: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), nullable=False
    )
    status: Mapped[RentalStatus] = mapped_column(
        SQLAlchemyEnum(RentalStatus, name="rental_status", native_enum=False),
        default=RentalStatus.PENDING,
        nullable=False,
    )
    is_delivered: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    is_returned: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    delivery_address: Mapped[Optional[str]] = mapped_column(String(500))
    delivery_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True)
    )
    pickup_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True)
    )
    delivery_notes: Mapped[Optional[str]] = mapped_column(Text)
    pickup_notes: Mapped[Optional[str]] = mapped_column(Text)
    condition_before: Mapped[Optional[str]] = mapped_column(String(100))
    condition_after: Mapped[Optional[str]] = mapped_column(String(100))
    damage_report: Mapped[Optional[str]] = mapped_column(Text)
    damage_cost: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2))
    admin_notes: Mapped[Optional[str]] = mapped_column(Text)

    event: Mapped["Event"] = relationship(back_populates="equipment_rentals")
    equipment: Mapped["Equipment"] = relationship(back_populates="rentals")
