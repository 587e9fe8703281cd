from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from event_service.schemas.event_items import (
    EventCateringCreateRequest,
    EventCateringDetail,
    EventRentalCreateRequest,
    EventRentalDetail,
)
from shared.db.models import EventStatus, EventType
from shared.utils.data_utils import Money

EventSortField = Literal["title", "event_date", "created_at", "final_price"]
SortOrder = Literal["asc", "desc"]

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class EventCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    event_type: EventType
    status: EventStatus = EventStatus.DRAFT
    event_date: datetime
    start_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    end_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    duration: Optional[int] = Field(None, ge=0)
    location: str = Field(..., min_length=1, max_length=200)
    address: Optional[str] = Field(None, max_length=500)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    expected_guests: Optional[int] = Field(None, ge=0)
    min_guests: Optional[int] = Field(None, ge=0)
    max_guests: Optional[int] = Field(None, ge=0)
    base_price: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    discount_amount: Decimal = Field(
        Decimal("0"), ge=0, max_digits=12, decimal_places=2
    )
    contact_name: str = Field(..., min_length=1, max_length=100)
    contact_email: EmailStr
    contact_phone: Optional[str] = Field(None, max_length=20)
    special_requests: Optional[str] = None
    dietary_restrictions: Optional[str] = None
    accessibility_needs: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    videos: List[str] = Field(default_factory=list)
    admin_notes: Optional[str] = None
    internal_notes: Optional[str] = None
    catering_services: List[EventCateringCreateRequest] = Field(default_factory=list)
    equipment_rentals: List[EventRentalCreateRequest] = Field(default_factory=list)


class EventUpdateRequest(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    event_type: Optional[EventType] = None
    status: Optional[EventStatus] = None
    event_date: Optional[datetime] = None
    start_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    end_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    duration: Optional[int] = Field(None, ge=0)
    location: Optional[str] = Field(None, min_length=1, max_length=200)
    address: Optional[str] = Field(None, max_length=500)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    expected_guests: Optional[int] = Field(None, ge=0)
    min_guests: Optional[int] = Field(None, ge=0)
    max_guests: Optional[int] = Field(None, ge=0)
    base_price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    discount_amount: Optional[Decimal] = Field(
        None, ge=0, max_digits=12, decimal_places=2
    )
    contact_name: Optional[str] = Field(None, min_length=1, max_length=100)
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = Field(None, max_length=20)
    special_requests: Optional[str] = None
    dietary_restrictions: Optional[str] = None
    accessibility_needs: Optional[str] = None
    images: Optional[List[str]] = None
    videos: Optional[List[str]] = None
    admin_notes: Optional[str] = None
    internal_notes: Optional[str] = None


class EventResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    event_type: EventType
    status: EventStatus
    event_date: datetime
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    duration: Optional[int] = None
    location: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    expected_guests: Optional[int] = None
    min_guests: Optional[int] = None
    max_guests: Optional[int] = None
    base_price: Money
    discount_amount: Money
    total_price: Money
    final_price: Money
    contact_name: str
    contact_email: str
    contact_phone: Optional[str] = None
    special_requests: Optional[str] = None
    dietary_restrictions: Optional[str] = None
    accessibility_needs: Optional[str] = None
    images: List[str] = []
    videos: List[str] = []
    admin_notes: Optional[str] = None
    internal_notes: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class EventDetailResponse(EventResponse):
    catering_services: List[EventCateringDetail] = []
    equipment_rentals: List[EventRentalDetail] = []
