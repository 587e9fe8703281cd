from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from shared.db.models import BookingStatus
from shared.utils.phone_validators import PhoneValidator
from shared.utils.validators import normalize_whitespace


class BookingCreateRequest(BaseModel):
    full_name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    phone: str = Field(..., min_length=10, max_length=20)
    event_date: date
    event_time: str = Field(..., min_length=1, max_length=20)
    event_location: str = Field(..., min_length=2, max_length=500)
    guest_count: int = Field(..., ge=1)
    event_type: str = Field(..., min_length=1, max_length=100)
    package_type: str = Field(..., min_length=1, max_length=100)
    package_name: str = Field(..., min_length=1, max_length=255)
    package_price: str = Field(..., min_length=1, max_length=100)
    special_requirements: Optional[str] = None
    booking_type: Optional[str] = Field(None, max_length=50)
    business_type: Optional[str] = Field(None, max_length=100)
    personal_type: Optional[str] = Field(None, max_length=100)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        return PhoneValidator.validate(v)

    @field_validator("full_name", "package_price")
    @classmethod
    def strip_text(cls, v: str) -> str:
        cleaned = normalize_whitespace(v)
        if not cleaned:
            raise ValueError("Field cannot be blank")
        return cleaned


class BookingUpdateRequest(BaseModel):
    status: Optional[BookingStatus] = None
    admin_notes: Optional[str] = None
    is_active: Optional[bool] = None


class BookingResponse(BaseModel):
    id: str
    full_name: str
    email: str
    phone: str
    event_date: date
    event_time: str
    event_location: str
    guest_count: int
    event_type: str
    package_type: str
    package_name: str
    package_price: str
    special_requirements: Optional[str] = None
    booking_type: Optional[str] = None
    business_type: Optional[str] = None
    personal_type: Optional[str] = None
    status: BookingStatus
    admin_notes: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class BookingStatsResponse(BaseModel):
    total: int
    pending: int
    confirmed: int
    completed: int
