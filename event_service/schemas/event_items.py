"""
Schemas for the rows that attach catering services and equipment
rentals to an event.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from event_service.schemas.catering import CateringServiceSummary
from event_service.schemas.equipment import EquipmentSummary
from shared.db.models import RentalStatus
from shared.utils.data_utils import Money
from shared.utils.timezone_utils import ensure_utc


def _check_rental_window(
    start: Optional[datetime], end: Optional[datetime]
) -> None:
    start, end = ensure_utc(start), ensure_utc(end)
    if start is not None and end is not None and end <= start:
        raise ValueError("rental_end_date must be after rental_start_date")


class EventCateringCreateRequest(BaseModel):
    catering_service_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)
    custom_instructions: Optional[str] = None
    special_dietary_requirements: Optional[str] = None


class EventCateringUpdateRequest(BaseModel):
    quantity: Optional[int] = Field(None, ge=1)
    custom_instructions: Optional[str] = None
    special_dietary_requirements: Optional[str] = None
    is_confirmed: Optional[bool] = None
    is_delivered: Optional[bool] = None


class EventRentalCreateRequest(BaseModel):
    equipment_id: str = Field(..., min_length=1)
    rental_start_date: datetime
    rental_end_date: datetime
    delivery_address: Optional[str] = Field(None, max_length=500)
    delivery_date: Optional[datetime] = None
    pickup_date: Optional[datetime] = None
    delivery_notes: Optional[str] = None
    pickup_notes: Optional[str] = None
    condition_before: Optional[str] = Field(None, max_length=100)
    admin_notes: Optional[str] = None

    @field_validator("rental_start_date", "rental_end_date")
    @classmethod
    def normalise_window(cls, value: datetime) -> datetime:
        # Naive values are taken as UTC
        return ensure_utc(value)

    @model_validator(mode="after")
    def validate_window(self) -> "EventRentalCreateRequest":
        _check_rental_window(self.rental_start_date, self.rental_end_date)
        return self


class EventRentalUpdateRequest(BaseModel):
    rental_start_date: Optional[datetime] = None
    rental_end_date: Optional[datetime] = None
    status: Optional[RentalStatus] = None
    is_delivered: Optional[bool] = None
    is_returned: Optional[bool] = None
    delivery_address: Optional[str] = Field(None, max_length=500)
    delivery_date: Optional[datetime] = None
    pickup_date: Optional[datetime] = None
    delivery_notes: Optional[str] = None
    pickup_notes: Optional[str] = None
    condition_before: Optional[str] = Field(None, max_length=100)
    condition_after: Optional[str] = Field(None, max_length=100)
    damage_report: Optional[str] = None
    damage_cost: Optional[Decimal] = Field(
        None, ge=0, max_digits=12, decimal_places=2
    )
    admin_notes: Optional[str] = None

    @field_validator("rental_start_date", "rental_end_date")
    @classmethod
    def normalise_window(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)

    @model_validator(mode="after")
    def validate_window(self) -> "EventRentalUpdateRequest":
        _check_rental_window(self.rental_start_date, self.rental_end_date)
        return self


class EventCateringResponse(BaseModel):
    id: str
    event_id: str
    catering_service_id: str
    quantity: int
    unit_price: Money
    total_price: Money
    custom_instructions: Optional[str] = None
    special_dietary_requirements: Optional[str] = None
    is_confirmed: bool
    is_delivered: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class EventCateringDetail(EventCateringResponse):
    catering_service: CateringServiceSummary


class EventRentalResponse(BaseModel):
    id: str
    event_id: str
    equipment_id: str
    rental_start_date: datetime
    rental_end_date: datetime
    rental_days: int
    daily_rate: Money
    total_price: Money
    security_deposit: Money
    status: RentalStatus
    is_delivered: bool
    is_returned: bool
    delivery_address: Optional[str] = None
    delivery_date: Optional[datetime] = None
    pickup_date: Optional[datetime] = None
    delivery_notes: Optional[str] = None
    pickup_notes: Optional[str] = None
    condition_before: Optional[str] = None
    condition_after: Optional[str] = None
    damage_report: Optional[str] = None
    damage_cost: Optional[Money] = None
    admin_notes: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class EventRentalDetail(EventRentalResponse):
    equipment: EquipmentSummary
