from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from shared.db.models import CateringCategory
from shared.utils.data_utils import Money

CateringSortField = Literal["name", "category", "base_price", "created_at"]


class CateringServiceCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    category: CateringCategory
    base_price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    price_per_person: Optional[Decimal] = Field(
        None, ge=0, max_digits=12, decimal_places=2
    )
    min_order_quantity: Optional[int] = Field(None, ge=1)
    max_order_quantity: Optional[int] = Field(None, ge=1)
    preparation_time: Optional[int] = Field(None, ge=0)
    serving_style: Optional[str] = Field(None, max_length=100)
    dietary_info: List[str] = Field(default_factory=list)
    allergens: List[str] = Field(default_factory=list)
    available_days: List[str] = Field(default_factory=list)
    advance_booking_days: Optional[int] = Field(None, ge=0)
    images: List[str] = Field(default_factory=list)
    admin_notes: Optional[str] = None
    is_active: bool = True


class CateringServiceUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[CateringCategory] = None
    base_price: Optional[Decimal] = Field(
        None, ge=0, max_digits=12, decimal_places=2
    )
    price_per_person: Optional[Decimal] = Field(
        None, ge=0, max_digits=12, decimal_places=2
    )
    min_order_quantity: Optional[int] = Field(None, ge=1)
    max_order_quantity: Optional[int] = Field(None, ge=1)
    preparation_time: Optional[int] = Field(None, ge=0)
    serving_style: Optional[str] = Field(None, max_length=100)
    dietary_info: Optional[List[str]] = None
    allergens: Optional[List[str]] = None
    available_days: Optional[List[str]] = None
    advance_booking_days: Optional[int] = Field(None, ge=0)
    images: Optional[List[str]] = None
    admin_notes: Optional[str] = None
    is_active: Optional[bool] = None


class CateringServiceSummary(BaseModel):
    id: str
    name: str
    category: CateringCategory
    base_price: Money
    price_per_person: Optional[Money] = None

    model_config = ConfigDict(from_attributes=True)


class CateringServiceResponse(CateringServiceSummary):
    description: Optional[str] = None
    min_order_quantity: Optional[int] = None
    max_order_quantity: Optional[int] = None
    preparation_time: Optional[int] = None
    serving_style: Optional[str] = None
    dietary_info: List[str] = []
    allergens: List[str] = []
    available_days: List[str] = []
    advance_booking_days: Optional[int] = None
    images: List[str] = []
    admin_notes: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
