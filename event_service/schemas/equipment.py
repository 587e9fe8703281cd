from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from shared.db.models import EquipmentCategory, EquipmentStatus
from shared.utils.data_utils import Money

EquipmentSortField = Literal["name", "category", "daily_rental_price", "created_at"]


class EquipmentCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    category: EquipmentCategory
    brand: Optional[str] = Field(None, max_length=100)
    model: Optional[str] = Field(None, max_length=100)
    serial_number: Optional[str] = Field(None, max_length=100)
    specifications: Dict[str, Any] = Field(default_factory=dict)
    daily_rental_price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    weekly_rental_price: Optional[Decimal] = Field(
        None, ge=0, max_digits=12, decimal_places=2
    )
    monthly_rental_price: Optional[Decimal] = Field(
        None, ge=0, max_digits=12, decimal_places=2
    )
    security_deposit: Optional[Decimal] = Field(
        None, ge=0, max_digits=12, decimal_places=2
    )
    status: EquipmentStatus = EquipmentStatus.AVAILABLE
    available_from: Optional[datetime] = None
    available_to: Optional[datetime] = None
    advance_booking_days: Optional[int] = Field(None, ge=0)
    dimensions: Optional[str] = Field(None, max_length=100)
    weight: Optional[float] = Field(None, ge=0)
    color: Optional[str] = Field(None, max_length=50)
    condition: Optional[str] = Field(None, max_length=20)
    images: List[str] = Field(default_factory=list)
    admin_notes: Optional[str] = None
    maintenance_notes: Optional[str] = None
    last_maintenance: Optional[datetime] = None
    next_maintenance: Optional[datetime] = None


class EquipmentUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[EquipmentCategory] = None
    brand: Optional[str] = Field(None, max_length=100)
    model: Optional[str] = Field(None, max_length=100)
    serial_number: Optional[str] = Field(None, max_length=100)
    specifications: Optional[Dict[str, Any]] = None
    daily_rental_price: Optional[Decimal] = Field(
        None, ge=0, max_digits=12, decimal_places=2
    )
    weekly_rental_price: Optional[Decimal] = Field(
        None, ge=0, max_digits=12, decimal_places=2
    )
    monthly_rental_price: Optional[Decimal] = Field(
        None, ge=0, max_digits=12, decimal_places=2
    )
    security_deposit: Optional[Decimal] = Field(
        None, ge=0, max_digits=12, decimal_places=2
    )
    status: Optional[EquipmentStatus] = None
    available_from: Optional[datetime] = None
    available_to: Optional[datetime] = None
    advance_booking_days: Optional[int] = Field(None, ge=0)
    dimensions: Optional[str] = Field(None, max_length=100)
    weight: Optional[float] = Field(None, ge=0)
    color: Optional[str] = Field(None, max_length=50)
    condition: Optional[str] = Field(None, max_length=20)
    images: Optional[List[str]] = None
    admin_notes: Optional[str] = None
    maintenance_notes: Optional[str] = None
    last_maintenance: Optional[datetime] = None
    next_maintenance: Optional[datetime] = None


class EquipmentSummary(BaseModel):
    id: str
    name: str
    category: EquipmentCategory
    status: EquipmentStatus
    daily_rental_price: Money

    model_config = ConfigDict(from_attributes=True)


class EquipmentResponse(EquipmentSummary):
    description: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    serial_number: Optional[str] = None
    specifications: Dict[str, Any] = {}
    weekly_rental_price: Optional[Money] = None
    monthly_rental_price: Optional[Money] = None
    security_deposit: Optional[Money] = None
    available_from: Optional[datetime] = None
    available_to: Optional[datetime] = None
    advance_booking_days: Optional[int] = None
    dimensions: Optional[str] = None
    weight: Optional[float] = None
    color: Optional[str] = None
    condition: Optional[str] = None
    images: List[str] = []
    admin_notes: Optional[str] = None
    maintenance_notes: Optional[str] = None
    last_maintenance: Optional[datetime] = None
    next_maintenance: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
