from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from shared.db.models import MediaCategory, SaleStatus, WithdrawalStatus
from shared.utils.data_utils import Money
from shared.utils.validators import clean_string_list, normalize_whitespace


class MediaCreateRequest(BaseModel):
    """Registers a file that is already stored (e.g. by the upload service)."""

    filename: str = Field(..., min_length=1, max_length=255)
    original_name: str = Field(..., min_length=1, max_length=255)
    mime_type: str = Field(..., min_length=1, max_length=100)
    size: int = Field(..., gt=0)
    url: str = Field(..., min_length=1, max_length=500)
    thumbnail_url: Optional[str] = Field(None, max_length=500)
    category: MediaCategory
    client_name: Optional[str] = Field(None, max_length=255)
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    tags: List[str] = Field(default_factory=list)
    price: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: List[str]) -> List[str]:
        return clean_string_list(v)

    @field_validator("client_name")
    @classmethod
    def clean_client_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return normalize_whitespace(v) or None

    @model_validator(mode="after")
    def require_client_for_portfolio(self) -> "MediaCreateRequest":
        if self.category == MediaCategory.CLIENT_PORTFOLIO and not self.client_name:
            raise ValueError("client_name is required for client portfolio media")
        return self


class MediaUpdateRequest(BaseModel):
    category: Optional[MediaCategory] = None
    client_name: Optional[str] = Field(None, max_length=255)
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    tags: Optional[List[str]] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    is_active: Optional[bool] = None

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return None if v is None else clean_string_list(v)


class MediaResponse(BaseModel):
    id: str
    filename: str
    original_name: str
    mime_type: str
    size: int
    url: str
    thumbnail_url: Optional[str] = None
    category: MediaCategory
    client_name: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    tags: List[str] = []
    is_active: bool
    uploaded_by: Optional[str] = None
    price: Money
    likes: int
    views: int
    sales: int
    total_earnings: Money
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class MediaStatsResponse(BaseModel):
    total: int
    by_category: Dict[str, int]
    recent: List[MediaResponse]


class MediaSaleResponse(BaseModel):
    id: str
    media_id: str
    buyer_id: str
    seller_id: Optional[str] = None
    amount: Money
    status: SaleStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MediaLikeResponse(BaseModel):
    id: str
    media_id: str
    user_id: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class WithdrawalRequest(BaseModel):
    # Positivity is checked by the service so the error is a plain 400
    amount: Decimal = Field(..., max_digits=12, decimal_places=2)
    account_details: Dict[str, Any] = Field(default_factory=dict)
    notes: Optional[str] = Field(None, max_length=1000)


class WithdrawalResponse(BaseModel):
    """Account details are never echoed back."""

    id: str
    user_id: str
    amount: Money
    status: WithdrawalStatus
    method: str
    notes: Optional[str] = None
    processed_at: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
