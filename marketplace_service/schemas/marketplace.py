from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from shared.db.models import ItemAvailability, ItemCondition, ItemType
from shared.utils.data_utils import Money
from shared.utils.validators import clean_string_list

MarketplaceSort = Literal[
    "price_asc", "price_desc", "newest", "oldest", "popular", "rating"
]


class SellerInfo(BaseModel):
    id: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    rating: Optional[float] = Field(None, ge=0, le=5)
    review_count: Optional[int] = Field(None, ge=0)


class Coordinates(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class LocationInfo(BaseModel):
    city: str = Field(..., min_length=1, max_length=100)
    country: str = Field(..., min_length=1, max_length=100)
    coordinates: Optional[Coordinates] = None


class MarketplaceItemCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1, max_length=100)
    subcategory: Optional[str] = Field(None, max_length=100)
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    original_price: Optional[Decimal] = Field(
        None, ge=0, max_digits=12, decimal_places=2
    )
    discount: Optional[Decimal] = Field(None, ge=0, le=100)
    currency: str = Field("NPR", min_length=3, max_length=10)
    images: List[str] = Field(..., min_length=1)
    tags: List[str] = Field(default_factory=list)
    specifications: Dict[str, Any] = Field(default_factory=dict)
    item_type: ItemType = ItemType.SALE
    condition: ItemCondition = ItemCondition.NEW
    availability: ItemAvailability = ItemAvailability.IN_STOCK
    quantity: int = Field(1, ge=0)
    rating: float = Field(0.0, ge=0, le=5)
    review_count: int = Field(0, ge=0)
    seller: SellerInfo
    location: LocationInfo
    is_active: bool = True
    is_featured: bool = False

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: List[str]) -> List[str]:
        return clean_string_list(v)


class MarketplaceItemUpdateRequest(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    subcategory: Optional[str] = Field(None, max_length=100)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    original_price: Optional[Decimal] = Field(
        None, ge=0, max_digits=12, decimal_places=2
    )
    discount: Optional[Decimal] = Field(None, ge=0, le=100)
    currency: Optional[str] = Field(None, min_length=3, max_length=10)
    images: Optional[List[str]] = Field(None, min_length=1)
    tags: Optional[List[str]] = None
    specifications: Optional[Dict[str, Any]] = None
    item_type: Optional[ItemType] = None
    condition: Optional[ItemCondition] = None
    availability: Optional[ItemAvailability] = None
    quantity: Optional[int] = Field(None, ge=0)
    rating: Optional[float] = Field(None, ge=0, le=5)
    review_count: Optional[int] = Field(None, ge=0)
    seller: Optional[SellerInfo] = None
    location: Optional[LocationInfo] = None
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None


class MarketplaceItemResponse(BaseModel):
    id: str
    title: str
    description: str
    category: str
    subcategory: Optional[str] = None
    price: Money
    original_price: Optional[Money] = None
    discount: Optional[Money] = None
    currency: str
    images: List[str]
    tags: List[str] = []
    specifications: Dict[str, Any] = {}
    item_type: ItemType
    condition: ItemCondition
    availability: ItemAvailability
    quantity: int
    rating: float
    review_count: int
    seller: Dict[str, Any]
    seller_id: str
    location: Dict[str, Any]
    city: str
    is_active: bool
    is_featured: bool
    views: int
    likes: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class MarketplaceStatsResponse(BaseModel):
    total_items: int
    total_categories: int
    total_sellers: int
    average_price: Money
    featured_items: int
    active_items: int
