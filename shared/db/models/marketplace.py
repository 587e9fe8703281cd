from decimal import Decimal
from enum import Enum
from typing import Any, List, Optional

from sqlalchemy import Boolean, Float, Integer, Numeric, String, Text
from sqlalchemy import Enum as SQLAlchemyEnum
from sqlalchemy.orm import Mapped, mapped_column

from shared.db.models.base import PlatformBase, TimestampMixin
from shared.db.types import JSONType
from shared.utils.id_generators import generate_lower_uppercase


class ItemType(str, Enum):
    RENTAL = "rental"
    SALE = "sale"


class ItemCondition(str, Enum):
    NEW = "new"
    LIKE_NEW = "like_new"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class ItemAvailability(str, Enum):
    IN_STOCK = "in_stock"
    OUT_OF_STOCK = "out_of_stock"
    LIMITED = "limited"


class MarketplaceItem(TimestampMixin, PlatformBase):
    __tablename__ = "marketplace_items"

    id: Mapped[str] = mapped_column(
        String(6), primary_key=True, default=generate_lower_uppercase
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(
        String(100), nullable=False, index=True
    )
    subcategory: Mapped[Optional[str]] = mapped_column(String(100))
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    original_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2))
    discount: Mapped[Optional[Decimal]] = mapped_column(Numeric(5, 2))
    currency: Mapped[str] = mapped_column(String(10), default="NPR")
    images: Mapped[List[str]] = mapped_column(JSONType, default=list)
    tags: Mapped[List[str]] = mapped_column(JSONType, default=list)
    specifications: Mapped[dict[str, Any]] = mapped_column(
        JSONType, default=dict
    )
    item_type: Mapped[ItemType] = mapped_column(
        SQLAlchemyEnum(ItemType, name="item_type", native_enum=False),
        nullable=False,
    )
    condition: Mapped[ItemCondition] = mapped_column(
        SQLAlchemyEnum(ItemCondition, name="item_condition", native_enum=False),
        nullable=False,
    )
    availability: Mapped[ItemAvailability] = mapped_column(
        SQLAlchemyEnum(
            ItemAvailability, name="item_availability", native_enum=False
        ),
        default=ItemAvailability.IN_STOCK,
        nullable=False,
    )
    quantity: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    rating: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    review_count: Mapped[int] = mapped_column(
        Integer, default=0, nullable=False
    )
    # {id, name, email, rating?, review_count?}
    seller: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False)
    seller_id: Mapped[str] = mapped_column(
        String(100), nullable=False, index=True
    )
    seller_rating: Mapped[float] = mapped_column(
        Float, default=0.0, nullable=False
    )
    # {city, country, coordinates?: {lat, lng}}
    location: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, nullable=False
    )
    is_featured: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    likes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
