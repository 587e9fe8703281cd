from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, List, Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy import Enum as SQLAlchemyEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.constants import DEFAULT_WITHDRAWAL_METHOD
from shared.db.models.base import PlatformBase, TimestampMixin
from shared.db.types import EncryptedJSON, JSONType
from shared.utils.id_generators import generate_lower_uppercase
from shared.utils.timezone_utils import utc_now

if TYPE_CHECKING:
    from shared.db.models.users import User


class MediaCategory(str, Enum):
    HOW_IT_WORKS = "HOW_IT_WORKS"
    CLIENT_PORTFOLIO = "CLIENT_PORTFOLIO"
    GALLERY = "GALLERY"


class SaleStatus(str, Enum):
    COMPLETED = "COMPLETED"
    REFUNDED = "REFUNDED"


class WithdrawalStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    REJECTED = "REJECTED"


class Media(TimestampMixin, PlatformBase):
    __tablename__ = "media"

    id: Mapped[str] = mapped_column(
        String(6), primary_key=True, default=generate_lower_uppercase
    )
    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    original_name: Mapped[str] = mapped_column(String(255), nullable=False)
    mime_type: Mapped[str] = mapped_column(String(100), nullable=False)
    size: Mapped[int] = mapped_column(Integer, nullable=False)
    url: Mapped[str] = mapped_column(String(500), nullable=False)
    thumbnail_url: Mapped[Optional[str]] = mapped_column(String(500))
    category: Mapped[MediaCategory] = mapped_column(
        SQLAlchemyEnum(MediaCategory, name="media_category", native_enum=False),
        nullable=False,
        index=True,
    )
    client_name: Mapped[Optional[str]] = mapped_column(String(255), index=True)
    title: Mapped[Optional[str]] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text)
    tags: Mapped[List[str]] = mapped_column(JSONType, default=list)
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, nullable=False
    )
    uploaded_by: Mapped[Optional[str]] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), index=True
    )

    # Sales analytics
    price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), nullable=False
    )
    likes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    sales: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_earnings: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), nullable=False
    )

    uploader: Mapped[Optional["User"]] = relationship(back_populates="media")
    like_rows: Mapped[List["MediaLike"]] = relationship(
        back_populates="media", cascade="all, delete-orphan"
    )
    sale_rows: Mapped[List["MediaSale"]] = relationship(
        back_populates="media", cascade="all, delete-orphan"
    )


class MediaLike(PlatformBase):
    __tablename__ = "media_likes"
    __table_args__ = (UniqueConstraint("media_id", "user_id"),)

    id: Mapped[str] = mapped_column(
        String(6), primary_key=True, default=generate_lower_uppercase
    )
    media_id: Mapped[str] = mapped_column(
        ForeignKey("media.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )

    media: Mapped["Media"] = relationship(back_populates="like_rows")


class MediaSale(PlatformBase):
    __tablename__ = "media_sales"

    id: Mapped[str] = mapped_column(
        String(6), primary_key=True, default=generate_lower_uppercase
    )
    media_id: Mapped[str] = mapped_column(
        ForeignKey("media.id", ondelete="CASCADE"), nullable=False, index=True
    )
    buyer_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    # Owner at the time of sale; earnings are aggregated on this column
    seller_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), index=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    status: Mapped[SaleStatus] = mapped_column(
        SQLAlchemyEnum(SaleStatus, name="sale_status", native_enum=False),
        default=SaleStatus.COMPLETED,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )

    media: Mapped["Media"] = relationship(back_populates="sale_rows")


class Withdrawal(TimestampMixin, PlatformBase):
    __tablename__ = "withdrawals"

    id: Mapped[str] = mapped_column(
        String(6), primary_key=True, default=generate_lower_uppercase
    )
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    status: Mapped[WithdrawalStatus] = mapped_column(
        SQLAlchemyEnum(
            WithdrawalStatus, name="withdrawal_status", native_enum=False
        ),
        default=WithdrawalStatus.PENDING,
        nullable=False,
    )
    method: Mapped[str] = mapped_column(
        String(50), default=DEFAULT_WITHDRAWAL_METHOD, nullable=False
    )
    # Bank details are encrypted at rest
    account_details: Mapped[Optional[dict[str, Any]]] = mapped_column(
        EncryptedJSON
    )
    notes: Mapped[Optional[str]] = mapped_column(Text)
    processed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True)
    )

    user: Mapped["User"] = relationship(back_populates="withdrawals")
