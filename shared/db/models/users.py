from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, String, select
from sqlalchemy import Enum as SQLAlchemyEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql.selectable import Select

from shared.db.models.base import PlatformBase, TimestampMixin
from shared.utils.id_generators import generate_lower_uppercase
from shared.utils.timezone_utils import utc_now

if TYPE_CHECKING:
    from shared.db.models.media import Media, Withdrawal


class UserType(str, Enum):
    USER = "user"
    FREELANCER = "freelancer"


class User(TimestampMixin, PlatformBase):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(6), primary_key=True, default=generate_lower_uppercase
    )
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True
    )
    username: Mapped[str] = mapped_column(
        String(100), nullable=False, unique=True, index=True
    )
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[Optional[str]] = mapped_column(String(500))
    password_hash: Mapped[Optional[str]] = mapped_column(String(255))
    user_type: Mapped[UserType] = mapped_column(
        SQLAlchemyEnum(UserType, name="user_type", native_enum=False),
        default=UserType.USER,
        nullable=False,
    )
    avatar: Mapped[Optional[str]] = mapped_column(String(500))
    # "credentials" for password sign-up, otherwise the OAuth provider name
    provider: Mapped[str] = mapped_column(
        String(50), default="credentials", nullable=False
    )
    is_verified: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )

    password_resets: Mapped[List["PasswordReset"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )
    media: Mapped[List["Media"]] = relationship(back_populates="uploader")
    withdrawals: Mapped[List["Withdrawal"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )

    @classmethod
    def by_email_query(cls, email: str) -> Select:
        return select(cls).where(cls.email == email.lower().strip())


class EmailVerification(PlatformBase):
    """One row per OTP sent; only the keyed hash of the code is stored."""

    __tablename__ = "email_verifications"

    id: Mapped[str] = mapped_column(
        String(6), primary_key=True, default=generate_lower_uppercase
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    otp_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    is_used: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    used_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )


class PasswordReset(PlatformBase):
    __tablename__ = "password_resets"

    id: Mapped[str] = mapped_column(
        String(6), primary_key=True, default=generate_lower_uppercase
    )
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    token_hash: Mapped[str] = mapped_column(
        String(64), nullable=False, index=True
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    is_used: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )

    user: Mapped["User"] = relationship(back_populates="password_resets")
