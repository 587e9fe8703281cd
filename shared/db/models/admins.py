from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, String, select
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql.selectable import Select

from shared.db.models.base import PlatformBase, TimestampMixin
from shared.utils.id_generators import generate_lower_uppercase


class Admin(TimestampMixin, PlatformBase):
    __tablename__ = "admins"

    id: Mapped[str] = mapped_column(
        String(6), primary_key=True, default=generate_lower_uppercase
    )
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, nullable=False
    )
    last_login: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), default=None
    )

    @classmethod
    def by_email_query(cls, email: str) -> Select:
        return select(cls).where(cls.email == email.lower().strip())
