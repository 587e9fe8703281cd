from decimal import Decimal
from typing import Any, List, Optional

from sqlalchemy import Boolean, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shared.db.models.base import PlatformBase, TimestampMixin
from shared.db.types import JSONType
from shared.utils.id_generators import generate_lower_uppercase


class Course(TimestampMixin, PlatformBase):
    __tablename__ = "courses"

    id: Mapped[str] = mapped_column(
        String(6), primary_key=True, default=generate_lower_uppercase
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    instructor: Mapped[str] = mapped_column(String(255), nullable=False)
    duration: Mapped[str] = mapped_column(String(100), nullable=False)
    schedule: Mapped[Optional[str]] = mapped_column(String(255))
    level: Mapped[str] = mapped_column(String(50), nullable=False)
    tags: Mapped[List[str]] = mapped_column(JSONType, default=list)
    image: Mapped[Optional[str]] = mapped_column(String(500))
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    original_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2))
    discount: Mapped[Optional[Decimal]] = mapped_column(Numeric(5, 2))
    what_you_will_learn: Mapped[List[str]] = mapped_column(
        JSONType, default=list
    )
    prerequisites: Mapped[List[str]] = mapped_column(JSONType, default=list)
    # [{title, duration, description?, lessons?: [{title, duration?, type}]}]
    curriculum: Mapped[List[dict[str, Any]]] = mapped_column(
        JSONType, default=list
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, nullable=False
    )
