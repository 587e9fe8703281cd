from typing import List, Optional

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from shared.constants import DEFAULT_CTA_TEXT, DEFAULT_ROTATING_TEXTS
from shared.db.models.base import PlatformBase, TimestampMixin
from shared.db.types import JSONType
from shared.utils.id_generators import generate_lower_uppercase


class HeroSection(TimestampMixin, PlatformBase):
    __tablename__ = "hero_sections"

    id: Mapped[str] = mapped_column(
        String(6), primary_key=True, default=generate_lower_uppercase
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    subtitle: Mapped[str] = mapped_column(String(300), nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    background_image: Mapped[Optional[str]] = mapped_column(String(500))
    cta_text: Mapped[str] = mapped_column(
        String(100), default=DEFAULT_CTA_TEXT, nullable=False
    )
    rotating_texts: Mapped[List[str]] = mapped_column(
        JSONType, default=lambda: list(DEFAULT_ROTATING_TEXTS)
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, nullable=False
    )
