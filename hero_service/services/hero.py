from typing import List, Optional

from fastapi import status
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import JSONResponse

from hero_service.schemas.hero import (
    HeroSectionCreateRequest,
    HeroSectionUpdateRequest,
)
from shared.core.api_response import api_response
from shared.core.logging_config import get_logger
from shared.db.models import HeroSection
from shared.db.sessions.database import atomic

logger = get_logger(__name__)


def hero_not_found_response() -> JSONResponse:
    return api_response(
        status_code=status.HTTP_404_NOT_FOUND,
        message="Hero section not found",
        log_error=True,
    )


def no_active_hero_response() -> JSONResponse:
    return api_response(
        status_code=status.HTTP_404_NOT_FOUND,
        message="No active hero section found",
    )


async def create_hero_section(
    db: AsyncSession, payload: HeroSectionCreateRequest
) -> HeroSection:
    # Omitted cta_text and rotating_texts fall back to the column defaults
    hero = HeroSection(**payload.model_dump(exclude_none=True))
    db.add(hero)
    await db.commit()
    logger.info("Hero section %s created", hero.id)
    return hero


async def list_hero_sections(
    db: AsyncSession, active: Optional[bool] = None
) -> List[HeroSection]:
    query = select(HeroSection).order_by(HeroSection.created_at.desc())
    if active:
        query = query.where(HeroSection.is_active.is_(True))
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_hero_section_or_404(db: AsyncSession, hero_id: str) -> HeroSection:
    hero = await db.get(HeroSection, hero_id)
    if hero is None:
        hero_not_found_response()
    return hero


async def get_active_hero_section(db: AsyncSession) -> HeroSection:
    """The active section updated most recently is the one shown on the site."""
    result = await db.execute(
        select(HeroSection)
        .where(HeroSection.is_active.is_(True))
        .order_by(HeroSection.updated_at.desc(), HeroSection.created_at.desc())
        .limit(1)
    )
    hero = result.scalar_one_or_none()
    if hero is None:
        no_active_hero_response()
    return hero


async def update_hero_section(
    db: AsyncSession, hero_id: str, payload: HeroSectionUpdateRequest
) -> HeroSection:
    hero = await get_hero_section_or_404(db, hero_id)
    for field, value in payload.model_dump(
        exclude_unset=True, exclude_none=True
    ).items():
        setattr(hero, field, value)
    await db.commit()
    return hero


async def delete_hero_section(db: AsyncSession, hero_id: str) -> None:
    hero = await get_hero_section_or_404(db, hero_id)
    await db.delete(hero)
    await db.commit()
    logger.info("Hero section %s deleted", hero_id)


async def activate_hero_section(db: AsyncSession, hero_id: str) -> HeroSection:
    """Make ``hero_id`` the only active section."""
    hero = await get_hero_section_or_404(db, hero_id)
    async with atomic(db):
        await db.execute(
            update(HeroSection)
            .where(HeroSection.is_active.is_(True), HeroSection.id != hero_id)
            .values(is_active=False)
        )
        hero.is_active = True
    logger.info("Hero section %s activated", hero_id)
    return hero
