from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import JSONResponse

from hero_service.schemas.hero import (
    HeroSectionCreateRequest,
    HeroSectionResponse,
    HeroSectionUpdateRequest,
)
from hero_service.services.hero import (
    activate_hero_section,
    create_hero_section,
    delete_hero_section,
    get_active_hero_section,
    get_hero_section_or_404,
    list_hero_sections,
    update_hero_section,
)
from shared.core.api_response import api_response
from shared.db.sessions.database import get_db
from shared.dependencies.auth import CurrentAdmin
from shared.utils.exception_handlers import exception_handler

router = APIRouter()


@router.get("")
@exception_handler
async def get_hero_sections(
    active: Optional[bool] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    heroes = await list_hero_sections(db, active)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Hero sections retrieved successfully",
        data=[HeroSectionResponse.model_validate(h) for h in heroes],
    )


@router.get("/active")
@exception_handler
async def get_active(db: AsyncSession = Depends(get_db)) -> JSONResponse:
    hero = await get_active_hero_section(db)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Active hero section retrieved successfully",
        data=HeroSectionResponse.model_validate(hero),
    )


@router.get("/{hero_id}")
@exception_handler
async def get_hero_section(
    hero_id: str, db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    hero = await get_hero_section_or_404(db, hero_id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Hero section retrieved successfully",
        data=HeroSectionResponse.model_validate(hero),
    )


@router.post("", status_code=status.HTTP_201_CREATED)
@exception_handler
async def add_hero_section(
    payload: HeroSectionCreateRequest,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    hero = await create_hero_section(db, payload)
    return api_response(
        status_code=status.HTTP_201_CREATED,
        message="Hero section created successfully",
        data=HeroSectionResponse.model_validate(hero),
    )


@router.put("/{hero_id}")
@exception_handler
async def edit_hero_section(
    hero_id: str,
    payload: HeroSectionUpdateRequest,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    hero = await update_hero_section(db, hero_id, payload)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Hero section updated successfully",
        data=HeroSectionResponse.model_validate(hero),
    )


@router.delete("/{hero_id}")
@exception_handler
async def remove_hero_section(
    hero_id: str,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    await delete_hero_section(db, hero_id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Hero section deleted successfully",
        data={"id": hero_id},
    )


@router.patch("/{hero_id}/activate")
@exception_handler
async def activate(
    hero_id: str,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    hero = await activate_hero_section(db, hero_id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Hero section activated successfully",
        data=HeroSectionResponse.model_validate(hero),
    )
