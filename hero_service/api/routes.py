from fastapi import APIRouter

from hero_service.api.v1.endpoints import hero

hero_router = APIRouter(prefix="/api/v1")

hero_router.include_router(hero.router, prefix="/hero-sections", tags=["Hero Sections"])
