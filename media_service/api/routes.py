from fastapi import APIRouter

from media_service.api.v1.endpoints import analytics, media

media_router = APIRouter(prefix="/api/v1")

media_router.include_router(media.router, prefix="/media", tags=["Media"])
media_router.include_router(analytics.router, prefix="/analytics", tags=["Analytics"])
