from fastapi import APIRouter

from marketplace_service.api.v1.endpoints import marketplace

marketplace_router = APIRouter(prefix="/api/v1")

marketplace_router.include_router(
    marketplace.router, prefix="/marketplace", tags=["Marketplace"]
)
