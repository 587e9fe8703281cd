from fastapi import APIRouter

from admin_service.api.v1.endpoints import login, user_management

admin_router = APIRouter(prefix="/api/v1")

admin_router.include_router(
    login.router, prefix="/admin", tags=["Admin Authentication"]
)
admin_router.include_router(
    user_management.router, prefix="/admin", tags=["Admin Management"]
)
