from fastapi import APIRouter

from user_service.api.v1.endpoints import (
    login,
    password,
    register,
    user_management,
    verify,
)

user_router = APIRouter(prefix="/api/v1")

user_router.include_router(verify.router, prefix="/auth", tags=["Email Verification"])
user_router.include_router(register.router, prefix="/auth", tags=["User Registration"])
user_router.include_router(login.router, prefix="/auth", tags=["User Authentication"])
user_router.include_router(
    password.router, prefix="/auth", tags=["User Password Management"]
)
user_router.include_router(
    user_management.router, prefix="/users", tags=["User Management"]
)
