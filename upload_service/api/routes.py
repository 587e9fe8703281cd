from fastapi import APIRouter

from upload_service.api.v1.endpoints import uploads

upload_router = APIRouter(prefix="/api/v1")

upload_router.include_router(uploads.router, prefix="/uploads", tags=["Uploads"])
