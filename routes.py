from fastapi import APIRouter

from admin_service.api.routes import admin_router
from course_service.api.routes import course_router
from event_service.api.routes import event_router
from hero_service.api.routes import hero_router
from marketplace_service.api.routes import marketplace_router
from media_service.api.routes import media_router
from upload_service.api.routes import upload_router
from user_service.api.routes import user_router

api_router = APIRouter()

api_router.include_router(admin_router)
api_router.include_router(user_router)
api_router.include_router(course_router)
api_router.include_router(event_router)
api_router.include_router(marketplace_router)
api_router.include_router(media_router)
api_router.include_router(hero_router)
api_router.include_router(upload_router)
