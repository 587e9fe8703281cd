from fastapi import APIRouter

from course_service.api.v1.endpoints import courses

course_router = APIRouter(prefix="/api/v1")

course_router.include_router(courses.router, prefix="/courses", tags=["Courses"])
