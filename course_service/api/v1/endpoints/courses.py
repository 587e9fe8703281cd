from typing import List, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import JSONResponse

from course_service.schemas.courses import (
    CourseCreateRequest,
    CourseResponse,
    CourseUpdateRequest,
)
from course_service.services.courses import (
    create_course,
    delete_course,
    get_course_or_404,
    list_courses,
    list_courses_by_instructor,
    list_courses_by_level,
    search_courses,
    toggle_course_status,
    update_course,
)
from shared.core.api_response import api_response
from shared.db.sessions.database import get_db
from shared.dependencies.auth import CurrentAdmin
from shared.utils.exception_handlers import exception_handler
from upload_service.services.uploads import category_file_limit, store_many

router = APIRouter()


def _serialize(courses) -> list:
    return [CourseResponse.model_validate(c) for c in courses]


@router.get("")
@exception_handler
async def get_courses(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    is_active: Optional[bool] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    courses, pagination = await list_courses(db, page, limit, is_active)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Courses retrieved successfully",
        data={"courses": _serialize(courses), "pagination": pagination},
    )


@router.get("/search")
@exception_handler
async def search(
    q: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    courses = await search_courses(db, q)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Courses retrieved successfully",
        data=_serialize(courses),
    )


@router.get("/level/{level}")
@exception_handler
async def get_courses_by_level(
    level: str, db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    courses = await list_courses_by_level(db, level)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Courses retrieved successfully",
        data=_serialize(courses),
    )


@router.get("/instructor/{instructor}")
@exception_handler
async def get_courses_by_instructor(
    instructor: str, db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    courses = await list_courses_by_instructor(db, instructor)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Courses retrieved successfully",
        data=_serialize(courses),
    )


@router.get("/{course_id}")
@exception_handler
async def get_course(
    course_id: str, db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    course = await get_course_or_404(db, course_id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Course retrieved successfully",
        data=CourseResponse.model_validate(course),
    )


@router.post("", status_code=status.HTTP_201_CREATED)
@exception_handler
async def add_course(
    payload: CourseCreateRequest,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    course = await create_course(db, payload)
    return api_response(
        status_code=status.HTTP_201_CREATED,
        message="Course created successfully",
        data=CourseResponse.model_validate(course),
    )


@router.post("/upload-images", status_code=status.HTTP_201_CREATED)
@exception_handler
async def upload_course_images(
    _: CurrentAdmin, files: List[UploadFile] = File(...)
) -> JSONResponse:
    images = await store_many(files, "course", category_file_limit("course"))
    return api_response(
        status_code=status.HTTP_201_CREATED,
        message="Images uploaded successfully",
        data=images,
    )


@router.put("/{course_id}")
@exception_handler
async def edit_course(
    course_id: str,
    payload: CourseUpdateRequest,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    course = await update_course(db, course_id, payload)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Course updated successfully",
        data=CourseResponse.model_validate(course),
    )


@router.delete("/{course_id}")
@exception_handler
async def remove_course(
    course_id: str,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    await delete_course(db, course_id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Course deleted successfully",
        data={"id": course_id},
    )


@router.patch("/{course_id}/toggle-status")
@exception_handler
async def toggle_status(
    course_id: str,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    course = await toggle_course_status(db, course_id)
    state = "activated" if course.is_active else "deactivated"
    return api_response(
        status_code=status.HTTP_200_OK,
        message=f"Course {state} successfully",
        data=CourseResponse.model_validate(course),
    )
