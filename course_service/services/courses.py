from typing import Any, Dict, List, Optional, Tuple

from fastapi import status
from sqlalchemy import String, cast, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from course_service.schemas.courses import (
    CourseCreateRequest,
    CourseUpdateRequest,
)
from shared.core.api_response import api_response
from shared.core.logging_config import get_logger
from shared.db.models import Course
from shared.utils.pagination import like_pattern, paginate

logger = get_logger(__name__)


def _course_values(payload: Any, exclude_unset: bool = False) -> Dict[str, Any]:
    values = payload.model_dump(
        exclude_unset=exclude_unset, exclude_none=exclude_unset, exclude={"curriculum"}
    )
    if payload.curriculum is not None:
        values["curriculum"] = [
            module.model_dump(mode="json", exclude_none=True)
            for module in payload.curriculum
        ]
    return values


async def get_course_or_404(db: AsyncSession, course_id: str) -> Course:
    course = await db.get(Course, course_id)
    if course is None:
        api_response(
            status_code=status.HTTP_404_NOT_FOUND,
            message="Course not found",
        )
    return course


async def create_course(db: AsyncSession, payload: CourseCreateRequest) -> Course:
    course = Course(**_course_values(payload))
    db.add(course)
    await db.commit()
    logger.info("Course %s created", course.id)
    return course


async def list_courses(
    db: AsyncSession, page: int, limit: int, is_active: Optional[bool] = None
) -> Tuple[List[Course], Dict[str, Any]]:
    query = select(Course).order_by(Course.created_at.desc())
    if is_active is not None:
        query = query.where(Course.is_active.is_(is_active))
    return await paginate(db, query, page, limit)


async def search_courses(db: AsyncSession, term: str) -> List[Course]:
    """Active courses whose title, description, instructor or tags mention ``term``."""
    pattern = like_pattern(term)
    result = await db.execute(
        select(Course)
        .where(
            Course.is_active.is_(True),
            or_(
                Course.title.ilike(pattern, escape="\\"),
                Course.description.ilike(pattern, escape="\\"),
                Course.instructor.ilike(pattern, escape="\\"),
                cast(Course.tags, String).ilike(pattern, escape="\\"),
            ),
        )
        .order_by(Course.created_at.desc())
    )
    return list(result.scalars().all())


async def list_courses_by_level(db: AsyncSession, level: str) -> List[Course]:
    result = await db.execute(
        select(Course)
        .where(
            Course.is_active.is_(True),
            Course.level.ilike(like_pattern(level), escape="\\"),
        )
        .order_by(Course.created_at.desc())
    )
    return list(result.scalars().all())


async def list_courses_by_instructor(
    db: AsyncSession, instructor: str
) -> List[Course]:
    result = await db.execute(
        select(Course)
        .where(
            Course.is_active.is_(True),
            Course.instructor.ilike(like_pattern(instructor), escape="\\"),
        )
        .order_by(Course.created_at.desc())
    )
    return list(result.scalars().all())


async def update_course(
    db: AsyncSession, course_id: str, payload: CourseUpdateRequest
) -> Course:
    course = await get_course_or_404(db, course_id)
    for field, value in _course_values(payload, exclude_unset=True).items():
        setattr(course, field, value)
    await db.commit()
    return course


async def delete_course(db: AsyncSession, course_id: str) -> None:
    course = await get_course_or_404(db, course_id)
    await db.delete(course)
    await db.commit()
    logger.info("Course %s deleted", course_id)


async def toggle_course_status(db: AsyncSession, course_id: str) -> Course:
    course = await get_course_or_404(db, course_id)
    course.is_active = not course.is_active
    await db.commit()
    return course
