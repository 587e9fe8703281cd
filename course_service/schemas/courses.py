from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shared.utils.data_utils import Money
from shared.utils.validators import clean_string_list


class LessonType(str, Enum):
    VIDEO = "video"
    READING = "reading"
    ASSIGNMENT = "assignment"
    QUIZ = "quiz"


class Lesson(BaseModel):
    id: Optional[str] = None
    title: str = Field(..., min_length=1, max_length=255)
    duration: Optional[str] = None
    type: Optional[LessonType] = None


class CurriculumModule(BaseModel):
    id: Optional[str] = None
    title: str = Field(..., min_length=1, max_length=255)
    duration: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    lessons: Optional[List[Lesson]] = None


def _non_empty_list(value: List[str], label: str) -> List[str]:
    cleaned = clean_string_list(value)
    if not cleaned:
        raise ValueError(f"At least one {label} is required")
    return cleaned


class CourseCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    instructor: str = Field(..., min_length=1, max_length=255)
    duration: str = Field(..., min_length=1, max_length=100)
    schedule: str = Field(..., min_length=1, max_length=255)
    level: str = Field(..., min_length=1, max_length=50)
    tags: List[str] = Field(..., min_length=1)
    image: Optional[str] = Field(None, max_length=500)
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    original_price: Optional[Decimal] = Field(
        None, ge=0, max_digits=12, decimal_places=2
    )
    discount: Optional[Decimal] = Field(None, ge=0, le=100)
    what_you_will_learn: List[str] = Field(..., min_length=1)
    prerequisites: List[str] = Field(..., min_length=1)
    curriculum: List[CurriculumModule] = Field(..., min_length=1)
    is_active: bool = True

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: List[str]) -> List[str]:
        return _non_empty_list(v, "tag")

    @field_validator("what_you_will_learn")
    @classmethod
    def validate_outcomes(cls, v: List[str]) -> List[str]:
        return _non_empty_list(v, "learning objective")

    @field_validator("prerequisites")
    @classmethod
    def validate_prerequisites(cls, v: List[str]) -> List[str]:
        return _non_empty_list(v, "prerequisite")


class CourseUpdateRequest(BaseModel):
    """Partial update; list fields keep their minimum of one entry."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    instructor: Optional[str] = Field(None, min_length=1, max_length=255)
    duration: Optional[str] = Field(None, min_length=1, max_length=100)
    schedule: Optional[str] = Field(None, min_length=1, max_length=255)
    level: Optional[str] = Field(None, min_length=1, max_length=50)
    tags: Optional[List[str]] = Field(None, min_length=1)
    image: Optional[str] = Field(None, max_length=500)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    original_price: Optional[Decimal] = Field(
        None, ge=0, max_digits=12, decimal_places=2
    )
    discount: Optional[Decimal] = Field(None, ge=0, le=100)
    what_you_will_learn: Optional[List[str]] = Field(None, min_length=1)
    prerequisites: Optional[List[str]] = Field(None, min_length=1)
    curriculum: Optional[List[CurriculumModule]] = Field(None, min_length=1)
    is_active: Optional[bool] = None

    @field_validator("tags", "what_you_will_learn", "prerequisites")
    @classmethod
    def validate_lists(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        return _non_empty_list(v, "entry")


class CourseResponse(BaseModel):
    id: str
    title: str
    description: str
    instructor: str
    duration: str
    schedule: Optional[str] = None
    level: str
    tags: List[str]
    image: Optional[str] = None
    price: Money
    original_price: Optional[Money] = None
    discount: Optional[Money] = None
    what_you_will_learn: List[str]
    prerequisites: List[str]
    curriculum: List[CurriculumModule]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
