from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shared.utils.validators import clean_string_list


def _validate_rotating_texts(value: Optional[List[str]]) -> Optional[List[str]]:
    if value is None:
        return value
    if any(not text.strip() for text in value):
        raise ValueError("Rotating text cannot be empty")
    return clean_string_list(value)


class HeroSectionCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    subtitle: str = Field(..., min_length=1, max_length=300)
    description: str = Field(..., min_length=1, max_length=500)
    background_image: Optional[str] = Field(None, max_length=500)
    cta_text: Optional[str] = Field(None, min_length=1, max_length=50)
    rotating_texts: Optional[List[str]] = None

    @field_validator("rotating_texts")
    @classmethod
    def validate_rotating_texts(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _validate_rotating_texts(v)


class HeroSectionUpdateRequest(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    subtitle: Optional[str] = Field(None, min_length=1, max_length=300)
    description: Optional[str] = Field(None, min_length=1, max_length=500)
    background_image: Optional[str] = Field(None, max_length=500)
    cta_text: Optional[str] = Field(None, min_length=1, max_length=50)
    rotating_texts: Optional[List[str]] = None
    is_active: Optional[bool] = None

    @field_validator("rotating_texts")
    @classmethod
    def validate_rotating_texts(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _validate_rotating_texts(v)


class HeroSectionResponse(BaseModel):
    id: str
    title: str
    subtitle: str
    description: str
    background_image: Optional[str] = None
    cta_text: str
    rotating_texts: List[str]
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
