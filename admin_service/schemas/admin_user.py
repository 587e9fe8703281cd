from datetime import datetime
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
)

from shared.utils.validators import contains_xss, normalize_whitespace

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128


def validate_admin_name(value: str) -> str:
    value = normalize_whitespace(value)
    if not value:
        raise ValueError("Name cannot be empty.")
    if contains_xss(value):
        raise ValueError("Name contains potentially malicious content.")
    return value


class AdminLoginRequest(BaseModel):
    email: EmailStr = Field(..., title="Email Address")
    password: str = Field(..., min_length=1, title="Password")


class AdminResponse(BaseModel):
    id: str = Field(
        ...,
        title="Admin ID",
        description="A unique 6-character identifier for the admin.",
    )
    email: str = Field(..., title="Email Address")
    name: str = Field(..., title="Name")
    is_active: bool = Field(..., title="Active Status")
    last_login: Optional[datetime] = Field(
        None,
        title="Last Login",
        description="The date and time when the admin last logged in.",
    )
    created_at: datetime = Field(..., title="Created At")
    updated_at: datetime = Field(..., title="Updated At")

    model_config = ConfigDict(from_attributes=True)


class AdminCreateRequest(BaseModel):
    email: EmailStr = Field(..., title="Email Address")
    name: str = Field(..., min_length=2, max_length=255, title="Name")
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LENGTH,
        max_length=PASSWORD_MAX_LENGTH,
        title="Password",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return validate_admin_name(v)


class AdminUpdateRequest(BaseModel):
    """All fields optional; only the provided ones are changed."""

    email: Optional[EmailStr] = None
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    password: Optional[str] = Field(
        None, min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH
    )
    is_active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return validate_admin_name(v)
