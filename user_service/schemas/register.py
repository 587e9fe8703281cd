import re
from typing import Optional

from pydantic import (
    BaseModel,
    EmailStr,
    Field,
    field_validator,
    model_validator,
)

from shared.db.models import UserType
from shared.utils.validators import (
    contains_xss,
    is_valid_username,
    normalize_whitespace,
)

OTP_REGEX = re.compile(r"^\d{6}$")
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128


class EmailRequest(BaseModel):
    """Body of send-verification, resend-otp and forgot-password."""

    email: EmailStr = Field(
        ...,
        title="Email Address",
        description="Valid email address for the user.",
    )


class VerifyOtpRequest(BaseModel):
    email: EmailStr = Field(..., title="Email Address")
    otp: str = Field(
        ...,
        min_length=6,
        max_length=6,
        title="One-time code",
        description="The 6 digit code sent by email.",
    )

    @field_validator("otp")
    @classmethod
    def validate_otp(cls, v: str) -> str:
        v = v.strip()
        if not OTP_REGEX.match(v):
            raise ValueError("OTP must be 6 digits")
        return v


class UserRegisterRequest(BaseModel):
    email: EmailStr = Field(
        ...,
        title="Email Address",
        description="Must have been verified with an OTP first.",
    )
    username: str = Field(
        ...,
        min_length=3,
        max_length=100,
        title="Username",
        description="Letters, numbers, dots, hyphens and underscores.",
    )
    full_name: str = Field(..., min_length=2, max_length=255, title="Full Name")
    address: str = Field(
        ...,
        min_length=10,
        max_length=500,
        title="Address",
        description="Please provide a complete address.",
    )
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LENGTH,
        max_length=PASSWORD_MAX_LENGTH,
        title="Password",
    )
    confirm_password: str = Field(..., title="Confirm Password")
    user_type: UserType = Field(UserType.USER, title="Account Type")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = v.strip()
        if not is_valid_username(v):
            raise ValueError(
                "Username can only contain letters, numbers, dots, "
                "hyphens and underscores."
            )
        return v.lower()

    @field_validator("full_name", "address")
    @classmethod
    def validate_text(cls, v: str) -> str:
        v = normalize_whitespace(v)
        if contains_xss(v):
            raise ValueError("Field contains potentially malicious content.")
        return v

    @model_validator(mode="after")
    def passwords_match(self) -> "UserRegisterRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self


class UserLoginRequest(BaseModel):
    email: EmailStr = Field(..., title="Email Address")
    password: str = Field(..., min_length=1, title="Password")


class ResetPasswordRequest(BaseModel):
    email: EmailStr = Field(..., title="Email Address")
    token: str = Field(..., min_length=1, title="Reset Token")
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LENGTH,
        max_length=PASSWORD_MAX_LENGTH,
        title="New Password",
    )
    confirm_password: str = Field(..., title="Confirm Password")

    @model_validator(mode="after")
    def passwords_match(self) -> "ResetPasswordRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self


class UserUpsertRequest(BaseModel):
    """Profile pushed by the OAuth-backed web front-end."""

    email: EmailStr = Field(..., title="Email Address")
    name: str = Field(..., min_length=1, max_length=255, title="Full Name")
    provider: Optional[str] = Field(
        None, max_length=50, description="OAuth provider, e.g. google."
    )
    avatar: Optional[str] = Field(None, max_length=500)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = normalize_whitespace(v)
        if not v:
            raise ValueError("Name is required")
        return v
