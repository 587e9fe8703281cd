from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from shared.db.models import UserType


class UserResponse(BaseModel):
    id: str = Field(
        ...,
        title="User ID",
        description="A unique 6-character identifier for the user.",
    )
    email: str
    username: str
    full_name: str
    address: Optional[str] = None
    user_type: UserType
    avatar: Optional[str] = None
    provider: str
    is_verified: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    user: UserResponse
    token: str


class OtpSentResponse(BaseModel):
    email: str
    expires_in: int = Field(..., description="Seconds until the code expires.")
