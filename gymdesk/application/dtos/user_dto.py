# gymdesk/application/dtos/user_dto.py

"""
Schemas for staff authentication.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from gymdesk.application.dtos.base_dto import CustomBaseModel


class LoginRequest(CustomBaseModel):
    """Credentials of a gym staff user."""
    username: str = Field(..., min_length=1, max_length=80, description="Login name")
    password: str = Field(..., min_length=1, max_length=128, description="Plain text password")

    @field_validator("username", mode="before")
    def strip_username(cls, v):
        return v.strip() if isinstance(v, str) else v


class TokenData(BaseModel):
    """
    Access token issued at login. The token is scoped to the user's gym.
    """
    access_token: str
    token_type: str = "Bearer"
    expires_at: datetime
