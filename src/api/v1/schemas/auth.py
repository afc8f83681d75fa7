"""Pydantic schemas for signup and login."""

from pydantic import BaseModel, EmailStr, Field

from api.v1.schemas.common import RequestModel
from api.v1.schemas.user import MeResponse


class SignupRequest(RequestModel):
    """Schema for creating an account."""

    username: str = Field(..., max_length=30)
    email: EmailStr
    password: str = Field(..., max_length=72)


class LoginRequest(RequestModel):
    """Schema for logging in with an email or a username."""

    identifier: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=72)


class AuthResponse(BaseModel):
    """Token plus the account it belongs to."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: MeResponse
