"""Request/response schemas for auth endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class TokenClaims(BaseModel):
    """Identity decoded from a verified access token; attached to each authenticated request."""

    id: int
    username: str
    is_admin: bool


class UserPublic(BaseModel):
    """Public projection of a user (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str | None = None
    is_admin: bool
    created_at: datetime | None = None


class LoginResponse(BaseModel):
    """JWT access token and the authenticated user."""

    token: str = Field(..., description="JWT access token; send as Authorization: Bearer <token>")
    token_type: str = Field(default="bearer", description="Token type")
    user: UserPublic


class CheckAuthResponse(BaseModel):
    authenticated: bool = True
    user: UserPublic
