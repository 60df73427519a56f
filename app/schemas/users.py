"""Request/response schemas for user management endpoints."""

import re

from pydantic import BaseModel, Field, field_validator

from app.schemas.auth import UserPublic

# Deliberately loose: something@domain.tld
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(value: str) -> str:
    """Strip and check an email address; raises ValueError when it does not look like one."""
    email = value.strip()
    if not EMAIL_PATTERN.match(email):
        raise ValueError("Invalid email address")
    return email


class UserCreateRequest(BaseModel):
    """Admin request to create an account."""

    username: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=8, max_length=128)
    is_admin: bool = False

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("username must be non-empty")
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)


class UserUpdateRequest(BaseModel):
    """Admin edit of an account; only supplied fields change."""

    username: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    password: str | None = Field(default=None, min_length=8, max_length=128)
    is_admin: bool | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return normalize_email(v)


class ProfileUpdateRequest(BaseModel):
    """Self-service profile change; the current password is always required."""

    email: str | None = Field(default=None, max_length=255)
    currentPassword: str = Field(..., min_length=1, max_length=128)
    newPassword: str | None = Field(default=None, min_length=8, max_length=128)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return normalize_email(v)


class UserResponse(BaseModel):
    user: UserPublic


class UserUpdateResponse(BaseModel):
    message: str
    user: UserPublic
