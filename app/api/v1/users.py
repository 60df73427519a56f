"""User management: admin CRUD plus self-service profile updates."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.v1.auth import get_current_user, require_admin
from app.api.v1.deps import get_user_store
from app.schemas.auth import TokenClaims, UserPublic
from app.schemas.common import MessageResponse
from app.schemas.users import (
    ProfileUpdateRequest,
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
    UserUpdateResponse,
)
from app.services.users import UserStore

router = APIRouter()


@router.get("", response_model=list[UserPublic])
def list_users(
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    users: Annotated[UserStore, Depends(get_user_store)],
) -> list[UserPublic]:
    """List all users, newest first (admin only)."""
    return [UserPublic.model_validate(u) for u in users.list_all()]


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreateRequest,
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    users: Annotated[UserStore, Depends(get_user_store)],
) -> UserResponse:
    user = users.create(body.username, body.email, body.password, body.is_admin)
    return UserResponse(user=UserPublic.model_validate(user))


@router.put("/profile", response_model=UserUpdateResponse)
def update_profile(
    body: ProfileUpdateRequest,
    current_user: Annotated[TokenClaims, Depends(get_current_user)],
    users: Annotated[UserStore, Depends(get_user_store)],
) -> UserUpdateResponse:
    """Change the caller's email and/or password. currentPassword is always required."""
    user = users.update_profile(
        current_user.id,
        current_password=body.currentPassword,
        email=body.email,
        new_password=body.newPassword,
    )
    return UserUpdateResponse(
        message="Profile updated successfully",
        user=UserPublic.model_validate(user),
    )


@router.put("/{user_id}", response_model=UserUpdateResponse)
def update_user(
    user_id: int,
    body: UserUpdateRequest,
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    users: Annotated[UserStore, Depends(get_user_store)],
) -> UserUpdateResponse:
    user = users.update(
        user_id,
        username=body.username,
        email=body.email,
        password=body.password,
        is_admin=body.is_admin,
    )
    return UserUpdateResponse(
        message="User updated successfully",
        user=UserPublic.model_validate(user),
    )


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    users: Annotated[UserStore, Depends(get_user_store)],
) -> MessageResponse:
    users.delete(user_id)
    return MessageResponse(message="User deleted successfully")
