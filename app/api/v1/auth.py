"""JWT login/logout and auth dependencies (get_current_user, require_admin)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api.v1.deps import get_user_store
from app.core.config import settings
from app.core.errors import AdminRequired, NoTokenProvided, TokenInvalid
from app.core.security import create_access_token, decode_access_token, extract_token
from app.schemas.auth import (
    CheckAuthResponse,
    LoginRequest,
    LoginResponse,
    TokenClaims,
    UserPublic,
)
from app.schemas.common import MessageResponse
from app.services.users import UserStore

logger = logging.getLogger(__name__)

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=settings.JWT_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.is_prod,
        samesite="strict",
    )


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    response: Response,
    users: Annotated[UserStore, Depends(get_user_store)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>.
    The token is also set as an http-only cookie when AUTH_COOKIE_ENABLED is on.
    """
    user = users.authenticate(body.username, body.password)
    token = create_access_token(user.id, user.username, user.is_admin)
    if settings.AUTH_COOKIE_ENABLED:
        _set_auth_cookie(response, token)
    logger.info("Login succeeded for user_id=%s", user.id)
    return LoginResponse(token=token, user=UserPublic.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response) -> MessageResponse:
    """Clear the auth cookie. Bearer tokens stay valid until they expire."""
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        httponly=True,
        secure=settings.is_prod,
        samesite="strict",
    )
    return MessageResponse(message="Logged out")


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> TokenClaims:
    """
    Dependency: require a valid token from the Authorization header or the auth cookie.
    The header wins when both are present. Raises 401 if missing, expired or invalid.
    """
    token = extract_token(
        credentials.credentials if credentials is not None else None,
        request.cookies.get(settings.AUTH_COOKIE_NAME),
    )
    if token is None:
        raise NoTokenProvided()
    return decode_access_token(token)


def require_admin(
    current_user: Annotated[TokenClaims, Depends(get_current_user)],
) -> TokenClaims:
    """Dependency: require authenticated user with the admin flag. Raises 403 for non-admin."""
    if not current_user.is_admin:
        raise AdminRequired()
    return current_user


@router.get("/check-auth", response_model=CheckAuthResponse)
def check_auth(
    current_user: Annotated[TokenClaims, Depends(get_current_user)],
    users: Annotated[UserStore, Depends(get_user_store)],
) -> CheckAuthResponse:
    """Confirm the caller's token and return their current profile."""
    user = users.get(current_user.id)
    if user is None:
        raise TokenInvalid("User no longer exists")
    return CheckAuthResponse(authenticated=True, user=UserPublic.model_validate(user))
