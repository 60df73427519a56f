"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import settings
from app.core.errors import TokenExpired, TokenInvalid
from app.schemas.auth import TokenClaims

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(
    user_id: int,
    username: str,
    is_admin: bool,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token carrying identity (sub, username) and the admin flag."""
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(minutes=settings.JWT_EXPIRE_MINUTES))
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "username": username,
        "is_admin": bool(is_admin),
        "exp": expire,
        "iat": now,
    }
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> TokenClaims:
    """
    Decode and validate JWT; return the embedded claims.
    Raises TokenExpired when exp has passed and TokenInvalid for anything else wrong.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpired() from e
    except jwt.PyJWTError as e:
        raise TokenInvalid() from e

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError) as e:
        raise TokenInvalid("Invalid token payload") from e
    username = payload.get("username")
    is_admin = payload.get("is_admin")
    if not isinstance(username, str) or not username or not isinstance(is_admin, bool):
        raise TokenInvalid("Invalid token payload")
    return TokenClaims(id=user_id, username=username, is_admin=is_admin)


def extract_token(header_token: str | None, cookie_token: str | None) -> str | None:
    """Pick the bearer token from the Authorization header, falling back to the auth cookie."""
    if header_token and header_token.strip():
        return header_token.strip()
    if cookie_token and cookie_token.strip():
        return cookie_token.strip()
    return None
