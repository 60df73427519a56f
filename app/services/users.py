"""Credential store: account lookup, creation, profile changes and admin edits."""

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import (
    AppError,
    CurrentPasswordIncorrect,
    DuplicateUser,
    EmailInUse,
    InvalidCredentials,
    InvalidInputError,
    NoChanges,
    ReservedAccount,
    UserNotFound,
)
from app.core.security import hash_password, verify_password
from app.models import Proposal, User
from app.schemas.users import normalize_email

logger = logging.getLogger(__name__)

# Computed once so unknown usernames cost the same bcrypt work as wrong passwords.
_DUMMY_HASH: str | None = None


def _dummy_hash() -> str:
    global _DUMMY_HASH
    if _DUMMY_HASH is None:
        _DUMMY_HASH = hash_password("not-a-real-password")
    return _DUMMY_HASH


class UserStore:
    """User persistence bound to one database session."""

    def __init__(self, session: Session, reserved_username: str | None = None) -> None:
        self.session = session
        self.reserved_username = reserved_username or settings.BOOTSTRAP_ADMIN_USERNAME

    def get(self, user_id: int) -> User | None:
        return self.session.get(User, user_id)

    def get_by_username(self, username: str) -> User | None:
        return self.session.query(User).filter(User.username == username).first()

    def list_all(self) -> list[User]:
        """All users, newest first."""
        return (
            self.session.query(User)
            .order_by(User.created_at.desc(), User.id.desc())
            .all()
        )

    def authenticate(self, username: str, password: str) -> User:
        """Return the user for valid credentials; raise InvalidCredentials otherwise."""
        user = self.get_by_username(username)
        if user is None:
            verify_password(password, _dummy_hash())
            logger.info("Login failed: unknown username")
            raise InvalidCredentials()
        if not verify_password(password, user.password_hash):
            logger.info("Login failed: wrong password for user_id=%s", user.id)
            raise InvalidCredentials()
        return user

    def create(self, username: str, email: str, password: str, is_admin: bool = False) -> User:
        """Create an account with a bcrypt-hashed password."""
        username = (username or "").strip()
        if not username or not email or not password:
            raise InvalidInputError("Username, password, and email are required")
        try:
            email = normalize_email(email)
        except ValueError as e:
            raise InvalidInputError(str(e), field="email") from e

        existing = (
            self.session.query(User)
            .filter(or_(User.username == username, User.email == email))
            .first()
        )
        if existing is not None:
            raise DuplicateUser()

        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            is_admin=bool(is_admin),
        )
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateUser() from e
        self.session.refresh(user)
        logger.info("Created user_id=%s username=%s is_admin=%s", user.id, user.username, user.is_admin)
        return user

    def update_profile(
        self,
        user_id: int,
        current_password: str,
        email: str | None = None,
        new_password: str | None = None,
    ) -> User:
        """Change the caller's own email and/or password after re-checking the current password."""
        user = self.get(user_id)
        if user is None:
            raise UserNotFound()
        if not verify_password(current_password or "", user.password_hash):
            raise CurrentPasswordIncorrect(field="currentPassword")

        changed = False
        if email and email != user.email:
            self._ensure_email_free(email, user.id)
            user.email = email
            changed = True
        if new_password:
            user.password_hash = hash_password(new_password)
            changed = True
        if not changed:
            raise NoChanges(field="general")

        self._commit_unique(EmailInUse(field="email"))
        self.session.refresh(user)
        logger.info("Profile updated for user_id=%s", user.id)
        return user

    def update(
        self,
        user_id: int,
        username: str | None = None,
        email: str | None = None,
        password: str | None = None,
        is_admin: bool | None = None,
    ) -> User:
        """Admin edit. Only non-None fields are applied; the reserved account keeps its name and role."""
        user = self.get(user_id)
        if user is None:
            raise UserNotFound()
        reserved = user.username == self.reserved_username

        changed = False
        if username is not None:
            username = username.strip()
            if not username:
                raise InvalidInputError("username must be non-empty", field="username")
            if username != user.username:
                if reserved:
                    raise ReservedAccount()
                taken = (
                    self.session.query(User.id)
                    .filter(User.username == username, User.id != user.id)
                    .first()
                )
                if taken is not None:
                    raise DuplicateUser("Username already exists", field="username")
                user.username = username
                changed = True
        if email is not None and email != user.email:
            self._ensure_email_free(email, user.id)
            user.email = email
            changed = True
        if password:
            user.password_hash = hash_password(password)
            changed = True
        if is_admin is not None and bool(is_admin) != user.is_admin:
            if reserved and not is_admin:
                raise ReservedAccount("The reserved admin account cannot lose admin rights")
            user.is_admin = bool(is_admin)
            changed = True
        if not changed:
            raise NoChanges()

        self._commit_unique()
        self.session.refresh(user)
        logger.info("Admin updated user_id=%s", user.id)
        return user

    def delete(self, user_id: int) -> None:
        """Delete an account and its proposals. The reserved account is refused."""
        user = self.get(user_id)
        if user is None:
            raise UserNotFound()
        if user.username == self.reserved_username:
            raise ReservedAccount()
        self.session.query(Proposal).filter(Proposal.user_id == user.id).delete(
            synchronize_session=False
        )
        self.session.delete(user)
        self.session.commit()
        logger.info("Deleted user_id=%s", user_id)

    def _ensure_email_free(self, email: str, user_id: int) -> None:
        taken = (
            self.session.query(User.id)
            .filter(User.email == email, User.id != user_id)
            .first()
        )
        if taken is not None:
            raise EmailInUse(field="email")

    def _commit_unique(self, conflict: AppError | None = None) -> None:
        """Commit; a unique-constraint violation rolls back and raises conflict (DuplicateUser by default)."""
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise (conflict or DuplicateUser()) from e
