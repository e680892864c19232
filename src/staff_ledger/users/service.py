from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_local
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, DatabaseUnavailableError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login, and who is calling a service."""

    user_id: int
    full_name: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_public(self) -> dict:
        return {"id": self.user_id, "name": self.full_name, "role": self.role.value}


def _verify(user: User, password: str) -> bool:
    if not isinstance(password, str):
        return False
    try:
        # check_password_hash compares digests in constant time
        return check_password_hash(user.password_hash, password)
    except ValueError:
        # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
        return False


class AuthService:
    """Use case: authenticate user (login) and change password."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str, *, now: Optional[datetime] = None) -> SessionUser:
        if not isinstance(username, str) or not isinstance(password, str):
            logger.info("Failed login: malformed credentials")
            raise AuthenticationError("Invalid username or password")
        user = self._users.get_by_username(username.strip())
        if not user or not user.is_active or not _verify(user, password):
            logger.info("Failed login for username=%r", username)
            raise AuthenticationError("Invalid username or password")

        self._users.update_last_signed_in(user.user_id, signed_in_at=now or now_local())

        return SessionUser(
            user_id=user.user_id,
            full_name=user.full_name or user.username,
            role=user.role,
        )

    def change_password(self, actor: SessionUser, *, current_password: str, new_password: str) -> None:
        user = self._users.get_by_id(actor.user_id)
        if not user or not _verify(user, current_password):
            raise AuthenticationError("Current password is incorrect")

        require_min_length(new_password, "New password", MIN_PASSWORD_LENGTH)
        if not self._users.update_password_hash(user.user_id, password_hash=generate_password_hash(new_password)):
            raise ValidationError("Password change failed")
        logger.info("Password changed for user_id=%s", user.user_id)


class UserService:
    """Use case: manage users (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self, actor: SessionUser) -> list[User]:
        if not actor.is_admin:
            raise AuthorizationError("Admin access required")
        try:
            return list(self._users.list_all())
        except DatabaseUnavailableError:
            logger.warning("Cannot list users: database not available")
            return []

    def count_staff(self, actor: SessionUser) -> int:
        return sum(1 for u in self.list_users(actor) if u.role == Role.STAFF)

    def create_staff(self, actor: SessionUser, *, full_name: str, username: str, password: str) -> User:
        if not actor.is_admin:
            raise AuthorizationError("Admin access required")

        full_name = require_non_empty(full_name, "Full name")
        username = require_non_empty(username, "Username")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_username(username):
            raise ValidationError("Username already exists")

        user_id = self._users.create_user(
            full_name=full_name,
            username=username,
            password_hash=generate_password_hash(password),
            role=Role.STAFF,
        )
        logger.info("Admin user_id=%s created staff account %r", actor.user_id, username)
        created = self._users.get_by_id(user_id)
        if not created:
            raise ValidationError("Account creation failed")
        return created
