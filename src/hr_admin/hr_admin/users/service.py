from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.exceptions import AuthenticationError
from .repository import UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    username: str

    def to_session(self) -> dict:
        return {"user_id": self.user_id, "username": self.username}

    @classmethod
    def from_session(cls, data: Mapping[str, Any]) -> Optional["SessionUser"]:
        user_id = data.get("user_id")
        if user_id is None:
            return None
        return cls(user_id=int(user_id), username=str(data.get("username", "")))


def hash_password(password: str) -> str:
    return generate_password_hash(password)


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._users.get_by_username(username)
        if not user:
            logger.info("Login refused for unknown user %r", username)
            raise AuthenticationError(INVALID_CREDENTIALS)

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            logger.info("Login refused for %r: wrong password", username)
            raise AuthenticationError(INVALID_CREDENTIALS)

        return SessionUser(user_id=user.user_id, username=user.username)
