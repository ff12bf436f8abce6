from __future__ import annotations

import logging
from dataclasses import dataclass

from jose import JWTError

from core.config import settings
from core.security import create_access_token, identity_from_token, revoke_token, verify_password
from domain.models import Credentials, Identity
from services.auth.provider import AuthError, SessionCallback

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocalUser:
    user_id: str
    username: str
    password_hash: str


class LocalAuthProvider:
    """
    In-process provider using the same bcrypt/JWT helpers as the auth service.
    Handy for a console running without the API, and for tests.
    """

    def __init__(self, users: list[LocalUser] | None = None):
        self._users = {u.username: u for u in users or []}
        self._token: str | None = None
        self._callbacks: list[SessionCallback] = []

    @classmethod
    def from_settings(cls) -> "LocalAuthProvider":
        if not settings.ADMIN_PWD_HASH:
            logger.warning("ADMIN_PWD_HASH missing: local provider has no users")
            return cls()
        return cls(
            [LocalUser(settings.ADMIN_USER_ID, settings.ADMIN_USER, settings.ADMIN_PWD_HASH)]
        )

    @property
    def token(self) -> str | None:
        return self._token

    async def sign_in(self, credentials: Credentials) -> Identity:
        user = self._users.get(credentials.username)
        if user is None or not verify_password(credentials.password, user.password_hash):
            raise AuthError("invalid username or password")
        self._token = create_access_token(
            sub=user.user_id, minutes=settings.ACCESS_TOKEN_EXPIRE_MIN, username=user.username
        )
        return Identity(id=user.user_id, username=user.username)

    async def sign_out(self) -> None:
        tok, self._token = self._token, None
        if tok is None:
            return
        try:
            revoke_token(tok)
        except JWTError as e:
            raise AuthError(f"sign-out failed: {e}") from e

    async def restore(self) -> Identity | None:
        if self._token is None:
            return None
        try:
            return identity_from_token(self._token)
        except JWTError:
            self._token = None
            return None

    def on_session_change(self, callback: SessionCallback) -> None:
        self._callbacks.append(callback)

    def expire(self) -> None:
        """Drop the current session as if it had expired upstream."""
        self._token = None
        for cb in list(self._callbacks):
            cb(None)
