from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol, runtime_checkable

import httpx

from core.config import settings
from domain.models import Credentials, Identity

logger = logging.getLogger(__name__)

SessionCallback = Callable[[Optional[Identity]], None]


class AuthError(Exception): ...


@runtime_checkable
class AuthProvider(Protocol):
    """
    Boundary to whatever actually authenticates users.

    Providers may also offer:
    - ``async restore() -> Identity | None`` for durable session restoration
    - ``on_session_change(callback)`` to push expiry / external changes
    """

    async def sign_in(self, credentials: Credentials) -> Identity: ...

    async def sign_out(self) -> None: ...


class HttpAuthProvider:
    """Talks to the auth service (`apps.api`) over HTTP."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout_s: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.AUTH_API_URL).rstrip("/")
        self.token = token
        self.timeout_s = timeout_s or settings.AUTH_TIMEOUT_S
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout_s, transport=self._transport
        )

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    async def sign_in(self, credentials: Credentials) -> Identity:
        try:
            async with self._client() as client:
                r = await client.post(
                    "/auth/token",
                    data={"username": credentials.username, "password": credentials.password},
                )
                if r.status_code == 401:
                    raise AuthError("invalid username or password")
                r.raise_for_status()
                token = r.json()["access_token"]
                me = await client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
                me.raise_for_status()
                identity = Identity.model_validate(me.json())
        except AuthError:
            raise
        except Exception as e:  # noqa: BLE001
            raise AuthError(f"sign-in failed: {e}") from e
        self.token = token
        return identity

    async def sign_out(self) -> None:
        if not self.token:
            return
        headers = self._auth_headers()
        # the token is dropped locally whatever the service answers
        self.token = None
        try:
            async with self._client() as client:
                r = await client.post("/auth/logout", headers=headers)
                r.raise_for_status()
        except Exception as e:  # noqa: BLE001
            raise AuthError(f"sign-out failed: {e}") from e

    async def restore(self) -> Identity | None:
        if not self.token:
            return None
        try:
            async with self._client() as client:
                r = await client.get("/auth/me", headers=self._auth_headers())
                if r.status_code == 401:
                    logger.info("stored token rejected by auth service")
                    self.token = None
                    return None
                r.raise_for_status()
                return Identity.model_validate(r.json())
        except Exception as e:  # noqa: BLE001
            raise AuthError(f"session restore failed: {e}") from e
