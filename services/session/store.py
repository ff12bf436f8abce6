"""
Session store: the single owner of "who is signed in".

Readers call ``current_user()`` (never blocks) or ``subscribe()`` to be told
about changes. Only the store's own methods write the session; every auth
call goes through one lock, so at most one sign-in / sign-out / restore is
in flight per store.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from core.config import settings
from domain.models import Credentials, Identity
from domain.value_objects import SessionEvent, SessionEventType
from services.auth.provider import AuthError, AuthProvider
from services.observability.metrics import timing_metric

logger = logging.getLogger(__name__)

Subscriber = Callable[[SessionEvent], None]


class SessionStore:
    def __init__(self, provider: AuthProvider, timeout_s: float | None = None):
        self._provider = provider
        self._user: Optional[Identity] = None
        self._subscribers: list[Subscriber] = []
        self._lock = asyncio.Lock()
        self.timeout_s = timeout_s or settings.AUTH_TIMEOUT_S

        register = getattr(provider, "on_session_change", None)
        if callable(register):
            register(self._on_provider_change)

    @property
    def provider(self) -> AuthProvider:
        return self._provider

    def current_user(self) -> Optional[Identity]:
        return self._user

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register for session changes. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    async def sign_in(self, credentials: Credentials) -> Identity:
        async with self._lock:
            try:
                identity = await self._call("sign_in", self._provider.sign_in(credentials))
            except AuthError as e:
                logger.info("sign-in rejected for %r: %s", credentials.username, e)
                raise
            self._set(identity, "sign_in", reason=f"signed in as {credentials.username!r}")
            logger.info("signed in user_id=%s", identity.id)
            return identity

    async def sign_out(self) -> None:
        """
        Sign out upstream, then clear the local session no matter what.
        Provider failures are logged only; the UI must end up signed out.
        """
        async with self._lock:
            try:
                await self._call("sign_out", self._provider.sign_out())
            except AuthError as e:
                logger.warning("sign-out failed upstream, clearing local session anyway: %s", e)
            finally:
                self._set(None, "sign_out", reason="signed out")

    async def restore(self) -> Optional[Identity]:
        """Re-evaluate the session once from the provider (startup)."""
        restore = getattr(self._provider, "restore", None)
        if not callable(restore):
            return self._user
        async with self._lock:
            try:
                identity = await self._call("restore", restore())
            except AuthError as e:
                logger.warning("session restore failed, starting signed out: %s", e)
                identity = None
            kind: SessionEventType = "restored" if identity else "expired"
            self._set(identity, kind, reason="startup restore")
            return identity

    async def _call(self, name: str, op: Awaitable[Any]) -> Any:
        with timing_metric(f"auth.{name}"):
            try:
                return await asyncio.wait_for(op, timeout=self.timeout_s)
            except asyncio.TimeoutError as e:
                raise AuthError(f"{name} timed out after {self.timeout_s}s") from e

    def _on_provider_change(self, identity: Optional[Identity]) -> None:
        if identity is None:
            self._set(None, "expired", reason="session ended by auth provider")
        else:
            self._set(identity, "restored", reason="session changed by auth provider")

    def _set(self, user: Optional[Identity], kind: SessionEventType, reason: str = "") -> None:
        old = self._user
        self._user = user
        if old == user:
            return
        event = SessionEvent(type=kind, old_user=old, new_user=user, reason=reason)
        for cb in list(self._subscribers):
            try:
                cb(event)
            except Exception:
                logger.exception("session subscriber failed on %s", kind)
