"""
Navigation shell: session store + route guard + navbar, framework-free.

The Streamlit console (``apps/ui/Home.py``) turns a ``Screen`` into widgets;
tests drive the same object directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from domain.models import Credentials, Identity
from domain.value_objects import Route
from services.routing.guard import AuthState, RouteGuard
from services.routing.navbar import Navbar, build_navbar
from services.routing.routes import get_route, normalize_path
from services.session.store import SessionStore


@dataclass(frozen=True)
class Screen:
    requested_path: str
    path: str
    route: Optional[Route]  # None: no such page
    navbar: Optional[Navbar]

    @property
    def redirected(self) -> bool:
        return self.path != self.requested_path


class Shell:
    def __init__(self, store: SessionStore):
        self.store = store
        self.guard = RouteGuard(store)
        self._started = False

    @property
    def state(self) -> AuthState:
        return self.guard.state

    async def start(self) -> None:
        """Restore any provider-held session before the first render."""
        if self._started:
            return
        await self.store.restore()
        self._started = True

    def render(self, path: str | None = None) -> Screen:
        if not self._started:
            raise RuntimeError("Shell.render() called before start()")
        requested = normalize_path(path) if path is not None else self.guard.current_path
        resolved = self.guard.navigate(requested)
        return Screen(
            requested_path=requested,
            path=resolved,
            route=get_route(resolved),
            navbar=build_navbar(self.store.current_user()),
        )

    async def sign_in(self, credentials: Credentials) -> Identity:
        return await self.store.sign_in(credentials)

    async def sign_out(self) -> None:
        await self.store.sign_out()

    def close(self) -> None:
        self.guard.close()
