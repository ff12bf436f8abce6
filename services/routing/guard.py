"""
Route guard.

Two states, UNAUTHENTICATED and AUTHENTICATED, driven by the session store.
``resolve`` is the one place that decides where a requested path lands; the
guard object only tracks the state and the current path between renders.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from domain.value_objects import Route, SessionEvent
from services.routing.routes import HOME_PATH, LOGIN_PATH, get_route, normalize_path
from services.session.store import SessionStore

logger = logging.getLogger(__name__)


class AuthState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


def resolve(state: AuthState, path: str | None) -> str:
    """Map (state, requested path) to the path that actually renders."""
    p = normalize_path(path)
    if state is AuthState.UNAUTHENTICATED:
        route = get_route(p)
        return p if route is not None and not route.protected else LOGIN_PATH
    if p == LOGIN_PATH:
        return HOME_PATH
    return p


def resolve_route(state: AuthState, path: str | None) -> Optional[Route]:
    """Route table entry for the resolved path; None means not found."""
    return get_route(resolve(state, path))


class RouteGuard:
    def __init__(self, store: SessionStore):
        self._state = self._state_for(store.current_user() is not None)
        self._current = resolve(self._state, HOME_PATH)
        # protected path the user asked for before being sent to Login
        self._pending: Optional[str] = None
        self._unsubscribe = store.subscribe(self._on_session_event)

    @staticmethod
    def _state_for(signed_in: bool) -> AuthState:
        return AuthState.AUTHENTICATED if signed_in else AuthState.UNAUTHENTICATED

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def current_path(self) -> str:
        return self._current

    def navigate(self, path: str | None) -> str:
        requested = normalize_path(path)
        resolved = resolve(self._state, requested)
        if self._state is AuthState.UNAUTHENTICATED:
            route = get_route(requested)
            if route is not None and route.protected:
                self._pending = requested
        if resolved != requested:
            logger.debug("redirect %s -> %s (%s)", requested, resolved, self._state.value)
        self._current = resolved
        return resolved

    def close(self) -> None:
        self._unsubscribe()

    def _on_session_event(self, event: SessionEvent) -> None:
        new_state = self._state_for(event.new_user is not None)
        if new_state is self._state:
            return
        logger.info("route guard %s -> %s (%s)", self._state.value, new_state.value, event.type)
        self._state = new_state
        if new_state is AuthState.AUTHENTICATED:
            self._current = resolve(new_state, self._pending or HOME_PATH)
        else:
            self._current = LOGIN_PATH
        self._pending = None
