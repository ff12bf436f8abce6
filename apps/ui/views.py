"""Page views. Each one draws a single resource; none of them touch the session."""

from __future__ import annotations

import asyncio
from typing import Callable

import streamlit as st

from apps.ui.navbar import go
from core.config import settings
from domain.models import Credentials
from services.auth.provider import AuthError
from services.persistence.records import RecordKind, RecordsClient, RecordsError
from services.routing.routes import HOME_PATH
from services.routing.shell import Screen, Shell


def _records(shell: Shell) -> RecordsClient:
    return RecordsClient(token=getattr(shell.store.provider, "token", None))


def _record_table(shell: Shell, kind: RecordKind, title: str) -> None:
    st.title(title)
    try:
        rows = _records(shell).list(kind)
    except RecordsError as e:
        st.warning(str(e))
        return
    if not rows:
        st.info(f"No {kind} yet.")
        return
    st.dataframe([r.model_dump() for r in rows], use_container_width=True, hide_index=True)


@st.cache_data(ttl=settings.RECORDS_CACHE_TTL_S, show_spinner=False)
def _record_count(kind: RecordKind, token: str | None) -> int:
    """Dashboard counts, cached so reruns do not refetch every list. Failures are not cached."""
    return len(RecordsClient(token=token).list(kind))


def render_dashboard(shell: Shell, screen: Screen) -> None:
    st.title(screen.route.title)
    user = shell.store.current_user()
    if user:
        st.write(f"Welcome, **{user.username or user.id}**.")

    token = getattr(shell.store.provider, "token", None)
    cols = st.columns(3)
    for col, kind in zip(cols, ("applicants", "programs", "applications")):
        try:
            col.metric(kind.capitalize(), _record_count(kind, token))
        except RecordsError:
            col.metric(kind.capitalize(), "n/a")


def render_applicants(shell: Shell, screen: Screen) -> None:
    _record_table(shell, "applicants", screen.route.title)


def render_programs(shell: Shell, screen: Screen) -> None:
    _record_table(shell, "programs", screen.route.title)


def render_applications(shell: Shell, screen: Screen) -> None:
    _record_table(shell, "applications", screen.route.title)


def render_login(shell: Shell, screen: Screen) -> None:
    st.title(screen.route.title)
    # entered values survive a failed attempt so the user can retry
    with st.form("login", clear_on_submit=False):
        username = st.text_input("Username", key="login_username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in")

    if not submitted:
        return
    try:
        asyncio.run(shell.sign_in(Credentials(username=username, password=password)))
    except AuthError as e:
        st.error(str(e))
        return
    go(shell.guard.current_path)


def render_not_found(shell: Shell, screen: Screen) -> None:
    st.title("Page not found")
    st.write(f"There is no page at `{screen.path}`.")
    if st.button("Back to dashboard"):
        go(HOME_PATH)


VIEWS: dict[str, Callable[[Shell, Screen], None]] = {
    "dashboard": render_dashboard,
    "applicants": render_applicants,
    "programs": render_programs,
    "applications": render_applications,
    "login": render_login,
}


def render_screen(shell: Shell, screen: Screen) -> None:
    view = VIEWS.get(screen.route.view) if screen.route else None
    (view or render_not_found)(shell, screen)
