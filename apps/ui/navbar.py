from __future__ import annotations

import asyncio

import streamlit as st

from services.routing.navbar import Navbar
from services.routing.shell import Shell


def go(path: str) -> None:
    """Point the console at ``path`` and rerun the script."""
    st.query_params["path"] = path
    st.rerun()


def render_navbar(shell: Shell, navbar: Navbar | None) -> None:
    if navbar is None:
        return

    cols = st.columns([3] + [1] * len(navbar.links) + [1])
    if cols[0].button(f"🎓 {navbar.brand.label}", key="nav_brand"):
        go(navbar.brand.path)
    for col, link in zip(cols[1:], navbar.links):
        if col.button(link.label, key=f"nav_{link.path}", use_container_width=True):
            go(link.path)
    if cols[-1].button(navbar.sign_out_label, key="nav_sign_out", use_container_width=True):
        # never raises AuthError; failures are logged and the session is cleared
        asyncio.run(shell.sign_out())
        go(shell.guard.current_path)

    st.caption(f"Signed in as {navbar.user.username or navbar.user.id}")
    st.divider()
