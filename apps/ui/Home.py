from __future__ import annotations

import asyncio
import sys
from pathlib import Path

# Ensure repo root is on sys.path so "import services...." works under `streamlit run`
ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import streamlit as st

from apps.ui.navbar import render_navbar
from apps.ui.views import render_screen
from core.config import settings
from core.logging import configure_logging, logger
from services.auth.local import LocalAuthProvider
from services.auth.provider import AuthProvider, HttpAuthProvider
from services.routing.shell import Shell
from services.session.store import SessionStore

st.set_page_config(page_title="ApplicantsDB", page_icon="🎓", layout="wide")


def _make_provider() -> AuthProvider:
    if settings.AUTH_MODE == "local":
        return LocalAuthProvider.from_settings()
    return HttpAuthProvider()


def _get_shell() -> Shell:
    """One shell (and session store) per browser session, restored once."""
    if "shell" not in st.session_state:
        configure_logging()
        shell = Shell(SessionStore(_make_provider()))
        asyncio.run(shell.start())
        logger.info("console session started (auth mode=%s)", settings.AUTH_MODE)
        st.session_state.shell = shell
    return st.session_state.shell


shell = _get_shell()
requested = st.query_params.get("path")
screen = shell.render(requested)
if screen.path != requested:
    # keep the address bar in step with where the guard sent us
    st.query_params["path"] = screen.path

render_navbar(shell, screen.navbar)
render_screen(shell, screen)
