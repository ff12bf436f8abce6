from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from domain.models import Identity
from services.routing.routes import HOME_PATH, nav_routes

BRAND = "ApplicantsDB"
SIGN_OUT_LABEL = "Sign Out"


@dataclass(frozen=True)
class NavLink:
    label: str
    path: str


@dataclass(frozen=True)
class Navbar:
    brand: NavLink
    links: tuple[NavLink, ...]
    user: Identity
    sign_out_label: str = SIGN_OUT_LABEL


def build_navbar(user: Optional[Identity]) -> Optional[Navbar]:
    """No navbar at all while signed out."""
    if user is None:
        return None
    return Navbar(
        brand=NavLink(BRAND, HOME_PATH),
        links=tuple(NavLink(r.nav_label, r.path) for r in nav_routes()),
        user=user,
    )
