from __future__ import annotations

from domain.value_objects import Route

LOGIN_PATH = "/login"
HOME_PATH = "/"

ROUTES: tuple[Route, ...] = (
    Route(path=HOME_PATH, view="dashboard", title="Dashboard"),
    Route(path="/applicants", view="applicants", title="Applicants", nav_label="Applicants"),
    Route(path="/programs", view="programs", title="Programs", nav_label="Programs"),
    Route(path="/applications", view="applications", title="Applications", nav_label="Applications"),
    Route(path=LOGIN_PATH, view="login", protected=False, title="Sign in"),
)

_BY_PATH = {r.path: r for r in ROUTES}


def normalize_path(path: str | None) -> str:
    """'/applicants/?x=1#top' -> '/applicants'; empty -> '/'."""
    p = (path or "").split("#", 1)[0].split("?", 1)[0].strip()
    if not p.startswith("/"):
        p = "/" + p
    p = p.rstrip("/")
    return p or HOME_PATH


def get_route(path: str) -> Route | None:
    return _BY_PATH.get(normalize_path(path))


def nav_routes() -> list[Route]:
    return [r for r in ROUTES if r.nav_label]
