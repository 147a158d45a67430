"""Which client route a session may display.

Mirrors the front end's guard: unauthenticated sessions land on the login
page, a pending password change captures every route, and treasurer-only
pages bounce other roles back to the dashboard.
"""

from __future__ import annotations

from clubfinance.auth.session import ClubSession
from clubfinance.models.member import MEMBER_ROLES, ROLE_TREASURER

LOGIN_ROUTE = "/login"
CHANGE_PASSWORD_ROUTE = "/change-password"
HOME_ROUTE = "/"

ROUTE_ROLES: dict[str, tuple[str, ...]] = {
    HOME_ROUTE: MEMBER_ROLES,
    "/fees": MEMBER_ROLES,
    "/vaquinhas": MEMBER_ROLES,
    "/expenses": MEMBER_ROLES,
    "/members": (ROLE_TREASURER,),
    "/audit": (ROLE_TREASURER,),
}

NAVIGATION: tuple[tuple[str, str], ...] = (
    ("Dashboard", HOME_ROUTE),
    ("Members", "/members"),
    ("Dues", "/fees"),
    ("Campaigns", "/vaquinhas"),
    ("Expenses", "/expenses"),
    ("Audit", "/audit"),
)


def normalize_path(path: str) -> str:
    cleaned = "/" + path.strip().strip("/")
    return cleaned.split("?", 1)[0].split("#", 1)[0] or HOME_ROUTE


def _next_hop(path: str, session: ClubSession | None) -> str:
    if path == LOGIN_ROUTE:
        return HOME_ROUTE if session else LOGIN_ROUTE
    if path == CHANGE_PASSWORD_ROUTE:
        return CHANGE_PASSWORD_ROUTE if session and session.requires_password_change else HOME_ROUTE
    allowed_roles = ROUTE_ROLES.get(path)
    if allowed_roles is None:
        return HOME_ROUTE
    if session is None:
        return LOGIN_ROUTE
    if session.requires_password_change:
        return CHANGE_PASSWORD_ROUTE
    if session.role not in allowed_roles:
        return HOME_ROUTE
    return path


def resolve_route(path: str, session: ClubSession | None) -> str:
    current = normalize_path(path)
    # every redirect chain settles within three hops (e.g. /unknown -> / -> /login)
    for _ in range(4):
        target = _next_hop(current, session)
        if target == current:
            return current
        current = target
    return current


def navigation_for(role: str) -> list[tuple[str, str]]:
    return [(name, href) for name, href in NAVIGATION if role in ROUTE_ROLES[href]]
