# core/router.py
"""
Role-gated routing decisions.

Paths are the dashboard's logical paths (/login, /admin/courses,
/dashboard/applications, ...). `resolve` never renders anything; the app
calls it before every page and switches page when it says so.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from core.session import ROLE_ADMIN, ROLE_STUDENT, Session

LOGIN = "/login"
REGISTER = "/register"
ADMIN_LOGIN = "/admin/login"
LOGOUT = "/logout"
ROOT = "/"

PUBLIC_AUTH_ROUTES = (LOGIN, REGISTER, ADMIN_LOGIN)

HOME = {
    ROLE_STUDENT: "/dashboard",
    ROLE_ADMIN: "/admin",
}


class AuthPhase(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    STUDENT = "student"
    ADMIN = "admin"


@dataclass(frozen=True)
class Decision:
    allowed: bool
    redirect_to: Optional[str] = None

    @classmethod
    def allow(cls) -> "Decision":
        return cls(True)

    @classmethod
    def redirect(cls, path: str) -> "Decision":
        return cls(False, path)


def phase_of(session: Optional[Session], authenticating: bool = False) -> AuthPhase:
    if session is None:
        return AuthPhase.AUTHENTICATING if authenticating else AuthPhase.UNAUTHENTICATED
    return AuthPhase(session.role)


def normalize(path: str) -> str:
    path = "/" + (path or "").strip().strip("/")
    return path


def _under(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


def required_role(path: str) -> Optional[str]:
    path = normalize(path)
    if path in PUBLIC_AUTH_ROUTES or path == ROOT:
        return None
    if _under(path, "/admin"):
        return ROLE_ADMIN
    if _under(path, "/dashboard"):
        return ROLE_STUDENT
    return None


def login_route_for(path: str) -> str:
    return ADMIN_LOGIN if _under(normalize(path), "/admin") else LOGIN


def home_for(session: Optional[Session]) -> str:
    if session is None:
        return LOGIN
    return HOME[session.role]


def resolve(path: str, session: Optional[Session]) -> Decision:
    path = normalize(path)

    if path == ROOT:
        return Decision.redirect(home_for(session))

    if path == LOGOUT:
        return Decision.allow()

    if path in PUBLIC_AUTH_ROUTES:
        # signed-in users never see a login or register form
        return Decision.redirect(home_for(session)) if session else Decision.allow()

    role = required_role(path)
    if role is None:
        # unknown path: send to the right landing page
        return Decision.redirect(home_for(session))
    if session is None:
        return Decision.redirect(login_route_for(path))
    if session.role != role:
        return Decision.redirect(HOME[session.role])
    return Decision.allow()
