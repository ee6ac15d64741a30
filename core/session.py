# core/session.py
"""
Authenticated identity for one browser client.

The session is a small JSON blob kept under a single storage key so a page
reload can restore it. `SessionStore` is the durable implementation; the API
client only sees the `SessionProvider` protocol, which lets tests hand in a
fixed session without touching storage.
"""
from __future__ import annotations
import logging
import secrets
from dataclasses import dataclass, asdict, replace
from typing import Any, Dict, Mapping, MutableMapping, Optional, Protocol, Tuple

from sqlalchemy.engine import Engine

from core import config_store

logger = logging.getLogger(__name__)

ROLE_STUDENT = "student"
ROLE_ADMIN = "admin"
ROLES = (ROLE_STUDENT, ROLE_ADMIN)
STORAGE_KEY = "userData"
CLIENT_COOKIE = "scholarship_portal_client"
CLIENT_ID_KEY = "client_id"


@dataclass(frozen=True)
class Session:
    role: str
    api_key: str
    csrf_token: str = ""
    id: Optional[Any] = None
    user_id: Optional[Any] = None
    name: str = ""
    email: str = ""

    def __post_init__(self):
        if self.role not in ROLES:
            raise ValueError(f"Unknown role: {self.role!r}")

    @classmethod
    def from_login(cls, user: Dict[str, Any], role: str) -> "Session":
        """Build a session from the `user` object returned by /login or /callback."""
        first = (user.get("first_name") or "").strip()
        last = (user.get("last_name") or "").strip()
        return cls(
            role=role,
            api_key=str(user.get("api_key") or ""),
            csrf_token=str(user.get("csrf_token") or ""),
            id=user.get("id"),
            user_id=user.get("user_id"),
            name=(user.get("name") or f"{first} {last}").strip(),
            email=(user.get("email") or "").strip(),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional["Session"]:
        try:
            return cls(
                role=data.get("role"),
                api_key=str(data.get("api_key") or ""),
                csrf_token=str(data.get("csrf_token") or ""),
                id=data.get("id"),
                user_id=data.get("user_id"),
                name=data.get("name") or "",
                email=data.get("email") or "",
            )
        except ValueError:
            return None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def with_profile(self, name: str = "", email: str = "") -> "Session":
        return replace(self, name=name or self.name, email=email or self.email)


class SessionProvider(Protocol):
    def current(self) -> Optional[Session]: ...


class StaticSessionProvider:
    """Holds a session in memory only."""

    def __init__(self, session: Optional[Session] = None):
        self._session = session

    def current(self) -> Optional[Session]:
        return self._session

    def set(self, session: Optional[Session]) -> None:
        self._session = session


class SessionStore:
    """Session persisted in client storage under `STORAGE_KEY`."""

    def __init__(self, engine: Engine, client_id: str):
        self.engine = engine
        self.client_id = client_id
        self._session: Optional[Session] = None
        self._loaded = False

    def load(self) -> Optional[Session]:
        raw = config_store.get(self.engine, self.client_id, STORAGE_KEY)
        self._session = Session.from_dict(raw) if isinstance(raw, dict) else None
        if raw is not None and self._session is None:
            logger.warning("Stored session for %s is invalid; clearing it", self.client_id)
            config_store.remove(self.engine, self.client_id, STORAGE_KEY)
        self._loaded = True
        return self._session

    def current(self) -> Optional[Session]:
        if not self._loaded:
            return self.load()
        return self._session

    def login(self, session: Session) -> Session:
        config_store.save(self.engine, self.client_id, STORAGE_KEY, session.to_dict())
        self._session = session
        self._loaded = True
        logger.info("Signed in %s as %s", session.email or session.user_id or session.id, session.role)
        return session

    def refresh_profile(self, name: str = "", email: str = "") -> Optional[Session]:
        """Keep the stored display name in step with profile edits."""
        session = self.current()
        if session is None:
            return None
        updated = session.with_profile(name=name, email=email)
        config_store.save(self.engine, self.client_id, STORAGE_KEY, updated.to_dict())
        self._session = updated
        return updated

    def logout(self) -> None:
        config_store.clear(self.engine, self.client_id)
        self._session = None
        self._loaded = True
        logger.info("Signed out client %s", self.client_id)


def resolve_client_id(state: MutableMapping, cookies: Optional[Mapping[str, str]]) -> Tuple[str, bool]:
    """
    Storage id for this browser: the one already in session state, else the
    client cookie, else a fresh random one. Returns (client_id, needs_cookie);
    needs_cookie is True while the browser does not hold the id yet.

    The id is never read from the URL, so a shared link carries no login.
    """
    cookie = (cookies or {}).get(CLIENT_COOKIE) or None
    cid = state.get(CLIENT_ID_KEY) or cookie or secrets.token_urlsafe(32)
    state[CLIENT_ID_KEY] = cid
    return cid, cookie != cid
