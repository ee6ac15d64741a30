# core/context.py
"""Per-browser-session wiring handed to every page renderer."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, MutableMapping, Optional

from sqlalchemy.engine import Engine

from core.api import AdminApi, ApiClient, AuthApi, StudentApi
from core.list_controller import EntityListController
from core.modal import ModalShell
from core.notify import StreamlitNotifier
from core.session import Session, SessionStore
from core.settings import Settings

CONTROLLER_PREFIX = "ctl_"


@dataclass
class AppContext:
    settings: Settings
    engine: Engine
    sessions: SessionStore
    client: ApiClient
    auth: AuthApi
    admin: AdminApi
    student: StudentApi
    notifier: StreamlitNotifier
    modal: ModalShell
    state: MutableMapping

    @property
    def session(self) -> Optional[Session]:
        return self.sessions.current()

    @property
    def per_page(self) -> int:
        return self.settings.api.per_page

    def controller(self, key: str, factory: Callable[[], EntityListController]) -> EntityListController:
        """One controller per list, kept across reruns."""
        slot = CONTROLLER_PREFIX + key
        ctl = self.state.get(slot)
        if ctl is None:
            ctl = factory()
            self.state[slot] = ctl
        return ctl

    def forget_controller(self, key: str) -> None:
        """The next visit to that list starts fresh."""
        self.state.pop(CONTROLLER_PREFIX + key, None)

    def drop_controllers(self) -> None:
        for k in [k for k in self.state.keys() if str(k).startswith(CONTROLLER_PREFIX)]:
            del self.state[k]


def build_context(settings: Settings, engine: Engine, client_id: str, state: MutableMapping) -> AppContext:
    sessions = SessionStore(engine, client_id)
    client = ApiClient(settings.api.base_url, session_provider=sessions,
                       timeout=settings.api.timeout_seconds)
    return AppContext(
        settings=settings,
        engine=engine,
        sessions=sessions,
        client=client,
        auth=AuthApi(client),
        admin=AdminApi(client, folder_url=settings.api.folder_url),
        student=StudentApi(client),
        notifier=StreamlitNotifier(state),
        modal=ModalShell(state),
        state=state,
    )
