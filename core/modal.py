# core/modal.py
"""
Single-overlay modal shell on top of `st.dialog`.

At most one modal is active. `open` replaces whatever was pending, `render`
shows it once and consumes it (a dialog dismissed with Escape or a backdrop
click therefore stays closed on the next run), and `close` clears it and
reruns the app. `st.dialog` itself provides the overlay, scroll lock and
focus handling.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, MutableMapping, Optional

import streamlit as st

logger = logging.getLogger(__name__)

MODAL_KEY = "_active_modal"

ModalBody = Callable[..., None]


@dataclass
class ModalRequest:
    key: str
    title: str
    body: ModalBody
    context: Dict[str, Any] = field(default_factory=dict)
    width: str = "medium"
    show_close: bool = True


class ModalShell:
    def __init__(self, state: Optional[MutableMapping] = None):
        self.state = st.session_state if state is None else state

    @property
    def active(self) -> Optional[ModalRequest]:
        return self.state.get(MODAL_KEY)

    def is_open(self, key: Optional[str] = None) -> bool:
        req = self.active
        return req is not None and (key is None or req.key == key)

    def open(self, key: str, title: str, body: ModalBody, width: str = "medium",
             show_close: bool = True, **context) -> ModalRequest:
        prev = self.active
        if prev is not None and prev.key != key:
            logger.debug("Modal %s replaced by %s", prev.key, key)
        req = ModalRequest(key=key, title=title, body=body, context=context, width=width,
                           show_close=show_close)
        self.state[MODAL_KEY] = req
        return req

    def take(self) -> Optional[ModalRequest]:
        return self.state.pop(MODAL_KEY, None)

    def close(self, rerun: bool = True) -> None:
        self.state.pop(MODAL_KEY, None)
        if rerun:
            st.rerun()

    def render(self) -> None:
        req = self.take()
        if req is None:
            return

        @st.dialog(req.title, width=req.width)
        def _show():
            req.body(**req.context)
            if req.show_close and st.button("Close", key=f"{req.key}_close"):
                self.close()

        _show()
