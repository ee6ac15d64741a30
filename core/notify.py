# core/notify.py
"""
Confirmation and notification capability.

Controllers only know the `Notifier` protocol; the app plugs in
`StreamlitNotifier`, tests plug in a recorder.
"""
from __future__ import annotations
import logging
from typing import List, MutableMapping, Optional, Protocol, Tuple
import streamlit as st

logger = logging.getLogger(__name__)

KINDS = ("success", "error", "warning", "info")
FLASH_KEY = "_flash_messages"


class Notifier(Protocol):
    def confirm(self, prompt: str, key: Optional[str] = None) -> bool: ...
    def notify(self, kind: str, title: str, message: str) -> None: ...


class LogNotifier:
    """Writes notifications to the log and confirms everything."""

    def confirm(self, prompt: str, key: Optional[str] = None) -> bool:
        return True

    def notify(self, kind: str, title: str, message: str) -> None:
        level = logging.ERROR if kind == "error" else logging.INFO
        logger.log(level, "%s: %s", title, message)


class StreamlitNotifier:
    """
    Messages are queued in session state and shown by `flush()`, so a
    notification raised right before `st.rerun()` is still seen.
    """

    def __init__(self, state: Optional[MutableMapping] = None):
        if state is None:
            state = st.session_state
        self.state = state

    def notify(self, kind: str, title: str, message: str) -> None:
        if kind not in KINDS:
            kind = "info"
        queue: List[Tuple[str, str, str]] = self.state.setdefault(FLASH_KEY, [])
        queue.append((kind, title, message))
        if kind == "error":
            logger.warning("%s: %s", title, message)

    def pending(self) -> List[Tuple[str, str, str]]:
        return list(self.state.get(FLASH_KEY) or [])

    def flush(self) -> None:
        queue = self.state.pop(FLASH_KEY, None) or []
        for kind, title, message in queue:
            text = f"**{title}**: {message}" if message else f"**{title}**"
            getattr(st, kind)(text)
            if kind == "success":
                st.toast(title, icon="✅")

    def confirm(self, prompt: str, key: Optional[str] = None) -> bool:
        st.warning(prompt)
        yes_col, no_col = st.columns(2)
        with no_col:
            cancelled = st.button("Cancel", key=f"{key or 'confirm'}_no", use_container_width=True)
        with yes_col:
            confirmed = st.button("Yes, continue", key=f"{key or 'confirm'}_yes",
                                  type="primary", use_container_width=True)
        if cancelled:
            st.rerun()
        return confirmed
