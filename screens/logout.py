# screens/logout.py
from __future__ import annotations
import streamlit as st

from core.navigation import go
from core.router import LOGIN, ADMIN_LOGIN
from core.session import ROLE_ADMIN
from core.ui import hide_sidebar

# survive logout: storage engine, wiring and the page registry
KEYS_TO_KEEP = ("engine", "db_initialized", "client_id", "ctx", "_pages_by_path")


def render(ctx):
    hide_sidebar()
    st.title("🚪 Logout")

    session = ctx.session
    if session is None:
        st.info("You are already logged out.")
        if st.button("🔄 Return to Login", type="primary"):
            go(LOGIN)
        return

    back_to = ADMIN_LOGIN if session.role == ROLE_ADMIN else LOGIN
    ctx.sessions.logout()
    for key in list(ctx.state.keys()):
        if key not in KEYS_TO_KEEP:
            del ctx.state[key]

    st.success(f"Successfully logged out {session.name or session.email or ''}".strip())
    if st.button("🔄 Return to Login", type="primary", use_container_width=True):
        go(back_to)
