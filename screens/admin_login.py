# screens/admin_login.py
from __future__ import annotations
import streamlit as st

from core.api import ApiError
from core.navigation import go
from core.router import LOGIN, home_for
from core.ui import hide_sidebar


def render(ctx):
    hide_sidebar()
    st.title("🛡️ Admin Login")
    st.caption("Sign in with your university Google account, then paste the ID token issued by Google.")

    with st.form("admin_login_form"):
        google_token = st.text_area("Google ID token", height=120)
        submitted = st.form_submit_button("Sign in", type="primary")

    if submitted:
        if not google_token.strip():
            st.error("Google ID token is required.")
        else:
            try:
                session = ctx.auth.admin_login(google_token.strip())
            except ApiError as e:
                st.error(f"Login failed: {e.message}")
            else:
                ctx.drop_controllers()
                ctx.sessions.login(session)
                ctx.notifier.notify("success", "Login Successful", "Welcome back, Admin!")
                go(home_for(session))

    if st.button("← Student login"):
        go(LOGIN)
