# screens/login.py
from __future__ import annotations
import streamlit as st

from core.api import ApiError
from core.forms import require, show_errors
from core.navigation import go
from core.router import REGISTER, ADMIN_LOGIN, home_for
from core.ui import hide_sidebar


def render(ctx):
    hide_sidebar()
    st.title("🔐 Student Login")
    st.caption(f"Sign in to {ctx.settings.app.name}")

    with st.form("login_form"):
        student_number = st.text_input("Student Number")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Login", type="primary")

    if submitted:
        values = {"student_number": student_number, "password": password}
        if show_errors(require(values, {"student_number": "Student number", "password": "Password"})):
            try:
                session = ctx.auth.student_login(student_number.strip(), password)
            except ApiError as e:
                st.error(f"Login failed: {e.message}")
            else:
                ctx.drop_controllers()
                ctx.sessions.login(session)
                ctx.notifier.notify("success", "Login Successful", "Welcome back!")
                go(home_for(session))

    c1, c2 = st.columns(2)
    with c1:
        if st.button("Create an account"):
            go(REGISTER)
    with c2:
        if st.button("Admin sign-in"):
            go(ADMIN_LOGIN)
