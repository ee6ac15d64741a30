# screens/student/overview.py
from __future__ import annotations
import streamlit as st

from core.api import ApiError
from core.navigation import go
from screens.admin.overview import count_of
from screens.student.announcements import render_card

LATEST = 3


def render(ctx):
    session = ctx.session
    st.title("🏠 Dashboard")
    st.caption(f"Welcome, {session.name or 'student'}!")

    api = ctx.student
    c1, c2, c3 = st.columns(3)
    c1.metric("Scholarships", _or_dash(count_of(api.get_scholarships)))
    c2.metric("My applications", _or_dash(count_of(api.get_applications)))
    c3.metric("Under review", _or_dash(count_of(api.get_applications, status="review")))

    b1, b2, _ = st.columns([0.25, 0.25, 0.5])
    if b1.button("Browse scholarships", use_container_width=True):
        go("/dashboard/scholarships")
    if b2.button("Track applications", use_container_width=True):
        go("/dashboard/applications")

    st.subheader("Latest announcements")
    try:
        latest = api.get_announcements(page=1, limit=LATEST)
    except ApiError as e:
        st.warning(f"Announcements unavailable: {e.message}")
        return
    if not latest.items:
        st.info("No announcements yet.")
    for a in latest.items:
        render_card(a)


def _or_dash(value):
    return "—" if value is None else value
