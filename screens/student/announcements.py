# screens/student/announcements.py
from __future__ import annotations
import streamlit as st

from core.list_controller import EntityListController
from core.models import Announcement
from core.ui import fmt_date, render_pagination, render_search

KEY = "student_announcements"


def make_controller(ctx) -> EntityListController[Announcement]:
    return EntityListController("announcements", ctx.student.get_announcements, title="Announcement",
                                per_page=ctx.per_page, notifier=ctx.notifier)


def render_card(a: Announcement):
    with st.container(border=True):
        st.markdown(f"#### {a.announcement_title}")
        st.caption(f"{a.author_name or 'Student Affairs'} · {fmt_date(a.created_at)}")
        st.write(a.announcement_description)


def render(ctx):
    st.title("📣 Announcements")
    ctl = ctx.controller(KEY, lambda: make_controller(ctx))
    with st.spinner(f"Loading {ctl.noun}..."):
        ctl.ensure_loaded()

    render_search(ctl, KEY, placeholder="Search announcements")

    s = ctl.state
    if s.error and not s.loaded:
        st.error(f"Could not load announcements: {s.error}")
        st.button("🔄 Retry", key=f"{KEY}_retry", on_click=ctl.refresh)
        return
    empty = ctl.empty_message()
    if empty:
        st.info(empty)
        return
    for a in s.items:
        render_card(a)
    render_pagination(ctl, KEY)
