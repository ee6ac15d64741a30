# screens/student/applications.py
from __future__ import annotations
import streamlit as st

from core.list_controller import EntityListController
from core.models import Application, ApplicationStatus
from core.ui import (fmt_date, pick_item, render_pagination, render_search,
                     render_status_filter, render_table)

KEY = "student_applications"
COLUMNS = ["Scholarship", "Status", "Submitted", "Last Update", "Files"]
FILTER_OPTIONS = ["all"] + [s.value for s in ApplicationStatus]


def status_label(value: str) -> str:
    return "All" if value == "all" else ApplicationStatus(value).label


def make_controller(ctx) -> EntityListController[Application]:
    return EntityListController("applications", ctx.student.get_applications, title="Application",
                                per_page=ctx.per_page, default_filter="all", notifier=ctx.notifier)


def _row(a: Application) -> dict:
    return {
        "Scholarship": a.scholarship_title or f"#{a.scholarship_id}",
        "Status": a.status.label,
        "Submitted": fmt_date(a.submitted_at),
        "Last Update": fmt_date(a.updated_at),
        "Files": len(a.uploaded_forms),
    }


def render(ctx):
    st.title("📄 My Applications")
    ctl = ctx.controller(KEY, lambda: make_controller(ctx))
    with st.spinner(f"Loading {ctl.noun}..."):
        ctl.ensure_loaded()

    c1, c2 = st.columns([0.7, 0.3])
    with c1:
        render_search(ctl, KEY, placeholder="Search by scholarship")
    with c2:
        render_status_filter(ctl, KEY, FILTER_OPTIONS, format_func=status_label)

    if not render_table(ctl, _row, COLUMNS, KEY):
        return
    render_pagination(ctl, KEY)

    app = pick_item(ctl, KEY, lambda a: f"{a.scholarship_title or a.scholarship_id} ({a.status.label})")
    if app is None or not app.uploaded_forms:
        return
    with st.expander("Uploaded forms"):
        for f in app.uploaded_forms:
            st.markdown(f"- {f.form_name or f.file_ref} · {fmt_date(f.uploaded_at)}")
