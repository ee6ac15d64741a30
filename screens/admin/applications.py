# screens/admin/applications.py
from __future__ import annotations
import streamlit as st

from core.list_controller import EntityListController
from core.models import APPLICATION_TRANSITIONS, Application, ApplicationStatus
from core.ui import (finish_modal, fmt_date, pick_item, render_pagination, render_search,
                     render_status_filter, render_table)

KEY = "admin_applications"
COLUMNS = ["ID", "Student No.", "Student", "Scholarship", "Status", "Submitted", "Updated"]
FILTER_OPTIONS = ["all"] + [s.value for s in ApplicationStatus]


def status_label(value: str) -> str:
    return "All" if value == "all" else ApplicationStatus(value).label


def make_controller(ctx) -> EntityListController[Application]:
    api = ctx.admin
    return EntityListController(
        "applications", api.get_applications, title="Application",
        edit_fn=lambda app_id, p: api.update_application_status(app_id, p["status"]),
        per_page=ctx.per_page, default_filter="all", notifier=ctx.notifier,
    )


def _row(a: Application) -> dict:
    return {
        "ID": a.application_id,
        "Student No.": a.student_number,
        "Student": a.student_name,
        "Scholarship": a.scholarship_title or f"#{a.scholarship_id}",
        "Status": a.status.label,
        "Submitted": fmt_date(a.submitted_at),
        "Updated": fmt_date(a.updated_at),
    }


def _details(ctx, ctl: EntityListController, application: Application):
    a = application
    st.markdown(f"### {a.scholarship_title or f'Scholarship #{a.scholarship_id}'}")
    st.markdown(f"**Student:** {a.student_name} ({a.student_number})  \n"
                f"**Status:** {a.status.label}  \n"
                f"**Submitted:** {fmt_date(a.submitted_at)}")

    st.markdown("#### Uploaded forms")
    if not a.uploaded_forms:
        st.caption("No files uploaded.")
    for f in a.uploaded_forms:
        st.markdown(f"- {f.form_name or f.file_ref} · {fmt_date(f.uploaded_at)}")

    next_statuses = APPLICATION_TRANSITIONS[a.status]
    if not next_statuses:
        st.info(f"This application is {a.status.label.lower()}; no further changes.")
        return

    st.markdown("#### Update status")
    target = st.selectbox("Move to", options=[s.value for s in next_statuses],
                          format_func=status_label, key="application_next_status")
    if st.button("Save status", type="primary", key="application_save_status"):
        finish_modal(ctx, ctl.on_edit(a.application_id, {"status": target}))


def render(ctx):
    st.title("📝 Applications")
    ctl = ctx.controller(KEY, lambda: make_controller(ctx))
    with st.spinner(f"Loading {ctl.noun}..."):
        ctl.ensure_loaded()

    c1, c2 = st.columns([0.7, 0.3])
    with c1:
        render_search(ctl, KEY, placeholder="Search by student or scholarship")
    with c2:
        render_status_filter(ctl, KEY, FILTER_OPTIONS, format_func=status_label)

    if not render_table(ctl, _row, COLUMNS, KEY):
        return
    render_pagination(ctl, KEY)

    app = pick_item(ctl, KEY, lambda a: f"#{a.application_id} {a.student_name} - {a.scholarship_title}")
    if app is not None and st.button("🔎 Review", key=f"{KEY}_review"):
        ctx.modal.open("application_review", "Review Application", _details,
                       width="large", ctx=ctx, ctl=ctl, application=app)
