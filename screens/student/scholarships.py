# screens/student/scholarships.py
from __future__ import annotations
import logging
from typing import Dict, List, Optional

import streamlit as st

from core.api import ApiError, Upload
from core.list_controller import EntityListController
from core.models import Scholarship
from core.ui import (fmt_amount, fmt_date, pick_item, render_pagination, render_search,
                     render_table)
from screens.student.applications import KEY as APPLICATIONS_KEY

logger = logging.getLogger(__name__)

KEY = "student_scholarships"
COLUMNS = ["Title", "Amount", "Opens", "Closes", "Status", "Forms"]


def make_controller(ctx) -> EntityListController[Scholarship]:
    return EntityListController("scholarships", ctx.student.get_scholarships, title="Scholarship",
                                per_page=ctx.per_page, notifier=ctx.notifier)


def _row(s: Scholarship) -> dict:
    return {
        "Title": s.scholarship_title,
        "Amount": fmt_amount(s.amount),
        "Opens": fmt_date(s.start_date),
        "Closes": fmt_date(s.end_date),
        "Status": "Open" if s.is_open else "Closed",
        "Forms": len(s.scholarship_forms),
    }


def missing_forms(scholarship: Scholarship, files: Dict[str, Optional[Upload]]) -> List[str]:
    return [f.scholarship_form_name for f in scholarship.scholarship_forms
            if files.get(f.scholarship_form_name) is None]


def _apply_modal(ctx, scholarship: Scholarship):
    s = scholarship
    st.markdown(f"### {s.scholarship_title}")
    if s.description:
        st.write(s.description)
    st.caption(f"Amount: {fmt_amount(s.amount)} · Closes {fmt_date(s.end_date)}")

    if s.scholarship_forms:
        st.markdown("#### Required forms")
        st.caption("Download each blank form, fill it in, then upload it below.")
        for f in s.scholarship_forms:
            if f.scholarship_form:
                st.markdown(f"- [{f.scholarship_form_name}]({ctx.admin.form_file_url(f.scholarship_form)})")
            else:
                st.markdown(f"- {f.scholarship_form_name}")

    with st.form("apply_form"):
        uploads = {
            f.scholarship_form_name: st.file_uploader(f"{f.scholarship_form_name} *",
                                                      key=f"apply_{s.scholarship_id}_{f.scholarship_form_id}")
            for f in s.scholarship_forms
        }
        submitted = st.form_submit_button("Submit Application", type="primary")

    if submitted:
        files = {name: Upload.from_streamlit(u) for name, u in uploads.items()}
        missing = missing_forms(s, files)
        if missing:
            for name in missing:
                st.error(f"{name} is required.")
            return
        try:
            res = ctx.student.apply_scholarship(s.scholarship_id, files)
        except ApiError as e:
            logger.warning("Application to scholarship %s failed: %s", s.scholarship_id, e)
            st.error(f"Application failed: {e.message}")
            return
        ctx.forget_controller(APPLICATIONS_KEY)
        ctx.notifier.notify("success", "Application Submitted",
                            res.get("message") or f"Your application to {s.scholarship_title} was received.")
        ctx.modal.close()


def render(ctx):
    st.title("🎓 Scholarships")
    ctl = ctx.controller(KEY, lambda: make_controller(ctx))
    with st.spinner(f"Loading {ctl.noun}..."):
        ctl.ensure_loaded()

    render_search(ctl, KEY, placeholder="Search scholarships")
    if not render_table(ctl, _row, COLUMNS, KEY):
        return
    render_pagination(ctl, KEY)

    s = pick_item(ctl, KEY, lambda x: x.scholarship_title)
    if s is None:
        return
    if st.button("📝 Apply", key=f"{KEY}_apply", type="primary", disabled=not s.is_open):
        ctx.modal.open("apply_scholarship", "Apply for Scholarship", _apply_modal,
                       width="large", ctx=ctx, scholarship=s)
    if not s.is_open:
        st.caption("This scholarship is not accepting applications right now.")
