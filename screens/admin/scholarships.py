# screens/admin/scholarships.py
from __future__ import annotations
import logging
from typing import Dict, List, Tuple

import streamlit as st

from core.api import ApiError
from core.forms import date_order, parse_amount, require, show_errors
from core.list_controller import EntityListController
from core.models import SCHOLARSHIP_STATUSES, Scholarship
from core.ui import (finish_modal, fmt_amount, fmt_date, open_confirm, pick_item,
                     render_pagination, render_search, render_table)

logger = logging.getLogger(__name__)

KEY = "scholarships"
COLUMNS = ["ID", "Title", "Amount", "Start", "End", "Status", "Courses", "Forms"]
OPTION_LIMIT = 100


def make_controller(ctx) -> EntityListController[Scholarship]:
    api = ctx.admin
    return EntityListController(
        "scholarships", api.get_scholarships, title="Scholarship",
        create_fn=lambda p: api.create_scholarship(**p),
        edit_fn=lambda sid, p: api.update_scholarship(sid, **p),
        delete_fn=api.delete_scholarship,
        per_page=ctx.per_page, notifier=ctx.notifier,
    )


def _row(s: Scholarship) -> dict:
    return {
        "ID": s.scholarship_id,
        "Title": s.scholarship_title,
        "Amount": fmt_amount(s.amount),
        "Start": fmt_date(s.start_date),
        "End": fmt_date(s.end_date),
        "Status": s.status.capitalize(),
        "Courses": ", ".join(s.course_codes) or "All",
        "Forms": len(s.scholarship_form_ids),
    }


def _options(ctx) -> Tuple[Dict[str, str], Dict[int, str]]:
    """Course and form choices for the multiselects; empty on failure."""
    courses: Dict[str, str] = {}
    forms: Dict[int, str] = {}
    try:
        courses = {c.course_code: c.course_name for c in ctx.admin.get_courses(limit=OPTION_LIMIT).items}
        forms = {f.scholarship_form_id: f.scholarship_form_name
                 for f in ctx.admin.get_scholarship_forms(limit=OPTION_LIMIT).items}
    except ApiError as e:
        logger.warning("Could not load scholarship options: %s", e)
        st.warning(f"Could not load courses/forms: {e.message}")
    return courses, forms


def scholarship_payload(title: str, description: str, start, end, status: str, raw_amount,
                        course_codes: List[str], form_ids: List[int]) -> Tuple[dict, List[str]]:
    """Validated body for create/update; errors block submission."""
    amount, errors = parse_amount(raw_amount)
    errors = require({"scholarship_title": title}, {"scholarship_title": "Title"}) + errors
    errors += date_order(start, end)
    if status not in SCHOLARSHIP_STATUSES:
        errors.append("Status must be active or archive.")
    payload = {
        "scholarship_title": (title or "").strip(),
        "description": (description or "").strip(),
        "start_date": start,
        "end_date": end,
        "status": status,
        "amount": amount,
        "course_codes": list(course_codes),
        "scholarship_form_ids": list(form_ids),
    }
    return payload, errors


def _scholarship_form(ctx, ctl: EntityListController, scholarship: Scholarship | None = None):
    s = scholarship
    courses, forms = _options(ctx)

    with st.form("scholarship_form"):
        title = st.text_input("Title *", value=s.scholarship_title if s else "")
        description = st.text_area("Description", value=s.description if s else "")
        c1, c2 = st.columns(2)
        start = c1.date_input("Start Date", value=s.start_date if s else None)
        end = c2.date_input("End Date", value=s.end_date if s else None)
        amount = c1.text_input("Amount (₱)", value="" if not s or s.amount is None else str(s.amount))
        status = c2.selectbox("Status", options=list(SCHOLARSHIP_STATUSES),
                              index=SCHOLARSHIP_STATUSES.index(s.status) if s else 0,
                              format_func=str.capitalize)
        course_codes = st.multiselect(
            "Eligible Courses", options=list(courses),
            default=[c for c in (s.course_codes if s else []) if c in courses],
            format_func=lambda c: f"{c} - {courses.get(c, '')}",
        )
        form_ids = st.multiselect(
            "Required Forms", options=list(forms),
            default=[f for f in (s.scholarship_form_ids if s else []) if f in forms],
            format_func=lambda f: forms.get(f, str(f)),
        )
        submitted = st.form_submit_button("Update" if s else "Add Scholarship", type="primary")

    if submitted:
        payload, errors = scholarship_payload(title, description, start, end, status, amount,
                                              course_codes, form_ids)
        if show_errors(errors):
            ok = ctl.on_edit(s.scholarship_id, payload) if s else ctl.on_create(payload)
            finish_modal(ctx, ok)


def _details(scholarship: Scholarship):
    s = scholarship
    st.markdown(f"### {s.scholarship_title}")
    st.write(s.description or "_No description._")
    st.markdown(f"**Amount:** {fmt_amount(s.amount)}  \n"
                f"**Period:** {fmt_date(s.start_date)} to {fmt_date(s.end_date)}  \n"
                f"**Status:** {s.status.capitalize()}")
    if s.scholarship_forms:
        st.markdown("**Required forms:** " + ", ".join(f.scholarship_form_name for f in s.scholarship_forms))


def render(ctx):
    st.title("🎓 Manage Scholarships")
    ctl = ctx.controller(KEY, lambda: make_controller(ctx))
    with st.spinner(f"Loading {ctl.noun}..."):
        ctl.ensure_loaded()

    c1, c2 = st.columns([0.75, 0.25])
    with c1:
        render_search(ctl, KEY, placeholder="Search scholarships")
    with c2:
        if st.button("➕ Add Scholarship", use_container_width=True):
            ctx.modal.open("scholarship_form", "Add Scholarship", _scholarship_form,
                           width="large", ctx=ctx, ctl=ctl)

    if not render_table(ctl, _row, COLUMNS, KEY):
        return
    render_pagination(ctl, KEY)

    s = pick_item(ctl, KEY, lambda x: f"#{x.scholarship_id} {x.scholarship_title}")
    if s is None:
        return
    a1, a2, a3, _ = st.columns([0.2, 0.2, 0.2, 0.4])
    if a1.button("👁️ View", key=f"{KEY}_view", use_container_width=True):
        ctx.modal.open("scholarship_view", "Scholarship", _details, scholarship=s)
    if a2.button("✏️ Edit", key=f"{KEY}_edit", use_container_width=True):
        ctx.modal.open("scholarship_form", "Edit Scholarship", _scholarship_form,
                       width="large", ctx=ctx, ctl=ctl, scholarship=s)
    if a3.button("🗑️ Delete", key=f"{KEY}_delete", use_container_width=True):
        open_confirm(ctx, f"{KEY}_confirm_delete", "Delete Scholarship",
                     f"This will permanently delete {s.scholarship_title}.",
                     lambda: ctl.on_delete(s.scholarship_id))
