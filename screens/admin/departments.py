# screens/admin/departments.py
from __future__ import annotations
import streamlit as st

from core.forms import require, show_errors
from core.list_controller import EntityListController
from core.models import Department
from core.ui import (finish_modal, open_confirm, pick_item, render_pagination,
                     render_search, render_table)

KEY = "departments"
COLUMNS = ["ID", "Department"]


def make_controller(ctx) -> EntityListController[Department]:
    api = ctx.admin
    return EntityListController(
        "departments", api.get_departments, title="Department",
        create_fn=lambda p: api.create_department(p["department_name"]),
        edit_fn=lambda dept_id, p: api.update_department(dept_id, p["department_name"]),
        delete_fn=lambda dept_id: api.delete_department(department_id=dept_id),
        delete_all_fn=lambda: api.delete_department(delete_all=True),
        per_page=ctx.per_page, notifier=ctx.notifier,
    )


def _row(d: Department) -> dict:
    return {"ID": d.department_id, "Department": d.department_name}


def _department_form(ctx, ctl: EntityListController, department: Department | None = None):
    with st.form("department_form"):
        name = st.text_input("Department Name *", value=department.department_name if department else "")
        submitted = st.form_submit_button("Update" if department else "Add Department", type="primary")

    if submitted:
        values = {"department_name": name.strip()}
        if show_errors(require(values, {"department_name": "Department name"})):
            if department:
                ok = ctl.on_edit(department.department_id, values)
            else:
                ok = ctl.on_create(values)
            finish_modal(ctx, ok)


def render(ctx):
    st.title("🏛️ Manage Departments")
    ctl = ctx.controller(KEY, lambda: make_controller(ctx))
    with st.spinner(f"Loading {ctl.noun}..."):
        ctl.ensure_loaded()

    c1, c2 = st.columns([0.75, 0.25])
    with c1:
        render_search(ctl, KEY, placeholder="Search departments")
    with c2:
        if st.button("➕ Add Department", use_container_width=True):
            ctx.modal.open("department_form", "Add Department", _department_form, ctx=ctx, ctl=ctl)

    if not render_table(ctl, _row, COLUMNS, KEY):
        return
    render_pagination(ctl, KEY)

    dept = pick_item(ctl, KEY, lambda d: f"#{d.department_id} {d.department_name}")
    if dept is None:
        return
    a1, a2, _ = st.columns([0.2, 0.2, 0.6])
    if a1.button("✏️ Edit", key=f"{KEY}_edit", use_container_width=True):
        ctx.modal.open("department_form", "Edit Department", _department_form,
                       ctx=ctx, ctl=ctl, department=dept)
    if a2.button("🗑️ Delete", key=f"{KEY}_delete", use_container_width=True):
        open_confirm(ctx, f"{KEY}_confirm_delete", "Delete Department",
                     f"This will permanently delete {dept.department_name}.",
                     lambda: ctl.on_delete(dept.department_id))

    with st.expander("Danger zone"):
        if st.button("Delete all departments", key=f"{KEY}_delete_all"):
            open_confirm(ctx, f"{KEY}_confirm_delete_all", "Delete All Departments",
                         "Every department will be permanently deleted.", ctl.on_delete_all)
