# screens/admin/courses.py
from __future__ import annotations
import streamlit as st

from core.forms import require, show_errors, trimmed
from core.list_controller import EntityListController
from core.models import Course
from core.ui import (finish_modal, open_confirm, pick_item, render_pagination,
                     render_search, render_table)

KEY = "courses"
COLUMNS = ["Course Code", "Course Name"]
LABELS = {"course_code": "Course code", "course_name": "Course name"}


def make_controller(ctx) -> EntityListController[Course]:
    api = ctx.admin
    return EntityListController(
        "courses", api.get_courses, title="Course",
        create_fn=lambda p: api.create_course(p["course_code"], p["course_name"]),
        # the code is the key and cannot change
        edit_fn=lambda code, p: api.edit_course(code, p["course_name"]),
        delete_fn=lambda code: api.delete_course(course_code=code),
        delete_all_fn=lambda: api.delete_course(delete_all=True),
        per_page=ctx.per_page, notifier=ctx.notifier,
    )


def _row(c: Course) -> dict:
    return {"Course Code": c.course_code, "Course Name": c.course_name}


def _course_form(ctx, ctl: EntityListController, course: Course | None = None):
    editing = course is not None
    with st.form("course_form"):
        code = st.text_input("Course Code *", value=course.course_code if editing else "",
                             disabled=editing, placeholder="e.g. BSIT")
        name = st.text_input("Course Name *", value=course.course_name if editing else "")
        submitted = st.form_submit_button("Update" if editing else "Add Course", type="primary")

    if submitted:
        values = trimmed({"course_code": course.course_code if editing else code, "course_name": name})
        if show_errors(require(values, LABELS)):
            ok = ctl.on_edit(course.course_code, values) if editing else ctl.on_create(values)
            finish_modal(ctx, ok)


def render(ctx):
    st.title("📚 Manage Courses")
    ctl = ctx.controller(KEY, lambda: make_controller(ctx))
    with st.spinner(f"Loading {ctl.noun}..."):
        ctl.ensure_loaded()

    c1, c2 = st.columns([0.75, 0.25])
    with c1:
        render_search(ctl, KEY, placeholder="Search by code or name")
    with c2:
        if st.button("➕ Add Course", use_container_width=True):
            ctx.modal.open("course_form", "Add Course", _course_form, ctx=ctx, ctl=ctl)

    if render_table(ctl, _row, COLUMNS, KEY):
        render_pagination(ctl, KEY)
        course = pick_item(ctl, KEY, lambda c: f"{c.course_code} - {c.course_name}")
        if course is not None:
            a1, a2, _ = st.columns([0.2, 0.2, 0.6])
            if a1.button("✏️ Edit", key=f"{KEY}_edit", use_container_width=True):
                ctx.modal.open("course_form", "Edit Course", _course_form, ctx=ctx, ctl=ctl, course=course)
            if a2.button("🗑️ Delete", key=f"{KEY}_delete", use_container_width=True):
                open_confirm(ctx, f"{KEY}_confirm_delete", "Delete Course",
                             f"This will permanently delete {course.course_code} - {course.course_name}.",
                             lambda: ctl.on_delete(course.course_code))

        with st.expander("Danger zone"):
            if st.button("Delete all courses", key=f"{KEY}_delete_all"):
                open_confirm(ctx, f"{KEY}_confirm_delete_all", "Delete All Courses",
                             "Every course will be permanently deleted.",
                             ctl.on_delete_all)