# screens/admin/announcements.py
from __future__ import annotations
import streamlit as st

from core.forms import require, show_errors, trimmed
from core.list_controller import EntityListController
from core.models import Announcement
from core.ui import (finish_modal, fmt_date, open_confirm, pick_item, render_pagination,
                     render_search, render_table)

KEY = "admin_announcements"
COLUMNS = ["ID", "Title", "Posted By", "Posted"]
LABELS = {"announcement_title": "Title", "announcement_description": "Description"}


def make_controller(ctx) -> EntityListController[Announcement]:
    api = ctx.admin
    return EntityListController(
        "announcements", api.get_announcements, title="Announcement",
        create_fn=lambda p: api.create_announcement(**p),
        edit_fn=lambda ann_id, p: api.edit_announcement(ann_id, **p),
        delete_fn=api.delete_announcement,
        per_page=ctx.per_page, notifier=ctx.notifier,
    )


def _row(a: Announcement) -> dict:
    return {"ID": a.announcement_id, "Title": a.announcement_title,
            "Posted By": a.author_name or "—", "Posted": fmt_date(a.created_at)}


def _announcement_form(ctx, ctl: EntityListController, announcement: Announcement | None = None):
    a = announcement
    with st.form("announcement_form"):
        title = st.text_input("Title *", value=a.announcement_title if a else "")
        body = st.text_area("Description *", value=a.announcement_description if a else "", height=200)
        submitted = st.form_submit_button("Update" if a else "Post Announcement", type="primary")

    if submitted:
        values = trimmed({"announcement_title": title, "announcement_description": body})
        if show_errors(require(values, LABELS)):
            ok = ctl.on_edit(a.announcement_id, values) if a else ctl.on_create(values)
            finish_modal(ctx, ok)


def render(ctx):
    st.title("📢 Announcements")
    ctl = ctx.controller(KEY, lambda: make_controller(ctx))
    with st.spinner(f"Loading {ctl.noun}..."):
        ctl.ensure_loaded()

    c1, c2 = st.columns([0.75, 0.25])
    with c1:
        render_search(ctl, KEY, placeholder="Search announcements")
    with c2:
        if st.button("➕ New Announcement", use_container_width=True):
            ctx.modal.open("announcement_form", "New Announcement", _announcement_form,
                           width="large", ctx=ctx, ctl=ctl)

    if not render_table(ctl, _row, COLUMNS, KEY):
        return
    render_pagination(ctl, KEY)

    a = pick_item(ctl, KEY, lambda x: f"#{x.announcement_id} {x.announcement_title}")
    if a is None:
        return
    with st.container(border=True):
        st.markdown(f"**{a.announcement_title}**")
        st.write(a.announcement_description)
    b1, b2, _ = st.columns([0.2, 0.2, 0.6])
    if b1.button("✏️ Edit", key=f"{KEY}_edit", use_container_width=True):
        ctx.modal.open("announcement_form", "Edit Announcement", _announcement_form,
                       width="large", ctx=ctx, ctl=ctl, announcement=a)
    if b2.button("🗑️ Delete", key=f"{KEY}_delete", use_container_width=True):
        open_confirm(ctx, f"{KEY}_confirm_delete", "Delete Announcement",
                     f"This will permanently delete \"{a.announcement_title}\".",
                     lambda: ctl.on_delete(a.announcement_id))
