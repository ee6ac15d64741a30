# screens/admin/scholarship_forms.py
from __future__ import annotations
import logging
import streamlit as st

from core.api import ApiError, Upload
from core.forms import require, show_errors
from core.list_controller import EntityListController
from core.models import ScholarshipForm
from core.ui import (finish_modal, open_confirm, pick_item, render_pagination,
                     render_search, render_table)

logger = logging.getLogger(__name__)

KEY = "scholarship_forms"
COLUMNS = ["ID", "Form Name", "File"]
ALLOWED_TYPES = ["pdf", "doc", "docx", "xls", "xlsx", "png", "jpg", "jpeg"]
DOWNLOAD_KEY = "_form_download"


def make_controller(ctx) -> EntityListController[ScholarshipForm]:
    api = ctx.admin
    return EntityListController(
        "scholarship forms", api.get_scholarship_forms, title="Scholarship form",
        create_fn=lambda p: api.create_scholarship_form(p["scholarship_form_name"], p["upload"]),
        edit_fn=lambda form_id, p: api.edit_scholarship_form(
            form_id, p["scholarship_form_name"], p.get("upload")),
        delete_fn=lambda form_id: api.delete_scholarship_form(scholarship_form_id=form_id),
        delete_all_fn=lambda: api.delete_scholarship_form(delete_all=True),
        per_page=ctx.per_page, notifier=ctx.notifier,
    )


def _row(f: ScholarshipForm) -> dict:
    return {"ID": f.scholarship_form_id, "Form Name": f.scholarship_form_name,
            "File": f.scholarship_form or "—"}


def form_errors(name: str, upload: Upload | None, editing: bool) -> list[str]:
    errors = require({"scholarship_form_name": name}, {"scholarship_form_name": "Form name"})
    if upload is None and not editing:
        errors.append("A form file is required.")
    return errors


def _form_modal(ctx, ctl: EntityListController, form: ScholarshipForm | None = None):
    editing = form is not None
    with st.form("scholarship_form_form"):
        name = st.text_input("Form Name *", value=form.scholarship_form_name if editing else "")
        label = "Replace file (optional)" if editing else "Form File *"
        uploaded = st.file_uploader(label, type=ALLOWED_TYPES, key="scholarship_form_file")
        if editing and form.scholarship_form:
            st.caption(f"Current file: {form.scholarship_form}")
        submitted = st.form_submit_button("Update" if editing else "Add Form", type="primary")

    if submitted:
        name = name.strip()
        upload = Upload.from_streamlit(uploaded)
        if show_errors(form_errors(name, upload, editing)):
            payload = {"scholarship_form_name": name, "upload": upload}
            ok = ctl.on_edit(form.scholarship_form_id, payload) if editing else ctl.on_create(payload)
            finish_modal(ctx, ok)


def _render_download(ctx, form: ScholarshipForm):
    if not form.scholarship_form:
        st.caption("No file attached.")
        return
    st.caption(f"[Open in browser]({ctx.admin.form_file_url(form.scholarship_form)})")

    cached = ctx.state.get(DOWNLOAD_KEY)
    if cached and cached[0] == form.scholarship_form:
        st.download_button("⬇️ Save file", data=cached[1], file_name=form.scholarship_form,
                           key=f"{KEY}_save")
    elif st.button("⬇️ Download", key=f"{KEY}_download"):
        try:
            content = ctx.admin.download_form(form.scholarship_form)
        except ApiError as e:
            logger.warning("Download of %s failed: %s", form.scholarship_form, e)
            st.error(f"Download failed: {e.message}")
        else:
            ctx.state[DOWNLOAD_KEY] = (form.scholarship_form, content)
            st.rerun()


def render(ctx):
    st.title("📄 Scholarship Forms")
    ctl = ctx.controller(KEY, lambda: make_controller(ctx))
    with st.spinner(f"Loading {ctl.noun}..."):
        ctl.ensure_loaded()

    c1, c2 = st.columns([0.75, 0.25])
    with c1:
        render_search(ctl, KEY, placeholder="Search forms")
    with c2:
        if st.button("➕ Add Form", use_container_width=True):
            ctx.modal.open("scholarship_form_form", "Add Scholarship Form", _form_modal, ctx=ctx, ctl=ctl)

    if not render_table(ctl, _row, COLUMNS, KEY):
        return
    render_pagination(ctl, KEY)

    form = pick_item(ctl, KEY, lambda f: f"#{f.scholarship_form_id} {f.scholarship_form_name}")
    if form is None:
        return
    a1, a2, a3 = st.columns([0.2, 0.2, 0.6])
    if a1.button("✏️ Edit", key=f"{KEY}_edit", use_container_width=True):
        ctx.modal.open("scholarship_form_form", "Edit Scholarship Form", _form_modal,
                       ctx=ctx, ctl=ctl, form=form)
    if a2.button("🗑️ Delete", key=f"{KEY}_delete", use_container_width=True):
        open_confirm(ctx, f"{KEY}_confirm_delete", "Delete Scholarship Form",
                     f"This will permanently delete {form.scholarship_form_name}.",
                     lambda: ctl.on_delete(form.scholarship_form_id))
    with a3:
        _render_download(ctx, form)

    with st.expander("Danger zone"):
        if st.button("Delete all forms", key=f"{KEY}_delete_all"):
            open_confirm(ctx, f"{KEY}_confirm_delete_all", "Delete All Forms",
                         "Every scholarship form will be permanently deleted.", ctl.on_delete_all)
