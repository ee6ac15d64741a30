# screens/admin/accounts.py
from __future__ import annotations
import streamlit as st

from core.list_controller import EntityListController
from core.models import ACCOUNT_STATUSES, AdminAccount
from core.ui import (open_confirm, pick_item, render_pagination, render_search,
                     render_status_filter, render_table)

KEY = "admin_accounts"
COLUMNS = ["ID", "Name", "Email", "Department", "Status"]
FILTER_OPTIONS = ["all"] + list(ACCOUNT_STATUSES)


def make_controller(ctx) -> EntityListController[AdminAccount]:
    api = ctx.admin
    return EntityListController(
        "admin accounts", api.get_admins, title="Account",
        edit_fn=lambda user_id, p: api.update_admin_status(user_id, p["status"]),
        delete_fn=api.delete_admin,
        per_page=ctx.per_page, default_filter="all", notifier=ctx.notifier,
    )


def _row(a: AdminAccount) -> dict:
    return {"ID": a.user_id, "Name": a.name, "Email": a.email,
            "Department": a.department_name or "—", "Status": a.status.capitalize()}


def render(ctx):
    st.title("👥 Admin Accounts")
    st.caption("New admin sign-ups stay pending until approved here.")
    ctl = ctx.controller(KEY, lambda: make_controller(ctx))
    with st.spinner(f"Loading {ctl.noun}..."):
        ctl.ensure_loaded()

    c1, c2 = st.columns([0.7, 0.3])
    with c1:
        render_search(ctl, KEY, placeholder="Search by name or email")
    with c2:
        render_status_filter(ctl, KEY, FILTER_OPTIONS)

    if not render_table(ctl, _row, COLUMNS, KEY):
        return
    render_pagination(ctl, KEY)

    acct = pick_item(ctl, KEY, lambda a: f"{a.name or a.email} ({a.status})")
    if acct is None:
        return

    # you cannot approve or decline yourself
    me = ctx.session
    if me is not None and me.user_id is not None and str(me.user_id) == str(acct.user_id):
        st.info("This is your own account.")
        return

    b1, b2, b3, _ = st.columns([0.2, 0.2, 0.2, 0.4])
    if b1.button("✅ Approve", key=f"{KEY}_approve", disabled=acct.status == "approved",
                 use_container_width=True):
        ctl.on_edit(acct.user_id, {"status": "approved"})
        st.rerun()
    if b2.button("⛔ Decline", key=f"{KEY}_decline", disabled=acct.status == "declined",
                 use_container_width=True):
        open_confirm(ctx, f"{KEY}_confirm_decline", "Decline Account",
                     f"{acct.name or acct.email} will lose admin access.",
                     lambda: ctl.on_edit(acct.user_id, {"status": "declined"}))
    if b3.button("🗑️ Delete", key=f"{KEY}_delete", use_container_width=True):
        open_confirm(ctx, f"{KEY}_confirm_delete", "Delete Account",
                     f"This will permanently delete {acct.name or acct.email}.",
                     lambda: ctl.on_delete(acct.user_id))
