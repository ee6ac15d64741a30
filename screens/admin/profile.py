# screens/admin/profile.py
from __future__ import annotations
import logging
import streamlit as st

from core.api import ApiError
from core.forms import require, show_errors, trimmed

logger = logging.getLogger(__name__)

LABELS = {"first_name": "First name", "last_name": "Last name"}


def _departments(ctx) -> dict:
    try:
        result = ctx.admin.get_departments(limit=100)
    except ApiError as e:
        logger.warning("Departments unavailable: %s", e)
        return {}
    return {d.department_id: d.department_name for d in result.items}


def render(ctx):
    st.title("👤 My Profile")
    try:
        profile = ctx.admin.get_profile()
    except ApiError as e:
        st.error(f"Could not load your profile: {e.message}")
        if st.button("🔄 Retry"):
            st.rerun()
        return

    departments = _departments(ctx)
    current_dept = profile.department
    if isinstance(current_dept, str) and current_dept.isdigit():
        current_dept = int(current_dept)

    with st.form("admin_profile_form"):
        c1, c2 = st.columns(2)
        first_name = c1.text_input("First Name *", value=profile.first_name)
        last_name = c2.text_input("Last Name *", value=profile.last_name)
        st.text_input("Email", value=profile.email, disabled=True)
        if departments:
            options = list(departments)
            department = st.selectbox(
                "Department", options=options,
                index=options.index(current_dept) if current_dept in departments else None,
                format_func=lambda d: departments.get(d, str(d)),
                placeholder="Select department",
            )
        else:
            department = st.text_input("Department", value=str(current_dept or ""))
        submitted = st.form_submit_button("Save changes", type="primary")

    if submitted:
        values = trimmed({"first_name": first_name, "last_name": last_name})
        if show_errors(require(values, LABELS)):
            try:
                res = ctx.admin.update_profile(values["first_name"], values["last_name"], department)
            except ApiError as e:
                st.error(f"Update failed: {e.message}")
            else:
                ctx.sessions.refresh_profile(name=f"{values['first_name']} {values['last_name']}")
                ctx.notifier.notify("success", "Updated!", res.get("message") or "Profile updated.")
                st.rerun()
