# screens/student/profile.py
from __future__ import annotations
import streamlit as st

from core.api import ApiError
from core.forms import require, show_errors, trimmed
from core.models import StudentProfile
from screens.register import YEAR_LEVELS

EDITABLE = {
    "first_name": "First name",
    "last_name": "Last name",
    "email": "Email",
    "phone_number": "Phone number",
    "address": "Address",
}


def changed_fields(profile: StudentProfile, values: dict) -> dict:
    """Only what differs from the loaded profile is sent."""
    current = profile.model_dump()
    return {k: v for k, v in values.items() if current.get(k) != v}


def render(ctx):
    st.title("👤 My Profile")
    try:
        profile = ctx.student.get_profile()
    except ApiError as e:
        st.error(f"Could not load your profile: {e.message}")
        if st.button("🔄 Retry"):
            st.rerun()
        return

    with st.form("student_profile_form"):
        st.text_input("Student Number", value=profile.student_number, disabled=True)
        c1, c2, c3 = st.columns(3)
        first_name = c1.text_input("First Name *", value=profile.first_name)
        middle_name = c2.text_input("Middle Name", value=profile.middle_name)
        last_name = c3.text_input("Last Name *", value=profile.last_name)
        c1, c2 = st.columns(2)
        email = c1.text_input("Email *", value=profile.email)
        phone_number = c2.text_input("Phone Number *", value=profile.phone_number)
        c1.text_input("Course", value=profile.course, disabled=True)
        year_level = c2.selectbox(
            "Year Level", options=YEAR_LEVELS,
            index=YEAR_LEVELS.index(profile.year_level) if profile.year_level in YEAR_LEVELS else None,
        )
        address = st.text_area("Address *", value=profile.address)
        submitted = st.form_submit_button("Save changes", type="primary")

    if submitted:
        values = trimmed({
            "first_name": first_name, "middle_name": middle_name, "last_name": last_name,
            "email": email, "phone_number": phone_number, "year_level": year_level or "",
            "address": address,
        })
        if not show_errors(require(values, EDITABLE)):
            return
        updates = changed_fields(profile, values)
        if not updates:
            st.info("Nothing to update.")
            return
        try:
            res = ctx.student.update_profile(updates)
        except ApiError as e:
            st.error(f"Update failed: {e.message}")
            return
        ctx.sessions.refresh_profile(name=f"{values['first_name']} {values['last_name']}",
                                     email=values["email"])
        ctx.notifier.notify("success", "Updated!", res.get("message") or "Profile updated.")
        st.rerun()
