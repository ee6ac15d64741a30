# screens/register.py
from __future__ import annotations
import logging
import streamlit as st

from core.api import ApiError, Upload
from core.api.auth import REGISTRATION_DOCUMENTS
from core.forms import passwords_match, require, show_errors, trimmed
from core.navigation import go
from core.router import LOGIN
from core.ui import hide_sidebar

logger = logging.getLogger(__name__)

YEAR_LEVELS = ["1st Year", "2nd Year", "3rd Year", "4th Year", "5th Year"]

REQUIRED_FIELDS = {
    "first_name": "First name",
    "last_name": "Last name",
    "student_number": "Student number",
    "email": "Email",
    "phone_number": "Phone number",
    "course": "Course",
    "year_level": "Year level",
    "address": "Address",
    "password": "Password",
}


def _course_options(ctx) -> list[str]:
    try:
        result = ctx.student.get_courses(page=1, limit=100)
    except ApiError as e:
        logger.warning("Course list unavailable for registration: %s", e)
        return []
    return [c.course_code for c in result.items]


def registration_errors(values: dict, documents: dict) -> list[str]:
    errors = require(values, REQUIRED_FIELDS)
    errors += passwords_match(values.get("password", ""), values.get("confirm_password", ""))
    errors += [f"{label} is required." for key, label in REGISTRATION_DOCUMENTS.items() if documents.get(key) is None]
    return errors


def render(ctx):
    hide_sidebar()
    st.title("📝 Student Registration")

    courses = _course_options(ctx)

    with st.form("register_form"):
        st.markdown("#### Personal information")
        c1, c2, c3 = st.columns(3)
        first_name = c1.text_input("First Name *")
        middle_name = c2.text_input("Middle Name")
        last_name = c3.text_input("Last Name *")

        c1, c2 = st.columns(2)
        student_number = c1.text_input("Student Number *")
        email = c2.text_input("Email *")
        phone_number = c1.text_input("Phone Number *")
        if courses:
            course = c2.selectbox("Course *", options=courses, index=None, placeholder="Select course")
        else:
            course = c2.text_input("Course *")
        year_level = c1.selectbox("Year Level *", options=YEAR_LEVELS, index=None, placeholder="Select year")
        address = st.text_area("Address *")

        st.markdown("#### Documents")
        uploads = {
            key: st.file_uploader(f"{label} *", key=f"reg_{key}")
            for key, label in REGISTRATION_DOCUMENTS.items()
        }

        st.markdown("#### Account")
        c1, c2 = st.columns(2)
        password = c1.text_input("Password *", type="password")
        confirm_password = c2.text_input("Confirm Password *", type="password")

        submitted = st.form_submit_button("Register", type="primary")

    if submitted:
        values = trimmed({
            "first_name": first_name, "middle_name": middle_name, "last_name": last_name,
            "student_number": student_number, "email": email, "phone_number": phone_number,
            "course": course, "year_level": year_level, "address": address,
        })
        values["password"] = password
        values["confirm_password"] = confirm_password
        documents = {key: Upload.from_streamlit(f) for key, f in uploads.items()}

        if show_errors(registration_errors(values, documents)):
            try:
                res = ctx.auth.student_register(values, documents)
            except ApiError as e:
                st.error(f"Registration failed: {e.message}")
            else:
                ctx.notifier.notify("success", "Registration Submitted",
                                    res.get("message") or "You can now sign in with your student number.")
                go(LOGIN)

    if st.button("← Back to login"):
        go(LOGIN)
