# screens/admin/overview.py
from __future__ import annotations
import logging
from typing import Callable, Optional

import streamlit as st

from core.api import ApiError
from core.models import PagedResult
from core.navigation import go

logger = logging.getLogger(__name__)


def count_of(fetch: Callable[..., PagedResult], **filters) -> Optional[int]:
    """Total rows behind a list endpoint, read from a one-row page."""
    try:
        return fetch(page=1, limit=1, **filters).total_items
    except ApiError as e:
        logger.warning("Overview count failed: %s", e)
        return None


def _metric(col, label: str, value: Optional[int], path: str, key: str):
    with col:
        st.metric(label, "—" if value is None else value)
        if st.button("Open", key=key, use_container_width=True):
            go(path)


def render(ctx):
    session = ctx.session
    st.title("🏠 Admin Dashboard")
    st.caption(f"Welcome back, {session.name or session.email or 'Admin'}.")

    api = ctx.admin
    c1, c2, c3 = st.columns(3)
    _metric(c1, "Scholarships", count_of(api.get_scholarships), "/admin/scholarships", "ov_sch")
    _metric(c2, "New applications", count_of(api.get_applications, status="submitted"),
            "/admin/applications", "ov_apps")
    _metric(c3, "Pending admins", count_of(api.get_admins, status="pending"),
            "/admin/accounts", "ov_accts")

    c1, c2, c3 = st.columns(3)
    _metric(c1, "Courses", count_of(api.get_courses), "/admin/courses", "ov_courses")
    _metric(c2, "Departments", count_of(api.get_departments), "/admin/departments", "ov_depts")
    _metric(c3, "Announcements", count_of(api.get_announcements), "/admin/announcements", "ov_ann")
