# core/nav_registry.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from core.session import ROLE_ADMIN, ROLE_STUDENT

# Page renderer signature: (ctx) -> None
PageFn = Callable[[object], None]

@dataclass(frozen=True)
class Route:
    key: str                  # stable id, also the Streamlit url_path
    label: str                # UI label
    icon: str                 # emoji or short string
    path: str                 # logical path checked by core.router
    render: PageFn            # callable that renders the page
    in_sidebar: bool = True

@dataclass
class Section:
    title: str
    role: Optional[str]       # None = public
    routes: List[Route]

from screens import login, register, admin_login, logout
from screens.admin import (
    overview as admin_overview,
    courses as admin_courses,
    departments as admin_departments,
    scholarship_forms as admin_forms,
    scholarships as admin_scholarships,
    applications as admin_applications,
    announcements as admin_announcements,
    accounts as admin_accounts,
    profile as admin_profile,
)
from screens.student import (
    overview as student_overview,
    scholarships as student_scholarships,
    applications as student_applications,
    announcements as student_announcements,
    profile as student_profile,
)

SECTIONS: List[Section] = [
    Section("Sign in", None, [
        Route("login",        "Student Login",   "🔐", "/login",         login.render),
        Route("register",     "Register",        "📝", "/register",      register.render),
        Route("admin_login",  "Admin Login",     "🛡️", "/admin/login",   admin_login.render),
    ]),
    Section("Student", ROLE_STUDENT, [
        Route("dashboard",               "Overview",      "🏠", "/dashboard",               student_overview.render),
        Route("dashboard_scholarships",  "Scholarships",  "🎓", "/dashboard/scholarships",  student_scholarships.render),
        Route("dashboard_applications",  "Applications",  "📄", "/dashboard/applications",  student_applications.render),
        Route("dashboard_announcements", "Announcements", "📣", "/dashboard/announcements", student_announcements.render),
        Route("dashboard_profile",       "Profile",       "👤", "/dashboard/profile",       student_profile.render),
    ]),
    Section("Administration", ROLE_ADMIN, [
        Route("admin",                   "Overview",          "📊", "/admin",                   admin_overview.render),
        Route("admin_courses",           "Courses",           "📚", "/admin/courses",           admin_courses.render),
        Route("admin_departments",       "Departments",       "🏢", "/admin/departments",       admin_departments.render),
        Route("admin_forms",             "Scholarship Forms", "🗂️", "/admin/forms",             admin_forms.render),
        Route("admin_scholarships",      "Scholarships",      "🎓", "/admin/scholarships",      admin_scholarships.render),
        Route("admin_applications",      "Applications",      "📄", "/admin/applications",      admin_applications.render),
        Route("admin_announcements",     "Announcements",     "📣", "/admin/announcements",     admin_announcements.render),
        Route("admin_accounts",          "Accounts",          "👥", "/admin/accounts",          admin_accounts.render),
        Route("admin_profile",           "Profile",           "👤", "/admin/profile",           admin_profile.render),
    ]),
    Section("Session", None, [
        Route("logout",       "Logout",          "🚪", "/logout",        logout.render, in_sidebar=False),
    ]),
]

# Index for quick lookup (used by router)
ROUTE_INDEX: Dict[str, Route] = {r.key: r for s in SECTIONS for r in s.routes}
PATH_INDEX: Dict[str, Route] = {r.path: r for s in SECTIONS for r in s.routes}

def sections_for(role: Optional[str]) -> List[Section]:
    return [s for s in SECTIONS if s.role == role and any(r.in_sidebar for r in s.routes)]
