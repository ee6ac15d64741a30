# core/api/admin.py
"""Admin-side backend operations, grouped by resource."""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Iterable, Optional
from urllib.parse import quote

from core.api.client import ApiClient, ApiError, Upload, list_params
from core.models import (
    AdminAccount,
    AdminProfile,
    Announcement,
    Application,
    ApplicationStatus,
    Course,
    Department,
    PagedResult,
    Scholarship,
    ScholarshipForm,
    ACCOUNT_STATUSES,
    normalize_application_status,
)


class AdminApi:
    def __init__(self, client: ApiClient, folder_url: str = ""):
        self.client = client
        self.folder_url = folder_url.rstrip("/")

    def _list(self, path: str, parse, page: int, limit: int, search: str = "",
              status: Optional[str] = None, fallback: str = "") -> PagedResult:
        body = self.client.request("GET", path, params=list_params(page, limit, search, status), fallback=fallback)
        return PagedResult.from_response(body, parse, page=page, per_page=limit)

    # ------------------------------------------------------------
    # Courses
    # ------------------------------------------------------------
    def create_course(self, course_code: str, course_name: str) -> Dict[str, Any]:
        return self.client.request("POST", "/admin/course",
                                   json={"course_code": course_code, "course_name": course_name},
                                   fallback="Failed to create course")

    def get_courses(self, page: int = 1, limit: int = 10, search: str = "") -> PagedResult[Course]:
        return self._list("/admin/course", Course.model_validate, page, limit, search,
                          fallback="Failed to fetch courses")

    def edit_course(self, course_code: str, course_name: str) -> Dict[str, Any]:
        return self.client.request("PUT", "/admin/course", params={"course_code": course_code},
                                   json={"course_code": course_code, "course_name": course_name},
                                   fallback="Failed to update course")

    def delete_course(self, course_code: Optional[str] = None, delete_all: bool = False) -> Dict[str, Any]:
        return self.client.request("DELETE", "/admin/course",
                                   params=_delete_params("course_code", course_code, delete_all),
                                   fallback="Failed to delete course")

    # ------------------------------------------------------------
    # Departments
    # ------------------------------------------------------------
    def create_department(self, department_name: str) -> Dict[str, Any]:
        return self.client.request("POST", "/admin/department",
                                   json={"department_name": department_name},
                                   fallback="Failed to create department")

    def get_departments(self, page: int = 1, limit: int = 10, search: str = "") -> PagedResult[Department]:
        return self._list("/admin/department", Department.model_validate, page, limit, search,
                          fallback="Failed to fetch departments")

    def update_department(self, department_id: int, department_name: str) -> Dict[str, Any]:
        return self.client.request("PUT", "/admin/department", params={"department_id": department_id},
                                   json={"department_name": department_name},
                                   fallback="Failed to update department")

    def delete_department(self, department_id: Optional[int] = None, delete_all: bool = False) -> Dict[str, Any]:
        return self.client.request("DELETE", "/admin/department",
                                   params=_delete_params("department_id", department_id, delete_all),
                                   fallback="Failed to delete department")

    # ------------------------------------------------------------
    # Scholarship forms
    # ------------------------------------------------------------
    def create_scholarship_form(self, scholarship_form_name: str, upload: Upload) -> Dict[str, Any]:
        return self.client.request("POST", "/admin/scholarship-form",
                                   data={"scholarship_form_name": scholarship_form_name},
                                   files=[("scholarship_form", upload.as_part())],
                                   fallback="Failed to create scholarship form")

    def get_scholarship_forms(self, page: int = 1, limit: int = 10, search: str = "") -> PagedResult[ScholarshipForm]:
        return self._list("/admin/scholarship-form", ScholarshipForm.model_validate, page, limit, search,
                          fallback="Failed to fetch scholarship forms")

    def edit_scholarship_form(self, scholarship_form_id: int, scholarship_form_name: str = "",
                              upload: Optional[Upload] = None) -> Dict[str, Any]:
        # without a new upload the stored file is kept
        data = {"scholarship_form_name": scholarship_form_name} if scholarship_form_name else {}
        files = [("scholarship_form", upload.as_part())] if upload else []
        return self.client.request("POST", "/admin/scholarship-forms",
                                   params={"scholarship_form_id": scholarship_form_id},
                                   data=data, files=files,
                                   fallback="Failed to update scholarship form")

    def delete_scholarship_form(self, scholarship_form_id: Optional[int] = None,
                                delete_all: bool = False) -> Dict[str, Any]:
        return self.client.request("DELETE", "/admin/scholarship-form",
                                   params=_delete_params("scholarship_form_id", scholarship_form_id, delete_all),
                                   fallback="Failed to delete scholarship form")

    def form_file_url(self, file_ref: str) -> str:
        return f"{self.folder_url}/scholarship_forms/{quote(file_ref)}"

    def download_form(self, file_ref: str) -> bytes:
        if not file_ref:
            raise ApiError("This form has no file attached.", kind="rejected")
        return self.client.download(self.form_file_url(file_ref))

    # ------------------------------------------------------------
    # Scholarships
    # ------------------------------------------------------------
    def create_scholarship(self, **fields) -> Dict[str, Any]:
        return self.client.request("POST", "/admin/scholarship", json=scholarship_body(**fields),
                                   fallback="Failed to create scholarship")

    def get_scholarships(self, page: int = 1, limit: int = 10, search: str = "") -> PagedResult[Scholarship]:
        return self._list("/admin/scholarship", Scholarship.model_validate, page, limit, search,
                          fallback="Failed to fetch scholarships")

    def update_scholarship(self, scholarship_id: int, **fields) -> Dict[str, Any]:
        return self.client.request("PUT", "/admin/scholarship", params={"scholarship_id": scholarship_id},
                                   json=scholarship_body(**fields),
                                   fallback="Failed to update scholarship")

    def delete_scholarship(self, scholarship_id: int) -> Dict[str, Any]:
        return self.client.request("DELETE", "/admin/scholarship", params={"scholarship_id": scholarship_id},
                                   fallback="Failed to delete scholarship")

    # ------------------------------------------------------------
    # Applications
    # ------------------------------------------------------------
    def get_applications(self, page: int = 1, limit: int = 10, search: str = "",
                         status: Optional[str] = None) -> PagedResult[Application]:
        return self._list("/admin/applications", Application.model_validate, page, limit, search,
                          status=_status_param(status), fallback="Failed to fetch applications")

    def update_application_status(self, application_id: int, status: str) -> Dict[str, Any]:
        value = ApplicationStatus(status).value
        return self.client.request("PUT", "/admin/applications",
                                   json={"application_id": application_id, "status": value},
                                   fallback="Failed to update application")

    # ------------------------------------------------------------
    # Announcements
    # ------------------------------------------------------------
    def create_announcement(self, announcement_title: str, announcement_description: str) -> Dict[str, Any]:
        return self.client.request("POST", "/admin/announcement",
                                   json={"announcement_title": announcement_title,
                                         "announcement_description": announcement_description},
                                   fallback="Failed to create announcement")

    def get_announcements(self, page: int = 1, limit: int = 10, search: str = "") -> PagedResult[Announcement]:
        return self._list("/admin/announcement", Announcement.model_validate, page, limit, search,
                          fallback="Failed to fetch announcements")

    def edit_announcement(self, announcement_id: int, announcement_title: str,
                          announcement_description: str) -> Dict[str, Any]:
        return self.client.request("PUT", "/admin/announcement", params={"announcement_id": announcement_id},
                                   json={"announcement_title": announcement_title,
                                         "announcement_description": announcement_description},
                                   fallback="Failed to update announcement")

    def delete_announcement(self, announcement_id: int) -> Dict[str, Any]:
        return self.client.request("DELETE", "/admin/announcement", params={"announcement_id": announcement_id},
                                   fallback="Failed to delete announcement")

    # ------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------
    def get_admins(self, page: int = 1, limit: int = 10, search: str = "",
                   status: Optional[str] = "all") -> PagedResult[AdminAccount]:
        return self._list("/admin/accounts", AdminAccount.model_validate, page, limit, search,
                          status=status or "all", fallback="Failed to fetch admins")

    def update_admin_status(self, user_id: int, status: str) -> Dict[str, Any]:
        if status not in ACCOUNT_STATUSES:
            raise ValueError(f"Unknown account status: {status!r}")
        return self.client.request("PUT", "/admin/accounts", json={"user_id": user_id, "status": status},
                                   fallback="Failed to update admin")

    def delete_admin(self, user_id: int) -> Dict[str, Any]:
        return self.client.request("DELETE", "/admin/accounts", params={"user_id": user_id},
                                   fallback="Failed to delete admin")

    # ------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------
    def get_profile(self) -> AdminProfile:
        body = self.client.request("GET", "/admin/profile", fallback="Failed to fetch profile")
        return AdminProfile.model_validate(body.get("data") or {})

    def update_profile(self, first_name: str, last_name: str, department: Any) -> Dict[str, Any]:
        return self.client.request("PUT", "/admin/profile",
                                   json={"first_name": first_name, "last_name": last_name,
                                         "department": department},
                                   fallback="Failed to update profile")


def _delete_params(key: str, value: Any, delete_all: bool) -> Dict[str, Any]:
    if delete_all:
        return {"delete_all": "true"}
    if value is None or value == "":
        raise ValueError(f"{key} is required unless delete_all is set")
    return {key: value}


def _status_param(status: Optional[str]) -> Optional[str]:
    if not status or status == "all":
        return None
    return normalize_application_status(status).value


def scholarship_body(scholarship_title: str, description: str = "", start_date=None, end_date=None,
                     status: str = "active", amount: Optional[Decimal] = None,
                     course_codes: Iterable[str] = (), scholarship_form_ids: Iterable[int] = ()) -> Dict[str, Any]:
    return {
        "scholarship_title": scholarship_title,
        "description": description,
        "start_date": start_date.isoformat() if hasattr(start_date, "isoformat") else start_date,
        "end_date": end_date.isoformat() if hasattr(end_date, "isoformat") else end_date,
        "status": status,
        "amount": None if amount is None else str(amount),
        "course_codes": list(course_codes),
        "scholarship_form_ids": [int(i) for i in scholarship_form_ids],
    }
