# core/api/student.py
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from core.api.client import ApiClient, ApiError, Upload, list_params
from core.models import Announcement, Application, Course, PagedResult, Scholarship, StudentProfile


class StudentApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def get_courses(self, page: int = 1, limit: int = 100, search: str = "") -> PagedResult[Course]:
        # public: the registration form lists courses before anyone signs in
        body = self.client.request("GET", "/student/course", params=list_params(page, limit, search),
                                   auth=False, fallback="Failed to fetch courses")
        return PagedResult.from_response(body, Course.model_validate, page=page, per_page=limit)

    def get_scholarships(self, page: int = 1, limit: int = 10, search: str = "") -> PagedResult[Scholarship]:
        body = self.client.request("GET", "/student/scholarship", params=list_params(page, limit, search),
                                   fallback="Failed to fetch scholarships")
        return PagedResult.from_response(body, Scholarship.model_validate, page=page, per_page=limit)

    def apply_scholarship(self, scholarship_id: int, files: Mapping[str, Optional[Upload]]) -> Dict[str, Any]:
        missing = [name for name, upload in files.items() if upload is None]
        if missing:
            raise ApiError(f"Missing file for: {', '.join(missing)}", kind="rejected")
        parts = [(f"files[{name}]", upload.as_part()) for name, upload in files.items()]
        return self.client.request("POST", "/student/apply",
                                   data={"scholarship_id": str(scholarship_id)}, files=parts,
                                   fallback="Failed to submit application")

    def get_profile(self) -> StudentProfile:
        body = self.client.request("GET", "/student/profile", fallback="Failed to fetch profile")
        return StudentProfile.model_validate(body.get("data") or {})

    def update_profile(self, updates: Mapping[str, Any]) -> Dict[str, Any]:
        return self.client.request("PUT", "/student/profile", json=dict(updates),
                                   fallback="Failed to update profile")

    def get_applications(self, page: int = 1, limit: int = 10, search: str = "",
                         status: Optional[str] = None) -> PagedResult[Application]:
        params = list_params(page, limit, search, None if status in (None, "", "all") else status)
        body = self.client.request("GET", "/student/applications", params=params,
                                   fallback="Failed to fetch applications")
        return PagedResult.from_response(body, Application.model_validate, page=page, per_page=limit)

    def get_announcements(self, page: int = 1, limit: int = 10, search: str = "") -> PagedResult[Announcement]:
        body = self.client.request("GET", "/student/announcement", params=list_params(page, limit, search),
                                   fallback="Failed to fetch announcements")
        return PagedResult.from_response(body, Announcement.model_validate, page=page, per_page=limit)
