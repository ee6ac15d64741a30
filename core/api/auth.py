# core/api/auth.py
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from core.api.client import ApiClient, ApiError, Upload
from core.session import ROLE_ADMIN, ROLE_STUDENT, Session

# multipart field names for the registration documents
REGISTRATION_DOCUMENTS = {
    "picture": "2x2 Picture",
    "school_id": "Valid School ID",
    "indigency": "Certificate of Indigency",
    "cor": "Certificate of Registration (COR)",
}


class AuthApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def student_login(self, student_number: str, password: str) -> Session:
        body = self.client.request(
            "POST", "/login",
            json={"student_number": student_number, "password": password},
            auth=False, fallback="Login failed",
        )
        return self._session_from(body, ROLE_STUDENT)

    def student_register(self, fields: Mapping[str, Any], documents: Mapping[str, Optional[Upload]]) -> Dict[str, Any]:
        files = [(key, upload.as_part()) for key, upload in documents.items() if upload is not None]
        data = {k: "" if v is None else str(v) for k, v in fields.items() if k != "confirm_password"}
        return self.client.request(
            "POST", "/register", data=data, files=files,
            auth=False, fallback="Registration failed",
        )

    def admin_login(self, google_token: str) -> Session:
        body = self.client.request(
            "POST", "/callback", json={"google_token": google_token},
            auth=False, fallback="Authentication failed",
        )
        return self._session_from(body, ROLE_ADMIN)

    @staticmethod
    def _session_from(body: Dict[str, Any], role: str) -> Session:
        user = body.get("user")
        if not isinstance(user, dict) or not user.get("api_key"):
            raise ApiError(body.get("message") or "Login failed", kind="rejected")
        return Session.from_login(user, role)
