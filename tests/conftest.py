"""
Shared fixtures for the dashboard tests.
The backend is an in-memory fake plugged into ApiClient as its HTTP transport,
so no test touches the network.
"""
import json
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pytest

from core.api import AdminApi, ApiClient, AuthApi, StudentApi
from core.db import get_engine, init_db
from core.session import Session, StaticSessionProvider

BASE_URL = "http://api.test/api"
FOLDER_URL = "http://api.test/uploads"


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, text: Optional[str] = None,
                 content: bytes = b""):
        self.status_code = status_code
        self._body = body
        self._text = text
        self.content = content

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        if self._text is not None:
            return self._text
        return "" if self._body is None else json.dumps(self._body)

    def json(self):
        if self._body is None:
            raise ValueError("No JSON object could be decoded")
        return self._body


@dataclass
class Call:
    method: str
    path: str
    params: Dict[str, Any]
    json: Any
    data: Any
    files: Any
    headers: Dict[str, str] = field(default_factory=dict)

    def form(self) -> Dict[str, Any]:
        """Plain form fields, whether sent as `data` or as filename-less parts."""
        fields = dict(self.data or {})
        for name, part in self.files or []:
            if part[0] is None:
                fields[name] = part[1]
        return fields

    def uploads(self) -> List[Any]:
        return [(name, part) for name, part in self.files or [] if part[0] is not None]


def ok(**body) -> FakeResponse:
    return FakeResponse(200, {"success": True, **body})


def fail(status: int, error: str) -> FakeResponse:
    return FakeResponse(status, {"success": False, "error": error})


def paged(rows: List[dict], params: Dict[str, Any], *fields: str) -> FakeResponse:
    search = str(params.get("search") or "").lower()
    if search:
        rows = [r for r in rows if any(search in str(r.get(f, "")).lower() for f in fields)]
    page = int(params.get("page", 1))
    limit = int(params.get("limit", 10))
    total = len(rows)
    pages = math.ceil(total / limit)
    start = (page - 1) * limit
    return ok(data=rows[start:start + limit], pagination={
        "current_page": page, "per_page": limit, "total_items": total,
        "total_pages": pages, "has_next": page < pages, "has_prev": page > 1,
    })


class FakeBackend:
    """Just enough of the scholarship API to drive the client end to end."""

    def __init__(self):
        self.calls: List[Call] = []
        self.queued: List[Any] = []
        self.courses: Dict[str, str] = {}
        self.departments: Dict[int, str] = {}
        self.scholarships: Dict[int, dict] = {
            42: {"scholarship_id": 42, "scholarship_title": "Academic Excellence", "status": "active",
                 "amount": "5000.00", "course_codes": "BSIT,BSCS",
                 "scholarship_forms": [{"scholarship_form_id": 3, "scholarship_form_name": "Essay",
                                        "scholarship_form": "essay.pdf"}]},
        }
        self.applications: List[dict] = []
        self.files: Dict[str, bytes] = {}
        self._next_id = 100
        self.routes = {
            ("GET", "/admin/course"): self._list_courses,
            ("POST", "/admin/course"): self._create_course,
            ("PUT", "/admin/course"): self._edit_course,
            ("DELETE", "/admin/course"): self._delete_course,
            ("GET", "/admin/department"): self._list_departments,
            ("POST", "/admin/department"): self._create_department,
            ("PUT", "/admin/department"): self._edit_department,
            ("DELETE", "/admin/department"): self._delete_department,
            ("GET", "/admin/applications"): self._admin_applications,
            ("PUT", "/admin/applications"): self._set_application_status,
            ("GET", "/student/course"): self._list_courses,
            ("GET", "/student/scholarship"): self._list_scholarships,
            ("POST", "/student/apply"): self._apply,
            ("GET", "/student/applications"): self._student_applications,
        }

    # ------------------------------------------------------------
    # transport
    # ------------------------------------------------------------
    def request(self, method, url, params=None, json=None, data=None, files=None,
                headers=None, timeout=None):
        path = url.split("://", 1)[-1]
        path = path[path.index("/"):] if "/" in path else "/"
        if path.startswith("/api/"):
            path = path[len("/api"):]
        call = Call(method, path, dict(params or {}), json, data, files, dict(headers or {}))
        self.calls.append(call)

        if self.queued:
            nxt = self.queued.pop(0)
            if isinstance(nxt, Exception):
                raise nxt
            return nxt
        if path.startswith("/uploads/"):
            name = path.rsplit("/", 1)[-1]
            if name in self.files:
                return FakeResponse(200, content=self.files[name])
            return FakeResponse(404, text="Not Found")
        if path.startswith("/admin") and call.headers.get("Authorization", "Bearer ") == "Bearer ":
            return fail(401, "Unauthorized")

        handler = self.routes.get((method, path))
        if handler is None:
            return fail(404, f"No route for {method} {path}")
        return handler(call)

    @property
    def last(self) -> Call:
        return self.calls[-1]

    def _new_id(self) -> int:
        self._next_id += 1
        return self._next_id

    # ------------------------------------------------------------
    # courses
    # ------------------------------------------------------------
    def _list_courses(self, call):
        rows = [{"course_code": c, "course_name": n} for c, n in sorted(self.courses.items())]
        return paged(rows, call.params, "course_code", "course_name")

    def _create_course(self, call):
        code = (call.json or {}).get("course_code", "")
        if code in self.courses:
            return fail(409, "Course code already exists")
        self.courses[code] = call.json.get("course_name", "")
        return ok(message="Course created")

    def _edit_course(self, call):
        code = call.params.get("course_code")
        if code not in self.courses:
            return fail(404, "Course not found")
        self.courses[code] = call.json.get("course_name", "")
        return ok(message="Course updated")

    def _delete_course(self, call):
        if call.params.get("delete_all") == "true":
            self.courses.clear()
            return ok(message="All courses deleted")
        code = call.params.get("course_code")
        if code not in self.courses:
            return fail(404, "Course not found")
        del self.courses[code]
        return ok(message="Course deleted")

    # ------------------------------------------------------------
    # departments: a missing id answers 200 with success=false
    # ------------------------------------------------------------
    def _list_departments(self, call):
        rows = [{"department_id": i, "department_name": n} for i, n in sorted(self.departments.items())]
        return paged(rows, call.params, "department_name")

    def _create_department(self, call):
        dept_id = self._new_id()
        self.departments[dept_id] = call.json["department_name"]
        return ok(message="Department created", data={"department_id": dept_id})

    def _edit_department(self, call):
        dept_id = int(call.params.get("department_id"))
        if dept_id not in self.departments:
            return FakeResponse(200, {"success": False, "error": "Department not found"})
        self.departments[dept_id] = call.json["department_name"]
        return ok(message="Department updated")

    def _delete_department(self, call):
        if call.params.get("delete_all") == "true":
            self.departments.clear()
            return ok(message="All departments deleted")
        dept_id = int(call.params.get("department_id"))
        if dept_id not in self.departments:
            return FakeResponse(200, {"success": False, "error": "Department not found"})
        del self.departments[dept_id]
        return ok(message="Department deleted")

    # ------------------------------------------------------------
    # scholarships and applications
    # ------------------------------------------------------------
    def _list_scholarships(self, call):
        return paged(list(self.scholarships.values()), call.params, "scholarship_title")

    def _apply(self, call):
        sid = int(call.form().get("scholarship_id", 0))
        if sid not in self.scholarships:
            return fail(404, "Scholarship not found")
        uploaded = [{"form_name": field_name[len("files["):-1], "file_ref": part[0]}
                    for field_name, part in call.uploads()]
        self.applications.append({
            "application_id": self._new_id(),
            "scholarship_id": sid,
            "scholarship_title": self.scholarships[sid]["scholarship_title"],
            "student_number": "2021-00001",
            "student_name": "Sam Student",
            "status": "submitted",
            "uploaded_forms": uploaded,
        })
        return ok(message="Application submitted")

    def _filtered_applications(self, call):
        rows = self.applications
        status = call.params.get("status")
        if status:
            rows = [a for a in rows if a["status"] == status]
        return paged(rows, call.params, "scholarship_title", "student_name")

    def _student_applications(self, call):
        return self._filtered_applications(call)

    def _admin_applications(self, call):
        return self._filtered_applications(call)

    def _set_application_status(self, call):
        body = call.json or {}
        for a in self.applications:
            if a["application_id"] == body.get("application_id"):
                a["status"] = body["status"]
                return ok(message="Application updated")
        return fail(404, "Application not found")


class RecordingNotifier:
    """Notifier capability that remembers what it was asked to show."""

    def __init__(self, answer: bool = True):
        self.answer = answer
        self.notices: List[tuple] = []
        self.prompts: List[str] = []

    def confirm(self, prompt, key=None):
        self.prompts.append(prompt)
        return self.answer

    def notify(self, kind, title, message):
        self.notices.append((kind, title, message))

    def kinds(self) -> List[str]:
        return [k for k, _, _ in self.notices]


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def admin_session():
    return Session(role="admin", api_key="admin-key", csrf_token="csrf-admin", user_id=1,
                   name="Ada Admin", email="ada@university.edu")


@pytest.fixture
def student_session():
    return Session(role="student", api_key="student-key", csrf_token="csrf-student", id=9,
                   name="Sam Student")


@pytest.fixture
def admin_client(backend, admin_session):
    return ApiClient(BASE_URL, StaticSessionProvider(admin_session), http=backend)


@pytest.fixture
def student_client(backend, student_session):
    return ApiClient(BASE_URL, StaticSessionProvider(student_session), http=backend)


@pytest.fixture
def admin_api(admin_client):
    return AdminApi(admin_client, folder_url=FOLDER_URL)


@pytest.fixture
def student_api(student_client):
    return StudentApi(student_client)


@pytest.fixture
def auth_api(backend):
    return AuthApi(ApiClient(BASE_URL, StaticSessionProvider(None), http=backend))


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def engine(tmp_path):
    eng = get_engine(f"sqlite:///{tmp_path / 'client_storage.db'}")
    init_db(eng)
    return eng
