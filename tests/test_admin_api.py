"""
Test: admin resource operations against the fake backend.
"""
from datetime import date
from decimal import Decimal

import pytest

from conftest import FOLDER_URL, FakeResponse
from core.api import ApiError, Upload
from core.api.admin import scholarship_body
from core.models import ApplicationStatus


class TestCourses:
    def test_created_course_is_listed(self, admin_api, backend):
        res = admin_api.create_course("CS101", "Intro to Computing")
        assert res["success"] is True
        page = admin_api.get_courses(page=1, search="")
        codes = [c.course_code for c in page.items]
        assert codes.count("CS101") == 1
        assert backend.calls[0].json == {"course_code": "CS101", "course_name": "Intro to Computing"}

    def test_duplicate_code_is_an_error(self, admin_api):
        admin_api.create_course("CS101", "Intro")
        with pytest.raises(ApiError) as exc:
            admin_api.create_course("CS101", "Again")
        assert exc.value.status_code == 409

    def test_edit_keys_on_code(self, admin_api, backend):
        admin_api.create_course("CS101", "Intro")
        admin_api.edit_course("CS101", "Intro to Computing")
        assert backend.last.params == {"course_code": "CS101"}
        assert backend.courses["CS101"] == "Intro to Computing"

    def test_search_with_no_match(self, admin_api):
        admin_api.create_course("CS101", "Intro")
        page = admin_api.get_courses(search="zzz")
        assert page.items == []
        assert page.total_items == 0

    def test_delete_all(self, admin_api, backend):
        admin_api.create_course("CS101", "Intro")
        admin_api.create_course("IT201", "Networks")
        admin_api.delete_course(delete_all=True)
        assert backend.last.params == {"delete_all": "true"}
        assert backend.courses == {}

    def test_delete_needs_an_id(self, admin_api, backend):
        with pytest.raises(ValueError):
            admin_api.delete_course()
        assert backend.calls == []

    def test_requires_admin_token(self, backend, auth_api):
        from core.api import AdminApi
        anon = AdminApi(auth_api.client)
        with pytest.raises(ApiError) as exc:
            anon.get_courses()
        assert exc.value.status_code == 401


class TestDepartments:
    def test_deleted_department_is_gone_and_second_delete_fails(self, admin_api, backend):
        backend.departments = {6: "Engineering", 7: "Nursing"}
        admin_api.delete_department(department_id=7)
        ids = [d.department_id for d in admin_api.get_departments().items]
        assert 7 not in ids and 6 in ids
        with pytest.raises(ApiError) as exc:
            admin_api.delete_department(department_id=7)
        assert exc.value.kind == "rejected"
        assert exc.value.message == "Department not found"

    def test_update(self, admin_api, backend):
        backend.departments = {7: "Nursing"}
        admin_api.update_department(7, "College of Nursing")
        assert backend.last.params == {"department_id": 7}
        assert backend.departments[7] == "College of Nursing"


class TestScholarshipForms:
    def test_create_is_multipart(self, admin_api, backend):
        backend.queued.append(FakeResponse(200, {"success": True}))
        admin_api.create_scholarship_form("Essay", Upload("essay.pdf", b"%PDF", "application/pdf"))
        call = backend.last
        assert call.data == {"scholarship_form_name": "Essay"}
        assert call.files == [("scholarship_form", ("essay.pdf", b"%PDF", "application/pdf"))]

    def test_edit_without_file_keeps_stored_file(self, admin_api, backend):
        backend.queued.append(FakeResponse(200, {"success": True}))
        admin_api.edit_scholarship_form(3, "Essay (2025)")
        call = backend.last
        assert call.method == "POST" and call.path == "/admin/scholarship-forms"
        assert call.params == {"scholarship_form_id": 3}
        assert call.uploads() == []
        assert call.form() == {"scholarship_form_name": "Essay (2025)"}

    def test_file_url_and_download(self, admin_api, backend):
        assert admin_api.form_file_url("my essay.pdf") == f"{FOLDER_URL}/scholarship_forms/my%20essay.pdf"
        backend.files["essay.pdf"] = b"%PDF"
        assert admin_api.download_form("essay.pdf") == b"%PDF"

    def test_download_without_file(self, admin_api):
        with pytest.raises(ApiError):
            admin_api.download_form("")


class TestScholarships:
    def test_body_serialization(self):
        body = scholarship_body("Merit", start_date=date(2025, 6, 1), end_date=date(2025, 7, 1),
                                amount=Decimal("5000"), course_codes=["BSIT"], scholarship_form_ids=["3"])
        assert body["start_date"] == "2025-06-01"
        assert body["amount"] == "5000"
        assert body["scholarship_form_ids"] == [3]
        assert body["status"] == "active"

    def test_update_keys_on_id(self, admin_api, backend):
        backend.queued.append(FakeResponse(200, {"success": True}))
        admin_api.update_scholarship(42, scholarship_title="Merit", amount=None)
        assert backend.last.params == {"scholarship_id": 42}
        assert backend.last.json["amount"] is None


class TestApplications:
    def test_status_filter_all_is_not_sent(self, admin_api, backend):
        admin_api.get_applications(status="all")
        assert "status" not in backend.last.params

    def test_legacy_filter_is_normalized(self, admin_api, backend):
        admin_api.get_applications(status="pending")
        assert backend.last.params["status"] == "submitted"

    def test_unknown_filter_rejected(self, admin_api):
        with pytest.raises(ValueError):
            admin_api.get_applications(status="lost")

    def test_update_status(self, admin_api, backend):
        backend.applications.append({"application_id": 5, "scholarship_id": 42, "status": "submitted"})
        admin_api.update_application_status(5, "review")
        assert backend.last.json == {"application_id": 5, "status": "review"}
        page = admin_api.get_applications(status="review")
        assert [a.status for a in page.items] == [ApplicationStatus.REVIEW]

    def test_unknown_status_rejected_before_request(self, admin_api, backend):
        with pytest.raises(ValueError):
            admin_api.update_application_status(5, "maybe")
        assert backend.calls == []


class TestAccounts:
    def test_admins_default_to_all(self, admin_api, backend):
        backend.queued.append(FakeResponse(200, {"success": True, "data": []}))
        admin_api.get_admins()
        assert backend.last.params["status"] == "all"

    def test_status_must_be_known(self, admin_api, backend):
        with pytest.raises(ValueError):
            admin_api.update_admin_status(2, "banned")
        assert backend.calls == []

    def test_approve(self, admin_api, backend):
        backend.queued.append(FakeResponse(200, {"success": True, "message": "Admin approved"}))
        res = admin_api.update_admin_status(2, "approved")
        assert res["message"] == "Admin approved"
        assert backend.last.json == {"user_id": 2, "status": "approved"}
