"""
Test: auth and student-side operations.
"""
import pytest

from conftest import FakeResponse
from core.api import ApiError, Upload
from core.models import ApplicationStatus


class TestAuth:
    def test_student_login_builds_session(self, auth_api, backend):
        backend.queued.append(FakeResponse(200, {"success": True, "user": {
            "id": 9, "api_key": "tok", "csrf_token": "c", "first_name": "Sam", "last_name": "Student"}}))
        session = auth_api.student_login("2021-00001", "secret")
        assert session.role == "student"
        assert session.api_key == "tok"
        assert session.name == "Sam Student"
        assert backend.last.json == {"student_number": "2021-00001", "password": "secret"}
        assert "Authorization" not in backend.last.headers

    def test_login_without_api_key_is_rejected(self, auth_api, backend):
        backend.queued.append(FakeResponse(200, {"success": True, "message": "Account pending approval"}))
        with pytest.raises(ApiError) as exc:
            auth_api.admin_login("google-id-token")
        assert exc.value.message == "Account pending approval"

    def test_admin_login_posts_token(self, auth_api, backend):
        backend.queued.append(FakeResponse(200, {"success": True, "user": {"user_id": 1, "api_key": "a"}}))
        session = auth_api.admin_login("google-id-token")
        assert session.role == "admin"
        assert backend.last.path == "/callback"
        assert backend.last.json == {"google_token": "google-id-token"}

    def test_register_is_multipart_without_confirmation(self, auth_api, backend):
        backend.queued.append(FakeResponse(200, {"success": True}))
        docs = {"picture": Upload("me.jpg", b"jpg", "image/jpeg"), "cor": None}
        auth_api.student_register({"first_name": "Sam", "password": "x", "confirm_password": "x",
                                   "middle_name": None}, docs)
        call = backend.last
        assert call.data == {"first_name": "Sam", "password": "x", "middle_name": ""}
        assert call.files == [("picture", ("me.jpg", b"jpg", "image/jpeg"))]


class TestApply:
    def test_apply_then_listed_as_submitted(self, student_api, backend):
        res = student_api.apply_scholarship(42, {"Essay": Upload("essay.pdf", b"%PDF", "application/pdf")})
        assert res["success"] is True
        assert backend.last.data == {"scholarship_id": "42"}
        assert backend.last.files[0][0] == "files[Essay]"

        apps = student_api.get_applications()
        mine = [a for a in apps.items if a.scholarship_id == 42]
        assert len(mine) == 1
        assert mine[0].status is ApplicationStatus.SUBMITTED
        assert mine[0].uploaded_forms[0].form_name == "Essay"

    def test_missing_file_blocks_request(self, student_api, backend):
        with pytest.raises(ApiError) as exc:
            student_api.apply_scholarship(42, {"Essay": None})
        assert "Essay" in exc.value.message
        assert backend.calls == []

    def test_unknown_scholarship(self, student_api):
        with pytest.raises(ApiError) as exc:
            student_api.apply_scholarship(404, {})
        assert exc.value.status_code == 404


class TestStudentLists:
    def test_courses_are_public(self, student_api, backend):
        backend.courses = {"BSIT": "Information Technology"}
        page = student_api.get_courses()
        assert [c.course_code for c in page.items] == ["BSIT"]
        assert backend.last.params["limit"] == 100
        assert "Authorization" not in backend.last.headers

    def test_scholarships(self, student_api):
        page = student_api.get_scholarships()
        s = page.items[0]
        assert s.scholarship_id == 42
        assert s.course_codes == ["BSIT", "BSCS"]
        assert s.scholarship_form_ids == [3]

    def test_application_filter_all_not_sent(self, student_api, backend):
        student_api.get_applications(status="all")
        assert "status" not in backend.last.params

    def test_profile(self, student_api, backend):
        backend.queued.append(FakeResponse(200, {"success": True, "data": {
            "student_number": "2021-00001", "first_name": "Sam", "year_level": "2nd Year"}}))
        profile = student_api.get_profile()
        assert profile.first_name == "Sam"
        assert profile.year_level == "2nd Year"
