# core/models.py
"""
Typed views of the backend's JSON payloads.

Field names follow the wire format (snake_case) so a record can be sent back
with `model_dump()` without an alias layer.
"""
from __future__ import annotations

import math
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Literal, Optional, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

T = TypeVar("T")


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# ------------------------------------------------------------
# Status vocabularies
# ------------------------------------------------------------
class ApplicationStatus(str, Enum):
    SUBMITTED = "submitted"
    REVIEW = "review"
    INTERVIEW = "interview"
    APPROVED = "approved"
    GRANTED = "granted"
    REJECTED = "rejected"

    @property
    def label(self) -> str:
        return APPLICATION_STATUS_LABELS[self]


APPLICATION_STATUS_LABELS = {
    ApplicationStatus.SUBMITTED: "Submitted",
    ApplicationStatus.REVIEW: "Under Review",
    ApplicationStatus.INTERVIEW: "Interview",
    ApplicationStatus.APPROVED: "Approved",
    ApplicationStatus.GRANTED: "Granted",
    ApplicationStatus.REJECTED: "Rejected",
}

# older admin screens used pending/approved/declined for applications
LEGACY_APPLICATION_STATUS = {
    "pending": ApplicationStatus.SUBMITTED,
    "declined": ApplicationStatus.REJECTED,
}

# review workflow: which statuses an admin may move an application to next
APPLICATION_TRANSITIONS = {
    ApplicationStatus.SUBMITTED: (ApplicationStatus.REVIEW, ApplicationStatus.REJECTED),
    ApplicationStatus.REVIEW: (ApplicationStatus.INTERVIEW, ApplicationStatus.REJECTED),
    ApplicationStatus.INTERVIEW: (ApplicationStatus.APPROVED, ApplicationStatus.REJECTED),
    ApplicationStatus.APPROVED: (ApplicationStatus.GRANTED,),
    ApplicationStatus.GRANTED: (),
    ApplicationStatus.REJECTED: (),
}


def normalize_application_status(value: Any) -> ApplicationStatus:
    raw = str(value or "").strip().lower()
    if raw in LEGACY_APPLICATION_STATUS:
        return LEGACY_APPLICATION_STATUS[raw]
    return ApplicationStatus(raw)


AccountStatus = Literal["pending", "approved", "declined"]
ScholarshipStatus = Literal["active", "archive"]
ACCOUNT_STATUSES = ("pending", "approved", "declined")
SCHOLARSHIP_STATUSES = ("active", "archive")


# ------------------------------------------------------------
# Entities
# ------------------------------------------------------------
class Course(_Record):
    course_code: str
    course_name: str = ""


class Department(_Record):
    department_id: int
    department_name: str = ""


class ScholarshipForm(_Record):
    scholarship_form_id: int
    scholarship_form_name: str = ""
    scholarship_form: str = ""  # stored file name


class Scholarship(_Record):
    scholarship_id: int
    scholarship_title: str = ""
    description: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: ScholarshipStatus = "active"
    amount: Optional[Decimal] = Field(default=None, ge=0)
    course_codes: List[str] = Field(default_factory=list)
    scholarship_form_ids: List[int] = Field(default_factory=list)
    scholarship_forms: List[ScholarshipForm] = Field(default_factory=list)

    @field_validator("course_codes", mode="before")
    @classmethod
    def _split_codes(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [c.strip() for c in v.split(",") if c.strip()]
        return v

    @field_validator("amount", "start_date", "end_date", mode="before")
    @classmethod
    def _blank_is_none(cls, v):
        return None if v == "" else v

    @model_validator(mode="after")
    def _derive_form_ids(self):
        if not self.scholarship_form_ids and self.scholarship_forms:
            self.scholarship_form_ids = [f.scholarship_form_id for f in self.scholarship_forms]
        return self

    @property
    def is_open(self) -> bool:
        today = date.today()
        if self.status != "active":
            return False
        if self.start_date and today < self.start_date:
            return False
        if self.end_date and today > self.end_date:
            return False
        return True


class UploadedForm(_Record):
    form_name: str = ""
    file_ref: str = ""
    uploaded_at: Optional[datetime] = None


class Application(_Record):
    application_id: int
    scholarship_id: int
    scholarship_title: str = ""
    student_number: str = ""
    student_name: str = ""
    status: ApplicationStatus = ApplicationStatus.SUBMITTED
    submitted_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    uploaded_forms: List[UploadedForm] = Field(default_factory=list)

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, v):
        return normalize_application_status(v)


class Announcement(_Record):
    announcement_id: int
    announcement_title: str = ""
    announcement_description: str = ""
    first_name: str = ""
    last_name: str = ""
    created_at: Optional[datetime] = None

    @property
    def author_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class AdminAccount(_Record):
    user_id: int
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    department_id: Optional[int] = None
    department_name: str = ""
    status: AccountStatus = "pending"

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, v):
        return v or "pending"

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class AdminProfile(_Record):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    department: Optional[Any] = None


class StudentProfile(_Record):
    student_number: str = ""
    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""
    email: str = ""
    phone_number: str = ""
    course: str = ""
    year_level: str = ""
    address: str = ""


# ------------------------------------------------------------
# List envelope
# ------------------------------------------------------------
class PagedResult(Generic[T]):
    """One page of a list endpoint. Flags are derived so the invariants always hold."""

    __slots__ = ("items", "page", "per_page", "total_items", "total_pages")

    def __init__(self, items: Sequence[T], page: int, per_page: int, total_items: int,
                 total_pages: Optional[int] = None):
        if per_page <= 0:
            raise ValueError("per_page must be positive")
        self.items: List[T] = list(items)
        self.page = max(1, int(page))
        self.per_page = int(per_page)
        self.total_items = max(0, int(total_items))
        self.total_pages = math.ceil(self.total_items / self.per_page) if total_pages is None else max(0, int(total_pages))

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @classmethod
    def empty(cls, per_page: int = 10) -> "PagedResult[T]":
        return cls([], page=1, per_page=per_page, total_items=0)

    @classmethod
    def from_response(cls, body: Dict[str, Any], parse: Callable[[Dict[str, Any]], T],
                      page: int = 1, per_page: int = 10) -> "PagedResult[T]":
        """Parse a list envelope. Any shape problem surfaces as ValueError."""
        if not isinstance(body, dict):
            raise ValueError("List response is not an object")
        rows = body.get("data") or []
        if not isinstance(rows, list):
            rows = []
        meta = body.get("pagination") or {}
        if not isinstance(meta, dict):
            raise ValueError("Malformed pagination in list response")
        try:
            items = [parse(r) for r in rows]
            per = int(meta.get("per_page") or per_page or len(items) or 1)
            total = meta.get("total_items")
            if total is None:
                total = body.get("total", len(items))
            total = int(total or 0)
            current = int(meta.get("current_page") or page)
        except (TypeError, AttributeError, KeyError) as e:
            raise ValueError(f"Malformed list response: {e}") from e
        if per <= 0:
            raise ValueError("Malformed pagination in list response")
        return cls(items, page=current, per_page=per, total_items=total,
                   total_pages=math.ceil(max(0, total) / per))

    def __repr__(self) -> str:
        return (f"PagedResult(page={self.page}/{self.total_pages}, "
                f"items={len(self.items)}, total={self.total_items})")
