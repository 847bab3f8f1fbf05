"""
Pydantic models for API records and form input.

API records (Job, Application) mirror the REST API responses and tolerate
both historical Application shapes. Forms (ApplicationForm, JobForm,
LoginForm) carry the client-side validation rules; a ValidationError from
them blocks the network call and is rendered next to the offending field.
"""

import re
from datetime import datetime
from enum import Enum
from pathlib import PurePath
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)


DEFAULT_MAX_RESUME_BYTES = 10 * 1024 * 1024
ALLOWED_RESUME_EXTENSIONS = {".pdf", ".doc", ".docx"}

JOB_TYPES = ["Full-time", "Part-time", "Contract", "Remote", "Hybrid", "Internship"]

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def format_size(num_bytes: int) -> str:
    """Human-readable upload limit: whole MB when possible, else KB."""
    if num_bytes >= 1024 * 1024:
        return f"{num_bytes // (1024 * 1024)}MB"
    return f"{max(1, num_bytes // 1024)}KB"


class ApplicationStatus(str, Enum):
    """Canonical application review states."""
    NEW = "new"
    REVIEWED = "reviewed"
    SHORTLISTED = "shortlisted"
    REJECTED = "rejected"

    @property
    def label(self) -> str:
        return self.value.capitalize()


# The capitalised API variant used "Pending" where the canonical one says "new"
LEGACY_STATUS_MAP = {
    "pending": ApplicationStatus.NEW,
    "new": ApplicationStatus.NEW,
    "reviewed": ApplicationStatus.REVIEWED,
    "shortlisted": ApplicationStatus.SHORTLISTED,
    "rejected": ApplicationStatus.REJECTED,
}


def normalize_status(value: Any) -> ApplicationStatus:
    """Map either API variant's status string onto ApplicationStatus."""
    if isinstance(value, ApplicationStatus):
        return value
    key = str(value or "").strip().lower()
    if key not in LEGACY_STATUS_MAP:
        raise ValueError(f"Unknown application status: {value!r}")
    return LEGACY_STATUS_MAP[key]


# =============================================================================
# API records
# =============================================================================


class Job(BaseModel):
    """A job posting as returned by /api/jobs/."""

    model_config = ConfigDict(extra="ignore")

    id: int
    title: str
    company: str = ""
    location: str = ""
    description: str = ""
    requirements: Optional[str] = None
    salary: Optional[str] = None
    job_type: Optional[str] = None
    created_at: Optional[datetime] = None


class Application(BaseModel):
    """
    An application as returned by /api/applications/.

    Accepts both shapes seen from the API: `name` or `full_name`,
    `resume` or `resume_url`, lowercase or capitalised status, and `job`
    as either a nested object or a bare id.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int
    full_name: str = Field(validation_alias=AliasChoices("full_name", "name"))
    email: str
    phone: Optional[str] = None
    resume: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("resume", "resume_url")
    )
    cover_letter: Optional[str] = None
    job_id: Optional[int] = None
    job: Optional[Job] = None
    status: ApplicationStatus = ApplicationStatus.NEW
    created_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def unpack_job_reference(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        job = data.get("job")
        if isinstance(job, int):
            data.setdefault("job_id", job)
            data["job"] = None
        elif isinstance(job, dict) and data.get("job_id") is None:
            data["job_id"] = job.get("id")
        return data

    @field_validator("status", mode="before")
    @classmethod
    def canonical_status(cls, v: Any) -> ApplicationStatus:
        return normalize_status(v)

    @property
    def job_title(self) -> str:
        return self.job.title if self.job else ""


class TokenPair(BaseModel):
    """Response of POST /api/token/."""
    access: str
    refresh: Optional[str] = None


# =============================================================================
# Forms
# =============================================================================


def _required(value: Optional[str], message: str) -> str:
    if value is None or not value.strip():
        raise ValueError(message)
    return value


def _max_length(value: Optional[str], limit: int, message: str) -> Optional[str]:
    if value is not None and len(value) > limit:
        raise ValueError(message)
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class ResumeUpload(BaseModel):
    """Uploaded resume held in memory so a retried request can resend it."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @field_validator("filename")
    @classmethod
    def allowed_extension(cls, v: str) -> str:
        suffix = PurePath(v).suffix.lower()
        if suffix not in ALLOWED_RESUME_EXTENSIONS:
            allowed = ", ".join(sorted(ALLOWED_RESUME_EXTENSIONS))
            raise ValueError(f"Resume must be one of: {allowed}")
        return v

    @field_validator("content")
    @classmethod
    def within_size_limit(cls, v: bytes, info: ValidationInfo) -> bytes:
        limit = (info.context or {}).get("max_resume_bytes", DEFAULT_MAX_RESUME_BYTES)
        if not v:
            raise ValueError("Resume file is empty")
        if len(v) > limit:
            raise ValueError(f"Resume must be smaller than {format_size(limit)}")
        return v

    @property
    def size(self) -> int:
        return len(self.content)


class ApplicationForm(BaseModel):
    """
    Public application form.

    A resume link or an uploaded file is required; when both are present
    the file wins on submission.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    job_id: int
    full_name: str = ""
    email: str = ""
    phone: Optional[str] = None
    resume_url: Optional[str] = None
    cover_letter: Optional[str] = None
    resume_file: Optional[ResumeUpload] = None

    @field_validator("phone", "resume_url", "cover_letter", mode="before")
    @classmethod
    def blank_optional(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("full_name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        _required(v, "Name is required")
        return _max_length(v, 100, "Name must be less than 100 characters")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        _required(v, "Email is required")
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email address")
        return _max_length(v, 255, "Email must be less than 255 characters")

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return _max_length(v, 30, "Phone must be less than 30 characters")

    @field_validator("resume_url")
    @classmethod
    def validate_resume_url(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("Please enter a valid URL")
        return _max_length(v, 500, "URL must be less than 500 characters")

    @field_validator("cover_letter")
    @classmethod
    def validate_cover_letter(cls, v: Optional[str]) -> Optional[str]:
        return _max_length(v, 5000, "Cover letter must be less than 5000 characters")

    @model_validator(mode="after")
    def resume_required(self) -> "ApplicationForm":
        if self.resume_url is None and self.resume_file is None:
            raise ValueError("A resume link or file is required")
        return self


class JobForm(BaseModel):
    """Recruiter job create/edit form."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = ""
    company: str = ""
    location: str = ""
    description: str = ""
    requirements: Optional[str] = None
    salary: Optional[str] = None
    job_type: Optional[str] = None

    @field_validator("requirements", "salary", "job_type", mode="before")
    @classmethod
    def blank_optional(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        _required(v, "Job title is required")
        return _max_length(v, 200, "Title must be less than 200 characters")

    @field_validator("company")
    @classmethod
    def validate_company(cls, v: str) -> str:
        _required(v, "Company name is required")
        return _max_length(v, 200, "Company must be less than 200 characters")

    @field_validator("location")
    @classmethod
    def validate_location(cls, v: str) -> str:
        _required(v, "Location is required")
        return _max_length(v, 200, "Location must be less than 200 characters")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        _required(v, "Description is required")
        return _max_length(v, 5000, "Description must be less than 5000 characters")

    @field_validator("requirements")
    @classmethod
    def validate_requirements(cls, v: Optional[str]) -> Optional[str]:
        return _max_length(v, 5000, "Requirements must be less than 5000 characters")

    @field_validator("salary")
    @classmethod
    def validate_salary(cls, v: Optional[str]) -> Optional[str]:
        return _max_length(v, 100, "Salary must be less than 100 characters")

    @field_validator("job_type")
    @classmethod
    def validate_job_type(cls, v: Optional[str]) -> Optional[str]:
        return _max_length(v, 50, "Job type must be less than 50 characters")

    def to_payload(self) -> Dict[str, Any]:
        """API body; empty optional fields are left out."""
        return self.model_dump(exclude_none=True)

    @classmethod
    def from_job(cls, job: Job) -> "JobForm":
        """Prefill values for the edit modal (not validated)."""
        return cls.model_construct(**job.model_dump(
            include={"title", "company", "location", "description",
                     "requirements", "salary", "job_type"}
        ))


class LoginForm(BaseModel):
    username: str = ""
    password: str = ""

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return _required(v, "Username is required").strip()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        return v


def field_errors(exc: ValidationError) -> Dict[str, str]:
    """
    Flatten a ValidationError into {field: first message}.

    Model-level errors (e.g. the resume requirement) are keyed by the field
    the template shows them under.
    """
    errors: Dict[str, str] = {}
    for error in exc.errors():
        loc: List[Any] = list(error.get("loc") or [])
        field = str(loc[0]) if loc else "resume"
        message = error.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.setdefault(field, message)
    return errors
