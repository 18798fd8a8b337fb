from datetime import date, datetime
from typing import Literal

from pydantic import field_validator

from jobready.schemas.common import CamelModel, OrmModel, optional_text

JobType = Literal["full-time", "part-time", "contract", "temporary"]
ApplicationStatus = Literal["pending", "reviewed", "shortlisted", "rejected", "accepted"]


class JobOut(OrmModel):
    id: int
    title: str
    company_name: str
    location: str | None = None
    job_type: str
    salary_min: int | None = None
    salary_max: int | None = None
    description: str | None = None
    requirements: str | None = None
    posted_date: datetime | None = None
    application_deadline: date | None = None
    is_active: bool


class JobDetailOut(JobOut):
    responsibilities: str | None = None
    language: str
    view_count: int = 0
    application_count: int = 0


class JobApplyRequest(CamelModel):
    cv_id: int
    cover_letter: str | None = None

    @field_validator("cover_letter")
    @classmethod
    def strip_cover_letter(cls, v: str | None) -> str | None:
        return optional_text(v)


class ApplicationOut(OrmModel):
    id: int
    status: str
    applied_at: datetime | None = None
    cover_letter: str | None = None
    job_id: int
    job_title: str
    company_name: str
    location: str | None = None
    job_type: str


class SavedJobOut(OrmModel):
    saved_id: int
    saved_at: datetime | None = None
    job_id: int
    title: str
    company_name: str
    location: str | None = None
    job_type: str
    salary_min: int | None = None
    salary_max: int | None = None
    posted_date: datetime | None = None
    application_deadline: date | None = None
