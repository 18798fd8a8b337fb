import logging
from dataclasses import dataclass
from datetime import date

from sqlalchemy import or_, update
from sqlalchemy.orm import Query, Session

from jobready.models.job import Job, JobApplication, SavedJob

logger = logging.getLogger(__name__)


@dataclass
class JobFilters:
    search: str | None = None
    location: str | None = None
    job_type: str | None = None
    min_salary: float | None = None
    max_salary: float | None = None
    language: str | None = None


def _open_jobs_query(db: Session, filters: JobFilters, today: date) -> Query:
    """Active postings whose deadline is today or later, narrowed by filters.

    Listing and counting share this query so both always see the same rows.
    """
    q = db.query(Job).filter(
        Job.is_active == True,  # noqa: E712
        or_(Job.application_deadline.is_(None), Job.application_deadline >= today),
    )
    if filters.search and filters.search.strip():
        term = f"%{filters.search.strip()}%"
        q = q.filter(
            or_(
                Job.title.ilike(term),
                Job.company_name.ilike(term),
                Job.description.ilike(term),
            )
        )
    if filters.location and filters.location.strip():
        q = q.filter(Job.location.ilike(f"%{filters.location.strip()}%"))
    if filters.job_type:
        q = q.filter(Job.job_type == filters.job_type)
    if filters.min_salary is not None:
        q = q.filter(Job.salary_max >= filters.min_salary)
    if filters.max_salary is not None:
        q = q.filter(Job.salary_min <= filters.max_salary)
    if filters.language:
        q = q.filter(Job.language == filters.language)
    return q


def search_open_jobs(
    db: Session,
    filters: JobFilters,
    limit: int = 10,
    offset: int = 0,
    today: date | None = None,
) -> tuple[list[Job], int]:
    """Returns (page of jobs newest first, total matching)."""
    q = _open_jobs_query(db, filters, today or date.today())
    total = q.count()
    items = q.order_by(Job.posted_date.desc(), Job.id.desc()).offset(offset).limit(limit).all()
    return items, total


def get_viewer_flags(db: Session, viewer_id: int, job_ids: list[int]) -> tuple[set[int], set[int]]:
    """Returns (job ids the viewer applied to, job ids the viewer saved) among job_ids."""
    if not job_ids:
        return set(), set()
    applied = {
        row[0]
        for row in db.query(JobApplication.job_id)
        .filter(JobApplication.user_id == viewer_id, JobApplication.job_id.in_(job_ids))
        .all()
    }
    saved = {
        row[0]
        for row in db.query(SavedJob.job_id)
        .filter(SavedJob.user_id == viewer_id, SavedJob.job_id.in_(job_ids))
        .all()
    }
    return applied, saved


def get_by_id(db: Session, job_id: int) -> Job | None:
    return db.query(Job).filter(Job.id == job_id).first()


def increment_view_count(db: Session, job_id: int) -> None:
    db.execute(update(Job).where(Job.id == job_id).values(view_count=Job.view_count + 1))
    db.commit()


def get_application(db: Session, user_id: int, job_id: int) -> JobApplication | None:
    return (
        db.query(JobApplication)
        .filter(JobApplication.user_id == user_id, JobApplication.job_id == job_id)
        .first()
    )


def create_application(
    db: Session,
    user_id: int,
    job_id: int,
    cv_id: int,
    cover_letter: str | None = None,
) -> JobApplication:
    """Insert a pending application and bump the job's application counter."""
    application = JobApplication(
        job_id=job_id,
        user_id=user_id,
        cv_id=cv_id,
        cover_letter=cover_letter,
        status="pending",
    )
    db.add(application)
    db.flush()
    db.execute(update(Job).where(Job.id == job_id).values(application_count=Job.application_count + 1))
    db.commit()
    db.refresh(application)
    return application


def toggle_saved(db: Session, user_id: int, job_id: int) -> bool:
    """Flip the bookmark. Returns True when the job is now saved."""
    existing = db.query(SavedJob).filter(SavedJob.user_id == user_id, SavedJob.job_id == job_id).first()
    if existing:
        db.delete(existing)
        db.commit()
        return False
    db.add(SavedJob(user_id=user_id, job_id=job_id))
    db.commit()
    return True


def list_applications(
    db: Session,
    user_id: int,
    status: str | None = None,
    limit: int = 10,
    offset: int = 0,
) -> list[dict]:
    q = (
        db.query(JobApplication, Job)
        .join(Job, JobApplication.job_id == Job.id)
        .filter(JobApplication.user_id == user_id)
    )
    if status:
        q = q.filter(JobApplication.status == status)
    rows = q.order_by(JobApplication.applied_at.desc(), JobApplication.id.desc()).offset(offset).limit(limit).all()
    return [
        {
            "id": app.id,
            "status": app.status,
            "applied_at": app.applied_at,
            "cover_letter": app.cover_letter,
            "job_id": job.id,
            "job_title": job.title,
            "company_name": job.company_name,
            "location": job.location,
            "job_type": job.job_type,
        }
        for app, job in rows
    ]


def list_saved(db: Session, user_id: int) -> list[dict]:
    rows = (
        db.query(SavedJob, Job)
        .join(Job, SavedJob.job_id == Job.id)
        .filter(SavedJob.user_id == user_id, Job.is_active == True)  # noqa: E712
        .order_by(SavedJob.saved_at.desc(), SavedJob.id.desc())
        .all()
    )
    return [
        {
            "saved_id": saved.id,
            "saved_at": saved.saved_at,
            "job_id": job.id,
            "title": job.title,
            "company_name": job.company_name,
            "location": job.location,
            "job_type": job.job_type,
            "salary_min": job.salary_min,
            "salary_max": job.salary_max,
            "posted_date": job.posted_date,
            "application_deadline": job.application_deadline,
        }
        for saved, job in rows
    ]
