import logging
import math
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobready.database import get_db
from jobready.dependencies import get_current_user, get_optional_user
from jobready.models.job import Job
from jobready.models.user import User
from jobready.repos.cv_repo import get_for_user as get_cv_for_user
from jobready.repos.job_repo import (
    JobFilters,
    create_application,
    get_application,
    get_by_id,
    get_viewer_flags,
    increment_view_count,
    list_applications,
    list_saved,
    search_open_jobs,
    toggle_saved,
)
from jobready.schemas.common import Language
from jobready.schemas.job import (
    ApplicationOut,
    ApplicationStatus,
    JobApplyRequest,
    JobDetailOut,
    JobOut,
    JobType,
    SavedJobOut,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/jobs", tags=["jobs"])
MAX_PAGE_SIZE = 50


def _job_payload(job: Job, viewer: User | None, applied: set[int], saved: set[int], detail: bool = False) -> dict:
    schema = JobDetailOut if detail else JobOut
    data = schema.model_validate(job).model_dump()
    if viewer is not None:
        data["has_applied"] = job.id in applied
        data["is_saved"] = job.id in saved
    return data


@router.get("")
def list_jobs(
    search: str | None = None,
    location: str | None = None,
    job_type: JobType | None = Query(default=None, alias="jobType"),
    min_salary: float | None = Query(default=None, alias="minSalary", ge=0),
    max_salary: float | None = Query(default=None, alias="maxSalary", ge=0),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=MAX_PAGE_SIZE),
    language: Language | None = None,
    db: Session = Depends(get_db),
    viewer: User | None = Depends(get_optional_user),
):
    """Open postings, newest first. Authenticated callers also see has_applied / is_saved per job."""
    filters = JobFilters(
        search=search,
        location=location,
        job_type=job_type,
        min_salary=min_salary,
        max_salary=max_salary,
        language=language,
    )
    try:
        jobs, total = search_open_jobs(db, filters, limit=limit, offset=(page - 1) * limit)
        applied, saved = set(), set()
        if viewer is not None:
            applied, saved = get_viewer_flags(db, viewer.id, [j.id for j in jobs])
    except Exception as e:
        logger.exception("Job search failed: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error fetching jobs") from e
    logger.debug("GET /jobs page=%d limit=%d total=%d", page, limit, total)
    return {
        "success": True,
        "data": {
            "jobs": [_job_payload(j, viewer, applied, saved) for j in jobs],
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "pages": math.ceil(total / limit),
            },
        },
    }


@router.get("/applications/my")
def my_applications(
    status_filter: ApplicationStatus | None = Query(default=None, alias="status"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        rows = list_applications(db, user.id, status=status_filter, limit=limit, offset=(page - 1) * limit)
    except Exception as e:
        logger.exception("Listing applications failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error fetching applications") from e
    return {"success": True, "data": [ApplicationOut.model_validate(r) for r in rows]}


@router.get("/saved/my")
def my_saved_jobs(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        rows = list_saved(db, user.id)
    except Exception as e:
        logger.exception("Listing saved jobs failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error fetching saved jobs") from e
    return {"success": True, "data": [SavedJobOut.model_validate(r) for r in rows]}


@router.get("/{job_id}")
def get_job(
    job_id: int,
    db: Session = Depends(get_db),
    viewer: User | None = Depends(get_optional_user),
):
    """Detail view regardless of active/deadline state. Counts a view on every successful fetch."""
    try:
        job = get_by_id(db, job_id)
        if not job:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
        applied, saved = set(), set()
        if viewer is not None:
            applied, saved = get_viewer_flags(db, viewer.id, [job.id])
        payload = _job_payload(job, viewer, applied, saved, detail=True)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Fetching job=%s failed: %s", job_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error fetching job details") from e

    # View count is advisory; never fail the read over it.
    try:
        increment_view_count(db, job_id)
    except Exception as e:
        db.rollback()
        logger.warning("View count increment failed for job=%s: %s", job_id, e)
    return {"success": True, "data": payload}


@router.post("/{job_id}/apply", status_code=status.HTTP_201_CREATED)
def apply_for_job(
    job_id: int,
    data: JobApplyRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        job = get_by_id(db, job_id)
        if not job:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found or no longer active")
        if job.application_deadline is not None and job.application_deadline < date.today():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Application deadline has passed")
        if not job.is_active:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found or no longer active")
        if get_application(db, user.id, job_id):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="You have already applied for this job")
        if not get_cv_for_user(db, data.cv_id, user.id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="CV not found")
        application = create_application(db, user.id, job_id, data.cv_id, data.cover_letter)
        logger.info("Application submitted: user=%s job=%s application=%s", user.id, job_id, application.id)
        return {
            "success": True,
            "message": "Application submitted successfully",
            "data": {"applicationId": application.id},
        }
    except HTTPException:
        raise
    except IntegrityError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="You have already applied for this job") from e
    except Exception as e:
        logger.exception("Apply failed for user=%s job=%s: %s", user.id, job_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error submitting application") from e


@router.post("/{job_id}/save")
def toggle_save_job(
    job_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        if not get_by_id(db, job_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
        saved = toggle_saved(db, user.id, job_id)
        return {
            "success": True,
            "message": "Job saved successfully" if saved else "Job removed from saved",
            "data": {"saved": saved},
        }
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Save toggle failed for user=%s job=%s: %s", user.id, job_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error saving job") from e
