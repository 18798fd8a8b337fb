import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobready.database import get_db
from jobready.dependencies import get_current_user, get_optional_user
from jobready.models.training import COURSE_CATEGORIES, TrainingCourse, UserTraining
from jobready.models.user import User
from jobready.repos.training_repo import (
    enroll,
    get_course,
    get_enrollment,
    get_enrollments_by_course,
    get_module,
    list_courses,
    list_for_user,
    mark_module_completed,
    set_progress,
)
from jobready.schemas.common import Language
from jobready.schemas.training import CourseOut, ModuleOut, MyCourseOut, ProgressUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/training", tags=["training"])


def _course_payload(course: TrainingCourse, viewer: User | None, enrollment: UserTraining | None) -> dict:
    data = CourseOut.model_validate(course).model_dump()
    if viewer is not None:
        data["user_progress"] = enrollment.progress if enrollment else None
        data["is_completed"] = enrollment.completed if enrollment else None
    return data


@router.get("/courses")
def get_courses(
    category: str | None = None,
    language: Language | None = None,
    db: Session = Depends(get_db),
    viewer: User | None = Depends(get_optional_user),
):
    try:
        courses = list_courses(db, category=category, language=language)
        enrollments = {}
        if viewer is not None:
            enrollments = get_enrollments_by_course(db, viewer.id, [c.id for c in courses])
    except Exception as e:
        logger.exception("Listing courses failed: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error fetching courses") from e
    return {"success": True, "data": [_course_payload(c, viewer, enrollments.get(c.id)) for c in courses]}


@router.get("/courses/{course_id}")
def get_course_detail(
    course_id: int,
    db: Session = Depends(get_db),
    viewer: User | None = Depends(get_optional_user),
):
    try:
        course = get_course(db, course_id)
        if not course:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
        enrollment = get_enrollment(db, viewer.id, course_id) if viewer is not None else None
        data = _course_payload(course, viewer, enrollment)
        data["modules"] = [ModuleOut.model_validate(m) for m in course.modules]
        return {"success": True, "data": data}
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Fetching course=%s failed: %s", course_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error fetching course details") from e


@router.post("/courses/{course_id}/enroll", status_code=status.HTTP_201_CREATED)
def enroll_in_course(
    course_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        if not get_course(db, course_id, active_only=True):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
        if get_enrollment(db, user.id, course_id):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Already enrolled in this course")
        enroll(db, user.id, course_id)
        logger.info("User %s enrolled in course %s", user.id, course_id)
        return {"success": True, "message": "Successfully enrolled in course"}
    except HTTPException:
        raise
    except IntegrityError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Already enrolled in this course") from e
    except Exception as e:
        logger.exception("Enroll failed for user=%s course=%s: %s", user.id, course_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error enrolling in course") from e


@router.put("/courses/{course_id}/progress")
def update_progress(
    course_id: int,
    data: ProgressUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        enrollment = get_enrollment(db, user.id, course_id)
        if not enrollment:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not enrolled in this course")
        if data.module_id is not None and not get_module(db, course_id, data.module_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Module not found")
        enrollment = set_progress(db, enrollment, data.progress)
        if data.module_id is not None:
            mark_module_completed(db, user.id, data.module_id)
        return {
            "success": True,
            "message": "Progress updated successfully",
            "data": {"progress": enrollment.progress, "completed": enrollment.completed},
        }
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Progress update failed for user=%s course=%s: %s", user.id, course_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error updating progress") from e


@router.get("/my-courses")
def my_courses(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        rows = list_for_user(db, user.id)
    except Exception as e:
        logger.exception("Listing enrolled courses failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error fetching enrolled courses") from e
    data = [
        MyCourseOut(
            id=course.id,
            title=course.title,
            description=course.description,
            category=course.category,
            difficulty_level=course.difficulty_level,
            duration_hours=course.duration_hours,
            thumbnail_url=course.thumbnail_url,
            progress=enrollment.progress,
            completed=enrollment.completed,
            enrolled_at=enrollment.enrolled_at,
            last_accessed=enrollment.last_accessed,
        )
        for enrollment, course in rows
    ]
    return {"success": True, "data": data}


@router.get("/categories")
def get_categories():
    return {"success": True, "data": COURSE_CATEGORIES}
