from datetime import datetime, timezone

from sqlalchemy.orm import Session

from jobready.models.training import TrainingCourse, TrainingModule, UserModuleProgress, UserTraining


def _now() -> datetime:
    return datetime.now(timezone.utc)


def list_courses(
    db: Session,
    category: str | None = None,
    language: str | None = None,
) -> list[TrainingCourse]:
    q = db.query(TrainingCourse).filter(TrainingCourse.is_active == True)  # noqa: E712
    if category:
        q = q.filter(TrainingCourse.category == category)
    if language:
        q = q.filter(TrainingCourse.language == language)
    return q.order_by(TrainingCourse.created_at.desc(), TrainingCourse.id.desc()).all()


def get_course(db: Session, course_id: int, active_only: bool = False) -> TrainingCourse | None:
    q = db.query(TrainingCourse).filter(TrainingCourse.id == course_id)
    if active_only:
        q = q.filter(TrainingCourse.is_active == True)  # noqa: E712
    return q.first()


def get_module(db: Session, course_id: int, module_id: int) -> TrainingModule | None:
    return (
        db.query(TrainingModule)
        .filter(TrainingModule.id == module_id, TrainingModule.course_id == course_id)
        .first()
    )


def get_enrollment(db: Session, user_id: int, course_id: int) -> UserTraining | None:
    return (
        db.query(UserTraining)
        .filter(UserTraining.user_id == user_id, UserTraining.course_id == course_id)
        .first()
    )


def get_enrollments_by_course(db: Session, user_id: int, course_ids: list[int]) -> dict[int, UserTraining]:
    if not course_ids:
        return {}
    rows = (
        db.query(UserTraining)
        .filter(UserTraining.user_id == user_id, UserTraining.course_id.in_(course_ids))
        .all()
    )
    return {row.course_id: row for row in rows}


def enroll(db: Session, user_id: int, course_id: int) -> UserTraining:
    now = _now()
    enrollment = UserTraining(
        user_id=user_id,
        course_id=course_id,
        progress=0,
        completed=False,
        enrolled_at=now,
        last_accessed=now,
    )
    db.add(enrollment)
    db.commit()
    db.refresh(enrollment)
    return enrollment


def set_progress(db: Session, enrollment: UserTraining, progress: int) -> UserTraining:
    """Completed tracks progress >= 100; completed_at is stamped once when it flips on, cleared when it flips off."""
    now = _now()
    is_completed = progress >= 100
    if is_completed and not enrollment.completed:
        enrollment.completed_at = now
    elif not is_completed:
        enrollment.completed_at = None
    enrollment.progress = progress
    enrollment.completed = is_completed
    enrollment.last_accessed = now
    db.commit()
    db.refresh(enrollment)
    return enrollment


def mark_module_completed(db: Session, user_id: int, module_id: int) -> UserModuleProgress:
    """Insert a completed row for the module, or mark the existing one completed."""
    now = _now()
    record = (
        db.query(UserModuleProgress)
        .filter(UserModuleProgress.user_id == user_id, UserModuleProgress.module_id == module_id)
        .first()
    )
    if record:
        record.completed = True
        record.completed_at = now
    else:
        record = UserModuleProgress(user_id=user_id, module_id=module_id, completed=True, completed_at=now)
        db.add(record)
    db.commit()
    db.refresh(record)
    return record


def list_for_user(db: Session, user_id: int) -> list[tuple[UserTraining, TrainingCourse]]:
    return (
        db.query(UserTraining, TrainingCourse)
        .join(TrainingCourse, UserTraining.course_id == TrainingCourse.id)
        .filter(UserTraining.user_id == user_id)
        .order_by(UserTraining.last_accessed.desc(), UserTraining.id.desc())
        .all()
    )
