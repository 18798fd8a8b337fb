from datetime import date, datetime, timezone

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from jobready.core.security import hash_password
from jobready.models.cv import CV
from jobready.models.job import JobApplication, SavedJob
from jobready.models.training import UserTraining
from jobready.models.user import User


def get_by_id(db: Session, user_id: int) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def get_by_phone(db: Session, phone: str) -> User | None:
    return db.query(User).filter(User.phone == phone).first()


def get_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def exists_with_phone_or_email(db: Session, phone: str, email: str | None) -> bool:
    conditions = [User.phone == phone]
    if email:
        conditions.append(User.email == email)
    return db.query(User.id).filter(or_(*conditions)).first() is not None


def create(
    db: Session,
    *,
    full_name: str,
    phone: str,
    password: str,
    language: str,
    location: str,
    email: str | None = None,
    date_of_birth: date | None = None,
    id_number: str | None = None,
) -> User:
    user = User(
        full_name=full_name,
        phone=phone,
        email=email,
        password_hash=hash_password(password),
        preferred_language=language,
        location=location,
        date_of_birth=date_of_birth,
        id_number=id_number,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update(
    db: Session,
    user_id: int,
    *,
    full_name: str | None = None,
    email: str | None = None,
    location: str | None = None,
    bio: str | None = None,
    preferred_language: str | None = None,
) -> User | None:
    """Apply only the non-empty fields. Returns None when the user is gone."""
    user = get_by_id(db, user_id)
    if not user:
        return None
    if full_name:
        user.full_name = full_name
    if email:
        user.email = email
    if location:
        user.location = location
    if bio:
        user.bio = bio
    if preferred_language:
        user.preferred_language = preferred_language
    db.commit()
    db.refresh(user)
    return user


def touch_last_login(db: Session, user: User) -> None:
    user.last_login = datetime.now(timezone.utc)
    db.commit()


def get_stats(db: Session, user_id: int) -> dict:
    """Per-user dashboard counters."""
    application_count = db.query(func.count(JobApplication.id)).filter(JobApplication.user_id == user_id).scalar() or 0
    saved_count = db.query(func.count(SavedJob.id)).filter(SavedJob.user_id == user_id).scalar() or 0
    cv_count = db.query(func.count(CV.id)).filter(CV.user_id == user_id).scalar() or 0
    completed_courses = (
        db.query(func.count(UserTraining.id))
        .filter(UserTraining.user_id == user_id, UserTraining.completed == True)  # noqa: E712
        .scalar()
        or 0
    )
    average_progress = db.query(func.avg(UserTraining.progress)).filter(UserTraining.user_id == user_id).scalar()
    return {
        "applications": {"total": application_count},
        "savedJobs": saved_count,
        "cvs": cv_count,
        "training": {
            "completed": completed_courses,
            "averageProgress": round(float(average_progress or 0)),
        },
    }
