from datetime import date, datetime, timezone

from sqlalchemy.orm import Session

from jobready.models.cv import CV, CVEducation, CVExperience, CVLanguage, CVReference, CVSkill


def _now() -> datetime:
    return datetime.now(timezone.utc)


def list_for_user(db: Session, user_id: int) -> list[CV]:
    return (
        db.query(CV)
        .filter(CV.user_id == user_id)
        .order_by(CV.is_default.desc(), CV.updated_at.desc(), CV.id.desc())
        .all()
    )


def get_for_user(db: Session, cv_id: int, user_id: int) -> CV | None:
    """Ownership-checked lookup; a CV belonging to someone else is treated as missing."""
    return db.query(CV).filter(CV.id == cv_id, CV.user_id == user_id).first()


def create(
    db: Session,
    user_id: int,
    title: str,
    language: str,
    template: str = "modern",
    personal_info: dict | None = None,
) -> CV:
    has_cv = db.query(CV.id).filter(CV.user_id == user_id).first() is not None
    now = _now()
    cv = CV(
        user_id=user_id,
        title=title,
        language=language,
        template=template,
        personal_info=personal_info or {},
        is_default=not has_cv,
        created_at=now,
        updated_at=now,
    )
    db.add(cv)
    db.commit()
    db.refresh(cv)
    return cv


def update(
    db: Session,
    cv: CV,
    *,
    title: str | None = None,
    personal_info: dict | None = None,
    template: str | None = None,
) -> bool:
    """Apply supplied fields. updated_at moves only when something changed; returns whether it did."""
    changed = False
    if title:
        cv.title = title
        changed = True
    if personal_info is not None:
        cv.personal_info = personal_info
        changed = True
    if template:
        cv.template = template
        changed = True
    if changed:
        cv.updated_at = _now()
        db.commit()
    return changed


def delete(db: Session, cv: CV) -> None:
    db.delete(cv)
    db.commit()


def add_education(
    db: Session,
    cv: CV,
    institution: str,
    degree: str,
    start_year: int,
    end_year: int | None = None,
    description: str | None = None,
) -> CVEducation:
    entry = CVEducation(
        cv_id=cv.id,
        institution=institution,
        degree=degree,
        start_year=start_year,
        end_year=end_year,
        description=description,
    )
    db.add(entry)
    cv.updated_at = _now()
    db.commit()
    db.refresh(entry)
    return entry


def add_experience(
    db: Session,
    cv: CV,
    company: str,
    position: str,
    start_date: date,
    end_date: date | None = None,
    description: str | None = None,
    is_current: bool = False,
) -> CVExperience:
    entry = CVExperience(
        cv_id=cv.id,
        company=company,
        position=position,
        start_date=start_date,
        end_date=end_date,
        description=description,
        is_current=is_current,
    )
    db.add(entry)
    cv.updated_at = _now()
    db.commit()
    db.refresh(entry)
    return entry


def replace_skills(db: Session, cv: CV, skills: list[tuple[str, str | None]]) -> int:
    """Full replace: drop every stored skill for the CV, then insert the given (name, level) pairs."""
    db.query(CVSkill).filter(CVSkill.cv_id == cv.id).delete(synchronize_session=False)
    db.add_all([CVSkill(cv_id=cv.id, skill_name=name, proficiency_level=level) for name, level in skills])
    cv.updated_at = _now()
    db.commit()
    return len(skills)


def replace_languages(db: Session, cv: CV, languages: list[tuple[str, str | None]]) -> int:
    db.query(CVLanguage).filter(CVLanguage.cv_id == cv.id).delete(synchronize_session=False)
    db.add_all([CVLanguage(cv_id=cv.id, language=name, proficiency=level) for name, level in languages])
    cv.updated_at = _now()
    db.commit()
    return len(languages)


def add_reference(
    db: Session,
    cv: CV,
    name: str,
    relationship: str | None = None,
    phone: str | None = None,
    email: str | None = None,
) -> CVReference:
    entry = CVReference(
        cv_id=cv.id,
        name=name,
        relationship_to_candidate=relationship,
        phone=phone,
        email=email,
    )
    db.add(entry)
    cv.updated_at = _now()
    db.commit()
    db.refresh(entry)
    return entry
