import logging
import re

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from jobready.database import get_db
from jobready.dependencies import get_current_user
from jobready.models.cv import CV
from jobready.models.user import User
from jobready.repos.cv_repo import (
    add_education,
    add_experience,
    add_reference,
    create as create_cv,
    delete as delete_cv,
    get_for_user,
    list_for_user,
    replace_languages,
    replace_skills,
    update as update_cv,
)
from jobready.schemas.common import Language
from jobready.schemas.cv import (
    CVCreate,
    CVDetailOut,
    CVSummaryOut,
    CVUpdate,
    EducationCreate,
    ExperienceCreate,
    LanguagesReplace,
    ReferenceCreate,
    SkillsReplace,
)
from jobready.services.cv_pdf_service import render_cv_pdf

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/cv", tags=["cv"])
_UNSAFE_FILENAME = re.compile(r'[^A-Za-z0-9 ._-]+')


def _owned_cv_or_404(db: Session, cv_id: int, user: User) -> CV:
    cv = get_for_user(db, cv_id, user.id)
    if not cv:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="CV not found")
    return cv


@router.get("")
def list_cvs(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        cvs = list_for_user(db, user.id)
    except Exception as e:
        logger.exception("Listing CVs failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error fetching CVs") from e
    return {"success": True, "data": [CVSummaryOut.model_validate(cv) for cv in cvs]}


@router.get("/{cv_id}")
def get_cv(
    cv_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        cv = _owned_cv_or_404(db, cv_id, user)
        return {"success": True, "data": CVDetailOut.model_validate(cv)}
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Fetching CV=%s failed for user=%s: %s", cv_id, user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error fetching CV") from e


@router.post("", status_code=status.HTTP_201_CREATED)
def create(
    data: CVCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        cv = create_cv(db, user.id, data.title, data.language, data.template, data.personal_info)
        logger.info("CV created: user=%s cv=%s", user.id, cv.id)
        return {"success": True, "message": "CV created successfully", "data": {"cvId": cv.id}}
    except Exception as e:
        logger.exception("Creating CV failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error creating CV") from e


@router.put("/{cv_id}")
def update(
    cv_id: int,
    data: CVUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        cv = _owned_cv_or_404(db, cv_id, user)
        update_cv(db, cv, title=data.title, personal_info=data.personal_info, template=data.template)
        return {"success": True, "message": "CV updated successfully"}
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Updating CV=%s failed for user=%s: %s", cv_id, user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error updating CV") from e


@router.delete("/{cv_id}")
def delete(
    cv_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        cv = _owned_cv_or_404(db, cv_id, user)
        delete_cv(db, cv)
        logger.info("CV deleted: user=%s cv=%s", user.id, cv_id)
        return {"success": True, "message": "CV deleted successfully"}
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Deleting CV=%s failed for user=%s: %s", cv_id, user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error deleting CV") from e


@router.post("/{cv_id}/education", status_code=status.HTTP_201_CREATED)
def add_education_entry(
    cv_id: int,
    data: EducationCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        cv = _owned_cv_or_404(db, cv_id, user)
        entry = add_education(db, cv, data.institution, data.degree, data.start_year, data.end_year, data.description)
        return {"success": True, "message": "Education entry added", "data": {"entryId": entry.id}}
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Adding education to CV=%s failed: %s", cv_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error adding education entry") from e


@router.post("/{cv_id}/experience", status_code=status.HTTP_201_CREATED)
def add_experience_entry(
    cv_id: int,
    data: ExperienceCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        cv = _owned_cv_or_404(db, cv_id, user)
        entry = add_experience(
            db,
            cv,
            data.company,
            data.position,
            data.start_date,
            end_date=data.end_date,
            description=data.description,
            is_current=data.is_current_job,
        )
        return {"success": True, "message": "Experience entry added", "data": {"entryId": entry.id}}
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Adding experience to CV=%s failed: %s", cv_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error adding experience entry") from e


@router.post("/{cv_id}/skills")
def set_skills(
    cv_id: int,
    data: SkillsReplace,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Replaces the whole skill list; an empty list clears it."""
    try:
        cv = _owned_cv_or_404(db, cv_id, user)
        replace_skills(db, cv, [(s.name, s.level) for s in data.skills])
        return {"success": True, "message": "Skills updated successfully"}
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Updating skills on CV=%s failed: %s", cv_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error updating skills") from e


@router.post("/{cv_id}/languages")
def set_languages(
    cv_id: int,
    data: LanguagesReplace,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        cv = _owned_cv_or_404(db, cv_id, user)
        replace_languages(db, cv, [(lang.language, lang.proficiency) for lang in data.languages])
        return {"success": True, "message": "Languages updated successfully"}
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Updating languages on CV=%s failed: %s", cv_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error updating languages") from e


@router.post("/{cv_id}/references", status_code=status.HTTP_201_CREATED)
def add_reference_entry(
    cv_id: int,
    data: ReferenceCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        cv = _owned_cv_or_404(db, cv_id, user)
        entry = add_reference(db, cv, data.name, data.relationship, data.phone, data.email)
        return {"success": True, "message": "Reference added", "data": {"entryId": entry.id}}
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Adding reference to CV=%s failed: %s", cv_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error adding reference") from e


@router.get("/{cv_id}/download")
def download(
    cv_id: int,
    language: Language = "en",
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Render the CV to PDF and send it as an attachment."""
    try:
        cv = _owned_cv_or_404(db, cv_id, user)
        pdf = render_cv_pdf(cv)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("PDF export failed for CV=%s: %s", cv_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error generating PDF") from e
    title = _UNSAFE_FILENAME.sub("", cv.title).strip() or "CV"
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="CV_{title}_{language}.pdf"'},
    )
