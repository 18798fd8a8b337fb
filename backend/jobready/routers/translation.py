import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from jobready.database import get_db
from jobready.repos.job_repo import get_by_id as get_job_by_id
from jobready.schemas.translation import DetectRequest, TranslateBatchRequest, TranslateJobRequest, TranslateRequest
from jobready.services.translation_service import PENDING_NOTE, SUPPORTED_LANGUAGES, translator

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/translation", tags=["translation"])


@router.post("/translate")
def translate(data: TranslateRequest):
    return {"success": True, "data": translator.translate(data.text, data.target_language, data.source_language)}


@router.post("/translate-batch")
def translate_batch(data: TranslateBatchRequest):
    translations = translator.translate_many(data.texts, data.target_language, data.source_language)
    return {"success": True, "data": {"translations": translations}}


@router.post("/detect")
def detect(data: DetectRequest):
    return {"success": True, "data": translator.detect(data.text)}


@router.get("/languages")
def languages():
    return {"success": True, "data": {"languages": SUPPORTED_LANGUAGES}}


@router.post("/translate-job")
def translate_job(data: TranslateJobRequest, db: Session = Depends(get_db)):
    try:
        job = get_job_by_id(db, data.job_id)
    except Exception as e:
        logger.exception("Loading job=%s for translation failed: %s", data.job_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error translating job posting") from e
    if not job:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    original = {
        "title": job.title,
        "description": job.description,
        "requirements": job.requirements,
        "responsibilities": job.responsibilities,
    }
    return {
        "success": True,
        "data": {
            "jobId": job.id,
            "targetLanguage": data.target_language,
            "original": original,
            "translated": {key: translator.tag(value, data.target_language) for key, value in original.items()},
            "note": PENDING_NOTE,
        },
    }
