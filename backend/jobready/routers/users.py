import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobready.database import get_db
from jobready.dependencies import get_current_user
from jobready.models.user import User
from jobready.repos.user_repo import get_by_email, get_stats, update as update_user
from jobready.schemas.user import UserProfile, UserProfileUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me")
def get_me(user: User = Depends(get_current_user)):
    return {"success": True, "data": UserProfile.model_validate(user)}


@router.put("/me")
def update_me(
    data: UserProfileUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        if data.email and data.email != user.email:
            other = get_by_email(db, data.email)
            if other and other.id != user.id:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail="Email already in use",
                )
        update_user(
            db,
            user.id,
            full_name=data.full_name,
            email=data.email,
            location=data.location,
            bio=data.bio,
            preferred_language=data.preferred_language,
        )
        return {"success": True, "message": "Profile updated successfully"}
    except HTTPException:
        raise
    except IntegrityError as e:
        # Lost a race against another account claiming the same email.
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already in use") from e
    except Exception as e:
        logger.exception("Profile update failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error updating profile") from e


@router.get("/me/stats")
def get_my_stats(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        return {"success": True, "data": get_stats(db, user.id)}
    except Exception as e:
        logger.exception("Stats failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error fetching statistics") from e
