import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobready.database import get_db
from jobready.dependencies import get_current_user
from jobready.schemas.auth import UserRegister, UserLogin
from jobready.core.security import verify_password, create_access_token
from jobready.repos.user_repo import (
    get_by_phone,
    exists_with_phone_or_email,
    create as create_user,
    touch_last_login,
)
from jobready.models.user import User

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])
INVALID_CREDENTIALS = "Invalid phone number or password"


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(data: UserRegister, db: Session = Depends(get_db)):
    try:
        if exists_with_phone_or_email(db, data.phone, data.email):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="User with this phone or email already exists",
            )
        user = create_user(
            db,
            full_name=data.full_name,
            phone=data.phone,
            email=data.email,
            password=data.password,
            language=data.language,
            location=data.location,
            date_of_birth=data.date_of_birth,
            id_number=data.id_number,
        )
        logger.info("User registered: id=%s", user.id)
        token = create_access_token(user.id)
        return {
            "success": True,
            "message": "User registered successfully",
            "data": {"userId": user.id, "token": token, "language": user.preferred_language},
        }
    except HTTPException:
        raise
    except IntegrityError as e:
        # Lost a race against a concurrent registration with the same phone/email.
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User with this phone or email already exists",
        ) from e
    except Exception as e:
        logger.exception("Register failed for phone=%s: %s", data.phone, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error registering user") from e


@router.post("/login")
def login(data: UserLogin, db: Session = Depends(get_db)):
    try:
        user = get_by_phone(db, data.phone)
        # Same answer for unknown phone and wrong password.
        if not user or not verify_password(data.password, user.password_hash):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=INVALID_CREDENTIALS,
            )
        touch_last_login(db, user)
        logger.info("User logged in: id=%s", user.id)
        token = create_access_token(user.id)
        return {
            "success": True,
            "message": "Login successful",
            "data": {
                "userId": user.id,
                "fullName": user.full_name,
                "token": token,
                "language": user.preferred_language,
            },
        }
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Login failed for phone=%s: %s", data.phone, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error logging in") from e


@router.get("/verify")
def verify(user: User = Depends(get_current_user)):
    return {
        "success": True,
        "data": {
            "userId": user.id,
            "fullName": user.full_name,
            "phone": user.phone,
            "email": user.email,
            "language": user.preferred_language,
        },
    }
