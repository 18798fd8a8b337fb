from datetime import date, datetime

from pydantic import EmailStr, field_validator

from jobready.schemas.common import CamelModel, Language, OrmModel, optional_text


class UserProfileUpdate(CamelModel):
    full_name: str | None = None
    email: EmailStr | None = None
    location: str | None = None
    bio: str | None = None
    preferred_language: Language | None = None

    @field_validator("full_name")
    @classmethod
    def full_name_not_blank(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("Full name cannot be empty")
        return optional_text(v)

    @field_validator("location", "bio")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return optional_text(v)


class UserProfile(OrmModel):
    id: int
    full_name: str
    phone: str
    email: str | None = None
    preferred_language: str
    location: str | None = None
    date_of_birth: date | None = None
    id_number: str | None = None
    profile_picture_url: str | None = None
    bio: str | None = None
    created_at: datetime | None = None
    last_login: datetime | None = None
