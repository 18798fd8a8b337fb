import re
from datetime import date

from pydantic import EmailStr, field_validator

from jobready.schemas.common import CamelModel, Language, optional_text, require_text

PHONE_RE = re.compile(r"^0\d{9}$")


class UserRegister(CamelModel):
    full_name: str
    phone: str
    email: EmailStr | None = None
    password: str
    language: Language
    location: str
    date_of_birth: date | None = None
    id_number: str | None = None

    @field_validator("full_name")
    @classmethod
    def full_name_required(cls, v: str) -> str:
        return require_text(v, "Full name is required")

    @field_validator("phone")
    @classmethod
    def phone_format(cls, v: str) -> str:
        v = (v or "").strip()
        if not PHONE_RE.match(v):
            raise ValueError("Invalid phone number")
        return v

    @field_validator("password")
    @classmethod
    def password_min_length(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v

    @field_validator("location")
    @classmethod
    def location_required(cls, v: str) -> str:
        return require_text(v, "Location is required")

    @field_validator("id_number")
    @classmethod
    def strip_id_number(cls, v: str | None) -> str | None:
        return optional_text(v)


class UserLogin(CamelModel):
    phone: str
    password: str

    @field_validator("phone")
    @classmethod
    def phone_required(cls, v: str) -> str:
        return require_text(v, "Phone number is required")

    @field_validator("password")
    @classmethod
    def password_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        return v
