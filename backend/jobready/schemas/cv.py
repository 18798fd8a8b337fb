from datetime import date, datetime
from typing import Any, Literal

from pydantic import Field, field_validator

from jobready.schemas.common import CamelModel, Language, OrmModel, optional_text, require_text

Template = Literal["modern", "classic", "creative"]


class CVCreate(CamelModel):
    title: str
    language: Language
    template: Template = "modern"
    personal_info: dict[str, Any] | None = None

    @field_validator("title")
    @classmethod
    def title_required(cls, v: str) -> str:
        return require_text(v, "CV title is required")


class CVUpdate(CamelModel):
    title: str | None = None
    personal_info: dict[str, Any] | None = None
    template: Template | None = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str | None) -> str | None:
        return optional_text(v)


class EducationCreate(CamelModel):
    institution: str
    degree: str
    start_year: int
    end_year: int | None = None
    description: str | None = None

    @field_validator("institution", "degree")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return require_text(v, "Field is required")


class ExperienceCreate(CamelModel):
    company: str
    position: str
    start_date: date
    end_date: date | None = None
    description: str | None = None
    is_current_job: bool = False

    @field_validator("company", "position")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return require_text(v, "Field is required")


class SkillItem(CamelModel):
    name: str
    level: str | None = None

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        return require_text(v, "Skill name is required")


class SkillsReplace(CamelModel):
    skills: list[SkillItem]


class LanguageItem(CamelModel):
    language: str
    proficiency: str | None = None

    @field_validator("language")
    @classmethod
    def language_required(cls, v: str) -> str:
        return require_text(v, "Language is required")


class LanguagesReplace(CamelModel):
    languages: list[LanguageItem]


class ReferenceCreate(CamelModel):
    name: str
    relationship: str | None = None
    phone: str | None = None
    email: str | None = None

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        return require_text(v, "Reference name is required")


class CVSummaryOut(OrmModel):
    id: int
    title: str
    language: str
    template: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    is_default: bool


class EducationOut(OrmModel):
    id: int
    institution: str
    degree: str
    start_year: int
    end_year: int | None = None
    description: str | None = None


class ExperienceOut(OrmModel):
    id: int
    company: str
    position: str
    start_date: date
    end_date: date | None = None
    description: str | None = None
    is_current: bool


class SkillOut(OrmModel):
    id: int
    skill_name: str
    proficiency_level: str | None = None


class LanguageOut(OrmModel):
    id: int
    language: str
    proficiency: str | None = None


class ReferenceOut(OrmModel):
    id: int
    name: str
    relationship: str | None = Field(default=None, validation_alias="relationship_to_candidate")
    phone: str | None = None
    email: str | None = None


class CVDetailOut(CVSummaryOut):
    user_id: int
    personal_info: dict[str, Any] = Field(default_factory=dict)
    education: list[EducationOut] = Field(default_factory=list)
    experience: list[ExperienceOut] = Field(default_factory=list)
    skills: list[SkillOut] = Field(default_factory=list)
    languages: list[LanguageOut] = Field(default_factory=list)
    references: list[ReferenceOut] = Field(default_factory=list)
