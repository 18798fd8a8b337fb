from pydantic import field_validator

from jobready.schemas.common import CamelModel, Language, require_text


class TranslateRequest(CamelModel):
    text: str
    target_language: Language
    source_language: Language | None = None

    @field_validator("text")
    @classmethod
    def text_required(cls, v: str) -> str:
        return require_text(v, "Text is required")


class TranslateBatchRequest(CamelModel):
    texts: list[str]
    target_language: Language
    source_language: Language | None = None

    @field_validator("texts")
    @classmethod
    def texts_not_blank(cls, v: list[str]) -> list[str]:
        return [require_text(t, "All texts must be non-empty") for t in v]


class DetectRequest(CamelModel):
    text: str

    @field_validator("text")
    @classmethod
    def text_required(cls, v: str) -> str:
        return require_text(v, "Text is required")


class TranslateJobRequest(CamelModel):
    job_id: int
    target_language: Language
