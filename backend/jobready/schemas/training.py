from datetime import datetime

from pydantic import Field

from jobready.schemas.common import CamelModel, OrmModel


class ProgressUpdate(CamelModel):
    progress: int = Field(ge=0, le=100)
    module_id: int | None = None


class CourseOut(OrmModel):
    id: int
    title: str
    description: str | None = None
    category: str
    difficulty_level: str
    duration_hours: int | None = None
    language: str
    thumbnail_url: str | None = None
    is_active: bool


class ModuleOut(OrmModel):
    id: int
    title: str
    description: str | None = None
    order_index: int
    duration_minutes: int | None = None


class MyCourseOut(OrmModel):
    id: int
    title: str
    description: str | None = None
    category: str
    difficulty_level: str
    duration_hours: int | None = None
    thumbnail_url: str | None = None
    progress: int
    completed: bool
    enrolled_at: datetime | None = None
    last_accessed: datetime | None = None
