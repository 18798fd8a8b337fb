import os
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("APP_ENV", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import jobready.models  # noqa: E402,F401
from jobready.core.rate_limiter import rate_limiter  # noqa: E402
from jobready.database import Base, enable_sqlite_foreign_keys, get_db  # noqa: E402
from jobready.dependencies import get_current_user, get_optional_user  # noqa: E402
from jobready.main import app  # noqa: E402
from jobready.models.job import Job  # noqa: E402
from jobready.models.training import TrainingCourse, TrainingModule  # noqa: E402
from jobready.models.user import User  # noqa: E402


@dataclass
class StubUser:
    id: int = 1
    full_name: str = "Thandi Mokoena"
    phone: str = "0821234567"
    email: str | None = "thandi@example.com"
    preferred_language: str = "zu"
    password_hash: str = "hashed-password"


@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    rate_limiter.reset()
    yield
    rate_limiter.reset()


@pytest.fixture
def stub_user() -> StubUser:
    return StubUser()


@pytest.fixture
def client(stub_user: StubUser):
    """Authenticated client with a dummy DB; route tests monkeypatch the repo functions."""

    def _db_override():
        yield object()

    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_current_user] = lambda: stub_user
    app.dependency_overrides[get_optional_user] = lambda: stub_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client():
    def _db_override():
        yield object()

    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_optional_user] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    """Fresh in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def api(db_session):
    """Client over the real schema with real token auth."""

    def _db_override():
        yield db_session

    app.dependency_overrides[get_db] = _db_override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    counter = {"n": 0}

    def _make(**overrides) -> User:
        counter["n"] += 1
        fields = {
            "full_name": f"User {counter['n']}",
            "phone": f"08200000{counter['n']:02d}",
            "password_hash": "not-a-real-hash",
            "preferred_language": "en",
            "location": "Johannesburg",
        }
        fields.update(overrides)
        user = User(**fields)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture
def make_job(db_session):
    counter = {"n": 0}

    def _make(**overrides) -> Job:
        counter["n"] += 1
        fields = {
            "title": f"Job {counter['n']}",
            "company_name": "Acme",
            "location": "Johannesburg",
            "job_type": "full-time",
            "salary_min": 5000,
            "salary_max": 8000,
            "description": "General work",
            "language": "en",
            "is_active": True,
            "application_deadline": date.today() + timedelta(days=10),
            "posted_date": datetime(2026, 1, 1, tzinfo=timezone.utc) + timedelta(hours=counter["n"]),
        }
        fields.update(overrides)
        job = Job(**fields)
        db_session.add(job)
        db_session.commit()
        db_session.refresh(job)
        return job

    return _make


@pytest.fixture
def make_course(db_session):
    def _make(title="Interview Skills", category="interview-skills", is_active=True, modules=("Intro", "Practice"), **overrides) -> TrainingCourse:
        course = TrainingCourse(title=title, category=category, is_active=is_active, **overrides)
        course.modules = [TrainingModule(title=m, order_index=i) for i, m in enumerate(modules, start=1)]
        db_session.add(course)
        db_session.commit()
        db_session.refresh(course)
        return course

    return _make


@pytest.fixture
def auth_header():
    from jobready.core.security import create_access_token

    def _header(user_id: int) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return _header
