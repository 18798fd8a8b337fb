from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobready.database import Base

JOB_TYPES = ("full-time", "part-time", "contract", "temporary")
APPLICATION_STATUSES = ("pending", "reviewed", "shortlisted", "rejected", "accepted")


class Job(Base):
    """Employer-posted listing. Counters are advisory."""

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    company_name = Column(String(255), nullable=False)
    location = Column(String(200))
    job_type = Column(String(20), nullable=False, default="full-time")
    salary_min = Column(Integer)
    salary_max = Column(Integer)
    description = Column(Text)
    requirements = Column(Text)
    responsibilities = Column(Text)
    language = Column(String(2), nullable=False, default="en")
    posted_date = Column(DateTime(timezone=True), server_default=func.now())
    application_deadline = Column(Date, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    view_count = Column(Integer, nullable=False, default=0)
    application_count = Column(Integer, nullable=False, default=0)

    applications = relationship("JobApplication", back_populates="job", cascade="all, delete-orphan", passive_deletes=True)
    saved_by = relationship("SavedJob", back_populates="job", cascade="all, delete-orphan", passive_deletes=True)


class JobApplication(Base):
    __tablename__ = "job_applications"
    __table_args__ = (UniqueConstraint("user_id", "job_id", name="uq_job_applications_user_job"),)

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    cv_id = Column(Integer, ForeignKey("cvs.id", ondelete="SET NULL"), nullable=True)
    cover_letter = Column(Text)
    status = Column(String(20), nullable=False, default="pending")
    applied_at = Column(DateTime(timezone=True), server_default=func.now())

    job = relationship("Job", back_populates="applications")
    user = relationship("User", back_populates="applications")


class SavedJob(Base):
    __tablename__ = "saved_jobs"
    __table_args__ = (UniqueConstraint("user_id", "job_id", name="uq_saved_jobs_user_job"),)

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    saved_at = Column(DateTime(timezone=True), server_default=func.now())

    job = relationship("Job", back_populates="saved_by")
    user = relationship("User", back_populates="saved_jobs")
