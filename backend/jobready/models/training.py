from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobready.database import Base


class TrainingCourse(Base):
    __tablename__ = "training_courses"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    category = Column(String(50), nullable=False, index=True)
    difficulty_level = Column(String(20), nullable=False, default="beginner")
    duration_hours = Column(Integer)
    language = Column(String(2), nullable=False, default="en")
    thumbnail_url = Column(String(500))
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    modules = relationship(
        "TrainingModule",
        back_populates="course",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="TrainingModule.order_index",
    )
    enrollments = relationship("UserTraining", back_populates="course")


class TrainingModule(Base):
    __tablename__ = "training_modules"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    course_id = Column(Integer, ForeignKey("training_courses.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    order_index = Column(Integer, nullable=False, default=0)
    duration_minutes = Column(Integer)

    course = relationship("TrainingCourse", back_populates="modules")


class UserTraining(Base):
    """Enrollment of a user in a course with progress state."""

    __tablename__ = "user_training"
    __table_args__ = (UniqueConstraint("user_id", "course_id", name="uq_user_training_user_course"),)

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("training_courses.id", ondelete="CASCADE"), nullable=False)
    progress = Column(Integer, nullable=False, default=0)
    completed = Column(Boolean, nullable=False, default=False)
    enrolled_at = Column(DateTime(timezone=True), server_default=func.now())
    completed_at = Column(DateTime(timezone=True))
    last_accessed = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="enrollments")
    course = relationship("TrainingCourse", back_populates="enrollments")


class UserModuleProgress(Base):
    __tablename__ = "user_module_progress"
    __table_args__ = (UniqueConstraint("user_id", "module_id", name="uq_user_module_progress_user_module"),)

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    module_id = Column(Integer, ForeignKey("training_modules.id", ondelete="CASCADE"), nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime(timezone=True))


# Fixed catalog taxonomy; not derived from course rows.
COURSE_CATEGORIES = [
    {"id": "customer-service", "name": "Customer Service", "icon": "💼"},
    {"id": "cv-writing", "name": "CV Writing", "icon": "📝"},
    {"id": "interview-skills", "name": "Interview Skills", "icon": "🤝"},
    {"id": "digital-literacy", "name": "Digital Literacy", "icon": "💻"},
    {"id": "workplace-skills", "name": "Workplace Skills", "icon": "🏢"},
    {"id": "language-skills", "name": "Language Skills", "icon": "🗣️"},
]
