from sqlalchemy import Column, Integer, String, Text, Date, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobready.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    full_name = Column(String(200), nullable=False)
    phone = Column(String(10), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=True)
    password_hash = Column(String, nullable=False)
    preferred_language = Column(String(2), nullable=False, default="en")
    location = Column(String(200))
    date_of_birth = Column(Date)
    id_number = Column(String(13))
    profile_picture_url = Column(String(500))
    bio = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    last_login = Column(DateTime(timezone=True))

    cvs = relationship("CV", back_populates="user")
    applications = relationship("JobApplication", back_populates="user")
    saved_jobs = relationship("SavedJob", back_populates="user")
    enrollments = relationship("UserTraining", back_populates="user")
