from sqlalchemy import JSON, Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobready.database import Base

CV_TEMPLATES = ("modern", "classic", "creative")


class CV(Base):
    __tablename__ = "cvs"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    language = Column(String(2), nullable=False, default="en")
    template = Column(String(20), nullable=False, default="modern")
    personal_info = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False, default=dict)
    is_default = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="cvs")
    education = relationship(
        "CVEducation",
        back_populates="cv",
        cascade="all, delete-orphan",
        order_by=lambda: [CVEducation.start_year.desc(), CVEducation.id],
    )
    experience = relationship(
        "CVExperience",
        back_populates="cv",
        cascade="all, delete-orphan",
        order_by=lambda: [CVExperience.start_date.desc(), CVExperience.id],
    )
    skills = relationship(
        "CVSkill",
        back_populates="cv",
        cascade="all, delete-orphan",
        order_by="CVSkill.id",
    )
    languages = relationship(
        "CVLanguage",
        back_populates="cv",
        cascade="all, delete-orphan",
        order_by="CVLanguage.id",
    )
    references = relationship(
        "CVReference",
        back_populates="cv",
        cascade="all, delete-orphan",
        order_by="CVReference.id",
    )


class CVEducation(Base):
    __tablename__ = "cv_education"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    cv_id = Column(Integer, ForeignKey("cvs.id", ondelete="CASCADE"), nullable=False, index=True)
    institution = Column(String(255), nullable=False)
    degree = Column(String(255), nullable=False)
    start_year = Column(Integer, nullable=False)
    end_year = Column(Integer)
    description = Column(Text)

    cv = relationship("CV", back_populates="education")


class CVExperience(Base):
    __tablename__ = "cv_experience"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    cv_id = Column(Integer, ForeignKey("cvs.id", ondelete="CASCADE"), nullable=False, index=True)
    company = Column(String(255), nullable=False)
    position = Column(String(255), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date)
    description = Column(Text)
    is_current = Column(Boolean, nullable=False, default=False)

    cv = relationship("CV", back_populates="experience")


class CVSkill(Base):
    __tablename__ = "cv_skills"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    cv_id = Column(Integer, ForeignKey("cvs.id", ondelete="CASCADE"), nullable=False, index=True)
    skill_name = Column(String(100), nullable=False)
    proficiency_level = Column(String(50))

    cv = relationship("CV", back_populates="skills")


class CVLanguage(Base):
    __tablename__ = "cv_languages"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    cv_id = Column(Integer, ForeignKey("cvs.id", ondelete="CASCADE"), nullable=False, index=True)
    language = Column(String(100), nullable=False)
    proficiency = Column(String(50))

    cv = relationship("CV", back_populates="languages")


class CVReference(Base):
    __tablename__ = "cv_references"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    cv_id = Column(Integer, ForeignKey("cvs.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    relationship_to_candidate = Column("relationship", String(100))
    phone = Column(String(20))
    email = Column(String(255))

    cv = relationship("CV", back_populates="references")
