"""SQLAlchemy models for youth profiles, experience and education."""

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from dypse_api.infrastructure.database import Base
from dypse_api.utils import now_in_app_naive_datetime


class YouthProfileModel(Base):
    """Database representation of a youth career profile."""

    __tablename__ = "youth_profile"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    bio = Column(Text, nullable=True)
    location = Column(String(120), nullable=True)
    job_status = Column(String(30), nullable=False, default="unemployed")
    profile_picture_url = Column(String(255), nullable=True)
    cv_url = Column(String(255), nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_app_naive_datetime)

    experience = relationship(
        "WorkExperienceModel",
        back_populates="profile",
        cascade="all, delete-orphan",
        order_by="WorkExperienceModel.id",
        lazy="selectin",
    )
    education = relationship(
        "EducationModel",
        back_populates="profile",
        cascade="all, delete-orphan",
        order_by="EducationModel.id",
        lazy="selectin",
    )


class WorkExperienceModel(Base):
    """Database representation of a work experience entry."""

    __tablename__ = "work_experience"

    id = Column(Integer, primary_key=True, index=True)
    profile_id = Column(
        Integer,
        ForeignKey("youth_profile.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role = Column(String(120), nullable=False)
    company = Column(String(120), nullable=False)
    location = Column(String(120), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    is_current = Column(Boolean, nullable=False, default=False)
    description = Column(Text, nullable=True)

    profile = relationship("YouthProfileModel", back_populates="experience")


class EducationModel(Base):
    """Database representation of an education entry."""

    __tablename__ = "education"

    id = Column(Integer, primary_key=True, index=True)
    profile_id = Column(
        Integer,
        ForeignKey("youth_profile.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    institution = Column(String(120), nullable=False)
    degree = Column(String(120), nullable=False)
    field_of_study = Column(String(120), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    is_current = Column(Boolean, nullable=False, default=False)

    profile = relationship("YouthProfileModel", back_populates="education")


__all__ = ["EducationModel", "WorkExperienceModel", "YouthProfileModel"]
