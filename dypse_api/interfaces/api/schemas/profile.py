"""Schemas for the youth profile and its sections."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from dypse_api.domain.entities import JobStatus


class WorkExperienceBase(BaseModel):
    role: str = Field(..., min_length=1, max_length=150)
    company: str = Field(..., min_length=1, max_length=150)
    location: str | None = Field(default=None, max_length=150)
    start_date: date | None = None
    end_date: date | None = None
    is_current: bool = False
    description: str | None = None

    @model_validator(mode="after")
    def _check_dates(self) -> "WorkExperienceBase":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date cannot be earlier than start_date")
        return self


class ExperienceCreate(WorkExperienceBase):
    pass


class ExperienceUpdate(BaseModel):
    role: str | None = Field(default=None, min_length=1, max_length=150)
    company: str | None = Field(default=None, min_length=1, max_length=150)
    location: str | None = Field(default=None, max_length=150)
    start_date: date | None = None
    end_date: date | None = None
    is_current: bool | None = None
    description: str | None = None

    model_config = ConfigDict(extra="forbid")


class ExperienceRead(WorkExperienceBase):
    id: int

    model_config = ConfigDict(from_attributes=True)


class EducationBase(BaseModel):
    institution: str = Field(..., min_length=1, max_length=150)
    degree: str = Field(..., min_length=1, max_length=150)
    field_of_study: str | None = Field(default=None, max_length=150)
    start_date: date | None = None
    end_date: date | None = None
    is_current: bool = False

    @model_validator(mode="after")
    def _check_dates(self) -> "EducationBase":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date cannot be earlier than start_date")
        return self


class EducationCreate(EducationBase):
    pass


class EducationUpdate(BaseModel):
    institution: str | None = Field(default=None, min_length=1, max_length=150)
    degree: str | None = Field(default=None, min_length=1, max_length=150)
    field_of_study: str | None = Field(default=None, max_length=150)
    start_date: date | None = None
    end_date: date | None = None
    is_current: bool | None = None

    model_config = ConfigDict(extra="forbid")


class EducationRead(EducationBase):
    id: int

    model_config = ConfigDict(from_attributes=True)


class SkillCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    level: str | None = Field(default=None, max_length=50)


class SkillRead(BaseModel):
    skill_id: int
    skill_name: str
    level: str | None

    model_config = ConfigDict(from_attributes=True)


class ProfileUpdate(BaseModel):
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=30)
    bio: str | None = None
    location: str | None = Field(default=None, max_length=150)
    job_status: JobStatus | None = None

    model_config = ConfigDict(extra="forbid")


class ProfileRead(BaseModel):
    id: int
    user_id: int
    bio: str | None
    location: str | None
    job_status: JobStatus
    profile_picture_url: str | None
    cv_url: str | None
    created_at: datetime | None
    updated_at: datetime | None
    experience: list[ExperienceRead]
    education: list[EducationRead]
    skills: list[SkillRead]

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "EducationCreate",
    "EducationRead",
    "EducationUpdate",
    "ExperienceCreate",
    "ExperienceRead",
    "ExperienceUpdate",
    "ProfileRead",
    "ProfileUpdate",
    "SkillCreate",
    "SkillRead",
]
