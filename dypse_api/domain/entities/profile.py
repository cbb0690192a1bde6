"""Domain entities for the youth profile and its sections."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


class JobStatus(str, Enum):
    UNEMPLOYED = "unemployed"
    EMPLOYED = "employed"
    SELF_EMPLOYED = "self_employed"


@dataclass
class WorkExperience:
    """A position held by the profile owner."""

    id: int | None
    profile_id: int | None
    role: str
    company: str
    location: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    is_current: bool = False
    description: str | None = None


@dataclass
class Education:
    """A programme studied by the profile owner."""

    id: int | None
    profile_id: int | None
    institution: str
    degree: str
    field_of_study: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    is_current: bool = False


@dataclass
class UserSkill:
    """Association between a user and a catalog skill with a proficiency level."""

    skill_id: int
    skill_name: str
    level: str | None = None


@dataclass
class YouthProfile:
    """Career profile owned by a youth account."""

    id: int | None
    user_id: int
    bio: str | None = None
    location: str | None = None
    job_status: JobStatus = JobStatus.UNEMPLOYED
    profile_picture_url: str | None = None
    cv_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    experience: list[WorkExperience] = field(default_factory=list)
    education: list[Education] = field(default_factory=list)
    skills: list[UserSkill] = field(default_factory=list)


__all__ = ["Education", "JobStatus", "UserSkill", "WorkExperience", "YouthProfile"]
