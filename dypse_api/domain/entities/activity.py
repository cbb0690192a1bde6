"""Domain entities describing the per-user activity log."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class ActivityType(str, Enum):
    """Closed set of actions that can appear in a user's activity feed."""

    PROFILE_UPDATE = "profile_update"
    PROFILE_PICTURE_UPLOAD = "profile_picture_upload"
    CV_UPLOAD = "cv_upload"
    SKILL_ADD = "skill_add"
    SKILL_REMOVE = "skill_remove"
    EXPERIENCE_ADD = "experience_add"
    EXPERIENCE_UPDATE = "experience_update"
    EXPERIENCE_DELETE = "experience_delete"
    EDUCATION_ADD = "education_add"
    EDUCATION_UPDATE = "education_update"
    EDUCATION_DELETE = "education_delete"
    JOB_APPLICATION = "job_application"
    JOB_BOOKMARK = "job_bookmark"
    TRAINING_ENROLLMENT = "training_enrollment"
    ACCOUNT_CREATED = "account_created"
    PROFILE_VIEW = "profile_view"
    LOGIN = "login"
    OTHER = "other"

    @classmethod
    def parse(cls, value: "ActivityType | str | None") -> "ActivityType":
        """Return the member matching ``value`` or :attr:`OTHER` when unknown."""

        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.OTHER
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.OTHER

    @classmethod
    def is_known(cls, value: str) -> bool:
        """Return ``True`` when ``value`` names a member of the enumeration."""

        return value in cls._value2member_map_


PROFILE_ACTIVITY_TYPES: tuple[ActivityType, ...] = (
    ActivityType.PROFILE_UPDATE,
    ActivityType.PROFILE_PICTURE_UPLOAD,
    ActivityType.CV_UPLOAD,
    ActivityType.SKILL_ADD,
    ActivityType.SKILL_REMOVE,
    ActivityType.EXPERIENCE_ADD,
    ActivityType.EXPERIENCE_UPDATE,
    ActivityType.EXPERIENCE_DELETE,
    ActivityType.EDUCATION_ADD,
    ActivityType.EDUCATION_UPDATE,
    ActivityType.EDUCATION_DELETE,
)

JOB_ACTIVITY_TYPES: tuple[ActivityType, ...] = (
    ActivityType.JOB_APPLICATION,
    ActivityType.JOB_BOOKMARK,
    ActivityType.TRAINING_ENROLLMENT,
)


@dataclass
class ActivityRecord:
    """Immutable entry of the activity log owned by a single user."""

    id: int | None
    user_id: int
    activity_type: ActivityType
    title: str
    description: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None


__all__ = [
    "ActivityRecord",
    "ActivityType",
    "JOB_ACTIVITY_TYPES",
    "PROFILE_ACTIVITY_TYPES",
]
