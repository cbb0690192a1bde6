"""Domain entities exposed by the application."""

from .activity import (
    JOB_ACTIVITY_TYPES,
    PROFILE_ACTIVITY_TYPES,
    ActivityRecord,
    ActivityType,
)
from .activity_metadata import (
    ActivityMetadata,
    EducationMetadata,
    EmptyMetadata,
    ExperienceMetadata,
    ProfileUpdateMetadata,
    SkillMetadata,
    parse_activity_metadata,
)
from .profile import Education, JobStatus, UserSkill, WorkExperience, YouthProfile
from .role import (
    DEFAULT_ROLES,
    ROLE_ADMIN,
    ROLE_EMPLOYER,
    ROLE_VERIFIER,
    ROLE_YOUTH,
    SELF_REGISTRATION_ROLES,
    Role,
    normalize_role_alias,
)
from .user import User

__all__ = [
    "ActivityMetadata",
    "ActivityRecord",
    "ActivityType",
    "DEFAULT_ROLES",
    "Education",
    "EducationMetadata",
    "EmptyMetadata",
    "ExperienceMetadata",
    "JOB_ACTIVITY_TYPES",
    "JobStatus",
    "PROFILE_ACTIVITY_TYPES",
    "ProfileUpdateMetadata",
    "ROLE_ADMIN",
    "ROLE_EMPLOYER",
    "ROLE_VERIFIER",
    "ROLE_YOUTH",
    "Role",
    "SELF_REGISTRATION_ROLES",
    "SkillMetadata",
    "User",
    "UserSkill",
    "WorkExperience",
    "YouthProfile",
    "normalize_role_alias",
    "parse_activity_metadata",
]
