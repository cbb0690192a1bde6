from .activity import ActivityRecordRead, ActivityStatsResponse, RecentActivitiesResponse
from .auth import RegisterRequest, Token
from .profile import (
    EducationCreate,
    EducationRead,
    EducationUpdate,
    ExperienceCreate,
    ExperienceRead,
    ExperienceUpdate,
    ProfileRead,
    ProfileUpdate,
    SkillCreate,
    SkillRead,
)
from .user import RoleRead, UserRead

__all__ = [
    "ActivityRecordRead",
    "ActivityStatsResponse",
    "RecentActivitiesResponse",
    "RegisterRequest",
    "Token",
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
    "RoleRead",
    "UserRead",
]
