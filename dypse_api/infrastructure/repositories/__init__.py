"""Repository implementations for infrastructure layer."""

from .activity_record_repository import ActivityRecordRepository
from .profile_repository import ProfileRepository
from .role_repository import RoleRepository
from .skill_repository import SkillRepository
from .user_repository import UserRepository

__all__ = [
    "ActivityRecordRepository",
    "ProfileRepository",
    "RoleRepository",
    "SkillRepository",
    "UserRepository",
]
