"""ORM models used by the application infrastructure."""

from .activity_record import ActivityRecordModel
from .profile import EducationModel, WorkExperienceModel, YouthProfileModel
from .role import RoleModel
from .skill import SkillModel, UserSkillModel
from .user import UserModel

__all__ = [
    "ActivityRecordModel",
    "EducationModel",
    "RoleModel",
    "SkillModel",
    "UserModel",
    "UserSkillModel",
    "WorkExperienceModel",
    "YouthProfileModel",
]
