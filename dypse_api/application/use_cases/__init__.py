"""Aggregate application use cases."""

from .activity import (
    ActivityQueryResult,
    ActivityQueryStatus,
    ActivityStatsResult,
    clean_old_activities,
    get_activity_stats,
    get_recent_activities,
    log_activity,
)
from .users import authenticate_user, record_login, register_user

__all__ = [
    "ActivityQueryResult",
    "ActivityQueryStatus",
    "ActivityStatsResult",
    "authenticate_user",
    "clean_old_activities",
    "get_activity_stats",
    "get_recent_activities",
    "log_activity",
    "record_login",
    "register_user",
]
