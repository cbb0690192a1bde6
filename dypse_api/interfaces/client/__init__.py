from .api import ActivitiesAPIError, ActivitiesClient, parse_activity_payload
from .formatting import (
    ActivityIcon,
    FormattedActivity,
    filter_activities_by_type,
    format_activities_for_display,
    format_activity,
    format_time_ago,
    get_activity_icon,
    get_job_activities,
    get_profile_activities,
)
from .polling import (
    ActivityFeedPoller,
    ActivityFeedState,
    dashboard_activity_poller,
    profile_activity_poller,
)
from .rendering import ActivityFeedView, compact_activity_feed_view, render_activity_feed

__all__ = [
    "ActivitiesAPIError",
    "ActivitiesClient",
    "parse_activity_payload",
    "ActivityIcon",
    "FormattedActivity",
    "filter_activities_by_type",
    "format_activities_for_display",
    "format_activity",
    "format_time_ago",
    "get_activity_icon",
    "get_job_activities",
    "get_profile_activities",
    "ActivityFeedPoller",
    "ActivityFeedState",
    "dashboard_activity_poller",
    "profile_activity_poller",
    "ActivityFeedView",
    "compact_activity_feed_view",
    "render_activity_feed",
]
