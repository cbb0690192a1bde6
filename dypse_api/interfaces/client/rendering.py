"""Plain-text rendering of a formatted activity feed."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .formatting import FormattedActivity

LOADING_MESSAGE = "Loading activities..."
ERROR_MESSAGE = "Failed to load activities"
EMPTY_HEADING = "No Activities Yet"


@dataclass(frozen=True)
class ActivityFeedView:
    """Render settings for one feed; instances hold no data."""

    title: str = "Recent Activities"
    show_title: bool = True
    max_items: int | None = None
    empty_message: str = "No recent activities to show."
    empty_icon: str = "activity"

    def __post_init__(self) -> None:
        if self.max_items is not None and self.max_items < 1:
            raise ValueError("max_items must be at least 1 or None")

    def render(
        self,
        activities: Sequence[FormattedActivity],
        loading: bool = False,
        error: str | None = None,
    ) -> list[str]:
        lines: list[str] = []
        if self.show_title:
            lines.append(self.title)

        if loading:
            lines.append(LOADING_MESSAGE)
            return lines
        # The raw error text is never shown.
        if error:
            lines.append(ERROR_MESSAGE)
            return lines
        if not activities:
            lines.extend([f"[{self.empty_icon}]", EMPTY_HEADING, self.empty_message])
            return lines

        visible = activities if self.max_items is None else activities[: self.max_items]
        for activity in visible:
            suffix = f" ({activity.time})" if activity.time else ""
            lines.append(f"[{activity.icon.name}] {activity.text}{suffix}")

        if self.max_items is not None and len(activities) > self.max_items:
            lines.append(f"Showing {self.max_items} of {len(activities)} activities")
        return lines


def compact_activity_feed_view(**overrides) -> ActivityFeedView:
    """Small feed without title for sidebars and cards."""

    settings = {
        "show_title": False,
        "max_items": 3,
        "empty_message": "No recent activities",
        "empty_icon": "activity-small",
    }
    settings.update(overrides)
    return ActivityFeedView(**settings)


def render_activity_feed(
    activities: Sequence[FormattedActivity],
    *,
    view: ActivityFeedView | None = None,
    loading: bool = False,
    error: str | None = None,
) -> str:
    """Return the feed as a single newline separated block."""

    return "\n".join((view or ActivityFeedView()).render(activities, loading=loading, error=error))


__all__ = [
    "ActivityFeedView",
    "EMPTY_HEADING",
    "ERROR_MESSAGE",
    "LOADING_MESSAGE",
    "compact_activity_feed_view",
    "render_activity_feed",
]
