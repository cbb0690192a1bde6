"""Turn activity records into display-ready lines.

Everything here is a pure function of its inputs; the relative time is
computed against ``now`` on every call and never cached.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from dypse_api.domain.entities import (
    JOB_ACTIVITY_TYPES,
    PROFILE_ACTIVITY_TYPES,
    ActivityRecord,
    ActivityType,
    EducationMetadata,
    ExperienceMetadata,
    ProfileUpdateMetadata,
    SkillMetadata,
    parse_activity_metadata,
)


@dataclass(frozen=True)
class ActivityIcon:
    """Presentation tag: an icon name and a colour tone."""

    name: str
    tone: str


@dataclass(frozen=True)
class FormattedActivity:
    id: int | None
    text: str
    time: str
    icon: ActivityIcon
    activity_type: str
    metadata: dict[str, Any] = field(default_factory=dict)


DEFAULT_ICON = ActivityIcon("activity", "gray")

_ICONS: dict[ActivityType, ActivityIcon] = {
    ActivityType.PROFILE_UPDATE: ActivityIcon("user", "blue"),
    ActivityType.PROFILE_PICTURE_UPLOAD: ActivityIcon("user", "blue"),
    ActivityType.CV_UPLOAD: ActivityIcon("upload", "purple"),
    ActivityType.SKILL_ADD: ActivityIcon("plus", "green"),
    ActivityType.SKILL_REMOVE: ActivityIcon("minus", "red"),
    ActivityType.EXPERIENCE_ADD: ActivityIcon("briefcase", "blue"),
    ActivityType.EXPERIENCE_UPDATE: ActivityIcon("edit", "yellow"),
    ActivityType.EXPERIENCE_DELETE: ActivityIcon("trash", "red"),
    ActivityType.EDUCATION_ADD: ActivityIcon("book", "green"),
    ActivityType.EDUCATION_UPDATE: ActivityIcon("book", "yellow"),
    ActivityType.EDUCATION_DELETE: ActivityIcon("book", "red"),
    ActivityType.JOB_APPLICATION: ActivityIcon("briefcase", "blue"),
    ActivityType.JOB_BOOKMARK: ActivityIcon("briefcase", "yellow"),
    ActivityType.TRAINING_ENROLLMENT: ActivityIcon("book", "purple"),
    ActivityType.ACCOUNT_CREATED: ActivityIcon("check-circle", "green"),
    ActivityType.PROFILE_VIEW: ActivityIcon("user", "gray"),
    ActivityType.LOGIN: ActivityIcon("activity", "gray"),
    ActivityType.OTHER: DEFAULT_ICON,
}

if set(_ICONS) != set(ActivityType):  # pragma: no cover
    raise RuntimeError("Every activity type needs an icon")

_FIXED_TEXT: dict[ActivityType, str] = {
    ActivityType.PROFILE_PICTURE_UPLOAD: "Uploaded a new profile picture",
    ActivityType.CV_UPLOAD: "Uploaded CV/Resume document",
    ActivityType.ACCOUNT_CREATED: "Welcome to DYPSE! Your account has been created",
    ActivityType.JOB_APPLICATION: "Applied for a job position",
    ActivityType.JOB_BOOKMARK: "Bookmarked a job",
    ActivityType.TRAINING_ENROLLMENT: "Enrolled in training program",
    ActivityType.PROFILE_VIEW: "Profile was viewed",
    ActivityType.LOGIN: "Logged into account",
}

_SECTION_VERBS: dict[ActivityType, str] = {
    ActivityType.EXPERIENCE_ADD: "Added",
    ActivityType.EXPERIENCE_UPDATE: "Updated",
    ActivityType.EXPERIENCE_DELETE: "Removed",
    ActivityType.EDUCATION_ADD: "Added",
    ActivityType.EDUCATION_UPDATE: "Updated",
    ActivityType.EDUCATION_DELETE: "Removed",
}

DEFAULT_TEXT = "Activity recorded"


def get_activity_icon(activity_type: ActivityType | str | None) -> ActivityIcon:
    """Return the icon for ``activity_type``; unknown values get :data:`DEFAULT_ICON`."""

    return _ICONS.get(ActivityType.parse(activity_type), DEFAULT_ICON)


def _template_text(kind: ActivityType, raw_metadata: Mapping[str, Any] | None) -> str:
    metadata = parse_activity_metadata(kind, raw_metadata)

    if isinstance(metadata, ProfileUpdateMetadata):
        if metadata.changes:
            return f"Updated profile: {', '.join(metadata.changes)}"
        return "Updated profile information"

    if isinstance(metadata, SkillMetadata):
        skill = metadata.skill_name or "a skill"
        if kind is ActivityType.SKILL_REMOVE:
            return f"Removed skill: {skill}"
        level = f" ({metadata.level})" if metadata.level else ""
        return f"Added skill: {skill}{level}"

    if isinstance(metadata, ExperienceMetadata):
        verb = _SECTION_VERBS[kind]
        if metadata.company and metadata.role:
            return f"{verb} experience: {metadata.role} at {metadata.company}"
        return f"{verb} work experience"

    if isinstance(metadata, EducationMetadata):
        verb = _SECTION_VERBS[kind]
        if metadata.institution and metadata.degree:
            return f"{verb} education: {metadata.degree} at {metadata.institution}"
        return f"{verb} education"

    return _FIXED_TEXT.get(kind, DEFAULT_TEXT)


def format_activity_text(record: ActivityRecord) -> str:
    """Pick the description, then the title, then the per-type template."""

    description = (record.description or "").strip()
    if description:
        return description
    title = (record.title or "").strip()
    if title:
        return title
    return _template_text(ActivityType.parse(record.activity_type), record.metadata)


_MINUTES_IN_DAY = 1440
_MINUTES_IN_ALMOST_TWO_DAYS = 2520
_MINUTES_IN_MONTH = 43200
_MINUTES_IN_TWO_MONTHS = 86400
_MINUTES_IN_AVERAGE_MONTH = 43830


def _round(value: float) -> int:
    return int(math.floor(value + 0.5))


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def _distance_words(seconds: float) -> str:
    minutes = _round(seconds / 60)

    if minutes < 1:
        return "less than a minute"
    if minutes < 45:
        return _plural(minutes, "minute")
    if minutes < 90:
        return "about 1 hour"
    if minutes < _MINUTES_IN_DAY:
        return f"about {_plural(_round(minutes / 60), 'hour')}"
    if minutes < _MINUTES_IN_ALMOST_TWO_DAYS:
        return "1 day"
    if minutes < _MINUTES_IN_MONTH:
        return _plural(_round(minutes / _MINUTES_IN_DAY), "day")
    if minutes < _MINUTES_IN_TWO_MONTHS:
        return f"about {_plural(_round(minutes / _MINUTES_IN_MONTH), 'month')}"

    months = _round(minutes / _MINUTES_IN_AVERAGE_MONTH)
    if months < 12:
        return _plural(max(2, _round(minutes / _MINUTES_IN_MONTH)), "month")

    years, remainder = divmod(months, 12)
    if remainder < 3:
        return f"about {_plural(years, 'year')}"
    if remainder < 9:
        return f"over {_plural(years, 'year')}"
    return f"almost {_plural(years + 1, 'year')}"


def _as_aware(value: datetime) -> datetime:
    # Naive timestamps are read as UTC.
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def format_time_ago(created_at: datetime | None, now: datetime | None = None) -> str:
    """Describe ``created_at`` relative to ``now``, e.g. ``"about 3 hours ago"``."""

    if created_at is None:
        return ""
    moment = _as_aware(created_at)
    reference = _as_aware(now) if now is not None else datetime.now(timezone.utc)
    delta = (reference - moment).total_seconds()
    words = _distance_words(abs(delta))
    if delta < 0:
        return f"in {words}"
    return f"{words} ago"


def format_activity(record: ActivityRecord, now: datetime | None = None) -> FormattedActivity:
    kind = ActivityType.parse(record.activity_type)
    return FormattedActivity(
        id=record.id,
        text=format_activity_text(record),
        time=format_time_ago(record.created_at, now=now),
        icon=get_activity_icon(kind),
        activity_type=kind.value,
        metadata=dict(record.metadata or {}),
    )


def format_activities_for_display(
    records: Iterable[ActivityRecord], now: datetime | None = None
) -> list[FormattedActivity]:
    reference = now if now is not None else datetime.now(timezone.utc)
    return [format_activity(record, now=reference) for record in records]


def filter_activities_by_type(
    records: Iterable[ActivityRecord], types: Iterable[ActivityType | str]
) -> list[ActivityRecord]:
    wanted = {
        ActivityType.parse(value)
        for value in types
        if isinstance(value, ActivityType) or ActivityType.is_known(str(value).strip().lower())
    }
    return [record for record in records if ActivityType.parse(record.activity_type) in wanted]


def get_profile_activities(records: Iterable[ActivityRecord]) -> list[ActivityRecord]:
    return filter_activities_by_type(records, PROFILE_ACTIVITY_TYPES)


def get_job_activities(records: Iterable[ActivityRecord]) -> list[ActivityRecord]:
    return filter_activities_by_type(records, JOB_ACTIVITY_TYPES)


__all__ = [
    "ActivityIcon",
    "DEFAULT_ICON",
    "FormattedActivity",
    "filter_activities_by_type",
    "format_activities_for_display",
    "format_activity",
    "format_activity_text",
    "format_time_ago",
    "get_activity_icon",
    "get_job_activities",
    "get_profile_activities",
]
