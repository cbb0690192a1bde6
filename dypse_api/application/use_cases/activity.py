"""Use cases for recording and reading the per-user activity log."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dypse_api.config import get_settings
from dypse_api.domain.entities import (
    ActivityRecord,
    ActivityType,
)
from dypse_api.infrastructure.repositories import ActivityRecordRepository
from dypse_api.utils import days_before_now, now_in_app_timezone

logger = logging.getLogger(__name__)

DROPPED_METADATA: dict[str, Any] = {"metadata_dropped": True}


class ActivityQueryStatus(Enum):
    """Outcome of an activity read."""

    SUCCESS = auto()
    INVALID_FILTER = auto()
    UNAVAILABLE = auto()


@dataclass
class ActivityQueryResult:
    """Records returned by a query plus the error indicator callers must check.

    A failed read always carries an empty ``activities`` list, so an empty list
    alone does not mean the user has no activity.
    """

    activities: list[ActivityRecord] = field(default_factory=list)
    status: ActivityQueryStatus = ActivityQueryStatus.SUCCESS
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is ActivityQueryStatus.SUCCESS


@dataclass
class ActivityStatsResult:
    stats: dict[str, int] = field(default_factory=dict)
    days: int = 0
    status: ActivityQueryStatus = ActivityQueryStatus.SUCCESS
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is ActivityQueryStatus.SUCCESS


def _normalize_metadata(metadata: Mapping[str, Any] | None) -> dict[str, Any]:
    """Return a JSON-safe copy of ``metadata`` bounded by the configured size."""

    if not metadata:
        return {}
    try:
        encoded = json.dumps(dict(metadata), default=str)
    except (TypeError, ValueError):
        logger.warning("Dropping activity metadata that cannot be serialized")
        return dict(DROPPED_METADATA)

    max_bytes = get_settings().activity_metadata_max_bytes
    if len(encoded.encode("utf-8")) > max_bytes:
        logger.warning(
            "Dropping activity metadata larger than %d bytes", max_bytes
        )
        return dict(DROPPED_METADATA)
    return json.loads(encoded)


def log_activity(
    session: Session,
    *,
    user_id: int,
    activity_type: ActivityType | str,
    title: str | None = None,
    description: str | None = None,
    metadata: Mapping[str, Any] | None = None,
) -> ActivityRecord | None:
    """Append one activity for ``user_id``.

    Activity logging is best effort: any failure is logged and swallowed, and
    ``None`` is returned instead of the stored record. Unknown activity types
    are stored as ``other`` with the submitted value kept in the metadata.
    """

    try:
        kind = ActivityType.parse(activity_type)
        stored_metadata = _normalize_metadata(metadata)
        raw_type = activity_type.value if isinstance(activity_type, ActivityType) else activity_type
        if kind is ActivityType.OTHER and raw_type != ActivityType.OTHER.value:
            logger.warning("Unknown activity type %r stored as 'other'", raw_type)
            stored_metadata["original_activity_type"] = str(raw_type)

        clean_title = (title or "").strip()
        clean_description = (description or "").strip() or None

        record = ActivityRecord(
            id=None,
            user_id=user_id,
            activity_type=kind,
            title=clean_title,
            description=clean_description,
            metadata=stored_metadata,
            created_at=now_in_app_timezone(),
        )
        return ActivityRecordRepository(session).create(record)
    except Exception:
        logger.exception("Failed to log %s activity for user %s", activity_type, user_id)
        try:
            session.rollback()
        except SQLAlchemyError:
            logger.exception("Rollback after failed activity logging also failed")
        return None


def _parse_type_filter(
    activity_types: Iterable[str] | None,
) -> tuple[list[ActivityType] | None, list[str]]:
    if activity_types is None:
        return None, []
    parsed: list[ActivityType] = []
    unknown: list[str] = []
    for value in activity_types:
        name = str(value).strip().lower()
        if not name:
            continue
        if ActivityType.is_known(name):
            parsed.append(ActivityType(name))
        else:
            unknown.append(str(value))
    return (parsed or None), unknown


def get_recent_activities(
    session: Session,
    *,
    user_id: int,
    limit: int | None = None,
    activity_types: Iterable[str] | None = None,
) -> ActivityQueryResult:
    """Return the most recent activities of ``user_id``, newest first.

    ``limit`` falls back to the configured default and is capped one record
    above the configured maximum. The result never carries a continuation
    token: callers wanting a ``has_more`` flag request one extra record and
    trim it, so a feed asking for the maximum still gets its look-ahead.
    """

    settings = get_settings()
    effective_limit = limit if limit is not None else settings.activity_default_limit
    effective_limit = max(1, min(effective_limit, settings.activity_max_limit + 1))

    types, unknown = _parse_type_filter(activity_types)
    if unknown:
        return ActivityQueryResult(
            status=ActivityQueryStatus.INVALID_FILTER,
            error=f"Unknown activity types: {', '.join(sorted(unknown))}",
        )

    try:
        records = ActivityRecordRepository(session).list_recent_for_user(
            user_id, limit=effective_limit, activity_types=types
        )
    except SQLAlchemyError:
        logger.exception("Failed to get recent activities for user %s", user_id)
        session.rollback()
        return ActivityQueryResult(
            status=ActivityQueryStatus.UNAVAILABLE,
            error="Failed to fetch recent activities",
        )
    return ActivityQueryResult(activities=list(records))


def get_activity_stats(
    session: Session, *, user_id: int, days: int | None = None
) -> ActivityStatsResult:
    """Count the activities of ``user_id`` per type over the trailing ``days``."""

    window = days if days is not None else get_settings().activity_stats_default_days
    since = days_before_now(window)
    try:
        stats = ActivityRecordRepository(session).count_by_type_since(user_id, since)
    except SQLAlchemyError:
        logger.exception("Failed to get activity stats for user %s", user_id)
        session.rollback()
        return ActivityStatsResult(
            days=window,
            status=ActivityQueryStatus.UNAVAILABLE,
            error="Failed to fetch activity statistics",
        )
    return ActivityStatsResult(stats=stats, days=window)


def clean_old_activities(session: Session, *, days: int) -> int:
    """Delete activities older than ``days`` days and return how many were removed."""

    if days <= 0:
        raise ValueError("Retention must be at least one day")
    cutoff = days_before_now(days)
    removed = ActivityRecordRepository(session).delete_older_than(cutoff)
    logger.info("Removed %d activities older than %d days", removed, days)
    return removed


__all__ = [
    "ActivityQueryResult",
    "ActivityQueryStatus",
    "ActivityStatsResult",
    "clean_old_activities",
    "get_activity_stats",
    "get_recent_activities",
    "log_activity",
]
