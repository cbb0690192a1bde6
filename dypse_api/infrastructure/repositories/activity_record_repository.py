"""Persistence layer for the user activity log."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from dypse_api.domain.entities import ActivityRecord, ActivityType
from dypse_api.infrastructure.models import ActivityRecordModel
from dypse_api.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class ActivityRecordRepository:
    """Append and read :class:`ActivityRecord` entries.

    Records are never updated; the only destructive operation is the
    retention purge in :meth:`delete_older_than`.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, record: ActivityRecord) -> ActivityRecord:
        model = ActivityRecordModel()
        model.user_id = record.user_id
        model.activity_type = ActivityType.parse(record.activity_type).value
        model.title = record.title
        model.description = record.description
        model.metadata_ = dict(record.metadata or {})
        model.created_at = ensure_app_naive_datetime(
            record.created_at or now_in_app_timezone()
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_recent_for_user(
        self,
        user_id: int,
        *,
        limit: int,
        activity_types: Iterable[ActivityType] | None = None,
    ) -> Sequence[ActivityRecord]:
        """Return up to ``limit`` records of ``user_id``, most recent first."""

        query = self.session.query(ActivityRecordModel).filter(
            ActivityRecordModel.user_id == user_id
        )
        if activity_types is not None:
            values = sorted({ActivityType.parse(item).value for item in activity_types})
            if values:
                query = query.filter(ActivityRecordModel.activity_type.in_(values))
        query = query.order_by(
            ActivityRecordModel.created_at.desc(), ActivityRecordModel.id.desc()
        ).limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_by_type_since(self, user_id: int, since: datetime) -> dict[str, int]:
        """Return the number of records per activity type created at or after ``since``."""

        rows = (
            self.session.query(
                ActivityRecordModel.activity_type,
                func.count(ActivityRecordModel.id),
            )
            .filter(ActivityRecordModel.user_id == user_id)
            .filter(ActivityRecordModel.created_at >= ensure_app_naive_datetime(since))
            .group_by(ActivityRecordModel.activity_type)
            .all()
        )
        return {activity_type: int(count) for activity_type, count in rows}

    def delete_older_than(self, cutoff: datetime) -> int:
        """Delete every record created before ``cutoff`` and return how many were removed."""

        deleted = (
            self.session.query(ActivityRecordModel)
            .filter(ActivityRecordModel.created_at < ensure_app_naive_datetime(cutoff))
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return int(deleted or 0)

    @staticmethod
    def _to_entity(model: ActivityRecordModel) -> ActivityRecord:
        return ActivityRecord(
            id=model.id,
            user_id=model.user_id,
            activity_type=ActivityType.parse(model.activity_type),
            title=model.title,
            description=model.description,
            metadata=dict(model.metadata_ or {}),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["ActivityRecordRepository"]
