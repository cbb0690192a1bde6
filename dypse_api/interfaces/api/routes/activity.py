"""Endpoints exposing the authenticated user's activity feed."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from dypse_api.application.use_cases.activity import (
    ActivityQueryStatus,
    get_activity_stats,
    get_recent_activities,
)
from dypse_api.domain.entities import ActivityRecord, User
from dypse_api.infrastructure.database import get_db
from dypse_api.interfaces.api.dependencies import get_current_active_user
from dypse_api.interfaces.api.schemas import (
    ActivityRecordRead,
    ActivityStatsResponse,
    RecentActivitiesResponse,
)

router = APIRouter(prefix="/activity", tags=["activity"])

_STATUS_CODES = {
    ActivityQueryStatus.INVALID_FILTER: status.HTTP_400_BAD_REQUEST,
    ActivityQueryStatus.UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _record_to_schema(record: ActivityRecord) -> ActivityRecordRead:
    return ActivityRecordRead(
        id=record.id,
        user_id=record.user_id,
        activity_type=record.activity_type.value,
        title=record.title,
        description=record.description,
        metadata=record.metadata,
        created_at=record.created_at,
    )


def _split_types(types: str | None) -> list[str] | None:
    if types is None:
        return None
    values = [value.strip() for value in types.split(",") if value.strip()]
    return values or None


@router.get("/recent", response_model=RecentActivitiesResponse)
def read_recent_activities(
    limit: int | None = Query(None, ge=1, description="Maximum number of activities to return"),
    types: str | None = Query(None, description="Comma separated activity types"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> RecentActivitiesResponse:
    """Return the caller's most recent activities, newest first."""

    result = get_recent_activities(
        db, user_id=current_user.id, limit=limit, activity_types=_split_types(types)
    )
    if not result.ok:
        raise HTTPException(status_code=_STATUS_CODES[result.status], detail=result.error)
    return RecentActivitiesResponse(
        activities=[_record_to_schema(record) for record in result.activities]
    )


@router.get("/stats", response_model=ActivityStatsResponse)
def read_activity_stats(
    days: int | None = Query(None, ge=1, le=365, description="Trailing window in days"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> ActivityStatsResponse:
    """Return how many activities of each type the caller produced recently."""

    result = get_activity_stats(db, user_id=current_user.id, days=days)
    if not result.ok:
        raise HTTPException(status_code=_STATUS_CODES[result.status], detail=result.error)
    return ActivityStatsResponse(stats=result.stats, period=f"{result.days} days")


__all__ = ["router"]
