"""Pydantic schemas for activity feed endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ActivityRecordRead(BaseModel):
    id: int = Field(..., description="Unique identifier of the activity")
    user_id: int = Field(..., description="Owner of the activity")
    activity_type: str = Field(..., description="Activity type tag")
    title: str = Field(..., description="Short label set when the activity was recorded")
    description: str | None = Field(default=None, description="Optional free-text detail")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Type-specific details used to build the display text",
    )
    created_at: datetime = Field(..., description="Moment the activity was recorded")

    model_config = ConfigDict(from_attributes=True)


class RecentActivitiesResponse(BaseModel):
    activities: list[ActivityRecordRead]


class ActivityStatsResponse(BaseModel):
    stats: dict[str, int]
    period: str = Field(..., description="Trailing window the counts cover, e.g. '30 days'")


__all__ = ["ActivityRecordRead", "ActivityStatsResponse", "RecentActivitiesResponse"]
