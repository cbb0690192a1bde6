"""SQLAlchemy model for the append-only user activity log."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, Integer, String, Text

from dypse_api.infrastructure.database import Base
from dypse_api.utils import now_in_app_naive_datetime


class ActivityRecordModel(Base):
    """Database representation of a single user activity."""

    __tablename__ = "user_activity"
    __table_args__ = (
        Index("ix_user_activity_user_created", "user_id", "created_at"),
        Index(
            "ix_user_activity_user_type_created",
            "user_id",
            "activity_type",
            "created_at",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False
    )
    # Plain string rather than a DB enum so legacy values still load.
    activity_type = Column(String(50), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    metadata_ = Column("metadata", JSON, nullable=False, default=dict)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["ActivityRecordModel"]
