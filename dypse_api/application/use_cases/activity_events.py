"""Helpers that record the activity matching each profile or account action.

Every helper delegates to :func:`log_activity`, so none of them can fail the
operation that triggered it.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from dypse_api.domain.entities import ActivityRecord, ActivityType

from .activity import log_activity


def record_profile_update(
    session: Session, *, user_id: int, changes: Sequence[str]
) -> ActivityRecord | None:
    change_list = list(changes)
    return log_activity(
        session,
        user_id=user_id,
        activity_type=ActivityType.PROFILE_UPDATE,
        title="Profile updated",
        description=f"Updated: {', '.join(change_list)}" if change_list else None,
        metadata={"changes": change_list},
    )


def record_profile_picture_upload(
    session: Session, *, user_id: int, filename: str | None = None
) -> ActivityRecord | None:
    return log_activity(
        session,
        user_id=user_id,
        activity_type=ActivityType.PROFILE_PICTURE_UPLOAD,
        title="Profile picture uploaded",
        description="Added a new profile picture",
        metadata={"filename": filename},
    )


def record_cv_upload(
    session: Session, *, user_id: int, filename: str | None = None
) -> ActivityRecord | None:
    return log_activity(
        session,
        user_id=user_id,
        activity_type=ActivityType.CV_UPLOAD,
        title="CV uploaded",
        description="Uploaded a new CV document",
        metadata={"filename": filename},
    )


def record_skill_add(
    session: Session, *, user_id: int, skill_name: str, level: str | None = None
) -> ActivityRecord | None:
    suffix = f" ({level})" if level else ""
    return log_activity(
        session,
        user_id=user_id,
        activity_type=ActivityType.SKILL_ADD,
        title="New skill added",
        description=f"Added skill: {skill_name}{suffix}",
        metadata={"skill_name": skill_name, "level": level},
    )


def record_skill_remove(
    session: Session, *, user_id: int, skill_name: str
) -> ActivityRecord | None:
    return log_activity(
        session,
        user_id=user_id,
        activity_type=ActivityType.SKILL_REMOVE,
        title="Skill removed",
        description=f"Removed skill: {skill_name}",
        metadata={"skill_name": skill_name},
    )


_EXPERIENCE_EVENTS = {
    ActivityType.EXPERIENCE_ADD: ("Work experience added", "Added"),
    ActivityType.EXPERIENCE_UPDATE: ("Work experience updated", "Updated"),
    ActivityType.EXPERIENCE_DELETE: ("Work experience removed", "Removed"),
}

_EDUCATION_EVENTS = {
    ActivityType.EDUCATION_ADD: ("Education added", "Added"),
    ActivityType.EDUCATION_UPDATE: ("Education updated", "Updated"),
    ActivityType.EDUCATION_DELETE: ("Education removed", "Removed"),
}


def record_experience_event(
    session: Session,
    *,
    user_id: int,
    activity_type: ActivityType,
    company: str,
    role: str,
) -> ActivityRecord | None:
    """Record an ``experience_add``, ``experience_update`` or ``experience_delete``."""

    title, verb = _EXPERIENCE_EVENTS[activity_type]
    return log_activity(
        session,
        user_id=user_id,
        activity_type=activity_type,
        title=title,
        description=f"{verb} experience: {role} at {company}",
        metadata={"company": company, "role": role},
    )


def record_education_event(
    session: Session,
    *,
    user_id: int,
    activity_type: ActivityType,
    institution: str,
    degree: str,
) -> ActivityRecord | None:
    """Record an ``education_add``, ``education_update`` or ``education_delete``."""

    title, verb = _EDUCATION_EVENTS[activity_type]
    return log_activity(
        session,
        user_id=user_id,
        activity_type=activity_type,
        title=title,
        description=f"{verb} education: {degree} at {institution}",
        metadata={"institution": institution, "degree": degree},
    )


def record_account_created(session: Session, *, user_id: int) -> ActivityRecord | None:
    return log_activity(
        session,
        user_id=user_id,
        activity_type=ActivityType.ACCOUNT_CREATED,
        title="Welcome to DYPSE!",
        description="Your account has been created successfully",
    )


def record_login_activity(session: Session, *, user_id: int) -> ActivityRecord | None:
    return log_activity(
        session,
        user_id=user_id,
        activity_type=ActivityType.LOGIN,
        title="Logged in",
    )


__all__ = [
    "record_account_created",
    "record_cv_upload",
    "record_education_event",
    "record_experience_event",
    "record_login_activity",
    "record_profile_picture_upload",
    "record_profile_update",
    "record_skill_add",
    "record_skill_remove",
]
