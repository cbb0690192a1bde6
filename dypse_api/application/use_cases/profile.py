"""Use cases for managing a youth profile.

Each successful change is followed by the matching activity record. Activity
logging never raises, so these functions only fail for their own reasons.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from pathlib import PurePosixPath
from typing import Any

from sqlalchemy.orm import Session

from dypse_api.config import get_settings
from dypse_api.domain.entities import (
    ActivityType,
    Education,
    JobStatus,
    User,
    UserSkill,
    WorkExperience,
    YouthProfile,
)
from dypse_api.infrastructure.repositories import (
    ProfileRepository,
    SkillRepository,
    UserRepository,
)
from dypse_api.infrastructure.storage import build_stored_name, delete_upload, save_upload
from dypse_api.utils import now_in_app_timezone

from .activity_events import (
    record_cv_upload,
    record_education_event,
    record_experience_event,
    record_profile_picture_upload,
    record_profile_update,
    record_skill_add,
    record_skill_remove,
)


USER_FIELDS = frozenset({"first_name", "last_name", "phone"})
PROFILE_FIELDS = frozenset({"bio", "location", "job_status"})

PICTURE_FOLDER = "profile-pictures"
CV_FOLDER = "cvs"
PICTURE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp"})
CV_EXTENSIONS = frozenset({".pdf", ".doc", ".docx"})


def _section_changes(changes: Mapping[str, Any], required: tuple[str, ...]) -> dict[str, Any]:
    """Drop explicit nulls sent for fields a section cannot lose."""

    return {
        key: value
        for key, value in changes.items()
        if not (key in required and value is None)
    }


def get_profile(session: Session, *, user_id: int) -> YouthProfile:
    """Return the profile of ``user_id``, creating an empty one on first access."""

    return ProfileRepository(session).get_or_create(user_id)


def update_profile(
    session: Session, *, user: User, changes: Mapping[str, Any]
) -> YouthProfile:
    """Apply ``changes`` to the account and profile of ``user``.

    ``changes`` only contains the fields the caller submitted; their names are
    what the ``profile_update`` activity reports.
    """

    unknown = set(changes) - USER_FIELDS - PROFILE_FIELDS
    if unknown:
        raise ValueError(f"Unknown profile fields: {', '.join(sorted(unknown))}")

    user_changes = {key: value for key, value in changes.items() if key in USER_FIELDS}
    if user_changes:
        for key in ("first_name", "last_name"):
            if key in user_changes and not (user_changes[key] or "").strip():
                raise ValueError(f"{key} cannot be empty")
        users = UserRepository(session)
        updated_user = replace(user, **user_changes, updated_at=now_in_app_timezone())
        users.update(updated_user)

    repository = ProfileRepository(session)
    profile = repository.get_or_create(user.id)
    profile_changes = {key: value for key, value in changes.items() if key in PROFILE_FIELDS}
    if "job_status" in profile_changes:
        try:
            profile_changes["job_status"] = JobStatus(profile_changes["job_status"])
        except ValueError:
            profile_changes["job_status"] = JobStatus.UNEMPLOYED
    if profile_changes:
        profile = repository.update(replace(profile, **profile_changes))

    if changes:
        record_profile_update(session, user_id=user.id, changes=sorted(changes))
    return profile


def add_skill(
    session: Session, *, user_id: int, name: str, level: str | None = None
) -> UserSkill:
    """Attach the skill ``name`` to ``user_id``, creating it in the catalog if needed."""

    clean_name = " ".join((name or "").split())
    if not clean_name:
        raise ValueError("Skill name is required")

    skills = SkillRepository(session)
    skill_id = skills.get_or_create_skill_id(clean_name)
    user_skill = skills.upsert_user_skill(user_id, skill_id, level)
    record_skill_add(
        session, user_id=user_id, skill_name=user_skill.skill_name, level=level
    )
    return user_skill


def remove_skill(session: Session, *, user_id: int, skill_id: int) -> UserSkill:
    removed = SkillRepository(session).remove_user_skill(user_id, skill_id)
    if removed is None:
        raise LookupError("Skill not found in profile")
    record_skill_remove(session, user_id=user_id, skill_name=removed.skill_name)
    return removed


def add_experience(
    session: Session, *, user_id: int, experience: WorkExperience
) -> WorkExperience:
    repository = ProfileRepository(session)
    profile = repository.get_or_create(user_id)
    saved = repository.add_experience(profile.id, experience)
    record_experience_event(
        session,
        user_id=user_id,
        activity_type=ActivityType.EXPERIENCE_ADD,
        company=saved.company,
        role=saved.role,
    )
    return saved


def update_experience(
    session: Session, *, user_id: int, experience_id: int, changes: Mapping[str, Any]
) -> WorkExperience:
    repository = ProfileRepository(session)
    profile = repository.get_or_create(user_id)
    current = repository.get_experience(profile.id, experience_id)
    if current is None:
        raise LookupError("Experience not found")
    changes = _section_changes(changes, ("role", "company", "is_current"))
    saved = repository.update_experience(replace(current, **changes))
    record_experience_event(
        session,
        user_id=user_id,
        activity_type=ActivityType.EXPERIENCE_UPDATE,
        company=saved.company,
        role=saved.role,
    )
    return saved


def delete_experience(session: Session, *, user_id: int, experience_id: int) -> None:
    repository = ProfileRepository(session)
    profile = repository.get_or_create(user_id)
    current = repository.get_experience(profile.id, experience_id)
    if current is None or not repository.delete_experience(profile.id, experience_id):
        raise LookupError("Experience not found")
    record_experience_event(
        session,
        user_id=user_id,
        activity_type=ActivityType.EXPERIENCE_DELETE,
        company=current.company,
        role=current.role,
    )


def add_education(session: Session, *, user_id: int, education: Education) -> Education:
    repository = ProfileRepository(session)
    profile = repository.get_or_create(user_id)
    saved = repository.add_education(profile.id, education)
    record_education_event(
        session,
        user_id=user_id,
        activity_type=ActivityType.EDUCATION_ADD,
        institution=saved.institution,
        degree=saved.degree,
    )
    return saved


def update_education(
    session: Session, *, user_id: int, education_id: int, changes: Mapping[str, Any]
) -> Education:
    repository = ProfileRepository(session)
    profile = repository.get_or_create(user_id)
    current = repository.get_education(profile.id, education_id)
    if current is None:
        raise LookupError("Education not found")
    changes = _section_changes(changes, ("institution", "degree", "is_current"))
    saved = repository.update_education(replace(current, **changes))
    record_education_event(
        session,
        user_id=user_id,
        activity_type=ActivityType.EDUCATION_UPDATE,
        institution=saved.institution,
        degree=saved.degree,
    )
    return saved


def delete_education(session: Session, *, user_id: int, education_id: int) -> None:
    repository = ProfileRepository(session)
    profile = repository.get_or_create(user_id)
    current = repository.get_education(profile.id, education_id)
    if current is None or not repository.delete_education(profile.id, education_id):
        raise LookupError("Education not found")
    record_education_event(
        session,
        user_id=user_id,
        activity_type=ActivityType.EDUCATION_DELETE,
        institution=current.institution,
        degree=current.degree,
    )


def _validate_upload(filename: str, data: bytes, allowed: frozenset[str]) -> None:
    extension = PurePosixPath(filename or "").suffix.lower()
    if extension not in allowed:
        raise ValueError(
            f"Unsupported file type; allowed: {', '.join(sorted(allowed))}"
        )
    if not data:
        raise ValueError("Uploaded file is empty")
    max_bytes = get_settings().max_upload_size_bytes
    if len(data) > max_bytes:
        raise ValueError(f"File exceeds the {max_bytes} byte limit")


def upload_profile_picture(
    session: Session, *, user_id: int, filename: str, data: bytes
) -> YouthProfile:
    """Store a new profile picture, replacing (and deleting) the previous one."""

    _validate_upload(filename, data, PICTURE_EXTENSIONS)
    repository = ProfileRepository(session)
    profile = repository.get_or_create(user_id)
    stored_name = build_stored_name(filename)
    url = save_upload(PICTURE_FOLDER, stored_name, data)
    previous = profile.profile_picture_url
    profile = repository.update(replace(profile, profile_picture_url=url))
    delete_upload(previous)
    record_profile_picture_upload(session, user_id=user_id, filename=stored_name)
    return profile


def upload_cv(session: Session, *, user_id: int, filename: str, data: bytes) -> YouthProfile:
    """Store a new CV document, replacing (and deleting) the previous one."""

    _validate_upload(filename, data, CV_EXTENSIONS)
    repository = ProfileRepository(session)
    profile = repository.get_or_create(user_id)
    stored_name = build_stored_name(filename)
    url = save_upload(CV_FOLDER, stored_name, data)
    previous = profile.cv_url
    profile = repository.update(replace(profile, cv_url=url))
    delete_upload(previous)
    record_cv_upload(session, user_id=user_id, filename=stored_name)
    return profile


__all__ = [
    "add_education",
    "add_experience",
    "add_skill",
    "delete_education",
    "delete_experience",
    "get_profile",
    "remove_skill",
    "update_education",
    "update_experience",
    "update_profile",
    "upload_cv",
    "upload_profile_picture",
]
