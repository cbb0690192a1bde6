"""Typed views over the open metadata bag stored with each activity."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from .activity import ActivityType


@dataclass(frozen=True)
class EmptyMetadata:
    """Activities whose display text needs no metadata.

    Uploads and job events land here too: their text is fixed, and whatever
    they stored (filenames, job titles) stays in the raw bag.
    """


@dataclass(frozen=True)
class ProfileUpdateMetadata:
    changes: tuple[str, ...] | None = None


@dataclass(frozen=True)
class SkillMetadata:
    skill_name: str | None = None
    level: str | None = None


@dataclass(frozen=True)
class ExperienceMetadata:
    company: str | None = None
    role: str | None = None


@dataclass(frozen=True)
class EducationMetadata:
    institution: str | None = None
    degree: str | None = None


ActivityMetadata = Union[
    EmptyMetadata,
    ProfileUpdateMetadata,
    SkillMetadata,
    ExperienceMetadata,
    EducationMetadata,
]


def _text(raw: Mapping[str, Any], *keys: str) -> str | None:
    """Return the first non-blank string stored under one of ``keys``."""

    for key in keys:
        value = raw.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
    return None


def _changes(raw: Mapping[str, Any]) -> tuple[str, ...] | None:
    value = raw.get("changes")
    if not isinstance(value, (list, tuple)):
        return None
    return tuple(str(item) for item in value)


def parse_activity_metadata(
    activity_type: ActivityType | str, raw: Mapping[str, Any] | None
) -> ActivityMetadata:
    """Build the metadata variant for ``activity_type`` from ``raw``.

    Missing or wrongly typed fields are left as ``None``; this function never
    raises for malformed input. Both ``skillName`` and ``skill_name`` spellings
    are accepted so records written by older clients still format.
    """

    kind = ActivityType.parse(activity_type)
    data: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}

    if kind is ActivityType.PROFILE_UPDATE:
        return ProfileUpdateMetadata(changes=_changes(data))
    if kind in (ActivityType.SKILL_ADD, ActivityType.SKILL_REMOVE):
        return SkillMetadata(
            skill_name=_text(data, "skill_name", "skillName"),
            level=_text(data, "level"),
        )
    if kind in (
        ActivityType.EXPERIENCE_ADD,
        ActivityType.EXPERIENCE_UPDATE,
        ActivityType.EXPERIENCE_DELETE,
    ):
        return ExperienceMetadata(
            company=_text(data, "company"), role=_text(data, "role")
        )
    if kind in (
        ActivityType.EDUCATION_ADD,
        ActivityType.EDUCATION_UPDATE,
        ActivityType.EDUCATION_DELETE,
    ):
        return EducationMetadata(
            institution=_text(data, "institution"), degree=_text(data, "degree")
        )
    return EmptyMetadata()


__all__ = [
    "ActivityMetadata",
    "EducationMetadata",
    "EmptyMetadata",
    "ExperienceMetadata",
    "ProfileUpdateMetadata",
    "SkillMetadata",
    "parse_activity_metadata",
]
