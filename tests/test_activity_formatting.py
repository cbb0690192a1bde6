"""Tests for turning activity records into display lines."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from dypse_api.domain.entities import (
    ActivityRecord,
    ActivityType,
    EmptyMetadata,
    parse_activity_metadata,
)
from dypse_api.interfaces.client.formatting import (
    DEFAULT_ICON,
    ActivityIcon,
    filter_activities_by_type,
    format_activities_for_display,
    format_activity,
    format_time_ago,
    get_activity_icon,
    get_job_activities,
    get_profile_activities,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _record(
    activity_type: ActivityType | str,
    *,
    title: str = "",
    description: str | None = None,
    metadata: dict | None = None,
    record_id: int = 1,
) -> ActivityRecord:
    return ActivityRecord(
        id=record_id,
        user_id=7,
        activity_type=ActivityType.parse(activity_type),
        title=title,
        description=description,
        metadata=metadata or {},
        created_at=NOW - timedelta(hours=3),
    )


def test_description_wins_verbatim_after_trimming() -> None:
    record = _record(
        ActivityType.SKILL_ADD,
        title="New skill added",
        description="  Added skill: Go (expert)  ",
        metadata={"skill_name": "Python"},
    )

    assert format_activity(record, now=NOW).text == "Added skill: Go (expert)"


def test_title_used_when_description_is_blank() -> None:
    record = _record(ActivityType.LOGIN, title="Logged in", description="   ")

    assert format_activity(record, now=NOW).text == "Logged in"


@pytest.mark.parametrize(
    ("activity_type", "metadata", "expected"),
    [
        ("profile_update", {"changes": ["bio", "location"]}, "Updated profile: bio, location"),
        ("profile_update", {}, "Updated profile information"),
        ("profile_picture_upload", {}, "Uploaded a new profile picture"),
        ("cv_upload", {}, "Uploaded CV/Resume document"),
        ("skill_add", {"skillName": "Python", "level": "advanced"}, "Added skill: Python (advanced)"),
        ("skill_add", {"skill_name": "SQL"}, "Added skill: SQL"),
        ("skill_add", {}, "Added skill: a skill"),
        ("skill_remove", {"skillName": "Excel"}, "Removed skill: Excel"),
        ("skill_remove", {}, "Removed skill: a skill"),
        ("experience_add", {"company": "Acme", "role": "Developer"}, "Added experience: Developer at Acme"),
        ("experience_add", {"company": "Acme"}, "Added work experience"),
        ("experience_update", {"company": "Acme", "role": "Lead"}, "Updated experience: Lead at Acme"),
        ("experience_update", {}, "Updated work experience"),
        ("experience_delete", {"company": "Acme", "role": "Lead"}, "Removed experience: Lead at Acme"),
        ("experience_delete", {"role": "Lead"}, "Removed work experience"),
        ("education_add", {"institution": "NUST", "degree": "BSc"}, "Added education: BSc at NUST"),
        ("education_add", {"degree": "BSc"}, "Added education"),
        ("education_update", {"institution": "NUST", "degree": "MSc"}, "Updated education: MSc at NUST"),
        ("education_update", {}, "Updated education"),
        ("education_delete", {"institution": "NUST", "degree": "MSc"}, "Removed education: MSc at NUST"),
        ("education_delete", {}, "Removed education"),
        ("account_created", {}, "Welcome to DYPSE! Your account has been created"),
        ("job_application", {}, "Applied for a job position"),
        ("job_bookmark", {}, "Bookmarked a job"),
        ("training_enrollment", {}, "Enrolled in training program"),
        ("profile_view", {}, "Profile was viewed"),
        ("login", {}, "Logged into account"),
        ("other", {}, "Activity recorded"),
        ("something_new", {}, "Activity recorded"),
    ],
)
def test_template_text_when_description_and_title_are_empty(
    activity_type: str, metadata: dict, expected: str
) -> None:
    record = _record(activity_type, metadata=metadata)

    assert format_activity(record, now=NOW).text == expected


def test_wrongly_typed_metadata_falls_back() -> None:
    record = _record(ActivityType.PROFILE_UPDATE, metadata={"changes": "bio"})

    assert format_activity(record, now=NOW).text == "Updated profile information"


@pytest.mark.parametrize(
    ("activity_type", "metadata", "expected"),
    [
        ("cv_upload", {"filename": "3f9a1c.pdf"}, "Uploaded CV/Resume document"),
        ("profile_picture_upload", {"filename": "b72e.png"}, "Uploaded a new profile picture"),
        ("job_application", {"job_title": "Analyst", "company": "Acme"}, "Applied for a job position"),
        ("job_bookmark", {"jobTitle": "Analyst"}, "Bookmarked a job"),
    ],
)
def test_upload_and_job_text_ignores_stored_details(
    activity_type: str, metadata: dict, expected: str
) -> None:
    record = _record(activity_type, metadata=metadata)

    assert parse_activity_metadata(activity_type, metadata) == EmptyMetadata()
    assert format_activity(record, now=NOW).text == expected


@pytest.mark.parametrize("activity_type", list(ActivityType))
def test_every_activity_type_has_an_icon(activity_type: ActivityType) -> None:
    icon = get_activity_icon(activity_type)

    assert isinstance(icon, ActivityIcon)
    assert icon.name
    assert icon.tone


def test_unknown_type_gets_default_icon() -> None:
    assert get_activity_icon("not-a-type") == DEFAULT_ICON
    assert get_activity_icon(None) == ActivityIcon("activity", "gray")


def test_formatting_is_idempotent() -> None:
    record = _record(ActivityType.EXPERIENCE_ADD, metadata={"company": "Acme", "role": "Dev"})

    first = format_activity(record)
    second = format_activity(record)

    assert first.text == second.text
    assert first.icon == second.icon


def test_formatted_activity_copies_identity_fields() -> None:
    record = _record(ActivityType.CV_UPLOAD, metadata={"filename": "cv.pdf"}, record_id=42)

    formatted = format_activity(record, now=NOW)

    assert formatted.id == 42
    assert formatted.activity_type == "cv_upload"
    assert formatted.metadata == {"filename": "cv.pdf"}
    assert formatted.time == "about 3 hours ago"


@pytest.mark.parametrize(
    ("delta", "expected"),
    [
        (timedelta(seconds=10), "less than a minute ago"),
        (timedelta(minutes=1), "1 minute ago"),
        (timedelta(minutes=5), "5 minutes ago"),
        (timedelta(minutes=50), "about 1 hour ago"),
        (timedelta(hours=3), "about 3 hours ago"),
        (timedelta(hours=30), "1 day ago"),
        (timedelta(days=2), "2 days ago"),
        (timedelta(days=35), "about 1 month ago"),
        (timedelta(days=100), "3 months ago"),
        (timedelta(days=366), "about 1 year ago"),
        (timedelta(days=550), "over 1 year ago"),
        (timedelta(days=700), "almost 2 years ago"),
        (timedelta(days=740), "about 2 years ago"),
        (timedelta(minutes=-5), "in 5 minutes"),
    ],
)
def test_format_time_ago(delta: timedelta, expected: str) -> None:
    assert format_time_ago(NOW - delta, now=NOW) == expected


def test_format_time_ago_treats_naive_values_as_utc() -> None:
    naive = (NOW - timedelta(minutes=5)).replace(tzinfo=None)

    assert format_time_ago(naive, now=NOW) == "5 minutes ago"


def test_format_activities_for_display_keeps_order() -> None:
    records = [_record(ActivityType.LOGIN, record_id=2), _record(ActivityType.SKILL_ADD, record_id=1)]

    formatted = format_activities_for_display(records, now=NOW)

    assert [item.id for item in formatted] == [2, 1]


def test_named_filters() -> None:
    records = [
        _record(ActivityType.SKILL_ADD, record_id=1),
        _record(ActivityType.JOB_APPLICATION, record_id=2),
        _record(ActivityType.LOGIN, record_id=3),
        _record(ActivityType.CV_UPLOAD, record_id=4),
        _record(ActivityType.TRAINING_ENROLLMENT, record_id=5),
    ]

    assert [item.id for item in get_profile_activities(records)] == [1, 4]
    assert [item.id for item in get_job_activities(records)] == [2, 5]
    assert [item.id for item in filter_activities_by_type(records, ["login", "bogus"])] == [3]
