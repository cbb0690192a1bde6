"""Clock helpers shared by the activity log and the profile tables.

Every timestamp is produced in the configured ``APP_TIMEZONE`` (UTC when
unset). Columns store naive values in that zone because SQLite drops offsets;
repositories re-attach the zone when building entities.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dypse_api.config import get_settings

# Fixed offsets such as "UTC+2" or "GMT-03:30", for hosts without tzdata.
_FIXED_OFFSET = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


def _parse_timezone(name: str) -> tzinfo:
    if not name or name.upper() in {"UTC", "Z"}:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        pass

    match = _FIXED_OFFSET.match(name)
    if match is None:
        return timezone.utc
    offset = timedelta(
        hours=int(match.group("hours")), minutes=int(match.group("minutes") or 0)
    )
    return timezone(-offset if match.group("sign") == "-" else offset)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Zone used for every stored timestamp; unknown names fall back to UTC."""

    return _parse_timezone((get_settings().app_timezone or "").strip())


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Column default: the current wall-clock time in the app zone, offset removed."""

    return now_in_app_timezone().replace(tzinfo=None)


def days_before_now(days: int) -> datetime:
    """Start of a trailing window of ``days`` days ending now."""

    return now_in_app_timezone() - timedelta(days=days)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach the app zone to naive values and convert aware ones into it."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=get_app_timezone())
    return value.astimezone(get_app_timezone())


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Storage form of ``value``: app-zone wall-clock time without ``tzinfo``."""

    aware = ensure_app_timezone(value)
    return aware.replace(tzinfo=None) if aware is not None else None
