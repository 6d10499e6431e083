"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from workflow_notifier.config import get_settings

_UTC_NAMES: Final[frozenset[str]] = frozenset({"UTC", "GMT", "Z"})
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the timezone used to stamp notification records.

    The value comes from ``APP_TIMEZONE``. Unknown names fall back to UTC so a
    misconfigured deployment still records consistent timestamps.
    """

    settings = get_settings()
    return _resolve_timezone((settings.app_timezone or "").strip())


def reset_app_timezone_cache() -> None:
    """Forget the resolved timezone so the next call reads the settings again."""

    get_app_timezone.cache_clear()


def now_in_app_timezone() -> datetime:
    """Return the current time localized to the configured timezone."""

    return datetime.now(tz=get_app_timezone())


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Normalize ``value`` so it is expressed in the configured timezone.

    Naive values are assumed to already be in the application timezone, which
    is how they are written to the database.
    """

    if value is None:
        return None

    tz = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Return ``value`` localized to the app timezone but without ``tzinfo``."""

    localized = ensure_app_timezone(value)
    if localized is None:
        return None
    return localized.replace(tzinfo=None)


def _resolve_timezone(tz_name: str) -> tzinfo:
    if not tz_name or tz_name.upper() in _UTC_NAMES:
        return timezone.utc

    match = _OFFSET_PATTERN.match(tz_name)
    if match:
        sign = -1 if match.group("sign") == "-" else 1
        offset = timedelta(
            hours=int(match.group("hours")),
            minutes=int(match.group("minutes") or 0),
        )
        return timezone(sign * offset)

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        return timezone.utc
