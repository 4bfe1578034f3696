from __future__ import annotations

from datetime import datetime, timedelta, timezone
import os


def utcnow() -> datetime:
    """Return aware UTC datetime."""
    frozen = os.getenv("ADVISOR_CURRENT_TIME")
    if frozen:
        try:
            return ensure_aware_utc(datetime.fromisoformat(frozen))
        except ValueError:
            return datetime.now(timezone.utc)
    return datetime.now(timezone.utc)


def ensure_aware_utc(value: datetime) -> datetime:
    """
    Ensure datetime is timezone-aware in UTC.

    - If naive, assume it is UTC and attach tzinfo.
    - If aware, convert to UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def epoch_seconds(value: datetime) -> int:
    return int(ensure_aware_utc(value).timestamp())


def from_epoch(seconds: int) -> datetime:
    return datetime.fromtimestamp(int(seconds), tz=timezone.utc)


def format_utc(seconds: int) -> str:
    """RFC 1123 style, e.g. 'Sun, 01 Oct 2023 15:00:00 GMT'."""
    return from_epoch(seconds).strftime("%a, %d %b %Y %H:%M:%S GMT")


def to_local_time(seconds: int, offset_hours: int = 3) -> str:
    """Kickoff in a fixed-offset zone (Moscow by default), 'DD.MM.YYYY, HH:MM'."""
    local = from_epoch(seconds).astimezone(timezone(timedelta(hours=offset_hours)))
    return local.strftime("%d.%m.%Y, %H:%M")
