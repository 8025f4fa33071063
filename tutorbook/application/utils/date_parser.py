from __future__ import annotations

import logging
from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from tutorbook.application.exceptions import InvalidDateError

logger = logging.getLogger(__name__)


def safe_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        logger.warning("Unknown timezone, falling back to UTC", extra={"reason": name})
        return ZoneInfo("UTC")


def parse_day(text: str | None) -> date:
    """Parse a YYYY-MM-DD calendar day."""
    if not text or not text.strip():
        raise InvalidDateError("Missing date")
    try:
        return date.fromisoformat(text.strip())
    except ValueError as e:
        raise InvalidDateError(f"Bad date: {text}") from e


def parse_instant(text: str, local_tz: ZoneInfo) -> datetime:
    """
    Parse an ISO-8601 date-time into an aware UTC instant.
    Naive values are read as wall-clock time in local_tz; values carrying an
    offset (or a trailing Z) keep their own offset.
    """
    if not text or not text.strip():
        raise InvalidDateError("Missing datetime")
    try:
        parsed = datetime.fromisoformat(text.strip().replace("Z", "+00:00"))
    except ValueError as e:
        raise InvalidDateError(f"Bad datetime: {text}") from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=local_tz)
    try:
        return normalize_instant(parsed)
    except (OverflowError, ValueError) as e:
        raise InvalidDateError(f"Bad datetime: {text}") from e


def normalize_instant(value: datetime) -> datetime:
    """UTC with millisecond precision, the resolution instants are stored at."""
    value = value.astimezone(timezone.utc)
    return value.replace(microsecond=(value.microsecond // 1000) * 1000)


def slot_instant(day: date, hour: int, local_tz: ZoneInfo) -> datetime:
    return normalize_instant(datetime.combine(day, time(hour=hour), tzinfo=local_tz))


def format_instant(value: datetime) -> str:
    """2025-03-10T10:00:00.000Z"""
    value = normalize_instant(value)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
