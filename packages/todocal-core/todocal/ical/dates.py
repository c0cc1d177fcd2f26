"""
Compact iCalendar dates.

DUE, CREATED and DTSTAMP are written as YYYYMMDD or YYYYMMDDTHHMMSSZ.
The rest of the application works with ISO strings (YYYY-MM-DD and
YYYY-MM-DDTHH:MM:SS). Every function here returns None instead of raising
when a value cannot be converted.
"""

import re
from datetime import date, datetime, time, timezone
from typing import Optional

_DATE_DIGITS = re.compile(r"([0-9]{4})([0-9]{2})([0-9]{2})")
_TIME_DIGITS = re.compile(r"([0-9]{2})([0-9]{2})([0-9]{2})")

ISO_DATE_FORMAT = "%Y-%m-%d"


def _compact_date(value: date) -> str:
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


def format_utc_stamp(moment: datetime) -> str:
    """Format a datetime as YYYYMMDDTHHMMSSZ, converting aware values to UTC."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return (
        f"{_compact_date(moment)}"
        f"T{moment.hour:02d}{moment.minute:02d}{moment.second:02d}Z"
    )


def parse_compact_date(digits: str) -> Optional[date]:
    """Parse exactly eight digits (YYYYMMDD) into a date."""
    match = _DATE_DIGITS.fullmatch(digits)
    if not match:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_compact_time(digits: str) -> Optional[time]:
    """Parse exactly six digits (HHMMSS) into a time."""
    match = _TIME_DIGITS.fullmatch(digits)
    if not match:
        return None
    hour, minute, second = (int(part) for part in match.groups())
    try:
        return time(hour, minute, second)
    except ValueError:
        return None


def decode_due(value: str) -> Optional[str]:
    """
    Decode a DUE value to an ISO date.

    Only the first eight characters are read, so a date-time value keeps
    its date and loses its time.
    """
    if len(value) < 8:
        return None
    parsed = parse_compact_date(value[:8])
    return parsed.isoformat() if parsed else None


def decode_timestamp(value: str) -> Optional[str]:
    """
    Decode a CREATED or DTSTAMP value.

    Two shapes are accepted:
        - date-time: at least 15 characters containing "T"; the date is in
          characters 0-7 and the time in characters 9-14. Anything after
          (usually the "Z" marker) is ignored.
        - date: exactly 8 characters.

    Returns:
        "YYYY-MM-DDTHH:MM:SS", "YYYY-MM-DD", or None for any other shape
        or an invalid component
    """
    if len(value) >= 15 and "T" in value:
        day = parse_compact_date(value[0:8])
        moment = parse_compact_time(value[9:15])
        if day is None or moment is None:
            return None
        return datetime.combine(day, moment).isoformat(timespec="seconds")

    if len(value) == 8:
        day = parse_compact_date(value)
        return day.isoformat() if day else None

    return None


def encode_date(value: str) -> Optional[str]:
    """Encode an ISO date (YYYY-MM-DD) as YYYYMMDD."""
    try:
        parsed = datetime.strptime(value, ISO_DATE_FORMAT)
    except (TypeError, ValueError):
        return None
    return _compact_date(parsed)


def encode_datetime(value: str) -> Optional[str]:
    """
    Encode an ISO date or date-time.

    A plain date encodes as YYYYMMDD. A date-time encodes as
    YYYYMMDDTHHMMSSZ; offsets (including a trailing "Z") are converted to
    UTC and fractional seconds are dropped.
    """
    compact = encode_date(value)
    if compact is not None:
        return compact

    if not isinstance(value, str) or len(value) <= 10:
        return None

    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        # Offsets can push a value outside years 1-9999 once moved to UTC
        return format_utc_stamp(parsed)
    except (OverflowError, ValueError):
        return None
