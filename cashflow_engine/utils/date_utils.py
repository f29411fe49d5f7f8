"""Calendar-day key utilities"""

import re
from datetime import date, datetime, timedelta
from typing import List

from cashflow_engine.domain.exceptions import ParseError

DATE_KEY_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def to_date_key(value: date) -> str:
    """
    Canonical YYYY-MM-DD key for a date or datetime.

    Only the value's own calendar components are used, so two moments on the
    same day always produce the same key.
    """
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def parse_date_key(key: str) -> date:
    """
    Parse a YYYY-MM-DD key back into a calendar date.

    Raises:
        ParseError: key does not match the pattern or names an impossible day
    """
    if not isinstance(key, str) or not DATE_KEY_PATTERN.fullmatch(key):
        raise ParseError(f"Malformed date key: {key!r}")

    year, month, day = (int(part) for part in key.split("-"))
    try:
        return date(year, month, day)
    except ValueError as e:
        raise ParseError(f"Invalid calendar date: {key!r}") from e


def as_calendar_date(value: date | datetime | str) -> date:
    """Normalize a date, datetime or date key to a plain calendar date"""
    if isinstance(value, str):
        return parse_date_key(value)
    if isinstance(value, datetime):
        return value.date()
    return value


def month_key(value: date | str) -> str:
    """YYYY-MM key of the month containing the given date"""
    return to_date_key(as_calendar_date(value))[:7]


def generate_date_range(start: date, end: date) -> List[date]:
    """Generate list of dates from start to end (inclusive)"""
    days = (end - start).days + 1
    return [start + timedelta(days=i) for i in range(days)]


def days_between(start: date | datetime, end: date | datetime) -> int:
    """Whole calendar days from start to end (negative when end is earlier)"""
    return (as_calendar_date(end) - as_calendar_date(start)).days
