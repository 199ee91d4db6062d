"""Date parsing utilities."""

import re
from datetime import date, datetime, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil import tz
from dateutil.relativedelta import relativedelta

DEFAULT_TIMEZONE = "UTC"

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def today_in_timezone(timezone_name: Optional[str] = None) -> date:
    """Return the current calendar date in the named timezone.

    Args:
        timezone_name: IANA timezone name (e.g. "America/Sao_Paulo"). Defaults to UTC.

    Raises:
        ValueError: If the timezone name is not recognized
    """
    name = timezone_name or DEFAULT_TIMEZONE
    zone = tz.gettz(name)
    if zone is None:
        raise ValueError(f"Unknown timezone '{name}'")
    return datetime.now(zone).date()


def parse_iso_date(date_str: str) -> date:
    """Parse a stored or exchanged date in strict ``YYYY-MM-DD`` form.

    Raises:
        ValueError: If the string is not a zero-padded ISO calendar date
    """
    if date_str is None or not _ISO_DATE.match(date_str.strip()):
        raise ValueError(f"Invalid date '{date_str}': expected YYYY-MM-DD")
    try:
        return date.fromisoformat(date_str.strip())
    except ValueError as e:
        raise ValueError(f"Invalid date '{date_str}': {e}")


def format_date(value: Optional[date]) -> str:
    """Serialize a date back to ``YYYY-MM-DD`` (empty string for None)."""
    return value.isoformat() if value is not None else ""


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "tomorrow", "in 5 days",
      "5 days ago", "last month", "next month", etc.

    Args:
        date_str: Date string in various formats
        today: Reference date for relative expressions (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    try:
        relative = _parse_relative_date(date_str, today)
    except OverflowError:
        raise ValueError(f"Date '{date_str}' is out of range")
    if relative is not None:
        return relative

    # Try parsing as absolute date
    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def _parse_relative_date(date_str: str, today: date) -> Optional[date]:
    """Resolve relative expressions against today, or None if not relative."""
    if date_str == "today":
        return today
    if date_str == "yesterday":
        return today - timedelta(days=1)
    if date_str == "tomorrow":
        return today + timedelta(days=1)

    offset = re.match(r"^(?:in (\d+) days?|(\d+) days? ago)$", date_str)
    if offset:
        if offset.group(1) is not None:
            return today + timedelta(days=int(offset.group(1)))
        return today - timedelta(days=int(offset.group(2)))

    # Handle "last/this/next" + month/year
    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)

    elif date_str.startswith("next "):
        period = date_str[5:]
        if period == "month":
            return (today + relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) + relativedelta(years=1)

    return None
