"""
Date Parser.

Tolerant coercion of date-like values (ISO strings, free-form listing
text, datetime/date objects) to timezone-aware UTC datetimes.

Naive values are interpreted in the feed's local timezone. Anything that
cannot be parsed becomes None; callers treat None as "unscheduled".
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, time, timezone, tzinfo
from zoneinfo import ZoneInfo

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = ZoneInfo("America/New_York")

# Listing text rarely has a date this short; dateutil happily turns "7"
# into the 7th of the current month.
_MIN_FREE_TEXT_LEN = 6

_ISO_CALENDAR_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}")


def parse_datetime(value, tz: tzinfo = DEFAULT_TIMEZONE) -> datetime | None:
    """
    Coerce a date-like value to an aware UTC datetime.

    Args:
        value: str, datetime, date, or None
        tz: Timezone used for naive values

    Returns:
        UTC datetime, or None if absent/unparseable
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        parsed = _parse_string(value.strip())
        if parsed is None:
            return None
    else:
        logger.debug(f"Unsupported date value type: {type(value).__name__}")
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed.astimezone(timezone.utc)


def _parse_string(text: str) -> datetime | None:
    if not text:
        return None

    # Strict ISO-8601 first (API payloads, datetime attributes). A calendar
    # date is required so bare numbers like "2024" are not read as years.
    if _ISO_CALENDAR_DATE.match(text):
        try:
            return date_parser.isoparse(text)
        except (ValueError, OverflowError):
            pass

    if len(text) < _MIN_FREE_TEXT_LEN:
        return None

    # Free-form listing text: "Sun, Nov 10, 2024 7:00 PM", "June 1 2024"
    try:
        return date_parser.parse(text)
    except (ValueError, OverflowError):
        logger.debug(f"Unparseable date text: {text!r}")
        return None


def parse_date_text(text: str | None, tz: tzinfo = DEFAULT_TIMEZONE) -> str | None:
    """
    Parse raw listing date text into an ISO-8601 UTC string.

    Used by scraping adapters; returns None rather than raising.
    """
    parsed = parse_datetime(text, tz)
    if parsed is None:
        return None
    return parsed.isoformat().replace("+00:00", "Z")
