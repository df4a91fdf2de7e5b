"""Date/time handling for the fixtures feed.

Dates arrive as ``DD/MM/YY`` and times as ``HH:MM`` (24-hour). The
two-digit year is read as 2000 + YY, so only 2000-2099 can be expressed;
anything else is rejected rather than guessed. Values are taken as UTC
wall-clock time with no zone conversion.

Out-of-range fields are not validated against the calendar: they roll over
into the next unit, so "05/13/25" is 5 January 2026.
"""
import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

logger = logging.getLogger(__name__)

EVENT_DURATION = timedelta(hours=2)
ICAL_UTC_FORMAT = '%Y%m%dT%H%M%SZ'

LEADING_INT = re.compile(r'\s*([+-]?\d+)')


def _leading_int(value: str) -> Optional[int]:
    match = LEADING_INT.match(value)
    if not match:
        return None
    return int(match.group(1))


def parse_instant(date_str: str, time_str: str) -> Optional[datetime]:
    """
    Parse a "DD/MM/YY" date and "HH:MM" time into a UTC datetime.

    Args:
        date_str: Date string, e.g. "28/10/25"
        time_str: Time string, e.g. "20:30"

    Returns:
        Timezone-aware UTC datetime, or None if the strings cannot be used
    """
    date_parts = date_str.split('/')
    time_parts = time_str.split(':')
    if len(date_parts) != 3 or len(time_parts) != 2:
        return None

    day, month, year, hour, minute = (
        _leading_int(part) for part in date_parts + time_parts
    )
    if None in (day, month, year, hour, minute):
        logger.warning(f"Non-numeric date/time: {date_str} {time_str}")
        return None

    if not 0 <= year <= 99:
        logger.warning(f"Year outside 2000-2099 in date: {date_str}")
        return None
    year += 2000

    # Months roll over into years; everything else is a plain offset
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1

    try:
        return datetime(year, month, 1, tzinfo=timezone.utc) + timedelta(
            days=day - 1, hours=hour, minutes=minute
        )
    except (ValueError, OverflowError) as e:
        logger.warning(f"Date/time out of range: {date_str} {time_str}: {e}")
        return None


def format_instant(instant: datetime) -> str:
    """Format a datetime as an iCalendar UTC timestamp (YYYYMMDDTHHMMSSZ)."""
    if instant.tzinfo is not None:
        instant = instant.astimezone(timezone.utc)
    return instant.strftime(ICAL_UTC_FORMAT)


def end_instant(start: datetime) -> datetime:
    """End of an event starting at ``start``."""
    return start + EVENT_DURATION
