"""iCalendar serialization of fixture and result records."""
import hashlib
import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from processor.models import Event, Fixture
from processor.temporal import end_instant, format_instant, parse_instant
from processor.venues import resolve

logger = logging.getLogger(__name__)

CRLF = '\r\n'
PRODID = '-//PoolFixtures//Pool Fixtures ICS v1.0//EN'
FOLD_LIMIT = 75


def ics_escape(value: str) -> str:
    """Escape special characters for iCalendar TEXT values."""
    return (
        value.replace('\\', '\\\\')
             .replace('\r\n', '\n')
             .replace('\r', '\n')
             .replace(';', '\\;')
             .replace(',', '\\,')
             .replace('\n', '\\n')
    )


def fold_line(line: str, limit: int = FOLD_LIMIT) -> List[str]:
    """
    Fold a long content line at ``limit`` UTF-8 octets.

    Continuation lines start with a space, which counts towards the limit.
    Lines are only cut between characters, never inside a multi-byte one.
    """
    if len(line.encode('utf-8')) <= limit:
        return [line]

    parts = []
    current = ''
    size = 0
    for char in line:
        width = len(char.encode('utf-8'))
        if size + width > limit:
            parts.append(current)
            current = ' '
            size = 1
        current += char
        size += width
    parts.append(current)
    return parts


def summarize(record: Fixture) -> str:
    """Event title: "Home vs Away", or "Home 3-1 Away" once a result exists."""
    result = getattr(record, 'result', '')
    if result:
        return f"{record.home_team} {result} {record.away_team}"
    return f"{record.home_team} vs {record.away_team}"


def stable_uid(summary: str, location: str, start: datetime) -> str:
    """Deterministic UID from the event content."""
    composite = f"{summary}|{location}|{format_instant(start)}"
    return hashlib.sha256(composite.encode('utf-8')).hexdigest()


def build_events(
    records: Sequence[Fixture],
    location_map: Dict[str, str],
    creation_time: datetime,
    context_line: Optional[str] = None,
    stable_uids: bool = False
) -> List[Event]:
    """
    Turn records into Events, dropping any whose date/time cannot be parsed.

    Args:
        records: Fixtures and/or Results
        location_map: Venue alias map (may be empty)
        creation_time: DTSTAMP shared by every event
        context_line: Optional DESCRIPTION text for every event
        stable_uids: Derive UIDs from event content instead of uuid4

    Returns:
        List of Event objects, in input order
    """
    events = []
    for record in records:
        start = parse_instant(record.date, record.time)
        if start is None:
            logger.warning(
                f"Skipping event with invalid date/time: {record.date} {record.time}"
            )
            continue

        summary = summarize(record)
        location = resolve(record.venue, location_map)
        if stable_uids:
            uid = stable_uid(summary, location, start)
        else:
            uid = str(uuid.uuid4())

        events.append(Event(
            uid=uid,
            summary=summary,
            location=location,
            dtstamp=creation_time,
            start=start,
            end=end_instant(start),
            description=context_line
        ))

    return events


def render_event(event: Event) -> List[str]:
    """Content lines for one VEVENT block, unfolded."""
    lines = [
        'BEGIN:VEVENT',
        f"UID:{event.uid}",
        f"SUMMARY:{ics_escape(event.summary)}",
        f"LOCATION:{ics_escape(event.location)}",
    ]
    if event.description:
        lines.append(f"DESCRIPTION:{ics_escape(event.description)}")
    lines.extend([
        f"DTSTAMP:{format_instant(event.dtstamp)}",
        f"DTSTART:{format_instant(event.start)}",
        f"DTEND:{format_instant(event.end)}",
        'END:VEVENT',
    ])
    return lines


def serialize(
    records: Sequence[Fixture],
    location_map: Dict[str, str],
    creation_time: Optional[datetime] = None,
    context_line: Optional[str] = None,
    calendar_name: Optional[str] = None,
    stable_uids: bool = False
) -> str:
    """
    Serialize records into an iCalendar document.

    An empty record list yields a calendar with no events; callers that
    need a hard failure on empty input must check before calling.

    Args:
        records: Fixtures and/or Results
        location_map: Venue alias map (may be empty)
        creation_time: DTSTAMP for all events (default: now, UTC)
        context_line: Optional DESCRIPTION text for every event
        calendar_name: Optional X-WR-CALNAME value
        stable_uids: Derive UIDs from event content instead of uuid4

    Returns:
        Calendar text with CRLF line endings
    """
    if not records:
        logger.warning("No fixtures or results given. An empty calendar will be created.")

    if creation_time is None:
        creation_time = datetime.now(timezone.utc)

    events = build_events(
        records,
        location_map,
        creation_time,
        context_line=context_line,
        stable_uids=stable_uids
    )

    logger.info(f"Serialized {len(events)} of {len(records)} records")
    return render_calendar(events, calendar_name=calendar_name)


def render_calendar(events: Sequence[Event], calendar_name: Optional[str] = None) -> str:
    """Calendar envelope around the given events, folded and CRLF-joined."""
    lines = [
        'BEGIN:VCALENDAR',
        'VERSION:2.0',
        f"PRODID:{PRODID}",
        'CALSCALE:GREGORIAN',
    ]
    if calendar_name:
        lines.append(f"X-WR-CALNAME:{ics_escape(calendar_name)}")

    for event in events:
        lines.extend(render_event(event))
    lines.append('END:VCALENDAR')

    folded = []
    for line in lines:
        folded.extend(fold_line(line))
    return CRLF.join(folded)
