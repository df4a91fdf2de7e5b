"""Calendar build for a single team."""
import logging
from datetime import datetime, timezone
from typing import Dict, Optional, Sequence, Tuple

from processor.calendar_serializer import build_events, render_calendar
from processor.errors import NoRecordsError
from processor.models import Fixture

logger = logging.getLogger(__name__)


def build_calendar(
    team_name: str,
    fixtures: Sequence[Fixture],
    results: Sequence[Fixture],
    location_map: Dict[str, str],
    context_line: Optional[str] = None,
    creation_time: Optional[datetime] = None,
    allow_empty: bool = False,
    stable_uids: bool = False
) -> Tuple[str, int]:
    """
    Build one team's calendar from its fixtures and results.

    Args:
        team_name: Used for the calendar name and log messages
        fixtures: Upcoming matches
        results: Played matches
        location_map: Venue alias map
        context_line: DESCRIPTION for every event (e.g. the team page URL)
        creation_time: DTSTAMP override
        allow_empty: Publish an event-less calendar instead of failing
        stable_uids: Derive UIDs from event content

    Returns:
        Tuple of (calendar text, number of events in it)

    Raises:
        NoRecordsError: If there are no records and allow_empty is False
    """
    records = list(fixtures) + list(results)
    logger.info(
        f"Found {len(fixtures)} fixtures and {len(results)} results for {team_name}"
    )

    if not records:
        if not allow_empty:
            raise NoRecordsError(team_name)
        logger.warning(f"No fixtures or results for {team_name}. An empty calendar will be created.")

    if creation_time is None:
        creation_time = datetime.now(timezone.utc)

    events = build_events(
        records,
        location_map,
        creation_time,
        context_line=context_line,
        stable_uids=stable_uids
    )
    logger.info(f"Built {len(events)} events from {len(records)} records for {team_name}")
    return render_calendar(events, calendar_name=team_name), len(events)
