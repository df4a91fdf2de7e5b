"""AWS Lambda handler for pool league fixture calendars."""
import json
import logging
import os
import time
from typing import Any, Dict, List

from processor.errors import ConfigurationError, PipelineError
from processor.models import PipelineConfig, PublishResult, Team
from processor.pipeline import build_calendar
from processor.records import slugify
from scraper.team_page import TeamPageScraper
from storage.s3_store import S3CalendarStore, parse_teams


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    EXTRA_FIELDS = ('team', 'error_type', 'duration_seconds')

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        for name in self.EXTRA_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def setup_logging(log_level: str = 'INFO') -> None:
    """
    Configure logging with JSON formatter.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def load_config() -> PipelineConfig:
    """
    Read pipeline configuration from environment variables.

    Raises:
        ConfigurationError: If BUCKET_NAME is unset or TIMEOUT_SECONDS is not an integer
    """
    bucket_name = os.environ.get('BUCKET_NAME')
    if not bucket_name:
        raise ConfigurationError('BUCKET_NAME environment variable is required')

    try:
        timeout_seconds = int(os.environ.get('TIMEOUT_SECONDS', '30'))
    except ValueError as e:
        raise ConfigurationError(f"Invalid TIMEOUT_SECONDS: {e}") from e

    return PipelineConfig(
        bucket_name=bucket_name,
        key_prefix=os.environ.get('KEY_PREFIX', ''),
        teams_key=os.environ.get('TEAMS_KEY', 'teams.json'),
        location_map_key=os.environ.get('LOCATION_MAP_KEY', 'location_mapper.json'),
        log_level=os.environ.get('LOG_LEVEL', 'INFO'),
        timeout_seconds=timeout_seconds,
        persist_records=_env_flag('PERSIST_RECORDS'),
        allow_empty_calendar=_env_flag('ALLOW_EMPTY_CALENDAR'),
        stable_uids=_env_flag('STABLE_UIDS')
    )


def publish_team_calendar(
    team: Team,
    scraper: TeamPageScraper,
    store: S3CalendarStore,
    location_map: Dict[str, str],
    config: PipelineConfig
) -> int:
    """
    Scrape one team and publish its calendar.

    Returns:
        Number of events written to the calendar
    """
    slug = slugify(team.name)
    fixtures, results = scraper.fetch_records(team)

    if config.persist_records:
        store.save_records(f"fixtures-{slug}.json", fixtures)
        store.save_records(f"results-{slug}.json", results)

    calendar_text, event_count = build_calendar(
        team.name,
        fixtures,
        results,
        location_map,
        context_line=team.url,
        allow_empty=config.allow_empty_calendar,
        stable_uids=config.stable_uids
    )
    store.save_calendar(f"{slug}.ics", calendar_text)
    return event_count


def publish_calendars(
    teams: List[Team],
    scraper: TeamPageScraper,
    store: S3CalendarStore,
    location_map: Dict[str, str],
    config: PipelineConfig
) -> PublishResult:
    """Publish a calendar per team; one team failing does not stop the rest."""
    logger = logging.getLogger(__name__)
    result = PublishResult()

    for team in teams:
        result.teams_processed += 1
        logger.info(f"--- Processing {team.name} ---", extra={'team': team.name})
        try:
            result.events_written += publish_team_calendar(
                team, scraper, store, location_map, config
            )
            result.calendars_published += 1
            logger.info(
                f"Successfully published calendar for {team.name}",
                extra={'team': team.name}
            )
        except PipelineError as e:
            logger.warning(str(e), extra={'team': team.name})
            result.errors.append(f"{team.name}: {e}")
        except Exception as e:
            logger.error(
                f"An error occurred processing {team.name}: {e}",
                extra={'team': team.name, 'error_type': type(e).__name__},
                exc_info=True
            )
            result.errors.append(f"{team.name}: {e}")

    return result


def _error_response(message: str, error: Exception, start_time: float) -> Dict[str, Any]:
    return {
        'statusCode': 500,
        'body': json.dumps({
            'message': message,
            'error': str(error),
            'error_type': type(error).__name__,
            'duration_seconds': round(time.time() - start_time, 2)
        })
    }


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Main Lambda handler: build and publish a calendar for every team.

    Args:
        event: EventBridge event payload; an optional "teams" list overrides
            the stored teams file
        context: Lambda context object

    Returns:
        Response dict with statusCode and summary statistics
    """
    start_time = time.time()
    setup_logging(os.environ.get('LOG_LEVEL', 'INFO'))
    logger = logging.getLogger(__name__)

    try:
        config = load_config()
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}", extra={'error_type': type(e).__name__})
        return _error_response('Invalid configuration', e, start_time)

    logger.info(f"Calendar build started for bucket {config.bucket_name}")

    try:
        scraper = TeamPageScraper(timeout=config.timeout_seconds)
        store = S3CalendarStore(config.bucket_name, key_prefix=config.key_prefix)

        if event and event.get('teams'):
            teams = parse_teams(event['teams'])
        else:
            teams = store.load_teams(config.teams_key)
        location_map = store.load_location_map(config.location_map_key)
    except Exception as e:
        logger.error(
            f"Failed to load pipeline inputs: {e}",
            extra={'error_type': type(e).__name__},
            exc_info=True
        )
        return _error_response('Failed to load teams', e, start_time)

    if not teams:
        logger.warning('Teams list is empty. Nothing to process.')

    logger.info(f"Found {len(teams)} team(s) to process...")
    result = publish_calendars(teams, scraper, store, location_map, config)

    duration = round(time.time() - start_time, 2)
    logger.info(
        'All calendar operations finished',
        extra={'duration_seconds': duration}
    )

    return {
        'statusCode': 200,
        'body': json.dumps({
            'message': 'Calendar build completed',
            'statistics': {
                'teams_processed': result.teams_processed,
                'calendars_published': result.calendars_published,
                'events_written': result.events_written,
                'duration_seconds': duration
            },
            'errors': result.errors
        })
    }
