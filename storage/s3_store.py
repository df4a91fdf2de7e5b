"""S3 storage for teams, venue aliases, intermediate records and calendars."""
import json
import logging
from typing import Dict, List, Optional, Sequence

import boto3
from botocore.exceptions import ClientError

from processor.errors import TeamsFileError
from processor.models import Fixture, Team
from processor.records import records_from_json, records_to_json
from processor.venues import parse_location_map

logger = logging.getLogger(__name__)

MISSING_KEY_CODES = ('NoSuchKey', '404', 'NotFound')


class S3CalendarStore:
    """Reads pipeline inputs from and publishes calendars to an S3 bucket."""

    CALENDAR_CONTENT_TYPE = 'text/calendar; charset=utf-8'
    JSON_CONTENT_TYPE = 'application/json'

    def __init__(self, bucket_name: str, key_prefix: str = ''):
        """
        Initialize S3 client and bucket reference.

        Args:
            bucket_name: Name of the S3 bucket
            key_prefix: Prefix prepended to every object key
        """
        self.bucket_name = bucket_name
        self.key_prefix = key_prefix
        self.s3 = boto3.client('s3')
        logger.info(f"Initialized S3CalendarStore for bucket: {bucket_name}")

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def read_text(self, key: str) -> Optional[str]:
        """
        Read an object as UTF-8 text.

        Returns:
            Object content, or None if the object does not exist

        Raises:
            ClientError: For any S3 error other than a missing key
        """
        try:
            response = self.s3.get_object(Bucket=self.bucket_name, Key=self._key(key))
        except ClientError as e:
            if e.response.get('Error', {}).get('Code') in MISSING_KEY_CODES:
                return None
            logger.error(f"Error reading s3://{self.bucket_name}/{self._key(key)}: {e}")
            raise
        return response['Body'].read().decode('utf-8')

    def write_text(self, key: str, content: str, content_type: str) -> None:
        """Write UTF-8 text to an object."""
        self.s3.put_object(
            Bucket=self.bucket_name,
            Key=self._key(key),
            Body=content.encode('utf-8'),
            ContentType=content_type
        )
        logger.info(f"Wrote s3://{self.bucket_name}/{self._key(key)}")

    def load_teams(self, key: str) -> List[Team]:
        """
        Load the teams file.

        Args:
            key: Object key of a JSON array of {name, url[, results_url]}

        Returns:
            List of Team objects; invalid entries are skipped

        Raises:
            TeamsFileError: If the file is missing, not JSON or not an array
        """
        content = self.read_text(key)
        if content is None:
            raise TeamsFileError(f"Could not find teams file {key}")

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise TeamsFileError(f"Failed to parse {key}. Check for JSON syntax errors.") from e

        if not isinstance(data, list):
            raise TeamsFileError(f"Teams file {key} must contain a JSON array")

        return parse_teams(data)

    def load_location_map(self, key: str) -> Dict[str, str]:
        """Load the venue alias map; a missing object gives an empty map."""
        content = self.read_text(key)
        if content is None:
            logger.warning(f"Location mapper not found at {key}. Using default venues.")
            return {}
        return parse_location_map(content)

    def save_records(self, key: str, records: Sequence[Fixture]) -> None:
        """Persist normalized records as indented JSON."""
        self.write_text(key, records_to_json(records), self.JSON_CONTENT_TYPE)

    def load_records(self, key: str) -> List[Fixture]:
        """Load persisted records; a missing object gives an empty list."""
        content = self.read_text(key)
        if content is None:
            logger.info(f"No records file found at {key}")
            return []
        return records_from_json(content)

    def save_calendar(self, key: str, calendar_text: str) -> None:
        """Publish a calendar file."""
        self.write_text(key, calendar_text, self.CALENDAR_CONTENT_TYPE)


def parse_teams(entries: list) -> List[Team]:
    """
    Convert raw team entries into Team objects.

    Entries without a name or url are skipped with a warning.
    """
    teams = []
    for entry in entries:
        if not isinstance(entry, dict) or not entry.get('name') or not entry.get('url'):
            logger.warning(f"Skipping invalid team entry (missing name or url): {entry}")
            continue
        teams.append(Team(
            name=entry['name'],
            url=entry['url'],
            results_url=entry.get('results_url')
        ))
    return teams
