"""JSON encoding of normalized records between pipeline stages."""
import json
import logging
import re
from dataclasses import asdict
from typing import List, Sequence

from processor.errors import RecordFileError
from processor.models import Fixture, Result

logger = logging.getLogger(__name__)

RECORD_FIELDS = ('date', 'time', 'home_team', 'away_team', 'venue')


def slugify(text: str) -> str:
    """Lowercase a team name and replace each whitespace character with '-'."""
    return re.sub(r'\s', '-', text.lower())


def records_to_json(records: Sequence[Fixture]) -> str:
    """Encode records as an indented JSON array."""
    return json.dumps([asdict(record) for record in records], indent=2)


def records_from_json(text: str) -> List[Fixture]:
    """
    Decode a JSON array of records.

    Objects carrying a "result" key load as Result, others as Fixture.
    Entries that are not objects are skipped.

    Raises:
        RecordFileError: If the text is not a JSON array
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise RecordFileError(f"Invalid record JSON: {e}") from e

    if not isinstance(data, list):
        raise RecordFileError("Record file must contain a JSON array")

    records = []
    for position, item in enumerate(data, start=1):
        if not isinstance(item, dict):
            logger.warning(f"Skipping record {position}: not an object")
            continue

        values = {name: str(item.get(name) or '') for name in RECORD_FIELDS}
        if 'result' in item:
            records.append(Result(result=str(item['result'] or ''), **values))
        else:
            records.append(Fixture(**values))

    return records
