"""Normalization of raw table rows into Fixture and Result records."""
import html
import logging
import re
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup

from processor.models import Fixture, RawRow, Result, RowSchema
from scraper.table_extractor import extract_rows

logger = logging.getLogger(__name__)

PLACEHOLDER = 'N/A'

LINE_BREAK = re.compile(r'<br\s*/?>', re.IGNORECASE)
WHITESPACE = re.compile(r'\s')

# Fixtures table: | # | date<br>time | home | - | away | venue |
FIXTURE_SCHEMA = RowSchema(
    name='fixtures',
    row_selector='table:not(.fixed) tbody tr',
    min_cells=6,
    datetime_cell=1,
    fields={2: 'home_team', 4: 'away_team', 5: 'venue'},
    record_type=Fixture
)

# Results table: | # | date<br>time | home | score | away |
RESULT_SCHEMA = RowSchema(
    name='results',
    row_selector='table.fixed tbody tr',
    min_cells=5,
    datetime_cell=1,
    fields={2: 'home_team', 3: 'result', 4: 'away_team'},
    record_type=Result,
    compact_fields=('result',)
)


def split_datetime_markup(markup: str) -> Tuple[str, str]:
    """
    Split a combined "date<br>time" cell into its date and time text.

    A missing part becomes the "N/A" placeholder instead of failing.
    """
    parts = [_markup_to_text(part) for part in LINE_BREAK.split(markup)]
    date = parts[0] if parts and parts[0] else PLACEHOLDER
    time = parts[1] if len(parts) > 1 and parts[1] else PLACEHOLDER
    return date, time


def _markup_to_text(markup: str) -> str:
    if '<' not in markup:
        return html.unescape(markup).strip()
    return BeautifulSoup(markup, 'html.parser').get_text().strip()


def normalize(raw_row: RawRow, schema: RowSchema) -> Optional[Fixture]:
    """
    Convert one raw row into a typed record.

    Args:
        raw_row: Row produced by extract_rows
        schema: Layout describing which cell holds which field

    Returns:
        Fixture or Result (per schema.record_type), or None when the
        date/time markup is missing
    """
    cells = raw_row.cells
    if schema.datetime_cell >= len(cells) or not cells[schema.datetime_cell].markup:
        logger.warning(f"Skipping row {raw_row.index}: Missing date/time")
        return None

    date, time = split_datetime_markup(cells[schema.datetime_cell].markup)
    values = {'date': date, 'time': time}

    for cell_index, field_name in schema.fields.items():
        text = cells[cell_index].text.strip() if cell_index < len(cells) else ''
        if field_name in schema.compact_fields:
            text = WHITESPACE.sub('', text)
        values[field_name] = text

    # Fields the layout does not carry (e.g. venue on results) default to empty
    for field_name in ('home_team', 'away_team', 'venue'):
        values.setdefault(field_name, '')

    return schema.record_type(**values)


def parse_records(html_text: str, schema: RowSchema) -> List[Fixture]:
    """
    Extract and normalize every row of a document for the given layout.

    Args:
        html_text: HTML document
        schema: Row layout to apply

    Returns:
        List of records; skipped rows are not included
    """
    raw_rows = extract_rows(
        html_text,
        schema.row_selector,
        min_cells=schema.min_cells,
        datetime_cell=schema.datetime_cell
    )

    records = []
    for raw_row in raw_rows:
        record = normalize(raw_row, schema)
        if record is not None:
            records.append(record)

    logger.info(f"Parsed {len(records)} {schema.name} from {len(raw_rows)} rows")
    return records
