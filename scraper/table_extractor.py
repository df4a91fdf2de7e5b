"""Table row extraction from fixture and result pages."""
import logging
from typing import List, Optional

from bs4 import BeautifulSoup

from processor.models import RawCell, RawRow

logger = logging.getLogger(__name__)


def extract_rows(
    html_text: str,
    row_selector: str,
    min_cells: int = 0,
    datetime_cell: Optional[int] = None
) -> List[RawRow]:
    """
    Extract raw cell contents from the table rows matching a selector.

    Rows with fewer than ``min_cells`` cells, or whose date/time cell has
    no markup, are skipped with a warning. Processing always continues with
    the next row.

    Args:
        html_text: HTML document, possibly malformed
        row_selector: CSS selector for the rows (e.g. "table.fixed tbody tr")
        min_cells: Minimum number of <td> cells a row must have
        datetime_cell: Index of the cell holding the combined date/time

    Returns:
        List of RawRow objects, in document order
    """
    if not html_text:
        logger.warning("No HTML content provided")
        return []

    soup = BeautifulSoup(html_text, 'html.parser')
    table_rows = soup.select(row_selector)

    if not table_rows:
        logger.warning(f"No rows found in the table body for '{row_selector}'")
        return []

    rows = []
    for index, row in enumerate(table_rows, start=1):
        cells = row.find_all('td')

        if len(cells) < min_cells:
            logger.warning(f"Skipping row {index}: Incomplete data")
            continue

        raw_cells = [
            RawCell(text=cell.get_text(), markup=cell.decode_contents())
            for cell in cells
        ]

        if datetime_cell is not None and (
            datetime_cell >= len(raw_cells) or not raw_cells[datetime_cell].markup
        ):
            logger.warning(f"Skipping row {index}: Missing date/time")
            continue

        rows.append(RawRow(index=index, cells=raw_cells))

    logger.debug(f"Extracted {len(rows)} of {len(table_rows)} rows")
    return rows
