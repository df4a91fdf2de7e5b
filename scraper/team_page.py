"""Scraper for team fixture and result pages."""
import logging
import time
from typing import List, Tuple

import requests

from processor.models import Fixture, Team
from processor.normalizer import FIXTURE_SCHEMA, RESULT_SCHEMA, parse_records

logger = logging.getLogger(__name__)


class TeamPageScraper:
    """Fetches a team's league page and parses its fixture and result tables."""

    HEADERS = {
        'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
        'Accept-Language': 'en-GB,en-US;q=0.9,en;q=0.8',
        'Connection': 'keep-alive',
        'User-Agent': (
            'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 '
            '(KHTML, like Gecko) Chrome/141.0.0.0 Safari/537.36'
        ),
    }
    MAX_RETRIES = 3
    BASE_DELAY = 1  # seconds

    def __init__(self, timeout: int = 30):
        """
        Initialize the scraper.

        Args:
            timeout: HTTP request timeout in seconds (default: 30)
        """
        self.timeout = timeout

    def fetch_records(self, team: Team) -> Tuple[List[Fixture], List[Fixture]]:
        """
        Fetch and parse a team's fixtures and results.

        The results table is read from ``team.results_url`` when set,
        otherwise from the same page as the fixtures.

        Args:
            team: Team to fetch

        Returns:
            Tuple of (fixtures, results)
        """
        logger.info(f"Starting scrape for: {team.name} ({team.url})")
        fixtures_html = self.fetch_html(team.url)

        if team.results_url and team.results_url != team.url:
            results_html = self.fetch_html(team.results_url)
        else:
            results_html = fixtures_html

        fixtures = parse_records(fixtures_html, FIXTURE_SCHEMA)
        results = parse_records(results_html, RESULT_SCHEMA)
        return fixtures, results

    def fetch_html(self, url: str) -> str:
        """
        Fetch a page with retry logic.

        Args:
            url: Page URL

        Returns:
            HTML content as string

        Raises:
            requests.RequestException: If all retry attempts fail
        """
        for attempt in range(self.MAX_RETRIES):
            try:
                logger.info(f"Fetching {url} (attempt {attempt + 1}/{self.MAX_RETRIES})")
                response = requests.get(
                    url,
                    headers=self.HEADERS,
                    timeout=self.timeout
                )
                response.raise_for_status()
                return response.text

            except requests.RequestException as e:
                if attempt < self.MAX_RETRIES - 1:
                    delay = self.BASE_DELAY * (2 ** attempt)
                    logger.warning(
                        f"Request failed (attempt {attempt + 1}/{self.MAX_RETRIES}): {e}. "
                        f"Retrying in {delay} seconds..."
                    )
                    time.sleep(delay)
                else:
                    logger.error(
                        f"All {self.MAX_RETRIES} retry attempts failed. Last error: {e}"
                    )
                    raise
