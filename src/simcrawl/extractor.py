"""
Result extractor.

Reads the rendered HTML of a page that reached RESULTS_OBSERVED and turns
each result element into a RawRecord, in document order. Document order is
the target's own relevance ranking and is never re-sorted.
"""
import asyncio
import logging
from typing import Optional

from bs4 import BeautifulSoup
from playwright.async_api import Error as PlaywrightError

from .constants import EXTRACTION_GRACE_SECONDS
from .deadline import Deadline
from .errors import ExtractionError
from .models import RawRecord
from .targets import CrawlTarget

logger = logging.getLogger(__name__)


class ResultExtractor:
    """Pulls raw match records out of a results page."""

    def __init__(
        self,
        target: CrawlTarget,
        parser: str = "html.parser",
        grace_seconds: float = EXTRACTION_GRACE_SECONDS,
    ):
        """
        Args:
            target: Page protocol providing the selectors and record parser
            parser: BeautifulSoup tree builder
            grace_seconds: Time allowed for reading the page beyond the deadline
        """
        self.target = target
        self.parser = parser
        self.grace_seconds = grace_seconds

    async def extract(self, page, deadline: Optional[Deadline] = None) -> list[RawRecord]:
        """
        Extract raw records from the page's current DOM.

        Returns an empty list if the "no results" message is showing, since
        a slow page can switch state between polling and extraction.

        Args:
            page: Page that reached RESULTS_OBSERVED
            deadline: Crawl budget; reading the page may overrun it by at
                most grace_seconds

        Raises:
            ExtractionError: If the page content cannot be read in time or parsed
        """
        timeout = None
        if deadline is not None:
            timeout = deadline.remaining() + self.grace_seconds

        try:
            html = await asyncio.wait_for(page.content(), timeout=timeout)
        except asyncio.TimeoutError as e:
            raise ExtractionError(f"Timed out reading page content after {timeout:.2f}s") from e
        except PlaywrightError as e:
            raise ExtractionError(f"Could not read page content: {e}") from e

        return self.extract_from_html(html)

    def extract_from_html(self, html: str) -> list[RawRecord]:
        """Parse raw records from an HTML document."""
        try:
            soup = BeautifulSoup(html or "", self.parser)
        except Exception as e:
            raise ExtractionError(f"Could not parse results page: {e}") from e

        status = soup.select_one(self.target.selectors.status_message)
        if status is not None and self.target.is_no_match_message(status.get_text()):
            logger.info("No-match message present at extraction time")
            return []

        records = []
        for position, element in enumerate(soup.select(self.target.selectors.result)):
            try:
                records.append(self.target.parse_result(element))
            except Exception as e:
                raise ExtractionError(
                    f"Unexpected shape for result #{position + 1}: {e}"
                ) from e

        logger.info(f"Extracted {len(records)} raw records from {self.target.name}")
        return records
