"""
Result poller.

After submission the target page settles into one of two terminal signals:
an explicit "no results" status message, or the appearance of result
elements. Neither is guaranteed to render first, so both are inspected on
every tick by a single loop instead of racing two independent waits. The
no-match check runs first on each tick, so it wins whenever it is observable.
"""
import asyncio
import logging
from enum import Enum
from typing import Optional

from playwright.async_api import Error as PlaywrightError

from .constants import DEFAULT_POLL_INTERVAL_SECONDS
from .deadline import Deadline
from .targets import CrawlTarget

logger = logging.getLogger(__name__)


class PollState(Enum):
    """States of the result poller. Everything but SUBMITTED is terminal."""
    SUBMITTED = "submitted"
    NO_MATCH_OBSERVED = "no_match_observed"
    RESULTS_OBSERVED = "results_observed"
    DEADLINE_EXCEEDED = "deadline_exceeded"

    @property
    def is_terminal(self) -> bool:
        return self is not PollState.SUBMITTED


async def read_status_message(page, target: CrawlTarget) -> Optional[str]:
    """Text of the target's status element, None if it is not in the DOM."""
    element = await page.query_selector(target.selectors.status_message)
    if element is None:
        return None
    return await element.text_content()


async def no_match_visible(page, target: CrawlTarget) -> bool:
    """Whether the status element currently shows the "no results" phrase."""
    return target.is_no_match_message(await read_status_message(page, target))


async def results_visible(page, target: CrawlTarget) -> bool:
    """Whether at least one result element is rendered and visible."""
    for element in await page.query_selector_all(target.selectors.result):
        if await element.is_visible():
            return True
    return False


class ResultPoller:
    """Waits for a submitted page to reach a terminal state."""

    def __init__(
        self,
        target: CrawlTarget,
        interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
    ):
        """
        Args:
            target: Page protocol providing the status and result selectors
            interval: Seconds between inspections
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")

        self.target = target
        self.interval = interval
        self.state = PollState.SUBMITTED
        self.ticks = 0

    async def _probe(self, check, page) -> bool:
        # The page may be mid-navigation right after submit; treat a failed
        # probe as "not observed yet".
        try:
            return await check(page, self.target)
        except PlaywrightError as e:
            logger.debug(f"Probe {check.__name__} failed on tick {self.ticks}: {e}")
            return False

    async def wait(self, page, deadline: Deadline) -> PollState:
        """
        Poll the page until a terminal state is reached.

        Never reports DEADLINE_EXCEEDED before the deadline has passed.
        Cancelling the calling task stops polling at the next sleep.

        Args:
            page: Page the text was submitted on
            deadline: Crawl budget

        Returns:
            The terminal PollState
        """
        self.state = PollState.SUBMITTED
        self.ticks = 0

        # Fast path: the no-match message can appear before any result renders
        if await self._probe(no_match_visible, page):
            return self._finish(PollState.NO_MATCH_OBSERVED, deadline)

        while True:
            self.ticks += 1

            if await self._probe(no_match_visible, page):
                return self._finish(PollState.NO_MATCH_OBSERVED, deadline)

            if await self._probe(results_visible, page):
                return self._finish(PollState.RESULTS_OBSERVED, deadline)

            if deadline.expired:
                return self._finish(PollState.DEADLINE_EXCEEDED, deadline)

            await asyncio.sleep(min(self.interval, deadline.remaining()))

    def _finish(self, state: PollState, deadline: Deadline) -> PollState:
        self.state = state
        logger.info(
            f"Polling ended in {state.value} after {self.ticks} ticks "
            f"({deadline.elapsed():.2f}s)"
        )
        return state
