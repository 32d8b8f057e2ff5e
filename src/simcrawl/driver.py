"""
Page interaction driver.

Performs the fixed navigate -> viewport -> fill -> submit sequence of a crawl
target against the page of one session. Each step has its own bounded
timeout and its own failure type so callers can tell "site unreachable"
(NavigationError) from "form layout changed" (InteractionError). Nothing is
retried here.
"""
import logging
from typing import Optional

from playwright.async_api import Error as PlaywrightError

from .constants import (
    DEFAULT_INTERACTION_TIMEOUT_MS,
    DEFAULT_NAVIGATION_TIMEOUT_MS,
    NAVIGATION_WAIT_UNTIL,
)
from .deadline import Deadline
from .errors import InteractionError, NavigationError
from .models import CrawlSession
from .targets import CrawlTarget

logger = logging.getLogger(__name__)


class PageDriver:
    """Submits text to a crawl target's form."""

    def __init__(
        self,
        target: CrawlTarget,
        navigation_timeout_ms: int = DEFAULT_NAVIGATION_TIMEOUT_MS,
        interaction_timeout_ms: int = DEFAULT_INTERACTION_TIMEOUT_MS,
    ):
        """
        Args:
            target: Page protocol to drive
            navigation_timeout_ms: Upper bound for loading the target URL
            interaction_timeout_ms: Upper bound for locating/operating a control
        """
        self.target = target
        self.navigation_timeout_ms = navigation_timeout_ms
        self.interaction_timeout_ms = interaction_timeout_ms

    async def submit(
        self,
        session: CrawlSession,
        text: str,
        deadline: Optional[Deadline] = None,
    ) -> None:
        """
        Navigate to the target and submit the text.

        Args:
            session: Session whose page is driven
            text: Sanitized text to submit
            deadline: Crawl budget; step timeouts never exceed what is left

        Raises:
            NavigationError: Target unreachable, non-2xx, or navigation timeout
            InteractionError: Viewport cannot be set, or the input or submit
                control is missing or inoperable
        """
        page = session.page

        await self._navigate(page, deadline)
        await self._set_viewport(page)
        await self._fill_input(page, text, deadline)
        await self._click_submit(page, deadline)

        logger.info(f"Submitted {len(text)} characters to {self.target.name}")

    def _step_timeout(self, timeout_ms: int, deadline: Optional[Deadline]) -> int:
        if deadline is None:
            return timeout_ms
        return deadline.clip_ms(timeout_ms)

    async def _navigate(self, page, deadline: Optional[Deadline]) -> None:
        url = self.target.url
        logger.debug(f"Navigating to {url}")

        try:
            response = await page.goto(
                url,
                wait_until=NAVIGATION_WAIT_UNTIL,
                timeout=self._step_timeout(self.navigation_timeout_ms, deadline),
            )
        except PlaywrightError as e:
            raise NavigationError(f"Could not load {url}: {e}", url=url) from e

        if response is None:
            raise NavigationError(f"No response received from {url}", url=url)

        if not 200 <= response.status < 300:
            raise NavigationError(
                f"{url} answered with HTTP {response.status}",
                url=url,
                status_code=response.status,
            )

    async def _set_viewport(self, page) -> None:
        viewport = self.target.viewport.to_dict()

        try:
            await page.set_viewport_size(viewport)
        except PlaywrightError as e:
            raise InteractionError(f"Could not set viewport to {viewport}: {e}", selector="viewport") from e

    async def _fill_input(self, page, text: str, deadline: Optional[Deadline]) -> None:
        selector = self.target.selectors.text_input
        timeout = self._step_timeout(self.interaction_timeout_ms, deadline)

        try:
            await page.wait_for_selector(selector, state="visible", timeout=timeout)
        except PlaywrightError as e:
            raise InteractionError(f"Text input not found: {selector}", selector=selector) from e

        try:
            await page.fill(selector, text, timeout=timeout)
        except PlaywrightError as e:
            raise InteractionError(f"Could not fill text input {selector}: {e}", selector=selector) from e

    async def _click_submit(self, page, deadline: Optional[Deadline]) -> None:
        selector = self.target.selectors.submit
        timeout = self._step_timeout(self.interaction_timeout_ms, deadline)

        try:
            await page.click(selector, timeout=timeout)
        except PlaywrightError as e:
            raise InteractionError(f"Could not activate submit control {selector}: {e}", selector=selector) from e
