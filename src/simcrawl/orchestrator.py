"""
Crawl orchestrator.

Composes validation, session acquisition, submission, polling and extraction
into one crawl and maps every way it can end onto exactly one CrawlOutcome.

    validate -> acquire session -> submit -> poll -+-> NO_MATCH_OBSERVED -> NoMatch
                                                   +-> DEADLINE_EXCEEDED -> TimedOut
                                                   +-> RESULTS_OBSERVED  -> extract -> Matches | NoMatch

The session is released before any outcome is returned. Nothing is retried;
a caller who wants another attempt submits a new request.
"""
import asyncio
import logging
import uuid
from typing import Optional

from .browser_config import BrowserConfig
from .config import CrawlerConfig
from .deadline import Deadline
from .driver import PageDriver
from .errors import CrawlError, FailureReason, InvalidInputError
from .extractor import ResultExtractor
from .infrastructure.session_pool import SessionPool
from .logging_config import get_crawl_logger
from .models import CrawlOutcome, CrawlRequest, CrawlSession, MatchRecord
from .poller import PollState, ResultPoller
from .targets import CrawlTarget, get_target


class CrawlOrchestrator:
    """
    Runs similarity crawls against one crawl target.

    Safe to share between concurrent tasks: every call to crawl() gets its
    own session, deadline and poller.

    Usage:
        async with SessionPool(max_size=4) as pool:
            orchestrator = CrawlOrchestrator(pool)
            outcome = await orchestrator.crawl(CrawlRequest(text))
    """

    def __init__(
        self,
        pool: SessionPool,
        target: Optional[CrawlTarget] = None,
        config: Optional[CrawlerConfig] = None,
    ):
        """
        Args:
            pool: Source of isolated sessions (anything with an acquire() scope)
            target: Page protocol to drive (default: config.target)
            config: Pipeline tunables
        """
        self.config = config or CrawlerConfig()
        self.target = target or get_target(self.config.target)
        self.pool = pool

        self.driver = PageDriver(
            self.target,
            navigation_timeout_ms=self.config.navigation_timeout_ms,
            interaction_timeout_ms=self.config.interaction_timeout_ms,
        )
        self.extractor = ResultExtractor(self.target)

    def _new_poller(self) -> ResultPoller:
        return ResultPoller(self.target, interval=self.config.poll_interval_seconds)

    async def crawl(self, request: CrawlRequest) -> CrawlOutcome:
        """
        Run one crawl.

        Invalid requests are rejected before a session is acquired. Waiting
        for a session counts against the deadline. Every
        other failure is caught here and returned as a FAILED outcome after
        the session has been released. Task cancellation is not caught.

        Args:
            request: Text and optional deadline override

        Returns:
            Exactly one of NoMatch, Matches, TimedOut or Failed
        """
        crawl_id = uuid.uuid4().hex[:8]
        log = get_crawl_logger(__name__, crawl_id)

        try:
            request = request.validated(
                min_length=self.config.min_text_length,
                max_length=self.config.max_text_length,
            )
        except InvalidInputError as e:
            log.info(f"Rejected request: {e.message}")
            return CrawlOutcome.rejected(e)

        seconds = request.deadline
        if seconds is None:
            seconds = self.config.default_deadline_seconds
        deadline = Deadline(seconds)

        log.info(
            f"Starting {self.target.name} crawl "
            f"({len(request.text)} chars, deadline {seconds}s)"
        )

        try:
            async with self.pool.acquire(timeout=deadline.remaining()) as session:
                outcome = await self._run(session, request.text, deadline, log)
        except CrawlError as e:
            log.warning(f"Crawl failed ({e.reason.value}): {e.message}")
            outcome = CrawlOutcome.failed(e.reason, e.message, elapsed_seconds=deadline.elapsed())
        except Exception as e:
            log.exception(f"Unexpected error during crawl: {e}")
            outcome = CrawlOutcome.failed(
                FailureReason.INTERNAL_ERROR,
                str(e),
                elapsed_seconds=deadline.elapsed(),
            )

        log.info(f"Crawl finished: {outcome.kind.value} in {outcome.elapsed_seconds:.2f}s")
        return outcome

    async def _run(
        self,
        session: CrawlSession,
        text: str,
        deadline: Deadline,
        log: logging.LoggerAdapter,
    ) -> CrawlOutcome:
        """Steps 3-5 on an acquired session. Errors propagate to crawl()."""
        log.debug(f"Using session {session.session_id}")

        await self.driver.submit(session, text, deadline)

        state = await self._new_poller().wait(session.page, deadline)

        if state is PollState.NO_MATCH_OBSERVED:
            return CrawlOutcome.no_match(elapsed_seconds=deadline.elapsed())

        if state is PollState.DEADLINE_EXCEEDED:
            return CrawlOutcome.timed_out(elapsed_seconds=deadline.elapsed())

        raw_records = await self.extractor.extract(session.page, deadline)
        if not raw_records:
            log.info("Results vanished before extraction, reporting no match")
            return CrawlOutcome.no_match(elapsed_seconds=deadline.elapsed())

        records = [MatchRecord.from_raw(raw) for raw in raw_records]
        return CrawlOutcome.matches(records, elapsed_seconds=deadline.elapsed())


def crawl_sync(
    text: str,
    deadline: Optional[float] = None,
    target: Optional[str] = None,
    config: Optional[CrawlerConfig] = None,
    browser_config: Optional[BrowserConfig] = None,
) -> CrawlOutcome:
    """
    Synchronous wrapper for a single crawl.

    Convenience function for non-async contexts; starts and stops a
    pool of config.max_sessions sessions around the crawl.

    Args:
        text: Text to check
        deadline: Seconds allowed (default: config.default_deadline_seconds)
        target: Crawl target name (default: config.target)
        config: Pipeline tunables
        browser_config: Browser settings

    Returns:
        CrawlOutcome
    """
    config = config or CrawlerConfig.from_env()
    crawl_target = get_target(target or config.target)

    async def _crawl():
        async with SessionPool(
            max_size=config.max_sessions,
            browser_config=browser_config,
            acquire_timeout=config.acquire_timeout_seconds,
        ) as pool:
            orchestrator = CrawlOrchestrator(pool, target=crawl_target, config=config)
            return await orchestrator.crawl(CrawlRequest(text=text, deadline=deadline))

    return asyncio.run(_crawl())
