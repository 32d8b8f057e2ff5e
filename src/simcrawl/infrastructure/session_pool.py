"""
Isolated Browser Session Pool.

This module hands out one isolated browser context (plus a page) per crawl,
backed by a single shared browser process. Contexts are never reused: each
acquisition creates a fresh context with its own cookies and storage, and
closing it on release discards that state.

The number of simultaneously open sessions is capped; callers beyond the cap
wait for a free slot up to a timeout and then fail with
SessionUnavailableError.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any, AsyncIterator, Optional

from ..browser_config import BrowserConfig
from ..constants import DEFAULT_ACQUIRE_TIMEOUT_SECONDS, DEFAULT_MAX_SESSIONS
from ..errors import SessionUnavailableError
from ..models import CrawlSession

logger = logging.getLogger(__name__)


@dataclass
class PoolStatus:
    """Current status of the session pool."""
    max_size: int
    in_use: int
    available: int
    total_acquired: int
    total_released: int
    total_errors: int
    browser_connected: bool
    uptime_seconds: float


class SessionPool:
    """
    Bounded pool of isolated browser sessions.

    Features:
    - Scoped acquisition with guaranteed, exactly-once release
    - Fresh browser context per session (no shared cookies/storage)
    - Lazy browser launch, relaunched if the process disconnects
    - Backpressure via a fixed number of concurrent sessions

    Usage:
        async with SessionPool(max_size=4) as pool:
            async with pool.acquire() as session:
                await session.page.goto(url)
    """

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_SESSIONS,
        browser_config: Optional[BrowserConfig] = None,
        acquire_timeout: float = DEFAULT_ACQUIRE_TIMEOUT_SECONDS,
    ):
        """
        Initialize session pool.

        Args:
            max_size: Maximum number of sessions open at once
            browser_config: Browser launch and context settings
            acquire_timeout: Seconds to wait for a free slot
        """
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")

        self.max_size = max_size
        self.browser_config = browser_config or BrowserConfig()
        self.acquire_timeout = acquire_timeout

        self._playwright = None
        self._browser = None
        self._slots = asyncio.Semaphore(max_size)
        self._browser_lock = asyncio.Lock()
        self._started = False
        self._start_time: datetime | None = None
        self._in_use = 0
        self._total_acquired = 0
        self._total_released = 0
        self._total_errors = 0
        self._next_session_id = 0

    async def __aenter__(self) -> "SessionPool":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.stop()

    async def start(self) -> None:
        """
        Mark the pool ready.

        The browser itself is launched on first acquisition so that an idle
        pool holds no browser process.
        """
        if self._started:
            return

        self._start_time = datetime.now()
        self._started = True
        logger.info(
            f"Session pool started (max_size={self.max_size}, "
            f"browser={self.browser_config.browser_type}, "
            f"headless={self.browser_config.headless})"
        )

    async def stop(self) -> None:
        """
        Shutdown the pool gracefully.

        Closes the browser, which also tears down any contexts still open.
        """
        if not self._started:
            return

        async with self._browser_lock:
            await self._close_browser()

        self._started = False
        logger.info("Session pool stopped")

    async def _launch_browser(self) -> Any:
        """Start Playwright and launch the configured browser."""
        try:
            from playwright.async_api import async_playwright
        except ImportError:
            raise ImportError(
                "playwright package not installed. "
                "Install with: pip install playwright && playwright install"
            )

        if self._playwright is None:
            self._playwright = await async_playwright().start()

        launcher = getattr(self._playwright, self.browser_config.browser_type)
        browser = await launcher.launch(**self.browser_config.launch_options())
        logger.info(f"Launched {self.browser_config.browser_type} browser")
        return browser

    async def _close_browser(self) -> None:
        if self._browser:
            try:
                await self._browser.close()
            except Exception as e:
                logger.warning(f"Error closing browser: {e}")
            self._browser = None

        if self._playwright:
            try:
                await self._playwright.stop()
            except Exception as e:
                logger.warning(f"Error stopping playwright: {e}")
            self._playwright = None

    async def _ensure_browser(self) -> Any:
        """Return a connected browser, launching or relaunching as needed."""
        async with self._browser_lock:
            if self._browser is not None and not self._browser.is_connected():
                logger.warning("Browser disconnected, relaunching")
                self._browser = None

            if self._browser is None:
                self._browser = await self._launch_browser()

            return self._browser

    async def _open_session(self) -> CrawlSession:
        """Create a fresh context and page. Caller holds a slot."""
        browser = await self._ensure_browser()
        context = await browser.new_context(**self.browser_config.context_options())
        context.set_default_timeout(self.browser_config.default_timeout_ms)

        try:
            page = await context.new_page()
        except BaseException:
            await context.close()
            raise

        session_id = self._next_session_id
        self._next_session_id += 1
        return CrawlSession(session_id=session_id, context=context, page=page)

    async def _take_slot(self, timeout: float) -> None:
        try:
            await asyncio.wait_for(self._slots.acquire(), timeout=timeout)
        except asyncio.TimeoutError:
            self._total_errors += 1
            raise SessionUnavailableError(
                f"No browser session available within {timeout:.2f}s "
                f"({self._in_use}/{self.max_size} in use)"
            )

    @asynccontextmanager
    async def acquire(self, timeout: Optional[float] = None) -> AsyncIterator[CrawlSession]:
        """
        Acquire an isolated session for the duration of the block.

        The session is released when the block exits, whether it returns,
        raises, or is cancelled.

        Args:
            timeout: Seconds to wait for a free slot, capped at acquire_timeout
                (default: acquire_timeout)

        Yields:
            CrawlSession owned exclusively by the caller

        Raises:
            SessionUnavailableError: If no slot frees up in time or the
                browser/context cannot be created
        """
        if not self._started:
            raise RuntimeError("Session pool not started. Call start() first.")

        wait = self.acquire_timeout if timeout is None else min(self.acquire_timeout, timeout)
        await self._take_slot(wait)

        try:
            session = await self._open_session()
        except asyncio.CancelledError:
            self._slots.release()
            raise
        except Exception as e:
            self._slots.release()
            self._total_errors += 1
            logger.error(f"Could not open browser session: {e}")
            raise SessionUnavailableError(f"Could not open browser session: {e}") from e

        self._in_use += 1
        self._total_acquired += 1
        logger.debug(f"Acquired session {session.session_id} ({self._in_use}/{self.max_size} in use)")

        try:
            yield session
        finally:
            await self.release(session)

    async def release(self, session: CrawlSession) -> None:
        """
        Release a session. Idempotent and never raises.

        The slot is returned before the context is closed so that a slow or
        interrupted close cannot leak capacity.
        """
        if session.released:
            return
        session.released = True

        self._in_use -= 1
        self._total_released += 1
        self._slots.release()

        try:
            await session.context.close()
        except Exception as e:
            logger.warning(f"Error closing context for session {session.session_id}: {e}")

        logger.debug(f"Released session {session.session_id}")

    def get_status(self) -> PoolStatus:
        """Get current pool status."""
        uptime = 0.0
        if self._start_time:
            uptime = (datetime.now() - self._start_time).total_seconds()

        connected = False
        if self._browser is not None:
            try:
                connected = bool(self._browser.is_connected())
            except Exception:
                connected = False

        return PoolStatus(
            max_size=self.max_size,
            in_use=self._in_use,
            available=self.max_size - self._in_use,
            total_acquired=self._total_acquired,
            total_released=self._total_released,
            total_errors=self._total_errors,
            browser_connected=connected,
            uptime_seconds=uptime,
        )

    @property
    def available_count(self) -> int:
        """Number of free session slots."""
        return self.max_size - self._in_use

    @property
    def is_started(self) -> bool:
        """Whether pool has been started."""
        return self._started
