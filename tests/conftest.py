"""Shared fakes for crawl tests.

FakePage simulates the target page closely enough for the driver, poller and
extractor: a status message and result elements that can appear after a
number of poll ticks, configurable navigation responses, and missing
controls. FakeSessionPool counts opened/closed sessions.
"""

from contextlib import asynccontextmanager
from typing import Optional

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from simcrawl.models import CrawlSession
from simcrawl.targets import PlagiumTarget

NO_MATCH_TEXT = PlagiumTarget.no_match_phrase


class FakeElement:
    """Element handle with fixed text and visibility."""

    def __init__(self, text: str = "", visible: bool = True):
        self.text = text
        self.visible = visible

    async def text_content(self):
        return self.text

    async def is_visible(self):
        return self.visible


class FakeResponse:
    def __init__(self, status: int = 200):
        self.status = status


class FakePage:
    """
    Simulated target page.

    Poll ticks are counted on query_selector_all(), which the poller calls
    once per tick to look for result elements.
    """

    def __init__(
        self,
        html: str = "",
        status: Optional[int] = 200,
        goto_error: Optional[Exception] = None,
        message: Optional[str] = None,
        message_after: int = 0,
        result_count: int = 0,
        results_after: int = 0,
        results_visible: bool = True,
        missing: tuple = (),
        probe_error_ticks: int = 0,
        viewport_error: Optional[Exception] = None,
    ):
        self.html = html
        self.status = status
        self.goto_error = goto_error
        self.message = message
        self.message_after = message_after
        self.result_count = result_count
        self.results_after = results_after
        self.results_visible = results_visible
        self.missing = set(missing)
        self.probe_error_ticks = probe_error_ticks
        self.viewport_error = viewport_error

        self.ticks = 0
        self.calls: list[str] = []
        self.filled: dict[str, str] = {}
        self.clicked: list[str] = []
        self.viewport: Optional[dict] = None
        self.timeouts: dict[str, int] = {}

    async def goto(self, url, wait_until=None, timeout=None):
        self.calls.append("goto")
        self.timeouts["goto"] = timeout
        if self.goto_error:
            raise self.goto_error
        if self.status is None:
            return None
        return FakeResponse(self.status)

    async def set_viewport_size(self, size):
        self.calls.append("set_viewport_size")
        if self.viewport_error:
            raise self.viewport_error
        self.viewport = size

    async def wait_for_selector(self, selector, state=None, timeout=None):
        self.calls.append("wait_for_selector")
        self.timeouts["wait_for_selector"] = timeout
        if selector in self.missing:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {selector}")
        return FakeElement()

    async def fill(self, selector, value, timeout=None):
        self.calls.append("fill")
        if selector in self.missing:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded")
        self.filled[selector] = value

    async def click(self, selector, timeout=None):
        self.calls.append("click")
        if selector in self.missing:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded")
        self.clicked.append(selector)

    async def query_selector(self, selector):
        self.calls.append("query_selector")
        if self.message is not None and self.ticks >= self.message_after:
            return FakeElement(self.message)
        return None

    async def query_selector_all(self, selector):
        self.calls.append("query_selector_all")
        self.ticks += 1
        if self.ticks <= self.probe_error_ticks:
            raise PlaywrightError("Execution context was destroyed")
        if self.result_count and self.ticks > self.results_after:
            return [FakeElement(visible=self.results_visible) for _ in range(self.result_count)]
        return []

    async def content(self):
        self.calls.append("content")
        return self.html


class FakeContext:
    def __init__(self):
        self.close_calls = 0

    async def close(self):
        self.close_calls += 1


class FakeSessionPool:
    """Pool stand-in with reference-counted open/close."""

    def __init__(self, page: Optional[FakePage] = None, fail: Optional[Exception] = None):
        self.page = page or FakePage()
        self.fail = fail
        self.opened = 0
        self.closed = 0
        self.sessions: list[CrawlSession] = []
        self.timeouts: list = []

    @asynccontextmanager
    async def acquire(self, timeout=None):
        self.timeouts.append(timeout)
        if self.fail:
            raise self.fail
        self.opened += 1
        session = CrawlSession(session_id=self.opened, context=FakeContext(), page=self.page)
        self.sessions.append(session)
        try:
            yield session
        finally:
            self.closed += 1

    @property
    def open_count(self) -> int:
        return self.opened - self.closed


def build_results_html(rows, message: Optional[str] = None) -> str:
    """Plagium-shaped results page.

    Args:
        rows: Iterable of (title, href, description, percent_text, count_text);
            a None badge text leaves the badge element out
        message: Text of div#message
    """
    parts = ["<html><body>"]
    if message is not None:
        parts.append(f"<div id='message'>{message}</div>")
    for title, href, description, percent, count in rows:
        rank = f"<span class='rank'><span class='badge'>{percent}</span></span>" if percent is not None else ""
        found = f"<span class='found'><span class='badge'>{count}</span></span>" if count is not None else ""
        parts.append(
            "<div class='result'>"
            f"<a class='title' href='{href}'>{title}</a>"
            f"<p><span class='description'>{description}</span></p>"
            f"<p><span class='info'>{rank}{found}</span></p>"
            "</div>"
        )
    parts.append("</body></html>")
    return "".join(parts)


@pytest.fixture
def target():
    return PlagiumTarget()


@pytest.fixture
def make_page():
    """Factory for FakePage instances."""
    return FakePage


@pytest.fixture
def make_pool():
    """Factory for FakeSessionPool instances."""
    return FakeSessionPool


@pytest.fixture
def results_html():
    """Builder for Plagium-shaped results pages."""
    return build_results_html


@pytest.fixture
def no_match_text():
    return NO_MATCH_TEXT


@pytest.fixture
def valid_text():
    """A request text comfortably inside the length bounds."""
    return (
        "The quick brown fox jumps over the lazy dog while the cat watches "
        "from the window sill."
    )
