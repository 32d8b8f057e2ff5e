"""Tests for the result extractor."""

import asyncio
import math

import pytest
from playwright.async_api import Error as PlaywrightError

from simcrawl.deadline import Deadline
from simcrawl.errors import ExtractionError, FailureReason
from simcrawl.extractor import ResultExtractor
from simcrawl.models import RawRecord
from simcrawl.targets import PlagiumTarget


class TestResultExtractor:
    """Test cases for ResultExtractor."""

    @pytest.mark.asyncio
    async def test_extracts_in_document_order(self, target, make_page, results_html):
        """Test that records keep page order and unknown badges stay unknown."""
        html = results_html([
            ("First", "https://a.example/1", "one", "87%", "12"),
            ("Second", "https://a.example/2", "two", "", "3"),
            ("Third", "https://a.example/3", "three", "12%", None),
        ])
        page = make_page(html=html)

        records = await ResultExtractor(target).extract(page)

        assert [r.title for r in records] == ["First", "Second", "Third"]
        assert records[0].similarity_percent == 87.0
        assert math.isnan(records[1].similarity_percent)
        assert records[2].similarity_percent == 12.0
        assert records[2].similarity_count is None

    @pytest.mark.asyncio
    async def test_no_match_message_wins_at_extraction(self, target, make_page, results_html, no_match_text):
        """Test that a page that switched to no-match yields no records."""
        html = results_html(
            [("Stale", "https://a.example/1", "old", "50%", "1")],
            message=no_match_text,
        )

        records = await ResultExtractor(target).extract(make_page(html=html))

        assert records == []

    @pytest.mark.asyncio
    async def test_empty_page(self, target, make_page):
        records = await ResultExtractor(target).extract(make_page(html="<html><body></body></html>"))
        assert records == []

    @pytest.mark.asyncio
    async def test_content_failure_is_extraction_error(self, target):
        class BrokenPage:
            async def content(self):
                raise PlaywrightError("Target page, context or browser has been closed")

        with pytest.raises(ExtractionError) as exc_info:
            await ResultExtractor(target).extract(BrokenPage())

        assert exc_info.value.reason == FailureReason.EXTRACTION_FAILURE

    @pytest.mark.asyncio
    async def test_slow_content_is_bounded_by_deadline(self, target):
        """Test that reading the page gives up once deadline and grace are spent."""
        class HangingPage:
            async def content(self):
                await asyncio.sleep(10)

        extractor = ResultExtractor(target, grace_seconds=0.05)
        deadline = Deadline(0.05)

        with pytest.raises(ExtractionError) as exc_info:
            await extractor.extract(HangingPage(), deadline)

        assert "Timed out" in exc_info.value.message
        assert deadline.elapsed() < 1.0

    @pytest.mark.asyncio
    async def test_content_within_deadline(self, target, make_page, results_html):
        html = results_html([("Only", "https://a.example", "d", "5%", "1")])

        records = await ResultExtractor(target).extract(make_page(html=html), Deadline(5))

        assert [r.title for r in records] == ["Only"]

    def test_unexpected_shape_is_extraction_error(self, results_html):
        class StrictTarget(PlagiumTarget):
            def parse_result(self, element):
                if element.select_one("a.title") is None:
                    raise AttributeError("no title link")
                return RawRecord(title=element.select_one("a.title").get_text())

        html = results_html([("Ok", "https://a.example", "d", "1%", "1")])
        html = html.replace("</body>", "<div class='result'><span>broken</span></div></body>")

        with pytest.raises(ExtractionError) as exc_info:
            ResultExtractor(StrictTarget()).extract_from_html(html)

        assert "#2" in exc_info.value.message

    def test_extract_from_html_none(self, target):
        assert ResultExtractor(target).extract_from_html(None) == []
