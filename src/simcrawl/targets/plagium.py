"""Plagium quick search (https://www.plagium.com/)."""

from bs4 import Tag

from ..models import RawRecord
from .base import (
    CrawlTarget,
    TargetSelectors,
    Viewport,
    element_text,
    parse_count,
    parse_percent,
)


class PlagiumTarget(CrawlTarget):
    """
    Plagium's anonymous quick search.

    The text goes into the quick-search textarea; the page then either shows
    a "did not find" message in div#message or renders one div.result per
    matching document, ranked by the site.
    """

    name = "plagium"
    description = "Plagium quick search for documents reusing the text"
    url = "https://www.plagium.com/"
    viewport = Viewport(width=1080, height=1080)
    selectors = TargetSelectors(
        text_input="textarea[id='text']",
        submit="button[id='btnQuickSearch']",
        status_message="div#message",
        result="div.result",
    )
    no_match_phrase = "Plagium did not find documents making use of the text that you entered."

    # Sub-fields inside one div.result
    TITLE_SELECTOR = "a.title"
    DESCRIPTION_SELECTOR = "p > span.description"
    PERCENT_SELECTOR = "p > span.info > span.rank > span.badge"
    COUNT_SELECTOR = "p > span.info > span.found > span.badge"

    def parse_result(self, element: Tag) -> RawRecord:
        title_link = element.select_one(self.TITLE_SELECTOR)

        return RawRecord(
            title=element_text(title_link),
            url=title_link.get("href") if title_link is not None else None,
            description=element_text(element.select_one(self.DESCRIPTION_SELECTOR)),
            similarity_percent=parse_percent(element_text(element.select_one(self.PERCENT_SELECTOR))),
            similarity_count=parse_count(element_text(element.select_one(self.COUNT_SELECTOR))),
        )
