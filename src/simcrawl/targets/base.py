"""
Crawl target contract.

A crawl target describes one external page's interaction protocol: where it
lives, which controls take the text, which element reports "nothing found",
and how a single result element is read. The driver, poller, extractor and
orchestrator only ever talk to this interface, so a new site is supported by
adding a subclass and registering it.
"""
import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from bs4 import Tag

from ..models import RawRecord, UNKNOWN_PERCENT


_INTEGER = re.compile(r"^\d+$")


@dataclass(frozen=True)
class Viewport:
    """Fixed page size the selectors were written against."""
    width: int
    height: int

    def to_dict(self) -> dict:
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True)
class TargetSelectors:
    """CSS selectors for the controls shared by every target."""
    text_input: str
    submit: str
    status_message: str
    result: str


def parse_percent(text: Optional[str]) -> float:
    """
    Parse a percentage badge such as "87%".

    Returns:
        The number, or NaN when the badge is absent, empty or not numeric
    """
    if text is None:
        return UNKNOWN_PERCENT

    cleaned = text.strip()
    if cleaned.endswith("%"):
        cleaned = cleaned[:-1].strip()
    if not cleaned:
        return UNKNOWN_PERCENT

    try:
        value = float(cleaned)
    except ValueError:
        return UNKNOWN_PERCENT

    if math.isinf(value):
        return UNKNOWN_PERCENT
    return value


def parse_count(text: Optional[str]) -> Optional[int]:
    """
    Parse a count badge such as "12" or "1,204".

    Returns:
        The integer, or None when the badge is absent or not a whole number
    """
    if text is None:
        return None

    cleaned = text.strip().replace(",", "")
    if not _INTEGER.match(cleaned):
        return None
    return int(cleaned)


def element_text(element: Optional[Tag]) -> Optional[str]:
    """textContent of an element, None when it is absent."""
    if element is None:
        return None
    return element.get_text()


class CrawlTarget(ABC):
    """
    Abstract base class for crawl targets.

    Subclasses set the class attributes and implement parse_result().
    """

    name: str = ""
    description: str = ""
    url: str = ""
    viewport: Viewport = Viewport(width=1280, height=720)
    selectors: TargetSelectors
    no_match_phrase: str = ""

    def is_no_match_message(self, status_text: Optional[str]) -> bool:
        """Whether the status element's text is the site's "no results" message."""
        if not status_text or not self.no_match_phrase:
            return False
        return self.no_match_phrase in status_text

    @abstractmethod
    def parse_result(self, element: Tag) -> RawRecord:
        """
        Read one result element into a raw record.

        Args:
            element: BeautifulSoup tag matched by selectors.result

        Returns:
            RawRecord with unsanitized text fields
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, url={self.url!r})"
