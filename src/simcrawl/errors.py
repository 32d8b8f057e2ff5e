"""Failure taxonomy for the crawl pipeline.

Every error raised below the orchestrator derives from CrawlError and carries
the FailureReason it maps to, so the orchestrator can turn it into a
CrawlOutcome without inspecting messages.
"""

from enum import Enum
from typing import Optional


class FailureReason(Enum):
    """Why a crawl produced a FAILED outcome."""
    INVALID_INPUT = "invalid_input"
    SESSION_UNAVAILABLE = "session_unavailable"
    NAVIGATION_ERROR = "navigation_error"
    INTERACTION_ERROR = "interaction_error"
    EXTRACTION_FAILURE = "extraction_failure"
    INTERNAL_ERROR = "internal_error"


class InputProblem(Enum):
    """Which request invariant was violated."""
    TEXT_TOO_SHORT = "text_too_short"
    TEXT_TOO_LONG = "text_too_long"
    INVALID_DEADLINE = "invalid_deadline"


class CrawlError(Exception):
    """Base class for all crawl failures."""

    reason: FailureReason = FailureReason.INTERNAL_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidInputError(CrawlError):
    """Raised when a request violates its length or deadline bounds."""

    reason = FailureReason.INVALID_INPUT

    def __init__(
        self,
        message: str,
        problem: InputProblem,
        limit: Optional[float] = None,
        message_vn: Optional[str] = None,
    ):
        self.problem = problem
        self.limit = limit
        self.message_vn = message_vn
        super().__init__(message)


class SessionUnavailableError(CrawlError):
    """Raised when no isolated browser session could be obtained."""

    reason = FailureReason.SESSION_UNAVAILABLE


class NavigationError(CrawlError):
    """Raised when the target page cannot be reached."""

    reason = FailureReason.NAVIGATION_ERROR

    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class InteractionError(CrawlError):
    """Raised when a form control is missing or cannot be operated."""

    reason = FailureReason.INTERACTION_ERROR

    def __init__(self, message: str, selector: str):
        self.selector = selector
        super().__init__(message)


class ExtractionError(CrawlError):
    """Raised when the rendered results cannot be read."""

    reason = FailureReason.EXTRACTION_FAILURE
