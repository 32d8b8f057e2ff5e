"""Content-similarity crawler driving third-party checker pages with Playwright."""

__version__ = "0.1.0"

from simcrawl.models import (
    CrawlRequest,
    CrawlSession,
    RawRecord,
    MatchRecord,
    CrawlOutcome,
    OutcomeKind,
    UNKNOWN_PERCENT,
)
from simcrawl.errors import (
    CrawlError,
    FailureReason,
    InputProblem,
    InvalidInputError,
    SessionUnavailableError,
    NavigationError,
    InteractionError,
    ExtractionError,
)
from simcrawl.sanitizer import strip_breadcrumb, clean_text, clean_title
from simcrawl.deadline import Deadline
from simcrawl.config import CrawlerConfig, settings
from simcrawl.browser_config import BrowserConfig

# Pipeline
from simcrawl.infrastructure import SessionPool, PoolStatus
from simcrawl.driver import PageDriver
from simcrawl.poller import PollState, ResultPoller
from simcrawl.extractor import ResultExtractor
from simcrawl.orchestrator import CrawlOrchestrator, crawl_sync
from simcrawl.responses import CrawlResponse, to_response

# Crawl targets
from simcrawl.targets import (
    CrawlTarget,
    PlagiumTarget,
    get_target,
    register_target,
    available_targets,
)

__all__ = [
    # Models
    "CrawlRequest",
    "CrawlSession",
    "RawRecord",
    "MatchRecord",
    "CrawlOutcome",
    "OutcomeKind",
    "UNKNOWN_PERCENT",
    # Errors
    "CrawlError",
    "FailureReason",
    "InputProblem",
    "InvalidInputError",
    "SessionUnavailableError",
    "NavigationError",
    "InteractionError",
    "ExtractionError",
    # Sanitizer
    "strip_breadcrumb",
    "clean_text",
    "clean_title",
    # Config
    "Deadline",
    "CrawlerConfig",
    "BrowserConfig",
    "settings",
    # Pipeline
    "SessionPool",
    "PoolStatus",
    "PageDriver",
    "PollState",
    "ResultPoller",
    "ResultExtractor",
    "CrawlOrchestrator",
    "crawl_sync",
    "CrawlResponse",
    "to_response",
    # Targets
    "CrawlTarget",
    "PlagiumTarget",
    "get_target",
    "register_target",
    "available_targets",
]
