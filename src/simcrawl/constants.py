# src/simcrawl/constants.py
"""Centralized constants for the similarity crawler.

This module contains magic numbers and fixed values that are used across
multiple modules. For user-configurable settings, see config.py and
CrawlerConfig.
"""

# =============================================================================
# Request Constants
# =============================================================================

# Inbound text length bounds (code points, measured after sanitization)
MIN_TEXT_LENGTH = 50
MAX_TEXT_LENGTH = 1000

# Wall-clock budget for one crawl when the caller does not supply one
DEFAULT_DEADLINE_SECONDS = 180.0


# =============================================================================
# Polling Constants
# =============================================================================

# Delay between two inspections of the page while waiting for a result state
DEFAULT_POLL_INTERVAL_SECONDS = 0.5

# Smallest timeout handed to Playwright (0 would mean "wait forever")
MIN_STEP_TIMEOUT_MS = 1


# =============================================================================
# Driver Constants
# =============================================================================

# Per-step timeouts for the interaction driver (milliseconds)
DEFAULT_NAVIGATION_TIMEOUT_MS = 30000
DEFAULT_INTERACTION_TIMEOUT_MS = 10000

# Navigation is considered complete once the DOM is parsed
NAVIGATION_WAIT_UNTIL = "domcontentloaded"

# Extra time allowed for reading the results page once the deadline is spent
EXTRACTION_GRACE_SECONDS = 5.0


# =============================================================================
# Session Pool Constants
# =============================================================================

# Maximum number of isolated browser contexts open at once
DEFAULT_MAX_SESSIONS = 4

# Seconds a caller may wait for a free pool slot before giving up
DEFAULT_ACQUIRE_TIMEOUT_SECONDS = 30.0


# =============================================================================
# Boundary Messages
# =============================================================================

NO_MATCH_MESSAGE = "Did not find any documents making use of the text"
NO_MATCH_MESSAGE_VN = "Không tìm thấy tài liệu nào sử dụng đoạn văn bản"

TEXT_TOO_LONG_MESSAGE = "The paragraph length is limited to {limit} characters"
TEXT_TOO_LONG_MESSAGE_VN = "Đoạn văn giới hạn ở {limit} kí tự"

TEXT_TOO_SHORT_MESSAGE = "The paragraph is too short to find anything"
TEXT_TOO_SHORT_MESSAGE_VN = "Đoạn văn quá ngắn để tìm dữ liệu"

INVALID_DEADLINE_MESSAGE = "The deadline must be a positive number of seconds"

TIMED_OUT_MESSAGE = "The similarity check did not finish before the deadline"
