"""Data models for similarity crawling."""

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from .constants import (
    INVALID_DEADLINE_MESSAGE,
    MAX_TEXT_LENGTH,
    MIN_TEXT_LENGTH,
    TEXT_TOO_LONG_MESSAGE,
    TEXT_TOO_LONG_MESSAGE_VN,
    TEXT_TOO_SHORT_MESSAGE,
    TEXT_TOO_SHORT_MESSAGE_VN,
)
from .errors import FailureReason, InputProblem, InvalidInputError
from .sanitizer import clean_text, clean_title

# Sentinel for a percentage badge that was absent or not a number
UNKNOWN_PERCENT = float("nan")


@dataclass(frozen=True)
class CrawlRequest:
    """Text to check plus an optional deadline override (seconds)."""

    text: str
    deadline: Optional[float] = None

    def validated(
        self,
        min_length: int = MIN_TEXT_LENGTH,
        max_length: int = MAX_TEXT_LENGTH,
    ) -> "CrawlRequest":
        """Return a copy with sanitized text, enforcing the request invariants.

        Raises:
            InvalidInputError: If the sanitized text is out of bounds or the
                deadline is not positive
        """
        text = clean_text(self.text)

        if len(text) > max_length:
            raise InvalidInputError(
                TEXT_TOO_LONG_MESSAGE.format(limit=max_length),
                InputProblem.TEXT_TOO_LONG,
                limit=max_length,
                message_vn=TEXT_TOO_LONG_MESSAGE_VN.format(limit=max_length),
            )
        if len(text) < min_length:
            raise InvalidInputError(
                TEXT_TOO_SHORT_MESSAGE,
                InputProblem.TEXT_TOO_SHORT,
                limit=min_length,
                message_vn=TEXT_TOO_SHORT_MESSAGE_VN,
            )
        if self.deadline is not None and not self.deadline > 0:
            raise InvalidInputError(
                INVALID_DEADLINE_MESSAGE,
                InputProblem.INVALID_DEADLINE,
            )

        return CrawlRequest(text=text, deadline=self.deadline)


@dataclass
class CrawlSession:
    """An isolated browser context and its single page, owned by one crawl."""

    session_id: int
    context: Any
    page: Any
    created_at: datetime = field(default_factory=datetime.now)
    released: bool = False


@dataclass
class RawRecord:
    """Fields of one result element as read from the page, unsanitized."""

    title: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    similarity_percent: float = UNKNOWN_PERCENT
    similarity_count: Optional[int] = None


@dataclass(frozen=True)
class MatchRecord:
    """One similarity match reported by the target site."""

    title: str
    source_url: str
    description: str
    similarity_percent: float  # 0-100, NaN when unknown
    similarity_count: Optional[int]  # None when unknown

    @classmethod
    def from_raw(cls, raw: RawRecord) -> "MatchRecord":
        """Sanitize a raw record into a match.

        Percentages outside 0-100 and negative counts are treated as unknown.
        """
        percent = raw.similarity_percent
        if percent is None or math.isnan(percent) or not 0 <= percent <= 100:
            percent = UNKNOWN_PERCENT

        count = raw.similarity_count
        if count is not None and count < 0:
            count = None

        return cls(
            title=clean_title(raw.title),
            source_url=(raw.url or "").strip(),
            description=clean_text(raw.description),
            similarity_percent=percent,
            similarity_count=count,
        )

    @property
    def percent_known(self) -> bool:
        return not math.isnan(self.similarity_percent)

    @property
    def count_known(self) -> bool:
        return self.similarity_count is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON; unknown numbers become None."""
        return {
            "title": self.title,
            "source_url": self.source_url,
            "description": self.description,
            "similarity_percent": self.similarity_percent if self.percent_known else None,
            "similarity_count": self.similarity_count,
        }


class OutcomeKind(Enum):
    """The four mutually exclusive results of a crawl."""
    NO_MATCH = "no_match"
    MATCHES = "matches"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


@dataclass(frozen=True)
class CrawlOutcome:
    """
    Result of exactly one crawl.

    Build instances through the classmethods; only FAILED carries a reason,
    only MATCHES carries records.
    """

    kind: OutcomeKind
    records: tuple[MatchRecord, ...] = ()
    reason: Optional[FailureReason] = None
    detail: Optional[str] = None
    detail_vn: Optional[str] = None
    problem: Optional[InputProblem] = None
    elapsed_seconds: float = 0.0

    @classmethod
    def no_match(cls, elapsed_seconds: float = 0.0) -> "CrawlOutcome":
        return cls(kind=OutcomeKind.NO_MATCH, elapsed_seconds=elapsed_seconds)

    @classmethod
    def matches(cls, records, elapsed_seconds: float = 0.0) -> "CrawlOutcome":
        return cls(
            kind=OutcomeKind.MATCHES,
            records=tuple(records),
            elapsed_seconds=elapsed_seconds,
        )

    @classmethod
    def timed_out(cls, elapsed_seconds: float = 0.0) -> "CrawlOutcome":
        return cls(kind=OutcomeKind.TIMED_OUT, elapsed_seconds=elapsed_seconds)

    @classmethod
    def failed(
        cls,
        reason: FailureReason,
        detail: Optional[str] = None,
        elapsed_seconds: float = 0.0,
    ) -> "CrawlOutcome":
        return cls(
            kind=OutcomeKind.FAILED,
            reason=reason,
            detail=detail,
            elapsed_seconds=elapsed_seconds,
        )

    @classmethod
    def rejected(cls, error: InvalidInputError) -> "CrawlOutcome":
        """FAILED(INVALID_INPUT) for a request that never reached a session."""
        return cls(
            kind=OutcomeKind.FAILED,
            reason=error.reason,
            detail=error.message,
            detail_vn=error.message_vn,
            problem=error.problem,
        )

    @property
    def is_failure(self) -> bool:
        return self.kind in (OutcomeKind.FAILED, OutcomeKind.TIMED_OUT)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "kind": self.kind.value,
            "records": [record.to_dict() for record in self.records],
            "reason": self.reason.value if self.reason else None,
            "detail": self.detail,
            "elapsed_seconds": round(self.elapsed_seconds, 3),
        }
